"""
Track downloader for songlink-cli.

This module produces a local media file for a track picked from an Apple
Music search by driving the external tools yt-dlp and ffmpeg.

Formats:
    MP3:
        yt-dlp finds the track on YouTube, extracts the audio as MP3 and
        embeds the video thumbnail and metadata.
        Output: {out_dir}/{artist} - {song}.mp3

    MP4:
        A still-image video for sharing: the Apple Music artwork looped
        over the best available audio stream.
        1. Create a temp directory (songdl-*)
        2. Download the artwork to cover.jpg
        3. yt-dlp downloads the best audio to temp_audio.<ext>
        4. ffmpeg muxes artwork + audio into H.264/AAC
        5. Title, artist and artwork are embedded with mutagen
        6. The temp directory is removed, whatever the outcome
        Output: {out_dir}/{artist} - {song}.mp4

Search Term:
    yt-dlp is given "ytsearch1:{song} {artist} official audio", so the first
    YouTube search hit is used.

Dependencies:
    - yt-dlp: must be on PATH
    - ffmpeg: must be on PATH (MP4, and MP3 extraction inside yt-dlp)

Usage:
    from songlink_cli.download.downloader import download_track

    path = download_track(
        song="Caravan",
        artist="Duke Ellington",
        artwork_url="https://is1-ssl.mzstatic.com/.../500x500bb.jpg",
        fmt="mp4",
        out_dir=Path("~/Music").expanduser(),
    )
"""

import shutil
import subprocess
import tempfile
from enum import Enum
from pathlib import Path

import requests

from songlink_cli.core.exceptions import DownloadError, MetadataError
from songlink_cli.core.logger import get_logger, log_download_failure
from songlink_cli.download.metadata import embed_mp4_metadata
from songlink_cli.utils import ensure_directory, media_base_name

logger = get_logger(__name__)


YT_DLP = "yt-dlp"
FFMPEG = "ffmpeg"

TEMP_DIR_PREFIX = "songdl-"
ARTWORK_FILENAME = "cover.jpg"
TEMP_AUDIO_STEM = "temp_audio"

ARTWORK_TIMEOUT = 30  # seconds
STDERR_TAIL_CHARS = 2000


class MediaFormat(Enum):
    """Output formats supported by download_track()."""
    MP3 = "mp3"
    MP4 = "mp4"

    @classmethod
    def parse(cls, value: "str | MediaFormat") -> "MediaFormat":
        """
        Parse a format name, case-insensitively.

        Raises:
            DownloadError: If the format is not supported.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise DownloadError(
                f"unsupported format: {value}",
                details={"format": str(value)}
            ) from None


def build_search_term(song: str, artist: str) -> str:
    """Return the yt-dlp search term for a track."""
    return f"ytsearch1:{song} {artist} official audio"


def build_mp3_command(search_term: str, output_template: str) -> list[str]:
    """
    Build the yt-dlp command for an MP3 download.

    Args:
        search_term: yt-dlp search term (see build_search_term).
        output_template: yt-dlp output template, ending in ".%(ext)s".
    """
    return [
        YT_DLP,
        search_term,
        "--extract-audio",
        "--audio-format", "mp3",
        "--embed-thumbnail",
        "--add-metadata",
        "--output", output_template,
    ]


def build_audio_command(search_term: str, output_template: str) -> list[str]:
    """Build the yt-dlp command that fetches the best audio stream as-is."""
    return [
        YT_DLP,
        search_term,
        "-f", "bestaudio",
        "--output", output_template,
    ]


def build_video_command(artwork_path: Path, audio_path: Path, output_path: Path) -> list[str]:
    """
    Build the ffmpeg command that turns artwork + audio into an MP4.

    The image is looped for the duration of the audio (-shortest) and
    encoded with the stillimage tune. yuv420p keeps the result playable
    in QuickTime and on phones.
    """
    return [
        FFMPEG,
        "-y",
        "-loop", "1",
        "-i", str(artwork_path),
        "-i", str(audio_path),
        "-c:v", "libx264",
        "-tune", "stillimage",
        "-c:a", "aac",
        "-b:a", "192k",
        "-pix_fmt", "yuv420p",
        "-shortest",
        str(output_path),
    ]


def require_tool(name: str) -> str:
    """
    Locate an external tool on PATH.

    Returns:
        Absolute path of the executable.

    Raises:
        DownloadError: If the tool is not installed.
    """
    location = shutil.which(name)
    if location is None:
        raise DownloadError(f"{name} not found in PATH", details={"tool": name})
    return location


def run_tool(command: list[str], debug: bool, error_prefix: str) -> None:
    """
    Run an external tool to completion.

    With debug on, the tool's output goes straight to the terminal.
    Otherwise stdout is discarded and stderr is captured so that it can
    be attached to the error.

    Args:
        command: Command line, tool name first.
        debug: Pass the tool's output through.
        error_prefix: Start of the error message on failure.

    Raises:
        DownloadError: If the tool cannot be started or exits non-zero.
    """
    logger.debug(f"Running: {subprocess.list2cmdline(command)}")

    try:
        result = subprocess.run(
            command,
            stdout=None if debug else subprocess.DEVNULL,
            stderr=None if debug else subprocess.PIPE,
            text=True,
            check=False
        )
    except OSError as e:
        raise DownloadError(
            f"{error_prefix}: {e}",
            details={"command": command, "original_error": str(e)}
        ) from e

    if result.returncode != 0:
        stderr_tail = (result.stderr or "")[-STDERR_TAIL_CHARS:]
        if stderr_tail:
            logger.debug(f"{command[0]} stderr:\n{stderr_tail}")
        raise DownloadError(
            f"{error_prefix}: {command[0]} exited with status {result.returncode}",
            details={"command": command, "stderr": stderr_tail}
        )


def download_file(path: Path, url: str, session: requests.Session | None = None) -> None:
    """
    Fetch a URL and write the body to a file.

    Args:
        path: Destination file.
        url: URL to fetch.
        session: Optional session to use.

    Raises:
        DownloadError: On network failure, a non-200 status, or a write error.
    """
    http = session or requests
    try:
        with http.get(url, stream=True, timeout=ARTWORK_TIMEOUT) as response:
            if response.status_code != requests.codes.ok:
                raise DownloadError(
                    f"bad status downloading {url}: {response.status_code} {response.reason}",
                    details={"url": url, "status_code": response.status_code}
                )
            with open(path, "wb") as f:
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    f.write(chunk)
    except requests.RequestException as e:
        raise DownloadError(
            f"error downloading {url}: {e}",
            details={"url": url, "original_error": str(e)}
        ) from e
    except OSError as e:
        raise DownloadError(
            f"error writing {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e


def find_temp_audio(temp_dir: Path) -> Path | None:
    """
    Find the audio file yt-dlp wrote into the temp directory.

    yt-dlp picks the extension from the stream it downloaded (webm, m4a, ...),
    so the file is located by its stem. Entries are checked in name order.

    Returns:
        The first file whose name starts with "temp_audio", or None.
    """
    for entry in sorted(temp_dir.iterdir()):
        if entry.name.startswith(TEMP_AUDIO_STEM):
            return entry
    return None


def download_track(
    song: str,
    artist: str,
    artwork_url: str,
    fmt: "str | MediaFormat",
    out_dir: Path,
    debug: bool = False
) -> Path:
    """
    Download a track as MP3 or as an MP4 with artwork.

    Args:
        song: Track title.
        artist: Artist name.
        artwork_url: Artwork image URL (used for MP4 only).
        fmt: "mp3" or "mp4" (case-insensitive) or a MediaFormat.
        out_dir: Directory to save into. Created if missing.
        debug: Show yt-dlp / ffmpeg output.

    Returns:
        Path: Where the file was saved.

    Raises:
        DownloadError: If a tool is missing, a step fails, or the format
                       is unsupported. The failure is also recorded in the
                       download failures log.
    """
    try:
        media_format = MediaFormat.parse(fmt)
        require_tool(YT_DLP)

        base_name = media_base_name(song, artist)
        try:
            ensure_directory(out_dir)
        except OSError as e:
            raise DownloadError(
                f"failed to create output directory: {e}",
                details={"directory": str(out_dir), "original_error": str(e)}
            ) from e

        search_term = build_search_term(song, artist)

        if media_format is MediaFormat.MP3:
            return _download_mp3(search_term, out_dir, base_name, debug)
        return _download_mp4(search_term, song, artist, artwork_url, out_dir, base_name, debug)

    except DownloadError as e:
        format_label = fmt.value if isinstance(fmt, MediaFormat) else str(fmt).lower()
        log_download_failure(logger, song, artist, format_label, e.message)
        raise


def _download_mp3(search_term: str, out_dir: Path, base_name: str, debug: bool) -> Path:
    """Extract audio as MP3 with embedded thumbnail and metadata."""
    output_template = str(out_dir / f"{base_name}.%(ext)s")
    run_tool(build_mp3_command(search_term, output_template), debug, "mp3 download failed")

    output_path = out_dir / f"{base_name}.{MediaFormat.MP3.value}"
    logger.debug(f"Saved {output_path}")
    return output_path


def _download_mp4(
    search_term: str,
    song: str,
    artist: str,
    artwork_url: str,
    out_dir: Path,
    base_name: str,
    debug: bool
) -> Path:
    """Build a still-artwork MP4 in a temp directory that is always removed."""
    require_tool(FFMPEG)

    try:
        temp_dir = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
    except OSError as e:
        raise DownloadError(
            f"failed to create temp dir: {e}",
            details={"original_error": str(e)}
        ) from e

    try:
        artwork_path = temp_dir / ARTWORK_FILENAME
        try:
            download_file(artwork_path, artwork_url)
        except DownloadError as e:
            raise DownloadError(f"failed to download artwork: {e.message}", e.details) from e

        audio_template = str(temp_dir / f"{TEMP_AUDIO_STEM}.%(ext)s")
        run_tool(build_audio_command(search_term, audio_template), debug, "audio download failed")

        audio_path = find_temp_audio(temp_dir)
        if audio_path is None:
            raise DownloadError(
                "audio file not found in temp dir",
                details={"temp_dir": str(temp_dir)}
            )

        output_path = out_dir / f"{base_name}.{MediaFormat.MP4.value}"
        run_tool(build_video_command(artwork_path, audio_path, output_path), debug, "video creation failed")

        try:
            embed_mp4_metadata(output_path, song, artist, artwork_path.read_bytes())
        except (MetadataError, OSError) as e:
            logger.warning(f"Could not tag {output_path.name}: {e}")

        logger.debug(f"Saved {output_path}")
        return output_path
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
