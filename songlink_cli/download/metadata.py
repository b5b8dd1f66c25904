"""
Metadata embedding for MP4 downloads.

yt-dlp tags MP3 downloads itself (--add-metadata, --embed-thumbnail).
MP4 files are produced by ffmpeg from a still image and an audio stream,
so they carry no tags; this module adds title, artist and cover art.

MP4 Tag Mapping:
    title   -> \\xa9nam
    artist  -> \\xa9ART
    cover   -> covr

Dependencies:
    - mutagen: Audio metadata library
"""

from pathlib import Path

from mutagen import MutagenError
from mutagen.mp4 import MP4, MP4Cover

from songlink_cli.core.exceptions import MetadataError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


# See: https://mutagen.readthedocs.io/en/latest/api/mp4.html
MP4_TAGS = {
    "title": "\xa9nam",
    "artist": "\xa9ART",
    "cover": "covr",
}

PNG_SIGNATURE = b"\x89PNG"


def detect_image_format(data: bytes) -> int:
    """
    Detect image format from bytes.

    Args:
        data: Image bytes.

    Returns:
        MP4Cover.FORMAT_PNG for PNG data, MP4Cover.FORMAT_JPEG otherwise
        (Apple Music artwork is JPEG).
    """
    if data.startswith(PNG_SIGNATURE):
        return MP4Cover.FORMAT_PNG
    return MP4Cover.FORMAT_JPEG


def embed_mp4_metadata(
    file_path: Path,
    title: str,
    artist: str,
    cover: bytes | None = None
) -> None:
    """
    Write title, artist and optional cover art into an MP4 file.

    Existing values for these tags are replaced; other tags are kept.

    Args:
        file_path: Path to the MP4 file.
        title: Track title.
        artist: Artist name.
        cover: Optional cover image bytes (JPEG or PNG).

    Raises:
        MetadataError: If the file cannot be opened, is not a valid MP4,
                       or cannot be saved.
    """
    try:
        audio = MP4(file_path)
    except (MutagenError, OSError) as e:
        raise MetadataError(
            f"Failed to open {file_path.name} for tagging: {e}",
            details={"file_path": str(file_path), "original_error": str(e)}
        ) from e

    if audio.tags is None:
        audio.add_tags()

    audio.tags[MP4_TAGS["title"]] = [title]
    audio.tags[MP4_TAGS["artist"]] = [artist]

    if cover:
        audio.tags[MP4_TAGS["cover"]] = [
            MP4Cover(cover, imageformat=detect_image_format(cover))
        ]

    try:
        audio.save()
    except (MutagenError, OSError) as e:
        raise MetadataError(
            f"Failed to save tags to {file_path.name}: {e}",
            details={"file_path": str(file_path), "original_error": str(e)}
        ) from e

    logger.debug(f"Tagged {file_path.name}")
