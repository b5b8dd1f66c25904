"""
Download module for songlink-cli.

Turns a track picked from an Apple Music search into a local file:
    - MP3: audio extracted by yt-dlp, thumbnail and metadata embedded
    - MP4: Apple Music artwork looped over the audio, built by ffmpeg,
      then tagged with mutagen

Usage:
    from songlink_cli.download import MediaFormat, download_track
"""

from songlink_cli.download.downloader import (
    MediaFormat,
    build_audio_command,
    build_mp3_command,
    build_search_term,
    build_video_command,
    download_track,
)
from songlink_cli.download.metadata import embed_mp4_metadata

__all__ = [
    "MediaFormat",
    "build_audio_command",
    "build_mp3_command",
    "build_search_term",
    "build_video_command",
    "download_track",
    "embed_mp4_metadata",
]
