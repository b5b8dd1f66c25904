"""
Utility functions for songlink-cli.

This module provides common helpers used across the application:
    - Filename sanitization for downloaded media
    - Directory creation
    - Clipboard access (see songlink_cli.utils.clipboard)

Usage:
    from songlink_cli.utils import (
        sanitize_file_name,
        generate_media_filename,
        ensure_directory,
        read_clipboard,
        write_clipboard,
    )
"""

import re
from pathlib import Path

from songlink_cli.utils.clipboard import read_clipboard, write_clipboard


# Characters invalid in file names on at least one supported platform
INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_file_name(name: str) -> str:
    """
    Sanitize a string for use as a file name.

    Each character that is invalid on Windows or a path separator on any
    platform is replaced with an underscore. Everything else, including
    Unicode and spaces, is kept as-is.

    Args:
        name: The string to sanitize (e.g., "Artist - Title").

    Returns:
        Sanitized string safe for use in file names.

    Examples:
        sanitize_file_name("AC/DC - Back in Black")  # "AC_DC - Back in Black"
        sanitize_file_name("What?!")                 # "What_!"
    """
    return INVALID_FILENAME_CHARS.sub("_", name)


def generate_media_filename(song: str, artist: str, extension: str) -> str:
    """
    Generate the file name for a downloaded track.

    Args:
        song: Track title.
        artist: Artist name.
        extension: File extension without dot.

    Returns:
        "{artist} - {song}.{extension}" with the stem sanitized.

    Example:
        generate_media_filename("Hello: World", "AC/DC", "mp3")
        # Returns: "AC_DC - Hello_ World.mp3"
    """
    return f"{media_base_name(song, artist)}.{extension}"


def media_base_name(song: str, artist: str) -> str:
    """Return the sanitized "{artist} - {song}" stem used for output files."""
    return sanitize_file_name(f"{artist} - {song}")


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory.

    Returns:
        The same path (for chaining).

    Raises:
        OSError: If directory cannot be created (permissions, etc.)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "sanitize_file_name",
    "generate_media_filename",
    "media_base_name",
    "ensure_directory",
    "read_clipboard",
    "write_clipboard",
]
