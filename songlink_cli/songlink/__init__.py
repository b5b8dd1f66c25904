"""
song.link integration.

Resolves a streaming URL from any platform into its song.link page and
Spotify equivalent.

Usage:
    from songlink_cli.songlink import SonglinkClient, OutputMode, get_links
"""

from songlink_cli.songlink.client import (
    API_BASE,
    SonglinkClient,
    build_url,
    get_links,
)
from songlink_cli.songlink.models import (
    OutputMode,
    SonglinkResponse,
    format_output,
    strip_locale,
)

__all__ = [
    "API_BASE",
    "SonglinkClient",
    "build_url",
    "get_links",
    "OutputMode",
    "SonglinkResponse",
    "format_output",
    "strip_locale",
]
