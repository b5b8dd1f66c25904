"""
Apple Music (MusicKit) catalog search.

Usage:
    from songlink_cli.applemusic import MusicSearcher, SearchType, select_result
"""

from songlink_cli.applemusic.client import AppleMusicClient
from songlink_cli.applemusic.models import SearchResult, SearchType, build_artwork_url
from songlink_cli.applemusic.searcher import MusicSearcher, format_results, select_result
from songlink_cli.applemusic.token import create_developer_token

__all__ = [
    "AppleMusicClient",
    "SearchResult",
    "SearchType",
    "build_artwork_url",
    "MusicSearcher",
    "format_results",
    "select_result",
    "create_developer_token",
]
