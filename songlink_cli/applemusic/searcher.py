"""
Apple Music catalog search and result selection.

Usage:
    from songlink_cli.applemusic.searcher import MusicSearcher, select_result

    searcher = MusicSearcher.from_config(config)
    results = searcher.search("caravan", SearchType.SONG)
    selected = select_result(results, user_input)
"""

from typing import Any

from songlink_cli.applemusic.client import (
    SEARCH_TYPE_ALBUMS,
    SEARCH_TYPE_SONGS,
    AppleMusicClient,
)
from songlink_cli.applemusic.models import SearchResult, SearchType
from songlink_cli.applemusic.token import create_developer_token
from songlink_cli.core.config import Config
from songlink_cli.core.exceptions import AppleMusicError, ConfigError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


# Requests issued per search type, in result order
SEARCH_TYPE_REQUESTS = {
    SearchType.SONG: [SEARCH_TYPE_SONGS],
    SearchType.ALBUM: [SEARCH_TYPE_ALBUMS],
    SearchType.BOTH: [SEARCH_TYPE_SONGS, SEARCH_TYPE_ALBUMS],
}

RESOURCE_RESULT_TYPES = {
    SEARCH_TYPE_SONGS: SearchType.SONG,
    SEARCH_TYPE_ALBUMS: SearchType.ALBUM,
}


class MusicSearcher:
    """
    Searches the Apple Music catalog for songs and albums.

    Attributes:
        client: The AppleMusicClient used for requests.
    """

    def __init__(self, client: AppleMusicClient) -> None:
        """
        Initialize the searcher.

        Args:
            client: Authenticated Apple Music client.
        """
        self.client = client

    @classmethod
    def from_config(cls, config: Config) -> "MusicSearcher":
        """
        Create a searcher from the application configuration.

        Args:
            config: Loaded configuration.

        Returns:
            MusicSearcher: A searcher with a fresh developer token.

        Raises:
            ConfigError: If no Apple Music credentials are configured.
            AppleMusicError: If the developer token cannot be created.
        """
        credentials = config.apple_music
        if credentials is None:
            raise ConfigError("apple music api credentials not configured")

        token = create_developer_token(
            team_id=credentials.team_id,
            key_id=credentials.key_id,
            private_key=credentials.private_key
        )
        return cls(AppleMusicClient(token, storefront=credentials.storefront))

    def search(self, query: str, search_type: SearchType) -> list[SearchResult]:
        """
        Search for songs, albums, or both.

        One request is made per resource type. Songs come before albums,
        each in the order the API returned them.

        Args:
            query: Free-text query.
            search_type: What to search for.

        Returns:
            list[SearchResult]: All results, possibly empty.

        Raises:
            AppleMusicError: If any request fails.
        """
        results: list[SearchResult] = []

        for resource_type in SEARCH_TYPE_REQUESTS.get(search_type, [SEARCH_TYPE_SONGS]):
            data = self.client.search(query, [resource_type])
            results.extend(_extract_results(data, resource_type))

        logger.debug(f"Search {query!r} ({search_type.value}): {len(results)} results")
        return results


def _extract_results(data: dict[str, Any], resource_type: str) -> list[SearchResult]:
    """Pull the results of one resource type out of a search response."""
    section = (data.get("results") or {}).get(resource_type) or {}
    result_type = RESOURCE_RESULT_TYPES[resource_type]
    return [
        SearchResult.from_api(resource, result_type)
        for resource in section.get("data") or []
    ]


def format_results(results: list[SearchResult]) -> list[str]:
    """
    Render numbered result lines for display.

    Args:
        results: Search results.

    Returns:
        Lines like "1. [Song] Caravan - Duke Ellington".
    """
    return [f"{index}. {result.display}" for index, result in enumerate(results, start=1)]


def select_result(results: list[SearchResult], choice: str) -> SearchResult:
    """
    Pick a result from the user's input.

    Args:
        results: The results that were displayed.
        choice: Raw user input. Empty selects the first result.

    Returns:
        SearchResult: The selected result.

    Raises:
        AppleMusicError: If there are no results, or the input is not a
                         number between 1 and len(results).
    """
    if not results:
        raise AppleMusicError("no results found")

    choice = choice.strip()
    if not choice:
        return results[0]

    try:
        index = int(choice)
    except ValueError:
        raise AppleMusicError("invalid selection", details={"choice": choice}) from None

    if index < 1 or index > len(results):
        raise AppleMusicError("invalid selection", details={"choice": choice})

    return results[index - 1]
