"""
Apple Music API client.

Minimal MusicKit catalog client: just the search endpoint, authenticated
with a developer token (see songlink_cli.applemusic.token).

API:
    GET https://api.music.apple.com/v1/catalog/{storefront}/search
        ?term=<query>&types=songs,albums[&limit=<n>]
    Authorization: Bearer <developer token>

Response shape (fields used):
    {
        "results": {
            "songs":  {"data": [{"id": ..., "attributes": {...}}, ...]},
            "albums": {"data": [...]}
        }
    }
"""

from typing import Any

import requests

from songlink_cli.core.exceptions import AppleMusicError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


API_BASE = "https://api.music.apple.com/v1"
REQUEST_TIMEOUT = 30  # seconds

# MusicKit resource types accepted by the search endpoint
SEARCH_TYPE_SONGS = "songs"
SEARCH_TYPE_ALBUMS = "albums"


class AppleMusicClient:
    """
    Client for the Apple Music catalog API.

    Attributes:
        storefront: Storefront code used in catalog URLs (e.g. "us").
        session: HTTP session carrying the Authorization header.
        timeout: Request timeout in seconds.

    Example:
        client = AppleMusicClient(developer_token, storefront="us")
        data = client.search("caravan", ["songs"])
    """

    def __init__(
        self,
        developer_token: str,
        storefront: str = "us",
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT
    ) -> None:
        """
        Initialize the client.

        Args:
            developer_token: Signed MusicKit developer token.
            storefront: Storefront code for catalog requests.
            session: Optional session to use. A new one is created if None.
            timeout: Request timeout in seconds.
        """
        self.storefront = storefront
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {developer_token}"})

    def search(
        self,
        term: str,
        types: list[str],
        limit: int | None = None
    ) -> dict[str, Any]:
        """
        Search the catalog.

        Args:
            term: Free-text query.
            types: Resource types to search, e.g. ["songs"] or ["albums"].
            limit: Optional maximum number of results per type.

        Returns:
            The decoded JSON response.

        Raises:
            AppleMusicError: On network failure, a non-200 status or a body
                             that is not a JSON object. 401 and 403 set
                             is_auth_error.
        """
        url = f"{API_BASE}/catalog/{self.storefront}/search"
        params: dict[str, Any] = {"term": term, "types": ",".join(types)}
        if limit is not None:
            params["limit"] = limit

        logger.debug(f"GET {url} term={term!r} types={params['types']}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise AppleMusicError(
                f"failed to search {params['types']}: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if response.status_code in (requests.codes.unauthorized, requests.codes.forbidden):
            raise AppleMusicError(
                "Apple Music rejected the developer token "
                f"({response.status_code}); check your Team ID, Key ID and private key",
                details={"url": url},
                status_code=response.status_code,
                is_auth_error=True
            )

        if response.status_code != requests.codes.ok:
            raise AppleMusicError(
                f"failed to search {params['types']}: "
                f"{response.status_code} {response.reason}",
                details={"url": url, "body": response.text[:500]},
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AppleMusicError(
                f"error decoding Apple Music response: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise AppleMusicError(
                "error decoding Apple Music response: expected a JSON object",
                details={"url": url}
            )

        return data
