"""
song.link API client.

This module builds the song.link links query for a streaming URL, performs
the request, and turns the response into a SonglinkResponse.

API:
    GET https://api.song.link/v1-alpha.1/links?url=<percent-encoded url>

    No API key is needed for low request volumes. Failures are reported
    as SonglinkAPIError and never retried.

Usage:
    from songlink_cli.songlink.client import SonglinkClient, get_links

    client = SonglinkClient()
    response = client.fetch_links("https://music.apple.com/fi/album/caravan/1572919347?i=1572919354")
    print(response.non_local_page_url)

    # Or the full clipboard workflow
    get_links(url, OutputMode.DISCORD)
"""

from urllib.parse import urlencode

import click
import requests

from songlink_cli.core.exceptions import SonglinkAPIError
from songlink_cli.core.logger import get_logger
from songlink_cli.core.progress import loading_indicator
from songlink_cli.songlink.models import OutputMode, SonglinkResponse, format_output
from songlink_cli.utils.clipboard import write_clipboard

logger = get_logger(__name__)


API_BASE = "https://api.song.link/v1-alpha.1/links"
REQUEST_TIMEOUT = 30  # seconds
USER_AGENT = "songlink-cli"


def build_url(search_url: str) -> str:
    """
    Build the song.link API query for a streaming URL.

    The streaming URL is form-encoded as the single 'url' query
    parameter: reserved characters such as ':', '/', '?' and '=' are
    percent-encoded and spaces become '+'.

    Args:
        search_url: Any streaming service URL (Apple Music, Spotify, ...).

    Returns:
        The full API URL.

    Example:
        build_url("https://music.apple.com/fi/album/caravan/1572919347?i=1572919354")
        # Returns: "https://api.song.link/v1-alpha.1/links?url=https%3A%2F%2Fmusic.apple.com
        #           %2Ffi%2Falbum%2Fcaravan%2F1572919347%3Fi%3D1572919354"
    """
    return f"{API_BASE}?{urlencode({'url': search_url})}"


class SonglinkClient:
    """
    Client for the song.link links endpoint.

    Wraps a requests.Session so repeated lookups reuse connections.

    Attributes:
        session: The HTTP session used for requests.
        timeout: Request timeout in seconds.

    Example:
        client = SonglinkClient()
        try:
            response = client.fetch_links(url)
        except SonglinkAPIError as e:
            print(f"Lookup failed: {e.message}")
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT
    ) -> None:
        """
        Initialize the client.

        Args:
            session: Optional session to use. A new one is created if None.
            timeout: Request timeout in seconds.
        """
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.timeout = timeout

    def make_request(self, search_url: str) -> requests.Response:
        """
        Request the links for a streaming URL.

        Args:
            search_url: The streaming URL to look up.

        Returns:
            The HTTP response. Its status is always 200.

        Raises:
            SonglinkAPIError: On network failure or a non-200 status.
        """
        url = build_url(search_url)
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SonglinkAPIError(
                f"error making HTTP request: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if response.status_code != requests.codes.ok:
            raise SonglinkAPIError(
                f"received non-OK HTTP response status: {response.status_code} {response.reason}",
                details={"url": url, "body": response.text[:500]},
                status_code=response.status_code
            )

        return response

    def fetch_links(self, search_url: str) -> SonglinkResponse:
        """
        Look up a streaming URL and decode the result.

        Args:
            search_url: The streaming URL to look up.

        Returns:
            SonglinkResponse: Page URL and Spotify URL.

        Raises:
            SonglinkAPIError: On network failure, a non-200 status, or a body
                              that is not a JSON object.
        """
        response = self.make_request(search_url)

        try:
            data = response.json()
        except ValueError as e:
            raise SonglinkAPIError(
                f"error decoding JSON response: {e}",
                details={"url": response.url, "original_error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise SonglinkAPIError(
                "error decoding JSON response: expected a JSON object",
                details={"url": response.url}
            )

        links = SonglinkResponse.from_api(data)
        logger.debug(f"song.link page: {links.page_url}, spotify: {links.spotify_url or '-'}")
        return links


def get_links(
    search_url: str,
    mode: OutputMode = OutputMode.DEFAULT,
    client: SonglinkClient | None = None
) -> str:
    """
    Resolve a streaming URL and copy the result to the clipboard.

    Shows the loading indicator during the request, then prints the
    copied text.

    Args:
        search_url: The streaming URL to resolve.
        mode: What to copy (see OutputMode).
        client: Client to use. A new one is created if None.

    Returns:
        The text that was copied.

    Raises:
        SonglinkAPIError: If the lookup fails. Nothing is copied.
        ClipboardError: If the clipboard cannot be written.
    """
    client = client or SonglinkClient()

    with loading_indicator():
        links = client.fetch_links(search_url)

    output = format_output(links, mode)
    write_clipboard(output)

    click.echo(f"\nSuccess ✅\n{output}\nCopied to the clipboard\n")
    return output
