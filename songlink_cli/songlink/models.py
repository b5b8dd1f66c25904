"""
Data models for song.link API responses.

The song.link (Odesli) links endpoint returns a large document describing
the looked-up entity on every platform it knows. The tool only needs two
values from it:

    {
        "pageUrl": "https://song.link/fi/i/1572919354",
        "linksByPlatform": {
            "spotify": {"url": "https://open.spotify.com/track/..."},
            ...
        },
        ...
    }

Usage:
    from songlink_cli.songlink.models import SonglinkResponse, OutputMode, format_output

    response = SonglinkResponse.from_api(response_json)
    text = format_output(response, OutputMode.DISCORD)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


# song.link localises page URLs for callers it geolocates to Finland
LOCALE_SEGMENT = "/fi"


def strip_locale(page_url: str) -> str:
    """
    Remove the locale segment from a song.link page URL.

    Every occurrence of "/fi" is removed, so the published link is the
    same regardless of where the request came from.

    Args:
        page_url: The pageUrl value from the API.

    Returns:
        The non-localised page URL.

    Example:
        strip_locale("https://song.link/fi/i/1572919354")
        # Returns: "https://song.link/i/1572919354"
    """
    return page_url.replace(LOCALE_SEGMENT, "")


@dataclass(frozen=True)
class SonglinkResponse:
    """
    The parts of a song.link response the tool uses.

    Attributes:
        page_url: The song.link page URL exactly as returned by the API.
                  Example: "https://song.link/fi/i/1572919354"
        spotify_url: The Spotify URL for the same entity, or "" when
                     song.link does not know a Spotify equivalent.
                     Example: "https://open.spotify.com/track/2Xtsv7BUMrNodQWH2JPOc0"
    """
    page_url: str
    spotify_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SonglinkResponse":
        """
        Create a SonglinkResponse from the decoded JSON body.

        Missing or null fields become empty strings. Unknown fields
        are ignored.

        Args:
            data: The decoded JSON object.

        Returns:
            SonglinkResponse: The extracted values.
        """
        links_by_platform = data.get("linksByPlatform") or {}
        spotify = links_by_platform.get("spotify") if isinstance(links_by_platform, dict) else None
        spotify_url = spotify.get("url") if isinstance(spotify, dict) else None

        return cls(
            page_url=data.get("pageUrl") or "",
            spotify_url=spotify_url or ""
        )

    @property
    def non_local_page_url(self) -> str:
        """The page URL with the locale segment removed."""
        return strip_locale(self.page_url)


class OutputMode(Enum):
    """
    What gets copied to the clipboard.

    Values:
        DEFAULT: The song.link URL only.
        BOTH: The song.link URL and the Spotify URL on the next line (-x).
        DISCORD: The song.link URL wrapped in <> (Discord then shows no
                 embed for it) and the Spotify URL on the next line (-d).
        SPOTIFY: The Spotify URL only (-s).
    """
    DEFAULT = "default"
    BOTH = "both"
    DISCORD = "discord"
    SPOTIFY = "spotify"

    @classmethod
    def from_flags(
        cls,
        both: bool = False,
        discord: bool = False,
        spotify: bool = False
    ) -> "OutputMode":
        """
        Pick the output mode from the CLI flags.

        If several flags are set, -x wins over -d, which wins over -s.

        Args:
            both: The -x flag.
            discord: The -d flag.
            spotify: The -s flag.

        Returns:
            OutputMode: The selected mode.
        """
        if both:
            return cls.BOTH
        if discord:
            return cls.DISCORD
        if spotify:
            return cls.SPOTIFY
        return cls.DEFAULT


def format_output(response: SonglinkResponse, mode: OutputMode) -> str:
    """
    Render the clipboard text for a response.

    Args:
        response: The song.link response.
        mode: What to include.

    Returns:
        The text to copy.

    Example:
        format_output(response, OutputMode.DISCORD)
        # Returns: "<https://song.link/i/1572919354>\\nhttps://open.spotify.com/track/..."
    """
    page_url = response.non_local_page_url

    if mode is OutputMode.BOTH:
        return f"{page_url}\n{response.spotify_url}"
    if mode is OutputMode.DISCORD:
        return f"<{page_url}>\n{response.spotify_url}"
    if mode is OutputMode.SPOTIFY:
        return response.spotify_url
    return page_url
