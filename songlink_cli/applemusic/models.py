"""
Data models for Apple Music search.

Usage:
    from songlink_cli.applemusic.models import SearchType, SearchResult

    result = SearchResult.from_api(song_resource, SearchType.SONG)
    print(f"{result.name} - {result.artist_name}")
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


ARTWORK_SIZE = 500


class SearchType(Enum):
    """
    What kind of catalog entity to search for.

    Values:
        SONG: Songs only.
        ALBUM: Albums only.
        BOTH: Songs, then albums.
    """
    SONG = "song"
    ALBUM = "album"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str) -> "SearchType":
        """
        Parse a --type value.

        Anything other than "song" or "album" means BOTH.

        Args:
            value: The raw option value.

        Returns:
            SearchType: The parsed type.
        """
        normalized = value.strip().lower()
        if normalized == cls.SONG.value:
            return cls.SONG
        if normalized == cls.ALBUM.value:
            return cls.ALBUM
        return cls.BOTH

    @property
    def label(self) -> str:
        """Display label used in the results list."""
        return self.value.capitalize()


def build_artwork_url(template: str, size: int = ARTWORK_SIZE) -> str:
    """
    Fill in a MusicKit artwork URL template.

    Args:
        template: Artwork URL containing {w} and {h} placeholders.
        size: Width and height in pixels.

    Returns:
        The concrete image URL.

    Example:
        build_artwork_url("https://is1-ssl.mzstatic.com/image/.../{w}x{h}bb.jpg")
        # Returns: "https://is1-ssl.mzstatic.com/image/.../500x500bb.jpg"
    """
    return template.replace("{w}", str(size)).replace("{h}", str(size))


@dataclass(frozen=True)
class SearchResult:
    """
    A song or album found in the Apple Music catalog.

    Attributes:
        id: Apple Music catalog ID.
            Example: "1572919354"
        name: Song or album title.
        artist_name: Artist name as shown by Apple Music.
        type: SearchType.SONG or SearchType.ALBUM.
        url: Apple Music web URL. This is what gets passed to song.link.
             Example: "https://music.apple.com/us/album/caravan/1572919347?i=1572919354"
        artwork_url: 500x500 artwork image URL, or "" if none.
    """
    id: str
    name: str
    artist_name: str
    type: SearchType
    url: str
    artwork_url: str = ""

    @classmethod
    def from_api(cls, resource: dict[str, Any], result_type: SearchType) -> "SearchResult":
        """
        Create a SearchResult from a MusicKit song or album resource.

        Args:
            resource: One item of results.songs.data or results.albums.data.
            result_type: SearchType.SONG or SearchType.ALBUM.

        Returns:
            SearchResult: The extracted values.
        """
        attributes = resource.get("attributes") or {}
        artwork = attributes.get("artwork") or {}

        return cls(
            id=str(resource.get("id") or ""),
            name=attributes.get("name") or "",
            artist_name=attributes.get("artistName") or "",
            type=result_type,
            url=attributes.get("url") or "",
            artwork_url=build_artwork_url(artwork.get("url") or "")
        )

    @property
    def display(self) -> str:
        """Result line shown to the user, without the index."""
        return f"[{self.type.label}] {self.name} - {self.artist_name}"
