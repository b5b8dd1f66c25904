"""Test the song.link client and output formatting"""

from unittest.mock import patch

import pytest
import requests
import responses
from responses import matchers

from songlink_cli.core.exceptions import SonglinkAPIError
from songlink_cli.songlink import (
    API_BASE,
    OutputMode,
    SonglinkClient,
    SonglinkResponse,
    build_url,
    format_output,
    get_links,
    strip_locale,
)

APPLE_MUSIC_URL = "https://music.apple.com/fi/album/caravan/1572919347?i=1572919354"
SPOTIFY_URL = "https://open.spotify.com/track/2Xtsv7BUMrNodQWH2JPOc0"
PAGE_URL = "https://song.link/i/1572919354"


class TestBuildUrl:
    """Test API URL construction"""

    def test_encodes_search_url_as_query_parameter(self):
        """Test the streaming URL is fully percent-encoded"""
        assert build_url(APPLE_MUSIC_URL) == (
            "https://api.song.link/v1-alpha.1/links?url="
            "https%3A%2F%2Fmusic.apple.com%2Ffi%2Falbum%2Fcaravan%2F1572919347%3Fi%3D1572919354"
        )

    def test_encodes_space_as_plus(self):
        """Test form encoding of spaces and ampersands"""
        assert build_url("a b&c") == f"{API_BASE}?url=a+b%26c"


class TestResponseModel:
    """Test response decoding and locale stripping"""

    def test_strip_locale(self):
        """Test every /fi segment is removed"""
        assert strip_locale("https://song.link/fi/i/1572919354") == PAGE_URL
        assert strip_locale(PAGE_URL) == PAGE_URL

    def test_from_api(self, sample_songlink_body):
        """Test page and Spotify URLs are extracted"""
        links = SonglinkResponse.from_api(sample_songlink_body)

        assert links.page_url == "https://song.link/fi/i/1572919354"
        assert links.non_local_page_url == PAGE_URL
        assert links.spotify_url == SPOTIFY_URL

    def test_from_api_without_spotify(self):
        """Test a missing Spotify entry gives an empty URL"""
        assert SonglinkResponse.from_api({"pageUrl": PAGE_URL}).spotify_url == ""
        assert SonglinkResponse.from_api(
            {"pageUrl": PAGE_URL, "linksByPlatform": {"tidal": {"url": "x"}}}
        ).spotify_url == ""


class TestFormatOutput:
    """Test clipboard text for each output mode"""

    @pytest.fixture
    def links(self):
        return SonglinkResponse(page_url="https://song.link/fi/i/1572919354", spotify_url=SPOTIFY_URL)

    def test_default(self, links):
        assert format_output(links, OutputMode.DEFAULT) == PAGE_URL

    def test_both(self, links):
        assert format_output(links, OutputMode.BOTH) == f"{PAGE_URL}\n{SPOTIFY_URL}"

    def test_discord(self, links):
        assert format_output(links, OutputMode.DISCORD) == f"<{PAGE_URL}>\n{SPOTIFY_URL}"

    def test_spotify(self, links):
        assert format_output(links, OutputMode.SPOTIFY) == SPOTIFY_URL

    def test_flag_precedence(self):
        """Test -x wins over -d, which wins over -s"""
        assert OutputMode.from_flags() is OutputMode.DEFAULT
        assert OutputMode.from_flags(both=True, discord=True, spotify=True) is OutputMode.BOTH
        assert OutputMode.from_flags(discord=True, spotify=True) is OutputMode.DISCORD
        assert OutputMode.from_flags(spotify=True) is OutputMode.SPOTIFY


class TestSonglinkClient:
    """Test HTTP behaviour of SonglinkClient"""

    @responses.activate
    def test_fetch_links(self, sample_songlink_body):
        """Test a 200 response is decoded"""
        responses.add(
            responses.GET,
            API_BASE,
            json=sample_songlink_body,
            match=[matchers.query_param_matcher({"url": APPLE_MUSIC_URL})]
        )

        links = SonglinkClient().fetch_links(APPLE_MUSIC_URL)

        assert links.non_local_page_url == PAGE_URL
        assert links.spotify_url == SPOTIFY_URL

    @responses.activate
    def test_non_ok_status(self):
        """Test a non-200 status raises with the status code"""
        responses.add(responses.GET, API_BASE, status=404, json={"statusCode": 404})

        with pytest.raises(SonglinkAPIError) as exc_info:
            SonglinkClient().fetch_links(APPLE_MUSIC_URL)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "received non-OK HTTP response status: 404 Not Found"

    @responses.activate
    def test_invalid_json(self):
        """Test a body that is not JSON is a decode error"""
        responses.add(responses.GET, API_BASE, body="<html>oops</html>")

        with pytest.raises(SonglinkAPIError, match="error decoding JSON response"):
            SonglinkClient().fetch_links(APPLE_MUSIC_URL)

    @responses.activate
    def test_json_not_an_object(self):
        """Test a JSON array is a decode error"""
        responses.add(responses.GET, API_BASE, json=["not", "an", "object"])

        with pytest.raises(SonglinkAPIError, match="error decoding JSON response"):
            SonglinkClient().fetch_links(APPLE_MUSIC_URL)

    @responses.activate
    def test_network_error(self):
        """Test connection failures are wrapped"""
        responses.add(responses.GET, API_BASE, body=requests.ConnectionError("connection refused"))

        with pytest.raises(SonglinkAPIError, match="error making HTTP request"):
            SonglinkClient().fetch_links(APPLE_MUSIC_URL)


class TestGetLinks:
    """Test the full lookup-and-copy operation"""

    @responses.activate
    def test_copies_and_prints(self, sample_songlink_body, capsys):
        """Test the formatted text is copied and echoed"""
        responses.add(responses.GET, API_BASE, json=sample_songlink_body)

        with patch("songlink_cli.utils.clipboard.pyperclip.copy") as mock_copy:
            output = get_links(APPLE_MUSIC_URL, OutputMode.BOTH)

        expected = f"{PAGE_URL}\n{SPOTIFY_URL}"
        assert output == expected
        mock_copy.assert_called_once_with(expected)

        printed = capsys.readouterr().out
        assert f"Success ✅\n{expected}\nCopied to the clipboard" in printed

    @responses.activate
    def test_nothing_copied_on_error(self):
        """Test a failed lookup leaves the clipboard alone"""
        responses.add(responses.GET, API_BASE, status=500)

        with patch("songlink_cli.utils.clipboard.pyperclip.copy") as mock_copy:
            with pytest.raises(SonglinkAPIError):
                get_links(APPLE_MUSIC_URL)

        mock_copy.assert_not_called()
