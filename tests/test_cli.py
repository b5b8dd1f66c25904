"""Test the command-line interface"""

from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from songlink_cli import __version__
from songlink_cli.applemusic import SearchResult, SearchType
from songlink_cli.cli import cli
from songlink_cli.core.config import Config, OutputConfig
from songlink_cli.core.exceptions import (
    AppleMusicError,
    ClipboardError,
    ConfigError,
    DownloadError,
    SonglinkAPIError,
)
from songlink_cli.download import MediaFormat
from songlink_cli.songlink import OutputMode

CLIPBOARD_URL = "https://music.apple.com/fi/album/caravan/1572919347?i=1572919354"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def app_dir(temp_dir):
    """Write logs under the test directory"""
    with patch("songlink_cli.cli.get_app_dir", return_value=temp_dir):
        yield temp_dir


@pytest.fixture
def results():
    return [
        SearchResult("1", "Caravan", "Duke Ellington", SearchType.SONG,
                     "https://music.apple.com/us/song/caravan/1", "https://img/500x500bb.jpg"),
        SearchResult("2", "Money Jungle", "Duke Ellington", SearchType.ALBUM,
                     "https://music.apple.com/us/album/money-jungle/2", "https://img/2.jpg"),
    ]


@pytest.fixture
def searcher(app_config, results):
    """Configured credentials and a searcher returning two results"""
    searcher = Mock()
    searcher.search.return_value = results
    with patch("songlink_cli.cli.load_config", return_value=app_config), \
         patch("songlink_cli.cli.MusicSearcher.from_config", return_value=searcher):
        yield searcher


class TestDefaultCommand:
    """Test clipboard in, clipboard out"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"songlink-cli {__version__}"

    @pytest.mark.parametrize("flags, mode", [
        ([], OutputMode.DEFAULT),
        (["-x"], OutputMode.BOTH),
        (["-d"], OutputMode.DISCORD),
        (["-s"], OutputMode.SPOTIFY),
    ])
    def test_output_modes(self, runner, flags, mode):
        with patch("songlink_cli.cli.read_clipboard", return_value=CLIPBOARD_URL), \
             patch("songlink_cli.cli.get_links") as mock_get_links:
            result = runner.invoke(cli, flags)

        assert result.exit_code == 0, result.output
        mock_get_links.assert_called_once_with(CLIPBOARD_URL, mode)

    def test_flags_are_exclusive(self, runner):
        with patch("songlink_cli.cli.get_links") as mock_get_links:
            result = runner.invoke(cli, ["-x", "-s"])

        assert result.exit_code == 2
        mock_get_links.assert_not_called()

    def test_empty_clipboard(self, runner):
        with patch("songlink_cli.cli.read_clipboard", side_effect=ClipboardError("clipboard is empty")), \
             patch("songlink_cli.cli.get_links") as mock_get_links:
            result = runner.invoke(cli, [])

        assert result.exit_code == 2
        assert "An error occurred: clipboard is empty" in result.output
        mock_get_links.assert_not_called()

    def test_songlink_error(self, runner):
        error = SonglinkAPIError("received non-OK HTTP response status: 400 Bad Request", status_code=400)
        with patch("songlink_cli.cli.read_clipboard", return_value="not a url"), \
             patch("songlink_cli.cli.get_links", side_effect=error):
            result = runner.invoke(cli, [])

        assert result.exit_code == 3
        assert "An error occurred: received non-OK HTTP response status: 400 Bad Request" in result.output

    def test_unexpected_error(self, runner):
        with patch("songlink_cli.cli.read_clipboard", side_effect=RuntimeError("boom")):
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "An error occurred: boom" in result.output

    def test_writes_logs(self, runner, app_dir):
        with patch("songlink_cli.cli.read_clipboard", return_value=CLIPBOARD_URL), \
             patch("songlink_cli.cli.get_links"):
            runner.invoke(cli, [])

        assert list((app_dir / "logs").glob("log_full_*.log"))


class TestSearchCommand:
    """Test search, selection and the action menu"""

    def test_copy_links_by_default(self, runner, searcher, results):
        with patch("songlink_cli.cli.get_links") as mock_get_links:
            result = runner.invoke(cli, ["search", "caravan"], input="\n\n")

        assert result.exit_code == 0, result.output
        searcher.search.assert_called_once_with("caravan", SearchType.SONG)
        assert "1. [Song] Caravan - Duke Ellington" in result.output
        assert "2. [Album] Money Jungle - Duke Ellington" in result.output
        assert "1 (automatic selection)" in result.output
        assert "Selected: Caravan - Duke Ellington" in result.output
        mock_get_links.assert_called_once_with(results[0].url, OutputMode.BOTH)

    def test_query_words_are_joined(self, runner, searcher):
        with patch("songlink_cli.cli.get_links"):
            runner.invoke(cli, ["search", "--type", "weird", "duke", "ellington"], input="\n\n")

        searcher.search.assert_called_once_with("duke ellington", SearchType.BOTH)

    def test_download_mp4_after_invalid_choice(self, runner, searcher, results, app_config, temp_dir):
        """Test an invalid action re-prompts"""
        saved = temp_dir / "music" / "Duke Ellington - Money Jungle.mp4"
        with patch("songlink_cli.cli.download_track", return_value=saved) as mock_download:
            result = runner.invoke(cli, ["search", "--type", "both", "jungle"], input="2\n9\n3\n")

        assert result.exit_code == 0, result.output
        assert "Invalid choice. Please enter a valid option (1-3, default 1):" in result.output
        assert f"Downloading MP4... Done. Saved to {saved}" in result.output
        mock_download.assert_called_once_with(
            song="Money Jungle",
            artist="Duke Ellington",
            artwork_url=results[1].artwork_url,
            fmt=MediaFormat.MP4,
            out_dir=app_config.output.directory,
            debug=False
        )

    def test_download_mp3_to_out_dir(self, runner, searcher, temp_dir):
        out_dir = temp_dir / "elsewhere"
        with patch("songlink_cli.cli.download_track", return_value=out_dir / "x.mp3") as mock_download:
            result = runner.invoke(
                cli, ["search", "--out", str(out_dir), "--debug", "caravan"], input="1\n2\n"
            )

        assert result.exit_code == 0, result.output
        assert mock_download.call_args.kwargs["fmt"] is MediaFormat.MP3
        assert mock_download.call_args.kwargs["out_dir"] == out_dir
        assert mock_download.call_args.kwargs["debug"] is True

    def test_download_progress_is_one_line(self, runner, searcher, app_config):
        """Test nothing is logged between the progress message and its result"""
        saved = app_config.output.directory / "Duke Ellington - Caravan.mp3"
        with patch("songlink_cli.download.downloader.shutil.which", side_effect=lambda name: f"/usr/bin/{name}"), \
             patch("songlink_cli.download.downloader.run_tool"):
            result = runner.invoke(cli, ["search", "caravan"], input="\n2\n")

        assert result.exit_code == 0, result.output
        assert f"Downloading MP3... Done. Saved to {saved}" in result.output
        assert "INFO" not in result.output

    def test_download_error(self, runner, searcher):
        with patch("songlink_cli.cli.download_track", side_effect=DownloadError("yt-dlp not found in PATH")):
            result = runner.invoke(cli, ["search", "caravan"], input="\n2\n")

        assert result.exit_code == 5
        assert "An error occurred: yt-dlp not found in PATH" in result.output

    def test_invalid_selection(self, runner, searcher):
        result = runner.invoke(cli, ["search", "caravan"], input="7\n")

        assert result.exit_code == 4
        assert "An error occurred: invalid selection" in result.output

    def test_no_results(self, runner, searcher):
        searcher.search.return_value = []

        result = runner.invoke(cli, ["search", "zzzz"])

        assert result.exit_code == 4
        assert "An error occurred: no results found" in result.output

    def test_auth_error_hint(self, runner, searcher):
        searcher.search.side_effect = AppleMusicError("rejected", status_code=401, is_auth_error=True)

        result = runner.invoke(cli, ["search", "caravan"])

        assert result.exit_code == 4
        assert "songlink config" in result.output

    def test_onboarding_when_unconfigured(self, runner, app_config, results, temp_dir):
        """Test missing credentials start the setup, then the search continues"""
        unconfigured = Config(apple_music=None, output=OutputConfig(), path=temp_dir / "config.yaml")
        searcher = Mock()
        searcher.search.return_value = results

        with patch("songlink_cli.cli.load_config", side_effect=[unconfigured, app_config]), \
             patch("songlink_cli.cli.run_onboarding") as mock_onboarding, \
             patch("songlink_cli.cli.MusicSearcher.from_config", return_value=searcher) as mock_from_config, \
             patch("songlink_cli.cli.get_links"):
            result = runner.invoke(cli, ["search", "caravan"], input="\n\n")

        assert result.exit_code == 0, result.output
        assert "Apple Music API credentials not found. Let's set them up." in result.output
        mock_onboarding.assert_called_once_with(temp_dir / "config.yaml")
        mock_from_config.assert_called_once_with(app_config)

    def test_query_required(self, runner):
        result = runner.invoke(cli, ["search"])

        assert result.exit_code == 2


class TestConfigCommand:
    """Test credential setup command"""

    def test_runs_onboarding(self, runner):
        with patch("songlink_cli.cli.run_onboarding") as mock_onboarding:
            result = runner.invoke(cli, ["config"])

        assert result.exit_code == 0
        assert "Configuring Apple Music API credentials..." in result.output
        mock_onboarding.assert_called_once_with()

    def test_empty_team_id(self, runner):
        with patch("songlink_cli.cli.run_onboarding", side_effect=ConfigError("team ID cannot be empty")):
            result = runner.invoke(cli, ["config"])

        assert result.exit_code == 1
        assert "An error occurred: team ID cannot be empty" in result.output
