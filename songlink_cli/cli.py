"""
Command-line interface for songlink-cli.

This module implements the CLI using Click, with rich-click for the
output colors.

Commands:
    songlink                            Copy the song.link URL of the clipboard link
    songlink -x                         Copy the song.link URL and the Spotify URL
    songlink -d                         Copy <song.link URL> and the Spotify URL
    songlink -s                         Copy the Spotify URL only
    songlink search <query>             Search Apple Music, then copy or download
    songlink config                     Set up Apple Music API credentials

Options:
    --verbose                           Show debug messages on the console
    --version                           Print the version and exit

Search Options:
    --type song|album|both              What to search for (default: song)
    --out <dir>                         Where downloads are saved
    --debug                             Show yt-dlp / ffmpeg output

Usage:
    # Copy a link for sharing (clipboard in, clipboard out)
    songlink

    # Paste-friendly for Discord: no embed for the song.link page
    songlink -d

    # Find a track and download it as a video with its artwork
    songlink search --out ~/Music "caravan duke ellington"

Configuration:
    Apple Music credentials live in config.yaml in the application
    directory. `songlink config` (or the first `songlink search`) writes it.
    The default command needs no configuration.

Exit Codes:
    0   Success
    1   Configuration error or unexpected error
    2   Clipboard error
    3   song.link error
    4   Apple Music error
    5   Download error
    6   Any other songlink-cli error
    130 Interrupted by user
"""

import sys
from collections.abc import Callable
from pathlib import Path

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "songlink": [
        {
            "name": "Output Format",
            "options": ["-x", "-d", "-s"],
        },
        {
            "name": "Info",
            "options": ["--verbose", "--version", "--help"],
        },
    ],
    "songlink search": [
        {
            "name": "Search Options",
            "options": ["--type"],
        },
        {
            "name": "Download Options",
            "options": ["--out", "--debug"],
        },
    ],
}

from songlink_cli import __version__
from songlink_cli.applemusic import (
    MusicSearcher,
    SearchResult,
    SearchType,
    format_results,
    select_result,
)
from songlink_cli.core import (
    AppleMusicError,
    ClipboardError,
    ConfigError,
    DownloadError,
    SonglinkAPIError,
    SonglinkError,
    get_app_dir,
    get_logger,
    load_config,
    loading_indicator,
    setup_logging,
    shutdown_logging,
)
from songlink_cli.core.onboarding import run_onboarding
from songlink_cli.download import MediaFormat, download_track
from songlink_cli.songlink import OutputMode, get_links
from songlink_cli.utils import read_clipboard

logger = get_logger(__name__)


LOG_DIR_NAME = "logs"

# Actions offered after a search result is selected
ACTION_COPY_LINKS = "1"
ACTION_DOWNLOAD_MP3 = "2"
ACTION_DOWNLOAD_MP4 = "3"
ACTIONS = (ACTION_COPY_LINKS, ACTION_DOWNLOAD_MP3, ACTION_DOWNLOAD_MP4)
ACTION_MENU = (
    "\nWhat would you like to do?\n"
    "1) Copy song.link + Spotify URL to clipboard\n"
    "2) Download MP3\n"
    "3) Download MP4 (video with artwork)"
)
ACTION_PROMPT = "Enter choice (1-3, default 1)"

EXIT_CONFIG_ERROR = 1
EXIT_CLIPBOARD_ERROR = 2
EXIT_SONGLINK_ERROR = 3
EXIT_APPLE_MUSIC_ERROR = 4
EXIT_DOWNLOAD_ERROR = 5
EXIT_OTHER_ERROR = 6
EXIT_UNEXPECTED_ERROR = 1
EXIT_INTERRUPTED = 130


@click.group(invoke_without_command=True)
@click.option(
    "-x",
    "both",
    is_flag=True,
    help="Copy the song.link URL and the Spotify URL"
)
@click.option(
    "-d",
    "discord",
    is_flag=True,
    help="Copy the song.link URL surrounded by <> and the Spotify URL"
)
@click.option(
    "-s",
    "spotify",
    is_flag=True,
    help="Copy only the Spotify URL"
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show debug messages"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit"
)
@click.pass_context
def cli(
    ctx: click.Context,
    both: bool,
    discord: bool,
    spotify: bool,
    verbose: bool,
    version: bool
) -> None:
    """
    songlink: Share music links across streaming platforms.

    Copy a link from Apple Music, Spotify, YouTube, Tidal or any other
    service, run the command, and the song.link page for it is on the
    clipboard.

    \b
    BASIC USAGE:
        songlink          # song.link URL
        songlink -x       # song.link URL + Spotify URL
        songlink -d       # <song.link URL> + Spotify URL (no Discord embed)
        songlink -s       # Spotify URL only

    \b
    APPLE MUSIC:
        songlink search "caravan"                # Search songs
        songlink search --type album "caravan"   # Search albums
        songlink config                          # Set up credentials
    """
    if version:
        click.echo(f"songlink-cli {__version__}")
        ctx.exit(0)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    selected_flags = sum([both, discord, spotify])

    if ctx.invoked_subcommand is not None:
        if selected_flags:
            raise click.UsageError("-x, -d and -s can only be used without a command")
        return

    if selected_flags > 1:
        raise click.UsageError("-x, -d and -s are mutually exclusive")

    mode = OutputMode.from_flags(both=both, discord=discord, spotify=spotify)
    _run_command(lambda: _copy_clipboard_links(mode), verbose)


@cli.command()
@click.option(
    "--type",
    "search_type",
    type=str,
    default=SearchType.SONG.value,
    show_default=True,
    metavar="song|album|both",
    help="Type of search: song, album, or both"
)
@click.option(
    "--out",
    "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for downloads (default: configured directory or current directory)"
)
@click.option(
    "--debug",
    is_flag=True,
    help="Show yt-dlp and ffmpeg output"
)
@click.argument("query", nargs=-1, required=True)
@click.pass_context
def search(
    ctx: click.Context,
    search_type: str,
    out_dir: Path | None,
    debug: bool,
    query: tuple[str, ...]
) -> None:
    """
    Search Apple Music for a song or album.

    Pick a result, then copy its song.link and Spotify URLs or download
    it as MP3 or MP4 (the artwork looped over the audio).

    \b
    Requires Apple Music API credentials (asked for on first use).
    """
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    term = " ".join(query)

    _run_command(
        lambda: _search_and_act(term, SearchType.parse(search_type), out_dir, debug),
        verbose
    )


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """
    Configure Apple Music API credentials.

    Prompts for your Team ID, Key ID, Music ID and the path to your .p8
    private key, then saves them to config.yaml.
    """
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False

    def _configure() -> None:
        click.echo("Configuring Apple Music API credentials...")
        run_onboarding()

    _run_command(_configure, verbose)


def _run_command(action: Callable[[], None], verbose: bool) -> None:
    """
    Run a command body with logging set up and errors mapped to exit codes.

    Args:
        action: The command body.
        verbose: Show debug messages on the console.
    """
    try:
        setup_logging(get_app_dir() / LOG_DIR_NAME, verbose=verbose)
        action()

    except ConfigError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        logger.debug(f"Configuration error details: {e.details}")
        sys.exit(EXIT_CONFIG_ERROR)

    except ClipboardError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        sys.exit(EXIT_CLIPBOARD_ERROR)

    except SonglinkAPIError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        logger.debug(f"song.link error details: {e.details}")
        sys.exit(EXIT_SONGLINK_ERROR)

    except AppleMusicError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        if e.is_auth_error:
            click.echo("Run 'songlink config' to update your credentials", err=True)
        logger.debug(f"Apple Music error details: {e.details}")
        sys.exit(EXIT_APPLE_MUSIC_ERROR)

    except DownloadError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        logger.debug(f"Download error details: {e.details}")
        sys.exit(EXIT_DOWNLOAD_ERROR)

    except SonglinkError as e:
        click.echo(f"An error occurred: {e.message}", err=True)
        sys.exit(EXIT_OTHER_ERROR)

    except (KeyboardInterrupt, click.Abort):
        click.echo("\nInterrupted by user", err=True)
        sys.exit(EXIT_INTERRUPTED)

    except Exception as e:
        click.echo(f"An error occurred: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(EXIT_UNEXPECTED_ERROR)

    finally:
        shutdown_logging()


def _copy_clipboard_links(mode: OutputMode) -> None:
    """Resolve the clipboard URL and copy the result back."""
    search_url = read_clipboard()
    logger.debug(f"Clipboard URL: {search_url}")
    get_links(search_url, mode)


def _search_and_act(
    term: str,
    search_type: SearchType,
    out_dir: Path | None,
    debug: bool
) -> None:
    """
    Search Apple Music, let the user pick a result, then run the chosen action.

    Args:
        term: Search query.
        search_type: What to search for.
        out_dir: Download directory from --out, or None for the configured one.
        debug: Show yt-dlp / ffmpeg output.
    """
    app_config = load_config()

    if not app_config.has_credentials:
        click.echo("Apple Music API credentials not found. Let's set them up.")
        run_onboarding(app_config.path)
        app_config = load_config(app_config.path)

    searcher = MusicSearcher.from_config(app_config)

    with loading_indicator():
        results = searcher.search(term, search_type)

    selected = _prompt_selection(results)
    click.echo(f"\nSelected: {selected.name} - {selected.artist_name}")

    action = _prompt_action()

    if action == ACTION_COPY_LINKS:
        get_links(selected.url, OutputMode.BOTH)
        return

    media_format = MediaFormat.MP3 if action == ACTION_DOWNLOAD_MP3 else MediaFormat.MP4
    target_dir = out_dir.expanduser() if out_dir is not None else app_config.output.resolve()
    _download(selected, media_format, target_dir, debug)


def _prompt_selection(results: list[SearchResult]) -> SearchResult:
    """
    List the results and ask which one to use.

    Raises:
        AppleMusicError: If there are no results or the choice is invalid.
    """
    if not results:
        return select_result(results, "")

    click.echo("\nSearch Results:")
    click.echo("----------------")
    for line in format_results(results):
        click.echo(line)

    choice = click.prompt(
        f"\nSelect a result (1-{len(results)})",
        default="",
        show_default=False
    )
    if not choice.strip():
        click.echo("1 (automatic selection)")

    return select_result(results, choice)


def _prompt_action() -> str:
    """Show the action menu and ask until a valid choice is entered."""
    click.echo(ACTION_MENU)

    while True:
        choice = click.prompt(ACTION_PROMPT, default=ACTION_COPY_LINKS, show_default=False)
        choice = choice.strip() or ACTION_COPY_LINKS
        if choice in ACTIONS:
            return choice
        click.echo("Invalid choice. Please enter a valid option (1-3, default 1):")


def _download(
    selected: SearchResult,
    media_format: MediaFormat,
    out_dir: Path,
    debug: bool
) -> None:
    """Download the selected result and report where it was saved."""
    click.echo(f"Downloading {media_format.value.upper()}... ", nl=False)

    try:
        path = download_track(
            song=selected.name,
            artist=selected.artist_name,
            artwork_url=selected.artwork_url,
            fmt=media_format,
            out_dir=out_dir,
            debug=debug
        )
    except DownloadError:
        click.echo("failed.")
        raise

    click.echo(f"Done. Saved to {path}")


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `songlink` from the command line.
    It invokes the Click CLI group.
    """
    cli()


if __name__ == "__main__":
    main()
