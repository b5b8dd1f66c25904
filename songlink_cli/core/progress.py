"""
Loading indicator for songlink-cli using the Rich library.

The tool makes one blocking network call per command (song.link lookup or
Apple Music search). While it runs, a small spinner is shown on the
terminal. The spinner is cosmetic: it owns no state and never affects the
result of the call it wraps.

Usage:
    from songlink_cli.core.progress import loading_indicator

    with loading_indicator():
        response = client.fetch_links(url)

When output is not a terminal (pipes, tests) Rich renders nothing.
"""

from contextlib import contextmanager
from typing import Iterator

from rich import get_console
from rich.console import Console
from rich.status import Status


# Rich's "line" spinner cycles "-", "\", "|", "/" every 130 ms.
# A speed of 1.3 brings that to one frame per 100 ms.
SPINNER_NAME = "line"
SPINNER_SPEED = 1.3
SPINNER_STYLE = "rgb(165,66,129)"


@contextmanager
def loading_indicator(
    message: str = "Loading",
    console: Console | None = None
) -> Iterator[Status]:
    """
    Show a spinner for the duration of the with-block.

    The spinner line is removed when the block exits, whether it returns
    normally or raises.

    Args:
        message: Text shown next to the spinner.
        console: Console to draw on. Defaults to Rich's global console,
                 which is also the console log records are written to.

    Yields:
        The active rich Status, so callers may update its text.
    """
    console = console or get_console()
    status = console.status(
        message,
        spinner=SPINNER_NAME,
        spinner_style=SPINNER_STYLE,
        speed=SPINNER_SPEED,
    )
    status.start()
    try:
        yield status
    finally:
        status.stop()
