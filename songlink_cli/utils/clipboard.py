"""
Platform clipboard access.

Thin wrapper over pyperclip that converts its failures into
ClipboardError, so the CLI can report them like any other error.

On Linux pyperclip needs one of xclip, xsel or wl-clipboard installed.
"""

import pyperclip

from songlink_cli.core.exceptions import ClipboardError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


def read_clipboard() -> str:
    """
    Read the current clipboard text.

    Returns:
        The clipboard contents with surrounding whitespace removed.

    Raises:
        ClipboardError: If no clipboard mechanism is available or the
                        clipboard is empty.
    """
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardError(
            f"error reading clipboard: {e}",
            details={"original_error": str(e)}
        ) from e

    text = (text or "").strip()
    if not text:
        raise ClipboardError("clipboard is empty")

    logger.debug(f"Read from clipboard: {text}")
    return text


def write_clipboard(text: str) -> None:
    """
    Replace the clipboard contents.

    Args:
        text: Text to copy.

    Raises:
        ClipboardError: If no clipboard mechanism is available.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(
            f"error copying output string to clipboard: {e}",
            details={"original_error": str(e)}
        ) from e

    logger.debug("Copied result to clipboard")
