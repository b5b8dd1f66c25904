"""
Logging configuration for songlink-cli.

This module sets up the logging system with multiple outputs:
    - Console: Coloured messages written through the rich console, so they
      do not corrupt the loading spinner while it is active
    - log_full_<timestamp>.log: Complete log of all events (DEBUG and above)
    - log_errors_<timestamp>.log: Only ERROR and CRITICAL level messages
    - download_failures_<timestamp>.log: Downloads that failed, with the reason

Log File Locations:
    All log files are created in the 'logs' subdirectory of the application
    directory (see songlink_cli.core.config.get_app_dir). Each run gets its
    own timestamped files, created only when something is written to them.
    Runs in the same second share files. Only the newest MAX_LOG_RUNS files
    of each kind are kept.

Usage:
    from songlink_cli.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Resolving links")
    logger.error("Request failed", extra={'url': 'https://...'})
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import TextIO

from rich import get_console
from rich.console import Console
from rich.text import Text


# Log file prefixes (created in the logs directory)
LOG_FULL_PREFIX = "log_full"
LOG_ERRORS_PREFIX = "log_errors"
DOWNLOAD_FAILURES_PREFIX = "download_failures"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Runs whose log files are kept, per prefix; older files are deleted
MAX_LOG_RUNS = 20


# Rich styles for level names on the console
LEVEL_STYLES = {
    logging.DEBUG: "blue",
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}

# Console lines are "<LEVEL>: <message>"; the level name is styled separately
CONSOLE_LOG_FORMAT = "%(message)s"


class ConsoleLoggingHandler(logging.Handler):
    """
    Logging handler that writes through a rich Console.

    The loading indicator is a rich live status. Anything written straight
    to the terminal while it spins would be overdrawn on the next frame;
    messages printed through the same Console are placed above the spinner
    instead.

    Level names are coloured with LEVEL_STYLES:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red

    Attributes:
        console: The rich Console used for output.
    """

    def __init__(self, console: Console | None = None) -> None:
        """
        Initialize the console handler.

        Args:
            console: Console to write to. Defaults to rich's global console,
                     which is the one the loading indicator uses.
        """
        super().__init__()
        self.console = console or get_console()
        self.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        """
        Print "<LEVEL>: <message>" with the level name styled.

        Args:
            record: The log record to emit.
        """
        try:
            line = Text(record.levelname, style=LEVEL_STYLES.get(record.levelno, "white"))
            line.append(f": {self.format(record)}")
            self.console.print(line, highlight=False)
        except Exception:
            self.handleError(record)


class DownloadFailureHandler(logging.Handler):
    """
    Custom handler that captures download failures for the failures report.

    This handler listens for log records that contain download failure
    information and writes them to download_failures_<timestamp>.log in a
    simple, human-readable format:

        Artist Name - Song Title.mp4
        video creation failed: ffmpeg exited with status 1

    The handler looks for specific extra fields in log records:
        - 'download_failed_song': The song title
        - 'download_failed_artist': The artist name
        - 'download_failed_format': The requested format (mp3/mp4)
        - 'download_failed_reason': Why the download failed

    Only records containing these fields are written to the report.
    The file is opened lazily on the first failure, so runs without
    failures leave no empty report behind.

    Attributes:
        report_path: Path to the report file.
        report_file: Open file handle, or None until the first write.
    """

    def __init__(self, report_path: Path) -> None:
        """
        Initialize the failure handler.

        Args:
            report_path: Path to the report file. Created on first failure.
        """
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def emit(self, record: logging.LogRecord) -> None:
        """
        Write failure info to the report if present in the log record.

        Args:
            record: The log record to check and potentially write.
        """
        if not hasattr(record, "download_failed_song"):
            return

        try:
            if self.report_file is None:
                self.report_file = open(self.report_path, "a", encoding="utf-8")

            song = getattr(record, "download_failed_song", "Unknown")
            artist = getattr(record, "download_failed_artist", "Unknown")
            media_format = getattr(record, "download_failed_format", "")
            reason = getattr(record, "download_failed_reason", "")

            self.report_file.write(f"{artist} - {song}.{media_format}\n")
            self.report_file.write(f"{reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """
        Close the report file handle.

        Safe to call multiple times.
        """
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Return True if record.levelno >= ERROR."""
        return record.levelno >= logging.ERROR


class ReportRecordFilter(logging.Filter):
    """
    Filter that drops download failure report records.

    The CLI already prints the failure to stderr, so the console handler
    skips records carrying 'download_failed_song'.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Return True unless the record is a download failure report."""
        return not hasattr(record, "download_failed_song")


def prune_log_files(log_dir: Path, keep: int = MAX_LOG_RUNS) -> None:
    """
    Delete all but the newest `keep` log files of each kind.

    Timestamps in the names sort chronologically, so name order is age order.
    Files that cannot be deleted are left in place.
    """
    for prefix in (LOG_FULL_PREFIX, LOG_ERRORS_PREFIX, DOWNLOAD_FAILURES_PREFIX):
        log_files = sorted(log_dir.glob(f"{prefix}_*.log"), reverse=True)
        for old_file in log_files[keep:]:
            try:
                old_file.unlink()
            except OSError:
                pass


def setup_logging(log_dir: Path, verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, before
    any other operations.

    Args:
        log_dir: Directory where log files will be created.
                 Created if it doesn't exist.
        verbose: If True, the console shows DEBUG messages as well.

    Behavior:
        1. Create log_dir if it doesn't exist and prune old log files
        2. Generate timestamp for this run's log files
        3. Configure root logger level to DEBUG
        4. Console handler (ConsoleLoggingHandler), INFO or DEBUG
        5. Full log file handler, DEBUG, timestamped format, opened lazily
        6. Error log file handler, opened lazily and filtered to ERROR+ by ErrorOnlyFilter
        7. Download failures handler

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before the loading indicator starts.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    prune_log_files(log_dir)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = ConsoleLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.addFilter(ReportRecordFilter())
    root_logger.addHandler(console_handler)

    file_formatter = logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT)

    full_handler = logging.FileHandler(
        log_dir / f"{LOG_FULL_PREFIX}_{timestamp}.log",
        mode="a",
        encoding="utf-8",
        delay=True
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(file_formatter)
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"{LOG_ERRORS_PREFIX}_{timestamp}.log",
        mode="a",
        encoding="utf-8",
        delay=True
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(file_formatter)
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    root_logger.addHandler(
        DownloadFailureHandler(log_dir / f"{DOWNLOAD_FAILURES_PREFIX}_{timestamp}.log")
    )

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called will have no
        handlers and will not produce output.
    """
    return logging.getLogger(name)


def log_download_failure(
    logger: logging.Logger,
    song: str,
    artist: str,
    media_format: str,
    error_message: str
) -> None:
    """
    Log a download that failed.

    Logs an ERROR level message and attaches the extra fields that
    DownloadFailureHandler uses to write download_failures.log.

    Args:
        logger: The logger to use for the message.
        song: The song title.
        artist: The artist name.
        media_format: Requested format ("mp3" or "mp4").
        error_message: Description of why the download failed.

    Example:
        log_download_failure(
            logger,
            song="Caravan",
            artist="Duke Ellington",
            media_format="mp4",
            error_message="yt-dlp not found in PATH"
        )
    """
    logger.error(
        f"Download failed: {artist} - {song} ({media_format}): {error_message}",
        extra={
            "download_failed_song": song,
            "download_failed_artist": artist,
            "download_failed_format": media_format,
            "download_failed_reason": error_message,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes and closes every handler on the root logger and removes them.
    Called from the CLI's finally block.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
