"""
Exception classes for songlink-cli.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message that the CLI prints as-is,
plus an optional details dictionary for the log files.

Exception Hierarchy:
    SonglinkError (base)
        ConfigError - Configuration file / credential issues
        ClipboardError - Platform clipboard access issues
        SonglinkAPIError - song.link API issues
        AppleMusicError - Apple Music (MusicKit) API issues
        DownloadError - yt-dlp / ffmpeg issues
        MetadataError - Tag embedding issues

None of these errors are retried. The CLI reports them and exits.
"""


class SonglinkError(Exception):
    """
    Base exception for all songlink-cli errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all songlink-cli errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URLs, paths).

    Example:
        try:
            get_links(url)
        except SonglinkError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'file_path': File involved in the error
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SonglinkError):
    """
    Raised when there's an issue with the configuration file or credentials.

    Common causes:
        - config.yaml has invalid YAML syntax
        - A credential field is present but empty
        - The .p8 private key file cannot be read during onboarding
        - Search was requested without configured credentials

    Example:
        raise ConfigError(
            "'apple_music.team_id' must be a non-empty string",
            details={'field': 'apple_music.team_id'}
        )
    """
    pass


class ClipboardError(SonglinkError):
    """
    Raised when the platform clipboard cannot be read or written.

    Common causes:
        - No clipboard mechanism available (headless Linux without xclip/xsel/wl-clipboard)
        - The clipboard is empty when a URL was expected
    """
    pass


class SonglinkAPIError(SonglinkError):
    """
    Raised when the song.link API request fails.

    Common causes:
        - Network connectivity issues
        - Non-200 status (unsupported URL, rate limiting, service outage)
        - Response body is not valid JSON

    Attributes:
        status_code: HTTP status code if a response was received, else None.

    Example:
        raise SonglinkAPIError(
            "received non-OK HTTP response status: 404 Not Found",
            details={'url': request_url},
            status_code=404
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None
    ) -> None:
        """
        Initialize song.link error with the HTTP status.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status_code: HTTP status code of the failed response, if any.
        """
        super().__init__(message, details)
        self.status_code = status_code


class AppleMusicError(SonglinkError):
    """
    Raised when there's an issue with the Apple Music API or search flow.

    Common causes:
        - Invalid private key or key ID (developer token rejected)
        - Network connectivity issues
        - No results for the query
        - Invalid result selection

    Attributes:
        status_code: HTTP status code if a response was received, else None.
        is_auth_error: True if the developer token could not be created
                       or was rejected by Apple (401/403).
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None,
        is_auth_error: bool = False
    ) -> None:
        """
        Initialize Apple Music error with additional flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status_code: HTTP status code of the failed response, if any.
            is_auth_error: Set to True if this is an authentication failure.
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.is_auth_error = is_auth_error


class DownloadError(SonglinkError):
    """
    Raised when a track cannot be downloaded or converted.

    Common causes:
        - yt-dlp or ffmpeg not installed / not on PATH
        - yt-dlp found no matching video
        - Artwork download failed (MP4 only)
        - ffmpeg conversion failed
        - Unsupported output format

    Example:
        raise DownloadError(
            "video creation failed: ffmpeg exited with status 1",
            details={'output_path': '/music/Artist - Song.mp4'}
        )
    """
    pass


class MetadataError(SonglinkError):
    """
    Raised when tags or artwork cannot be embedded into a media file.

    This is a NON-CRITICAL error - the downloaded file is still usable.
    The downloader logs it as a warning and returns the file path.
    """
    pass
