"""
Core module for songlink-cli.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading, saving and validation
    - logger: Logging system with multiple outputs
    - progress: Loading spinner shown while network calls run
    - onboarding: Interactive setup of Apple Music credentials

Usage:
    from songlink_cli.core import (
        Config, load_config,
        setup_logging, get_logger,
        SonglinkError, ConfigError
    )
"""

from songlink_cli.core.config import (
    AppleMusicConfig,
    Config,
    OutputConfig,
    default_config_path,
    get_app_dir,
    load_config,
    save_config,
)
from songlink_cli.core.exceptions import (
    AppleMusicError,
    ClipboardError,
    ConfigError,
    DownloadError,
    MetadataError,
    SonglinkAPIError,
    SonglinkError,
)
from songlink_cli.core.logger import (
    get_logger,
    log_download_failure,
    setup_logging,
    shutdown_logging,
)
from songlink_cli.core.progress import loading_indicator

__all__ = [
    # Config
    "Config",
    "AppleMusicConfig",
    "OutputConfig",
    "default_config_path",
    "get_app_dir",
    "load_config",
    "save_config",
    # Exceptions
    "SonglinkError",
    "ConfigError",
    "ClipboardError",
    "SonglinkAPIError",
    "AppleMusicError",
    "DownloadError",
    "MetadataError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_download_failure",
    "shutdown_logging",
    # Progress
    "loading_indicator",
]
