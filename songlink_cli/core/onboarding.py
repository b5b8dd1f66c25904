"""
Interactive setup of Apple Music API credentials.

Walks the user through entering the MusicKit credentials needed by the
search command and saves them to config.yaml. Called by `songlink config`
and automatically by `songlink search` when no credentials are found.
"""

from pathlib import Path

import click

from songlink_cli.core.config import (
    DEFAULT_STOREFRONT,
    AppleMusicConfig,
    Config,
    OutputConfig,
    default_config_path,
    load_config,
    read_private_key,
    save_config,
)
from songlink_cli.core.exceptions import ConfigError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


INSTRUCTIONS = """
========== Apple Music API Setup ==========
To use the search feature, you need Apple Music API credentials.
Follow these steps to get them:
1. Sign in to your Apple Developer account at https://developer.apple.com
2. Go to Certificates, Identifiers & Profiles
3. Under Keys, create a new key with MusicKit enabled
4. Note down the Key ID, Team ID, and download the private key (.p8) file

You'll need to enter these values below:
"""


def run_onboarding(config_path: Path | None = None) -> Config:
    """
    Prompt for Apple Music credentials and save them.

    Existing non-credential settings (output directory) are preserved.

    Args:
        config_path: Optional explicit config file location.

    Returns:
        Config: The saved configuration.

    Raises:
        ConfigError: If Team ID, Key ID or the key path is empty, or the
                     key file cannot be read or is empty. Nothing is saved
                     in that case.
    """
    click.echo(INSTRUCTIONS)

    team_id = _prompt("Team ID")
    if not team_id:
        raise ConfigError("team ID cannot be empty", details={"field": "team_id"})

    key_id = _prompt("Key ID")
    if not key_id:
        raise ConfigError("key ID cannot be empty", details={"field": "key_id"})

    music_id = _prompt("Music ID (usually same as Team ID)") or team_id

    key_path = _prompt("Path to your .p8 private key file")
    if not key_path:
        raise ConfigError("key path cannot be empty", details={"field": "private_key"})

    private_key = read_private_key(Path(key_path))

    storefront = DEFAULT_STOREFRONT
    output = OutputConfig()

    # Environment overrides are applied at load time, not persisted.
    # A broken file is about to be overwritten, so its errors are moot.
    try:
        existing = load_config(config_path, use_env=False)
    except ConfigError as e:
        logger.warning(f"Ignoring existing configuration: {e.message}")
    else:
        output = existing.output
        if existing.apple_music is not None:
            storefront = existing.apple_music.storefront

    config = Config(
        apple_music=AppleMusicConfig(
            team_id=team_id,
            key_id=key_id,
            music_id=music_id,
            private_key=private_key,
            storefront=storefront
        ),
        output=output,
        path=config_path or default_config_path(),
        exists=True
    )

    saved_path = save_config(config)
    logger.debug(f"Credentials saved to {saved_path}")
    click.echo("\n✅ Apple Music API credentials saved successfully!")
    return config


def _prompt(label: str) -> str:
    """Prompt for a value, allowing an empty answer."""
    value = click.prompt(label, default="", show_default=False)
    return value.strip()
