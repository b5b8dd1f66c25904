"""Test configuration and fixtures"""

import tempfile
from pathlib import Path

import pytest
import yaml
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from songlink_cli.core.config import (
    APPLE_MUSIC_ENV_VARS,
    OUTPUT_DIR_ENV_VAR,
    PRIVATE_KEY_PATH_ENV_VAR,
    AppleMusicConfig,
    Config,
    OutputConfig,
)
from songlink_cli.core.logger import shutdown_logging


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep the developer's environment and .env files out of the tests"""
    for env_var in [*APPLE_MUSIC_ENV_VARS, PRIVATE_KEY_PATH_ENV_VAR, OUTPUT_DIR_ENV_VAR]:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setattr("songlink_cli.core.config.load_dotenv", lambda *args, **kwargs: False)
    yield
    shutdown_logging()


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(scope="session")
def ec_private_key():
    """P-256 key like the ones MusicKit hands out as .p8 files"""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def private_key_pem(ec_private_key):
    """PEM (PKCS#8) text of the test key"""
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ).decode("utf-8")


@pytest.fixture(scope="session")
def public_key_pem(ec_private_key):
    """PEM text of the public half, for verifying tokens"""
    return ec_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode("utf-8")


@pytest.fixture
def key_file(temp_dir, private_key_pem):
    """A .p8 file on disk"""
    path = temp_dir / "AuthKey_XYZ987WVUT.p8"
    path.write_text(private_key_pem, encoding="utf-8")
    return path


@pytest.fixture
def config_file(temp_dir, private_key_pem):
    """A complete config.yaml"""
    path = temp_dir / "config.yaml"
    data = {
        "output": {"directory": str(temp_dir / "music")},
        "apple_music": {
            "team_id": "ABCDE12345",
            "key_id": "XYZ987WVUT",
            "music_id": "ABCDE12345",
            "storefront": "fi",
            "private_key": private_key_pem,
        },
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture
def app_config(temp_dir, private_key_pem):
    """Loaded configuration with Apple Music credentials"""
    return Config(
        apple_music=AppleMusicConfig(
            team_id="ABCDE12345",
            key_id="XYZ987WVUT",
            music_id="ABCDE12345",
            private_key=private_key_pem,
        ),
        output=OutputConfig(directory=temp_dir / "music"),
        path=temp_dir / "config.yaml",
        exists=True
    )


@pytest.fixture
def sample_songlink_body():
    """song.link response for an Apple Music track, as seen from Finland"""
    return {
        "entityUniqueId": "ITUNES_SONG::1572919354",
        "userCountry": "FI",
        "pageUrl": "https://song.link/fi/i/1572919354",
        "linksByPlatform": {
            "appleMusic": {
                "url": "https://music.apple.com/fi/album/caravan/1572919347?i=1572919354",
            },
            "spotify": {
                "url": "https://open.spotify.com/track/2Xtsv7BUMrNodQWH2JPOc0",
            },
        },
    }


@pytest.fixture
def sample_song_resource():
    """One item of results.songs.data from a MusicKit search"""
    return {
        "id": "1572919354",
        "type": "songs",
        "attributes": {
            "name": "Caravan",
            "artistName": "Duke Ellington",
            "url": "https://music.apple.com/us/album/caravan/1572919347?i=1572919354",
            "artwork": {
                "width": 3000,
                "height": 3000,
                "url": "https://is1-ssl.mzstatic.com/image/thumb/Music/v4/ab/cd/{w}x{h}bb.jpg",
            },
        },
    }


@pytest.fixture
def sample_album_resource():
    """One item of results.albums.data from a MusicKit search"""
    return {
        "id": "1572919347",
        "type": "albums",
        "attributes": {
            "name": "Money Jungle",
            "artistName": "Duke Ellington, Charles Mingus & Max Roach",
            "url": "https://music.apple.com/us/album/money-jungle/1572919347",
            "artwork": {
                "url": "https://is1-ssl.mzstatic.com/image/thumb/Music/v4/ef/01/{w}x{h}bb.jpg",
            },
        },
    }
