"""
Apple Music developer token generation.

MusicKit requests are authenticated with a developer token: a JWT signed
with ES256 using the MusicKit private key (.p8) from the Apple Developer
portal.

    header:  {"alg": "ES256", "kid": <key id>}
    payload: {"iss": <team id>, "iat": <issued at>, "exp": <expiry>}

Apple rejects tokens that expire more than 6 months after issue.
"""

import time

import jwt

from songlink_cli.core.exceptions import AppleMusicError
from songlink_cli.core.logger import get_logger

logger = get_logger(__name__)


TOKEN_ALGORITHM = "ES256"
DEFAULT_TOKEN_TTL = 12 * 60 * 60  # seconds
MAX_TOKEN_TTL = 15777000  # 6 months, Apple's limit


def create_developer_token(
    team_id: str,
    key_id: str,
    private_key: str,
    ttl: int = DEFAULT_TOKEN_TTL,
    now: int | None = None
) -> str:
    """
    Create a signed MusicKit developer token.

    Args:
        team_id: Apple Developer Team ID (token issuer).
        key_id: MusicKit key ID (token 'kid' header).
        private_key: PEM contents of the .p8 key.
        ttl: Lifetime in seconds. Capped at MAX_TOKEN_TTL.
        now: Issue time as a Unix timestamp. Defaults to the current time.

    Returns:
        The encoded JWT.

    Raises:
        AppleMusicError: If the key cannot be used for ES256 signing.
                         is_auth_error is set.
    """
    issued_at = int(time.time()) if now is None else now
    lifetime = max(1, min(ttl, MAX_TOKEN_TTL))

    payload = {
        "iss": team_id,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }

    try:
        token = jwt.encode(
            payload,
            private_key,
            algorithm=TOKEN_ALGORITHM,
            headers={"kid": key_id}
        )
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise AppleMusicError(
            f"failed to create developer token: {e}",
            details={"key_id": key_id, "original_error": str(e)},
            is_auth_error=True
        ) from e

    logger.debug(f"Created developer token for key {key_id}, valid {lifetime}s")
    return token
