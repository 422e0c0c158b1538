"""JWT token creation and verification.

HS256 (symmetric HMAC) with the single shared JWT_SECRET.

No token revocation and no refresh: once issued, a token is valid until
expiry. The only post-issuance check is that its user still exists, which
get_current_user performs on every request.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.tf_common.errors import InvalidTokenError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(user_id: str) -> str:
    """Issue an access token for *user_id* (default: 7 days)."""
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate a JWT token.

    Returns:
        Decoded payload dict with at minimum {"sub": ...}.

    Raises:
        InvalidTokenError: Token malformed, tampered with, or expired.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidTokenError() from None
    return payload
