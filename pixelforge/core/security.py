"""
Password hashing and bearer token helpers.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from pixelforge.core.settings import Settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def password_fits(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(plain_password: str, rounds: int = 12) -> str:
    if not password_fits(plain_password):
        raise ValueError(f"password is longer than {BCRYPT_MAX_BYTES} bytes")
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Nothing longer than the limit can have been hashed
    if not password_fits(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return hash_password("pixelforge-dummy-password", rounds=rounds)


def burn_password_check(plain_password: str, rounds: int = 12) -> None:
    """Spend the same time as a real check, for logins with an unknown username."""
    verify_password(plain_password, _dummy_hash(rounds))


def create_access_token(
    claims: dict[str, Any], settings: Settings, expires_delta: timedelta | None = None
) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update(
        {
            "iat": now,
            "exp": now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes)),
        }
    )
    return jwt.encode(
        to_encode, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature and expiry. Raises jwt.PyJWTError on any failure."""
    return jwt.decode(
        token,
        settings.jwt_secret.get_secret_value(),
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
