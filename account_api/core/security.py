"""Password hashing, legacy credential detection, and JWT creation/verification."""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from account_api.core.errors import ConfigError

# Every bcrypt encoding ($2a$, $2b$, $2y$) starts with this marker; anything else is legacy plaintext.
BCRYPT_HASH_PREFIX = "$2"

# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

MISSING_SECRET_MESSAGE = "Server missing SECRET_KEY"


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password with a fresh salt. Two calls never return the same value."""
    return bcrypt.hashpw(
        _password_bytes(plain_password), bcrypt.gensalt(rounds=rounds)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes yield False."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def is_password_hash(stored: str | None) -> bool:
    """True if the stored credential is a bcrypt hash rather than legacy plaintext."""
    return bool(stored) and stored.startswith(BCRYPT_HASH_PREFIX)


def legacy_password_matches(plain_password: str, stored: str) -> bool:
    """Exact equality against a legacy plaintext credential, compared in constant time."""
    return hmac.compare_digest(plain_password.encode("utf-8"), stored.encode("utf-8"))


def issue_access_token(
    claims: dict[str, Any],
    secret: str | None,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> str:
    """
    Sign claims into a JWT carrying iat (now) and exp (now + ttl).

    Expiry is enforced by decode_access_token, not here.
    Raises ConfigError when no signing secret is configured.
    """
    if not secret:
        raise ConfigError(MISSING_SECRET_MESSAGE)
    now = datetime.now(UTC)
    payload: dict[str, Any] = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str | None,
    algorithm: str = "HS256",
) -> dict[str, Any]:
    """
    Decode and validate JWT signature and expiry; return the payload.

    Raises ConfigError when no signing secret is configured,
    jwt.PyJWTError on an invalid, tampered or expired token.
    """
    if not secret:
        raise ConfigError(MISSING_SECRET_MESSAGE)
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require": ["exp"]},
    )
