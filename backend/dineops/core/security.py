"""Password hashing (bcrypt) and signed bearer tokens (PyJWT).

Admins, restaurants and customers all log in with email + password and
receive the same kind of HS256 token; dineops.core.auth decides what a
token's role may do.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from jwt.exceptions import PyJWTError

from dineops.core.config import settings
from dineops.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
REQUIRED_CLAIMS = ["exp", "iat", "sub"]
# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    encoded = password.encode(ENCODING)
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    hashed = bcrypt.hashpw(encoded, bcrypt.gensalt())
    return hashed.decode(ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored bcrypt hash.

    A malformed stored hash or an over-long password counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain_password.encode(ENCODING), hashed_password.encode(ENCODING))
    except ValueError as e:
        logger.warning(f"Stored password hash is unusable: {e}")
        return False


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Sign *data* as a token valid for *expires_delta* (default from settings)."""
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    claims = dict(data)
    claims["iat"] = issued_at
    claims["exp"] = issued_at + lifetime
    claims["jti"] = secrets.token_urlsafe(16)
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Return the claims of a valid token, or None if it is bad or expired."""
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except PyJWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None
