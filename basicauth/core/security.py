"""
Password hashing and bearer-token handling.

Passwords and security answers are stored as bcrypt hashes. Session tokens
are HS256 JWTs carrying the user id and an expiry.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from basicauth.core.config import get_settings

logger = logging.getLogger(__name__)


def hash_secret(secret: str) -> str:
    """Hash a password or security answer with bcrypt."""
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(secret.encode("utf-8"), salt).decode("utf-8")


def verify_secret(secret: str, hashed: str) -> bool:
    """Check a plain secret against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash, or the secret exceeds 72 bytes
        return False


def create_access_token(user_id: int, now: Optional[datetime] = None) -> str:
    """Issue a signed token for the given user id."""
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "exp": int((issued + timedelta(hours=settings.TOKEN_TTL_HOURS)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Verify signature and expiry of a token.

    Returns:
        The claims dict, or None if the token is invalid or expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None
