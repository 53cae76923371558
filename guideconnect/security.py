"""
Password hashing and signed session tokens.

Passwords are hashed with passlib's ``pbkdf2_sha256`` scheme. Session tokens
are HS256 JWTs carrying ``email``, ``name`` and ``exp``, signed with
``SECRET_KEY``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from guideconnect.config import settings
from guideconnect.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with PBKDF2-SHA256 and a random salt."""
    return pwd_context.hash(password)


def verify_password(stored: str, provided: str) -> bool:
    """Check a plain password against a stored hash. Unrecognised hashes never match."""
    try:
        return pwd_context.verify(provided, stored)
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class SessionUser:
    """Identity carried by a verified session token."""

    email: str
    name: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.email.lower() == settings.admin_email.lower()


def create_session_token(
    email: str,
    name: str,
    secret: Optional[str] = None,
    ttl_hours: Optional[int] = None,
    now: Optional[datetime] = None,
) -> tuple[str, datetime]:
    """
    Issue a signed session token.

    Args:
        email: Account email
        name: Display name
        secret: Signing key (defaults to settings.secret_key)
        ttl_hours: Token lifetime (defaults to settings.session_ttl_hours)
        now: Issue time, for tests

    Returns:
        Tuple of (token, expiry datetime in UTC)
    """
    secret = secret or settings.secret_key
    ttl_hours = ttl_hours if ttl_hours is not None else settings.session_ttl_hours
    now = now or datetime.now(timezone.utc)
    expires_at = (now + timedelta(hours=ttl_hours)).replace(microsecond=0)

    token = jwt.encode(
        {"email": email.lower(), "name": name, "exp": expires_at},
        secret,
        algorithm=JWT_ALGORITHM,
    )
    return token, expires_at


def decode_session_token(token: str, secret: Optional[str] = None) -> SessionUser:
    """
    Verify a session token and return its identity.

    Raises:
        AuthenticationError: If the token is malformed, tampered with or expired
    """
    secret = secret or settings.secret_key

    try:
        payload = jwt.decode(
            (token or "").strip(),
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "email"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Session expired")
    except jwt.InvalidSignatureError:
        raise AuthenticationError("Invalid session token signature")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid session token: {e}")

    return SessionUser(
        email=payload["email"],
        name=payload.get("name", ""),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
