"""
Shared FastAPI dependencies: session authentication and admin checks.

These run before the database session is used, so an unauthenticated request
is rejected without touching the database.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from guideconnect.config import settings
from guideconnect.exceptions import AuthenticationError
from guideconnect.security import SessionUser, decode_session_token

logger = logging.getLogger(__name__)


def _extract_token(request: Request) -> Optional[str]:
    """Read the token from ``Authorization: Bearer`` or the session cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_session(request: Request) -> Optional[SessionUser]:
    """Return the current session, or None for anonymous visitors."""
    token = _extract_token(request)
    if not token:
        return None
    try:
        return decode_session_token(token)
    except AuthenticationError as e:
        logger.info(f"Rejected session token on {request.url.path}: {e}")
        return None


async def require_session(
    session: Optional[SessionUser] = Depends(get_optional_session),
) -> SessionUser:
    """Require an authenticated session (401 otherwise)."""
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return session


async def require_admin(session: SessionUser = Depends(require_session)) -> SessionUser:
    """Require the administrator account (403 for other users)."""
    if not session.is_admin:
        logger.warning(f"Non-admin user {session.email} attempted an admin action")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return session
