"""
Registration and sign-in routes.

Sign-in returns a signed session token in the body and sets it as an HttpOnly
cookie, so both API clients (Bearer header) and the browser can use it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import get_optional_session
from guideconnect.api.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    SessionUserOut,
)
from guideconnect.api.schemas.common import SuccessResponse
from guideconnect.config import settings
from guideconnect.database import get_async_session
from guideconnect.exceptions import AuthenticationError, GuideConnectException
from guideconnect.security import SessionUser, create_session_token
from guideconnect.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/auth/register", response_model=SessionUserOut, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
) -> SessionUserOut:
    """Create an account. Returns 409 if the email is taken."""
    try:
        user = await UserService.register(db, body.name, body.email, body.password)
        return SessionUserOut(
            email=user.email,
            name=user.name,
            is_admin=user.email == settings.admin_email.lower(),
        )
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error registering user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        )


@router.post("/auth/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> SessionResponse:
    """Exchange credentials for a session token."""
    try:
        user = await UserService.authenticate(db, body.email, body.password)
    except AuthenticationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    except Exception as e:
        logger.error(f"Error signing in: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sign in",
        )

    token, expires_at = create_session_token(user.email, user.name)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    logger.info(f"User signed in: {user.email}")

    return SessionResponse(
        token=token,
        expires_at=expires_at,
        user=SessionUserOut(
            email=user.email,
            name=user.name,
            is_admin=user.email == settings.admin_email.lower(),
        ),
    )


@router.post("/auth/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    response.delete_cookie(settings.session_cookie_name)
    return SuccessResponse()


@router.get("/auth/session", response_model=Optional[SessionUserOut])
async def current_session(
    session: Optional[SessionUser] = Depends(get_optional_session),
) -> Optional[SessionUserOut]:
    """The signed-in user, or null for anonymous visitors."""
    if session is None:
        return None
    return SessionUserOut(email=session.email, name=session.name, is_admin=session.is_admin)
