"""
Public site pages rendered with Jinja2 templates.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import get_optional_session
from guideconnect.database import get_async_session
from guideconnect.exceptions import NotFoundError
from guideconnect.security import SessionUser
from guideconnect.services.destination_service import DestinationService
from guideconnect.services.guide_service import GuideService
from guideconnect.services.notification_service import NotificationService
from guideconnect.services.review_service import ReviewService

logger = logging.getLogger(__name__)

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[3] / "templates"))

router = APIRouter()

PAGE_SIZE = 12


def _render(request: Request, template: str, context: dict, status_code: int = 200):
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def _not_found(request: Request, message: str, session: Optional[SessionUser]):
    return _render(
        request,
        "error.html",
        {"page_title": "Not found", "message": message, "session": session},
        status_code=404,
    )


@router.get("/")
async def home(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    """Landing page with featured destinations and top guides."""
    try:
        destinations = await DestinationService.featured_destinations(db, limit=6)
        guides = await GuideService.top_rated(db, limit=4, available_only=True)
        error = None
    except Exception as e:
        logger.error(f"Error loading home page: {e}", exc_info=True)
        destinations, guides, error = [], [], "Content is temporarily unavailable."

    return _render(
        request,
        "home.html",
        {
            "page_title": "Discover Nepal",
            "destinations": destinations,
            "guides": guides,
            "session": session,
            "error": error,
        },
    )


@router.get("/destinations")
async def destinations_page(
    request: Request,
    search: Optional[str] = None,
    difficulty: Optional[str] = None,
    page: int = 1,
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    page = max(page, 1)
    try:
        destinations, total = await DestinationService.list_destinations(
            db,
            search=search or None,
            difficulty=difficulty or None,
            limit=PAGE_SIZE,
            offset=(page - 1) * PAGE_SIZE,
        )
        error = None
    except Exception as e:
        logger.error(f"Error loading destinations page: {e}", exc_info=True)
        destinations, total, error = [], 0, "Destinations are temporarily unavailable."

    return _render(
        request,
        "destinations.html",
        {
            "page_title": "Destinations",
            "destinations": destinations,
            "total": total,
            "page": page,
            "has_next": page * PAGE_SIZE < total,
            "search": search or "",
            "difficulty": difficulty or "",
            "session": session,
            "error": error,
        },
    )


@router.get("/destinations/{destination_id}")
async def destination_detail(
    request: Request,
    destination_id: int,
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    try:
        destination = await DestinationService.get_destination(db, destination_id)
    except NotFoundError as e:
        return _not_found(request, e.message, session)

    reviews, _ = await ReviewService.list_reviews(db, destination_id=destination_id, limit=5)
    return _render(
        request,
        "destination_detail.html",
        {
            "page_title": destination.name,
            "destination": destination,
            "reviews": reviews,
            "session": session,
        },
    )


@router.get("/guides")
async def guides_page(
    request: Request,
    search: Optional[str] = None,
    language: Optional[str] = None,
    page: int = 1,
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    page = max(page, 1)
    try:
        guides, total = await GuideService.list_guides(
            db,
            search=search or None,
            language=language or None,
            limit=PAGE_SIZE,
            offset=(page - 1) * PAGE_SIZE,
        )
        languages = await GuideService.languages(db)
        error = None
    except Exception as e:
        logger.error(f"Error loading guides page: {e}", exc_info=True)
        guides, total, languages, error = [], 0, [], "Guides are temporarily unavailable."

    return _render(
        request,
        "guides.html",
        {
            "page_title": "Local Guides",
            "guides": guides,
            "total": total,
            "languages": languages,
            "page": page,
            "has_next": page * PAGE_SIZE < total,
            "search": search or "",
            "language": language or "",
            "session": session,
            "error": error,
        },
    )


@router.get("/guides/{guide_id}")
async def guide_detail(
    request: Request,
    guide_id: int,
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    try:
        guide = await GuideService.get_guide(db, guide_id)
    except NotFoundError as e:
        return _not_found(request, e.message, session)

    reviews, _ = await ReviewService.list_reviews(db, guide_id=guide_id, limit=5)
    return _render(
        request,
        "guide_detail.html",
        {"page_title": guide.name, "guide": guide, "reviews": reviews, "session": session},
    )


@router.get("/community")
async def community(request: Request, session: Optional[SessionUser] = Depends(get_optional_session)):
    return _render(request, "community.html", {"page_title": "Community", "session": session})


@router.get("/contact")
async def contact_form(request: Request, session: Optional[SessionUser] = Depends(get_optional_session)):
    return _render(
        request,
        "contact.html",
        {"page_title": "Contact Us", "session": session, "sent": False, "form": {}},
    )


@router.post("/contact")
async def contact_submit(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    subject: str = Form(...),
    message: str = Form(...),
    db: AsyncSession = Depends(get_async_session),
    session: Optional[SessionUser] = Depends(get_optional_session),
):
    """Store a contact message as an admin notification."""
    form = {"name": name, "email": email, "subject": subject, "message": message}
    if len(name.strip()) < 2 or "@" not in email or not subject.strip() or len(message.strip()) < 10:
        return _render(
            request,
            "contact.html",
            {
                "page_title": "Contact Us",
                "session": session,
                "sent": False,
                "form": form,
                "error": "Please fill in every field (message at least 10 characters).",
            },
            status_code=400,
        )

    try:
        await NotificationService.notify_contact_message(db, name.strip(), email.strip(), subject.strip())
        logger.info(f"Contact message received from {email}")
        error = None
    except Exception as e:
        logger.error(f"Error storing contact message: {e}", exc_info=True)
        error = "Your message could not be sent. Please try again later."

    return _render(
        request,
        "contact.html",
        {"page_title": "Contact Us", "session": session, "sent": error is None, "form": {}, "error": error},
    )
