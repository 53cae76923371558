"""
Public web search proxy for Nepal travel content (Brave Search).
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from guideconnect.api.schemas.search import SearchResponse, SearchType
from guideconnect.exceptions import GuideConnectException
from guideconnect.services.search_client import BraveSearchClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query("", description="Search query"),
    type: SearchType = Query("general", description="general, destinations, guides or latest"),
    count: int = Query(10, ge=1, le=20),
    offset: int = Query(0, ge=0, le=9),
) -> SearchResponse:
    """
    Search the web for Nepal travel information.

    Returns 503 when no Brave Search API key is configured.
    """
    try:
        async with BraveSearchClient() as client:
            return await client.search(q, search_type=type, count=count, offset=offset)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Search error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to perform search",
        )
