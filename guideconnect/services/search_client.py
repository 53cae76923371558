"""
Brave Search API client for Nepal travel searches.

Queries are scoped to Nepal (" Nepal" is appended unless already present) and
can be narrowed to destinations, guides or recent content. Transient failures
(HTTP 429, 5xx and transport errors) are retried with exponential backoff.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from guideconnect.api.schemas.search import SearchResponse, SearchResult, SearchType
from guideconnect.config import settings
from guideconnect.exceptions import SearchApiKeyMissingError, SearchServiceException

logger = logging.getLogger(__name__)

# Query suffixes per search type
TYPE_MODIFIERS: Dict[str, str] = {
    "destinations": " destinations tourism travel",
    "guides": " travel guides tours trekking",
}


def build_query(query: str, search_type: SearchType = "general") -> str:
    """
    Build the provider query for a search type.

    Examples:
        >>> build_query("Everest", "destinations")
        'Everest destinations tourism travel Nepal'
        >>> build_query("Kathmandu nepal food")
        'Kathmandu nepal food'
    """
    scoped = f"{query}{TYPE_MODIFIERS.get(search_type, '')}"
    if "nepal" in scoped.lower():
        return scoped
    return f"{scoped} Nepal"


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return code == 429 or code >= 500
    return False


class BraveSearchClient:
    """
    Thin async wrapper around the Brave web search endpoint.

    Example:
        >>> async with BraveSearchClient(api_key="...") as client:
        ...     response = await client.search("Annapurna", search_type="guides")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.brave_search_api_key
        if not self.api_key:
            raise SearchApiKeyMissingError()

        self.base_url = base_url or settings.brave_search_url
        self.max_retries = max_retries or settings.search_max_retries
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout or settings.search_timeout,
            headers={
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
                "X-Subscription-Token": self.api_key,
            },
        )

    async def __aenter__(self) -> "BraveSearchClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(
                    self.base_url,
                    params=params,
                    headers={"X-Subscription-Token": self.api_key},
                )
                response.raise_for_status()
                return response.json()
        return {}

    async def search(
        self,
        query: str,
        search_type: SearchType = "general",
        count: int = 10,
        offset: int = 0,
    ) -> SearchResponse:
        """
        Run a web search.

        Args:
            query: User query
            search_type: general, destinations, guides or latest
            count: Number of results (provider maximum is 20)
            offset: Result page offset

        Returns:
            SearchResponse with normalized results

        Raises:
            SearchServiceException: provider error after retries
        """
        provider_query = build_query(query, search_type)
        params: Dict[str, Any] = {
            "q": provider_query,
            "count": count,
            "offset": offset,
            "search_lang": "en",
            "safesearch": "moderate",
        }
        if search_type == "latest":
            params["freshness"] = "past1m"

        try:
            payload = await self._get(params)
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Brave Search returned {e.response.status_code} for '{provider_query}': {e.response.text[:200]}"
            )
            raise SearchServiceException(
                f"Search provider error: {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Brave Search request failed for '{provider_query}': {e}")
            raise SearchServiceException(f"Search provider unreachable: {e}") from e

        results = []
        for item in (payload.get("web") or {}).get("results", []):
            thumbnail = item.get("thumbnail") or {}
            results.append(
                SearchResult(
                    title=item.get("title", ""),
                    url=item.get("url", ""),
                    description=item.get("description"),
                    age=item.get("age"),
                    thumbnail=thumbnail.get("src"),
                )
            )

        logger.info(f"Search '{provider_query}' ({search_type}) returned {len(results)} results")
        return SearchResponse(query=provider_query, type=search_type, results=results, count=len(results))
