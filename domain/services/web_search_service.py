"""Google Custom Search JSON API client.

Documentation: https://developers.google.com/custom-search/v1/reference/rest/v1/cse/list

The client never raises. Missing credentials, HTTP errors and transport
failures come back as a soft-failure ``WebSearchOutcome`` holding a single
synthetic result, so an LLM calling the search tool always receives a
well-formed result list.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlsplit

import httpx

from config.settings import get_settings
from domain.entities.web_search import (PLACEHOLDER_LINK, LinkMode,
                                        SearchQuery, SearchResultItem,
                                        WebSearchOutcome)
from domain.services.messages import translate

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
# The API rejects num > 10
MAX_RESULTS_PER_REQUEST = 10


def to_homepage(url: str) -> str:
    """Reduce a URL to scheme + hostname, e.g. ``https://example.com``.

    Returns an empty string when the URL has no scheme or host.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return ""
    if not parts.scheme or not hostname:
        return ""
    return f"{parts.scheme}://{hostname}"


def _map_item(item: Dict[str, Any], link_mode: LinkMode) -> SearchResultItem:
    link = item.get("link") or PLACEHOLDER_LINK
    if link_mode == LinkMode.HOMEPAGE and link != PLACEHOLDER_LINK:
        link = to_homepage(link)
    return SearchResultItem(
        title=item.get("title") or NOT_AVAILABLE,
        link=link,
        snippet=item.get("snippet") or item.get("htmlSnippet") or NOT_AVAILABLE,
    )


def normalize_items(
    items: Iterable[Dict[str, Any]], num_results: int, link_mode: LinkMode = LinkMode.HOMEPAGE
) -> List[SearchResultItem]:
    """Map provider items, drop the ones without a usable link and truncate.

    Provider order is preserved.
    """
    mapped = [_map_item(item, link_mode) for item in items if isinstance(item, dict)]
    usable = [result for result in mapped if result.link and result.link != PLACEHOLDER_LINK]
    return usable[:num_results]


def _extract_error_message(body: str) -> Optional[str]:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


class GoogleCustomSearchClient:
    """Async client for the Custom Search JSON API.

    Usage:
        client = GoogleCustomSearchClient(api_key="...", engine_id="...")
        outcome = await client.search(SearchQuery("LED lighting efficiency"))
        for item in outcome.results:
            print(item.title, item.link)
    """

    ENDPOINT = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        engine_id: Optional[str] = None,
        link_mode: LinkMode = LinkMode.HOMEPAGE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.engine_id = engine_id
        self.link_mode = LinkMode(link_mode)
        self.timeout = timeout
        self._transport = transport

        if not self.api_key:
            logger.warning("SEARCH_API_KEY is not set. Web search will not function.")
        if not self.engine_id:
            logger.warning("SEARCH_ENGINE_ID is not set. Web search will not function.")

    def build_params(self, query: SearchQuery) -> Dict[str, str]:
        """Query string for one search request (includes the API key)."""
        num = max(1, min(query.num_results, MAX_RESULTS_PER_REQUEST))
        params = {
            "key": self.api_key or "",
            "cx": self.engine_id or "",
            "q": query.query,
            "num": str(num),
        }
        # English is the provider default
        if query.language_code and query.language_code != "en":
            params["lr"] = f"lang_{query.language_code}"
        return params

    async def search(self, query: SearchQuery) -> WebSearchOutcome:
        """Run one search. Never raises."""
        language = query.language_code
        logger.info(
            f"Web search requested: query={query.query!r} num_results={query.num_results} language={language}"
        )

        if not self.api_key:
            logger.error("Google Custom Search API key (SEARCH_API_KEY) is not configured")
            return WebSearchOutcome.soft_failure(
                "missing_api_key",
                title=translate("search_missing_api_key_title", language),
                snippet=translate("search_missing_api_key_snippet", language),
            )
        if not self.engine_id:
            logger.error("Google Custom Search engine ID (SEARCH_ENGINE_ID) is not configured")
            return WebSearchOutcome.soft_failure(
                "missing_engine_id",
                title=translate("search_missing_engine_id_title", language),
                snippet=translate("search_missing_engine_id_snippet", language),
            )

        params = self.build_params(query)
        loggable = {k: v for k, v in params.items() if k != "key"}

        try:
            logger.debug(f"Calling Custom Search API with params {loggable}")
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    self.ENDPOINT, params=params, headers={"Accept": "application/json"}
                )
            logger.info(f"Custom Search API responded with status {response.status_code}")

            if not response.is_success:
                logger.error(f"Custom Search API error ({response.status_code}): {response.text[:500]}")
                snippet = translate("search_http_error_snippet", language, status=response.status_code)
                detail = _extract_error_message(response.text)
                if detail:
                    snippet += translate("search_http_error_detail", language, detail=detail)
                return WebSearchOutcome.soft_failure(
                    "http_error",
                    title=translate("search_http_error_title", language),
                    snippet=snippet,
                )

            data = response.json()
            items = data.get("items") if isinstance(data, dict) else None
            if not items:
                logger.info("No items found in Custom Search API response")
                return WebSearchOutcome.ok([])

            results = normalize_items(items, query.num_results, self.link_mode)
            logger.info(f"Mapped {len(items)} provider items to {len(results)} results")
            return WebSearchOutcome.ok(results)

        except Exception as e:
            logger.error(f"Error during web search execution: {str(e)}")
            return WebSearchOutcome.soft_failure(
                "execution_error",
                title=translate("search_execution_error_title", language),
                snippet=translate("search_execution_error_snippet", language, error=str(e)),
            )


def get_web_search_client() -> GoogleCustomSearchClient:
    """Web search client factory."""
    settings = get_settings()
    try:
        link_mode = LinkMode(settings.search_link_mode)
    except ValueError:
        logger.warning(f"Unknown SEARCH_LINK_MODE {settings.search_link_mode!r}, using homepage links")
        link_mode = LinkMode.HOMEPAGE
    return GoogleCustomSearchClient(
        api_key=settings.search_api_key,
        engine_id=settings.search_engine_id,
        link_mode=link_mode,
        timeout=settings.search_timeout,
    )
