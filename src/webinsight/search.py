"""Google Custom Search client for looking up real result pages.

Standalone utility. Scans never call it; competitor analysis is synthesized.
"""

import logging
import os
from typing import Optional

import httpx

from . import __version__
from . import config as cfg
from .models import SearchResult


logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": f"WebInsight/{__version__}",
    "Accept": "application/json",
}


class SearchError(RuntimeError):
    """Raised when search results cannot be fetched."""


def credentials() -> tuple[Optional[str], Optional[str]]:
    """API key and search engine id from the environment."""
    return os.getenv("GOOGLE_API_KEY"), os.getenv("SEARCH_ENGINE_ID")


def is_configured() -> bool:
    api_key, engine_id = credentials()
    return bool(api_key and engine_id)


def parse_items(items: list[dict]) -> list[SearchResult]:
    """Convert Custom Search `items` into ranked results."""
    results = []
    for position, item in enumerate(items, 1):
        metatags = (item.get("pagemap") or {}).get("metatags") or [{}]
        results.append(SearchResult(
            position=position,
            url=item.get("link", ""),
            title=item.get("title", ""),
            description=item.get("snippet", ""),
            is_sponsored=metatags[0].get("og:type") == "paid_listing",
        ))
    return results


def get_search_results(
    query: str,
    *,
    api_key: Optional[str] = None,
    engine_id: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> list[SearchResult]:
    """Fetch the first page of US search results for `query`.

    Args:
        query: Search terms
        api_key: Google API key (default: GOOGLE_API_KEY)
        engine_id: Programmable search engine id (default: SEARCH_ENGINE_ID)
        client: Optional httpx client to send the request with

    Returns:
        Results in rank order; empty if the engine returned none

    Raises:
        SearchError: If credentials are missing or the request fails
    """
    env_key, env_engine = credentials()
    api_key = api_key or env_key
    engine_id = engine_id or env_engine
    if not api_key or not engine_id:
        raise SearchError("Google API credentials not configured")

    params = {
        "key": api_key,
        "cx": engine_id,
        "q": query,
        "num": cfg.SEARCH_RESULTS,
        "gl": "us",
        "safe": "active",
    }

    owns_client = client is None
    if owns_client:
        client = httpx.Client(headers=DEFAULT_HEADERS, timeout=cfg.SEARCH_TIMEOUT)

    try:
        response = client.get(cfg.SEARCH_API_URL, params=params)
        response.raise_for_status()
        data = response.json()
    except httpx.TimeoutException as e:
        logger.error("Search for %r timed out", query)
        raise SearchError(f"Timeout after {cfg.SEARCH_TIMEOUT}s") from e
    except httpx.HTTPStatusError as e:
        logger.error("Search for %r failed: HTTP %d", query, e.response.status_code)
        raise SearchError(f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        logger.error("Search for %r failed: %s", query, e)
        raise SearchError(f"Request failed: {e}") from e
    except ValueError as e:
        raise SearchError(f"Invalid response: {e}") from e
    finally:
        if owns_client:
            client.close()

    items = data.get("items") or []
    logger.info("Search for %r returned %d results", query, len(items))
    return parse_items(items)
