"""Endpoint paths, query strings and bodies for search and scroll requests."""

import json
from typing import Any, Optional, Union
from urllib.parse import urlencode

from elastic_scroll.exceptions import UsageError

# Restricts responses to the fields pagination needs
FILTER_PATH = (
    "_scroll_id,took,hits.hits._id,hits.hits._source,hits.total,aggregations.*"
)

QueryBody = Union[str, dict[str, Any]]


def encode_body(body: QueryBody) -> str:
    """Return the query document as JSON text; strings pass through unchanged."""
    if isinstance(body, str):
        return body
    return json.dumps(body)


def format_ttl(minutes: int) -> str:
    """Render a scroll ttl as the engine's time unit string, e.g. "3m"."""
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
        raise UsageError(f"Scroll ttl must be a positive number of minutes, got {minutes!r}")
    return f"{minutes}m"


def _query_string(params: list[tuple[str, str]]) -> str:
    return urlencode(params, safe=",*")


def search_path(
    index: str,
    doc_type: str,
    *,
    count: bool = False,
    scroll_ttl_minutes: Optional[int] = None,
) -> str:
    """
    Build the path for a one-shot search, a count, or a scroll opening.

    Args:
        index: Index (or comma-separated indices) to query
        doc_type: Document type under the index
        count: Mark the request as count-only (aggregations still returned)
        scroll_ttl_minutes: Open a scroll context with this ttl

    Returns:
        Relative path including the query string

    Example:
        search_path("logs", "event", count=True)
        # logs/event/_search?search_type=count&request_cache=true&filter_path=...
    """
    params: list[tuple[str, str]] = []
    if scroll_ttl_minutes is not None:
        params.append(("scroll", format_ttl(scroll_ttl_minutes)))
    if count:
        params.append(("search_type", "count"))
    params.append(("request_cache", "true"))
    params.append(("filter_path", FILTER_PATH))
    return f"{index}/{doc_type}/_search?{_query_string(params)}"


def scroll_page_path(cursor: str, ttl_minutes: int) -> str:
    """Build the path fetching the next page of a scroll, renewing its ttl."""
    params = [
        ("scroll", format_ttl(ttl_minutes)),
        ("scroll_id", cursor),
        ("filter_path", FILTER_PATH),
    ]
    return f"_search/scroll?{_query_string(params)}"
