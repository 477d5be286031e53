"""Turn raw search payloads into SearchResponse values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from elastic_scroll.exceptions import ParseError, ProtocolError

Hit = dict[str, Any]


@dataclass(frozen=True)
class SearchResponse:
    """
    One parsed response from the _search or _search/scroll endpoint.

    Attributes:
        hits: Documents in server order
        total_matched: Documents matching the query, fixed for a scroll
        cursor: _scroll_id, present while more pages may exist
        took_millis: Server-side execution time, informational
        aggregations: Aggregation results, passed through as returned
    """

    hits: tuple[Hit, ...]
    total_matched: int
    cursor: Optional[str] = None
    took_millis: Optional[int] = None
    aggregations: Optional[dict[str, Any]] = None


def parse_search_response(payload: Union[str, bytes]) -> SearchResponse:
    """
    Parse a search payload.

    The response is shaped by filter_path, which drops empty arrays, so a
    missing hits.hits inside a present hits object is an empty page.

    Args:
        payload: JSON document as text or bytes

    Returns:
        SearchResponse

    Raises:
        ParseError: If the payload is not JSON or lacks the hits structure
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Malformed search response: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    hits_obj = data.get("hits")
    if not isinstance(hits_obj, dict):
        raise ParseError("Search response has no hits structure")

    hits = hits_obj.get("hits", [])
    if not isinstance(hits, list):
        raise ParseError("hits.hits is not a list")

    return SearchResponse(
        hits=tuple(hits),
        total_matched=_parse_total(hits_obj.get("total")),
        cursor=data.get("_scroll_id") or None,
        took_millis=data.get("took"),
        aggregations=data.get("aggregations"),
    )


def _parse_total(total: Any) -> int:
    # 7.x+ reports {"value": n, "relation": "eq"}, older clusters a bare int
    if isinstance(total, dict):
        total = total.get("value")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ParseError(f"Invalid hits.total: {total!r}")
    return total


def parse_scroll_id(response: SearchResponse) -> str:
    """
    Return the cursor carried by a response.

    Raises:
        ProtocolError: If the response has no _scroll_id
    """
    if not response.cursor:
        raise ProtocolError("no scroll id on scroll response")
    return response.cursor
