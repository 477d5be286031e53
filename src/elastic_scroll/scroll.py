"""Scroll sessions: draining a large result set page by page."""

from __future__ import annotations

from typing import AsyncIterator, Optional

from elastic_scroll.config import DEFAULT_SCROLL_TTL_MINUTES
from elastic_scroll.exceptions import ProtocolError, ScrollTimeoutError
from elastic_scroll.logging_setup import get_logger
from elastic_scroll.parser import Hit, SearchResponse, parse_scroll_id, parse_search_response
from elastic_scroll.request_builder import (
    QueryBody,
    encode_body,
    format_ttl,
    scroll_page_path,
    search_path,
)
from elastic_scroll.transport import Transport

logger = get_logger(__name__)


class ScrollSession:
    """
    One logical export over the scroll protocol.

    The session opens a scroll context, then follows the cursor from each
    response to the next page until the number of hits collected reaches
    the total reported when the scroll was opened. Each fetch replaces the
    cursor; the previous one is never reused.

    A session belongs to the call that created it. The ttl is fixed at
    construction, so concurrent sessions never affect each other.

    Attributes:
        transport: Transport used for every request
        ttl_minutes: How long the server keeps the cursor alive between fetches
        cursor: Most recent cursor, None before the scroll is opened
        accumulated: Hits collected by drain_all so far

    Example:
        session = ScrollSession(transport, ttl_minutes=5)
        hits = await session.drain_all("logs", "event", {"query": {"match_all": {}}})

        # Stop early at a page boundary
        async for page in session.pages("logs", "event", query):
            handle(page.hits)
            if enough():
                break
    """

    def __init__(self, transport: Transport, ttl_minutes: int = DEFAULT_SCROLL_TTL_MINUTES):
        format_ttl(ttl_minutes)
        self.transport = transport
        self.ttl_minutes = ttl_minutes
        self.cursor: Optional[str] = None
        self.accumulated: list[Hit] = []

    async def open(self, index: str, doc_type: str, body: QueryBody) -> SearchResponse:
        """
        Issue the search that opens the scroll context.

        Args:
            index: Index to query
            doc_type: Document type under the index
            body: Query document, as JSON text or a dict

        Returns:
            First page of results, carrying the first cursor
        """
        path = search_path(index, doc_type, scroll_ttl_minutes=self.ttl_minutes)
        logger.debug("scroll.open", index=index, ttl=format_ttl(self.ttl_minutes))
        raw = await self.transport.post(path, encode_body(body))
        response = parse_search_response(raw.body)
        logger.debug("scroll.response", hits=len(response.hits), took_ms=response.took_millis)
        self.cursor = response.cursor
        return response

    async def fetch_page(self, cursor: str) -> SearchResponse:
        """
        Fetch the page following cursor and renew the scroll ttl.

        Raises:
            ProtocolError: If cursor is empty
        """
        if not cursor:
            raise ProtocolError("no scroll id on scroll response")
        logger.debug("scroll.fetch", cursor_tail=cursor[-8:])
        raw = await self.transport.get(scroll_page_path(cursor, self.ttl_minutes))
        response = parse_search_response(raw.body)
        logger.debug("scroll.response", hits=len(response.hits), took_ms=response.took_millis)
        self.cursor = response.cursor
        return response

    @staticmethod
    def is_complete(accumulated: int, total: int) -> bool:
        """Whether a scroll that has seen `accumulated` hits out of `total` is done.

        Overshooting the total counts as done.
        """
        return accumulated >= total

    async def pages(
        self, index: str, doc_type: str, body: QueryBody
    ) -> AsyncIterator[SearchResponse]:
        """
        Async generator yielding every page of the scroll, first page included.

        Leaving the loop early abandons the scroll; the server drops the
        context once its ttl elapses.

        Yields:
            SearchResponse for each page, in server order

        Raises:
            ScrollTimeoutError: If a page is empty while hits are still expected
            ProtocolError: If a page lacks a cursor while hits are still
                           expected, or reports a different total
        """
        page = await self.open(index, doc_type, body)
        total = page.total_matched
        seen = len(page.hits)
        logger.debug(
            "scroll.page",
            hits=len(page.hits),
            accumulated=seen,
            total=total,
            took_ms=page.took_millis,
        )
        yield page

        while not self.is_complete(seen, total):
            if not page.hits:
                raise ScrollTimeoutError("scroll request timed out")

            page = await self.fetch_page(parse_scroll_id(page))
            if page.total_matched != total:
                raise ProtocolError(
                    f"total changed mid-scroll: opened with {total}, page reports {page.total_matched}"
                )

            seen += len(page.hits)
            logger.debug(
                "scroll.page",
                hits=len(page.hits),
                accumulated=seen,
                total=total,
                took_ms=page.took_millis,
            )
            yield page

    async def drain_all(self, index: str, doc_type: str, body: QueryBody) -> list[Hit]:
        """
        Collect every hit of the scroll.

        Args:
            index: Index to query
            doc_type: Document type under the index
            body: Query document, as JSON text or a dict

        Returns:
            All hits in the order the pages were returned

        Raises:
            ScrollTimeoutError: If the cursor stalls before the total is reached
            ProtocolError: If the server breaks the scroll protocol
            ParseError: If any page is malformed
        """
        self.accumulated = []
        async for page in self.pages(index, doc_type, body):
            self.accumulated.extend(page.hits)
        return self.accumulated
