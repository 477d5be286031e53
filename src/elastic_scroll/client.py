"""SearchClient - main entry point for elastic-scroll."""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import Any, Coroutine, Optional, TypeVar

import nest_asyncio
import pandas as pd

from elastic_scroll.config import ElasticSettings
from elastic_scroll.exceptions import UsageError
from elastic_scroll.logging_setup import get_logger
from elastic_scroll.parser import Hit, SearchResponse, parse_search_response
from elastic_scroll.request_builder import QueryBody, encode_body, search_path
from elastic_scroll.scroll import ScrollSession
from elastic_scroll.transport import HttpxTransport, Transport
from elastic_scroll._utils.dataframe import hits_to_dataframe

logger = get_logger(__name__)

T = TypeVar("T")


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from sync code, inside Jupyter too."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    # A loop is already running (notebook); allow re-entering it
    nest_asyncio.apply(loop)
    return loop.run_until_complete(coro)


class SearchClient:
    """
    Client for querying an Elasticsearch cluster.

    Reads configuration from environment variables (ELASTIC_*) automatically.
    Provides both sync and async interfaces.

    Example:
        client = SearchClient()
        hits = client.scroll_to_end("logs", "event", {"query": {"match_all": {}}})

    Async Example:
        async with SearchClient() as client:
            response = await client.search_async("logs", "event", query, label="dashboard")
            print(response.total_matched)

    Attributes:
        settings: ElasticSettings instance with endpoint configuration
    """

    def __init__(
        self,
        settings: Optional[ElasticSettings] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the search client.

        Args:
            settings: Optional ElasticSettings instance. If not provided,
                     settings are loaded from environment variables.
            transport: Optional Transport. Defaults to an HttpxTransport
                       built from settings and closed by this client.
        """
        self.settings = settings or ElasticSettings()
        self._transport = transport
        self._owns_transport = transport is None

    async def __aenter__(self) -> "SearchClient":
        """Async context manager entry."""
        self._get_transport()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.aclose()

    def _get_transport(self) -> Transport:
        """Get or create the transport."""
        if self._transport is None:
            self._transport = HttpxTransport(self.settings)
        return self._transport

    async def aclose(self) -> None:
        """Close the default transport. Injected transports are left open."""
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()  # type: ignore[attr-defined]
            self._transport = None

    def _sync(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run coro, then close the default transport so no client outlives its loop."""
        async def _call() -> T:
            try:
                return await coro
            finally:
                await self.aclose()
        return _run(_call())

    def _session(self, ttl_minutes: Optional[int]) -> ScrollSession:
        ttl = self.settings.scroll_ttl_minutes if ttl_minutes is None else ttl_minutes
        return ScrollSession(self._get_transport(), ttl_minutes=ttl)

    # -------------------------------------------------------------------------
    # Public API: Sync methods (convenience wrappers)
    # -------------------------------------------------------------------------

    def search(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        label: str = "",
    ) -> SearchResponse:
        """
        Run a one-shot search.

        Args:
            index: Index to query
            doc_type: Document type under the index
            body: Query document, as JSON text or a dict
            label: Free text attached to log events, no effect on the request

        Returns:
            SearchResponse with hits, total and aggregations

        Example:
            response = client.search("logs", "event", {"size": 10})
            print(response.hits[0]["_source"])
        """
        return self._sync(self.search_async(index, doc_type, body, label))

    def count(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        label: str = "count",
    ) -> SearchResponse:
        """
        Run a count-only search. Aggregations in the body are still returned.

        Example:
            print(client.count("logs", "event", query).total_matched)
        """
        return self._sync(self.count_async(index, doc_type, body, label))

    def open_scroll(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> SearchResponse:
        """Open a scroll and return its first page (with cursor)."""
        return self._sync(self.open_scroll_async(index, doc_type, body, ttl_minutes))

    def fetch_page(self, cursor: str, ttl_minutes: Optional[int] = None) -> SearchResponse:
        """Fetch the page following cursor."""
        return self._sync(self.fetch_page_async(cursor, ttl_minutes))

    def scroll_to_end(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> list[Hit]:
        """
        Export every document matching body.

        Handles opening the scroll and following cursors automatically.

        Args:
            index: Index to query
            doc_type: Document type under the index
            body: Query document, as JSON text or a dict
            ttl_minutes: Cursor lifetime between fetches
                         (default: settings.scroll_ttl_minutes)

        Returns:
            List of every hit, in page order

        Raises:
            ScrollTimeoutError: If the cursor stalls before all hits arrive
            ProtocolError: If a page lacks a cursor or changes the total

        Example:
            hits = client.scroll_to_end("logs", "event", {"query": {"match_all": {}}})
            print(len(hits))
        """
        return self._sync(self.scroll_to_end_async(index, doc_type, body, ttl_minutes))

    def scroll_to_dataframe(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> pd.DataFrame:
        """
        Export every matching document as a pandas DataFrame.

        Example:
            df = client.scroll_to_dataframe("logs", "event", query)
            print(df.head())
        """
        return self._sync(self.scroll_to_dataframe_async(index, doc_type, body, ttl_minutes))

    def basic_get(self, path: str, verbose: bool = False) -> str:
        """
        GET an administrative endpoint ('/', _cat, _cluster, ...).

        Raises:
            UsageError: If path is a search endpoint
        """
        return self._sync(self.basic_get_async(path, verbose))

    # -------------------------------------------------------------------------
    # Public API: Async methods
    # -------------------------------------------------------------------------

    async def search_async(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        label: str = "",
    ) -> SearchResponse:
        """Async version of search()."""
        return await self._execute_search(search_path(index, doc_type), index, body, label)

    async def count_async(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        label: str = "count",
    ) -> SearchResponse:
        """Async version of count()."""
        path = search_path(index, doc_type, count=True)
        return await self._execute_search(path, index, body, label)

    async def open_scroll_async(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> SearchResponse:
        """Async version of open_scroll()."""
        return await self._session(ttl_minutes).open(index, doc_type, body)

    async def fetch_page_async(
        self, cursor: str, ttl_minutes: Optional[int] = None
    ) -> SearchResponse:
        """Async version of fetch_page()."""
        return await self._session(ttl_minutes).fetch_page(cursor)

    async def scroll_to_end_async(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> list[Hit]:
        """Async version of scroll_to_end()."""
        return await self._session(ttl_minutes).drain_all(index, doc_type, body)

    async def scroll_to_dataframe_async(
        self,
        index: str,
        doc_type: str,
        body: QueryBody,
        ttl_minutes: Optional[int] = None,
    ) -> pd.DataFrame:
        """Async version of scroll_to_dataframe()."""
        hits = await self.scroll_to_end_async(index, doc_type, body, ttl_minutes)
        return hits_to_dataframe(hits)

    async def basic_get_async(self, path: str, verbose: bool = False) -> str:
        """
        Async version of basic_get().

        Args:
            path: Endpoint path, e.g. "_cluster/health" or "_cat/indices"
            verbose: Append ?v, which adds column headers to cat APIs

        Returns:
            Raw response body text

        Raises:
            UsageError: If path contains _search; no request is sent
        """
        if "_search" in path.lower():
            raise UsageError("Basic get cannot perform search.")
        if verbose:
            path = path + ("&v" if "?" in path else "?v")

        raw = await self._get_transport().get(path)
        return raw.body

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    async def _execute_search(
        self,
        path: str,
        index: str,
        body: QueryBody,
        label: str,
    ) -> SearchResponse:
        """POST a search body to path and parse the response, logging timing."""
        log = logger.bind(index=index, label=label, search_id=str(uuid.uuid1()))
        log.debug("search.start")
        started = time.monotonic()

        raw = await self._get_transport().post(path, encode_body(body))
        response = parse_search_response(raw.body)

        log.debug(
            "search.complete",
            took_ms=response.took_millis,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
            hits=len(response.hits),
            total=response.total_matched,
        )
        return response
