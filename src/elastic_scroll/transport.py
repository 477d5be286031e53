"""HTTP transport for the cluster endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from elastic_scroll.auth import build_auth, build_verify
from elastic_scroll.config import ElasticSettings
from elastic_scroll.exceptions import AuthenticationError, TransportError
from elastic_scroll.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status and body text of a single request."""

    status: int
    body: str


class Transport(Protocol):
    """
    Anything that can issue a GET or POST against the configured endpoint.

    Paths are relative to the endpoint base URL and may carry a query string.
    """

    async def get(self, path: str) -> RawResponse:
        ...

    async def post(self, path: str, body: str) -> RawResponse:
        ...


class HttpxTransport:
    """
    Transport backed by httpx.AsyncClient.

    The base URL, TLS and basic auth come from ElasticSettings. Every request
    is sent with Content-Type: application/json.

    Example:
        async with HttpxTransport(ElasticSettings()) as transport:
            raw = await transport.get("_cluster/health")
            print(raw.body)
    """

    def __init__(self, settings: ElasticSettings):
        self.settings = settings
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpxTransport":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                auth=build_auth(self.settings),
                verify=build_verify(self.settings),
                headers={"Content-Type": "application/json"},
                timeout=self.settings.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying httpx client, if one was opened."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, path: str) -> RawResponse:
        """Issue a GET for path."""
        logger.debug("http.request", method="GET", path_tail=path[-5:])
        return await self._send("GET", path)

    async def post(self, path: str, body: str) -> RawResponse:
        """Issue a POST for path with a JSON body."""
        logger.debug("http.request", method="POST", path=path, body=body)
        return await self._send("POST", path, body)

    async def _send(self, method: str, path: str, body: Optional[str] = None) -> RawResponse:
        """
        Send one request and map failures onto the exception hierarchy.

        Raises:
            AuthenticationError: On HTTP 401 or 403
            TransportError: On any other HTTP error or a network failure
        """
        client = self._get_client()
        try:
            response = await client.request(method, path.lstrip("/"), content=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (401, 403):
                raise AuthenticationError(
                    f"Authentication failed: {status} - {e.response.text}"
                ) from e
            raise TransportError(
                f"{method} {path} failed: {status} - {e.response.text}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} request failed: {e}") from e

        return RawResponse(status=response.status_code, body=response.text)
