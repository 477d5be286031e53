"""Shared pytest fixtures for elastic-scroll tests."""

import json

import pytest

from elastic_scroll.config import ElasticSettings
from elastic_scroll.transport import RawResponse


BASE_URL = "http://es.test:9200"


class FakeTransport:
    """In-memory Transport that replays canned bodies and records every call."""

    def __init__(self, post_bodies=(), get_bodies=()):
        self.post_bodies = list(post_bodies)
        self.get_bodies = list(get_bodies)
        self.calls: list[tuple[str, str, str | None]] = []

    async def get(self, path: str) -> RawResponse:
        self.calls.append(("GET", path, None))
        return RawResponse(status=200, body=self.get_bodies.pop(0))

    async def post(self, path: str, body: str) -> RawResponse:
        self.calls.append(("POST", path, body))
        return RawResponse(status=200, body=self.post_bodies.pop(0))


@pytest.fixture
def mock_settings():
    """Return test settings that don't depend on the environment."""
    return ElasticSettings(server="es.test", port=9200)


@pytest.fixture
def make_page():
    """Build a search payload with `count` numbered hits starting at `start`."""
    def _make_page(count, total, cursor="cursor-1", start=0, took=5):
        data = {
            "took": took,
            "hits": {
                "total": total,
                "hits": [
                    {"_id": str(i), "_source": {"n": i}}
                    for i in range(start, start + count)
                ],
            },
        }
        if cursor is not None:
            data["_scroll_id"] = cursor
        return json.dumps(data)
    return _make_page


@pytest.fixture
def fake_transport_factory():
    """Return the FakeTransport class for building per-test transports."""
    return FakeTransport
