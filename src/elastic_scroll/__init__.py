"""
elastic-scroll - Export large Elasticsearch result sets over the scroll API.

Quick Start
-----------
    from elastic_scroll import SearchClient

    client = SearchClient()
    hits = client.scroll_to_end("logs", "event", {"query": {"match_all": {}}})

Configuration
-------------
Set these environment variables (or use a .env file):

    ELASTIC_SERVER              - Cluster hostname (default: localhost)
    ELASTIC_PORT                - Cluster HTTP port (default: 9200)
    ELASTIC_USERNAME            - Basic auth user (optional)
    ELASTIC_PASSWORD            - Basic auth password (optional)
    ELASTIC_CA                  - CA file path or PEM text; switches to https
    ELASTIC_SCROLL_TTL_MINUTES  - Default cursor lifetime (default: 3)

Scroll Workflow
---------------
    async with HttpxTransport(ElasticSettings()) as transport:
        session = ScrollSession(transport, ttl_minutes=5)
        async for page in session.pages("logs", "event", query):
            print(len(page.hits), "of", page.total_matched)

    df = client.scroll_to_dataframe("logs", "event", query)

Exceptions
----------
    ParseError           - Malformed search response
    ProtocolError        - Missing scroll id, or total changed mid-scroll
    ScrollTimeoutError   - Cursor stopped returning hits before the total
    UsageError           - Disallowed call, e.g. a search through basic_get
    AuthenticationError  - Credentials rejected
    TransportError       - HTTP or network failure (see status_code)
"""

__version__ = "0.1.0"

from elastic_scroll.client import SearchClient
from elastic_scroll.config import ElasticSettings
from elastic_scroll.parser import SearchResponse, parse_scroll_id, parse_search_response
from elastic_scroll.scroll import ScrollSession
from elastic_scroll.transport import HttpxTransport, RawResponse, Transport
from elastic_scroll.exceptions import (
    ElasticScrollError,
    ParseError,
    ProtocolError,
    ScrollTimeoutError,
    UsageError,
    AuthenticationError,
    TransportError,
)

__all__ = [
    "SearchClient",
    "ElasticSettings",
    "ScrollSession",
    "SearchResponse",
    "parse_search_response",
    "parse_scroll_id",
    "HttpxTransport",
    "RawResponse",
    "Transport",
    "ElasticScrollError",
    "ParseError",
    "ProtocolError",
    "ScrollTimeoutError",
    "UsageError",
    "AuthenticationError",
    "TransportError",
    "__version__",
]
