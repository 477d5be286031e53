"""Exception hierarchy for elastic-scroll."""


class ElasticScrollError(Exception):
    """Base exception for all elastic-scroll errors."""
    pass


class ParseError(ElasticScrollError):
    """
    A response payload could not be turned into a SearchResponse.

    Raised for malformed JSON and for documents missing the hits
    structure. An empty hit list is not an error.
    """
    pass


class ProtocolError(ElasticScrollError):
    """
    A response broke the scroll protocol.

    Common causes:
    - A page with more documents pending carried no _scroll_id
    - The total hit count changed between pages of one scroll
    """
    pass


class ScrollTimeoutError(ElasticScrollError, TimeoutError):
    """
    A scroll page came back empty before the declared total was reached.

    Usually the cursor expired server-side. Consider:
    - Increasing the scroll ttl
    - Narrowing the query
    """
    pass


class UsageError(ElasticScrollError, ValueError):
    """
    The call itself is not allowed, e.g. a search routed through basic_get.

    No request is sent when this is raised.
    """
    pass


class AuthenticationError(ElasticScrollError):
    """
    The cluster rejected the configured credentials (HTTP 401/403).

    Check ELASTIC_USERNAME and ELASTIC_PASSWORD.
    """
    pass


class TransportError(ElasticScrollError):
    """
    A request failed at the HTTP level.

    The status_code attribute holds the HTTP status, or None when the
    request never got a response (connection refused, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
