"""Basic authentication and TLS material for the cluster endpoint."""

import ssl
from typing import Optional

import httpx

from elastic_scroll.config import ElasticSettings


def build_auth(settings: ElasticSettings) -> Optional[httpx.BasicAuth]:
    """
    Return basic auth for the transport, or None when no credentials are set.

    Both username and password must be configured; a lone username is
    ignored rather than sent with an empty password.

    Args:
        settings: ElasticSettings instance with optional credentials

    Returns:
        httpx.BasicAuth instance or None

    Example:
        auth = build_auth(ElasticSettings(username="reader", password="pw"))
        async with httpx.AsyncClient(auth=auth) as client:
            ...
    """
    if not settings.has_credentials:
        return None
    return httpx.BasicAuth(
        settings.username,  # type: ignore[arg-type]
        settings.password.get_secret_value(),  # type: ignore[union-attr]
    )


def build_verify(settings: ElasticSettings) -> ssl.SSLContext | bool:
    """
    Return the TLS verification setting for the transport.

    The ca setting may hold either a path to a PEM file or the PEM text
    itself. Without a CA the transport talks plain http and this returns True
    (httpx default verification, unused).
    """
    if not settings.ca:
        return True
    if settings.ca.lstrip().startswith("-----BEGIN"):
        return ssl.create_default_context(cadata=settings.ca)
    return ssl.create_default_context(cafile=settings.ca)
