"""Tests for elastic_scroll.auth module."""

import base64
import re
import ssl
from pathlib import Path

import certifi
import httpx
import pytest

from elastic_scroll.auth import build_auth, build_verify
from elastic_scroll.config import ElasticSettings


class TestBuildAuth:
    """Tests for basic auth construction."""

    def test_returns_none_without_credentials(self):
        """No credentials means no auth."""
        assert build_auth(ElasticSettings()) is None

    def test_username_alone_is_ignored(self):
        """A username without a password does not enable auth."""
        assert build_auth(ElasticSettings(username="reader")) is None

    def test_empty_password_is_ignored(self):
        """An empty password does not enable auth."""
        assert build_auth(ElasticSettings(username="reader", password="")) is None

    def test_builds_basic_auth_header(self):
        """Both credentials produce a Basic Authorization header."""
        auth = build_auth(ElasticSettings(username="reader", password="pw"))
        request = httpx.Request("GET", "http://es.test:9200/")

        authed = next(auth.sync_auth_flow(request))

        expected = "Basic " + base64.b64encode(b"reader:pw").decode()
        assert authed.headers["Authorization"] == expected


class TestBuildVerify:
    """Tests for TLS verification settings."""

    def test_defaults_without_ca(self):
        """No CA leaves httpx's default verification."""
        assert build_verify(ElasticSettings()) is True

    def test_loads_ca_file(self):
        """A CA path is loaded as a file."""
        context = build_verify(ElasticSettings(ca=certifi.where()))

        assert isinstance(context, ssl.SSLContext)
        assert context.cert_store_stats()["x509_ca"] > 0

    def test_loads_ca_text(self):
        """PEM text is loaded directly."""
        bundle = Path(certifi.where()).read_text(encoding="utf-8")
        pem = re.search(
            r"-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----", bundle, re.DOTALL
        ).group(0)

        context = build_verify(ElasticSettings(ca=pem))

        assert isinstance(context, ssl.SSLContext)
        assert context.cert_store_stats()["x509_ca"] > 0

    def test_missing_ca_file_raises(self, tmp_path):
        """A CA path that does not exist fails loudly."""
        with pytest.raises(FileNotFoundError):
            build_verify(ElasticSettings(ca=str(tmp_path / "missing.pem")))
