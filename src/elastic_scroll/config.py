"""Configuration management via environment variables."""

from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCROLL_TTL_MINUTES = 3


class ElasticSettings(BaseSettings):
    """
    Elasticsearch connection configuration.

    All values are read from environment variables prefixed with ELASTIC_.
    A .env file in the current directory is loaded automatically.

    Attributes:
        server: Hostname of the cluster endpoint
        port: HTTP port of the cluster endpoint
        username: Basic auth user (optional)
        password: Basic auth password (stored securely, optional)
        ca: CA certificate, either a file path or PEM text. Enables https.
        scroll_ttl_minutes: Default lifetime of a scroll cursor between fetches
        timeout: Per-request transport timeout in seconds
        log_level: Level passed to logging configuration
        log_format: "console" or "json"

    Example:
        # Set environment variables:
        # ELASTIC_SERVER=es.internal
        # ELASTIC_PORT=9243
        # ELASTIC_USERNAME=reader
        # ELASTIC_PASSWORD=secret

        settings = ElasticSettings()
        print(settings.base_url)
    """

    server: str = "localhost"
    port: int = 9200
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    ca: Optional[str] = None
    scroll_ttl_minutes: int = Field(default=DEFAULT_SCROLL_TTL_MINUTES, gt=0)
    timeout: float = 30.0
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    model_config = SettingsConfigDict(
        env_prefix="ELASTIC_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def use_tls(self) -> bool:
        """Whether requests go over https (a CA is configured)."""
        return bool(self.ca)

    @property
    def has_credentials(self) -> bool:
        """Whether both halves of basic auth are configured."""
        return bool(self.username) and bool(self.password and self.password.get_secret_value())

    @property
    def base_url(self) -> str:
        """Construct the endpoint base URL from scheme, server and port."""
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{self.server}:{self.port}"
