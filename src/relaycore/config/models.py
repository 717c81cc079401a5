# src/relaycore/config/models.py
"""
Pydantic models for the relay configuration snapshot.

Each section is a frozen model with primitive fields. The models only coerce
types; range and shape checks are done by
:mod:`relaycore.config.validator` so that every violation can be reported in
one pass.

Structure:
    AppConfig
    ├── server       ServerConfig
    ├── keys         KeysConfig
    ├── upstream     UpstreamConfig
    ├── auth         AuthConfig
    ├── cors         CORSConfig
    ├── performance  PerformanceConfig
    └── log          LogConfig
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_BASE_URL = "https://api.openai.com"
DEFAULT_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ServerConfig(_Section):
    """HTTP server bind address and timeouts (seconds)."""

    port: int = Field(default=7860, description="Listen port")
    host: str = Field(default="0.0.0.0", description="Bind address")
    read_timeout: int = Field(default=120, description="Request read timeout")
    write_timeout: int = Field(default=1800, description="Response write timeout")
    idle_timeout: int = Field(default=120, description="Keep-alive idle timeout")
    graceful_shutdown_timeout: int = Field(default=60, description="Drain period on shutdown")


class KeysConfig(_Section):
    """
    API key pool settings.

    ``api_keys`` may be empty here; the key pool rejects an empty pool itself.
    """

    api_keys: List[str] = Field(default_factory=list)
    start_index: int = 0
    blacklist_threshold: int = Field(default=1, description="Errors before a key is blacklisted")
    max_retries: int = 3


class UpstreamConfig(_Section):
    """
    Upstream API endpoints and timeouts.

    ``base_url`` is empty in the stored snapshot; the manager fills it with
    the round-robin selection on every ``get_upstream_config()`` call.
    """

    base_urls: List[str] = Field(default_factory=lambda: [DEFAULT_BASE_URL])
    base_url: str = ""
    request_timeout: int = 30
    response_timeout: int = 30
    idle_conn_timeout: int = 120


class AuthConfig(_Section):
    """Shared-secret authentication. Enabled iff a key is configured."""

    key: str = ""

    @computed_field
    @property
    def enabled(self) -> bool:
        return bool(self.key)


class CORSConfig(_Section):
    enabled: bool = True
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    allowed_methods: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_METHODS))
    allowed_headers: List[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = False


class PerformanceConfig(_Section):
    max_concurrent_requests: int = 100
    enable_gzip: bool = True


class LogConfig(_Section):
    level: str = "info"
    format: str = Field(default="text", description="'text' or 'json'")
    enable_file: bool = False
    file_path: str = "logs/app.log"
    enable_request: bool = True


class AppConfig(_Section):
    """The complete, immutable configuration snapshot."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    keys: KeysConfig = Field(default_factory=KeysConfig)
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    log: LogConfig = Field(default_factory=LogConfig)
