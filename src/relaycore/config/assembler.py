# src/relaycore/config/assembler.py
"""
Builds the configuration snapshot from environment variables.

Every field resolves to either its environment value or a documented
default; no lookup can fail here. The result is a candidate that still has
to pass :func:`relaycore.config.validator.validate_config`.
"""

import os
from typing import Mapping, Optional

from .constants import DEFAULT_CONSTANTS
from .models import (
    DEFAULT_ALLOWED_METHODS,
    DEFAULT_BASE_URL,
    AppConfig,
    AuthConfig,
    CORSConfig,
    KeysConfig,
    LogConfig,
    PerformanceConfig,
    ServerConfig,
    UpstreamConfig,
)
from .parsers import get_env_or_default, parse_array, parse_boolean, parse_integer


def build_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Assemble an :class:`AppConfig` from ``environ`` (``os.environ`` by default).

    Args:
        environ: Mapping of variable names to raw string values.

    Returns:
        The unvalidated configuration snapshot.
    """
    env = os.environ if environ is None else environ

    def raw(key: str) -> str:
        return env.get(key, "")

    def text(key: str, default: str) -> str:
        return get_env_or_default(key, default, env)

    return AppConfig(
        server=ServerConfig(
            port=parse_integer(raw("PORT"), 7860),
            host=text("HOST", "0.0.0.0"),
            read_timeout=parse_integer(raw("SERVER_READ_TIMEOUT"), 120),
            write_timeout=parse_integer(raw("SERVER_WRITE_TIMEOUT"), 1800),
            idle_timeout=parse_integer(raw("SERVER_IDLE_TIMEOUT"), 120),
            graceful_shutdown_timeout=parse_integer(raw("SERVER_GRACEFUL_SHUTDOWN_TIMEOUT"), 60),
        ),
        keys=KeysConfig(
            api_keys=parse_array(raw("API_KEYS"), []),
            start_index=parse_integer(raw("START_INDEX"), 0),
            blacklist_threshold=parse_integer(raw("BLACKLIST_THRESHOLD"), 1),
            max_retries=parse_integer(raw("MAX_RETRIES"), 3),
        ),
        upstream=UpstreamConfig(
            base_urls=parse_array(raw("OPENAI_BASE_URL"), [DEFAULT_BASE_URL]),
            request_timeout=parse_integer(raw("REQUEST_TIMEOUT"), DEFAULT_CONSTANTS.default_timeout),
            response_timeout=parse_integer(raw("RESPONSE_TIMEOUT"), 30),
            idle_conn_timeout=parse_integer(raw("IDLE_CONN_TIMEOUT"), 120),
        ),
        auth=AuthConfig(key=raw("AUTH_KEY")),
        cors=CORSConfig(
            enabled=parse_boolean(raw("ENABLE_CORS"), True),
            allowed_origins=parse_array(raw("ALLOWED_ORIGINS"), ["*"]),
            allowed_methods=parse_array(raw("ALLOWED_METHODS"), DEFAULT_ALLOWED_METHODS),
            allowed_headers=parse_array(raw("ALLOWED_HEADERS"), ["*"]),
            allow_credentials=parse_boolean(raw("ALLOW_CREDENTIALS"), False),
        ),
        performance=PerformanceConfig(
            max_concurrent_requests=parse_integer(raw("MAX_CONCURRENT_REQUESTS"), 100),
            enable_gzip=parse_boolean(raw("ENABLE_GZIP"), True),
        ),
        log=LogConfig(
            level=text("LOG_LEVEL", "info"),
            format=text("LOG_FORMAT", "text"),
            enable_file=parse_boolean(raw("LOG_ENABLE_FILE"), False),
            file_path=text("LOG_FILE_PATH", "logs/app.log"),
            enable_request=parse_boolean(raw("LOG_ENABLE_REQUEST"), True),
        ),
    )
