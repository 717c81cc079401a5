# src/relaycore/config/manager.py
"""
Configuration manager: the public façade over the validated snapshot.

The manager is built once at startup and shared by every request handler.
All accessors return copies, so callers can never mutate process-wide
configuration. ``get_upstream_config()`` is the only accessor with a side
effect: it advances the round-robin cursor used to spread requests across
upstream base URLs.
"""

import itertools
import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from .assembler import build_config
from .env_loader import DEFAULT_ENV_FILE, load_env_file
from .models import (
    AppConfig,
    AuthConfig,
    CORSConfig,
    KeysConfig,
    LogConfig,
    PerformanceConfig,
    ServerConfig,
    UpstreamConfig,
)
from .validator import validate_config

logger = logging.getLogger(__name__)


def _status(flag: bool) -> str:
    return "enabled" if flag else "disabled"


class ConfigManager:
    """
    Holds the validated configuration and the round-robin cursor.

    Thread safety:
        The snapshot is immutable and read without locking. The cursor is an
        ``itertools.count``; ``next()`` on it is a single C-level call, so
        concurrent callers each get a distinct value and never block.
    """

    def __init__(self, config: AppConfig):
        self._config = config
        self._round_robin_counter = itertools.count()

    @property
    def config(self) -> AppConfig:
        """A deep copy of the whole snapshot."""
        return self._config.model_copy(deep=True)

    def _next_index(self) -> int:
        return next(self._round_robin_counter)

    # -------------------------------------------------------------------------
    # Section accessors
    # -------------------------------------------------------------------------

    def get_server_config(self) -> ServerConfig:
        return self._config.server.model_copy(deep=True)

    def get_keys_config(self) -> KeysConfig:
        return self._config.keys.model_copy(deep=True)

    def get_upstream_config(self) -> UpstreamConfig:
        """
        Return the upstream section with ``base_url`` set for this call.

        With several base URLs the cursor is advanced and the URLs are visited
        in order, starting from the first. With a single URL the cursor is
        left untouched.
        """
        upstream = self._config.upstream
        base_urls = upstream.base_urls

        if len(base_urls) > 1:
            selected = base_urls[self._next_index() % len(base_urls)]
        elif base_urls:
            selected = base_urls[0]
        else:
            selected = ""

        return upstream.model_copy(update={"base_url": selected}, deep=True)

    def get_auth_config(self) -> AuthConfig:
        return self._config.auth.model_copy(deep=True)

    def get_cors_config(self) -> CORSConfig:
        return self._config.cors.model_copy(deep=True)

    def get_performance_config(self) -> PerformanceConfig:
        return self._config.performance.model_copy(deep=True)

    def get_log_config(self) -> LogConfig:
        return self._config.log.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Validation & display
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """Re-validate the held snapshot; raises ConfigValidationError."""
        validate_config(self._config)

    def display_config(self) -> None:
        """Log a summary of the active configuration. Secrets are not logged."""
        c = self._config
        logger.info("Current Configuration:")
        logger.info("   Server: %s:%d", c.server.host, c.server.port)
        logger.info("   API Keys loaded: %d", len(c.keys.api_keys))
        logger.info("   Start index: %d", c.keys.start_index)
        logger.info("   Blacklist threshold: %d errors", c.keys.blacklist_threshold)
        logger.info("   Max retries: %d", c.keys.max_retries)
        logger.info("   Upstream URLs: %s", ", ".join(c.upstream.base_urls))
        logger.info("   Request timeout: %ds", c.upstream.request_timeout)
        logger.info("   Response timeout: %ds", c.upstream.response_timeout)
        logger.info("   Idle connection timeout: %ds", c.upstream.idle_conn_timeout)
        logger.info("   Authentication: %s", _status(c.auth.enabled))
        logger.info("   CORS: %s", _status(c.cors.enabled))
        logger.info("   Max concurrent requests: %d", c.performance.max_concurrent_requests)
        logger.info("   Gzip compression: %s", _status(c.performance.enable_gzip))
        logger.info("   Request logging: %s", _status(c.log.enable_request))


def new_manager(
    env_file: Optional[Union[str, Path]] = DEFAULT_ENV_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigManager:
    """
    Load, assemble and validate the configuration, then wrap it in a manager.

    Args:
        env_file: Override file merged into ``os.environ`` first; ``None`` skips it.
        environ: Mapping to read instead of ``os.environ`` (the override file
            is still merged into ``os.environ``).

    Raises:
        ConfigValidationError: If any check fails. Nothing partial is returned.
    """
    if env_file is not None:
        load_env_file(env_file)

    config = validate_config(build_config(environ))
    return ConfigManager(config)
