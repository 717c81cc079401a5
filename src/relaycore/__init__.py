# src/relaycore/__init__.py
"""
RelayCore - configuration core for an OpenAI-compatible key-rotating relay.

Loads deployment settings from the environment and an optional ``.env`` file,
validates them in a single pass, and exposes them through a thread-safe
manager with lock-free round-robin selection of upstream base URLs.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import (
    AppConfig,
    AuthConfig,
    CORSConfig,
    ConfigManager,
    KeysConfig,
    LogConfig,
    PerformanceConfig,
    ServerConfig,
    UpstreamConfig,
    new_manager,
)
from .exceptions import ConfigError, ConfigValidationError, RelayCoreError
from .logging_config import configure_logging

try:
    __version__ = version("relaycore")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = [
    # Manager
    "ConfigManager",
    "new_manager",

    # Configuration sections
    "AppConfig",
    "AuthConfig",
    "CORSConfig",
    "KeysConfig",
    "LogConfig",
    "PerformanceConfig",
    "ServerConfig",
    "UpstreamConfig",

    # Exceptions
    "RelayCoreError",
    "ConfigError",
    "ConfigValidationError",

    # Logging
    "configure_logging",
]
