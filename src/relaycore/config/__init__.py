# src/relaycore/config/__init__.py
"""
Configuration package for RelayCore.

Loads relay settings from environment variables (plus an optional ``.env``
override file), validates them in one pass and exposes them through
:class:`ConfigManager`.

Usage:
    from relaycore.config import new_manager

    manager = new_manager()
    upstream = manager.get_upstream_config()
    print(upstream.base_url)
"""

from .assembler import build_config
from .constants import DEFAULT_CONSTANTS, ConfigConstants
from .env_loader import load_env_file
from .manager import ConfigManager, new_manager
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
from .parsers import get_env_or_default, parse_array, parse_boolean, parse_integer
from .validator import (
    ConfigValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "CORSConfig",
    "ConfigConstants",
    "ConfigManager",
    "ConfigValidator",
    "DEFAULT_CONSTANTS",
    "KeysConfig",
    "LogConfig",
    "PerformanceConfig",
    "ServerConfig",
    "UpstreamConfig",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "build_config",
    "get_env_or_default",
    "load_env_file",
    "new_manager",
    "parse_array",
    "parse_boolean",
    "parse_integer",
    "validate_config",
]
