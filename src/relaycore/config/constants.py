# src/relaycore/config/constants.py
"""Bounds and defaults shared by the assembler, the validator and logging setup."""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigConstants:
    """Deployment-wide configuration constants."""

    min_port: int = 1
    max_port: int = 65535
    min_timeout: int = 1
    default_timeout: int = 30
    default_max_sockets: int = 50
    default_max_free_sockets: int = 10


DEFAULT_CONSTANTS = ConfigConstants()

# Accepted LOG_LEVEL names (logrus-style) and the logging level each maps to
LOG_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

LOG_FORMATS = frozenset({"text", "json"})
