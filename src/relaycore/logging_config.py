# src/relaycore/logging_config.py
"""
Logging setup for the relay, driven by the ``log`` configuration section.

Applies :class:`~relaycore.config.models.LogConfig` to the root logger:

- Console logging to stderr (always on)
- Optional file logging with size-based rotation (``LOG_ENABLE_FILE``)
- Level from ``LOG_LEVEL`` (logrus-style names are accepted, e.g. ``warn``,
  ``fatal``, ``panic``)
- ``text`` or ``json`` output (``LOG_FORMAT``)

``enable_request`` is not handled here; the HTTP layer reads it to decide
whether to emit per-request access lines.

Usage:
    from relaycore.config import new_manager
    from relaycore.logging_config import configure_logging

    manager = new_manager()
    configure_logging(manager.get_log_config())
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog

from .config.constants import LOG_LEVELS
from .config.models import LogConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"

ROTATION_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
ROTATION_BACKUP_COUNT = 5


def resolve_level(name: str) -> int:
    """Map a configured level name to a logging level, defaulting to INFO."""
    return LOG_LEVELS.get(name.strip().lower(), logging.INFO)


def build_json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """
    Formatter rendering stdlib records as one JSON object per line.

    Keys: ``event``, ``level``, ``logger``, ``timestamp`` and, for records
    carrying exc_info, ``exception``.
    """
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format.strip().lower() == "json":
        return build_json_formatter()
    return logging.Formatter(TEXT_FORMAT)


# ---------------------------------------------------------------------------
# LoggingManager
# ---------------------------------------------------------------------------


class LoggingManager:
    """
    Singleton manager for the process logging setup.

    Ensures handlers are only installed once unless a reconfigure is forced.
    """

    _instance: Optional["LoggingManager"] = None
    _configured: bool = False
    _log_file_path: Path | None = None

    def __new__(cls) -> "LoggingManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_instance(cls) -> "LoggingManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def get_log_file_path(cls) -> Path | None:
        return cls._log_file_path

    def configure(self, log_config: LogConfig, force_reconfigure: bool = False) -> Path | None:
        """
        Install handlers on the root logger according to ``log_config``.

        Args:
            log_config: The ``log`` section of the configuration.
            force_reconfigure: If True, reconfigure even if already configured.

        Returns:
            Path to the log file, or None when file logging is off or failed.
        """
        if LoggingManager._configured and not force_reconfigure:
            return LoggingManager._log_file_path

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        level = resolve_level(log_config.level)
        root_logger.setLevel(level)
        formatter = _make_formatter(log_config.format)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        LoggingManager._log_file_path = None
        if log_config.enable_file:
            file_handler = self._create_file_handler(log_config.file_path, formatter)
            if file_handler is not None:
                root_logger.addHandler(file_handler)
                LoggingManager._log_file_path = Path(log_config.file_path)

        LoggingManager._configured = True
        return LoggingManager._log_file_path

    def _create_file_handler(
        self, file_path: str, formatter: logging.Formatter
    ) -> logging.Handler | None:
        """Create a rotating file handler, or None if the file cannot be opened."""
        log_file = Path(file_path).expanduser()

        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                maxBytes=ROTATION_MAX_BYTES,
                backupCount=ROTATION_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as e:
            # Degrade to console-only logging
            sys.stderr.write(f"Warning: Cannot open log file {log_file}: {e}\n")
            return None

        handler.setFormatter(formatter)
        return handler

    def set_level(self, level: str | int) -> None:
        """Change the root log level at runtime."""
        if isinstance(level, str):
            level = resolve_level(level)
        logging.getLogger().setLevel(level)


# ---------------------------------------------------------------------------
# Public module-level functions
# ---------------------------------------------------------------------------


def configure_logging(log_config: LogConfig, force_reconfigure: bool = False) -> Path | None:
    """
    Configure process logging from the ``log`` configuration section.

    Call this once at startup, right after the configuration manager has been
    created.
    """
    return LoggingManager.get_instance().configure(log_config, force_reconfigure=force_reconfigure)


def get_log_file_path() -> Path | None:
    """Get the current log file path."""
    return LoggingManager.get_log_file_path()


def set_level(level: str | int) -> None:
    """Change the root log level at runtime."""
    LoggingManager.get_instance().set_level(level)
