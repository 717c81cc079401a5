# src/relaycore/config/validator.py
"""
Configuration validator for RelayCore.

Inspects an assembled :class:`~relaycore.config.models.AppConfig` and collects
every problem in a single pass instead of stopping at the first one. Errors
reject the whole configuration; warnings are logged but never block startup.

Checks (errors):
- Port within the allowed range
- Key start index not negative
- Blacklist threshold at least 1
- Request timeout at or above the minimum
- At least one upstream URL, each with a scheme and host
- Max concurrent requests at least 1
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from ..exceptions import ConfigValidationError
from .constants import DEFAULT_CONSTANTS, LOG_FORMATS, LOG_LEVELS, ConfigConstants
from .models import AppConfig

logger = logging.getLogger(__name__)

# =============================================================================
# VALIDATION TYPES
# =============================================================================


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"  # Configuration is invalid, cannot start
    WARNING = "warning"  # Suspicious but usable


@dataclass
class ValidationIssue:
    """Represents a single validation issue."""

    severity: ValidationSeverity
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.field}: {self.message}"


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def violations(self) -> List[str]:
        """Error messages only, in the order they were found."""
        return [i.message for i in self.errors]

    def add_error(self, field_name: str, message: str) -> None:
        self.issues.append(ValidationIssue(ValidationSeverity.ERROR, field_name, message))
        self.valid = False

    def add_warning(self, field_name: str, message: str) -> None:
        self.issues.append(ValidationIssue(ValidationSeverity.WARNING, field_name, message))

    def format_report(self) -> str:
        """Format validation issues as a human-readable report."""
        if not self.issues:
            return "Configuration is valid"

        lines = []
        errors = self.errors
        if errors:
            lines.append(f"{len(errors)} error(s):")
            lines.extend(f"  - {issue}" for issue in errors)

        warnings = self.warnings
        if warnings:
            lines.append(f"{len(warnings)} warning(s):")
            lines.extend(f"  - {issue}" for issue in warnings)

        return "\n".join(lines)


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================


def _validate_base_url(url: str) -> Tuple[bool, Optional[str]]:
    """
    Check that ``url`` parses and has both a scheme and a host.

    Returns:
        (is_valid, error_message)
    """
    try:
        parsed = urlparse(url)
        # Accessing .port raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except ValueError as e:
        return False, str(e)

    if not parsed.scheme:
        return False, "missing scheme"
    if not parsed.hostname:
        return False, "missing host"
    return True, None


# =============================================================================
# MAIN VALIDATOR CLASS
# =============================================================================


class ConfigValidator:
    """
    Validates a configuration snapshot.

    Usage:
        result = ConfigValidator().validate(config)
        if not result.valid:
            raise ConfigValidationError(result.violations)
    """

    def __init__(self, constants: ConfigConstants = DEFAULT_CONSTANTS):
        self.constants = constants

    def validate(self, config: AppConfig) -> ValidationResult:
        """Run every check against ``config`` and collect all issues."""
        result = ValidationResult()

        self._validate_server(config, result)
        self._validate_keys(config, result)
        self._validate_upstream(config, result)
        self._validate_performance(config, result)
        self._validate_cors(config, result)
        self._validate_log(config, result)

        return result

    def _validate_server(self, config: AppConfig, result: ValidationResult) -> None:
        c = self.constants
        if not c.min_port <= config.server.port <= c.max_port:
            result.add_error("server.port", f"port must be between {c.min_port}-{c.max_port}")

    def _validate_keys(self, config: AppConfig, result: ValidationResult) -> None:
        keys = config.keys
        if keys.start_index < 0:
            result.add_error("keys.start_index", "start index cannot be less than 0")
        if keys.blacklist_threshold < 1:
            result.add_error("keys.blacklist_threshold", "blacklist threshold cannot be less than 1")
        # An empty pool is rejected by the key pool itself, not here.
        if not keys.api_keys:
            result.add_warning("keys.api_keys", "no API keys configured")

    def _validate_upstream(self, config: AppConfig, result: ValidationResult) -> None:
        upstream = config.upstream
        if upstream.request_timeout < self.constants.min_timeout:
            result.add_error(
                "upstream.request_timeout",
                f"request timeout cannot be less than {self.constants.min_timeout}s",
            )

        if not upstream.base_urls:
            result.add_error("upstream.base_urls", "at least one upstream API URL is required")

        for base_url in upstream.base_urls:
            is_valid, reason = _validate_base_url(base_url)
            if not is_valid:
                logger.debug("Rejected upstream URL %r: %s", base_url, reason)
                result.add_error("upstream.base_urls", f"invalid upstream API URL format: {base_url}")

    def _validate_performance(self, config: AppConfig, result: ValidationResult) -> None:
        if config.performance.max_concurrent_requests < 1:
            result.add_error(
                "performance.max_concurrent_requests",
                "max concurrent requests cannot be less than 1",
            )

    def _validate_cors(self, config: AppConfig, result: ValidationResult) -> None:
        cors = config.cors
        if cors.enabled and cors.allow_credentials and "*" in cors.allowed_origins:
            result.add_warning(
                "cors.allow_credentials",
                "credentials are not allowed with a wildcard origin; browsers will reject them",
            )

    def _validate_log(self, config: AppConfig, result: ValidationResult) -> None:
        if config.log.level.lower() not in LOG_LEVELS:
            result.add_warning("log.level", f"unknown log level '{config.log.level}', using info")
        if config.log.format.lower() not in LOG_FORMATS:
            result.add_warning("log.format", f"unknown log format '{config.log.format}', using text")


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================


def validate_config(config: AppConfig, constants: ConfigConstants = DEFAULT_CONSTANTS) -> AppConfig:
    """
    Validate ``config`` and return it unchanged if it has no errors.

    Every error is logged individually before raising.

    Raises:
        ConfigValidationError: carrying all violation messages.
    """
    result = ConfigValidator(constants).validate(config)

    for issue in result.warnings:
        logger.warning("Configuration warning: %s: %s", issue.field, issue.message)

    if not result.valid:
        logger.error("Configuration validation failed:")
        for message in result.violations:
            logger.error("   - %s", message)
        raise ConfigValidationError(result.violations)

    return config
