# src/relaycore/exceptions.py
"""
Custom exceptions for the RelayCore library.

This module defines a small hierarchy of exception classes so that the
startup path can tell configuration failures apart from anything else
raised while the relay boots.
"""

from typing import List, Optional


class RelayCoreError(Exception):
    """Base class for all RelayCore specific errors."""
    def __init__(self, message: str = "An unspecified error occurred in RelayCore."):
        super().__init__(message)


class ConfigError(RelayCoreError):
    """Raised for errors related to configuration loading or validation."""
    def __init__(self, message: str = "Configuration error."):
        super().__init__(message)


class ConfigValidationError(ConfigError):
    """
    Raised when the assembled configuration fails validation.

    Carries every individual violation found in a single validation pass,
    so operators can fix all misconfigured variables at once.
    """

    code = "CONFIG_VALIDATION"

    def __init__(
        self,
        violations: Optional[List[str]] = None,
        message: str = "Configuration validation failed",
    ):
        self.violations: List[str] = list(violations or [])
        self.message = message
        super().__init__(f"{message}: {self.details}" if self.violations else message)

    @property
    def details(self) -> str:
        """All violations joined into one line."""
        return "; ".join(self.violations)
