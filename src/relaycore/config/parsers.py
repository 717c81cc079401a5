# src/relaycore/config/parsers.py
"""
Primitive parsers for environment variable values.

Every parser takes the raw string (empty or ``None`` meaning "not set") and a
default of the target type. Malformed input degrades to the default instead
of raising; range and shape checks belong to the validator.
"""

import os
import re
from typing import List, Mapping, Optional

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})
FALSY_VALUES = frozenset({"false", "0", "no", "off"})

# Plain ASCII digits with an optional sign; no whitespace, underscores or
# non-ASCII numerals
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_integer(value: Optional[str], default: int) -> int:
    """Parse an integer, falling back to ``default`` on empty or bad input."""
    if not value or not value.isascii() or not _INTEGER_PATTERN.fullmatch(value):
        return default
    return int(value)


def parse_boolean(value: Optional[str], default: bool) -> bool:
    """
    Parse a boolean flag.

    Accepts ``true/1/yes/on`` and ``false/0/no/off`` in any case; anything
    else, including padded values such as ``" true"``, yields ``default``.
    """
    if not value:
        return default

    lowered = value.lower()
    if lowered in TRUTHY_VALUES:
        return True
    if lowered in FALSY_VALUES:
        return False
    return default


def parse_array(value: Optional[str], default: List[str]) -> List[str]:
    """
    Parse a comma-separated list.

    Elements are stripped and blanks dropped. If nothing survives (for example
    ``" , ,"``) the default list is returned rather than an empty one.
    """
    if not value:
        return list(default)

    result = [part.strip() for part in value.split(",") if part.strip()]
    if not result:
        return list(default)
    return result


def get_env_or_default(key: str, default: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the variable's value if set and non-empty, else ``default``."""
    env = os.environ if environ is None else environ
    value = env.get(key, "")
    return value if value else default
