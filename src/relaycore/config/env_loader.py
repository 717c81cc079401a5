# src/relaycore/config/env_loader.py
"""Loads the optional ``.env`` override file into the process environment."""

import logging
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"


def load_env_file(path: Union[str, Path] = DEFAULT_ENV_FILE) -> bool:
    """
    Merge ``KEY=value`` lines from ``path`` into ``os.environ``.

    Variables already present in the environment are never overwritten.
    A missing or unreadable file is not an error: startup must work from
    environment variables alone.

    Returns:
        True if the file was read and contained at least one variable, even
        when every one of them was already set and nothing was applied.
    """
    env_path = Path(path)
    if not env_path.is_file():
        logger.info("No %s file found; create one to configure via environment file", env_path)
        return False

    try:
        loaded = load_dotenv(dotenv_path=env_path, override=False)
    except (OSError, UnicodeDecodeError) as e:
        logger.info("Could not read %s, using process environment only: %s", env_path, e)
        return False

    logger.debug("Loaded environment overrides from %s", env_path)
    return loaded
