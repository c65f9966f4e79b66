"""Root logger setup for the Pokédex client.

The environment wins over user preferences so a developer can turn on
DEBUG output without touching saved settings:

- ``POKEDEX_LOG_LEVEL``: level name (``debug``, ``WARNING``) or number.
- ``POKEDEX_DEBUG`` / ``POKEDEX_DEBUG_LOGGING``: any truthy value forces DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_level(raw: Union[int, str, None]) -> Optional[int]:
    if isinstance(raw, int):
        return raw
    text = (raw or "").strip()
    if text.isdigit():
        return int(text)
    value = logging.getLevelName(text.upper()) if text else None
    return value if isinstance(value, int) else None


def _env_override() -> Optional[int]:
    level = _parse_level(os.getenv("POKEDEX_LOG_LEVEL"))
    if level is not None:
        return level
    for flag in ("POKEDEX_DEBUG_LOGGING", "POKEDEX_DEBUG"):
        if (os.getenv(flag) or "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install a stream handler once and set the root level.

    Returns the level actually applied.
    """
    level = _env_override()
    if level is None:
        level = _parse_level(default_level) or logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the saved ``debug_logging`` preference unless the env overrides it."""
    level = _env_override()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_requests_debug() -> bool:
    """True when the environment alone asks for DEBUG output."""
    level = _env_override()
    return level is not None and level <= logging.DEBUG
