"""Root logger setup for the desktop app.

The effective level is picked in this order:

1. ``BOOKERY_LOG_LEVEL`` (a level name such as ``warning`` or a number),
2. a truthy ``BOOKERY_DEBUG_LOGGING`` or ``BOOKERY_DEBUG`` -> DEBUG,
3. whatever the caller asks for (the settings ``debug_logging`` flag, or the
   default passed to :func:`configure_root`).

Malformed environment values never raise; they fall back to INFO.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"
LEVEL_ENV = "BOOKERY_LOG_LEVEL"
DEBUG_ENVS = ("BOOKERY_DEBUG_LOGGING", "BOOKERY_DEBUG")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
# urllib3 logs every connection at DEBUG; keep it out of INFO sessions.
_TRANSPORT_LOGGERS = ("urllib3", "urllib3.connectionpool")


def parse_level(text: Optional[str], fallback: int = logging.INFO) -> int:
    """Return the numeric level named by ``text`` or ``fallback``."""
    value = (text or "").strip()
    if not value:
        return fallback
    if value.isdecimal():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    explicit = os.getenv(LEVEL_ENV)
    if explicit and explicit.strip():
        return parse_level(explicit)
    for name in DEBUG_ENVS:
        if (os.getenv(name) or "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def env_forces_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the compact console format and set the root level.

    Returns the effective level.
    """
    level = env_level()
    if level is None:
        level = default_level if isinstance(default_level, int) else parse_level(default_level)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    _set_levels(level)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the settings debug flag unless the environment overrides it."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    _set_levels(level)
    return level


def _set_levels(level: int) -> None:
    logging.getLogger().setLevel(level)
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


def level_name(level: int) -> str:
    return logging.getLevelName(level)
