"""Logging configuration for peakdetect."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as "debug" or a numeric level into an int.

    Raises:
        ValueError: If the name is not a logging level.
    """

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send records at ``level`` and above to stderr.

    Peak output owns stdout. Calling again only changes the level.
    """

    numeric = resolve_level(level)
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(numeric)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger."""

    return logging.getLogger(name)
