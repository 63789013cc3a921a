"""Logging helpers shared by the enterprise and local clients."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

_PACKAGE_LOGGER = "starlink-api"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Return *value* truncated to its first ``keep_chars`` characters.

    The remainder is replaced by ``****`` so identifiers stay recognisable in
    logs without being reproducible.
    """
    if not value:
        return ""
    if len(value) <= keep_chars:
        return "*" * len(value)
    return f"{value[:keep_chars]}****"


def setup_logging(
    level: int | str | None = None, stream: TextIO | None = None
) -> logging.Logger:
    """Configure the ``starlink-api`` logger hierarchy.

    The level falls back to ``STARLINK_LOG_LEVEL`` and then ``WARNING``.
    Calling this more than once replaces the previously installed handler.
    """
    if level is None:
        level = os.getenv("STARLINK_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_starlink_api", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    handler._starlink_api = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
