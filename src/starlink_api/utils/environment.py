"""Utility functions related to environment checking."""

import logging
import os
from typing import Final, Tuple

logger = logging.getLogger("starlink-api.utils.environment")

_TRUTHY: Final[Tuple[str, ...]] = ("true", "1", "yes", "y", "on")


def is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def get_env_str(name: str, default: str = "") -> str:
    """Return the stripped value of *name*, or *default* when unset/blank."""
    value = (os.getenv(name) or "").strip()
    return value or default


def get_env_int(name: str, default: int) -> int:
    raw = get_env_str(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_env_float(name: str, default: float) -> float:
    raw = get_env_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_available_services() -> dict[str, bool]:
    """
    Determine which APIs are usable from the current environment.

    ``enterprise`` requires both ``STARLINK_CLIENT_ID`` and
    ``STARLINK_CLIENT_SECRET``; ``local`` requires ``STARLINK_DISH_HOST`` (or
    ``STARLINK_LOCAL_ENABLE`` set to a truthy value, which uses the default
    dish address).
    """
    enterprise = bool(get_env_str("STARLINK_CLIENT_ID")) and bool(
        get_env_str("STARLINK_CLIENT_SECRET")
    )
    local = bool(get_env_str("STARLINK_DISH_HOST")) or is_truthy(
        os.getenv("STARLINK_LOCAL_ENABLE")
    )

    if enterprise:
        logger.info("Using Enterprise API client-credentials configuration")
    else:
        logger.info(
            "Enterprise API is not configured (STARLINK_CLIENT_ID / STARLINK_CLIENT_SECRET missing)"
        )
    if local:
        logger.info("Local device API enabled")

    return {"enterprise": enterprise, "local": local}
