"""Configuration for the Enterprise API client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from starlink_api.utils.environment import (
    get_env_float,
    get_env_int,
    get_env_str,
)

DEFAULT_BASE_URL: Final[str] = "https://web-api.starlink.com"
DEFAULT_AUTH_URL: Final[str] = "https://api.starlink.com/auth/connect/token"

# The service enforces 250 requests per minute from a single source address.
DEFAULT_REQUEST_LIMIT: Final[int] = 250
DEFAULT_WINDOW_SECONDS: Final[float] = 60.0


@dataclass(frozen=True, slots=True)
class EnterpriseConfig:
    """Credentials and pipeline tuning for :class:`~starlink_api.StarlinkAPI`."""

    client_id: str
    client_secret: str
    base_url: str = DEFAULT_BASE_URL
    auth_url: str = DEFAULT_AUTH_URL
    request_limit: int = DEFAULT_REQUEST_LIMIT
    backoff_margin: int = 5
    backoff_seconds: float = 0.1
    window_seconds: float = DEFAULT_WINDOW_SECONDS
    http_timeout_seconds: float = 30.0
    # a cached token is treated as stale this many seconds before it expires
    token_grace_seconds: int = 60

    def __post_init__(self) -> None:
        if self.request_limit <= 0:
            raise ValueError("request_limit must be positive")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> EnterpriseConfig:
        """Build a configuration from ``STARLINK_*`` environment variables."""
        return cls(
            client_id=get_env_str("STARLINK_CLIENT_ID"),
            client_secret=get_env_str("STARLINK_CLIENT_SECRET"),
            base_url=get_env_str("STARLINK_API_BASE_URL", DEFAULT_BASE_URL),
            auth_url=get_env_str("STARLINK_AUTH_URL", DEFAULT_AUTH_URL),
            request_limit=get_env_int("STARLINK_REQUEST_LIMIT", DEFAULT_REQUEST_LIMIT),
            http_timeout_seconds=get_env_float("STARLINK_HTTP_TIMEOUT_SECONDS", 30.0),
        )

    def is_auth_configured(self) -> bool:
        return bool(self.client_id) and bool(self.client_secret)
