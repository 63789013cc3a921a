"""Typed client for the Starlink Enterprise REST API and the local device API."""

from __future__ import annotations

from .config import EnterpriseConfig  # noqa: F401
from .enterprise import (  # noqa: F401
    Account,
    AggregationIntegrityError,
    AuthenticationError,
    EnterpriseError,
    EnterpriseHTTPError,
    Router,
    RouterConfig,
    RouterConfigUpdate,
    ServiceLine,
    ServiceLineUpdate,
    StarlinkAPI,
    UserTerminal,
)
from .local import Dishy, WifiRouter  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "EnterpriseConfig",
    "StarlinkAPI",
    "Account",
    "Router",
    "RouterConfig",
    "RouterConfigUpdate",
    "ServiceLine",
    "ServiceLineUpdate",
    "UserTerminal",
    "EnterpriseError",
    "AuthenticationError",
    "EnterpriseHTTPError",
    "AggregationIntegrityError",
    "Dishy",
    "WifiRouter",
]
