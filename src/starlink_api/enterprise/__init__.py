"""Enterprise (REST) API package.

Every Enterprise call runs through one shared pipeline: client-credentials
authentication, sliding-window pacing, a single 401 re-authentication retry,
and page aggregation for list endpoints.

Sub-modules
-----------
clock
    Test-friendly time and sleep abstractions.
models
    Immutable records: token, request descriptor, page envelope.
errors
    Exception types raised by the pipeline.
rate_window
    Sliding request window backed by ``cachetools.TTLCache``.
token
    Client-credentials token manager.
session
    Request executor shared by every resource of one client.
pagination
    Single-page and fetch-all list retrieval.
records / telemetry
    Wire shapes, date conversion and telemetry pivoting.
resources
    Account, Router, RouterConfig, ServiceLine and UserTerminal models.
log_utils
    Structured logging helpers (thin wrapper around :pymod:`logging`).
"""

from __future__ import annotations

from .clock import Clock, default_clock  # noqa: F401
from .client import StarlinkAPI  # noqa: F401
from .errors import (  # noqa: F401
    AggregationIntegrityError,
    AuthenticationError,
    EnterpriseError,
    EnterpriseHTTPError,
    MalformedResponseError,
)
from .models import PageEnvelope, RequestDescriptor, Token  # noqa: F401
from .pagination import PageQuery, collect, fetch_page  # noqa: F401
from .rate_window import RateWindow  # noqa: F401
from .resources import (  # noqa: F401
    Account,
    Router,
    RouterConfig,
    RouterConfigUpdate,
    ServiceLine,
    ServiceLineUpdate,
    UserTerminal,
)
from .session import EnterpriseSession  # noqa: F401
from .token import TokenManager  # noqa: F401

__all__ = [
    # clock
    "Clock",
    "default_clock",
    # client
    "StarlinkAPI",
    "EnterpriseSession",
    "TokenManager",
    "RateWindow",
    # models
    "PageEnvelope",
    "RequestDescriptor",
    "Token",
    # pagination
    "PageQuery",
    "collect",
    "fetch_page",
    # errors
    "EnterpriseError",
    "AuthenticationError",
    "EnterpriseHTTPError",
    "AggregationIntegrityError",
    "MalformedResponseError",
    # resources
    "Account",
    "Router",
    "RouterConfig",
    "RouterConfigUpdate",
    "ServiceLine",
    "ServiceLineUpdate",
    "UserTerminal",
]
