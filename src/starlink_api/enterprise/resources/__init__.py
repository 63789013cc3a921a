"""Resource models bound to an :class:`~starlink_api.enterprise.session.EnterpriseSession`."""

from __future__ import annotations

from .account import Account  # noqa: F401
from .router import Router  # noqa: F401
from .router_config import RouterConfig, RouterConfigUpdate  # noqa: F401
from .service_line import ServiceLine, ServiceLineUpdate  # noqa: F401
from .user_terminal import UserTerminal  # noqa: F401

__all__ = [
    "Account",
    "Router",
    "RouterConfig",
    "RouterConfigUpdate",
    "ServiceLine",
    "ServiceLineUpdate",
    "UserTerminal",
]
