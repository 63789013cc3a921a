"""Local (LAN) device API for dishes and Wi-Fi routers.

The gRPC channel and protobuf encoding are supplied by the caller as a
:class:`~starlink_api.local.transport.DeviceTransport`.
"""

from __future__ import annotations

from .device_api import DeviceAPI  # noqa: F401
from .dishy import Dishy  # noqa: F401
from .errors import DeviceError, DeviceResponseError, DeviceTimeoutError  # noqa: F401
from .transport import DeviceTransport  # noqa: F401
from .wifi_router import WifiRouter  # noqa: F401

__all__ = [
    "DeviceAPI",
    "DeviceTransport",
    "Dishy",
    "WifiRouter",
    "DeviceError",
    "DeviceResponseError",
    "DeviceTimeoutError",
]
