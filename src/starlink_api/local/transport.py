"""Transport contract for the device ``Handle`` RPC.

Dishes and routers expose a single gRPC method that takes a request message
with exactly one populated variant (``{"get_status": {}}``) and answers with a
response message whose populated variant names the result
(``{"dish_get_status": {...}}``).  Message encoding and the channel itself
belong to the transport; this package only speaks in plain mappings.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

DeviceRequest = Mapping[str, Any]
DeviceResponse = Mapping[str, Any]


@runtime_checkable
class DeviceTransport(Protocol):
    """Anything able to perform the ``Handle`` RPC against one device."""

    async def handle(self, request: DeviceRequest) -> DeviceResponse: ...
