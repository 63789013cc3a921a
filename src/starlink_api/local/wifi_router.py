"""Client for the Wi-Fi router on the local network."""

from __future__ import annotations

from typing import Any

from starlink_api.local.device_api import DeviceAPI
from starlink_api.local.transport import DeviceTransport

DEFAULT_ROUTER_HOST = "192.168.1.1"
DEFAULT_ROUTER_PORT = 9000


class WifiRouter(DeviceAPI):
    def __init__(
        self,
        transport: DeviceTransport,
        host: str = DEFAULT_ROUTER_HOST,
        port: int = DEFAULT_ROUTER_PORT,
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(transport, host, port, timeout_ms)

    async def fetch_diagnostics(self) -> Any:
        diagnostics = await self._fetch(
            {"get_diagnostics": {}}, "wifi_get_diagnostics", "diagnostics"
        )
        return {**diagnostics, "networks": list(diagnostics.get("networks") or [])}

    async def reboot(self) -> bool:
        return await self._command({"reboot": {}}, "reboot")
