"""Client for the dish (user terminal) on the local network."""

from __future__ import annotations

from typing import Any

from starlink_api.local.device_api import DeviceAPI
from starlink_api.local.transport import DeviceTransport

DEFAULT_DISH_HOST = "192.168.100.1"
DEFAULT_DISH_PORT = 9200


class Dishy(DeviceAPI):
    def __init__(
        self,
        transport: DeviceTransport,
        host: str = DEFAULT_DISH_HOST,
        port: int = DEFAULT_DISH_PORT,
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(transport, host, port, timeout_ms)

    async def fetch_diagnostics(self) -> Any:
        return await self._fetch({"get_diagnostics": {}}, "dish_get_diagnostics", "diagnostics")

    async def fetch_history(self) -> Any:
        return await self._fetch({"get_history": {}}, "dish_get_history", "history")

    async def fetch_location(self) -> Any:
        """Location must be enabled in the dish settings."""
        return await self._fetch({"get_location": {}}, "get_location", "location")

    async def fetch_obstruction_map(self) -> Any:
        return await self._fetch(
            {"dish_get_obstruction_map": {}}, "dish_get_obstruction_map", "obstruction map"
        )

    async def fetch_status(self) -> Any:
        return await self._fetch({"get_status": {}}, "dish_get_status", "status")

    async def reboot(self) -> bool:
        return await self._command({"reboot": {}}, "reboot")

    async def stow(self) -> bool:
        """Only dishes that support stowing honour this."""
        return await self._command({"dish_stow": {"unstow": False}}, "stow")

    async def unstow(self) -> bool:
        return await self._command({"dish_stow": {"unstow": True}}, "unstow")
