"""Base class for clients of the local device API."""

from __future__ import annotations

import logging
from typing import Any

import anyio

from starlink_api.local.errors import DeviceResponseError, DeviceTimeoutError
from starlink_api.local.transport import DeviceRequest, DeviceResponse, DeviceTransport

_LOG = logging.getLogger("starlink-api.local")


class DeviceAPI:
    """Issue ``Handle`` requests with an optional per-call timeout."""

    def __init__(
        self,
        transport: DeviceTransport,
        host: str,
        port: int,
        timeout_ms: int | None = None,
    ) -> None:
        self.transport = transport
        self.host = host
        self.port = port
        self.timeout_ms = timeout_ms

    @property
    def target(self) -> str:
        return f"{self.host}:{self.port}"

    async def handle(
        self, request: DeviceRequest, timeout_ms: int | None = None
    ) -> DeviceResponse:
        """Send *request*; the call is cancelled after ``timeout_ms`` milliseconds."""
        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        if not timeout_ms:
            return await self.transport.handle(request)
        try:
            with anyio.fail_after(timeout_ms / 1000):
                return await self.transport.handle(request)
        except TimeoutError:
            _LOG.debug("Request %s to %s timed out", list(request), self.target)
            raise DeviceTimeoutError(
                f"No response from {self.target} within {timeout_ms}ms",
                target=self.target,
            ) from None

    async def _fetch(self, request: DeviceRequest, field: str, what: str) -> Any:
        response = await self.handle(request)
        value = response.get(field)
        if value is None:
            raise DeviceResponseError(
                f"No {what} returned from {self.target}", target=self.target
            )
        return value

    async def _command(self, request: DeviceRequest, action: str) -> bool:
        try:
            await self.handle(request)
        except Exception as exc:  # noqa: BLE001 - transport errors are opaque
            _LOG.warning("%s on %s failed: %s", action, self.target, exc)
            return False
        return True
