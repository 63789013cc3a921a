"""Exception types raised by the local device API."""

from __future__ import annotations


class DeviceError(RuntimeError):
    """Base class for failures talking to a dish or router on the LAN."""

    def __init__(self, message: str, *, target: str) -> None:
        super().__init__(message)
        self.target: str = target


class DeviceTimeoutError(DeviceError):
    """The call was cancelled because its timeout elapsed."""


class DeviceResponseError(DeviceError):
    """The device answered without the expected response variant."""
