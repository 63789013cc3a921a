"""Unit tests for the local dish and router clients."""

from __future__ import annotations

from typing import Any, Mapping

import anyio
import pytest

from starlink_api.local import (
    DeviceResponseError,
    DeviceTimeoutError,
    DeviceTransport,
    Dishy,
    WifiRouter,
)


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #
class FakeTransport:
    """Answers ``Handle`` calls from a canned response, recording requests."""

    def __init__(self, response: Mapping[str, Any] | None = None, *, delay: float = 0.0):
        self.response = response or {}
        self.delay = delay
        self.requests: list[Mapping[str, Any]] = []

    async def handle(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        self.requests.append(request)
        if self.delay:
            await anyio.sleep(self.delay)
        return self.response


class BrokenTransport:
    async def handle(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        raise ConnectionError("connection refused")


# --------------------------------------------------------------------------- #
# Dishy                                                                       #
# --------------------------------------------------------------------------- #
def test_fake_transport_satisfies_protocol():
    assert isinstance(FakeTransport(), DeviceTransport)


def test_default_targets():
    assert Dishy(FakeTransport()).target == "192.168.100.1:9200"
    assert WifiRouter(FakeTransport()).target == "192.168.1.1:9000"


@pytest.mark.anyio
async def test_fetch_status_returns_response_variant():
    transport = FakeTransport({"dish_get_status": {"uptime": 42}})
    dish = Dishy(transport)

    assert await dish.fetch_status() == {"uptime": 42}
    assert transport.requests == [{"get_status": {}}]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "method, request_key, response_key",
    [
        ("fetch_diagnostics", "get_diagnostics", "dish_get_diagnostics"),
        ("fetch_history", "get_history", "dish_get_history"),
        ("fetch_location", "get_location", "get_location"),
        ("fetch_obstruction_map", "dish_get_obstruction_map", "dish_get_obstruction_map"),
    ],
)
async def test_fetch_variants(method: str, request_key: str, response_key: str):
    transport = FakeTransport({response_key: {"ok": True}})
    result = await getattr(Dishy(transport), method)()
    assert result == {"ok": True}
    assert list(transport.requests[0]) == [request_key]


@pytest.mark.anyio
async def test_missing_variant_raises():
    dish = Dishy(FakeTransport({"dish_get_history": {}}), host="10.0.0.5")
    with pytest.raises(DeviceResponseError) as excinfo:
        await dish.fetch_status()
    assert str(excinfo.value) == "No status returned from 10.0.0.5:9200"
    assert excinfo.value.target == "10.0.0.5:9200"


@pytest.mark.anyio
async def test_timeout_cancels_slow_call():
    dish = Dishy(FakeTransport({"dish_get_status": {}}, delay=1.0), timeout_ms=20)
    with pytest.raises(DeviceTimeoutError):
        await dish.fetch_status()


@pytest.mark.anyio
async def test_per_call_timeout_overrides_default():
    dish = Dishy(FakeTransport({"dish_get_status": {}}, delay=1.0))
    with pytest.raises(DeviceTimeoutError):
        await dish.handle({"get_status": {}}, timeout_ms=20)


@pytest.mark.anyio
async def test_stow_and_unstow_requests():
    transport = FakeTransport()
    dish = Dishy(transport)
    assert await dish.stow() is True
    assert await dish.unstow() is True
    assert transport.requests == [
        {"dish_stow": {"unstow": False}},
        {"dish_stow": {"unstow": True}},
    ]


@pytest.mark.anyio
async def test_commands_report_failure_as_false():
    assert await Dishy(BrokenTransport()).reboot() is False
    slow = Dishy(FakeTransport(delay=1.0), timeout_ms=20)
    assert await slow.reboot() is False


# --------------------------------------------------------------------------- #
# WifiRouter                                                                  #
# --------------------------------------------------------------------------- #
@pytest.mark.anyio
async def test_router_diagnostics_normalises_networks():
    transport = FakeTransport({"wifi_get_diagnostics": {"id": "Router-1", "networks": None}})
    diagnostics = await WifiRouter(transport).fetch_diagnostics()
    assert diagnostics == {"id": "Router-1", "networks": []}
    assert transport.requests == [{"get_diagnostics": {}}]


@pytest.mark.anyio
async def test_router_reboot():
    transport = FakeTransport()
    assert await WifiRouter(transport).reboot() is True
    assert transport.requests == [{"reboot": {}}]
