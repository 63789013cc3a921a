"""Unit tests for the sliding request window."""

from __future__ import annotations

import pytest

from starlink_api.enterprise.models import RequestDescriptor
from starlink_api.enterprise.rate_window import RateWindow

from enterprise_fakes import FakeClock

GET_ACCOUNTS = RequestDescriptor(method="GET", endpoint="/enterprise/v1/accounts")


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #
def _window(clock: FakeClock, sleeps: list[float], **kwargs) -> RateWindow:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return RateWindow(clock=clock, sleep=_sleep, **kwargs)


# --------------------------------------------------------------------------- #
# Tests                                                                       #
# --------------------------------------------------------------------------- #
def test_count_tracks_recorded_requests(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps)
    for _ in range(7):
        window.record(GET_ACCOUNTS)
    assert window.count() == 7


def test_identical_requests_at_same_instant_are_counted_separately(
    clock: FakeClock, sleeps: list[float]
):
    window = _window(clock, sleeps)
    window.record(GET_ACCOUNTS)
    window.record(GET_ACCOUNTS)
    assert window.count() == 2


def test_entries_expire_after_the_window(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps, ttl=60)
    for _ in range(3):
        window.record(GET_ACCOUNTS)
    clock.advance(30)
    window.record(GET_ACCOUNTS)
    window.record(GET_ACCOUNTS)
    assert window.count() == 5

    clock.advance(31)
    assert window.count() == 2

    clock.advance(30)
    assert window.count() == 0


def test_near_limit_uses_margin(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps, limit=10, margin=5)
    for _ in range(4):
        window.record(GET_ACCOUNTS)
    assert not window.near_limit()
    window.record(GET_ACCOUNTS)
    assert window.near_limit()


@pytest.mark.anyio
async def test_pace_sleeps_once_when_near_limit(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps, limit=10, margin=5, backoff=0.25)
    for _ in range(4):
        window.record(GET_ACCOUNTS)
    assert await window.pace() is False
    assert sleeps == []

    window.record(GET_ACCOUNTS)
    assert await window.pace() is True
    assert sleeps == [0.25]


@pytest.mark.anyio
async def test_pace_stops_after_window_drains(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps, limit=6, margin=5)
    window.record(GET_ACCOUNTS)
    assert await window.pace() is True
    clock.advance(61)
    assert await window.pace() is False
    assert len(sleeps) == 1


def test_clear_empties_window(clock: FakeClock, sleeps: list[float]):
    window = _window(clock, sleeps)
    window.record(GET_ACCOUNTS)
    window.clear()
    assert window.count() == 0
