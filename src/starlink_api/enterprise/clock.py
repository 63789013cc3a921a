"""Clock abstraction for testable time handling in the enterprise pipeline.

This module defines a `Clock` protocol representing callables that return the
current time as ``float`` seconds.  Token expiry and the sliding rate window
MUST depend on an injected ``Clock`` instance rather than calling
``time.time()`` directly, so tests can move time forward deterministically.

Example
-------
>>> from starlink_api.enterprise.clock import default_clock
>>> isinstance(default_clock(), float)
True
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable, Protocol, runtime_checkable

import anyio


@runtime_checkable
class Clock(Protocol):
    """Callable protocol returning *seconds* since the UNIX epoch."""

    def __call__(self) -> float: ...


Sleeper = Callable[[float], Awaitable[None]]


def default_clock() -> float:
    """Default implementation that delegates to ``time.time()``."""
    return time.time()


async def default_sleep(seconds: float) -> None:
    await anyio.sleep(seconds)
