"""Sliding request window used to pace calls against the Enterprise API.

The service allows a fixed number of requests per minute from one source
address.  Every dispatched attempt is recorded in a :class:`cachetools.TTLCache`
whose entries expire ``ttl`` seconds after insertion; the number of live
entries approximates the requests made during the last window.

Pacing is advisory: :meth:`RateWindow.pace` sleeps once when the window is
close to the limit but never blocks admission.  ``pace`` followed by
``record`` is not atomic, so callers racing past the check together can
overshoot the limit.
"""

from __future__ import annotations

import itertools
import logging

from cachetools import TTLCache

from starlink_api.config import DEFAULT_REQUEST_LIMIT, DEFAULT_WINDOW_SECONDS
from starlink_api.enterprise.clock import Clock, Sleeper, default_clock, default_sleep
from starlink_api.enterprise.models import RequestDescriptor

_LOG = logging.getLogger("starlink-api.enterprise.rate_window")


class RateWindow:
    """Approximate count of requests issued during the last ``ttl`` seconds."""

    def __init__(
        self,
        *,
        limit: int = DEFAULT_REQUEST_LIMIT,
        ttl: float = DEFAULT_WINDOW_SECONDS,
        margin: int = 5,
        backoff: float = 0.1,
        clock: Clock = default_clock,
        sleep: Sleeper = default_sleep,
    ) -> None:
        self.limit = limit
        self.ttl = ttl
        self.margin = margin
        self.backoff = backoff
        self._sleep = sleep
        self._sequence = itertools.count()
        # sized well above the limit so eviction never hides live entries
        self._entries: TTLCache = TTLCache(
            maxsize=max(limit * 4, 1024), ttl=ttl, timer=clock
        )

    def record(self, descriptor: RequestDescriptor) -> None:
        """Count *descriptor* towards the current window."""
        key = (
            descriptor.fingerprint(),
            self._entries.timer(),
            next(self._sequence),
        )
        self._entries[key] = True

    def count(self) -> int:
        """Number of recorded requests that have not expired yet."""
        self._entries.expire()
        return len(self._entries)

    def near_limit(self) -> bool:
        return self.count() >= self.limit - self.margin

    async def pace(self) -> bool:
        """Sleep for ``backoff`` seconds when the window is nearly full.

        Returns *True* when a pause was taken.
        """
        if not self.near_limit():
            return False
        _LOG.debug(
            "Request window at %s/%s, backing off %.3fs",
            len(self._entries),
            self.limit,
            self.backoff,
        )
        await self._sleep(self.backoff)
        return True

    def clear(self) -> None:
        self._entries.clear()
