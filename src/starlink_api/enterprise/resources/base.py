"""Common plumbing for Enterprise API resource models."""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Generic, Mapping, TypeVar

import httpx

from starlink_api.enterprise.errors import EnterpriseError
from starlink_api.enterprise.session import EnterpriseSession

_LOG = logging.getLogger("starlink-api.enterprise.resources")

# failures a best-effort operation reports as False instead of raising
BEST_EFFORT_ERRORS = (EnterpriseError, httpx.HTTPError)

R = TypeVar("R", bound=Mapping[str, Any])


class EnterpriseResource(Generic[R]):
    """A record returned by the API, bound to the session that fetched it.

    ``R`` is the wire shape the record arrives in (see
    :mod:`starlink_api.enterprise.records`).
    """

    def __init__(self, session: EnterpriseSession, record: R) -> None:
        self.session = session
        self._record: dict[str, Any] = dict(record)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._record)

    def __str__(self) -> str:
        return json.dumps(self._record, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._record!r})"

    async def _attempt(self, action: str, call: Awaitable[Any]) -> bool:
        """Await *call* and report success as a boolean.

        Used by best-effort operations whose callers only need to know
        whether the change went through.
        """
        try:
            await call
        except BEST_EFFORT_ERRORS as exc:
            _LOG.warning("%s failed: %s", action, exc)
            return False
        return True
