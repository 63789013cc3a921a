"""Router configuration resource.

The API stores the configuration document as a JSON string
(``routerConfigJson``); this model exposes it decoded as :attr:`RouterConfig.config`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from starlink_api.enterprise.errors import MalformedResponseError
from starlink_api.enterprise.models import unwrap_content
from starlink_api.enterprise.records import RouterConfigRecord
from starlink_api.enterprise.resources.base import BEST_EFFORT_ERRORS, EnterpriseResource
from starlink_api.enterprise.session import EnterpriseSession

_LOG = logging.getLogger("starlink-api.enterprise.resources.router_config")

_UNSET: Any = object()


def decode_router_config(record: Mapping[str, Any]) -> dict[str, Any]:
    """Replace ``routerConfigJson`` with the decoded ``routerConfig``."""
    out = {k: v for k, v in record.items() if k != "routerConfigJson"}
    raw = record.get("routerConfigJson")
    if raw is not None:
        try:
            out["routerConfig"] = json.loads(raw) if raw else None
        except ValueError as exc:
            raise MalformedResponseError(f"routerConfigJson is not valid JSON: {exc}") from exc
    else:
        out.setdefault("routerConfig", None)
    return out


@dataclass(frozen=True)
class RouterConfigUpdate:
    """Changes to submit with :meth:`RouterConfig.save`; unset fields are kept."""

    nickname: str | None = None
    config: Any = _UNSET

    def is_empty(self) -> bool:
        return self.nickname is None and self.config is _UNSET


class RouterConfig(EnterpriseResource[RouterConfigRecord]):
    def __init__(self, session: EnterpriseSession, record: RouterConfigRecord) -> None:
        super().__init__(session, decode_router_config(record))

    @property
    def account_number(self) -> str:
        return self._record["accountNumber"]

    @property
    def config(self) -> Any:
        return self._record.get("routerConfig")

    @property
    def config_id(self) -> str:
        return self._record["configId"]

    @property
    def nickname(self) -> str:
        return self._record.get("nickname") or ""

    async def save(self, update: RouterConfigUpdate) -> bool:
        """Submit *update*; the record is replaced with the server's answer."""
        if update.is_empty():
            return False
        nickname = update.nickname if update.nickname is not None else self.nickname
        config = self.config if update.config is _UNSET else update.config
        endpoint = (
            f"/enterprise/v1/account/{self.account_number}"
            f"/routers/configs/{self.config_id}"
        )
        payload = {"nickname": nickname, "routerConfigJson": json.dumps(config)}

        try:
            body = await self.session.put(endpoint, payload)
            record = decode_router_config(unwrap_content(body))
        except BEST_EFFORT_ERRORS as exc:
            _LOG.warning("save router config %s failed: %s", self.config_id, exc)
            return False
        self._record = record
        return True
