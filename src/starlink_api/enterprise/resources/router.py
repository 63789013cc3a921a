"""Router resource."""

from __future__ import annotations

from starlink_api.enterprise.records import RouterRecord
from starlink_api.enterprise.resources.base import EnterpriseResource


class Router(EnterpriseResource[RouterRecord]):
    @property
    def account_number(self) -> str:
        return self._record["accountNumber"]

    @property
    def config_id(self) -> str:
        return self._record.get("configId") or ""

    @property
    def direct_link_to_dish(self) -> bool:
        return bool(self._record.get("directLinkToDish"))

    @property
    def hardware_version(self) -> str:
        return self._record.get("hardwareVersion") or ""

    @property
    def router_id(self) -> str:
        return self._record["routerId"]

    @property
    def user_terminal_id(self) -> str:
        return self._record.get("userTerminalId") or ""

    @property
    def _config_endpoint(self) -> str:
        return (
            f"/enterprise/v1/account/{self.account_number}"
            f"/routers/{self.router_id}/config"
        )

    async def assign_config(self, config_id: str) -> bool:
        """Assign router config *config_id*; the body is the bare JSON string."""
        ok = await self._attempt(
            f"assign config to router {self.router_id}",
            self.session.put(self._config_endpoint, config_id),
        )
        if ok:
            self._record = {**self._record, "configId": config_id}
        return ok

    async def remove_config(self) -> bool:
        ok = await self._attempt(
            f"remove config from router {self.router_id}",
            self.session.delete(self._config_endpoint),
        )
        if ok:
            self._record = {**self._record, "configId": ""}
        return ok
