"""User terminal (dish) resource."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlink_api.enterprise.records import UserTerminalRecord
from starlink_api.enterprise.resources.base import EnterpriseResource
from starlink_api.enterprise.resources.router import Router
from starlink_api.enterprise.session import EnterpriseSession

if TYPE_CHECKING:
    from starlink_api.enterprise.resources.service_line import ServiceLine


class UserTerminal(EnterpriseResource[UserTerminalRecord]):
    def __init__(
        self,
        session: EnterpriseSession,
        record: UserTerminalRecord,
        account_number: str | None = None,
    ) -> None:
        record = dict(record)
        if account_number:
            record["accountNumber"] = account_number
        super().__init__(session, record)

    @property
    def account_number(self) -> str:
        return self._record.get("accountNumber") or ""

    @property
    def active(self) -> bool:
        return bool(self._record.get("active"))

    @property
    def dish_serial_number(self) -> str:
        return self._record.get("dishSerialNumber") or ""

    @property
    def kit_serial_number(self) -> str:
        return self._record.get("kitSerialNumber") or ""

    @property
    def nickname(self) -> str | None:
        return self._record.get("nickname")

    @property
    def routers(self) -> list[Router]:
        return [
            Router(self.session, record) for record in self._record.get("routers") or []
        ]

    @property
    def service_line_number(self) -> str | None:
        return self._record.get("serviceLineNumber")

    @property
    def user_terminal_id(self) -> str:
        return self._record["userTerminalId"]

    async def add_to_service_line(self, service_line: ServiceLine | str) -> bool:
        number = (
            service_line if isinstance(service_line, str) else service_line.service_line_number
        )
        ok = await self._attempt(
            f"add terminal {self.user_terminal_id} to service line {number}",
            self.session.post(
                f"/enterprise/v1/account/{self.account_number}"
                f"/user-terminals/{self.user_terminal_id}/{number}"
            ),
        )
        if ok:
            self._record = {**self._record, "serviceLineNumber": number}
        return ok

    async def remove_from_service_line(self) -> bool:
        if not self.service_line_number:
            return False
        ok = await self._attempt(
            f"remove terminal {self.user_terminal_id} from its service line",
            self.session.delete(
                f"/enterprise/v1/account/{self.account_number}"
                f"/user-terminals/{self.user_terminal_id}/{self.service_line_number}"
            ),
        )
        if ok:
            self._record = {**self._record, "serviceLineNumber": None}
        return ok
