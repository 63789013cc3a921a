"""Service line resource.

Mutations go through :class:`ServiceLineUpdate`: build one with the fields to
change and pass it to :meth:`ServiceLine.save`.  Only fields that differ from
the current record are submitted, each through its dedicated endpoint
(nickname, product, public IP).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from starlink_api.enterprise.models import unwrap_content
from starlink_api.enterprise.records import (
    Record,
    ServiceLineRecord,
    transform_opt_in_product,
    transform_partial_period,
    transform_service_line,
    transform_service_line_usage,
)
from starlink_api.enterprise.resources.base import BEST_EFFORT_ERRORS, EnterpriseResource
from starlink_api.enterprise.session import EnterpriseSession

if TYPE_CHECKING:
    from starlink_api.enterprise.resources.user_terminal import UserTerminal

_LOG = logging.getLogger("starlink-api.enterprise.resources.service_line")


@dataclass(frozen=True)
class ServiceLineUpdate:
    """Pending changes to a service line; ``None`` means "leave as is"."""

    nickname: str | None = None
    product_reference_id: str | None = None
    public_ip: bool | None = None

    def changes(self, current: ServiceLine) -> ServiceLineUpdate:
        """Return a copy without fields that already match *current*."""
        return ServiceLineUpdate(
            nickname=self.nickname if self.nickname != current.nickname else None,
            product_reference_id=(
                self.product_reference_id
                if self.product_reference_id != current.product_reference_id
                else None
            ),
            public_ip=self.public_ip if self.public_ip != current.public_ip else None,
        )

    def is_empty(self) -> bool:
        return (
            self.nickname is None
            and self.product_reference_id is None
            and self.public_ip is None
        )


class ServiceLine(EnterpriseResource[ServiceLineRecord]):
    def __init__(
        self,
        session: EnterpriseSession,
        record: ServiceLineRecord,
        account_number: str | None = None,
    ) -> None:
        account_number = account_number or record.get("accountNumber") or ""
        super().__init__(session, transform_service_line(record, account_number))

    @property
    def account_number(self) -> str:
        return self._record["accountNumber"]

    @property
    def active(self) -> bool:
        return bool(self._record.get("active"))

    @property
    def address_reference_id(self) -> str:
        return self._record.get("addressReferenceId") or ""

    @property
    def delayed_product_id(self) -> str | None:
        return self._record.get("delayedProductId")

    @property
    def end_date(self) -> datetime | None:
        return self._record.get("endDate")

    @property
    def nickname(self) -> str | None:
        return self._record.get("nickname")

    @property
    def opt_in_product_id(self) -> str | None:
        return self._record.get("optInProductId")

    @property
    def product_reference_id(self) -> str:
        return self._record.get("productReferenceId") or ""

    @property
    def public_ip(self) -> bool:
        return bool(self._record.get("publicIp"))

    @property
    def service_line_number(self) -> str:
        return self._record["serviceLineNumber"]

    @property
    def start_date(self) -> datetime | None:
        return self._record.get("startDate")

    @property
    def _endpoint(self) -> str:
        return (
            f"/enterprise/v1/account/{self.account_number}"
            f"/service-lines/{self.service_line_number}"
        )

    def _terminal_endpoint(self, terminal: UserTerminal | str) -> str:
        terminal_id = terminal if isinstance(terminal, str) else terminal.user_terminal_id
        return (
            f"/enterprise/v1/account/{self.account_number}"
            f"/user-terminals/{terminal_id}/{self.service_line_number}"
        )

    async def add_terminal(self, terminal: UserTerminal | str) -> bool:
        return await self._attempt(
            f"add terminal to service line {self.service_line_number}",
            self.session.post(self._terminal_endpoint(terminal)),
        )

    async def remove_terminal(self, terminal: UserTerminal | str) -> bool:
        return await self._attempt(
            f"remove terminal from service line {self.service_line_number}",
            self.session.delete(self._terminal_endpoint(terminal)),
        )

    async def fetch_daily_usage(self, *, include_unknown_data_bin: bool | None = None) -> Record:
        body = await self.session.get(
            f"{self._endpoint}/billing-cycle/all",
            {"includeUnknownDataBin": include_unknown_data_bin},
        )
        return transform_service_line_usage(unwrap_content(body))

    async def fetch_partial_periods(self) -> list[Record]:
        body = await self.session.get(f"{self._endpoint}/billing-cycle/partial-periods")
        return [transform_partial_period(record) for record in unwrap_content(body)]

    async def opt_in(self) -> Record:
        body = await self.session.post(f"{self._endpoint}/opt-in")
        return transform_opt_in_product(unwrap_content(body))

    async def opt_out(self) -> Record:
        body = await self.session.delete(f"{self._endpoint}/opt-in")
        return transform_opt_in_product(unwrap_content(body))

    async def save(self, update: ServiceLineUpdate) -> bool:
        """Submit the fields of *update* that differ from the current record.

        Returns *False* when there is nothing to change or a call fails.  The
        record reflects every call that succeeded before a failure.
        """
        pending = update.changes(self)
        if pending.is_empty():
            return False

        calls: list[tuple[str, Any]] = []
        if pending.nickname is not None:
            calls.append(("nickname", {"nickname": pending.nickname}))
        if pending.product_reference_id is not None:
            calls.append((f"product/{pending.product_reference_id}", None))
        if pending.public_ip is not None:
            calls.append(("public-ip", {"publicIp": pending.public_ip}))

        for suffix, payload in calls:
            try:
                body = await self.session.put(f"{self._endpoint}/{suffix}", payload)
                record = transform_service_line(unwrap_content(body), self.account_number)
            except BEST_EFFORT_ERRORS as exc:
                _LOG.warning(
                    "update %s of service line %s failed: %s",
                    suffix.split("/", 1)[0],
                    self.service_line_number,
                    exc,
                )
                return False
            self._record = record
        return True
