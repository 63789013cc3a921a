"""Account resource: the entry point to everything an account owns."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from starlink_api.enterprise.models import PageEnvelope, unwrap_content
from starlink_api.enterprise.pagination import PageQuery, collect
from starlink_api.enterprise.records import (
    AccountRecord,
    AddressRecord,
    Record,
    SubscriptionProductRecord,
    transform_realtime_data_tracking,
    transform_subscription,
)
from starlink_api.enterprise.resources.base import EnterpriseResource
from starlink_api.enterprise.resources.router import Router
from starlink_api.enterprise.resources.router_config import RouterConfig
from starlink_api.enterprise.resources.service_line import ServiceLine
from starlink_api.enterprise.resources.user_terminal import UserTerminal
from starlink_api.enterprise.telemetry import TelemetryData, pivot_telemetry


class Account(EnterpriseResource[AccountRecord]):
    @property
    def account_name(self) -> str | None:
        return self._record.get("accountName") or None

    @property
    def account_number(self) -> str:
        return self._record["accountNumber"]

    @property
    def default_router_config_id(self) -> str | None:
        return self._record.get("defaultRouterConfigId") or None

    @property
    def region_code(self) -> str:
        return self._record.get("regionCode") or ""

    @property
    def _base(self) -> str:
        return f"/enterprise/v1/account/{self.account_number}"

    # ------------------------------------------------------------------ #
    # Addresses                                                          #
    # ------------------------------------------------------------------ #
    async def check_capacity(self, latitude: float, longitude: float) -> int:
        """Available capacity at the given coordinates."""
        body = await self.session.post(
            f"{self._base}/addresses/check-capacity",
            {"latitude": latitude, "longitude": longitude},
        )
        return unwrap_content(body)["availableCapacity"]

    async def create_address(self, address: Mapping[str, Any]) -> AddressRecord:
        body = await self.session.post(f"{self._base}/addresses", dict(address))
        return unwrap_content(body)

    async def update_address(self, address: Mapping[str, Any]) -> AddressRecord:
        """Update an address; *address* must carry ``addressReferenceId``."""
        if not address.get("addressReferenceId"):
            raise ValueError("addressReferenceId is required to update an address")
        body = await self.session.put(f"{self._base}/addresses", dict(address))
        return unwrap_content(body)

    async def fetch_address(self, address_reference_id: str) -> AddressRecord:
        body = await self.session.get(f"{self._base}/addresses/{address_reference_id}")
        return unwrap_content(body)

    async def fetch_addresses(
        self,
        *,
        address_ids: Iterable[str] | None = None,
        metadata: str | None = None,
        limit: int = 50,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[AddressRecord]:
        query = PageQuery(
            endpoint=f"{self._base}/addresses",
            filters={
                "addressIds": list(address_ids) if address_ids is not None else None,
                "metadata": metadata,
            },
        )
        return await collect(
            self.session, query, fetch_all=fetch_all, page=page, limit=limit
        )

    # ------------------------------------------------------------------ #
    # Billing                                                            #
    # ------------------------------------------------------------------ #
    async def fetch_realtime_data_tracking(
        self,
        *,
        service_lines_filter: Iterable[str] | None = None,
        previous_billing_cycles: int | None = None,
        query_start_date: str | None = None,
        limit: int = 500,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[Record]:
        query = PageQuery(
            endpoint=f"/enterprise/v1/accounts/{self.account_number}/billing-cycles/query",
            method="POST",
            filters={
                "serviceLinesFilter": (
                    list(service_lines_filter) if service_lines_filter is not None else None
                ),
                "previousBillingCycles": previous_billing_cycles,
                "queryStartDateParam": query_start_date,
            },
            page_key="pageIndex",
            limit_key="pageLimit",
            page_size=500,
        )
        return await collect(
            self.session,
            query,
            transform_realtime_data_tracking,
            fetch_all=fetch_all,
            page=page,
            limit=limit,
        )

    # ------------------------------------------------------------------ #
    # Routers                                                            #
    # ------------------------------------------------------------------ #
    async def fetch_router(self, router_id: str) -> Router:
        body = await self.session.get(f"{self._base}/routers/{router_id}")
        return Router(self.session, unwrap_content(body))

    async def create_router_config(self, nickname: str, router_config: Any) -> RouterConfig:
        body = await self.session.post(
            f"{self._base}/routers/configs",
            {"nickname": nickname, "routerConfigJson": json.dumps(router_config)},
        )
        return RouterConfig(self.session, unwrap_content(body))

    async def fetch_router_config(self, config_id: str) -> RouterConfig:
        body = await self.session.get(f"{self._base}/routers/configs/{config_id}")
        return RouterConfig(self.session, unwrap_content(body))

    async def fetch_router_configs(
        self, *, page: int = 0, fetch_all: bool = True
    ) -> list[RouterConfig]:
        # this endpoint has a fixed server-side page size
        query = PageQuery(endpoint=f"{self._base}/routers/configs", page_size=None)
        return await collect(
            self.session,
            query,
            lambda record: RouterConfig(self.session, record),
            fetch_all=fetch_all,
            page=page,
            limit=None,
        )

    async def update_default_router_config(self, config_id: str) -> bool:
        """Make *config_id* the account default; refreshes this record."""
        body = await self.session.put(
            f"/enterprise/v1/accounts/{self.account_number}/update-default-router-config",
            {"configId": config_id},
        )
        envelope = PageEnvelope.from_response(body)
        for record in envelope.results:
            if record.get("accountNumber") == self.account_number:
                self._record = dict(record)
                return True
        return False

    # ------------------------------------------------------------------ #
    # Service lines                                                      #
    # ------------------------------------------------------------------ #
    def _service_line(self, record: Mapping[str, Any]) -> ServiceLine:
        return ServiceLine(self.session, record, self.account_number)

    async def create_service_line(
        self, address_reference_id: str, product_reference_id: str
    ) -> ServiceLine:
        body = await self.session.post(
            f"{self._base}/service-lines",
            {
                "addressReferenceId": address_reference_id,
                "productReferenceId": product_reference_id,
            },
        )
        return self._service_line(unwrap_content(body))

    async def fetch_service_line(self, service_line_number: str) -> ServiceLine:
        body = await self.session.get(f"{self._base}/service-lines/{service_line_number}")
        return self._service_line(unwrap_content(body))

    async def fetch_service_lines(
        self,
        *,
        address_reference_id: str | None = None,
        search_string: str | None = None,
        order_by_created_date_descending: bool | None = None,
        limit: int = 50,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[ServiceLine]:
        query = PageQuery(
            endpoint=f"{self._base}/service-lines",
            filters={
                "addressReferenceId": address_reference_id,
                "searchString": search_string,
                "orderByCreatedDateDescending": order_by_created_date_descending,
            },
        )
        return await collect(
            self.session,
            query,
            self._service_line,
            fetch_all=fetch_all,
            page=page,
            limit=limit,
        )

    async def remove_service_line(
        self,
        service_line_number: str,
        *,
        reason_for_cancellation: str | None = None,
        end_now: bool | None = None,
    ) -> bool:
        return await self._attempt(
            f"remove service line {service_line_number}",
            self.session.delete(
                f"{self._base}/service-lines/{service_line_number}",
                {"reasonForCancellation": reason_for_cancellation, "endNow": end_now},
            ),
        )

    # ------------------------------------------------------------------ #
    # Subscriptions                                                      #
    # ------------------------------------------------------------------ #
    async def fetch_subscription(self, subscription_reference_id: str) -> Record:
        body = await self.session.get(
            f"{self._base}/subscriptions/{subscription_reference_id}"
        )
        return transform_subscription(unwrap_content(body))

    async def fetch_subscriptions(
        self, *, limit: int = 50, page: int = 0, fetch_all: bool = True
    ) -> list[Record]:
        query = PageQuery(endpoint=f"{self._base}/subscriptions", page_size=50)
        return await collect(
            self.session,
            query,
            transform_subscription,
            fetch_all=fetch_all,
            page=page,
            limit=limit,
        )

    async def fetch_subscription_products(
        self,
        *,
        line_id: str | None = None,
        active_lines: bool | None = None,
        limit: int = 50,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[SubscriptionProductRecord]:
        query = PageQuery(
            endpoint=f"{self._base}/subscriptions/available-products",
            filters={"lineId": line_id, "activeLines": active_lines},
            page_size=50,
        )
        return await collect(
            self.session, query, fetch_all=fetch_all, page=page, limit=limit
        )

    # ------------------------------------------------------------------ #
    # User terminals                                                     #
    # ------------------------------------------------------------------ #
    async def add_user_terminal(self, device_id: str) -> bool:
        return await self._attempt(
            f"add user terminal {device_id}",
            self.session.post(f"{self._base}/user-terminals/{device_id}"),
        )

    async def remove_user_terminal(self, device_id: str) -> bool:
        return await self._attempt(
            f"remove user terminal {device_id}",
            self.session.delete(f"{self._base}/user-terminals/{device_id}"),
        )

    async def fetch_user_terminals(
        self,
        *,
        service_line_numbers: Iterable[str] | None = None,
        user_terminal_ids: Iterable[str] | None = None,
        has_service_line: bool | None = None,
        active: bool | None = None,
        search_string: str | None = None,
        limit: int = 50,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[UserTerminal]:
        query = PageQuery(
            endpoint=f"{self._base}/user-terminals",
            filters={
                "serviceLineNumbers": (
                    list(service_line_numbers) if service_line_numbers is not None else None
                ),
                "userTerminalIds": (
                    list(user_terminal_ids) if user_terminal_ids is not None else None
                ),
                "hasServiceLine": has_service_line,
                "active": active,
                "searchString": search_string,
            },
        )
        return await collect(
            self.session,
            query,
            lambda record: UserTerminal(self.session, record, self.account_number),
            fetch_all=fetch_all,
            page=page,
            limit=limit,
        )

    # ------------------------------------------------------------------ #
    # Telemetry                                                          #
    # ------------------------------------------------------------------ #
    async def telemetry(self, batch_size: int = 100, max_linger_ms: int = 100) -> TelemetryData:
        """Pull one batch from the telemetry stream, grouped by device type."""
        body = await self.session.post(
            "/telemetry/stream/v1/telemetry",
            {
                "batchSize": batch_size,
                "maxLingerMs": max_linger_ms,
                "accountNumber": self.account_number,
            },
        )
        return pivot_telemetry(body)
