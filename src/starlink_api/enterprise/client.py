"""Top-level Enterprise API client."""

from __future__ import annotations

import logging
from typing import Iterable

import httpx

from starlink_api.config import EnterpriseConfig
from starlink_api.enterprise.clock import Clock, Sleeper, default_clock, default_sleep
from starlink_api.enterprise.pagination import PageQuery, collect
from starlink_api.enterprise.resources.account import Account
from starlink_api.enterprise.session import EnterpriseSession

_LOG = logging.getLogger("starlink-api.enterprise.client")


class StarlinkAPI:
    """Entry point for the Enterprise management and telemetry API.

    Each instance owns one :class:`EnterpriseSession`; every resource it
    returns shares that session, so clients built from different credential
    pairs never share tokens or rate-window state.

    Example
    -------
    >>> async with StarlinkAPI("client-id", "client-secret") as api:  # doctest: +SKIP
    ...     accounts = await api.fetch_accounts()
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        *,
        config: EnterpriseConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Clock = default_clock,
        sleep: Sleeper = default_sleep,
    ) -> None:
        if config is None:
            if not client_id or not client_secret:
                raise ValueError("client_id and client_secret are required")
            config = EnterpriseConfig(client_id=client_id, client_secret=client_secret)
        self.session = EnterpriseSession(
            config, http_client=http_client, clock=clock, sleep=sleep
        )

    @classmethod
    def from_env(cls, *, http_client: httpx.AsyncClient | None = None) -> StarlinkAPI:
        config = EnterpriseConfig.from_env()
        if not config.is_auth_configured():
            raise ValueError(
                "STARLINK_CLIENT_ID and STARLINK_CLIENT_SECRET must be set"
            )
        return cls(config=config, http_client=http_client)

    @property
    def client_id(self) -> str:
        return self.session.client_id

    async def fetch_accounts(
        self,
        *,
        region_codes: Iterable[str] | None = None,
        limit: int = 50,
        page: int = 0,
        fetch_all: bool = True,
    ) -> list[Account]:
        """Accounts visible to the authenticated client."""
        query = PageQuery(
            endpoint="/enterprise/v1/accounts",
            filters={
                "regionCode": list(region_codes) if region_codes is not None else None
            },
        )
        accounts = await collect(
            self.session,
            query,
            lambda record: Account(self.session, record),
            fetch_all=fetch_all,
            page=page,
            limit=limit,
        )
        _LOG.debug("Fetched %s accounts", len(accounts))
        return accounts

    async def aclose(self) -> None:
        await self.session.aclose()

    async def __aenter__(self) -> StarlinkAPI:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
