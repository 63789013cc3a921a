"""Fixtures wiring the in-memory Enterprise API into sessions and clients."""

from __future__ import annotations

import httpx
import pytest

from starlink_api.config import EnterpriseConfig
from starlink_api.enterprise.client import StarlinkAPI
from starlink_api.enterprise.session import EnterpriseSession

from enterprise_fakes import AUTH_URL, BASE_URL, FakeClock, FakeEnterprise


@pytest.fixture()
def fake() -> FakeEnterprise:
    return FakeEnterprise()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sleeps() -> list[float]:
    return []


@pytest.fixture()
def config() -> EnterpriseConfig:
    return EnterpriseConfig(
        client_id="client-abcdef",
        client_secret="secret-123",
        base_url=BASE_URL,
        auth_url=AUTH_URL,
    )


@pytest.fixture()
def http_client(fake: FakeEnterprise) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))


@pytest.fixture()
def session(
    config: EnterpriseConfig,
    http_client: httpx.AsyncClient,
    clock: FakeClock,
    sleeps: list[float],
) -> EnterpriseSession:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return EnterpriseSession(config, http_client=http_client, clock=clock, sleep=_sleep)


@pytest.fixture()
def api(
    config: EnterpriseConfig, http_client: httpx.AsyncClient, clock: FakeClock
) -> StarlinkAPI:
    return StarlinkAPI(config=config, http_client=http_client, clock=clock)
