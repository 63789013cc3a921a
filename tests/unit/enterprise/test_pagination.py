"""Unit tests for paged list retrieval."""

from __future__ import annotations

import json

import httpx
import pytest

from starlink_api.enterprise.errors import (
    AggregationIntegrityError,
    EnterpriseHTTPError,
    MalformedResponseError,
)
from starlink_api.enterprise.pagination import PageQuery, collect
from starlink_api.enterprise.session import EnterpriseSession

from enterprise_fakes import FakeEnterprise, paged

SERVICE_LINES = "/enterprise/v1/account/ACC-1/service-lines"


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #
def _pages(sizes: list[int], total: int):
    """Reply factory serving ``sizes`` rows per page, numbered consecutively."""
    offsets = [sum(sizes[:i]) for i in range(len(sizes))]

    def _reply(request: httpx.Request) -> httpx.Response:
        index = int(request.url.params["page"])
        rows = [{"n": offsets[index] + i} for i in range(sizes[index])]
        return httpx.Response(
            200,
            json=paged(rows, total=total, page=index, last=index == len(sizes) - 1),
        )

    return _reply


# --------------------------------------------------------------------------- #
# Tests                                                                       #
# --------------------------------------------------------------------------- #
@pytest.mark.anyio
async def test_fetch_all_concatenates_pages_in_order(
    session: EnterpriseSession, fake: FakeEnterprise
):
    reply = _pages([100, 100, 37], total=237)
    fake.reply(reply, reply, reply)

    rows = await collect(session, PageQuery(SERVICE_LINES), limit=10, page=4)

    assert [row["n"] for row in rows] == list(range(237))
    pages = [r.url.params["page"] for r in fake.api_requests]
    limits = {r.url.params["limit"] for r in fake.api_requests}
    assert pages == ["0", "1", "2"]
    assert limits == {"100"}


@pytest.mark.anyio
async def test_fetch_all_rejects_incomplete_aggregate(
    session: EnterpriseSession, fake: FakeEnterprise
):
    reply = _pages([100, 100, 30], total=237)
    fake.reply(reply, reply, reply)

    with pytest.raises(AggregationIntegrityError) as excinfo:
        await collect(session, PageQuery(SERVICE_LINES))

    error = excinfo.value
    assert not isinstance(error, EnterpriseHTTPError)
    assert (error.expected, error.received) == (237, 230)
    assert SERVICE_LINES in str(error)


@pytest.mark.anyio
async def test_single_page_returns_raw_results(
    session: EnterpriseSession, fake: FakeEnterprise
):
    fake.reply(
        httpx.Response(
            200, json=paged([{"n": 20}, {"n": 21}], total=500, page=2, limit=10, last=False)
        )
    )

    rows = await collect(session, PageQuery(SERVICE_LINES), fetch_all=False, page=2, limit=10)

    assert rows == [{"n": 20}, {"n": 21}]
    assert len(fake.api_requests) == 1
    params = fake.api_requests[0].url.params
    assert (params["page"], params["limit"]) == ("2", "10")


@pytest.mark.anyio
async def test_transform_applied_to_each_row(
    session: EnterpriseSession, fake: FakeEnterprise
):
    fake.reply(httpx.Response(200, json=paged([{"n": 1}, {"n": 2}], total=2)))
    rows = await collect(session, PageQuery(SERVICE_LINES), lambda row: row["n"] * 10)
    assert rows == [10, 20]


@pytest.mark.anyio
async def test_post_query_sends_paging_in_body(
    session: EnterpriseSession, fake: FakeEnterprise
):
    fake.reply(httpx.Response(200, json=paged([], total=0)))
    query = PageQuery(
        "/enterprise/v1/accounts/ACC-1/billing-cycles/query",
        method="POST",
        filters={"serviceLinesFilter": ["SL-1"], "previousBillingCycles": None},
        page_key="pageIndex",
        limit_key="pageLimit",
        page_size=500,
    )

    assert await collect(session, query) == []

    request = fake.api_requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {
        "serviceLinesFilter": ["SL-1"],
        "pageIndex": 0,
        "pageLimit": 500,
    }


@pytest.mark.anyio
async def test_filters_travel_with_every_page(
    session: EnterpriseSession, fake: FakeEnterprise
):
    reply = _pages([1, 1], total=2)
    fake.reply(reply, reply)
    query = PageQuery(SERVICE_LINES, filters={"searchString": "boat"})

    await collect(session, query)

    assert all(r.url.params["searchString"] == "boat" for r in fake.api_requests)


def test_page_size_none_omits_limit():
    query = PageQuery("/enterprise/v1/account/ACC-1/routers/configs", page_size=None)
    assert query.arguments(0, query.page_size) == {"page": 0}


@pytest.mark.anyio
async def test_missing_content_block_is_malformed(
    session: EnterpriseSession, fake: FakeEnterprise
):
    fake.reply(httpx.Response(200, json={"errors": []}))
    with pytest.raises(MalformedResponseError):
        await collect(session, PageQuery(SERVICE_LINES))
