"""Paged list retrieval shared by every list-returning endpoint.

List endpoints answer with ``content: {totalCount, pageIndex, limit,
isLastPage, results}``.  :func:`collect` either returns one caller-chosen page
or walks every page in order, one request at a time, and checks that the
concatenated rows match ``totalCount``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping, TypeVar

from starlink_api.enterprise.errors import AggregationIntegrityError
from starlink_api.enterprise.models import PageEnvelope
from starlink_api.enterprise.session import EnterpriseSession

_LOG = logging.getLogger("starlink-api.enterprise.pagination")

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class PageQuery:
    """How to address one list endpoint.

    ``GET`` queries carry filters and paging keys in the query string;
    ``POST`` queries carry them in the JSON body.  ``page_size`` is the limit
    used while aggregating all pages; ``None`` omits the limit entirely.
    """

    endpoint: str
    method: Literal["GET", "POST"] = "GET"
    filters: Mapping[str, Any] = field(default_factory=dict)
    page_key: str = "page"
    limit_key: str = "limit"
    page_size: int | None = DEFAULT_PAGE_SIZE

    def arguments(self, page: int, limit: int | None) -> dict[str, Any]:
        args = {k: v for k, v in self.filters.items() if v is not None}
        args[self.page_key] = page
        if limit is not None:
            args[self.limit_key] = limit
        return args


async def fetch_page(
    session: EnterpriseSession,
    query: PageQuery,
    *,
    page: int,
    limit: int | None,
) -> PageEnvelope[Any]:
    args = query.arguments(page, limit)
    if query.method == "POST":
        body = await session.post(query.endpoint, args)
    else:
        body = await session.get(query.endpoint, args)
    return PageEnvelope.from_response(body)


def _identity(record: Any) -> Any:
    return record


async def collect(
    session: EnterpriseSession,
    query: PageQuery,
    transform: Callable[[Any], T] = _identity,
    *,
    fetch_all: bool = True,
    page: int = 0,
    limit: int | None = 50,
) -> list[T]:
    """Return the mapped results of one page, or of every page.

    With ``fetch_all`` the caller's ``page``/``limit`` are ignored: pages are
    requested from index 0 with ``query.page_size`` until one reports
    ``isLastPage``.  A row count different from the final ``totalCount``
    raises :class:`AggregationIntegrityError` instead of returning a partial
    list.
    """
    if not fetch_all:
        envelope = await fetch_page(session, query, page=page, limit=limit)
        return [transform(record) for record in envelope.results]

    results: list[T] = []
    page_index = 0
    while True:
        envelope = await fetch_page(
            session, query, page=page_index, limit=query.page_size
        )
        results.extend(transform(record) for record in envelope.results)
        if envelope.is_last_page:
            break
        page_index += 1

    if len(results) != envelope.total_count:
        raise AggregationIntegrityError(
            endpoint=query.endpoint,
            expected=envelope.total_count,
            received=len(results),
        )

    _LOG.debug(
        "Collected %s records from %s in %s pages",
        len(results),
        query.endpoint,
        page_index + 1,
    )
    return results
