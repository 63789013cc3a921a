"""In-memory Enterprise API behind ``httpx.MockTransport`` plus a fake clock."""

from __future__ import annotations

from typing import Any, Callable
from urllib.parse import parse_qs

import httpx


AUTH_URL = "https://auth.example.test/auth/connect/token"
BASE_URL = "https://web-api.example.test"

Reply = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeClock:
    """Deterministic clock; tests move it with :meth:`advance`."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeEnterprise:
    """Records every request and answers from queued replies.

    Token requests get a fresh ``tok-<n>`` unless a reply was queued in
    :attr:`token_replies`; API requests pop :attr:`api_replies` and default
    to ``200 {"content": {}}``.
    """

    def __init__(self) -> None:
        self.token_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []
        self.token_replies: list[Reply] = []
        self.api_replies: list[Reply] = []
        self._issued = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == AUTH_URL:
            self.token_requests.append(request)
            if self.token_replies:
                return _resolve(self.token_replies.pop(0), request)
            self._issued += 1
            return httpx.Response(
                200,
                json={
                    "access_token": f"tok-{self._issued}",
                    "token_type": "Bearer",
                    "expires_in": 3600,
                    "scope": "enterprise",
                },
            )
        self.api_requests.append(request)
        if self.api_replies:
            return _resolve(self.api_replies.pop(0), request)
        return httpx.Response(200, json={"content": {}})

    def reply(self, *replies: Reply) -> None:
        self.api_replies.extend(replies)

    def token_form(self, index: int = 0) -> dict[str, list[str]]:
        return parse_qs(self.token_requests[index].content.decode())


def _resolve(reply: Reply, request: httpx.Request) -> httpx.Response:
    return reply(request) if callable(reply) else reply


def content(value: Any) -> dict[str, Any]:
    """Singular envelope around *value*."""
    return {"isValid": True, "errors": [], "warnings": [], "information": [], "content": value}


def paged(
    results: list[Any], *, total: int, page: int = 0, limit: int = 100, last: bool = True
) -> dict[str, Any]:
    return content(
        {
            "totalCount": total,
            "pageIndex": page,
            "limit": limit,
            "isLastPage": last,
            "results": results,
        }
    )


