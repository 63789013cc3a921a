"""Typed, immutable records used by the enterprise request pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Mapping, Sequence, TypeVar

from starlink_api.enterprise.clock import Clock, default_clock
from starlink_api.enterprise.errors import MalformedResponseError

T = TypeVar("T")

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# methods whose payload travels as the JSON request body
BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})

Payload = Mapping[str, Any] | Sequence[Any] | str


@dataclass(frozen=True, slots=True)
class Token:
    """Bearer token obtained through the client-credentials exchange."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
    scope: str = ""
    obtained_at: float = field(default_factory=default_clock)

    @classmethod
    def from_response(cls, data: Mapping[str, Any], *, obtained_at: float) -> Token:
        return cls(
            access_token=str(data["access_token"]),
            token_type=str(data.get("token_type") or "Bearer"),
            expires_in=int(data.get("expires_in") or 3600),
            scope=str(data.get("scope") or ""),
            obtained_at=obtained_at,
        )

    @property
    def expires_at(self) -> float:
        return self.obtained_at + self.expires_in

    @property
    def authorization(self) -> str:
        """Value of the ``authorization`` header."""
        return f"{self.token_type} {self.access_token}"

    def is_expired(self, *, clock: Clock = default_clock, grace_seconds: float = 0) -> bool:
        """Return *True* once fewer than ``grace_seconds`` of validity remain.

        The grace is capped at half the token lifetime so short-lived tokens
        are still reused.
        """
        grace = min(grace_seconds, self.expires_in / 2)
        return (self.expires_at - clock()) <= grace


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """A single Enterprise API call, before headers and URL are resolved."""

    method: HTTPMethod
    endpoint: str
    params: Mapping[str, Any] = field(default_factory=dict)
    payload: Payload | None = None

    @property
    def has_body(self) -> bool:
        return self.method in BODY_METHODS and self.payload is not None

    def query(self) -> dict[str, str]:
        """Query parameters coerced to strings; ``None`` values are dropped."""
        return {
            key: _coerce_query_value(value)
            for key, value in self.params.items()
            if value is not None
        }

    def fingerprint(self) -> str:
        """Stable textual identity of the request, used as a rate-window key part."""
        payload = self.payload if self.payload is not None else ""
        return json.dumps(
            [self.method, self.endpoint, self.query(), payload],
            sort_keys=True,
            default=str,
        )


def _coerce_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_coerce_query_value(item) for item in value)
    return str(value)


@dataclass(frozen=True, slots=True)
class PageEnvelope(Generic[T]):
    """The ``content`` block of a paged list response."""

    total_count: int
    page_index: int
    limit: int
    is_last_page: bool
    results: list[T]

    @classmethod
    def from_response(cls, body: Any) -> PageEnvelope[Any]:
        content = body.get("content") if isinstance(body, Mapping) else None
        if not isinstance(content, Mapping):
            raise MalformedResponseError("Paged response is missing its content block")
        try:
            return cls(
                total_count=int(content["totalCount"]),
                page_index=int(content.get("pageIndex") or 0),
                limit=int(content.get("limit") or 0),
                is_last_page=bool(content["isLastPage"]),
                results=list(content.get("results") or []),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Invalid paged content: {exc}") from exc


def unwrap_content(body: Any) -> Any:
    """Return the ``content`` of a singular envelope."""
    if not isinstance(body, Mapping) or "content" not in body:
        raise MalformedResponseError("Response is missing its content field")
    return body["content"]
