"""Exception types raised by the Enterprise API pipeline.

Only lightweight, **data-carrying** exceptions live here so that callers can
turn them into log lines, HTTP responses or user-friendly messages.  None of
them ever carries a client secret or bearer token.
"""

from __future__ import annotations

from typing import Any


class EnterpriseError(RuntimeError):
    """Base class for every failure surfaced by the Enterprise API client."""

    code = "enterprise_error"

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serialisable payload **without secrets**."""
        return {"error": self.code, "message": str(self)}


class AuthenticationError(EnterpriseError):
    """Raised when no bearer token could be obtained for the credential pair."""

    code = "authentication_failed"

    def __init__(self, *, client_id: str, message: str | None = None) -> None:
        super().__init__(message or "Could not authenticate with API")
        # already masked by the caller
        self.client_id: str = client_id

    def to_payload(self) -> dict[str, Any]:
        return {**super().to_payload(), "client_id": self.client_id}


class EnterpriseHTTPError(EnterpriseError):
    """Raised for a non-2xx response that could not be recovered."""

    code = "http_error"

    def __init__(self, *, url: str, status_code: int, reason: str) -> None:
        super().__init__(f"{url} [{status_code}] {reason}")
        self.url: str = url
        self.status_code: int = status_code
        self.reason: str = reason

    def to_payload(self) -> dict[str, Any]:
        return {
            **super().to_payload(),
            "url": self.url,
            "status_code": self.status_code,
            "reason": self.reason,
        }


class AggregationIntegrityError(EnterpriseError):
    """Raised when paged results do not add up to the reported total count.

    No HTTP call failed; the service's page accounting diverged from the rows
    it actually returned (e.g. records changed while paging).
    """

    code = "aggregation_integrity"

    def __init__(self, *, endpoint: str, expected: int, received: int) -> None:
        super().__init__(
            f"Could not fetch all results from {endpoint}: "
            f"expected {expected}, received {received}"
        )
        self.endpoint: str = endpoint
        self.expected: int = expected
        self.received: int = received

    def to_payload(self) -> dict[str, Any]:
        return {
            **super().to_payload(),
            "endpoint": self.endpoint,
            "expected": self.expected,
            "received": self.received,
        }


class MalformedResponseError(EnterpriseError):
    """Raised when a response body does not have the expected envelope shape."""

    code = "malformed_response"
