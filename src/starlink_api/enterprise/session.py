"""Authenticated, rate-paced request execution for the Enterprise API.

One :class:`EnterpriseSession` exists per credential pair.  The top-level
client creates it and every resource model built from that client keeps a
reference to the same session, so token and rate-window state are shared
between them but never between different credential pairs.

Pipeline for every call (:meth:`EnterpriseSession.execute`):

1. make sure a token is available, otherwise raise
   :class:`~starlink_api.enterprise.errors.AuthenticationError` without
   touching the network;
2. pace against the sliding rate window, then record the attempt;
3. dispatch with ``accept`` and ``authorization`` headers;
4. on ``401`` re-authenticate and replay the identical request at most once;
5. raise :class:`~starlink_api.enterprise.errors.EnterpriseHTTPError` for any
   other failure.

State is mutated without locks.  That is safe under a single event loop; a
multi-threaded caller must serialise access to the session.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

import httpx

from starlink_api.config import EnterpriseConfig
from starlink_api.enterprise.clock import Clock, Sleeper, default_clock, default_sleep
from starlink_api.enterprise.errors import (
    AuthenticationError,
    EnterpriseHTTPError,
    MalformedResponseError,
)
from starlink_api.enterprise.log_utils import get_enterprise_logger
from starlink_api.enterprise.models import HTTPMethod, Payload, RequestDescriptor
from starlink_api.enterprise.rate_window import RateWindow
from starlink_api.enterprise.token import TokenManager
from starlink_api.utils.logging import mask_sensitive


# replays allowed after a 401 answered by a successful re-authentication
MAX_UNAUTHORIZED_RETRIES: Final[int] = 1


class EnterpriseSession:
    """Shared token, rate window and HTTP connection pool for one credential pair."""

    def __init__(
        self,
        config: EnterpriseConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Clock = default_clock,
        sleep: Sleeper = default_sleep,
    ) -> None:
        self.config = config
        self._owns_http = http_client is None
        self.http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.http_timeout_seconds)
        )
        self.tokens = TokenManager(
            client_id=config.client_id,
            client_secret=config.client_secret,
            auth_url=config.auth_url,
            http_client=self.http,
            clock=clock,
            grace_seconds=config.token_grace_seconds,
        )
        self.rate_window = RateWindow(
            limit=config.request_limit,
            ttl=config.window_seconds,
            margin=config.backoff_margin,
            backoff=config.backoff_seconds,
            clock=clock,
            sleep=sleep,
        )
    @property
    def client_id(self) -> str:
        return self.config.client_id

    @property
    def base_url(self) -> str:
        return self.config.base_url

    # ------------------------------------------------------------------ #
    # Verb helpers                                                       #
    # ------------------------------------------------------------------ #
    async def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("GET", endpoint, params)

    async def delete(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.execute("DELETE", endpoint, params)

    async def post(self, endpoint: str, payload: Payload | None = None) -> Any:
        return await self.execute("POST", endpoint, None, payload)

    async def put(self, endpoint: str, payload: Payload | None = None) -> Any:
        return await self.execute("PUT", endpoint, None, payload)

    async def patch(self, endpoint: str, payload: Payload | None = None) -> Any:
        return await self.execute("PATCH", endpoint, None, payload)

    # ------------------------------------------------------------------ #
    # Pipeline                                                           #
    # ------------------------------------------------------------------ #
    async def execute(
        self,
        method: HTTPMethod,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        payload: Payload | None = None,
    ) -> Any:
        """Perform one Enterprise API call and return the decoded JSON body.

        An empty success body yields ``None``; a body that is not JSON raises
        :class:`~starlink_api.enterprise.errors.MalformedResponseError`.
        """
        if not await self.tokens.ensure_token():
            raise AuthenticationError(client_id=mask_sensitive(self.client_id))

        descriptor = RequestDescriptor(
            method=method, endpoint=endpoint, params=dict(params or {}), payload=payload
        )

        log = get_enterprise_logger(
            base_logger_name="starlink-api.enterprise.session",
            client_id=self.client_id,
            endpoint=endpoint,
            method=method,
        )

        attempt = 0
        while True:
            response = await self._dispatch(descriptor, log)
            if response.is_success:
                return _decode(response)

            if (
                response.status_code == httpx.codes.UNAUTHORIZED
                and attempt < MAX_UNAUTHORIZED_RETRIES
            ):
                attempt += 1
                log.info(
                    "Received 401 for %s %s, re-authenticating", method, endpoint
                )
                if await self.tokens.authenticate():
                    continue

            raise EnterpriseHTTPError(
                url=str(response.request.url),
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

    async def _dispatch(
        self, descriptor: RequestDescriptor, log: logging.LoggerAdapter
    ) -> httpx.Response:
        await self.rate_window.pace()
        # counts towards the window even if the call fails
        self.rate_window.record(descriptor)

        token = self.tokens.token
        headers = {"accept": "application/json"}
        if token is not None:
            headers["authorization"] = token.authorization

        log.debug("%s %s", descriptor.method, descriptor.endpoint)
        return await self.http.request(
            descriptor.method,
            f"{self.base_url}{descriptor.endpoint}",
            params=descriptor.query(),
            headers=headers,
            json=descriptor.payload if descriptor.has_body else None,
        )

    # ------------------------------------------------------------------ #
    # Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> EnterpriseSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(
            f"{response.request.url} returned a non-JSON body"
        ) from exc
