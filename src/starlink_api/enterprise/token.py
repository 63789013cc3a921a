"""Client-credentials token lifecycle for the Enterprise API.

A :class:`TokenManager` belongs to one :class:`~starlink_api.enterprise.session.EnterpriseSession`
and therefore to one credential pair.  It holds at most one token at a time.

The exchange posts a form-encoded body to the authentication endpoint::

    client_id=...&client_secret=...&grant_type=client_credentials

and expects ``{access_token, token_type, expires_in, scope}`` back.  Any
failure (transport error, non-2xx status, undecodable body, missing
``access_token``) clears the cached token and reports ``False``; it is up to
the caller to decide whether that is fatal.
"""

from __future__ import annotations

import logging

import httpx

from starlink_api.enterprise.clock import Clock, default_clock
from starlink_api.enterprise.models import Token
from starlink_api.utils.logging import mask_sensitive

_LOG = logging.getLogger("starlink-api.enterprise.token")


class TokenManager:
    """Obtain, cache and invalidate the bearer token of one credential pair."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        auth_url: str,
        http_client: httpx.AsyncClient,
        clock: Clock = default_clock,
        grace_seconds: float = 60,
    ) -> None:
        self.client_id = client_id
        self._client_secret = client_secret
        self.auth_url = auth_url
        self._http = http_client
        self._clock = clock
        self.grace_seconds = grace_seconds
        self._token: Token | None = None

    @property
    def token(self) -> Token | None:
        return self._token

    def has_valid_token(self) -> bool:
        return self._token is not None and not self._token.is_expired(
            clock=self._clock, grace_seconds=self.grace_seconds
        )

    def invalidate(self) -> None:
        self._token = None

    async def ensure_token(self) -> bool:
        """Return *True* if a usable token is cached or could be obtained."""
        if self.has_valid_token():
            return True
        return await self.authenticate()

    async def authenticate(self) -> bool:
        """Run the client-credentials exchange, replacing any cached token."""
        form = {
            "client_id": self.client_id,
            "client_secret": self._client_secret,  # noqa: S105
            "grant_type": "client_credentials",
        }
        try:
            resp = await self._http.post(self.auth_url, data=form)
        except httpx.HTTPError as exc:
            _LOG.warning(
                "Token request for client=%s failed: %s",
                mask_sensitive(self.client_id),
                exc.__class__.__name__,
            )
            self.invalidate()
            return False

        if not resp.is_success:
            _LOG.warning(
                "Token endpoint returned %s for client=%s",
                resp.status_code,
                mask_sensitive(self.client_id),
            )
            self.invalidate()
            return False

        try:
            data = resp.json()
        except ValueError:
            _LOG.warning("Token endpoint returned a non-JSON body")
            self.invalidate()
            return False

        if not isinstance(data, dict) or not data.get("access_token"):
            _LOG.warning("Token response missing access_token")
            self.invalidate()
            return False

        try:
            self._token = Token.from_response(data, obtained_at=self._clock())
        except (TypeError, ValueError):
            _LOG.warning("Token response has invalid expires_in")
            self.invalidate()
            return False
        _LOG.info(
            "Obtained %s token for client=%s (expires in %ss)",
            self._token.token_type,
            mask_sensitive(self.client_id),
            self._token.expires_in,
        )
        return True
