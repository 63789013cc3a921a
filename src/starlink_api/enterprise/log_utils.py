"""Structured logging helpers for the enterprise pipeline.

This module purposefully restricts **which** contextual attributes are attached
to log records in order to avoid accidentally leaking secrets.  All helpers
ONLY inject the following *non-sensitive* fields:

- ``client_id``  – The OAuth client identifier (first 4 chars kept)
- ``endpoint``   – Enterprise API path being called
- ``method``     – HTTP verb

Client secrets and bearer tokens are never accepted.

The adapter is a thin wrapper around :class:`logging.LoggerAdapter`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

from starlink_api.utils.logging import mask_sensitive


class _EnterpriseLoggerAdapter(logging.LoggerAdapter):
    """Inject whitelisted request context into log records."""

    extra_keys = ("client_id", "endpoint", "method")

    def __init__(self, logger: logging.Logger, extra: Mapping[str, Any] | None = None):
        extra_clean: MutableMapping[str, Any] = {}
        for k in self.extra_keys:
            if extra is None or extra.get(k) is None:
                continue
            if k == "client_id":
                extra_clean[k] = mask_sensitive(str(extra[k]))
            else:
                extra_clean[k] = extra[k]
        super().__init__(logger, extra_clean)

    def process(self, msg: str, kwargs: MutableMapping[str, Any]):
        if "extra" not in kwargs or kwargs["extra"] is None:
            kwargs["extra"] = {}
        # merge but do not overwrite call-site provided extras
        for k, v in self.extra.items():
            kwargs["extra"].setdefault(k, v)
        return msg, kwargs


def get_enterprise_logger(
    *,
    base_logger_name: str = "starlink-api.enterprise",
    client_id: str | None = None,
    endpoint: str | None = None,
    method: str | None = None,
) -> logging.LoggerAdapter:
    """Return a LoggerAdapter pre-filled with request context."""
    logger = logging.getLogger(base_logger_name)
    return _EnterpriseLoggerAdapter(
        logger,
        {"client_id": client_id, "endpoint": endpoint, "method": method},
    )
