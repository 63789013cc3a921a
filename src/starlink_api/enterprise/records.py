"""Wire shapes returned by the Enterprise API and their date conversions.

The API sends timestamps as ISO-8601 strings (often with seven fractional
digits and a ``Z`` suffix).  The ``transform_*`` helpers return copies of the
records with those strings replaced by timezone-aware :class:`datetime`
objects; every other field is passed through untouched.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping, TypedDict

Record = dict[str, Any]

_FRACTION = re.compile(r"\.(\d+)")


class AccountRecord(TypedDict):
    accountNumber: str
    regionCode: str
    accountName: str | None
    defaultRouterConfigId: str | None


class AddressRecord(TypedDict, total=False):
    addressReferenceId: str
    addressLines: list[str]
    locality: str | None
    administrativeArea: str | None
    administrativeAreaCode: str
    region: str | None
    regionCode: str
    postalCode: str | None
    metadata: str | None
    formattedAddress: str
    latitude: float
    longitude: float


class RouterRecord(TypedDict):
    routerId: str
    accountNumber: str
    userTerminalId: str
    configId: str
    directLinkToDish: bool
    hardwareVersion: str


class RouterConfigRecord(TypedDict):
    accountNumber: str
    configId: str
    nickname: str
    routerConfigJson: str


class SubscriptionProductRecord(TypedDict):
    productReferenceId: str
    name: str
    price: float
    isoCurrencyCode: str
    isSla: bool


class UserTerminalRecord(TypedDict, total=False):
    userTerminalId: str
    kitSerialNumber: str
    dishSerialNumber: str
    serviceLineNumber: str | None
    active: bool
    nickname: str | None
    routers: list[RouterRecord]
    accountNumber: str


class ServiceLineRecord(TypedDict, total=False):
    addressReferenceId: str
    serviceLineNumber: str
    nickname: str | None
    productReferenceId: str
    delayedProductId: str | None
    optInProductId: str | None
    startDate: str | None
    endDate: str | None
    publicIp: bool
    active: bool
    accountNumber: str


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an API timestamp; naive values are assumed to be UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # datetime.fromisoformat accepts at most microsecond precision
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _with_dates(record: Mapping[str, Any], *keys: str) -> Record:
    out = dict(record)
    for key in keys:
        if key in out:
            out[key] = parse_datetime(out[key])
    return out


def transform_service_line(record: Mapping[str, Any], account_number: str) -> Record:
    out = _with_dates(record, "startDate", "endDate")
    out["accountNumber"] = account_number
    return out


def transform_subscription(record: Mapping[str, Any]) -> Record:
    return _with_dates(
        record, "startDate", "normalizedStartDate", "endDate", "serviceEndDate"
    )


def transform_opt_in_product(record: Mapping[str, Any]) -> Record:
    return _with_dates(record, "activatedDate", "deactivatedDate")


def transform_service_plan(plan: Mapping[str, Any] | None) -> Record | None:
    if plan is None:
        return None
    return _with_dates(
        plan,
        "activeFrom",
        "subscriptionActiveFrom",
        "subscriptionEndDate",
        "overageLineDeactivatedDate",
    )


def transform_realtime_data_tracking(record: Mapping[str, Any]) -> Record:
    out = _with_dates(record, "startDate", "endDate", "lastUpdated")
    out["servicePlan"] = transform_service_plan(record.get("servicePlan"))
    cycles = record.get("billingCycles")
    if cycles is not None:
        out["billingCycles"] = [
            {
                **_with_dates(cycle, "startDate", "endDate"),
                "dailyDataUsage": (
                    [_with_dates(usage, "date") for usage in cycle["dailyDataUsage"]]
                    if cycle.get("dailyDataUsage") is not None
                    else None
                ),
            }
            for cycle in cycles
        ]
    return out


def transform_service_line_usage(record: Mapping[str, Any]) -> Record:
    out = _with_dates(record, "startDate", "endDate", "lastUpdated")
    out["servicePlan"] = transform_service_plan(record.get("servicePlan"))
    cycles = record.get("billingCycles")
    if cycles is not None:
        out["billingCycles"] = [
            {
                **_with_dates(cycle, "startDate", "endDate"),
                "dailyDataUsages": (
                    [_with_dates(usage, "date") for usage in cycle["dailyDataUsages"]]
                    if cycle.get("dailyDataUsages") is not None
                    else None
                ),
            }
            for cycle in cycles
        ]
    return out


def transform_partial_period(record: Mapping[str, Any]) -> Record:
    return _with_dates(record, "periodStart", "periodEnd")
