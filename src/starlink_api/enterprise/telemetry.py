"""Pivot the columnar telemetry stream into per-device-type records.

The telemetry endpoint returns rows as positional arrays whose first element
is a device-type key.  Column names for each key live in
``data.columnNamesByDeviceType``; ``metadata.enums.DeviceType`` maps keys to
readable type names (``Router``, ``UserTerminal`` ...) and
``metadata.enums.AlertsByDeviceType`` maps numeric alert codes to names.
"""

from __future__ import annotations

from typing import Any, Mapping

from starlink_api.enterprise.errors import MalformedResponseError

TelemetryData = dict[str, list[dict[str, Any]]]

DEFAULT_DEVICE_TYPES = ("Router", "UserTerminal", "UserTerminalDataUsage")


def pivot_telemetry(body: Mapping[str, Any]) -> TelemetryData:
    try:
        rows = body["data"]["values"]
        columns_by_type = body["data"]["columnNamesByDeviceType"]
        enums = body["metadata"]["enums"]
    except (KeyError, TypeError) as exc:
        raise MalformedResponseError(f"Invalid telemetry payload: {exc}") from exc

    device_types: Mapping[str, str] = enums.get("DeviceType") or {}
    alerts_by_type: Mapping[str, Mapping[str, str]] = enums.get("AlertsByDeviceType") or {}

    results: TelemetryData = {name: [] for name in DEFAULT_DEVICE_TYPES}

    for key, type_name in device_types.items():
        alert_names = alerts_by_type.get(key) or {}
        columns = columns_by_type.get(key) or []
        records: list[dict[str, Any]] = []

        for row in rows:
            if not row or row[0] != key:
                continue
            # column 0 is the device-type key itself
            record = {
                columns[i]: row[i] for i in range(1, min(len(columns), len(row)))
            }
            alerts = record.get("ActiveAlerts")
            if isinstance(alerts, list) and alerts:
                record["ActiveAlerts"] = [
                    alert_names.get(str(alert), str(alert)) for alert in alerts
                ]
            records.append(record)

        results[type_name] = records

    return results
