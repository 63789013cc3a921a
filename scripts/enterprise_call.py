"""enterprise_call.py

Small operator helper: list the accounts visible to a client-credentials
pair and, optionally, their service lines, printed as JSON.

Credentials come from ``STARLINK_CLIENT_ID`` / ``STARLINK_CLIENT_SECRET``,
optionally loaded from a ``.env`` style helper file.  Secrets are never
printed.

Example
-------
    python scripts/enterprise_call.py --service-lines --region US
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import anyio

from starlink_api import EnterpriseError, StarlinkAPI
from starlink_api.utils.logging import mask_sensitive, setup_logging

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #
DEFAULT_ENV_FILE = Path("scripts/.env.script-helpers")


# --------------------------------------------------------------------------- #
# Environment helpers
# --------------------------------------------------------------------------- #
def _load_env_file(env_path: Path | None) -> None:
    """Load KEY=VALUE pairs from a .env style file into *os.environ*."""
    if env_path is None or not env_path.exists():
        return

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip()
        if key and key not in os.environ:
            os.environ[key] = val


# --------------------------------------------------------------------------- #
# Calls
# --------------------------------------------------------------------------- #
async def _collect(region_codes: List[str] | None, with_lines: bool) -> List[Dict[str, Any]]:
    async with StarlinkAPI.from_env() as api:
        print(f"Authenticating as client {mask_sensitive(api.client_id)}", file=sys.stderr)
        accounts = await api.fetch_accounts(region_codes=region_codes)
        out: List[Dict[str, Any]] = []
        for account in accounts:
            entry = account.to_dict()
            if with_lines:
                lines = await account.fetch_service_lines()
                entry["serviceLines"] = [line.to_dict() for line in lines]
            out.append(entry)
        return out


# --------------------------------------------------------------------------- #
# Main
# --------------------------------------------------------------------------- #
def main() -> None:
    parser = argparse.ArgumentParser(description="List Starlink Enterprise accounts.")
    parser.add_argument(
        "--region",
        action="append",
        dest="regions",
        help="Filter by region code (repeatable)",
    )
    parser.add_argument(
        "--service-lines",
        action="store_true",
        help="Include each account's service lines",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help=f"Helper env file (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument("--log-level", default=None, help="Override STARLINK_LOG_LEVEL")

    args = parser.parse_args()

    env_file = (
        args.env_file
        if args.env_file
        else (DEFAULT_ENV_FILE if DEFAULT_ENV_FILE.exists() else None)
    )
    _load_env_file(env_file)
    setup_logging(args.log_level)

    try:
        result = anyio.run(_collect, args.regions, args.service_lines)
    except ValueError as exc:
        sys.exit(str(exc))
    except EnterpriseError as exc:
        sys.exit(json.dumps(exc.to_payload(), ensure_ascii=False))

    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))


if __name__ == "__main__":
    main()
