#!/usr/bin/env python3
"""
Print a bearer token for an existing user, e.g. for scripts or bots.

Usage:
    python create_token.py --username admin --hours 8760
"""

import argparse
import sys

from zaiboost_api.app.core.config import settings
from zaiboost_api.app.core.security import create_access_token
from zaiboost_api.app.core.store import JsonFileWriter, Ledger, get_data_path


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Mint a ZaiBoost API token for a user.")
    ap.add_argument("--username", required=True, help="Existing username")
    ap.add_argument("--hours", type=float, default=365 * 24, help="Token lifetime in hours (default: one year)")
    ap.add_argument("--data", default=None, help="Snapshot file (default: DATA_PATH)")
    args = ap.parse_args(argv)
    settings.validate()

    ledger = Ledger(JsonFileWriter(args.data or get_data_path()))
    user = ledger.find_user_by_username(args.username)
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2

    claims = {"id": user.id, "username": user.username, "role": user.role}
    print(create_access_token(claims, expires_hours=args.hours))
    return 0


if __name__ == "__main__":
    sys.exit(main())
