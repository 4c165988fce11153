#!/usr/bin/env python3
"""
Reset a user's password in the ZaiBoost snapshot file.

This script does not read or reveal existing passwords.  It stores a new
PBKDF2 hash (format "salthex:hashhex") for the given username.  Stop the
API first: the running server keeps its own copy of the ledger and would
overwrite the change on its next write.

Usage:
    python reset_password.py --data ./zaiboost.db.json --username admin --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from zaiboost_api.app.core.security import hash_password
from zaiboost_api.app.core.store import JsonFileWriter, Ledger, get_data_path
from zaiboost_api.app.services.user_service import MIN_PASSWORD_LENGTH


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reset a ZaiBoost user's password.")
    ap.add_argument("--data", default=None, help="Snapshot file (default: DATA_PATH)")
    ap.add_argument("--username", required=True, help="User to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    data_path = args.data or get_data_path()
    if not os.path.exists(data_path):
        print(f"[!] Snapshot not found: {data_path}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        print(f"[!] Password must be at least {MIN_PASSWORD_LENGTH} characters.", file=sys.stderr)
        return 1

    ledger = Ledger(JsonFileWriter(data_path))
    user = ledger.find_user_by_username(args.username)
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2

    ledger.set_user_password(user.id, hash_password(new_password))
    print(f"[+] Password updated for user: {args.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
