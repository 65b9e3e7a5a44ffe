#!/usr/bin/env python3
"""
Register a user account directly in the database.

Usage:
  python scripts/create_user.py --email ann@example.com --first-name Ann --last-name Lee [--password secret1]
"""
from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

# Make the accounts package importable when run directly from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.core.errors import AccountError
from accounts.db.create_tables import create_all
from accounts.services.auth_service import AuthService


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a user account")
    ap.add_argument("--email", required=True, help="Login email (ex.: ann@example.com)")
    ap.add_argument("--first-name", required=True)
    ap.add_argument("--last-name", required=True)
    ap.add_argument("--password", help="Password (default: prompted)")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Password: ")
    create_all()
    try:
        user = AuthService().signup(args.email.strip(), password, args.first_name.strip(), args.last_name.strip())
    except AccountError as exc:
        raise SystemExit(f"Error: {exc.message}")
    print("OK: user created")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
