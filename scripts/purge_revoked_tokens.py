#!/usr/bin/env python3
"""
Delete revoked-token entries whose natural expiry has passed.

Only meaningful with TOKEN_BLACKLIST_BACKEND=sql; run it from cron.

Usage:
  python scripts/purge_revoked_tokens.py
"""
from __future__ import annotations

import sys
from pathlib import Path

# Make the accounts package importable when run directly from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.repositories.token_blacklist import SQLTokenBlacklist


def main() -> None:
    removed = SQLTokenBlacklist().purge_expired()
    print(f"OK: {removed} expired revoked token(s) removed")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
