#!/usr/bin/env python3
"""
Create a user (and optional settings) directly in the database.

Usage:
  python scripts/add_user.py --name Alice --email a@x.com [--status inactive] [--setting theme=dark ...]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the users_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from users_api.core.log import configure_logging
from users_api.db.create_tables import create_all
from users_api.domain.users import ActiveStatus
from users_api.services.user_service import UserService


def parse_setting(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected name=value, got {raw!r}")
    return name.strip(), value


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a user in the users database")
    ap.add_argument("--name", required=True, help="Display name")
    ap.add_argument("--email", required=True, help="E-mail address")
    ap.add_argument(
        "--status",
        default=ActiveStatus.ACTIVE.value,
        choices=[item.value for item in ActiveStatus],
        help="Active status (default: active)",
    )
    ap.add_argument(
        "--setting",
        action="append",
        default=[],
        type=parse_setting,
        metavar="NAME=VALUE",
        help="Custom setting, may be repeated",
    )
    args = ap.parse_args()

    configure_logging()
    create_all()
    user = UserService().create_user(args.name, args.email, args.status, args.setting)
    print("OK: user created")
    print(f"  ID: {user.id}")
    print(f"  Name: {user.name}")
    print(f"  E-mail: {user.email}")
    for setting in user.settings:
        print(f"  Setting: {setting.name}={setting.value}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
