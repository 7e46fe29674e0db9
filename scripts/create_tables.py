#!/usr/bin/env python3
"""
Create the user/user_settings tables in DATABASE_URL.

Usage:
  python scripts/create_tables.py [--drop]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError

from users_api.db.create_tables import create_all, drop_all


def main() -> None:
    ap = argparse.ArgumentParser(description="Create the users schema")
    ap.add_argument("--drop", action="store_true", help="Drop existing tables first (destroys data)")
    args = ap.parse_args()
    try:
        if args.drop:
            drop_all()
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
