#!/usr/bin/env python3
"""Apply (or print) Alembic migrations for the contact submissions store."""

from __future__ import annotations

import argparse
from pathlib import Path

from alembic.config import Config

from alembic import command

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def alembic_config() -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def upgrade(revision: str = "head", sql: bool = False) -> None:
    command.upgrade(alembic_config(), revision, sql=sql)


def main() -> None:
    parser = argparse.ArgumentParser(description="Upgrade the database schema")
    parser.add_argument(
        "revision", nargs="?", default="head", help="Target revision (default: head)"
    )
    parser.add_argument(
        "--sql",
        action="store_true",
        help="Print the migration SQL instead of applying it",
    )
    args = parser.parse_args()
    upgrade(args.revision, sql=args.sql)


if __name__ == "__main__":
    main()
