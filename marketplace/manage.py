# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Maintenance entrypoint: schema setup and expiry cleanup."""

from __future__ import annotations

import argparse

from marketplace.infrastructure.container import Container
from marketplace.shared.config import load_config
from marketplace.shared.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Marketplace maintenance commands")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("cleanup", help="Delete expired sessions and verification tokens")
    sub.add_parser("init-db", help="Create SQL tables (STORAGE_BACKEND=sqlalchemy)")
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    container = Container(config)

    if args.command == "cleanup":
        counts = container.cleanup_expired_use_case.execute()
        print(
            f"Removed {counts['sessions']} session(s) and "
            f"{counts['verification_tokens']} verification token(s)"
        )
    elif args.command == "init-db":
        if not container.uses_sql:
            print("STORAGE_BACKEND is 'json'; nothing to initialise")
            return 1
        container.database.init_schema()
        print("Database schema ready")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
