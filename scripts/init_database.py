#!/usr/bin/env python3
"""
Create the users and transactions tables in Postgres.

Uses DATABASE_URL environment variable. Does NOT drop existing tables.
"""

from __future__ import annotations
import os
import sys

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError

from topup_store.database.postgres import PostgresTopUpStore


def main() -> int:
    url = os.environ.get("DATABASE_URL")
    if not url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    try:
        store = PostgresTopUpStore(connection_string=url)

        with store.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")

        # Only missing tables are created
        store.create_tables()
        tables = inspect(store.engine).get_table_names()
        print("App tables now exist:", sorted(tables))
        return 0

    except OperationalError as e:
        print(f"Failed to connect to database: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main())
