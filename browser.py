#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SQLite Browser (command line front-end)

Commands:
  init                Create and seed the demo database if it does not exist
  tables              List user tables
  schema TABLE        Print the CREATE statement of a table
  query SQL [P ...]   Run a row-producing statement and print the result
  exec SQL [P ...]    Run an INSERT/UPDATE/DELETE (or DDL) statement
  export TABLE        Export up to one page of a table to CSV

Notes:
- Positional parameters: 42 -> int, 1.5 -> float, null -> NULL,
  anything else -> text (`no`, `010`, `~` included; 010 reads as decimal 10).
- --db overrides SQLBROWSER_DB_PATH / config.yaml.
"""

import argparse
import math
import os
import sys

import pandas as pd

from sqlbrowser.bootstrap import ensure_database_exists
from sqlbrowser.db import get_db_path, get_handle
from sqlbrowser.errors import DatabaseError
from sqlbrowser.repository import table_repo
from sqlbrowser.services.config_svc import get_config


def parse_param(text: str):
    """Decimal int, then float, then the literal `null`; anything else stays text."""
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        v = float(text)
        if math.isfinite(v):
            return v
    except ValueError:
        pass
    if text == "null":
        return None
    return text


def to_frame(columns, rows) -> pd.DataFrame:
    return pd.DataFrame([[r.get(c) for c in columns] for r in rows], columns=columns)


def _db(args) -> str:
    return args.db or get_db_path()


# ---------------- Commands ----------------

def cmd_init(args):
    path = ensure_database_exists(_db(args))
    print("Database ready:", path)


def cmd_tables(args):
    with get_handle(_db(args)) as h:
        for name in h.list_tables():
            print(name)


def cmd_schema(args):
    with get_handle(_db(args)) as h:
        schema = h.table_schema(args.table)
    if schema is None:
        print(f"-- No schema for {args.table}", file=sys.stderr)
        return 1
    print(schema)


def cmd_query(args):
    params = [parse_param(p) for p in args.params]
    with get_handle(_db(args)) as h:
        columns, rows = h.query(args.sql, params)
    df = to_frame(columns, rows)
    if df.empty:
        print("(empty)" if columns else "(no columns)")
        if columns:
            print(" | ".join(columns))
    else:
        print(df.to_string(index=False, na_rep="NULL"))


def cmd_exec(args):
    params = [parse_param(p) for p in args.params]
    with get_handle(_db(args)) as h:
        h.execute(args.sql, params)
    print("OK")


def cmd_export(args):
    limit = args.limit or get_config()["page_size"]
    with get_handle(_db(args)) as h:
        columns, rows = table_repo.load_page(h, args.table, limit, with_rowid=False)
    out = args.out or os.path.join(os.getcwd(), f"{args.table}.csv")
    to_frame(columns, rows).to_csv(out, index=False, encoding="utf-8-sig")
    print(f"{len(rows)} rows exported to {out}")


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SQLite browser")
    parser.add_argument("--db", default=None, help="database file (default from config)")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create and seed the demo database")
    p_init.set_defaults(func=cmd_init)

    p_tables = sub.add_parser("tables", help="list tables")
    p_tables.set_defaults(func=cmd_tables)

    p_schema = sub.add_parser("schema", help="print table schema")
    p_schema.add_argument("table")
    p_schema.set_defaults(func=cmd_schema)

    p_query = sub.add_parser("query", help="run a query")
    p_query.add_argument("sql")
    p_query.add_argument("params", nargs="*")
    p_query.set_defaults(func=cmd_query)

    p_exec = sub.add_parser("exec", help="run a mutating statement")
    p_exec.add_argument("sql")
    p_exec.add_argument("params", nargs="*")
    p_exec.set_defaults(func=cmd_exec)

    p_export = sub.add_parser("export", help="export a table to CSV")
    p_export.add_argument("table")
    p_export.add_argument("--out", required=False)
    p_export.add_argument("--limit", required=False, type=int)
    p_export.set_defaults(func=cmd_export)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        if args.func is not cmd_init:
            # data commands always see a seeded file
            ensure_database_exists(_db(args))
        return args.func(args) or 0
    except DatabaseError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
