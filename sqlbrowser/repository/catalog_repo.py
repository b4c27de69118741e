from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .sql_ident import quote_ident

if TYPE_CHECKING:
    from ..db import SQLiteHandle


LIST_TABLES_SQL = """
SELECT name FROM sqlite_master
WHERE type='table' AND name NOT LIKE 'sqlite_%'
ORDER BY name
"""

TABLE_SCHEMA_SQL = """
SELECT sql FROM sqlite_master
WHERE type='table' AND name = ?
"""


def list_tables(handle: SQLiteHandle) -> list[str]:
    _, rows = handle.query(LIST_TABLES_SQL)
    return [r["name"] for r in rows if isinstance(r["name"], str)]


def get_schema(handle: SQLiteHandle, table: str) -> Optional[str]:
    _, rows = handle.query(TABLE_SCHEMA_SQL, [table])
    if not rows:
        return None
    sql = rows[0]["sql"]
    return sql if isinstance(sql, str) else None


def table_exists(handle: SQLiteHandle, table: str) -> bool:
    _, rows = handle.query("SELECT 1 AS hit FROM sqlite_master WHERE type='table' AND name = ?", [table])
    return bool(rows)


def has_rowid(handle: SQLiteHandle, table: str) -> bool:
    schema = get_schema(handle, table) or ""
    return "WITHOUT ROWID" not in " ".join(schema.upper().split())


def list_columns(handle: SQLiteHandle, table: str) -> list[dict]:
    _, rows = handle.query(f"PRAGMA table_info({quote_ident(table)})")
    return [
        {
            "name": r["name"],
            "type": r["type"] or "",
            "notnull": bool(r["notnull"]),
            "default": r["dflt_value"],
            "pk": int(r["pk"] or 0),
        }
        for r in rows
    ]


def count_rows(handle: SQLiteHandle, table: str) -> int:
    _, rows = handle.query(f"SELECT COUNT(1) AS cnt FROM {quote_ident(table)}")
    return int(rows[0]["cnt"]) if rows else 0
