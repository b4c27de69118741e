"""Generic per-table statements built from validated, double-quoted identifiers.

Keep functions thin: they only build SQL and hand it to the handle.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ..models import ROWID_COLUMN, Row
from .sql_ident import placeholders, quote_ident

if TYPE_CHECKING:
    from ..db import SQLiteHandle


def _projection(with_rowid: bool) -> str:
    return f'rowid AS "{ROWID_COLUMN}", *' if with_rowid else "*"


def load_page(handle: SQLiteHandle, table: str, limit: int, offset: int = 0,
              with_rowid: bool = True) -> tuple[list[str], list[Row]]:
    sql = f"SELECT {_projection(with_rowid)} FROM {quote_ident(table)} LIMIT ? OFFSET ?"
    return handle.query(sql, [int(limit), int(offset)])


def get_by_rowid(handle: SQLiteHandle, table: str, rowid: int) -> Row | None:
    sql = f'SELECT rowid AS "{ROWID_COLUMN}", * FROM {quote_ident(table)} WHERE rowid = ?'
    _, rows = handle.query(sql, [int(rowid)])
    return rows[0] if rows else None


def escape_like(text: str) -> str:
    # search text is matched literally; `\` is the ESCAPE character
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search(handle: SQLiteHandle, table: str, columns: list[str], text: str, limit: int,
           with_rowid: bool = True) -> tuple[list[str], list[Row]]:
    if not columns:
        return load_page(handle, table, limit, with_rowid=with_rowid)
    where = " OR ".join(f"CAST({quote_ident(c)} AS TEXT) LIKE ? ESCAPE '\\'" for c in columns)
    sql = f"SELECT {_projection(with_rowid)} FROM {quote_ident(table)} WHERE {where} LIMIT ?"
    pattern = f"%{escape_like(text)}%"
    return handle.query(sql, [pattern] * len(columns) + [int(limit)])


def _writable(values: Mapping[str, Any]) -> list[str]:
    return sorted(k for k in values if k != ROWID_COLUMN)


def update_by_rowid(handle: SQLiteHandle, table: str, rowid: int, values: Mapping[str, Any]):
    cols = _writable(values)
    if not cols:
        raise ValueError("no_columns_to_update")
    assignments = ", ".join(f"{quote_ident(c)} = ?" for c in cols)
    sql = f"UPDATE {quote_ident(table)} SET {assignments} WHERE rowid = ?"
    bindings = [values[c] for c in cols]
    bindings.append(int(rowid))
    handle.execute(sql, bindings)


def insert(handle: SQLiteHandle, table: str, values: Mapping[str, Any]):
    cols = _writable(values)
    if not cols:
        handle.execute(f"INSERT INTO {quote_ident(table)} DEFAULT VALUES")
        return
    names = ", ".join(quote_ident(c) for c in cols)
    sql = f"INSERT INTO {quote_ident(table)} ({names}) VALUES ({placeholders(len(cols))})"
    handle.execute(sql, [values[c] for c in cols])


def delete_by_rowid(handle: SQLiteHandle, table: str, rowid: int):
    handle.execute(f"DELETE FROM {quote_ident(table)} WHERE rowid = ?", [int(rowid)])


def last_insert_rowid(handle: SQLiteHandle) -> int | None:
    _, rows = handle.query("SELECT last_insert_rowid() AS rid")
    return rows[0]["rid"] if rows else None
