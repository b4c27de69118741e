from __future__ import annotations

# sqlbrowser/services/browser_svc.py
# 表格浏览/编辑协调层：路由和 CLI 只调用这里，不直接拼 SQL
import logging
from typing import Any, Mapping, Optional, Sequence

from ..db import SQLiteHandle, get_handle
from ..errors import RowNotFound, TableNotFound
from ..logs import OperationLogContext
from ..models import Row
from ..repository import catalog_repo, table_repo
from .config_svc import get_config
from .utils import is_mutation

logger = logging.getLogger(__name__)


def _require_table(h: SQLiteHandle, table: str):
    if not catalog_repo.table_exists(h, table):
        raise TableNotFound(f"table_not_found: {table}")


def list_tables(db_path: str | None = None) -> list[str]:
    with get_handle(db_path) as h:
        return h.list_tables()


def load_table(table: str, offset: int = 0, limit: int | None = None, db_path: str | None = None) -> dict[str, Any]:
    """Up to one page of rows, each carrying its rowid."""
    limit = limit or get_config()["page_size"]
    with get_handle(db_path) as h:
        _require_table(h, table)
        # WITHOUT ROWID tables get synthetic ids and are read-only here
        with_rowid = catalog_repo.has_rowid(h, table)
        columns, rows = table_repo.load_page(h, table, limit, max(offset, 0), with_rowid=with_rowid)
        total = catalog_repo.count_rows(h, table)
        return {"table": table, "columns": columns, "rows": rows, "total": total, "offset": max(offset, 0), "limit": limit}


def get_schema(table: str, db_path: str | None = None) -> Optional[str]:
    with get_handle(db_path) as h:
        return h.table_schema(table)


def get_columns(table: str, db_path: str | None = None) -> list[dict]:
    with get_handle(db_path) as h:
        _require_table(h, table)
        return catalog_repo.list_columns(h, table)


def search_table(table: str, text: str, db_path: str | None = None) -> dict[str, Any]:
    limit = get_config()["search_limit"]
    with get_handle(db_path) as h:
        _require_table(h, table)
        cols = [c["name"] for c in catalog_repo.list_columns(h, table)]
        columns, rows = table_repo.search(h, table, cols, text, limit,
                                          with_rowid=catalog_repo.has_rowid(h, table))
        return {"table": table, "columns": columns, "rows": rows, "query": text}


def run_sql(sql: str, params: Sequence[Any] | None = None, table: str | None = None,
            db_path: str | None = None) -> dict[str, Any]:
    """
    Route a raw statement: INSERT/UPDATE/DELETE go to execute (and the selected
    table is reloaded afterwards), everything else to query.
    """
    if is_mutation(sql):
        with get_handle(db_path) as h:
            if table:
                # reload target is checked before anything is written
                _require_table(h, table)
            h.execute(sql, params)
        if table:
            page = load_table(table, db_path=db_path)
            return {"kind": "mutation", "columns": page["columns"], "rows": page["rows"]}
        return {"kind": "mutation", "columns": [], "rows": []}

    with get_handle(db_path) as h:
        columns, rows = h.query(sql, params)
    return {"kind": "query", "columns": columns, "rows": rows}


def update_row(table: str, rowid: int, values: Mapping[str, Any], log: OperationLogContext,
               db_path: str | None = None) -> Optional[Row]:
    """UPDATE every supplied column, matched by rowid. Returns the re-read row."""
    log.set_entity(table, str(rowid))
    with get_handle(db_path) as h:
        _require_table(h, table)
        before = table_repo.get_by_rowid(h, table, rowid)
        if before is None:
            raise RowNotFound(f"row_not_found: {table} rowid={rowid}")
        table_repo.update_by_rowid(h, table, rowid, values)
        after = table_repo.get_by_rowid(h, table, rowid)
    log.set_before(dict(before.values))
    log.set_after(dict(after.values) if after else None)
    return after


def insert_row(table: str, values: Mapping[str, Any], log: OperationLogContext,
               db_path: str | None = None) -> Optional[Row]:
    with get_handle(db_path) as h:
        _require_table(h, table)
        table_repo.insert(h, table, values)
        new_rowid = table_repo.last_insert_rowid(h) if catalog_repo.has_rowid(h, table) else None
        row = table_repo.get_by_rowid(h, table, new_rowid) if new_rowid else None
    log.set_entity(table, str(new_rowid) if new_rowid else "")
    log.set_after(dict(row.values) if row else None)
    return row


def delete_row(table: str, rowid: int, log: OperationLogContext, db_path: str | None = None):
    log.set_entity(table, str(rowid))
    with get_handle(db_path) as h:
        _require_table(h, table)
        before = table_repo.get_by_rowid(h, table, rowid)
        if before is None:
            raise RowNotFound(f"row_not_found: {table} rowid={rowid}")
        table_repo.delete_by_rowid(h, table, rowid)
    log.set_before(dict(before.values))
    logger.info(f"Deleted rowid {rowid} from {table}")
