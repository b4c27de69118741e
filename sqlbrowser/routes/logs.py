from __future__ import annotations

from fastapi import APIRouter, Query

from ..logs import search_operation_logs

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    action: str | None = None,
    table: str | None = None,
    query: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
):
    total, items = search_operation_logs(query, action, ts_from, ts_to, page, size, entity_type=table)
    return {"total": total, "items": items}
