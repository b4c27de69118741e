from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ..errors import DatabaseError, TableNotFound
from ..services import browser_svc

router = APIRouter()


def _rows_payload(page: dict) -> dict:
    out = {k: v for k, v in page.items() if k != "rows"}
    out["rows"] = [r.to_dict() for r in page["rows"]]
    return out


@router.get("/api/tables")
def api_tables():
    try:
        return {"items": browser_svc.list_tables()}
    except DatabaseError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/api/tables/{table}/rows")
def api_table_rows(table: str, offset: int = Query(0, ge=0)):
    try:
        return _rows_payload(browser_svc.load_table(table, offset=offset))
    except TableNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DatabaseError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/api/tables/{table}/schema")
def api_table_schema(table: str):
    try:
        schema = browser_svc.get_schema(table)
    except DatabaseError as e:
        raise HTTPException(status_code=400, detail=e.message)
    if schema is None:
        raise HTTPException(status_code=404, detail=f"table_not_found: {table}")
    return {"table": table, "schema": schema}


@router.get("/api/tables/{table}/columns")
def api_table_columns(table: str):
    try:
        return {"table": table, "items": browser_svc.get_columns(table)}
    except TableNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DatabaseError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/api/tables/{table}/search")
def api_table_search(table: str, q: str = Query(..., min_length=1)):
    try:
        return _rows_payload(browser_svc.search_table(table, q))
    except TableNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except DatabaseError as e:
        raise HTTPException(status_code=400, detail=e.message)
