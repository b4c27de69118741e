from __future__ import annotations

from typing import Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import DatabaseError, RowNotFound, TableNotFound
from ..logs import OperationLogContext
from ..services import browser_svc

router = APIRouter()

Scalar = Union[None, bool, int, float, str]


class RowUpdate(BaseModel):
    table: str
    rowid: int
    values: dict[str, Scalar]


class RowInsert(BaseModel):
    table: str
    values: dict[str, Scalar] = {}


class RowDelete(BaseModel):
    table: str
    rowid: int


def _fail(log: OperationLogContext, e: Exception):
    log.write("ERROR", str(e))
    if isinstance(e, (TableNotFound, RowNotFound)):
        raise HTTPException(status_code=404, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))


@router.post("/api/rows/update")
def api_rows_update(body: RowUpdate):
    log = OperationLogContext("ROW_UPDATE")
    log.set_payload(body.dict())
    try:
        row = browser_svc.update_row(body.table, body.rowid, body.values, log)
    except (DatabaseError, ValueError) as e:
        _fail(log, e)
    log.write("OK")
    return {"message": "ok", "row": row.to_dict() if row else None}


@router.post("/api/rows/insert", status_code=201)
def api_rows_insert(body: RowInsert):
    log = OperationLogContext("ROW_INSERT")
    log.set_payload(body.dict())
    try:
        row = browser_svc.insert_row(body.table, body.values, log)
    except (DatabaseError, ValueError) as e:
        _fail(log, e)
    log.write("OK")
    return {"message": "ok", "row": row.to_dict() if row else None}


@router.post("/api/rows/delete")
def api_rows_delete(body: RowDelete):
    log = OperationLogContext("ROW_DELETE")
    log.set_payload(body.dict())
    try:
        browser_svc.delete_row(body.table, body.rowid, log)
    except (DatabaseError, ValueError) as e:
        _fail(log, e)
    log.write("OK")
    return {"message": "ok"}
