from __future__ import annotations

from typing import Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import DatabaseError
from ..logs import OperationLogContext
from ..services import browser_svc
from ..services.utils import is_mutation

router = APIRouter()

# bool before int so JSON true/false is not narrowed by pydantic
Scalar = Union[None, bool, int, float, str]


class SqlRunBody(BaseModel):
    sql: str
    params: list[Scalar] = []
    table: str | None = None


@router.post("/api/sql/run")
def api_sql_run(body: SqlRunBody):
    log = OperationLogContext("SQL_EXECUTE") if is_mutation(body.sql) else None
    if log:
        log.set_payload(body.dict())
    try:
        result = browser_svc.run_sql(body.sql, body.params, table=body.table)
    except (DatabaseError, ValueError) as e:
        if log:
            log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    if log:
        log.write("OK")
    return {
        "kind": result["kind"],
        "columns": result["columns"],
        "rows": [r.to_dict() for r in result["rows"]],
    }
