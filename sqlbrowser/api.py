"""
FastAPI app entry point aggregating the browser routers under sqlbrowser/routes.
Keep as `uvicorn sqlbrowser.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .bootstrap import ensure_database_exists
from .logs import ensure_log_schema, OperationLogContext

logger = logging.getLogger(__name__)

app = FastAPI(title="sqlite-browser-api", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    ensure_log_schema()
    try:
        path = ensure_database_exists()
        logger.info(f"Browsing {path}")
    except Exception as e:
        OperationLogContext("STARTUP").write("ERROR", f"ensure_database_exists_failed: {e}")


# Include routers
from .routes import base as base_routes
from .routes import tables as tables_routes
from .routes import sql as sql_routes
from .routes import rows as rows_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(tables_routes.router)
app.include_router(sql_routes.router)
app.include_router(rows_routes.router)
app.include_router(logs_routes.router)
