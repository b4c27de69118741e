import os
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def tmp_db_path(tmp_path, monkeypatch):
    path = tmp_path / "browser_test.sqlite"
    # Point the browser and its operation log at temp files
    monkeypatch.setenv("SQLBROWSER_DB_PATH", str(path))
    monkeypatch.setenv("SQLBROWSER_LOG_DB_PATH", str(tmp_path / "operation_log_test.sqlite"))
    monkeypatch.setenv("SQLBROWSER_CONFIG", str(tmp_path / "missing_config.yaml"))
    from sqlbrowser.bootstrap import ensure_database_exists
    ensure_database_exists(str(path))
    return str(path)


@pytest.fixture()
def handle(tmp_db_path):
    from sqlbrowser.db import SQLiteHandle
    h = SQLiteHandle.open(tmp_db_path)
    yield h
    h.close()


@pytest.fixture()
def client(tmp_db_path):
    from sqlbrowser.logs import ensure_log_schema
    ensure_log_schema()
    # Import app after DB ready so startup hooks can use it
    from sqlbrowser.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)
