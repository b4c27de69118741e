from __future__ import annotations

# sqlbrowser/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

import yaml

from .errors import (
    BindingArityMismatch,
    HandleClosed,
    OpenFailed,
    PrepareFailed,
    StepFailed,
)
from .models import CellValue, Row

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 SQLBROWSER_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path
# 4) 兜底：~/.sqlbrowser/browser.sqlite
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DATA_DIR = os.path.join(os.path.expanduser("~"), ".sqlbrowser")
DB_FILENAME = "browser.sqlite"
LOG_DB_FILENAME = "operation_log.sqlite"

_CONFIG_KEYS = ("db_path", "test_db_path", "log_db_path", "page_size", "search_limit")

# smart punctuation typed by autocorrecting keyboards
_QUOTE_TABLE = str.maketrans({
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
})

_SQLITE_ERROR = 1


def read_config_yaml() -> dict:
    cfg_path = os.environ.get("SQLBROWSER_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {cfg_path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in _CONFIG_KEYS:
        v = cfg.get(k)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                continue
        if v is not None:
            out[k] = v
    return out


def _is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_db_path(_: str | None = None) -> str:
    env_path = os.environ.get("SQLBROWSER_DB_PATH")
    cfg = read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif _is_test_env() and cfg_test:
        path = os.path.expanduser(str(cfg_test))
    elif cfg_db:
        path = os.path.expanduser(str(cfg_db))
    else:
        path = os.path.join(_DATA_DIR, DB_FILENAME)

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def get_log_db_path() -> str:
    env_path = os.environ.get("SQLBROWSER_LOG_DB_PATH")
    cfg_log = read_config_yaml().get("log_db_path")
    if env_path:
        path = env_path
    elif cfg_log:
        path = os.path.expanduser(str(cfg_log))
    else:
        path = os.path.join(os.path.dirname(get_db_path()) or ".", LOG_DB_FILENAME)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return path


def normalize_quotes(text: str) -> str:
    return text.translate(_QUOTE_TABLE)


def _bind_value(value: Any) -> CellValue:
    if value is None or isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return normalize_quotes(value)
    logger.debug(f"Coercing {type(value).__name__} parameter to text")
    return normalize_quotes(str(value))


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", "replace")


def _decode(value: Any) -> CellValue:
    if value is None or isinstance(value, (int, float, str)):
        return value
    # BLOB and anything else outside the scalar domain
    return None


def _prepare_error(e: BaseException) -> PrepareFailed | StepFailed:
    """Map an error raised while preparing/binding/first-stepping a statement."""
    msg = str(e) or None
    if isinstance(e, sqlite3.ProgrammingError) and "bindings" in (msg or ""):
        return BindingArityMismatch(msg)
    if isinstance(e, (sqlite3.IntegrityError, sqlite3.DataError)):
        return StepFailed(msg)
    if isinstance(e, sqlite3.OperationalError):
        code = getattr(e, "sqlite_errorcode", None)
        if code is not None and (code & 0xFF) != _SQLITE_ERROR:
            return StepFailed(msg)
    return PrepareFailed(msg)


class SQLiteHandle:
    """
    Owns exactly one open sqlite3 connection.

    Every statement runs through a cursor that is closed before the call
    returns, on success and failure alike. Autocommit mode: each statement is
    its own implicit transaction.
    """

    def __init__(self, conn: sqlite3.Connection, path: str):
        self._conn: Optional[sqlite3.Connection] = conn
        self.path = path

    @classmethod
    def open(cls, path: str) -> "SQLiteHandle":
        try:
            conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        except sqlite3.Error as e:
            raise OpenFailed(str(e) or None) from e
        try:
            # invalid UTF-8 in a TEXT cell decodes with replacement characters
            conn.text_factory = _decode_text
            # forces the header read so a non-database file fails here
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
            conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as e:
            conn.close()
            raise OpenFailed(str(e) or None) from e
        logger.debug(f"Opened database {path}")
        return cls(conn, path)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self):
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()
        logger.debug(f"Closed database {self.path}")

    def __enter__(self) -> "SQLiteHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise HandleClosed()
        return self._conn

    def _start(self, sql: str, params: Sequence[Any] | None) -> sqlite3.Cursor:
        conn = self._connection()
        bound = [_bind_value(v) for v in (params or ())]
        cur = conn.cursor()
        try:
            cur.execute(normalize_quotes(sql), bound)
        except (sqlite3.Error, sqlite3.Warning, OverflowError) as e:
            cur.close()
            err = _prepare_error(e)
            logger.debug(f"Statement failed ({type(err).__name__}): {err.message}")
            raise err from e
        return cur

    def query(self, sql: str, params: Sequence[Any] | None = None) -> tuple[list[str], list[Row]]:
        """Run a row-producing statement; returns (columns, rows), fully materialized."""
        cur = self._start(sql, params)
        try:
            columns = [d[0] for d in (cur.description or ())]
            rows: list[Row] = []
            try:
                for raw in cur:
                    values = {name: _decode(v) for name, v in zip(columns, raw)}
                    rows.append(Row.from_values(values))
            except sqlite3.Error as e:
                raise StepFailed(str(e) or None) from e
            return columns, rows
        finally:
            cur.close()

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> None:
        """Run a statement that must complete in a single step without producing rows."""
        cur = self._start(sql, params)
        try:
            try:
                produced = cur.fetchone()
            except sqlite3.Error as e:
                raise StepFailed(str(e) or None) from e
            if produced is not None:
                raise StepFailed("Statement returned rows; use query() instead")
        finally:
            cur.close()

    def list_tables(self) -> list[str]:
        from .repository import catalog_repo
        return catalog_repo.list_tables(self)

    def table_schema(self, name: str) -> Optional[str]:
        from .repository import catalog_repo
        return catalog_repo.get_schema(self, name)


@contextmanager
def get_handle(db_path: str | None = None) -> Iterator[SQLiteHandle]:
    """
    打开被浏览的数据库。优先使用显式传入的 db_path，否则走 get_db_path()。
    离开 with 块时确定性地关闭连接。
    """
    handle = SQLiteHandle.open(db_path or get_db_path())
    try:
        yield handle
    finally:
        handle.close()


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Plain sqlite3 connection with Row factory, used for the operation log database.
    """
    conn = sqlite3.connect(db_path or get_log_db_path(), check_same_thread=False)
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
