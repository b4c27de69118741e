"""Demo database bootstrap: create and seed the browser file on first use."""
from __future__ import annotations

import logging
import os
import sqlite3

from .db import get_db_path
from .errors import OpenFailed, StepFailed

logger = logging.getLogger(__name__)

DEMO_SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT UNIQUE,
    created_at TEXT
);

CREATE TABLE notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    body TEXT,
    created_at TEXT
);
"""

DEMO_SEED = """
INSERT INTO users (name, email, created_at) VALUES
('Angelos', 'angelos@example.com', datetime('now')),
('Ada Lovelace', 'ada@example.com', datetime('now'));

INSERT INTO notes (title, body, created_at) VALUES
('First note', 'This is a demo note', datetime('now')),
('Second note', 'SQLite browser test data', datetime('now'));
"""


def create_fresh_database(path: str):
    try:
        conn = sqlite3.connect(path)
    except sqlite3.Error as e:
        raise OpenFailed(str(e) or "Unable to create database") from e
    try:
        conn.executescript(DEMO_SCHEMA)
        conn.executescript(DEMO_SEED)
        conn.commit()
    except sqlite3.Error as e:
        raise StepFailed(str(e) or None) from e
    finally:
        conn.close()
    logger.info(f"Created demo database at {path}")


def _needs_seed(path: str) -> bool:
    """Missing, zero-byte, or a valid database without any user table."""
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        return True
    try:
        conn = sqlite3.connect(path)
    except sqlite3.Error as e:
        raise OpenFailed(str(e) or None) from e
    try:
        row = conn.execute(
            "SELECT COUNT(1) FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        ).fetchone()
    except sqlite3.Error as e:
        raise OpenFailed(str(e) or None) from e
    finally:
        conn.close()
    return row[0] == 0


def ensure_database_exists(db_path: str | None = None) -> str:
    """Return the database path, creating and seeding the file if it is missing or empty."""
    path = db_path or get_db_path()
    if _needs_seed(path):
        create_fresh_database(path)
    return path
