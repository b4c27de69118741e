import pytest

from sqlbrowser.errors import InvalidIdentifier
from sqlbrowser.repository import catalog_repo


def test_list_tables_on_fresh_bootstrap(handle):
    assert handle.list_tables() == ["notes", "users"]


def test_list_tables_sorted_and_excludes_internal(handle):
    handle.execute("CREATE TABLE aardvark (x INTEGER)")
    # AUTOINCREMENT already created sqlite_sequence
    assert handle.list_tables() == ["aardvark", "notes", "users"]


def test_table_schema(handle):
    schema = handle.table_schema("users")
    assert schema.startswith("CREATE TABLE users")
    assert "email TEXT UNIQUE" in schema
    assert handle.table_schema("missing") is None


def test_empty_table_keeps_columns_and_schema(handle):
    handle.execute("DELETE FROM notes")
    columns, rows = handle.query("SELECT * FROM notes")
    assert rows == []
    assert columns == ["id", "title", "body", "created_at"]
    assert handle.table_schema("notes") is not None


def test_list_columns(handle):
    cols = catalog_repo.list_columns(handle, "users")
    assert [c["name"] for c in cols] == ["id", "name", "email", "created_at"]
    assert cols[0]["pk"] == 1
    assert cols[1]["notnull"] is True
    assert cols[1]["type"] == "TEXT"


def test_count_rows_and_exists(handle):
    assert catalog_repo.count_rows(handle, "notes") == 2
    assert catalog_repo.table_exists(handle, "notes")
    assert not catalog_repo.table_exists(handle, "nope")


def test_has_rowid(handle):
    handle.execute("CREATE TABLE kv (k TEXT PRIMARY KEY, v TEXT) WITHOUT ROWID")
    assert catalog_repo.has_rowid(handle, "users")
    assert not catalog_repo.has_rowid(handle, "kv")


def test_list_columns_rejects_bad_identifier(handle):
    with pytest.raises(InvalidIdentifier):
        catalog_repo.list_columns(handle, 'users"); DROP TABLE users; --')
