import browser


def test_tables(tmp_db_path, capsys):
    assert browser.main(["--db", tmp_db_path, "tables"]) == 0
    assert capsys.readouterr().out.split() == ["notes", "users"]


def test_query_with_params(tmp_db_path, capsys):
    assert browser.main(["--db", tmp_db_path, "query", "SELECT name FROM users WHERE id = ?", "2"]) == 0
    assert "Ada Lovelace" in capsys.readouterr().out


def test_exec_and_error(tmp_db_path, capsys):
    assert browser.main(["--db", tmp_db_path, "exec", "DELETE FROM notes WHERE id = ?", "1"]) == 0
    assert browser.main(["--db", tmp_db_path, "exec", "DELETE FROM nowhere"]) == 1
    assert "no such table" in capsys.readouterr().err


def test_schema_missing(tmp_db_path):
    assert browser.main(["--db", tmp_db_path, "schema", "ghosts"]) == 1


def test_init_creates_database(tmp_path, capsys):
    path = tmp_path / "fresh.sqlite"
    assert browser.main(["--db", str(path), "init"]) == 0
    assert path.exists()
    assert browser.main(["--db", str(path), "tables"]) == 0
    assert capsys.readouterr().out.split()[-2:] == ["notes", "users"]


def test_export(tmp_db_path, tmp_path):
    out = tmp_path / "users.csv"
    assert browser.main(["--db", tmp_db_path, "export", "users", "--out", str(out)]) == 0
    text = out.read_text(encoding="utf-8-sig")
    assert text.splitlines()[0] == "id,name,email,created_at"
    assert "Ada Lovelace" in text


def test_parse_param():
    assert browser.parse_param("42") == 42
    assert browser.parse_param("1.5") == 1.5
    assert browser.parse_param("null") is None
    assert browser.parse_param("O'Brien") == "O'Brien"
    assert browser.parse_param("[1, 2]") == "[1, 2]"
    # YAML-looking words and leading zeros are not reinterpreted
    assert browser.parse_param("no") == "no"
    assert browser.parse_param("off") == "off"
    assert browser.parse_param("yes") == "yes"
    assert browser.parse_param("~") == "~"
    assert browser.parse_param("nan") == "nan"
    assert browser.parse_param("010") == 10


def test_exec_keeps_word_params_as_text(tmp_db_path, capsys):
    assert browser.main(["--db", tmp_db_path, "exec", "UPDATE users SET name = ? WHERE id = ?", "no", "1"]) == 0
    assert browser.main(["--db", tmp_db_path, "query", "SELECT typeof(name) AS t, name FROM users WHERE id = 1"]) == 0
    out = capsys.readouterr().out
    assert "text" in out
    assert "no" in out.split()


def test_tables_before_init_seeds_database(tmp_path, capsys):
    path = tmp_path / "fresh.sqlite"
    assert browser.main(["--db", str(path), "tables"]) == 0
    assert capsys.readouterr().out.split() == ["notes", "users"]
    assert browser.main(["--db", str(path), "init"]) == 0
    capsys.readouterr()
    assert browser.main(["--db", str(path), "tables"]) == 0
    assert capsys.readouterr().out.split() == ["notes", "users"]


def test_zero_byte_file_gets_seeded(tmp_path, capsys):
    path = tmp_path / "empty.sqlite"
    path.write_bytes(b"")
    assert browser.main(["--db", str(path), "tables"]) == 0
    assert capsys.readouterr().out.split() == ["notes", "users"]
