from sqlbrowser.models import Row


def test_from_values_picks_integer_rowid():
    r = Row.from_values({"rowid": 5, "name": "a"})
    assert r.rowid == 5
    assert r.id == "5"
    assert r.has_natural_id


def test_from_values_ignores_non_integer_rowid():
    assert Row.from_values({"rowid": "5"}).rowid is None
    assert Row.from_values({"rowid": True}).rowid is None
    assert Row.from_values({"rowid": None}).rowid is None


def test_synthetic_id_is_stable_per_row():
    r = Row.from_values({"name": "a"})
    assert r.id == r.id
    assert r.id != Row.from_values({"name": "a"}).id


def test_equality_ignores_synthetic_id():
    assert Row.from_values({"name": "a"}) == Row.from_values({"name": "a"})


def test_to_dict():
    r = Row.from_values({"rowid": 1, "id": 1, "name": "a"})
    assert r.to_dict() == {"id": "1", "rowid": 1, "values": {"rowid": 1, "id": 1, "name": "a"}}
