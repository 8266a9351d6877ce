import sqlite3

import pytest

from object_store import ObjectRecord, PersistenceError, SQLiteObjectStore


def test_records_survive_a_new_store_instance(tmp_path):
    db_path = str(tmp_path / "durable.db")
    first = SQLiteObjectStore(db_path)
    first.init_collections()
    first.insert(ObjectRecord(name="keep.txt", payload=b"persisted", content_type="text/plain"))

    second = SQLiteObjectStore(db_path)
    second.init_collections()

    record = second.find_by_name("keep.txt")
    assert record is not None
    assert record.payload == b"persisted"


def test_init_collections_creates_table_and_index(sqlite_store):
    conn = sqlite3.connect(sqlite_store.db_path)
    try:
        tables = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='files'").fetchall()
        indexes = conn.execute("SELECT name FROM sqlite_master WHERE type='index' AND name='idx_files_name'").fetchall()
    finally:
        conn.close()

    assert tables
    assert indexes


def test_init_collections_is_idempotent(sqlite_store):
    sqlite_store.insert(ObjectRecord(name="a.txt", payload=b"a"))
    sqlite_store.init_collections()

    assert len(sqlite_store.list_all()) == 1


def test_missing_table_surfaces_as_persistence_error(tmp_path):
    store = SQLiteObjectStore(str(tmp_path / "uninitialized.db"))

    with pytest.raises(PersistenceError) as exc_info:
        store.insert(ObjectRecord(name="a.txt", payload=b"a"))

    assert isinstance(exc_info.value.__cause__, sqlite3.Error)


def test_unopenable_database_surfaces_as_persistence_error(tmp_path):
    store = SQLiteObjectStore(str(tmp_path / "no-such-dir" / "file.db"))

    with pytest.raises(PersistenceError):
        store.list_all()
    with pytest.raises(PersistenceError):
        store.find_by_name("a.txt")
    assert store.ping() is False
