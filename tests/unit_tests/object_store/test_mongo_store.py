from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import AutoReconnect, DocumentTooLarge, ServerSelectionTimeoutError

from object_store import ObjectRecord, PersistenceError
from object_store.mongo_store import MongoObjectStore


def test_documents_use_the_legacy_field_names(mongo_store):
    mongo_store.insert(ObjectRecord(name="a.txt", payload=b"hello", content_type="text/plain"))

    document = mongo_store.collection.find_one({"name": "a.txt"})

    assert bytes(document["data"]) == b"hello"
    assert document["contentType"] == "text/plain"
    assert "createdAt" in document


def test_reads_documents_written_without_created_at(mongo_store):
    mongo_store.collection.insert_one({"name": "old.bin", "data": b"\x00\x01", "contentType": "application/octet-stream"})

    record = mongo_store.find_by_name("old.bin")

    assert record.payload == b"\x00\x01"
    assert record.created_at is None


def test_name_index_is_not_unique(mongo_store):
    indexes = mongo_store.collection.index_information()

    assert "name_1" in indexes
    assert not indexes["name_1"].get("unique", False)


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("mongodb://localhost:27017", "file_vault"),
        ("mongodb://localhost:27017/", "file_vault"),
        ("mongodb://user:pw@host:27017/uploads?retryWrites=true", "uploads"),
        ("mongodb+srv://cluster.example.net/media", "media"),
    ],
)
def test_database_name_comes_from_uri(uri, expected):
    assert MongoObjectStore._database_from_uri(uri) == expected


def test_explicit_database_name_wins():
    store = MongoObjectStore(client=mongomock.MongoClient(), database_name="explicit")
    assert store.database_name == "explicit"


def test_connection_string_or_client_is_required():
    with pytest.raises(ValueError):
        MongoObjectStore()


def test_insert_failure_is_not_retried_and_surfaces(mongo_store):
    mongo_store.collection = MagicMock()
    mongo_store.collection.insert_one.side_effect = AutoReconnect("primary stepped down")

    with pytest.raises(PersistenceError) as exc_info:
        mongo_store.insert(ObjectRecord(name="a.txt", payload=b"a"))

    assert mongo_store.collection.insert_one.call_count == 1
    assert isinstance(exc_info.value.__cause__, AutoReconnect)


def test_read_failures_surface_as_persistence_error(mongo_store):
    mongo_store.collection = MagicMock()
    mongo_store.collection.find.side_effect = ServerSelectionTimeoutError("no servers")
    mongo_store.collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(PersistenceError):
        mongo_store.list_all()
    with pytest.raises(PersistenceError):
        mongo_store.find_by_name("a.txt")


def test_injected_client_is_not_closed():
    client = MagicMock()
    store = MongoObjectStore(client=client)

    store.close()

    client.close.assert_not_called()


def test_oversized_document_surfaces_as_persistence_error(mongo_store):
    mongo_store.collection = MagicMock()
    mongo_store.collection.insert_one.side_effect = DocumentTooLarge("BSON document too large (17000000 bytes)")

    with pytest.raises(PersistenceError) as exc_info:
        mongo_store.insert(ObjectRecord(name="huge.bin", payload=b"x"))

    assert isinstance(exc_info.value.__cause__, DocumentTooLarge)


def test_client_returns_timezone_aware_datetimes(monkeypatch):
    client_cls = MagicMock()
    monkeypatch.setattr("object_store.mongo_store.MongoClient", client_cls)

    MongoObjectStore(connection_string="mongodb://db:27017/uploads")

    assert client_cls.call_args.kwargs["tz_aware"] is True
