import pytest
from pydantic import ValidationError

from file_vault.config.settings import Settings
from file_vault.dependencies import build_object_store
from object_store import InMemoryObjectStore, MongoObjectStore, SQLiteObjectStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ["DEPLOYMENT_MODE", "MONGO_URI", "FRONTEND_URL", "PORT", "MAX_REQUEST_BODY_BYTES", "LOG_LEVEL"]:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.deployment_mode == "local-dev"
    assert settings.port == 5000
    assert settings.frontend_url == "http://localhost:3000"
    assert settings.max_request_body_bytes == 50 * 1024 * 1024
    assert settings.max_payload_bytes == settings.max_request_body_bytes * 3 // 4


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DEPLOYMENT_MODE", "mongodb")
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017/uploads")
    monkeypatch.setenv("FRONTEND_URL", "https://files.example.com")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.deployment_mode == "mongo"
    assert settings.mongo_uri == "mongodb://db:27017/uploads"
    assert settings.frontend_url == "https://files.example.com"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_unknown_mode_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deployment_mode="s3")


def test_mongo_mode_requires_uri():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deployment_mode="mongo")


def test_environment_dict_masks_connection_string():
    settings = Settings(_env_file=None, deployment_mode="mongo", mongo_uri="mongodb://user:secret@db/files")

    assert settings.get_environment_dict()["MONGO_URI"] == "***"


def test_build_object_store_per_mode(tmp_path, monkeypatch):
    assert isinstance(build_object_store(Settings(_env_file=None, deployment_mode="memory")), InMemoryObjectStore)

    sqlite_settings = Settings(_env_file=None, deployment_mode="local-dev", sqlite_path=str(tmp_path / "f.db"))
    store = build_object_store(sqlite_settings)
    assert isinstance(store, SQLiteObjectStore)
    assert store.db_path == str(tmp_path / "f.db")

    monkeypatch.setattr(MongoObjectStore, "_connect", lambda self: None)
    mongo_settings = Settings(_env_file=None, deployment_mode="mongo", mongo_uri="mongodb://db:27017/uploads")
    mongo = build_object_store(mongo_settings)
    assert isinstance(mongo, MongoObjectStore)
    assert mongo.database_name == "uploads"
    assert mongo.collection_name == "files"
