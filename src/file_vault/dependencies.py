"""Store construction and request-scoped dependencies."""
import logging

from fastapi import Request

from file_vault.config.settings import Settings
from file_vault.service import TransferService
from object_store import InMemoryObjectStore, MongoObjectStore, ObjectStore, SQLiteObjectStore

logger = logging.getLogger(__name__)


def build_object_store(settings: Settings) -> ObjectStore:
    """Pick the store backend for the configured deployment mode."""
    if settings.deployment_mode == "mongo":
        store = MongoObjectStore(
            connection_string=settings.mongo_uri,
            database_name=settings.mongo_database,
            collection_name=settings.mongo_collection,
        )
    elif settings.deployment_mode == "memory":
        store = InMemoryObjectStore()
    else:
        store = SQLiteObjectStore(settings.sqlite_path)
    logger.info(f"Using {type(store).__name__} for deployment mode {settings.deployment_mode}")
    return store


def get_transfer_service(request: Request) -> TransferService:
    """Transfer service dependency."""
    return request.app.state.transfer_service
