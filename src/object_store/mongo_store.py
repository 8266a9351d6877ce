"""
MongoDB store for Object Records.

Documents keep the field names ``name``, ``data``, ``contentType`` and
``createdAt`` so collections written by earlier deployments stay readable.
"""

import logging
from typing import Any, Dict, List, Optional

from bson.errors import BSONError
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from .base import ObjectStore, utc_now
from .errors import PersistenceError
from .records import ObjectRecord, RecordHandle

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "file_vault"
DEFAULT_COLLECTION = "files"

# DocumentTooLarge and other encoding failures derive from BSONError, not PyMongoError
_DRIVER_ERRORS = (PyMongoError, BSONError)

_PROJECTION = {"name": 1, "data": 1, "contentType": 1, "createdAt": 1}


class MongoObjectStore(ObjectStore):
    """MongoDB-backed store, one document per record"""

    def __init__(
        self,
        connection_string: Optional[str] = None,
        database_name: Optional[str] = None,
        collection_name: str = DEFAULT_COLLECTION,
        client: Optional[MongoClient] = None,
    ):
        if client is None and not connection_string:
            raise ValueError("MongoDB connection string required. Set MONGO_URI or pass connection_string")

        self.connection_string = connection_string
        self._owns_client = client is None
        self.client = client
        self.database_name = database_name or self._database_from_uri(connection_string)
        self.collection_name = collection_name
        self._connect()

    @staticmethod
    def _database_from_uri(connection_string: Optional[str]) -> str:
        """Pick the database named in the URI path, if any"""
        if not connection_string:
            return DEFAULT_DATABASE
        tail = connection_string.split('://', 1)[-1]
        if '/' not in tail:
            return DEFAULT_DATABASE
        db_name = tail.split('/', 1)[1].split('?')[0]
        return db_name or DEFAULT_DATABASE

    def _connect(self) -> None:
        """Establish MongoDB connection"""
        try:
            if self.client is None:
                self.client = MongoClient(self.connection_string, tz_aware=True)
                # Test connection
                self.client.admin.command('ping')
            self.collection = self.client[self.database_name][self.collection_name]
            logger.info(f"Connected to MongoDB collection: {self.database_name}.{self.collection_name}")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise PersistenceError(f"Could not connect to MongoDB: {e}") from e

    @staticmethod
    def _to_record(document: Dict[str, Any]) -> ObjectRecord:
        return ObjectRecord(
            name=document["name"],
            payload=bytes(document["data"]),
            content_type=document.get("contentType"),
            created_at=document.get("createdAt"),
        )

    def init_collections(self) -> None:
        """Create the lookup indexes. ``name`` is deliberately not unique."""
        try:
            self.collection.create_index([("name", ASCENDING)])
            self.collection.create_index([("createdAt", ASCENDING)])
            logger.info(f"MongoDB indexes initialized on {self.collection_name}")
        except PyMongoError as e:
            logger.error(f"Error initializing MongoDB indexes: {e}")
            raise PersistenceError(f"Could not create indexes: {e}") from e

    def insert(self, record: ObjectRecord) -> RecordHandle:
        created_at = utc_now()
        document = {
            "name": record.name,
            "data": record.payload,
            "contentType": record.content_type,
            "createdAt": created_at,
        }
        try:
            result = self.collection.insert_one(document)
        except _DRIVER_ERRORS as e:
            logger.error(f"Error inserting '{record.name}' into {self.collection_name}: {e}")
            raise PersistenceError(f"Insert failed: {e}") from e

        doc_id = str(result.inserted_id)
        logger.info(f"Created document in {self.collection_name} with ID: {doc_id}")
        return RecordHandle(id=doc_id, created_at=created_at)

    def list_all(self) -> List[ObjectRecord]:
        try:
            cursor = self.collection.find({}, _PROJECTION).sort("_id", ASCENDING)
            return [self._to_record(doc) for doc in cursor]
        except _DRIVER_ERRORS as e:
            logger.error(f"Error listing documents from {self.collection_name}: {e}")
            raise PersistenceError(f"List failed: {e}") from e

    def find_by_name(self, name: str) -> Optional[ObjectRecord]:
        try:
            document = self.collection.find_one({"name": name}, _PROJECTION, sort=[("_id", ASCENDING)])
        except _DRIVER_ERRORS as e:
            logger.error(f"Error finding '{name}' in {self.collection_name}: {e}")
            raise PersistenceError(f"Lookup failed: {e}") from e
        return self._to_record(document) if document else None

    def ping(self) -> bool:
        try:
            self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client is not None and self._owns_client:
            self.client.close()
            logger.info("MongoDB connection closed")
