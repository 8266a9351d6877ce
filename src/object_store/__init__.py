"""
Object persistence layer.

Holds the Object Record model and the Store backends (MongoDB, SQLite and
in-memory) that persist records durably and serve them back by name.
"""

from .base import ObjectStore
from .errors import PersistenceError, StoreError
from .memory_store import InMemoryObjectStore
from .mongo_store import MongoObjectStore
from .records import DEFAULT_CONTENT_TYPE, ObjectRecord, RecordHandle
from .sqlite_store import SQLiteObjectStore

__all__ = [
    'ObjectStore',
    'ObjectRecord', 'RecordHandle', 'DEFAULT_CONTENT_TYPE',
    'StoreError', 'PersistenceError',
    'InMemoryObjectStore', 'MongoObjectStore', 'SQLiteObjectStore',
]
