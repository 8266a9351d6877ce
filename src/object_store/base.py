"""
Store interface shared by every persistence backend.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from .records import ObjectRecord, RecordHandle


def utc_now() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class ObjectStore(ABC):
    """Durable keyed persistence for Object Records.

    Records are create-once, read-many: there is no update or delete.
    Names are not unique. Every backend returns records in insertion order
    and ``find_by_name`` resolves duplicates to the earliest insert.
    """

    def init_collections(self) -> None:
        """Create tables/collections and indexes. Safe to call repeatedly."""

    @abstractmethod
    def insert(self, record: ObjectRecord) -> RecordHandle:
        """Persist a new record atomically.

        Raises:
            PersistenceError: the durability layer failed. Never retried.
        """

    @abstractmethod
    def list_all(self) -> List[ObjectRecord]:
        """Return every persisted record, oldest first."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[ObjectRecord]:
        """Return the earliest-inserted record called ``name``, or None."""

    def ping(self) -> bool:
        """Report whether the backend is reachable."""
        return True

    def close(self) -> None:
        """Release any connections held by the store."""
