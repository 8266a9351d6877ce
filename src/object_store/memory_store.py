"""In-memory store for tests and throwaway runs. Nothing survives the process."""

import logging
import threading
from typing import List, Optional

from .base import ObjectStore, utc_now
from .records import ObjectRecord, RecordHandle

logger = logging.getLogger(__name__)


class InMemoryObjectStore(ObjectStore):
    """List-backed store guarded by a lock."""

    def __init__(self) -> None:
        self._records: List[ObjectRecord] = []
        self._lock = threading.Lock()

    def insert(self, record: ObjectRecord) -> RecordHandle:
        with self._lock:
            stored = record.model_copy(update={"created_at": utc_now()})
            self._records.append(stored)
            record_id = str(len(self._records))
        logger.info(f"Stored '{stored.name}' in memory with ID: {record_id}")
        return RecordHandle(id=record_id, created_at=stored.created_at)

    def list_all(self) -> List[ObjectRecord]:
        with self._lock:
            return list(self._records)

    def find_by_name(self, name: str) -> Optional[ObjectRecord]:
        with self._lock:
            return next((r for r in self._records if r.name == name), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
