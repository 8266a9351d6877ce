"""
SQLite store for Object Records.

Used in local-dev mode and for single-node deployments. Each operation
opens its own connection so the store can be shared across request threads.
"""

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from .base import ObjectStore, utc_now
from .errors import PersistenceError
from .records import ObjectRecord, RecordHandle

logger = logging.getLogger(__name__)


class SQLiteObjectStore(ObjectStore):
    """SQLite-backed store with one row per record"""

    def __init__(self, db_path: str = "file_vault.db", timeout: float = 30.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _to_record(row: sqlite3.Row) -> ObjectRecord:
        created_at = row["created_at"]
        return ObjectRecord(
            name=row["name"],
            payload=bytes(row["data"]),
            content_type=row["content_type"],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def init_collections(self) -> None:
        """Create the files table and its name index"""
        conn = None
        try:
            conn = self._get_connection()
            with conn:
                conn.execute('''
                    CREATE TABLE IF NOT EXISTS files (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        data BLOB NOT NULL,
                        content_type TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    )
                ''')
                conn.execute('CREATE INDEX IF NOT EXISTS idx_files_name ON files(name)')
            logger.info(f"SQLite files table initialized at {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Error initializing SQLite store: {e}")
            raise PersistenceError(f"Could not initialize {self.db_path}: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def insert(self, record: ObjectRecord) -> RecordHandle:
        created_at = utc_now()
        conn = None
        try:
            conn = self._get_connection()
            # the connection context manager commits or rolls back as one unit
            with conn:
                cursor = conn.execute(
                    'INSERT INTO files (name, data, content_type, created_at) VALUES (?, ?, ?, ?)',
                    (record.name, sqlite3.Binary(record.payload), record.content_type, created_at.isoformat()),
                )
            record_id = str(cursor.lastrowid)
        except sqlite3.Error as e:
            logger.error(f"Error inserting '{record.name}' into {self.db_path}: {e}")
            raise PersistenceError(f"Insert failed: {e}") from e
        finally:
            if conn is not None:
                conn.close()

        logger.info(f"Created row in files with ID: {record_id}")
        return RecordHandle(id=record_id, created_at=created_at)

    def list_all(self) -> List[ObjectRecord]:
        conn = None
        try:
            conn = self._get_connection()
            rows = conn.execute(
                'SELECT name, data, content_type, created_at FROM files ORDER BY id'
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error listing rows from {self.db_path}: {e}")
            raise PersistenceError(f"List failed: {e}") from e
        finally:
            if conn is not None:
                conn.close()
        return [self._to_record(row) for row in rows]

    def find_by_name(self, name: str) -> Optional[ObjectRecord]:
        conn = None
        try:
            conn = self._get_connection()
            row = conn.execute(
                'SELECT name, data, content_type, created_at FROM files WHERE name = ? ORDER BY id LIMIT 1',
                (name,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error finding '{name}' in {self.db_path}: {e}")
            raise PersistenceError(f"Lookup failed: {e}") from e
        finally:
            if conn is not None:
                conn.close()
        return self._to_record(row) if row else None

    def ping(self) -> bool:
        try:
            conn = self._get_connection()
            try:
                conn.execute('SELECT 1')
            finally:
                conn.close()
            return True
        except sqlite3.Error as e:
            logger.warning(f"SQLite ping failed: {e}")
            return False
