"""
Transfer service: the upload, list and download operations.

Orchestrates the codec and an injected ObjectStore. Holds no state between
calls beyond its configuration.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from file_vault import codec
from file_vault.errors import BadRequest, InternalError, NotFound
from file_vault.schemas import FileEntry, SortOrder
from file_vault.utils.decorators import log_listing
from object_store import ObjectRecord, ObjectStore, PersistenceError, RecordHandle

logger = logging.getLogger(__name__)

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"
FILE_NOT_FOUND_MESSAGE = "File not found"


@dataclass(frozen=True)
class DownloadResult:
    """Raw payload plus the attributes needed to serve it as an attachment."""
    payload: bytes
    content_type: str
    filename: str


class TransferService:
    """Boundary operations over an ObjectStore"""

    def __init__(self, store: ObjectStore, max_payload_bytes: Optional[int] = None):
        self.store = store
        self.max_payload_bytes = max_payload_bytes

    def upload(
        self,
        name: Optional[str],
        file_data: Optional[str],
        content_type: Optional[str] = None,
    ) -> RecordHandle:
        """Decode and persist one file.

        Raises:
            BadRequest: name or file data missing, or file data is not base64
                (status 413 when the payload is over the size ceiling).
            InternalError: the store failed; the cause is logged, not returned.
        """
        if name is None or not name.strip():
            raise BadRequest("Missing required field: name")
        if file_data is None:
            raise BadRequest("Missing required field: fileData")

        try:
            payload = codec.decode(file_data, max_size=self.max_payload_bytes)
        except codec.PayloadTooLarge as e:
            logger.warning(f"Rejected upload of '{name}': {e}")
            raise BadRequest(str(e), status_code=413) from e
        except codec.InvalidEncoding as e:
            logger.warning(f"Rejected upload of '{name}': {e}")
            raise BadRequest(f"Invalid file data: {e}") from e

        try:
            record = ObjectRecord(name=name, payload=payload, content_type=content_type)
        except ValidationError as e:
            raise BadRequest(f"Invalid file record: {e.errors()[0]['msg']}") from e

        try:
            handle = self.store.insert(record)
        except PersistenceError as e:
            logger.error(f"Error uploading file '{name}': {e}")
            raise InternalError() from e

        logger.info(f"Uploaded '{name}' ({record.size} bytes, {record.content_type}) as {handle.id}")
        return handle

    @log_listing
    def list_all(self, order: SortOrder = SortOrder.ASC) -> List[FileEntry]:
        """Every stored file with its payload re-encoded as base64."""
        try:
            records = self.store.list_all()
        except PersistenceError as e:
            logger.error(f"Error fetching files: {e}")
            raise InternalError("Error fetching files") from e

        if order == SortOrder.DESC:
            records = list(reversed(records))

        return [
            FileEntry(name=r.name, data=codec.encode(r.payload), content_type=r.content_type)
            for r in records
        ]

    def download(self, name: str) -> DownloadResult:
        """Look a file up by name. The stored bytes are returned untouched.

        Raises:
            NotFound: no record is stored under ``name``.
            InternalError: the store failed.
        """
        try:
            record = self.store.find_by_name(name)
        except PersistenceError as e:
            logger.error(f"Error downloading file '{name}': {e}")
            raise InternalError("Error downloading file") from e

        if record is None:
            raise NotFound(FILE_NOT_FOUND_MESSAGE)

        return DownloadResult(
            payload=record.payload,
            content_type=record.content_type,
            filename=record.name,
        )
