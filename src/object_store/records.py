"""
Schemas for persisted Object Records.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ObjectRecord(BaseModel):
    """One stored file: its name, raw payload and content-type label."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Lookup name of the file")
    payload: bytes = Field(..., description="Raw file bytes, stored verbatim")
    content_type: str = Field(DEFAULT_CONTENT_TYPE, description="Media type label")
    created_at: Optional[datetime] = Field(None, description="Set by the store on insert")

    @field_validator('content_type', mode='before')
    @classmethod
    def default_blank_content_type(cls, v):
        """Fall back to the generic binary label when none is supplied."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CONTENT_TYPE
        return v.strip() if isinstance(v, str) else v

    @field_validator('content_type')
    @classmethod
    def check_header_safe(cls, v: str) -> str:
        # echoed back verbatim as a Content-Type header
        if not (v.isascii() and v.isprintable()):
            raise ValueError("content type must be printable ASCII")
        return v

    @property
    def size(self) -> int:
        return len(self.payload)


class RecordHandle(BaseModel):
    """Reference to a freshly inserted record."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
