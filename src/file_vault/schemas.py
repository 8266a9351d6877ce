####################################
# --- Request/response schemas --- #
####################################

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SortOrder(str, Enum):
    """Listing order by insertion time"""
    ASC = 'asc'
    DESC = 'desc'


class UploadFileRequest(BaseModel):
    """Request body for `POST /file-upload`."""
    name: Optional[str] = Field(
        None,
        description="Name the file is stored and downloaded under.",
        json_schema_extra={"example": "a.txt"},
    )
    file_data: Optional[str] = Field(
        None,
        alias="fileData",
        description="File contents as base64 text.",
        json_schema_extra={"example": "aGVsbG8="},
    )
    content_type: Optional[str] = Field(
        None,
        alias="contentType",
        description="Media type of the file. Defaults to application/octet-stream.",
        json_schema_extra={"example": "text/plain"},
    )

    model_config = ConfigDict(populate_by_name=True)


class UploadFileResponse(BaseModel):
    """Response model for `POST /file-upload`."""
    success: bool
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"success": True, "message": "File uploaded successfully"}
        }
    )


class FileEntry(BaseModel):
    """One file as returned by `GET /get-files`."""
    name: str
    data: str = Field(description="File contents as base64 text.")
    content_type: str = Field(alias="contentType")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"name": "a.txt", "data": "aGVsbG8=", "contentType": "text/plain"}
        },
    )


class GetFilesQueryParams(BaseModel):
    """Query parameters for `GET /get-files`."""
    order: SortOrder = Field(
        SortOrder.ASC,
        description="asc lists oldest uploads first, desc newest first.",
    )


class ErrorResponse(BaseModel):
    """Error body for JSON endpoints."""
    message: str
