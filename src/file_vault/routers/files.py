import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from file_vault.dependencies import get_transfer_service
from file_vault.errors import GENERIC_ERROR_MESSAGE, UPLOAD_PATH, TransferError
from file_vault.schemas import (
    ErrorResponse,
    FileEntry,
    GetFilesQueryParams,
    UploadFileRequest,
    UploadFileResponse,
)
from file_vault.service import UPLOAD_SUCCESS_MESSAGE, TransferService
from file_vault.utils.headers import content_disposition

logger = logging.getLogger(__name__)

LIST_ERROR_MESSAGE = "Error fetching files"
DOWNLOAD_ERROR_MESSAGE = "Error downloading file"

router = APIRouter()


@router.post(
    UPLOAD_PATH,
    response_model=UploadFileResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": UploadFileResponse},
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": UploadFileResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": UploadFileResponse},
    },
)
def upload_file(
    body: UploadFileRequest,
    service: TransferService = Depends(get_transfer_service),
):
    """
    Store a file sent as base64 text.

    Args:
        body: name, fileData (base64) and optional contentType

    Returns:
        UploadFileResponse: success flag and message
    """
    try:
        service.upload(body.name, body.file_data, body.content_type)
    except TransferError as e:
        message = e.message if e.status_code < 500 else GENERIC_ERROR_MESSAGE
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": message},
        )
    except Exception as e:
        logger.exception(f"Unexpected error uploading '{body.name}': {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": GENERIC_ERROR_MESSAGE},
        )

    return UploadFileResponse(success=True, message=UPLOAD_SUCCESS_MESSAGE)


@router.get(
    "/get-files",
    response_model=List[FileEntry],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
def get_files(
    query_params: GetFilesQueryParams = Depends(),
    service: TransferService = Depends(get_transfer_service),
):
    """
    List every stored file with its contents as base64.

    Args:
        query_params: optional listing order

    Returns:
        List of name, data and contentType entries
    """
    try:
        return service.list_all(order=query_params.order)
    except TransferError as e:
        return JSONResponse(status_code=e.status_code, content={"message": e.message})
    except Exception as e:
        logger.exception(f"Unexpected error listing files: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": LIST_ERROR_MESSAGE},
        )


@router.get(
    "/download/{name:path}",
    response_class=Response,
    responses={
        status.HTTP_200_OK: {"content": {"application/octet-stream": {}}},
        status.HTTP_404_NOT_FOUND: {"content": {"text/plain": {}}},
    },
)
def download_file(
    name: str = Path(..., description="Name the file was uploaded under"),
    service: TransferService = Depends(get_transfer_service),
):
    """
    Download a file as an attachment.

    Args:
        name: name the file was uploaded under

    Returns:
        Response: the raw file bytes with the stored content type
    """
    try:
        result = service.download(name)
        # content type goes in verbatim; media_type would append a charset to text/*
        return Response(
            content=result.payload,
            headers={
                "Content-Type": result.content_type,
                "Content-Disposition": content_disposition(result.filename),
            },
        )
    except TransferError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    except Exception as e:
        logger.exception(f"Unexpected error downloading '{name}': {e}")
        return PlainTextResponse(DOWNLOAD_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
