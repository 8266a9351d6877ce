"""
Transfer-level errors and the FastAPI handlers that render them.
"""

import logging

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong."
UPLOAD_PATH = "/file-upload"


class TransferError(Exception):
    """Base for errors surfaced by the transfer service."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(TransferError):
    """Malformed or missing client input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(TransferError):
    """No record matches the requested name."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(TransferError):
    """Persistence or unexpected failure. The message is always generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {err}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "msg": error["msg"],
                    "input": str(error.get("input")),
                }
                for error in errors
            ]
        },
    )


def describe_validation_errors(exc: RequestValidationError) -> str:
    """One line naming each rejected input, e.g. ``query.order: Input should be 'asc' or 'desc'``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are client errors, reported in the failing route's JSON shape."""
    message = describe_validation_errors(exc)
    logger.info(f"Rejected malformed request to {request.url.path}: {message}")
    if request.url.path == UPLOAD_PATH:
        content = {"success": False, "message": f"Invalid upload request: {message}"}
    else:
        content = {"message": f"Invalid request: {message}"}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)
