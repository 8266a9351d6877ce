from contextlib import asynccontextmanager
from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from file_vault.config.settings import Settings
from file_vault.dependencies import build_object_store
from file_vault.errors import (
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
)
from file_vault.logging_config import configure_logging
from file_vault.routers.files import router as files_router
from file_vault.routers.health import router as health_router
from file_vault.service import TransferService
from object_store import ObjectStore

# Set up logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.store.close()


def limit_request_body(max_bytes: int):
    """Build a middleware rejecting bodies whose declared size is over ``max_bytes``."""
    async def middleware(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                declared = -1
            if declared < 0:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"success": False, "message": "Invalid Content-Length header"},
                )
            if declared > max_bytes:
                logger.warning(f"Rejected {declared} byte body on {request.url.path} (limit {max_bytes})")
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={"success": False, "message": f"Request body exceeds {max_bytes} bytes"},
                )
        return await call_next(request)
    return middleware


def create_app(settings: Optional[Settings] = None, store: Optional[ObjectStore] = None) -> FastAPI:
    """Create a FastAPI application.

    Args:
        settings: configuration, read from the environment when omitted
        store: store backend, built from ``settings`` when omitted
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="File Vault API",
        summary="Store files and serve them back by name",
        version="v1",
        description=dedent(
            """\
        Upload files as base64 JSON, list everything stored, and download
        any file by the name it was uploaded under.

        | Operation | Route |
        | --- | --- |
        | Upload | `POST /file-upload` |
        | List | `GET /get-files` |
        | Download | `GET /download/{name}` |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    if store is None:
        store = build_object_store(settings)
    logger.info("initializing store")
    store.init_collections()

    app.state.settings = settings
    app.state.store = store
    app.state.transfer_service = TransferService(store, max_payload_bytes=settings.max_payload_bytes)

    app.include_router(files_router, tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.middleware("http")(limit_request_body(settings.max_request_body_bytes))
    app.middleware("http")(handle_broad_exceptions)
    # registered last so error responses from the layers above still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
