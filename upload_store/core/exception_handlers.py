"""
Exception Handlers Module
Maps upload store errors and framework errors to JSON responses
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from upload_store.core.exceptions import UploadStoreException

logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    status_code: int,
    error: Any,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = {
        "error": error,
        "status_code": status_code,
        "path": request.url.path,
    }
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def upload_store_exception_handler(
    request: Request,
    exc: UploadStoreException
) -> JSONResponse:
    """Storage, naming and input errors raised by the services"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "endpoint": request.url.path,
            "exception_type": type(exc).__name__,
        }
    )
    return _error_response(request, exc.status_code, exc.message, exc.details)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    logger.warning(
        f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}",
        extra={"status_code": exc.status_code, "endpoint": request.url.path}
    )
    return _error_response(request, exc.status_code, exc.detail)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed multipart or form fields"""
    errors = [
        {
            "field": " -> ".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Rejected request with {len(errors)} invalid field(s)",
        extra={"status_code": 422, "endpoint": request.url.path}
    )
    return _error_response(request, 422, "Validation failed", {"errors": errors})


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Anything the services did not translate; the body hides internals"""
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra={
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "endpoint": request.url.path,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(UploadStoreException, upload_store_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")


__all__ = [
    'register_exception_handlers',
    'upload_store_exception_handler',
    'http_exception_handler',
    'validation_exception_handler',
    'general_exception_handler'
]
