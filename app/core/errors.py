from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Dict, Any, List, Optional

from app.core.config import Settings
from app.core.exceptions import AppError, ValidationError
from app.core.logging import get_logger
from app.schemas.response import error_response

logger = get_logger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def flatten_request_errors(
    errors: List[Dict[str, Any]],
    field_names: Optional[Dict[str, str]] = None,
    messages: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """
    Turns FastAPI or pydantic errors into a field -> message map.

    Paths (user.email) are renamed through `field_names` and their
    messages replaced through `messages` when given. Only the first
    error per field is kept.
    """
    field_names = field_names or {}
    messages = messages or {}
    field_errors: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        path = ".".join(loc) or "body"
        message = messages.get(path, err.get("msg", "Invalid value"))
        field_errors.setdefault(field_names.get(path, path), message)
    return field_errors


def add_exception_handlers(app: FastAPI, config: Settings):
    """
    Registers exception handlers with the FastAPI app.
    All of them answer with the standard error envelope.
    """
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        level = "error" if exc.status_code >= 500 else "info"
        getattr(logger, level)(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(
                message=exc.message,
                code=exc.code,
                errors=exc.errors if isinstance(exc, ValidationError) else None,
            )
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (unknown routes, wrong methods).
        """
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=message, code="HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles malformed request bodies and parameters.
        """
        return JSONResponse(
            status_code=400,
            content=error_response(
                message="Validation error",
                code="VALIDATION_ERROR",
                errors=flatten_request_errors(exc.errors()),
            )
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = str(exc) if config.is_development else "Internal server error"

        return JSONResponse(
            status_code=500,
            content=error_response(message=message, code="INTERNAL_ERROR"),
        )
