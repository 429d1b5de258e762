"""Error Handlers — global exception handlers that keep the envelope shape.

Invariants:
    - RegistrationError → its http_status with {success: false, message, data: null}
    - RequestValidationError → 400 with one message listing every failing field
    - Exception (catch-all) → 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from registration_api.core.errors import RegistrationError
from registration_api.schemas.api_response import ApiResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_registration_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_registration_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(
        request: Request, exc: RegistrationError,
    ):
        logger.error(
            f"RegistrationError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ApiResponse.error("An unexpected error occurred").model_dump(),
        )


def format_validation_errors(errors: list[dict]) -> str:
    """Render pydantic errors as 'Validation failed: field: msg; field: msg'."""
    parts = []
    for e in errors:
        # drop the leading "body"/"path"/"query" segment
        loc = [str(part) for part in e.get("loc", ())][1:]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {e['msg']}")
    return "Validation failed: " + "; ".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return ApiResponse.error(format_validation_errors(exc.errors())).model_dump()
