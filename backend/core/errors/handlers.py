"""FastAPI Exception Handlers

Converts AppErrors, schema ValidationErrors and unexpected exceptions to
JSON responses. Validation failures become 400 responses carrying the
violation message; anything unexpected becomes a generic 500 that only
includes diagnostic detail when debug mode is on.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .types import AppError, ErrorCode, ErrorContext

log = get_logger("errors.handlers")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Raise this from code that does not return Results (route handlers,
    dependencies) to leave through the registered handler.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def _request_context(request: Request) -> dict:
    return {
        "correlation_id": request.headers.get("X-Correlation-ID", ""),
        "request_id": request.headers.get("X-Request-ID"),
    }


def result_to_response(error: AppError) -> JSONResponse:
    """Convert AppError to a JSONResponse with the code's HTTP status."""
    status_code = error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    return result_to_response(exc.error.with_context(**_request_context(request)))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle framework HTTP exceptions (404 routes, 405 methods)."""
    status_code = exc.status_code
    code_map = {
        400: ErrorCode.E2000_VALIDATION_GENERIC,
        404: ErrorCode.E4010_NOT_FOUND,
        409: ErrorCode.E4011_DUPLICATE_KEY,
        422: ErrorCode.E2000_VALIDATION_GENERIC,
    }
    error = AppError(
        code=code_map.get(status_code, ErrorCode.E9000_INTERNAL_GENERIC),
        message=str(exc.detail) if exc.detail else f"HTTP {status_code}",
        context=ErrorContext(origin="http"),
    ).with_context(**_request_context(request))

    response = result_to_response(error)
    # Keep the framework's status for codes outside the taxonomy (405, ...)
    response.status_code = status_code
    return response


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI parameter validation errors (path and query params)."""
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(loc) for loc in first.get("loc", ()))
    error = AppError(
        code=ErrorCode.E2000_VALIDATION_GENERIC,
        message=f"{field}: {first.get('msg', 'Request validation failed')}",
        context=ErrorContext(origin="request_validation"),
        metadata={"field": field, "constraint": first.get("type", "validation_error")},
    ).with_context(**_request_context(request))
    return result_to_response(error)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle schema ValidationError raised by the raising validator variant."""
    from core.validation.errors import ValidationError

    if not isinstance(exc, ValidationError):
        raise exc

    error = exc.to_app_error().with_context(origin="validation", **_request_context(request))
    return result_to_response(error)


def make_unhandled_exception_handler(debug: bool):
    """Build the catch-all handler.

    With ``debug`` the response carries the exception type and text under
    ``error.detail``; otherwise only the generic message.
    """

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        from core.validation.errors import ValidationError

        if isinstance(exc, ValidationError):
            return await validation_error_handler(request, exc)

        error = AppError(
            code=ErrorCode.E9001_UNEXPECTED_ERROR,
            message="An unexpected error occurred",
            context=ErrorContext(origin="unhandled"),
            cause=exc,
        ).with_context(**_request_context(request))

        log.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            correlation_id=error.context.correlation_id,
        )

        response = result_to_response(error)
        if debug:
            content = error.to_dict()
            content["error"]["detail"] = {"type": type(exc).__name__, "message": str(exc)}
            response = JSONResponse(status_code=response.status_code, content=content)
        return response

    return unhandled_exception_handler


def register_error_handlers(app: FastAPI, *, debug: bool = False) -> None:
    """Register all error handlers on the FastAPI app."""
    from core.validation.errors import ValidationError

    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(Exception, make_unhandled_exception_handler(debug))


def raise_error(error: AppError) -> None:
    """Raise AppError as exception."""
    raise AppErrorException(error)


def raise_result(result) -> None:
    """Raise if Result is Err, otherwise return.

    Usage:
        result = await fetch_one(db, Document, contact_id)
        raise_result(result)
        document = result.unwrap()
    """
    if result.is_err():
        raise AppErrorException(result.unwrap_err())
