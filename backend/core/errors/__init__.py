"""Result-based Error Handling

- Result[T, E]: Ok / Err container for success/failure
- AppError: error with code, message, context and metadata
- ErrorCode: error code taxonomy with HTTP status mapping
- Builders: ergonomic error construction
- Handlers: FastAPI integration

Usage:
    from core.errors import Ok, Result, AppError, not_found

    async def find(db, document_id: str) -> Result[Document, AppError]:
        document = await db.get(Document, document_id)
        if document is None:
            return not_found("Document", document_id, origin="documents")
        return Ok(document)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
)

from .builders import (
    validation_error,
    invalid_json,
    db_error,
    not_found,
    duplicate_key,
    db_connection_failed,
    transaction_failed,
    internal_error,
)

from .boundaries import (
    ErrorMapper,
    DatabaseErrorMapper,
)

from .handlers import (
    AppErrorException,
    register_error_handlers,
    result_to_response,
    raise_error,
    raise_result,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "validation_error",
    "invalid_json",
    "db_error",
    "not_found",
    "duplicate_key",
    "db_connection_failed",
    "transaction_failed",
    "internal_error",
    "ErrorMapper",
    "DatabaseErrorMapper",
    "AppErrorException",
    "register_error_handlers",
    "result_to_response",
    "raise_error",
    "raise_result",
]
