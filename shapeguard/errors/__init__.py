"""Monadic Error Handling System

Result[T, E] container for success/failure plus the AppError/ErrorCode
taxonomy shared by the validation layer.

Usage:
    from shapeguard.errors import Ok, Err

    match run_validation(schema, payload):
        case Ok(value):
            store(value)
        case Err(error):
            log.warning("payload.rejected", errors=len(error.details))
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    validation_failed,
    schema_malformed,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "validation_failed",
    "schema_malformed",
]
