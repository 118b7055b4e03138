"""Error Builders

Ergonomic constructors for the two error tiers: data validation failures
(E2xxx, recoverable) and malformed schemas (E9xxx, programmer error).
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext


def validation_failed(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    origin: str = "",
    **metadata: Any,
) -> AppError:
    """Create validation error for bad input data."""
    return AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
    )


def schema_malformed(
    message: str,
    *,
    schema_path: str = "",
    origin: str = "",
    cause: Exception | None = None,
) -> AppError:
    """Create internal error for a schema that cannot be used."""
    return AppError(
        code=ErrorCode.E9004_SCHEMA_MALFORMED,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={"schema_path": schema_path} if schema_path else {},
        cause=cause,
    )
