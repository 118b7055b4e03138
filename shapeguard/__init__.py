# shapeguard exports
from shapeguard.config import Settings, get_settings
from shapeguard.logging import configure_logging, get_logger
from shapeguard.errors import Ok, Err, Result, AppError, ErrorCode
from shapeguard.validation import (
    MISSING,
    Failure,
    ValidationErrorDetail,
    ValidationError,
    SchemaError,
    ValidationOptions,
    SchemaValidator,
    compile_schema,
    run_validation,
    validate_or_raise,
    validate_or_none,
    validate_or_errors,
    is_validation_error_list,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "Ok",
    "Err",
    "Result",
    "AppError",
    "ErrorCode",
    "MISSING",
    "Failure",
    "ValidationErrorDetail",
    "ValidationError",
    "SchemaError",
    "ValidationOptions",
    "SchemaValidator",
    "compile_schema",
    "run_validation",
    "validate_or_raise",
    "validate_or_none",
    "validate_or_errors",
    "is_validation_error_list",
]
