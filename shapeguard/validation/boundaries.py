"""Validation at System Boundaries

Three ways to surface one validation Result, for callers with different
error handling conventions:
- validate_or_raise: sanitized value, or raise ValidationError
- validate_or_none: sanitized value, or None
- validate_or_errors: sanitized value, or the list of ValidationErrorDetail

SchemaError is never converted: a malformed schema propagates out of all
three.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from shapeguard.errors import Err, Ok
from .engine import ValidationOptions, run_validation
from .errors import ValidationErrorDetail
from .schema import SchemaNode

SchemaLike = SchemaNode | Mapping[str, Any]
OptionsLike = ValidationOptions | Mapping[str, Any] | None


def validate_or_raise(schema: SchemaLike, value: Any, options: OptionsLike = None) -> Any:
    """Return the sanitized value; raise ValidationError listing every violation."""
    match run_validation(schema, value, options):
        case Ok(sanitized):
            return sanitized
        case Err(error):
            raise error


def validate_or_none(schema: SchemaLike, value: Any, options: OptionsLike = None) -> Any:
    """Return the sanitized value, or None if the value does not conform."""
    return run_validation(schema, value, options).unwrap_or(None)


def validate_or_errors(schema: SchemaLike, value: Any, options: OptionsLike = None) -> Any:
    """Return the sanitized value, or the list of violations."""
    match run_validation(schema, value, options):
        case Ok(sanitized):
            return sanitized
        case Err(error):
            return list(error.details)


def is_validation_error_list(obj: Any) -> bool:
    """True for a non-empty list made only of ValidationErrorDetail items."""
    return isinstance(obj, list) and bool(obj) and all(isinstance(item, ValidationErrorDetail) for item in obj)
