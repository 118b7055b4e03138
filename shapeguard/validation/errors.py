"""Validation Error System

Two tiers:
- SchemaError: the schema itself is unusable. Fatal, raised immediately,
  never mixed with data errors.
- ValidationErrorDetail: one violation in the input data, tagged with the
  dotted/bracketed path where it occurred. Accumulated in a
  ValidationState and surfaced together as a ValidationError.

Error Format (ValidationError.to_dict):
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "error_count": 2,
        "errors": [
            {"path": "address.number", "failure": "missing field", "code": "E2001_REQUIRED_FIELD_MISSING"},
            {"path": "tags[1]", "failure": "not a string", "code": "E2004_INVALID_TYPE"}
        ]
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shapeguard.errors import AppError, ErrorCode, schema_malformed, validation_failed


class Failure(str, Enum):
    """Reason codes for data validation failures."""
    MISSING_FIELD = "missing field"
    UNEXPECTED_FIELD = "unexpected field"
    NOT_AN_OBJECT = "not an object"
    NOT_IN_VALID_SET = "value not in valid set"

    NOT_A_STRING = "not a string"
    STRING_NOT_IN_VALID_SET = "string not in valid set"
    STRING_TOO_LONG = "string too long"
    STRING_TOO_SHORT = "string too short"

    NOT_AN_INTEGER = "not an integer"
    INTEGER_TOO_BIG = "integer too big"
    INTEGER_TOO_SMALL = "integer too small"

    NOT_A_FLOAT = "not a float"
    NOT_A_FINITE_FLOAT = "not a finite float"
    NOT_A_NUMERIC_FLOAT = "not a numeric float"
    FLOAT_TOO_BIG = "float too big"
    FLOAT_TOO_SMALL = "float too small"

    NOT_A_BOOLEAN = "not a boolean"

    NOT_AN_ARRAY = "not an array"
    ARRAY_TOO_LONG = "array too long"
    ARRAY_TOO_SHORT = "array too short"

    @property
    def code(self) -> ErrorCode:
        """Map failure to the error code taxonomy."""
        if self is Failure.MISSING_FIELD:
            return ErrorCode.E2001_REQUIRED_FIELD_MISSING
        if self.value.startswith("not a"):
            return ErrorCode.E2004_INVALID_TYPE
        if self.value.endswith(("too big", "too small", "too long", "too short")):
            return ErrorCode.E2003_OUT_OF_RANGE
        return ErrorCode.E2005_CONSTRAINT_VIOLATION

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, order=True)
class ValidationErrorDetail:
    """A single violation: where it happened and why.

    Equality, hashing and ordering are defined over (path, failure) so that
    error lists can be sorted and compared deterministically. Plain strings
    are accepted for `failure` and normalized to `Failure`.
    """
    path: str
    failure: Failure

    def __post_init__(self):
        if not isinstance(self.failure, Failure):
            object.__setattr__(self, "failure", Failure(self.failure))

    @property
    def code(self) -> ErrorCode:
        return self.failure.code

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"path": self.path, "failure": self.failure.value, "code": self.code.name}

    def __str__(self) -> str:
        return f"validation against schema failed at {{{self.path} }}: {self.failure.value}"


@dataclass
class ValidationError(Exception):
    """Input data did not conform to the schema.

    Carries every violation found in one pass, in traversal order.
    """
    details: list[ValidationErrorDetail]
    message: str = "Validation failed"

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return str(self.details[0])
        return f"{self.message} ({len(self.details)} errors)"

    @property
    def field_errors(self) -> dict[str, list[ValidationErrorDetail]]:
        """Group errors by path."""
        result: dict[str, list[ValidationErrorDetail]] = {}
        for detail in self.details: result.setdefault(detail.path, []).append(detail)
        return result

    @property
    def first_error(self) -> ValidationErrorDetail | None: return self.details[0] if self.details else None

    def get_errors_for_path(self, path: str) -> list[ValidationErrorDetail]:
        return [d for d in self.details if d.path == path]

    def sorted_details(self) -> list[ValidationErrorDetail]:
        return sorted(self.details)

    def to_app_error(self) -> AppError:
        """Convert to AppError for the shared error handling system."""
        if len(self.details) == 1:
            d = self.details[0]
            return validation_failed(f"{d.path}: {d.failure.value}", code=d.code, path=d.path, failure=d.failure.value)
        return validation_failed(f"Validation failed: {len(self.details)} errors",
            error_count=len(self.details), errors=[d.to_dict() for d in self.details])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"error": {"type": "validation_error", "message": self.message,
            "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]}}


class SchemaError(Exception):
    """The schema is malformed: unknown kind, empty alternation, bad directive.

    This is a programmer error, distinct from ValidationError so that a
    broken schema can never be mistaken for bad input data.
    """

    def __init__(self, message: str, *, schema_path: str = ""):
        self.message, self.schema_path = message, schema_path
        super().__init__(f"{message} (at {schema_path})" if schema_path else message)

    def to_app_error(self) -> AppError:
        return schema_malformed(self.message, schema_path=self.schema_path, cause=self)


@dataclass
class ValidationState:
    """Mutable context threaded through one top-level validation call.

    Collects every error (no fail-fast). `fork()` hands out an independent
    copy for probing alternatives; `adopt()` takes over a successful probe.
    """
    discard_unknown_fields: bool = False
    errors: list[ValidationErrorDetail] = field(default_factory=list)

    def add_error(self, path: str, failure: Failure) -> None:
        self.errors.append(ValidationErrorDetail(path, failure))

    @property
    def error_count(self) -> int: return len(self.errors)

    def fork(self) -> ValidationState:
        return ValidationState(discard_unknown_fields=self.discard_unknown_fields, errors=list(self.errors))

    def adopt(self, other: ValidationState) -> None:
        self.errors = other.errors

    def to_validation_error(self, message: str = "Validation failed") -> ValidationError | None:
        """Convert to ValidationError if errors exist."""
        if not self.errors: return None
        return ValidationError(details=list(self.errors), message=message)
