"""Validation Engine

Walks the schema tree and the value tree in lockstep and builds a fresh,
sanitized copy of the value. Data errors are accumulated in a
ValidationState (never raised) so that one pass reports every violation;
only a malformed schema raises, as SchemaError.

Usage:
    result = run_validation(schema, payload, {"discardUnknownFields": True})
    match result:
        case Ok(value): ...
        case Err(error): error.details  # [ValidationErrorDetail(path, failure), ...]
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from shapeguard.errors import Err, Ok, Result
from shapeguard.logging import get_logger
from .errors import Failure, SchemaError, ValidationError, ValidationState
from .schema import (
    ArrayNode,
    BoolNode,
    EitherNode,
    FloatNode,
    IntNode,
    LeafNode,
    ObjectNode,
    SchemaNode,
    StringNode,
    compile_schema,
)
from .validators import validate_bool, validate_float, validate_int, validate_string

log = get_logger(__name__)


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Sentinel("MISSING")
"""Input marker: the key was never present. Distinct from None (present, null)."""

ABSENT: Final = _Sentinel("ABSENT")
"""Output marker: nothing to put in the sanitized value at this position."""


class ValidationOptions(BaseModel):
    """Per-call options. Accepts snake_case names or their camelCase aliases."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    discard_unknown_fields: bool = Field(default=False, alias="discardUnknownFields")

    @classmethod
    def from_settings(cls) -> ValidationOptions:
        from shapeguard.config import get_settings
        return cls(discard_unknown_fields=get_settings().DISCARD_UNKNOWN_FIELDS)

    @classmethod
    def coerce(cls, options: ValidationOptions | Mapping[str, Any] | None) -> ValidationOptions:
        if options is None: return cls.from_settings()
        if isinstance(options, cls): return options
        return cls.model_validate(dict(options))


# ============================================================================
# Traversal
# ============================================================================

def _field_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def validate_node(node: SchemaNode, value: Any, state: ValidationState, path: str) -> Any:
    """Validate `value` against `node`, returning the sanitized value or ABSENT.

    Failures are appended to `state.errors`. A None value only short-circuits
    optional nodes; for required nodes it falls through and fails the kind or
    object check with that check's own failure.
    """
    if value is None and node.optional:
        return ABSENT

    if value is MISSING:
        if not node.optional:
            state.add_error(path, Failure.MISSING_FIELD)
        return ABSENT

    match node:
        case EitherNode():
            return _validate_either(node, value, state, path)
        case ObjectNode():
            return _validate_object(node, value, state, path)
        case StringNode() | IntNode() | FloatNode() | BoolNode() | ArrayNode():
            return _validate_leaf(node, value, state, path)
        case _:
            raise SchemaError(f"unsupported schema node {type(node).__name__}", schema_path=path)


def _validate_leaf(node: LeafNode, value: Any, state: ValidationState, path: str) -> Any:
    match node:
        case StringNode():
            result = validate_string(node, value)
        case IntNode():
            result = validate_int(node, value)
        case FloatNode():
            result = validate_float(node, value)
        case BoolNode():
            result = validate_bool(node, value)
        case ArrayNode():
            return _validate_array(node, value, state, path)
        case _:
            raise SchemaError(f"unsupported leaf node {type(node).__name__}", schema_path=path)

    if not result.is_valid:
        state.add_error(path, result.failure)
        return ABSENT
    return result.value


def _validate_either(node: EitherNode, value: Any, state: ValidationState, path: str) -> Any:
    """Try alternatives in order; the first one adding no errors wins.

    Each alternative runs against a forked copy of the state so a failed
    attempt leaves nothing behind. If all fail, only a single aggregate
    failure is recorded at `path`.
    """
    if not node.alternatives:
        raise SchemaError("alternation must list at least one alternative", schema_path=path)
    if len(node.alternatives) == 1:
        return _validate_leaf(node.alternatives[0], value, state, path)

    errors_before = state.error_count
    for alternative in node.alternatives:
        probe = state.fork()
        result = _validate_leaf(alternative, value, probe, path)
        if probe.error_count == errors_before:
            state.adopt(probe)
            return result

    state.add_error(path, Failure.NOT_IN_VALID_SET)
    return ABSENT


def _validate_object(node: ObjectNode, value: Any, state: ValidationState, path: str) -> Any:
    if not isinstance(value, Mapping):
        state.add_error(path, Failure.NOT_AN_OBJECT)
        return ABSENT

    output: dict[str, Any] = {}
    for key, child in node.fields.items():
        child_value = validate_node(child, value.get(key, MISSING), state, _field_path(path, key))
        if child_value is not ABSENT:
            output[key] = child_value

    if not state.discard_unknown_fields:
        for key in value:
            if key not in node.fields:
                state.add_error(_field_path(path, key), Failure.UNEXPECTED_FIELD)

    return output


def _validate_array(node: ArrayNode, value: Any, state: ValidationState, path: str) -> Any:
    """Length failures do not stop per-element checks; any failure makes the whole array ABSENT."""
    if not isinstance(value, (list, tuple)):
        state.add_error(path, Failure.NOT_AN_ARRAY)
        return ABSENT

    errors_before = state.error_count
    if node.max_len is not None and len(value) > node.max_len:
        state.add_error(path, Failure.ARRAY_TOO_LONG)
    elif node.min_len is not None and len(value) < node.min_len:
        state.add_error(path, Failure.ARRAY_TOO_SHORT)

    output = []
    for index, element in enumerate(value):
        element_value = validate_node(node.of, element, state, f"{path}[{index}]")
        output.append(None if element_value is ABSENT else element_value)

    if state.error_count != errors_before:
        return ABSENT
    return output


# ============================================================================
# Entry Points
# ============================================================================

def run_validation(
    schema: SchemaNode | Mapping[str, Any],
    value: Any,
    options: ValidationOptions | Mapping[str, Any] | None = None,
) -> Result[Any, ValidationError]:
    """Validate `value` against `schema`.

    Returns Ok(sanitized value) or Err(ValidationError) carrying every
    violation in traversal order. A malformed schema raises SchemaError.
    A root value that is optional and absent sanitizes to None.
    """
    opts = ValidationOptions.coerce(options)
    return _run(_compile(schema), value, opts)


@contextmanager
def _reporting_schema_errors() -> Iterator[None]:
    try:
        yield
    except SchemaError as e:
        log.warning("schema.malformed", reason=e.message, schema_path=e.schema_path)
        raise


def _compile(schema: SchemaNode | Mapping[str, Any]) -> SchemaNode:
    with _reporting_schema_errors():
        return compile_schema(schema)


def _run(node: SchemaNode, value: Any, options: ValidationOptions) -> Result[Any, ValidationError]:
    state = ValidationState(discard_unknown_fields=options.discard_unknown_fields)
    with _reporting_schema_errors():
        output = validate_node(node, value, state, "")

    log.debug("validation.completed", error_count=state.error_count)
    if (error := state.to_validation_error()) is not None:
        return Err(error)
    return Ok(None if output is ABSENT else output)


class SchemaValidator:
    """Validator bound to one compiled schema and one set of options.

    Usage:
        address_validator = SchemaValidator({"street": {"$type": "string"}})
        address = address_validator.validate_or_raise(payload)
    """

    __slots__ = ("node", "options")

    def __init__(self, schema: SchemaNode | Mapping[str, Any],
                 options: ValidationOptions | Mapping[str, Any] | None = None):
        self.options = ValidationOptions.coerce(options)
        self.node = _compile(schema)

    def validate(self, value: Any) -> Result[Any, ValidationError]:
        return _run(self.node, value, self.options)

    def validate_or_raise(self, value: Any) -> Any:
        return self.validate(value).unwrap()

    def validate_or_none(self, value: Any) -> Any:
        return self.validate(value).unwrap_or(None)

    def validate_or_errors(self, value: Any) -> Any:
        return self.validate(value).match(ok=lambda v: v, err=lambda e: list(e.details))
