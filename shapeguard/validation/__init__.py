"""Declarative Structural Validation

Validates an arbitrary value against a schema describing object fields,
primitive kinds, array elements, range/length constraints, optionality
and ordered alternation. Produces either a sanitized copy of the value or
the complete list of violations, each tagged with its path.

Usage:
    from shapeguard.validation import validate_or_raise, ValidationError

    schema = {
        "address": {
            "street": {"$type": "string", "$minLen": 5},
            "number": {"$type": "int"},
            "info": {"$type": "string", "$optional": True},
        }
    }
    try:
        address = validate_or_raise(schema, payload)
    except ValidationError as e:
        for detail in e.details:
            print(detail.path, detail.failure)
"""
from .schema import (
    Kind,
    Directive,
    DIRECTIVE_PREFIX,
    is_directive,
    StringNode,
    IntNode,
    FloatNode,
    BoolNode,
    ArrayNode,
    EitherNode,
    ObjectNode,
    LeafNode,
    SchemaNode,
    SchemaCompiler,
    compile_schema,
)

from .errors import (
    Failure,
    ValidationErrorDetail,
    ValidationError,
    SchemaError,
    ValidationState,
)

from .validators import (
    LeafResult,
    validate_string,
    validate_int,
    validate_float,
    validate_bool,
)

from .engine import (
    MISSING,
    ABSENT,
    ValidationOptions,
    validate_node,
    run_validation,
    SchemaValidator,
)

from .boundaries import (
    validate_or_raise,
    validate_or_none,
    validate_or_errors,
    is_validation_error_list,
)

__all__ = [
    # Schema
    "Kind",
    "Directive",
    "DIRECTIVE_PREFIX",
    "is_directive",
    "StringNode",
    "IntNode",
    "FloatNode",
    "BoolNode",
    "ArrayNode",
    "EitherNode",
    "ObjectNode",
    "LeafNode",
    "SchemaNode",
    "SchemaCompiler",
    "compile_schema",
    # Errors
    "Failure",
    "ValidationErrorDetail",
    "ValidationError",
    "SchemaError",
    "ValidationState",
    # Leaf validators
    "LeafResult",
    "validate_string",
    "validate_int",
    "validate_float",
    "validate_bool",
    # Engine
    "MISSING",
    "ABSENT",
    "ValidationOptions",
    "validate_node",
    "run_validation",
    "SchemaValidator",
    # Boundaries
    "validate_or_raise",
    "validate_or_none",
    "validate_or_errors",
    "is_validation_error_list",
]
