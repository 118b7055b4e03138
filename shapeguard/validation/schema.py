"""Schema Node System

A schema is a tree of immutable typed nodes. Object nodes hold their child
fields; leaf nodes hold the constraints for one kind; alternation nodes
hold an ordered list of leaf candidates. Constraints and child fields live
in separate attributes, so nothing is ambiguous about which keys are
traversable.

Schemas are usually authored as plain mappings where `$`-prefixed keys are
directives and every other key is a child field:

    {
        "name": {"$type": "string", "$minLen": 1},
        "tags": {"$type": "array", "$of": {"$type": "string"}, "$optional": True},
        "size": {"$either": [{"$type": "int", "$min": 0}, {"$type": "string", "$in": ["auto"]}]},
    }

`compile_schema()` turns such a document into nodes, rejecting anything
malformed with SchemaError before a single value is looked at.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from shapeguard.logging import get_logger
from .errors import SchemaError

log = get_logger(__name__)

DIRECTIVE_PREFIX = "$"


class Kind(str, Enum):
    """Leaf kinds recognized by `$type`."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ARRAY = "array"


class Directive(str, Enum):
    """Directive keys recognized in schema documents."""
    TYPE = "$type"
    EITHER = "$either"
    OPTIONAL = "$optional"
    IN = "$in"
    MIN_LEN = "$minLen"
    MAX_LEN = "$maxLen"
    MIN = "$min"
    MAX = "$max"
    MIN_EXCLUSIVE = "$minExclusive"
    MAX_EXCLUSIVE = "$maxExclusive"
    ACCEPT_NAN = "$acceptNaN"
    ACCEPT_INFINITY = "$acceptInfinity"
    OF = "$of"


def is_directive(key: Any) -> bool:
    return isinstance(key, str) and key.startswith(DIRECTIVE_PREFIX)


# ============================================================================
# Schema Nodes
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringNode:
    optional: bool = False
    one_of: tuple[str, ...] | None = None
    min_len: int | None = None
    max_len: int | None = None


@dataclass(frozen=True, slots=True)
class IntNode:
    optional: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    exclusive_maximum: int | float | None = None


@dataclass(frozen=True, slots=True)
class FloatNode:
    optional: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    exclusive_maximum: int | float | None = None
    accept_nan: bool = False
    accept_infinity: bool = False


@dataclass(frozen=True, slots=True)
class BoolNode:
    optional: bool = False


@dataclass(frozen=True, slots=True)
class ArrayNode:
    """Array of elements all matching `of`, which may be any node."""
    of: SchemaNode
    optional: bool = False
    min_len: int | None = None
    max_len: int | None = None


@dataclass(frozen=True, slots=True)
class EitherNode:
    """Ordered alternation: the first passing alternative wins."""
    alternatives: tuple[LeafNode, ...]
    optional: bool = False

    def __post_init__(self):
        if not self.alternatives:
            raise SchemaError("alternation must list at least one alternative")
        for alternative in self.alternatives:
            if not isinstance(alternative, LEAF_NODE_TYPES):
                raise SchemaError(f"alternative must be a typed leaf, got {type(alternative).__name__}")


@dataclass(frozen=True, slots=True)
class ObjectNode:
    """Mapping with a fixed set of declared fields, checked in declaration order."""
    fields: dict[str, SchemaNode] = field(default_factory=dict)
    optional: bool = False


LeafNode = Union[StringNode, IntNode, FloatNode, BoolNode, ArrayNode]
SchemaNode = Union[ObjectNode, EitherNode, StringNode, IntNode, FloatNode, BoolNode, ArrayNode]

LEAF_NODE_TYPES = (StringNode, IntNode, FloatNode, BoolNode, ArrayNode)
SCHEMA_NODE_TYPES = (ObjectNode, EitherNode, *LEAF_NODE_TYPES)


# ============================================================================
# Document Compiler
# ============================================================================

def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class SchemaCompiler:
    """Compiles a `$`-directive schema document into schema nodes.

    Rejects cycles and documents nested deeper than `max_depth`.
    """

    __slots__ = ("max_depth", "_active")

    def __init__(self, max_depth: int = 64):
        self.max_depth, self._active = max_depth, set()

    def compile(self, document: Any) -> SchemaNode:
        if isinstance(document, SCHEMA_NODE_TYPES):
            return document
        node = self._compile(document, "", 0)
        log.debug("schema.compiled", kind=type(node).__name__)
        return node

    def _compile(self, document: Any, path: str, depth: int) -> SchemaNode:
        if isinstance(document, SCHEMA_NODE_TYPES):
            return document
        if not isinstance(document, Mapping):
            raise SchemaError(f"schema node must be a mapping, got {type(document).__name__}", schema_path=path)
        if depth > self.max_depth:
            raise SchemaError(f"schema nested deeper than {self.max_depth} levels", schema_path=path)
        if id(document) in self._active:
            raise SchemaError("schema is self-referential", schema_path=path)

        self._active.add(id(document))
        try:
            return self._compile_mapping(document, path, depth)
        finally:
            self._active.discard(id(document))

    def _compile_mapping(self, document: Mapping, path: str, depth: int) -> SchemaNode:
        field_names = [key for key in document if not is_directive(key)]
        for key in document:
            if is_directive(key) and key not in _KNOWN_DIRECTIVES:
                log.debug("schema.unknown_directive", directive=key, schema_path=path)

        has_type, has_either = Directive.TYPE.value in document, Directive.EITHER.value in document
        if (has_type or has_either) and field_names:
            raise SchemaError("leaf node cannot declare child fields", schema_path=path)
        if has_type and has_either:
            raise SchemaError("node cannot declare both $type and $either", schema_path=path)

        optional = _flag(document, Directive.OPTIONAL, path)

        if has_either:
            alternatives = document[Directive.EITHER.value]
            if isinstance(alternatives, (str, bytes)) or not isinstance(alternatives, Sequence):
                raise SchemaError("$either must be a list", schema_path=path)
            if not alternatives:
                raise SchemaError("alternation must list at least one alternative", schema_path=path)
            compiled = []
            for index, alternative in enumerate(alternatives):
                alt_path = f"{path}[{index}]"
                if not isinstance(alternative, LEAF_NODE_TYPES) and (
                        not isinstance(alternative, Mapping) or Directive.TYPE.value not in alternative):
                    raise SchemaError("alternative must be a typed leaf", schema_path=alt_path)
                compiled.append(self._compile(alternative, alt_path, depth + 1))
            return EitherNode(alternatives=tuple(compiled), optional=optional)

        if has_type:
            return self._compile_leaf(document, path, depth, optional)

        fields = {}
        for key in field_names:
            if not isinstance(key, str):
                raise SchemaError(f"field name must be a string, got {type(key).__name__}", schema_path=path)
            fields[key] = self._compile(document[key], _child_path(path, key), depth + 1)
        return ObjectNode(fields=fields, optional=optional)

    def _compile_leaf(self, document: Mapping, path: str, depth: int, optional: bool) -> LeafNode:
        raw_kind = document[Directive.TYPE.value]
        try:
            kind = Kind(raw_kind)
        except ValueError:
            raise SchemaError(f"unknown leaf kind {raw_kind!r}", schema_path=path) from None

        match kind:
            case Kind.STRING:
                return StringNode(optional=optional, one_of=_string_set(document, path),
                    min_len=_length(document, Directive.MIN_LEN, path), max_len=_length(document, Directive.MAX_LEN, path))
            case Kind.INT:
                return IntNode(optional=optional, **_bounds(document, path))
            case Kind.FLOAT:
                return FloatNode(optional=optional, **_bounds(document, path),
                    accept_nan=_flag(document, Directive.ACCEPT_NAN, path),
                    accept_infinity=_flag(document, Directive.ACCEPT_INFINITY, path))
            case Kind.BOOL:
                return BoolNode(optional=optional)
            case Kind.ARRAY:
                if Directive.OF.value not in document:
                    raise SchemaError("array node must declare $of", schema_path=path)
                of = self._compile(document[Directive.OF.value], f"{path}[]", depth + 1)
                return ArrayNode(of=of, optional=optional,
                    min_len=_length(document, Directive.MIN_LEN, path), max_len=_length(document, Directive.MAX_LEN, path))


_KNOWN_DIRECTIVES = frozenset(d.value for d in Directive)


def _flag(document: Mapping, directive: Directive, path: str) -> bool:
    value = document.get(directive.value, False)
    if type(value) is not bool:
        raise SchemaError(f"{directive.value} must be a boolean", schema_path=path)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _length(document: Mapping, directive: Directive, path: str) -> int | None:
    value = document.get(directive.value)
    if value is None: return None
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SchemaError(f"{directive.value} must be a non-negative integer", schema_path=path)
    return value


def _bounds(document: Mapping, path: str) -> dict[str, int | float | None]:
    bounds = {}
    for name, directive in (("minimum", Directive.MIN), ("maximum", Directive.MAX),
                            ("exclusive_minimum", Directive.MIN_EXCLUSIVE), ("exclusive_maximum", Directive.MAX_EXCLUSIVE)):
        value = document.get(directive.value)
        if value is not None and not _is_number(value):
            raise SchemaError(f"{directive.value} must be a number", schema_path=path)
        bounds[name] = value
    return bounds


def _string_set(document: Mapping, path: str) -> tuple[str, ...] | None:
    values = document.get(Directive.IN.value)
    if values is None: return None
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence) or not all(type(v) is str for v in values):
        raise SchemaError("$in must be a list of strings", schema_path=path)
    return tuple(values)


def compile_schema(document: Any, *, max_depth: int | None = None) -> SchemaNode:
    """Compile a schema document (or pass through an already-built node)."""
    if max_depth is None:
        from shapeguard.config import get_settings
        max_depth = get_settings().MAX_SCHEMA_DEPTH
    return SchemaCompiler(max_depth=max_depth).compile(document)
