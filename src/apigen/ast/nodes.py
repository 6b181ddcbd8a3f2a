"""AST node definitions for the GraphQL schema definition language.

Every node produced by the SDL parser is a frozen dataclass so that
definition trees are immutable and hashable.  Top-level definitions form
a closed tagged variant: each class carries a ``kind`` tag from
``DefinitionKind`` and only the fields relevant to that kind.
Downstream code dispatches on ``definition.kind``.

All nodes carry a ``Span`` that records their source location, enabling
precise diagnostics when the registry or the generator rejects them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` within the source text.

    Parameters
    ----------
    start:
        0-based offset of the first character.
    end:
        0-based offset *past* the last character.
    line:
        1-based line number of the first character.
    col:
        1-based column number of the first character.
    """

    start: int
    end: int
    line: int
    col: int

    def __repr__(self) -> str:
        return f"Span({self.line}:{self.col})"

    @classmethod
    def unknown(cls) -> "Span":
        """Return a sentinel span used when position info is unavailable."""
        return cls(start=0, end=0, line=0, col=0)


# ---------------------------------------------------------------------------
# Kind tags
# ---------------------------------------------------------------------------


class DefinitionKind(Enum):
    """Tag identifying which variant a top-level definition is."""

    OBJECT = auto()
    INTERFACE = auto()
    UNION = auto()
    SCALAR = auto()
    ENUM = auto()
    INPUT_OBJECT = auto()
    DIRECTIVE = auto()
    SCHEMA = auto()


TYPE_KINDS: frozenset[DefinitionKind] = frozenset({
    DefinitionKind.OBJECT,
    DefinitionKind.INTERFACE,
    DefinitionKind.UNION,
    DefinitionKind.SCALAR,
    DefinitionKind.ENUM,
    DefinitionKind.INPUT_OBJECT,
})


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StringValue:
    """A quoted or block string literal."""

    value: str
    span: Span
    block: bool = False


@dataclass(frozen=True, slots=True)
class IntValue:
    """An integer literal, kept as source text."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class FloatValue:
    """A float literal, kept as source text."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class BooleanValue:
    value: bool
    span: Span


@dataclass(frozen=True, slots=True)
class NullValue:
    span: Span


@dataclass(frozen=True, slots=True)
class EnumValue:
    """A bare enum symbol, e.g. ``ADMIN``."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class ListValue:
    values: tuple["Value", ...]
    span: Span


@dataclass(frozen=True, slots=True)
class ObjectField:
    name: str
    value: "Value"
    span: Span


@dataclass(frozen=True, slots=True)
class ObjectValue:
    fields: tuple[ObjectField, ...]
    span: Span


Value = Union[
    StringValue,
    IntValue,
    FloatValue,
    BooleanValue,
    NullValue,
    EnumValue,
    ListValue,
    ObjectValue,
]


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Argument:
    """A ``name: value`` pair inside a directive application."""

    name: str
    value: Value
    span: Span


@dataclass(frozen=True, slots=True)
class Directive:
    """A directive application, e.g. ``@java(package: "com.x")``."""

    name: str
    arguments: tuple[Argument, ...]
    span: Span


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NamedType:
    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class ListType:
    of_type: "TypeRef"
    span: Span


@dataclass(frozen=True, slots=True)
class NonNullType:
    of_type: "TypeRef"
    span: Span


TypeRef = Union[NamedType, ListType, NonNullType]


def named_type(ref: TypeRef) -> NamedType:
    """Return the innermost ``NamedType`` of a wrapped type reference."""
    while not isinstance(ref, NamedType):
        ref = ref.of_type
    return ref


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InputValueDefinition:
    """An argument or input-object field definition."""

    name: str
    type: TypeRef
    default_value: Value | None
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """A field of an object or interface type.

    A field that declares ``arguments`` is computed on demand rather
    than stored.
    """

    name: str
    arguments: tuple[InputValueDefinition, ...]
    type: TypeRef
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True, slots=True)
class EnumValueDefinition:
    name: str
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True, slots=True)
class OperationTypeDefinition:
    """An ``operation: Type`` entry inside a ``schema`` block."""

    operation: str
    type: NamedType
    span: Span


# ---------------------------------------------------------------------------
# Top-level definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectTypeDefinition:
    """A ``type Name implements A & B { ... }`` definition."""

    kind: ClassVar[DefinitionKind] = DefinitionKind.OBJECT

    name: str
    interfaces: tuple[NamedType, ...]
    fields: tuple[FieldDefinition, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class InterfaceTypeDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.INTERFACE

    name: str
    interfaces: tuple[NamedType, ...]
    fields: tuple[FieldDefinition, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class UnionTypeDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.UNION

    name: str
    members: tuple[NamedType, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class ScalarTypeDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.SCALAR

    name: str
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class EnumTypeDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.ENUM

    name: str
    values: tuple[EnumValueDefinition, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class InputObjectTypeDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.INPUT_OBJECT

    name: str
    fields: tuple[InputValueDefinition, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class DirectiveDefinition:
    """A ``directive @name(...) on LOCATION | ...`` declaration.

    Not a type: it never enters the type registry.
    """

    kind: ClassVar[DefinitionKind] = DefinitionKind.DIRECTIVE

    name: str
    arguments: tuple[InputValueDefinition, ...]
    repeatable: bool
    locations: tuple[str, ...]
    description: str | None
    span: Span


@dataclass(frozen=True)
class SchemaDefinition:
    kind: ClassVar[DefinitionKind] = DefinitionKind.SCHEMA

    operation_types: tuple[OperationTypeDefinition, ...]
    directives: tuple[Directive, ...]
    description: str | None
    span: Span


TypeDefinition = Union[
    ObjectTypeDefinition,
    InterfaceTypeDefinition,
    UnionTypeDefinition,
    ScalarTypeDefinition,
    EnumTypeDefinition,
    InputObjectTypeDefinition,
]

Definition = Union[
    ObjectTypeDefinition,
    InterfaceTypeDefinition,
    UnionTypeDefinition,
    ScalarTypeDefinition,
    EnumTypeDefinition,
    InputObjectTypeDefinition,
    DirectiveDefinition,
    SchemaDefinition,
]


def definition_directives(definition: Definition) -> tuple[Directive, ...]:
    """Return the directives applied to ``definition``.

    Directive declarations cannot carry applied directives, so they
    yield an empty tuple.
    """
    if definition.kind is DefinitionKind.DIRECTIVE:
        return ()
    return definition.directives  # type: ignore[union-attr]
