"""SDL AST module.

Exports all definition node types, value and type-reference nodes, and
the ``DefinitionKind`` tag used to dispatch over definition variants.
"""
from __future__ import annotations

from apigen.ast.nodes import (
    TYPE_KINDS,
    Argument,
    BooleanValue,
    Definition,
    DefinitionKind,
    Directive,
    DirectiveDefinition,
    EnumTypeDefinition,
    EnumValue,
    EnumValueDefinition,
    FieldDefinition,
    FloatValue,
    InputObjectTypeDefinition,
    InputValueDefinition,
    InterfaceTypeDefinition,
    IntValue,
    ListType,
    ListValue,
    NamedType,
    NonNullType,
    NullValue,
    ObjectField,
    ObjectTypeDefinition,
    ObjectValue,
    OperationTypeDefinition,
    ScalarTypeDefinition,
    SchemaDefinition,
    Span,
    StringValue,
    TypeDefinition,
    TypeRef,
    UnionTypeDefinition,
    Value,
    definition_directives,
    named_type,
)

__all__ = [
    # Location
    "Span",
    # Kinds
    "DefinitionKind",
    "TYPE_KINDS",
    # Definitions
    "Definition",
    "TypeDefinition",
    "ObjectTypeDefinition",
    "InterfaceTypeDefinition",
    "UnionTypeDefinition",
    "ScalarTypeDefinition",
    "EnumTypeDefinition",
    "InputObjectTypeDefinition",
    "DirectiveDefinition",
    "SchemaDefinition",
    "OperationTypeDefinition",
    # Members
    "FieldDefinition",
    "InputValueDefinition",
    "EnumValueDefinition",
    # Directives
    "Directive",
    "Argument",
    # Type references
    "TypeRef",
    "NamedType",
    "ListType",
    "NonNullType",
    "named_type",
    # Values
    "Value",
    "StringValue",
    "IntValue",
    "FloatValue",
    "BooleanValue",
    "NullValue",
    "EnumValue",
    "ListValue",
    "ObjectValue",
    "ObjectField",
    # Helpers
    "definition_directives",
]
