"""Type entries: one parsed type definition plus derived generation metadata."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from apigen.ast.nodes import TYPE_KINDS, Definition, DefinitionKind, definition_directives
from apigen.core.directives import resolve_namespace
from apigen.core.errors import format_location

IDENTITY_FIELD = "id"


class Origin(Enum):
    """Where a type entry came from.

    REFERENCE
        Owned by an already-built dependency; used to resolve field
        types but never generated here.
    GENERATION
        Owned by the current build and emitted by the generator.
    """

    REFERENCE = auto()
    GENERATION = auto()


def definition_name(definition: Definition) -> str:
    """Return the declared name of a type definition, else ``""``."""
    if definition.kind in TYPE_KINDS:
        return definition.name  # type: ignore[union-attr]
    return ""


def has_identity_field(definition: Definition) -> bool:
    """Return True if ``definition`` is an object type with a field named ``id``.

    The match is exact and case-sensitive; interfaces, inputs and every
    other kind never count.
    """
    if definition.kind is not DefinitionKind.OBJECT:
        return False
    return any(field.name == IDENTITY_FIELD for field in definition.fields)  # type: ignore[union-attr]


@dataclass(frozen=True)
class TypeEntry:
    """An immutable registry record for one named type definition.

    Parameters
    ----------
    definition:
        The parsed definition node.
    source:
        Locator of the schema resource the definition came from.
    namespace:
        Resolved namespace of the generated module.
    origin:
        Whether the entry is generated here or only referenced.
    name:
        The type name; empty for non-type definitions.
    has_identity_field:
        Whether generated code must expose a batch lookup contract.
    """

    definition: Definition
    source: str
    namespace: str
    origin: Origin
    name: str
    has_identity_field: bool

    @classmethod
    def build(
        cls,
        definition: Definition,
        source: str,
        default_namespace: str,
        origin: Origin,
    ) -> "TypeEntry":
        """Construct an entry, resolving its namespace from directives.

        Raises
        ------
        DirectiveValueError
            If a namespace override carries a malformed literal.
        """
        location = format_location(source, definition.span.line, definition.span.col)
        namespace = resolve_namespace(
            definition_directives(definition), default_namespace, location
        )
        return cls(
            definition=definition,
            source=source,
            namespace=namespace,
            origin=origin,
            name=definition_name(definition),
            has_identity_field=has_identity_field(definition),
        )

    @property
    def kind(self) -> DefinitionKind:
        return self.definition.kind

    @property
    def source_location(self) -> str:
        """Return ``"<source>:[<line>, <col>]"`` for diagnostics."""
        span = self.definition.span
        return format_location(self.source, span.line, span.col)

    @property
    def is_generated(self) -> bool:
        return self.origin is Origin.GENERATION
