"""Schema type → Python module rendering target.

Generation strategy
--------------------
Every generation entry becomes one module named after the type in
snake_case, inside the entry's namespace:

* ``type`` / ``input`` → ``@dataclass(kw_only=True)``; non-null fields
  are required, nullable fields default to ``None``.  Fields that take
  arguments are computed, not stored.
* ``interface`` → ``typing.Protocol``
* ``union`` → ``TypeAlias`` over ``Union[...]``
* ``enum`` → ``enum.Enum`` with string values
* ``scalar`` → ``NewType(name, object)``

Schema names that are Python keywords get a trailing underscore
(``class`` → ``class_``) wherever they appear in generated code.

Types from other modules are imported under ``TYPE_CHECKING`` and all
annotations are postponed, so self references and cycles between
generated modules never execute an import at runtime.

Resolver contracts are declared as abstract subclasses of the
``apigen.runtime`` base classes:

* ``<Type>Resolver(_runtime.Resolver[<Type>])`` for ``Contract.BATCH_LOOKUP``
* ``<Type><Field>Resolver(_runtime.FieldResolver["<annotation>"])`` per
  computed field for ``Contract.FIELD_RESOLUTION``
"""
from __future__ import annotations

from apigen.ast.nodes import (
    BooleanValue,
    DefinitionKind,
    EnumValue,
    FieldDefinition,
    FloatValue,
    InputValueDefinition,
    IntValue,
    ListType,
    ListValue,
    NamedType,
    NonNullType,
    NullValue,
    ObjectValue,
    StringValue,
    TypeRef,
    Value,
)
from apigen.compiler.base import (
    Artifact,
    CodegenTarget,
    Contract,
    Dependency,
    python_identifier,
)
from apigen.core.type_entry import TypeEntry

BUILTIN_SCALARS: dict[str, str] = {
    "ID": "str",
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
}

HEADER = "# Generated by apigen from {location}. Do not edit."

# Modules are imported under these aliases so that schema names never
# shadow them; a schema name equal to one of them cannot be rendered.
DATACLASSES_ALIAS = "_dataclasses"
RUNTIME_ALIAS = "_runtime"
RESERVED_NAMES = frozenset({DATACLASSES_ALIAS, RUNTIME_ALIAS})

DATACLASSES_IMPORT = f"import dataclasses as {DATACLASSES_ALIAS}"
RUNTIME_IMPORT = f"from apigen import runtime as {RUNTIME_ALIAS}"


def computed_fields(entry: TypeEntry) -> tuple[FieldDefinition, ...]:
    """Return the object fields of ``entry`` that take arguments."""
    if entry.kind is not DefinitionKind.OBJECT:
        return ()
    return tuple(f for f in entry.definition.fields if f.arguments)  # type: ignore[union-attr]


def field_resolver_name(type_name: str, field_name: str) -> str:
    """Return the contract class name for a computed field."""
    return f"{type_name}{field_name[:1].upper()}{field_name[1:]}Resolver"


def batch_resolver_name(type_name: str) -> str:
    return f"{type_name}Resolver"


class PythonTarget(CodegenTarget):
    """Renders generation entries as standalone Python modules."""

    @property
    def name(self) -> str:
        return "python"

    def render(
        self,
        entry: TypeEntry,
        dependencies: tuple[Dependency, ...],
        contracts: frozenset[Contract],
    ) -> str:
        """Render the module for ``entry``.

        Parameters
        ----------
        entry:
            The generation entry.
        dependencies:
            Import edges to other types' modules.
        contracts:
            Resolver contracts to declare.

        Returns
        -------
        str
            Python source ending with a newline.
        """
        _check_reserved(entry)
        kind = entry.kind
        if kind is DefinitionKind.OBJECT:
            imports, body = self._render_object(entry, contracts)
        elif kind is DefinitionKind.INPUT_OBJECT:
            imports, body = self._render_input(entry)
        elif kind is DefinitionKind.INTERFACE:
            imports, body = self._render_interface(entry)
        elif kind is DefinitionKind.UNION:
            imports, body = self._render_union(entry)
        elif kind is DefinitionKind.ENUM:
            imports, body = self._render_enum(entry)
        elif kind is DefinitionKind.SCALAR:
            imports, body = self._render_scalar(entry)
        else:
            raise ValueError(f"Cannot render {kind.name.lower()} definition {entry.name!r}")

        sections = [
            HEADER.format(location=entry.source_location),
            _docstring(f"Generated module for {entry.kind.name.lower().replace('_', ' ')} ``{entry.name}``."),
            "from __future__ import annotations",
        ]
        sections.append(_render_imports(imports, dependencies))
        sections.append(f"\n{body}")
        return "\n\n".join(s for s in sections if s) + "\n"

    def render_bindings(self, module: str, artifacts: list[Artifact]) -> str:
        """Render the module listing every declared resolver contract.

        ``RESOLVERS`` maps type names to batch lookup contracts and
        ``FIELD_RESOLVERS`` maps ``Type.field`` to field contracts, both
        as dotted class paths for an injection container to bind.
        """
        resolvers: list[str] = []
        field_resolvers: list[str] = []
        for artifact in sorted(artifacts, key=lambda a: a.type_name):
            if Contract.BATCH_LOOKUP in artifact.contracts:
                path = f"{artifact.qualified_name}.{batch_resolver_name(artifact.type_name)}"
                resolvers.append(f"{artifact.type_name!r}: {path!r},")
            if Contract.FIELD_RESOLUTION in artifact.contracts:
                for field_name in artifact.computed_fields:
                    path = (
                        f"{artifact.qualified_name}."
                        f"{field_resolver_name(artifact.type_name, field_name)}"
                    )
                    field_resolvers.append(f"{artifact.type_name + '.' + field_name!r}: {path!r},")
        lines = [
            "# Generated by apigen. Do not edit.",
            "",
            _docstring(f"Resolver contracts to bind in ``{module}``."),
            "",
            "from __future__ import annotations",
            "",
            "RESOLVERS: dict[str, str] = {",
            *(self._indent(line) for line in resolvers),
            "}",
            "",
            "FIELD_RESOLVERS: dict[str, str] = {",
            *(self._indent(line) for line in field_resolvers),
            "}",
        ]
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------
    # Per-kind renderers; each returns (typing imports, body)
    # ------------------------------------------------------------------

    def _render_object(
        self, entry: TypeEntry, contracts: frozenset[Contract]
    ) -> tuple[list[str], str]:
        definition = entry.definition
        computed = computed_fields(entry)
        stored = [f for f in definition.fields if not f.arguments]  # type: ignore[union-attr]
        imports = [DATACLASSES_IMPORT]
        blocks = [self._dataclass(entry.name, definition.description, stored)]

        if contracts:
            imports.append(RUNTIME_IMPORT)
        if Contract.BATCH_LOOKUP in contracts:
            blocks.append(
                f"class {batch_resolver_name(entry.name)}"
                f"({RUNTIME_ALIAS}.Resolver[{python_identifier(entry.name)}]):\n"
                + self._indent(
                    _docstring(
                        f"Resolve ``{entry.name}`` instances from a batch of identity references."
                    )
                )
            )
        if Contract.FIELD_RESOLUTION in contracts:
            for field_def in computed:
                blocks.append(self._field_resolver(entry.name, field_def))

        return imports, "\n\n\n".join(blocks)

    def _render_input(self, entry: TypeEntry) -> tuple[list[str], str]:
        definition = entry.definition
        fields = list(definition.fields)  # type: ignore[union-attr]
        return [DATACLASSES_IMPORT], self._dataclass(entry.name, definition.description, fields)

    def _render_interface(self, entry: TypeEntry) -> tuple[list[str], str]:
        definition = entry.definition
        lines = [_docstring(definition.description or f"Interface ``{entry.name}``.")]
        fields = [f for f in definition.fields if not f.arguments]  # type: ignore[union-attr]
        if fields:
            lines.append("")
        for field_def in fields:
            lines.append(f"{python_identifier(field_def.name)}: {annotation(field_def.type)}")
        return (
            ["from typing import Protocol"],
            f"class {python_identifier(entry.name)}(Protocol):\n" + self._indent("\n".join(lines)),
        )

    def _render_union(self, entry: TypeEntry) -> tuple[list[str], str]:
        members = [m.name for m in entry.definition.members]  # type: ignore[union-attr]
        if not members:
            return ["from typing import TypeAlias"], f"{python_identifier(entry.name)}: TypeAlias = object"
        quoted = ", ".join(repr(python_identifier(m)) for m in members)
        return (
            ["from typing import TypeAlias, Union"],
            f"{python_identifier(entry.name)}: TypeAlias = Union[{quoted}]",
        )

    def _render_enum(self, entry: TypeEntry) -> tuple[list[str], str]:
        definition = entry.definition
        lines = [_docstring(definition.description or f"Enum ``{entry.name}``.")]
        values = definition.values  # type: ignore[union-attr]
        if values:
            lines.append("")
        for value in values:
            lines.append(f"{python_identifier(value.name)} = {value.name!r}")
        return (
            ["from enum import Enum"],
            f"class {python_identifier(entry.name)}(Enum):\n" + self._indent("\n".join(lines)),
        )

    def _render_scalar(self, entry: TypeEntry) -> tuple[list[str], str]:
        name = python_identifier(entry.name)
        return ["from typing import NewType"], f"{name} = NewType({name!r}, object)"

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def _dataclass(
        self,
        name: str,
        description: str | None,
        fields: list[FieldDefinition] | list[InputValueDefinition],
    ) -> str:
        lines = [_docstring(description or f"Schema type ``{name}``.")]
        if fields:
            lines.append("")
        for field_def in fields:
            lines.append(self._dataclass_field(field_def))
        return (
            f"@{DATACLASSES_ALIAS}.dataclass(kw_only=True)\n"
            f"class {python_identifier(name)}:\n"
        ) + self._indent("\n".join(lines))

    def _dataclass_field(self, field_def: FieldDefinition | InputValueDefinition) -> str:
        attr = python_identifier(field_def.name)
        rendered_type = annotation(field_def.type)
        default = getattr(field_def, "default_value", None)
        if default is not None:
            literal = python_literal(default)
            if _is_mutable(default):
                factory = f"{DATACLASSES_ALIAS}.field(default_factory=lambda: {literal})"
                return f"{attr}: {rendered_type} = {factory}"
            return f"{attr}: {rendered_type} = {literal}"
        if isinstance(field_def.type, NonNullType):
            return f"{attr}: {rendered_type}"
        return f"{attr}: {rendered_type} = None"

    def _field_resolver(self, type_name: str, field_def: FieldDefinition) -> str:
        arguments = ", ".join(
            f"{arg.name}: {_sdl_type(arg.type)}" for arg in field_def.arguments
        )
        argument_names = ", ".join(repr(arg.name) for arg in field_def.arguments)
        body = "\n".join([
            _docstring(
                field_def.description
                or f"Compute ``{type_name}.{field_def.name}({arguments})``."
            ),
            "",
            f"ARGUMENTS: tuple[str, ...] = ({argument_names},)",
        ])
        return (
            f"class {field_resolver_name(type_name, field_def.name)}"
            f"({RUNTIME_ALIAS}.FieldResolver[{annotation(field_def.type)!r}]):\n"
            + self._indent(body)
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def annotation(type_ref: TypeRef) -> str:
    """Return the Python annotation for a schema type reference."""
    if isinstance(type_ref, NonNullType):
        return _annotation_of(type_ref.of_type)
    return f"{_annotation_of(type_ref)} | None"


def _annotation_of(type_ref: TypeRef) -> str:
    if isinstance(type_ref, NonNullType):
        return _annotation_of(type_ref.of_type)
    if isinstance(type_ref, ListType):
        return f"list[{annotation(type_ref.of_type)}]"
    return BUILTIN_SCALARS.get(type_ref.name) or python_identifier(type_ref.name)


def _sdl_type(type_ref: TypeRef) -> str:
    """Render a type reference back in schema notation."""
    if isinstance(type_ref, NonNullType):
        return f"{_sdl_type(type_ref.of_type)}!"
    if isinstance(type_ref, ListType):
        return f"[{_sdl_type(type_ref.of_type)}]"
    return type_ref.name


def python_literal(value: Value) -> str:
    """Return Python source for a constant schema value."""
    if isinstance(value, StringValue):
        return repr(value.value)
    if isinstance(value, (IntValue, FloatValue)):
        return value.value
    if isinstance(value, BooleanValue):
        return "True" if value.value else "False"
    if isinstance(value, NullValue):
        return "None"
    if isinstance(value, EnumValue):
        # enum members are generated with their own name as value
        return repr(value.value)
    if isinstance(value, ListValue):
        return "[" + ", ".join(python_literal(v) for v in value.values) + "]"
    if isinstance(value, ObjectValue):
        items = ", ".join(f"{f.name!r}: {python_literal(f.value)}" for f in value.fields)
        return "{" + items + "}"
    raise TypeError(f"Unsupported value node {value!r}")


def _check_reserved(entry: TypeEntry) -> None:
    """Raise ValueError if ``entry`` would rebind a module alias."""
    names = [entry.name]
    if entry.kind in (DefinitionKind.OBJECT, DefinitionKind.INPUT_OBJECT):
        names.extend(f.name for f in entry.definition.fields)  # type: ignore[union-attr]
    clashes = sorted(RESERVED_NAMES.intersection(names))
    if clashes:
        raise ValueError(
            f"{', '.join(map(repr, clashes))} cannot be used as a name in {entry.name!r}: "
            "reserved for imports in generated modules"
        )


def _is_mutable(value: Value | None) -> bool:
    return isinstance(value, (ListValue, ObjectValue))


def _docstring(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if "\n" in escaped:
        return f'"""{escaped}\n"""'
    return f'"""{escaped}"""'


def _render_imports(imports: list[str], dependencies: tuple[Dependency, ...]) -> str:
    """Return the import block: stdlib, then apigen runtime, then edges."""
    stdlib = [line for line in imports if not line.startswith("from apigen")]
    runtime = [line for line in imports if line.startswith("from apigen")]
    if dependencies:
        if any(line.startswith("from typing import") for line in stdlib):
            stdlib = [
                _add_name(line, "TYPE_CHECKING") if line.startswith("from typing import") else line
                for line in stdlib
            ]
        else:
            stdlib.append("from typing import TYPE_CHECKING")
    blocks = ["\n".join(sorted(stdlib))]
    if runtime:
        blocks.append("\n".join(runtime))
    if dependencies:
        edges = [
            f"    from {dep.import_path} import {python_identifier(dep.type_name)}"
            for dep in dependencies
        ]
        blocks.append("\n".join(["if TYPE_CHECKING:", *edges]))
    return "\n\n".join(blocks)


def _add_name(import_line: str, name: str) -> str:
    prefix = "from typing import "
    names = [n.strip() for n in import_line[len(prefix):].split(",")]
    return prefix + ", ".join(sorted({*names, name}))
