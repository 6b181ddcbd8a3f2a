"""Artifacts, run results and the abstract base class for rendering targets.

Each rendering target (currently only Python) implements
``CodegenTarget`` and turns one registry entry, together with its
already-resolved dependencies, into module source text.  Orchestration
(reference resolution, diagnostics, sinks) lives in
``apigen.compiler.generator`` so that targets stay pure.
"""
from __future__ import annotations

import keyword
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

from apigen.core.diagnostics import Diagnostic
from apigen.core.type_entry import Origin, TypeEntry


class Contract(Enum):
    """Resolver contracts a generated module may declare.

    BATCH_LOOKUP
        ``Resolver``: resolve a list of identity references at once.
        Declared for object types with an ``id`` field.
    FIELD_RESOLUTION
        ``FieldResolver``: compute one field value from a resolution
        context.  Declared for object types with fields that take
        arguments.
    """

    BATCH_LOOKUP = auto()
    FIELD_RESOLUTION = auto()


def to_snake(name: str) -> str:
    """Convert CamelCase/PascalCase to snake_case."""
    result = re.sub(r"(?<=[A-Z])([A-Z][a-z])", r"_\1", name)
    result = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", result)
    return result.lower()


def python_identifier(name: str) -> str:
    """Return ``name`` with a trailing underscore if it is a Python keyword."""
    return f"{name}_" if keyword.iskeyword(name) else name


def module_name_for(type_name: str) -> str:
    """Return the module name generated for ``type_name``."""
    return python_identifier(to_snake(type_name))


@dataclass(frozen=True)
class Dependency:
    """An import edge from one generated module to another type's module."""

    type_name: str
    namespace: str
    origin: Origin

    @property
    def module_name(self) -> str:
        return module_name_for(self.type_name)

    @property
    def import_path(self) -> str:
        return f"{self.namespace}.{self.module_name}"

    @classmethod
    def to_entry(cls, entry: TypeEntry) -> "Dependency":
        return cls(type_name=entry.name, namespace=entry.namespace, origin=entry.origin)


@dataclass(frozen=True)
class Artifact:
    """One generated module.

    Parameters
    ----------
    namespace:
        Dotted package the module belongs to.
    type_name:
        The schema type the module was generated for.
    text:
        Generated Python source.
    dependencies:
        Import edges to other types' modules, in first-use order.
    contracts:
        Resolver contracts declared by the module.
    computed_fields:
        Fields that take arguments and therefore get a field resolver.
    """

    namespace: str
    type_name: str
    text: str
    dependencies: tuple[Dependency, ...] = ()
    contracts: frozenset[Contract] = frozenset()
    computed_fields: tuple[str, ...] = ()

    @property
    def module_name(self) -> str:
        return module_name_for(self.type_name)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.module_name}"

    @property
    def relative_path(self) -> str:
        """Path of the module relative to the output root."""
        return "/".join([*self.namespace.split("."), f"{self.module_name}.py"])

    def depends_on(self, type_name: str) -> bool:
        return any(dep.type_name == type_name for dep in self.dependencies)


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Parameters
    ----------
    artifacts:
        Every module that was generated successfully.
    diagnostics:
        Every problem found while loading schemas and generating.
    """

    artifacts: list[Artifact] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Return True if no ERROR-severity diagnostic was recorded."""
        return not any(d.is_error for d in self.diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    def artifact_for(self, type_name: str) -> Artifact | None:
        """Return the artifact generated for ``type_name``, if any."""
        for artifact in self.artifacts:
            if artifact.type_name == type_name:
                return artifact
        return None

    def summary(self) -> str:
        """Return a one-line human-readable summary of this result."""
        status = "succeeded" if self.success else "failed"
        return (
            f"Generation {status}: {len(self.artifacts)} module(s), "
            f"{len(self.errors)} error(s), "
            f"{len(self.diagnostics) - len(self.errors)} other diagnostic(s)"
        )


class CodegenTarget(ABC):
    """Abstract base class for entry-to-source rendering targets.

    The contract for :meth:`render` is:

    * **Idempotent**: identical inputs always produce identical outputs.
    * **Pure**: no file I/O and no registry lookups.

    Parameters
    ----------
    indent_spaces:
        Number of spaces to use for indentation in generated code.
        Defaults to 4 (PEP 8).
    """

    def __init__(self, indent_spaces: int = 4) -> None:
        self._indent_spaces = indent_spaces

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique short name for this target, e.g. ``"python"``."""

    @abstractmethod
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
            The generation entry to render.
        dependencies:
            Resolved import edges, excluding the entry itself.
        contracts:
            Resolver contracts the module must declare.
        """

    @abstractmethod
    def render_bindings(self, module: str, artifacts: list[Artifact]) -> str:
        """Render the module that lists every declared resolver contract."""

    def _indent(self, text: str, level: int = 1) -> str:
        """Indent *text* by ``level`` indentation units.

        Blank lines are left empty (no trailing whitespace).
        """
        prefix = " " * (self._indent_spaces * level)
        lines = text.splitlines()
        indented_lines = [
            prefix + line if line.strip() else ""
            for line in lines
        ]
        return "\n".join(indented_lines)
