"""Diagnostic types for schema loading and code generation.

A ``Diagnostic`` is an annotated message attached to a source location.
Diagnostics are produced while parsing schema resources, while filling
the type registry, and while generating artifacts.  A run collects all
of them instead of stopping at the first problem.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced during a generation run.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"APG004"``.
    message:
        Human-readable description of the problem.
    location:
        Rendered source location, e.g. ``"schema/user.graphql:[3, 1]"``.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The error kind that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    location: str
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix} at {self.location}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail the run."""
        return self.severity == DiagnosticSeverity.ERROR
