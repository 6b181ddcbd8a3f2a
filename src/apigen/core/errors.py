"""Error types raised while loading schemas and generating code.

All collectable errors carry enough location information to point at
the offending schema text and can be turned into a ``Diagnostic`` with
``to_diagnostic()``.  The pipeline catches them per resource or per
entry so that one run reports every problem it finds.
"""
from __future__ import annotations

from apigen.core.diagnostics import Diagnostic, DiagnosticSeverity


def format_location(source: str | None, line: int, col: int) -> str:
    """Render a location as ``"<source>:[<line>, <col>]"``."""
    return f"{source or '<unknown>'}:[{line}, {col}]"


class ApigenError(Exception):
    """Base class for every error raised by apigen."""

    code: str = "APG000"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def location(self) -> str:
        return "<unknown>"

    def to_diagnostic(self) -> Diagnostic:
        """Convert this error into an ERROR-severity ``Diagnostic``."""
        return Diagnostic(
            severity=DiagnosticSeverity.ERROR,
            code=self.code,
            message=self.message,
            location=self.location,
            rule=type(self).__name__,
        )


class SchemaSyntaxError(ApigenError):
    """Raised when schema text cannot be tokenized or parsed.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    source:
        Locator of the schema resource, if known.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    """

    code = "APG001"

    def __init__(self, message: str, source: str | None, line: int, col: int) -> None:
        super().__init__(message)
        self.source = source
        self.line = line
        self.col = col
        self.args = (f"{type(self).__name__} at {self.location}: {message}",)

    @property
    def location(self) -> str:
        return format_location(self.source, self.line, self.col)


class DirectiveValueError(ApigenError):
    """Raised when a directive argument literal has the wrong shape.

    Parameters
    ----------
    directive:
        Name of the directive carrying the argument.
    argument:
        Name of the offending argument.
    location:
        Rendered source location of the type definition.
    detail:
        What was wrong with the literal.
    """

    code = "APG002"

    def __init__(self, directive: str, argument: str, location: str, detail: str) -> None:
        super().__init__(
            f"Invalid value for argument {argument!r} of directive @{directive}: {detail}"
        )
        self.directive = directive
        self.argument = argument
        self._location = location

    @property
    def location(self) -> str:
        return self._location


class DuplicateTypeNameError(ApigenError):
    """Raised when a type name is inserted into the registry twice.

    The first insertion wins; this error describes the rejected one.
    """

    code = "APG003"

    def __init__(self, name: str, first_location: str, second_location: str) -> None:
        super().__init__(
            f"Type {name!r} is already defined at {first_location}; "
            f"ignoring the definition at {second_location}"
        )
        self.name = name
        self.first_location = first_location
        self.second_location = second_location

    @property
    def location(self) -> str:
        return self.second_location


class UnresolvedTypeReferenceError(ApigenError):
    """Raised when a generated type refers to a name the registry lacks."""

    code = "APG004"

    def __init__(self, entry_name: str, missing_name: str, location: str) -> None:
        super().__init__(
            f"Type {entry_name!r} references unknown type {missing_name!r}"
        )
        self.entry_name = entry_name
        self.missing_name = missing_name
        self._location = location

    @property
    def location(self) -> str:
        return self._location


class RegistryStateError(ApigenError):
    """Raised when the registry is used in the wrong lifecycle phase."""


class RegistryFrozenError(RegistryStateError):
    """Raised on any insertion into a frozen registry."""


class ConfigError(ApigenError):
    """Raised when a configuration file cannot be loaded."""


class ModuleClashError(ApigenError):
    """Raised when two artifacts would be written to the same module.

    Module names are derived from type names, so distinct names such as
    ``UserID`` and ``UserId`` can map to one file.  The first artifact
    keeps the module; this error describes the rejected one.
    """

    code = "APG007"

    def __init__(
        self,
        module: str,
        kept: str,
        kept_location: str,
        rejected: str,
        rejected_location: str,
    ) -> None:
        super().__init__(
            f"{rejected!r} maps to module {module!r}, already generated for "
            f"{kept!r} from {kept_location}"
        )
        self.module = module
        self.kept = kept
        self.rejected = rejected
        self._location = rejected_location

    @property
    def location(self) -> str:
        return self._location
