"""Core domain logic: directive resolution, type entries and the registry.

Submodules in core/ must not import from the parser, the compiler or
the CLI; they only consume already-parsed definition nodes.
"""
from __future__ import annotations

from apigen.core.diagnostics import Diagnostic, DiagnosticSeverity
from apigen.core.directives import CUSTOMIZATION_DIRECTIVE, NAMESPACE_ARGUMENT, resolve_namespace
from apigen.core.errors import (
    ApigenError,
    ConfigError,
    DirectiveValueError,
    DuplicateTypeNameError,
    ModuleClashError,
    RegistryFrozenError,
    RegistryStateError,
    SchemaSyntaxError,
    UnresolvedTypeReferenceError,
)
from apigen.core.registry import TypeRegistry
from apigen.core.type_entry import Origin, TypeEntry

__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "resolve_namespace",
    "CUSTOMIZATION_DIRECTIVE",
    "NAMESPACE_ARGUMENT",
    "TypeEntry",
    "Origin",
    "TypeRegistry",
    "ApigenError",
    "SchemaSyntaxError",
    "DirectiveValueError",
    "DuplicateTypeNameError",
    "ModuleClashError",
    "UnresolvedTypeReferenceError",
    "RegistryStateError",
    "RegistryFrozenError",
    "ConfigError",
]
