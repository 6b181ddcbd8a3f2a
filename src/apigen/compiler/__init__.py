"""apigen compiler: turns a frozen type registry into Python modules.

Public API
----------
The stable surface is ``CodeGenerator``, ``GenerationResult`` and the
artifact sinks.  Rendering targets are selected by name.

Example
-------
::

    from apigen.compiler import CodeGenerator, FileSink

    registry.freeze()
    result = CodeGenerator(injection_module="app.bindings").generate(
        registry, FileSink("generated")
    )
    for diagnostic in result.diagnostics:
        print(diagnostic)
"""
from __future__ import annotations

from apigen.compiler.base import (
    Artifact,
    CodegenTarget,
    Contract,
    Dependency,
    GenerationResult,
    module_name_for,
)
from apigen.compiler.generator import CodeGenerator, available_targets
from apigen.compiler.python_target import PythonTarget
from apigen.compiler.sinks import ArtifactSink, FileSink, MemorySink

__all__ = [
    "CodeGenerator",
    "available_targets",
    "GenerationResult",
    "Artifact",
    "Dependency",
    "Contract",
    "CodegenTarget",
    "PythonTarget",
    "ArtifactSink",
    "FileSink",
    "MemorySink",
    "module_name_for",
]
