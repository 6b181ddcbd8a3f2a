"""graphql-apigen: generate Python types and resolver contracts from GraphQL schemas.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import apigen

    result = apigen.generate(
        {"schema.graphql": '''
            type User @java(package: "myapp.users") {
              id: ID!
              name: String
            }
        '''},
        default_namespace="myapp.types",
    )
    for artifact in result.artifacts:
        print(artifact.relative_path)

    apigen.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from apigen.ast.nodes import Definition
    from apigen.compiler.base import GenerationResult
    from apigen.compiler.sinks import ArtifactSink


def parse(source: str, locator: str | None = None) -> "tuple[Definition, ...]":
    """Parse schema text into definition nodes.

    Parameters
    ----------
    source:
        Complete schema text.
    locator:
        Optional name of the resource, used in error messages.

    Raises
    ------
    apigen.lexer.LexError
        If the source contains invalid characters.
    apigen.parser.ParseErrorCollection
        If the source contains syntactic errors.
    """
    from apigen.parser.parser import parse as _parse

    return _parse(source, locator)


def generate(
    schemas: Mapping[str, str],
    default_namespace: str = "apigen_generated",
    references: Mapping[str, str] | None = None,
    injection_module: str | None = None,
    sink: "ArtifactSink | None" = None,
) -> "GenerationResult":
    """Generate modules for in-memory schema texts.

    Parameters
    ----------
    schemas:
        Locator → schema text of the resources to generate.
    default_namespace:
        Namespace for types without a namespace override.
    references:
        Locator → schema text of resources used only for resolution.
    injection_module:
        Dotted name of the resolver bindings module, if wanted.
    sink:
        Optional destination for the generated modules.

    Returns
    -------
    GenerationResult
        Artifacts plus every diagnostic found.
    """
    from apigen.pipeline import ApiGen

    gen = ApiGen(default_namespace, injection_module=injection_module)
    for locator, text in (references or {}).items():
        gen.add_for_reference(locator, text)
    for locator, text in schemas.items():
        gen.add_for_generation(locator, text)
    return gen.generate(sink)


__all__ = [
    "__version__",
    "parse",
    "generate",
]
