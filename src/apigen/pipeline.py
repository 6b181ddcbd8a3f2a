"""The generation pipeline: schema text in, generated modules out.

``ApiGen`` owns one ``TypeRegistry``.  Schema resources are parsed and
added as reference or generation batches; ``generate`` freezes the
registry and runs the ``CodeGenerator``.  Every problem along the way
ends up as a diagnostic on the returned ``GenerationResult``::

    gen = ApiGen("myapp.types")
    gen.add_for_reference("shared.graphql", shared_text)
    gen.add_for_generation("schema.graphql", text)
    result = gen.generate(FileSink("generated"))
    if not result.success:
        for diagnostic in result.errors:
            print(diagnostic)

``run`` drives the same steps from an ``ApigenConfig``.
"""
from __future__ import annotations

import logging

from apigen.compiler.base import GenerationResult
from apigen.compiler.generator import CodeGenerator
from apigen.compiler.sinks import ArtifactSink, FileSink
from apigen.config import ApigenConfig
from apigen.core.diagnostics import Diagnostic
from apigen.core.errors import SchemaSyntaxError
from apigen.core.registry import TypeRegistry
from apigen.discovery import (
    SchemaResource,
    find_reference_schemas,
    find_schemas,
    publish_schemas,
    unreadable_resource,
)
from apigen.parser import ParseErrorCollection, parse

logger = logging.getLogger(__name__)


class ApiGen:
    """Collects schema resources and generates code for them.

    Parameters
    ----------
    default_namespace:
        Namespace for types without a namespace override.
    injection_module:
        Dotted name of the resolver bindings module, if wanted.
    target:
        Name of the rendering target.
    """

    def __init__(
        self,
        default_namespace: str,
        injection_module: str | None = None,
        target: str = "python",
    ) -> None:
        self.registry = TypeRegistry(default_namespace)
        self._generator = CodeGenerator(target=target, injection_module=injection_module)
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Parse and read problems recorded so far."""
        return list(self._diagnostics)

    def add_for_reference(self, source: str, text: str) -> bool:
        """Parse ``text`` and register its types for resolution only.

        Returns
        -------
        bool
            False if the resource could not be parsed.
        """
        return self._add(source, text, reference=True)

    def add_for_generation(self, source: str, text: str) -> bool:
        """Parse ``text`` and register its types for generation.

        Returns
        -------
        bool
            False if the resource could not be parsed.
        """
        return self._add(source, text, reference=False)

    def _add(self, source: str, text: str, reference: bool) -> bool:
        try:
            definitions = parse(text, source)
        except ParseErrorCollection as exc:
            self._diagnostics.extend(err.to_diagnostic() for err in exc.errors)
            return False
        except SchemaSyntaxError as exc:
            self._diagnostics.append(exc.to_diagnostic())
            return False

        if reference:
            self.registry.add_reference(source, definitions)
        else:
            self.registry.add_generation(source, definitions)
        logger.debug(
            "Loaded %d definition(s) from %s for %s",
            len(definitions),
            source,
            "reference" if reference else "generation",
        )
        return True

    def add_resource(self, resource: SchemaResource, reference: bool = False) -> bool:
        """Read ``resource`` from disk and add it as one batch."""
        try:
            text = resource.read()
        except OSError as exc:
            self._diagnostics.append(unreadable_resource(resource, exc))
            return False
        return self._add(resource.locator, text, reference=reference)

    def load(self, config: ApigenConfig) -> bool:
        """Add the reference schemas, then the source schemas, named by ``config``.

        Returns
        -------
        bool
            False, with nothing loaded, when the source directory does
            not exist.
        """
        if not config.source_directory.is_dir():
            logger.debug("Source directory %s does not exist", config.source_directory)
            return False
        for resource in find_reference_schemas(config.reference_paths):
            self.add_resource(resource, reference=True)
        for resource in find_schemas(config.source_directory):
            self.add_resource(resource, reference=False)
        return True

    def generate(self, sink: ArtifactSink | None = None) -> GenerationResult:
        """Freeze the registry and generate every generation entry.

        Load-time diagnostics come first in the result, followed by
        registry problems, followed by generation diagnostics.
        """
        self.registry.freeze()
        generated = self._generator.generate(self.registry, sink)
        generated.diagnostics[:0] = [
            *self._diagnostics,
            *(err.to_diagnostic() for err in self.registry.errors),
        ]
        return generated


def run(config: ApigenConfig, sink: ArtifactSink | None = None) -> GenerationResult:
    """Run discovery, loading and generation as described by ``config``.

    Parameters
    ----------
    config:
        Run settings.
    sink:
        Destination for artifacts; defaults to a ``FileSink`` on
        ``config.output_directory``.

    Returns
    -------
    GenerationResult
        An empty, successful result when the source directory does not
        exist.
    """
    gen = ApiGen(config.default_namespace, injection_module=config.injection_module)
    if not gen.load(config):
        logger.debug("Skipping generation")
        return GenerationResult()

    result = gen.generate(sink if sink is not None else FileSink(config.output_directory))
    if config.publish_directory is not None:
        published = publish_schemas(config.source_directory, config.publish_directory)
        logger.debug("Published %d schema(s) to %s", len(published), config.publish_directory)
    return result
