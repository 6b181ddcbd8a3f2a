"""Generation orchestrator: frozen registry → artifacts and diagnostics.

For every generation entry the generator collects the type names the
definition refers to, resolves each through the registry, turns every
resolved name into a ``Dependency`` edge and hands the entry to the
rendering target.  Problems are recorded per entry; one bad entry never
prevents the others from being generated.

Reference mapping
-----------------

Definition kind     Referenced names
------------------  ---------------------------------------------------
``type``            implemented interfaces, field types, argument types
``interface``       implemented interfaces, field types, argument types
``input``           input field types
``union``           member types
``enum``/``scalar`` none
"""
from __future__ import annotations

import logging

from apigen.ast.nodes import DefinitionKind, named_type
from apigen.compiler.base import (
    Artifact,
    CodegenTarget,
    Contract,
    Dependency,
    GenerationResult,
)
from apigen.compiler.python_target import BUILTIN_SCALARS, PythonTarget, computed_fields
from apigen.compiler.sinks import ArtifactSink
from apigen.core.diagnostics import Diagnostic, DiagnosticSeverity
from apigen.core.errors import (
    ModuleClashError,
    RegistryStateError,
    UnresolvedTypeReferenceError,
)
from apigen.core.registry import TypeRegistry
from apigen.core.type_entry import TypeEntry

logger = logging.getLogger(__name__)

_TARGETS: dict[str, type[CodegenTarget]] = {
    "python": PythonTarget,
}


def referenced_names(entry: TypeEntry) -> list[str]:
    """Return every type name ``entry`` refers to, deduplicated in first-use order."""
    definition = entry.definition
    kind = entry.kind
    names: list[str] = []
    if kind in (DefinitionKind.OBJECT, DefinitionKind.INTERFACE):
        names.extend(iface.name for iface in definition.interfaces)  # type: ignore[union-attr]
        for field_def in definition.fields:  # type: ignore[union-attr]
            names.append(named_type(field_def.type).name)
            names.extend(named_type(arg.type).name for arg in field_def.arguments)
    elif kind is DefinitionKind.INPUT_OBJECT:
        names.extend(named_type(f.type).name for f in definition.fields)  # type: ignore[union-attr]
    elif kind is DefinitionKind.UNION:
        names.extend(member.name for member in definition.members)  # type: ignore[union-attr]
    return list(dict.fromkeys(names))


def contracts_for(entry: TypeEntry) -> frozenset[Contract]:
    """Return the resolver contracts the module for ``entry`` must declare."""
    contracts: set[Contract] = set()
    if entry.has_identity_field:
        contracts.add(Contract.BATCH_LOOKUP)
    if computed_fields(entry):
        contracts.add(Contract.FIELD_RESOLUTION)
    return frozenset(contracts)


class CodeGenerator:
    """Generate one module per generation entry of a frozen registry.

    Parameters
    ----------
    target:
        Name of the rendering target.  Currently only ``"python"``.
    injection_module:
        Dotted name of a bindings module listing every resolver
        contract, or ``None`` to skip it.

    Raises
    ------
    ValueError
        If ``target`` is not a registered rendering target.

    Example
    -------
    ::

        registry.freeze()
        result = CodeGenerator().generate(registry, FileSink("generated"))
        print(result.summary())
    """

    def __init__(self, target: str = "python", injection_module: str | None = None) -> None:
        if target not in _TARGETS:
            available = ", ".join(sorted(_TARGETS))
            raise ValueError(
                f"Unknown rendering target {target!r}. Available targets: {available}"
            )
        self._target = _TARGETS[target]()
        self._injection_module = injection_module

    @property
    def target(self) -> CodegenTarget:
        return self._target

    def generate(
        self, registry: TypeRegistry, sink: ArtifactSink | None = None
    ) -> GenerationResult:
        """Generate artifacts for every generation entry in ``registry``.

        Parameters
        ----------
        registry:
            A frozen registry.
        sink:
            Optional destination; each successful artifact is written
            to it as soon as it is rendered.

        Returns
        -------
        GenerationResult
            The artifacts plus one diagnostic per problem found.

        Raises
        ------
        RegistryStateError
            If ``registry`` has not been frozen.
        """
        if not registry.frozen:
            raise RegistryStateError("Type registry must be frozen before generating code")

        result = GenerationResult()
        claimed: dict[tuple[str, str], tuple[str, str]] = {}
        for entry in registry.generation_entries():
            artifact = self._generate_entry(entry, registry, result.diagnostics)
            if artifact is None:
                continue
            if not self._claim(artifact, entry.source_location, claimed, result.diagnostics):
                continue
            if sink is None or self._emit(artifact, sink, result.diagnostics):
                result.artifacts.append(artifact)

        bindings = self._bindings(registry, result.artifacts)
        if bindings is not None and self._claim(
            bindings, f"injection module {self._injection_module}", claimed, result.diagnostics
        ):
            if sink is None or self._emit(bindings, sink, result.diagnostics):
                result.artifacts.append(bindings)

        logger.debug(result.summary())
        return result

    def _generate_entry(
        self,
        entry: TypeEntry,
        registry: TypeRegistry,
        diagnostics: list[Diagnostic],
    ) -> Artifact | None:
        dependencies: list[Dependency] = []
        missing = False
        for name in referenced_names(entry):
            if name in BUILTIN_SCALARS or name == entry.name:
                continue
            resolved = registry.resolve(name)
            if resolved is None:
                error = UnresolvedTypeReferenceError(entry.name, name, entry.source_location)
                diagnostics.append(error.to_diagnostic())
                missing = True
                continue
            dependencies.append(Dependency.to_entry(resolved))
        if missing:
            logger.debug("Not generating %r: unresolved references", entry.name)
            return None

        contracts = contracts_for(entry)
        try:
            text = self._target.render(entry, tuple(dependencies), contracts)
        except (ValueError, TypeError) as exc:
            diagnostics.append(
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    code="APG999",
                    message=f"Could not render {entry.name!r}: {exc}",
                    location=entry.source_location,
                    rule=self._target.name,
                )
            )
            return None

        logger.debug(
            "Generated %s.%s with %d dependency edge(s)",
            entry.namespace,
            entry.name,
            len(dependencies),
        )
        return Artifact(
            namespace=entry.namespace,
            type_name=entry.name,
            text=text,
            dependencies=tuple(dependencies),
            contracts=contracts,
            computed_fields=tuple(f.name for f in computed_fields(entry)),
        )

    def _bindings(self, registry: TypeRegistry, artifacts: list[Artifact]) -> Artifact | None:
        if not self._injection_module:
            return None
        with_contracts = [a for a in artifacts if a.contracts]
        if not with_contracts:
            return None
        namespace, _, module = self._injection_module.rpartition(".")
        text = self._target.render_bindings(self._injection_module, with_contracts)
        return Artifact(
            namespace=namespace or registry.default_namespace,
            type_name=module,
            text=text,
        )

    @staticmethod
    def _claim(
        artifact: Artifact,
        location: str,
        claimed: dict[tuple[str, str], tuple[str, str]],
        diagnostics: list[Diagnostic],
    ) -> bool:
        """Reserve the module path of ``artifact``; the first claimant keeps it."""
        key = (artifact.namespace, artifact.module_name)
        if key not in claimed:
            claimed[key] = (artifact.type_name, location)
            return True
        kept, kept_location = claimed[key]
        error = ModuleClashError(
            artifact.qualified_name, kept, kept_location, artifact.type_name, location
        )
        logger.warning("%s", error.message)
        diagnostics.append(error.to_diagnostic())
        return False

    def _emit(self, artifact: Artifact, sink: ArtifactSink, diagnostics: list[Diagnostic]) -> bool:
        try:
            sink.write(artifact.namespace, artifact.type_name, artifact.text)
        except OSError as exc:
            diagnostics.append(
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    code="APG006",
                    message=f"Could not write {artifact.qualified_name}: {exc}",
                    location=artifact.relative_path,
                    rule=type(sink).__name__,
                )
            )
            return False
        return True


def available_targets() -> list[str]:
    """Return the list of registered rendering target names."""
    return sorted(_TARGETS)
