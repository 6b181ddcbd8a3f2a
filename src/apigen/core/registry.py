"""The type registry: every known type, merged from all schema sources.

The registry is filled from two streams.  Reference batches come from
schemas of already-built dependencies and are only used to resolve
field types; generation batches are owned by the current build and are
emitted by the code generator.  Both share one name space.

Lifecycle
---------
1. Any number of ``add_reference`` / ``add_generation`` calls, possibly
   from several threads.
2. ``freeze()``.
3. Read-only use by the generator.

Insertion is write-once per name.  A second definition with a known
name is rejected, the first one stays, and a warning naming both
locations is logged.  Problems never stop a batch: they are returned to
the caller and kept in ``errors`` so a run can report all of them.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from apigen.ast.nodes import Definition
from apigen.core.errors import (
    ApigenError,
    DirectiveValueError,
    DuplicateTypeNameError,
    RegistryFrozenError,
)
from apigen.core.type_entry import Origin, TypeEntry

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Freezable map from type name to ``TypeEntry``.

    Parameters
    ----------
    default_namespace:
        Namespace given to entries without a namespace override.
    """

    def __init__(self, default_namespace: str) -> None:
        self._default_namespace = default_namespace
        self._entries: dict[str, TypeEntry] = {}
        self._errors: list[ApigenError] = []
        self._frozen = False
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_reference(self, source: str, definitions: Iterable[Definition]) -> list[ApigenError]:
        """Insert definitions owned by an already-built dependency.

        Returns
        -------
        list[ApigenError]
            Problems found in this batch; also appended to ``errors``.

        Raises
        ------
        RegistryFrozenError
            If the registry has been frozen.
        """
        return self._add_batch(source, definitions, Origin.REFERENCE)

    def add_generation(self, source: str, definitions: Iterable[Definition]) -> list[ApigenError]:
        """Insert definitions the current build must generate.

        Returns
        -------
        list[ApigenError]
            Problems found in this batch; also appended to ``errors``.

        Raises
        ------
        RegistryFrozenError
            If the registry has been frozen.
        """
        return self._add_batch(source, definitions, Origin.GENERATION)

    def _add_batch(
        self, source: str, definitions: Iterable[Definition], origin: Origin
    ) -> list[ApigenError]:
        self._check_not_frozen()
        problems: list[ApigenError] = []
        for definition in definitions:
            try:
                entry = TypeEntry.build(definition, source, self._default_namespace, origin)
            except DirectiveValueError as exc:
                problems.append(exc)
                continue
            if not entry.name:
                logger.debug(
                    "Skipping %s definition at %s: not a named type",
                    entry.kind.name.lower(),
                    entry.source_location,
                )
                continue
            try:
                self.insert(entry)
            except DuplicateTypeNameError as exc:
                problems.append(exc)
        with self._lock:
            self._errors.extend(problems)
        return problems

    def insert(self, entry: TypeEntry) -> None:
        """Insert a single entry.

        Raises
        ------
        DuplicateTypeNameError
            If the name is taken; the existing entry is kept.
        RegistryFrozenError
            If the registry has been frozen.
        """
        with self._lock:
            self._check_not_frozen()
            existing = self._entries.get(entry.name)
            if existing is None:
                self._entries[entry.name] = entry
                logger.debug(
                    "Registered %s type %r (%s) in namespace %r",
                    entry.origin.name.lower(),
                    entry.name,
                    entry.source_location,
                    entry.namespace,
                )
                return
        logger.warning(
            "Duplicate type %r: keeping %s definition at %s, rejecting %s definition at %s",
            entry.name,
            existing.origin.name.lower(),
            existing.source_location,
            entry.origin.name.lower(),
            entry.source_location,
        )
        raise DuplicateTypeNameError(entry.name, existing.source_location, entry.source_location)

    def freeze(self) -> None:
        """Forbid any further insertion.  Idempotent."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def default_namespace(self) -> str:
        return self._default_namespace

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Type registry is frozen; no further insertions are allowed")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> TypeEntry | None:
        """Return the entry for ``name`` regardless of origin, or ``None``."""
        return self._entries.get(name)

    def generation_entries(self) -> list[TypeEntry]:
        """Entries to generate, sorted by namespace then name."""
        return self._sorted(Origin.GENERATION)

    def reference_entries(self) -> list[TypeEntry]:
        """Entries known only for resolution, sorted by namespace then name."""
        return self._sorted(Origin.REFERENCE)

    def _sorted(self, origin: Origin) -> list[TypeEntry]:
        return sorted(
            (e for e in self._entries.values() if e.origin is origin),
            key=lambda e: (e.namespace, e.name),
        )

    @property
    def errors(self) -> list[ApigenError]:
        """All problems collected from every batch so far."""
        return list(self._errors)

    def describe(self) -> list[dict[str, object]]:
        """Return a plain, serializable description of every entry."""
        return [
            {
                "name": entry.name,
                "kind": entry.kind.name.lower(),
                "namespace": entry.namespace,
                "origin": entry.origin.name.lower(),
                "has_identity_field": entry.has_identity_field,
                "source": entry.source_location,
            }
            for entry in self.generation_entries() + self.reference_entries()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"TypeRegistry(entries={len(self._entries)}, "
            f"frozen={self._frozen}, errors={len(self._errors)})"
        )
