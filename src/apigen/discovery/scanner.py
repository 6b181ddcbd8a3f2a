"""Locate schema resources on disk.

Generation schemas live under a source directory and are found
recursively.  Reference schemas are published by already-built
dependencies into a fixed ``graphql-apigen-schema`` directory at the
root of each dependency's output, and are found non-recursively there.
"""
from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from apigen.core.diagnostics import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = frozenset({".graphql", ".graphqls"})
REFERENCE_DIRECTORY = "graphql-apigen-schema"


@dataclass(frozen=True)
class SchemaResource:
    """One schema file and the locator used for it in diagnostics.

    Parameters
    ----------
    path:
        Location of the file.
    locator:
        Stable display name: the path relative to the directory it was
        discovered in, in POSIX form.
    """

    path: Path
    locator: str

    def read(self) -> str:
        """Return the file text.

        Raises
        ------
        OSError
            If the file cannot be read or decoded.
        """
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise OSError(f"{self.path} is not valid UTF-8: {exc}") from exc


def is_schema_file(path: Path) -> bool:
    return path.is_file() and path.suffix in SCHEMA_SUFFIXES


def find_schemas(root: str | Path) -> list[SchemaResource]:
    """Return every schema file below ``root``, sorted by relative path.

    A missing ``root`` yields an empty list.
    """
    base = Path(root)
    if not base.is_dir():
        logger.debug("Schema directory %s does not exist", base)
        return []
    found = sorted(p for p in base.rglob("*") if is_schema_file(p))
    return [SchemaResource(p, p.relative_to(base).as_posix()) for p in found]


def find_reference_schemas(paths: Iterable[str | Path]) -> list[SchemaResource]:
    """Return the published schemas of every reference root in ``paths``.

    Each root is searched for ``graphql-apigen-schema/*.graphql{,s}``;
    roots without that directory contribute nothing.
    """
    resources: list[SchemaResource] = []
    for root in paths:
        directory = Path(root) / REFERENCE_DIRECTORY
        if not directory.is_dir():
            logger.debug("No published schemas in %s", root)
            continue
        for path in sorted(p for p in directory.iterdir() if is_schema_file(p)):
            resources.append(SchemaResource(path, f"{REFERENCE_DIRECTORY}/{path.name}"))
    return resources


def publish_schemas(source_dir: str | Path, target_root: str | Path) -> list[Path]:
    """Copy every schema below ``source_dir`` into ``target_root``.

    The files land flat in ``<target_root>/graphql-apigen-schema/`` so a
    downstream build can list ``target_root`` as a reference path.

    Returns
    -------
    list[Path]
        The written files.
    """
    destination = Path(target_root) / REFERENCE_DIRECTORY
    written: list[Path] = []
    for resource in find_schemas(source_dir):
        destination.mkdir(parents=True, exist_ok=True)
        target = destination / resource.path.name
        if target in written:
            logger.warning(
                "Published schema %s overwrites an earlier file with the same name",
                resource.locator,
            )
        shutil.copyfile(resource.path, target)
        written.append(target)
        logger.debug("Published %s to %s", resource.locator, target)
    return written


def unreadable_resource(resource: SchemaResource, exc: OSError) -> Diagnostic:
    """Return the diagnostic recorded for a schema file that cannot be read."""
    return Diagnostic(
        severity=DiagnosticSeverity.ERROR,
        code="APG005",
        message=f"Cannot read schema resource: {exc}",
        location=resource.locator,
        rule="SchemaResource",
    )
