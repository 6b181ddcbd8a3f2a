"""Artifact sinks: where generated modules end up.

A sink receives ``(namespace, type_name, text)`` for every artifact the
generator produces.  ``FileSink`` lays modules out as an importable
package tree; ``MemorySink`` keeps them in a dict for tests and for
callers that post-process the output.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from apigen.compiler.base import module_name_for

logger = logging.getLogger(__name__)

PACKAGE_MARKER = "__init__.py"


class ArtifactSink(ABC):
    """Destination for generated module text."""

    @abstractmethod
    def write(self, namespace: str, type_name: str, text: str) -> None:
        """Store the module generated for ``type_name`` in ``namespace``.

        Raises
        ------
        OSError
            If the artifact cannot be stored.
        """


class MemorySink(ArtifactSink):
    """Collects artifacts in memory, keyed by ``(namespace, type_name)``."""

    def __init__(self) -> None:
        self.artifacts: dict[tuple[str, str], str] = {}

    def write(self, namespace: str, type_name: str, text: str) -> None:
        self.artifacts[(namespace, type_name)] = text

    def get(self, namespace: str, type_name: str) -> str | None:
        return self.artifacts.get((namespace, type_name))

    def __len__(self) -> int:
        return len(self.artifacts)


class FileSink(ArtifactSink):
    """Writes artifacts below ``root`` as ``<namespace path>/<module>.py``.

    Every directory on the way gets an empty ``__init__.py`` unless it
    already has one, so the output root can be put on ``sys.path``
    directly.

    Parameters
    ----------
    root:
        Output directory; created on first write.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.written: list[Path] = []

    def path_for(self, namespace: str, type_name: str) -> Path:
        """Return the file an artifact would be written to."""
        return self.root.joinpath(*namespace.split(".")) / f"{module_name_for(type_name)}.py"

    def write(self, namespace: str, type_name: str, text: str) -> None:
        path = self.path_for(namespace, type_name)
        self._ensure_packages(path.parent)
        path.write_text(text, encoding="utf-8")
        self.written.append(path)
        logger.debug("Wrote %s", path)

    def _ensure_packages(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        current = directory
        while current != self.root and self.root in current.parents:
            marker = current / PACKAGE_MARKER
            if not marker.exists():
                marker.write_text("", encoding="utf-8")
            current = current.parent
