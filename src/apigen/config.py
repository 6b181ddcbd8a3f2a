"""Build configuration for a generation run.

A configuration file is a YAML mapping; every key is optional::

    source_directory: schema
    output_directory: generated
    default_namespace: myapp.types
    injection_module: myapp.types.bindings
    reference_paths:
      - ../shared/build
    publish_directory: build

Relative paths are resolved against the directory holding the file.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from apigen.core.errors import ConfigError

DEFAULT_SOURCE_DIRECTORY = "schema"
DEFAULT_OUTPUT_DIRECTORY = "generated"
DEFAULT_NAMESPACE = "apigen_generated"

_PATH_KEYS = ("source_directory", "output_directory", "publish_directory")


@dataclass(frozen=True)
class ApigenConfig:
    """Settings for one generation run.

    Parameters
    ----------
    source_directory:
        Directory searched recursively for schemas to generate.
    output_directory:
        Root of the generated package tree.
    default_namespace:
        Dotted package for types without a namespace override.
    injection_module:
        Dotted name of the resolver bindings module, if wanted.
    reference_paths:
        Roots of already-built dependencies whose published schemas
        are loaded for reference.
    publish_directory:
        If set, source schemas are copied here for downstream builds.
    """

    source_directory: Path = Path(DEFAULT_SOURCE_DIRECTORY)
    output_directory: Path = Path(DEFAULT_OUTPUT_DIRECTORY)
    default_namespace: str = DEFAULT_NAMESPACE
    injection_module: str | None = None
    reference_paths: tuple[Path, ...] = ()
    publish_directory: Path | None = None

    def with_overrides(self, **overrides: Any) -> "ApigenConfig":
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: str | Path) -> ApigenConfig:
    """Load an ``ApigenConfig`` from a YAML file.

    Parameters
    ----------
    path:
        The configuration file.

    Returns
    -------
    ApigenConfig
        Settings with relative paths resolved against the file's directory.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, is not a mapping,
        or contains unknown keys or values of the wrong type.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {config_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {config_path} must be a mapping")

    known = {f.name for f in fields(ApigenConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(
            f"Unknown configuration key(s) in {config_path}: {', '.join(map(str, unknown))}"
        )
    return _build(data, config_path.parent)


def _build(data: dict[str, Any], base: Path) -> ApigenConfig:
    values: dict[str, Any] = {}
    for key in _PATH_KEYS:
        if data.get(key) is not None:
            values[key] = base / _string(data, key)
    for key in ("default_namespace", "injection_module"):
        if data.get(key) is not None:
            values[key] = _string(data, key)

    references = data.get("reference_paths")
    if references is not None:
        if not isinstance(references, list) or not all(isinstance(r, str) for r in references):
            raise ConfigError("'reference_paths' must be a list of paths")
        values["reference_paths"] = tuple(base / r for r in references)
    return ApigenConfig(**values)


def _string(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key!r} must be a non-empty string, got {value!r}")
    return value
