"""Unit tests for apigen.config: YAML configuration loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from apigen.config import DEFAULT_NAMESPACE, ApigenConfig, load_config
from apigen.core.errors import ConfigError


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "apigen.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults(self) -> None:
        config = ApigenConfig()
        assert config.source_directory == Path("schema")
        assert config.output_directory == Path("generated")
        assert config.default_namespace == DEFAULT_NAMESPACE == "apigen_generated"
        assert config.injection_module is None
        assert config.reference_paths == ()
        assert config.publish_directory is None

    def test_with_overrides_ignores_none(self) -> None:
        config = ApigenConfig().with_overrides(default_namespace="app", injection_module=None)
        assert config.default_namespace == "app"
        assert config.injection_module is None


class TestLoadConfig:
    def test_full_config(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path,
            "source_directory: graphql\n"
            "output_directory: out\n"
            "default_namespace: myapp.types\n"
            "injection_module: myapp.bindings\n"
            "reference_paths:\n"
            "  - ../shared\n"
            "publish_directory: build\n",
        )
        config = load_config(path)
        assert config.source_directory == tmp_path / "graphql"
        assert config.output_directory == tmp_path / "out"
        assert config.default_namespace == "myapp.types"
        assert config.injection_module == "myapp.bindings"
        assert config.reference_paths == (tmp_path / "../shared",)
        assert config.publish_directory == tmp_path / "build"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(write_config(tmp_path, ""))
        assert config.default_namespace == "apigen_generated"
        assert config.source_directory == Path("schema")

    def test_absolute_paths_are_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere"
        config = load_config(write_config(tmp_path, f"output_directory: {target.as_posix()}\n"))
        assert config.output_directory == target

    def test_unknown_key(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            load_config(write_config(tmp_path, "guice_module: x\n"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_config(tmp_path, "key: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(write_config(tmp_path, "- a\n- b\n"))

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="non-empty string"):
            load_config(write_config(tmp_path, "default_namespace: 3\n"))

    def test_reference_paths_must_be_a_list(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="reference_paths"):
            load_config(write_config(tmp_path, "reference_paths: ../shared\n"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.yaml")

    def test_config_error_code(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as excinfo:
            load_config(tmp_path / "missing.yaml")
        assert excinfo.value.to_diagnostic().rule == "ConfigError"
