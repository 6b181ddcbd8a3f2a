"""Unit tests for apigen.compiler.sinks: artifact destinations."""
from __future__ import annotations

from pathlib import Path

import pytest

from apigen.compiler.sinks import ArtifactSink, FileSink, MemorySink


class TestMemorySink:
    def test_write_and_get(self) -> None:
        sink = MemorySink()
        sink.write("com.x", "User", "text")
        assert sink.get("com.x", "User") == "text"
        assert sink.get("com.x", "Post") is None
        assert len(sink) == 1

    def test_is_an_artifact_sink(self) -> None:
        assert isinstance(MemorySink(), ArtifactSink)


class TestFileSink:
    def test_module_path_follows_namespace(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path)
        assert sink.path_for("com.x", "UserProfile") == tmp_path / "com" / "x" / "user_profile.py"

    def test_write_creates_package_markers(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path / "out")
        sink.write("com.x", "User", "# user\n")

        module = tmp_path / "out" / "com" / "x" / "user.py"
        assert module.read_text(encoding="utf-8") == "# user\n"
        assert (tmp_path / "out" / "com" / "__init__.py").exists()
        assert (tmp_path / "out" / "com" / "x" / "__init__.py").exists()
        assert not (tmp_path / "out" / "__init__.py").exists()
        assert sink.written == [module]

    def test_existing_package_marker_is_kept(self, tmp_path: Path) -> None:
        package = tmp_path / "app"
        package.mkdir()
        (package / "__init__.py").write_text("VALUE = 1\n", encoding="utf-8")
        FileSink(tmp_path).write("app", "User", "")
        assert (package / "__init__.py").read_text(encoding="utf-8") == "VALUE = 1\n"

    def test_write_failure_raises_os_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "com"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(OSError):
            FileSink(tmp_path).write("com.x", "User", "")
