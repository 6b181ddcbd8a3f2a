"""Shared test fixtures for graphql-apigen.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from apigen.core.registry import TypeRegistry
from apigen.parser import parse

USER_SCHEMA = """\
type User @java(package: "com.x") {
  id: ID!
  name: String
}
"""

POST_SCHEMA = """\
type Post {
  id: ID!
  title: String!
  author: User!
}
"""


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "apigen"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> TypeRegistry:
    return TypeRegistry("apigen_generated")


@pytest.fixture()
def user_definitions():
    return parse(USER_SCHEMA, "user.graphql")


@pytest.fixture()
def post_definitions():
    return parse(POST_SCHEMA, "post.graphql")


@pytest.fixture()
def schema_dir(tmp_path: Path) -> Path:
    """A source directory with one nested and one top-level schema."""
    root = tmp_path / "schema"
    (root / "blog").mkdir(parents=True)
    (root / "user.graphql").write_text(USER_SCHEMA, encoding="utf-8")
    (root / "blog" / "post.graphqls").write_text(POST_SCHEMA, encoding="utf-8")
    (root / "notes.txt").write_text("not a schema", encoding="utf-8")
    return root
