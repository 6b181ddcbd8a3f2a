"""Unit tests for apigen.core.directives: namespace override resolution."""
from __future__ import annotations

import pytest

from apigen.core.directives import resolve_namespace
from apigen.core.errors import DirectiveValueError
from apigen.parser import parse

DEFAULT = "apigen_generated"


def directives_of(source: str):
    return parse(source)[0].directives


class TestResolveNamespace:
    def test_no_directives_uses_default(self) -> None:
        assert resolve_namespace((), DEFAULT) == DEFAULT

    def test_java_package_overrides_default(self) -> None:
        directives = directives_of('type User @java(package: "com.x") { id: ID }')
        assert resolve_namespace(directives, DEFAULT) == "com.x"

    def test_first_package_argument_wins(self) -> None:
        directives = directives_of(
            'type User @java(other: 1, package: "first", package: "second") { id: ID }'
        )
        assert resolve_namespace(directives, DEFAULT) == "first"

    def test_java_without_package_uses_default(self) -> None:
        directives = directives_of('type User @java(module: "m") { id: ID }')
        assert resolve_namespace(directives, DEFAULT) == DEFAULT

    def test_only_first_directive_is_examined(self) -> None:
        directives = directives_of('type User @key @java(package: "com.x") { id: ID }')
        assert resolve_namespace(directives, DEFAULT) == DEFAULT

    def test_other_directive_with_package_argument_is_ignored(self) -> None:
        directives = directives_of('type User @python(package: "com.x") { id: ID }')
        assert resolve_namespace(directives, DEFAULT) == DEFAULT

    def test_directive_name_is_case_sensitive(self) -> None:
        directives = directives_of('type User @Java(package: "com.x") { id: ID }')
        assert resolve_namespace(directives, DEFAULT) == DEFAULT

    def test_block_string_package(self) -> None:
        directives = directives_of('enum Role @java(package: """com.roles""") { A }')
        assert resolve_namespace(directives, DEFAULT) == "com.roles"

    @pytest.mark.parametrize("literal", ["42", "true", "com", "[\"a\"]", "null"])
    def test_non_string_package_is_rejected(self, literal: str) -> None:
        directives = directives_of(f"type User @java(package: {literal}) {{ id: ID }}")
        with pytest.raises(DirectiveValueError) as excinfo:
            resolve_namespace(directives, DEFAULT, "user.graphql:[1, 1]")
        error = excinfo.value
        assert error.directive == "java"
        assert error.argument == "package"
        assert error.location == "user.graphql:[1, 1]"
        assert error.code == "APG002"
