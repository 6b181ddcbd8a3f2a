"""Unit tests for apigen.runtime resolver contracts."""
from __future__ import annotations

import pytest

from apigen.runtime import FieldResolver, ResolutionContext, Resolver


class _Upper(FieldResolver[str]):
    def resolve(self, env: ResolutionContext) -> str:
        return env.source.upper() * env.arguments.get("times", 1)


class _Echo(Resolver[str]):
    def resolve(self, unresolved: list[str]) -> list[str]:
        return [f"{item}!" for item in unresolved]


class TestContracts:
    def test_abstract_contracts_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            Resolver()  # type: ignore[abstract]
        with pytest.raises(TypeError):
            FieldResolver()  # type: ignore[abstract]

    def test_batch_resolver_keeps_order(self) -> None:
        assert _Echo().resolve(["a", "b"]) == ["a!", "b!"]

    def test_field_resolver_uses_context(self) -> None:
        env = ResolutionContext(source="ab", arguments={"times": 2})
        assert _Upper().resolve(env) == "ABAB"


class TestResolutionContext:
    def test_defaults(self) -> None:
        env = ResolutionContext(source=None)
        assert env.arguments == {}
        assert env.context is None

    def test_is_frozen(self) -> None:
        env = ResolutionContext(source=1)
        with pytest.raises(AttributeError):
            env.source = 2  # type: ignore[misc]
