"""Unit tests for apigen.compiler.python_target: rendering of single modules."""
from __future__ import annotations

import ast
import sys
import types

import pytest

from apigen.compiler.base import Contract, Dependency, module_name_for, to_snake
from apigen.compiler.generator import contracts_for
from apigen.compiler.python_target import (
    PythonTarget,
    annotation,
    field_resolver_name,
    python_literal,
)
from apigen.core.type_entry import Origin, TypeEntry
from apigen.parser import parse
from apigen.runtime import FieldResolver, Resolver


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def render(source: str, dependencies: tuple[Dependency, ...] = ()) -> str:
    entry = TypeEntry.build(parse(source)[0], "s.graphql", "ns", Origin.GENERATION)
    text = PythonTarget().render(entry, dependencies, contracts_for(entry))
    ast.parse(text)
    return text


def load(text: str, monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """Execute generated source as a registered module, as an import would."""
    module = types.ModuleType("generated_module")
    monkeypatch.setitem(sys.modules, module.__name__, module)
    exec(compile(text, "generated_module.py", "exec"), module.__dict__)
    return module


def field_type(source: str):
    return parse(f"type T {{ f: {source} }}")[0].fields[0].type


def default_value(source: str):
    return parse(f"input I {{ f: T = {source} }}")[0].fields[0].default_value


class TestNaming:
    @pytest.mark.parametrize("name, expected", [
        ("User", "user"),
        ("UserProfile", "user_profile"),
        ("HTTPRequest", "http_request"),
        ("Node2Edge", "node2_edge"),
        ("already_snake", "already_snake"),
    ])
    def test_to_snake(self, name: str, expected: str) -> None:
        assert to_snake(name) == expected

    def test_keyword_module_names_are_escaped(self) -> None:
        assert module_name_for("Import") == "import_"

    def test_field_resolver_name(self) -> None:
        assert field_resolver_name("User", "posts") == "UserPostsResolver"


class TestAnnotations:
    @pytest.mark.parametrize("source, expected", [
        ("ID!", "str"),
        ("String", "str | None"),
        ("Int!", "int"),
        ("Float", "float | None"),
        ("Boolean!", "bool"),
        ("User", "User | None"),
        ("[Post!]!", "list[Post]"),
        ("[Post]", "list[Post | None] | None"),
        ("[[Int!]!]", "list[list[int]] | None"),
    ])
    def test_annotation(self, source: str, expected: str) -> None:
        assert annotation(field_type(source)) == expected


class TestLiterals:
    @pytest.mark.parametrize("source, expected", [
        ('"x"', "'x'"),
        ("3", "3"),
        ("2.5", "2.5"),
        ("true", "True"),
        ("false", "False"),
        ("null", "None"),
        ("RED", "'RED'"),
        ("[1, 2]", "[1, 2]"),
        ('{ a: 1, b: "c" }', "{'a': 1, 'b': 'c'}"),
    ])
    def test_python_literal(self, source: str, expected: str) -> None:
        assert python_literal(default_value(source)) == expected


class TestObjects:
    def test_dataclass_fields(self) -> None:
        text = render("type User { id: ID! name: String tags: [String!]! }")
        assert "@_dataclasses.dataclass(kw_only=True)\nclass User:" in text
        assert "    id: str\n" in text
        assert "    name: str | None = None\n" in text
        assert "    tags: list[str]\n" in text

    def test_header_names_source_location(self) -> None:
        text = render("type User { id: ID! }")
        assert text.startswith("# Generated by apigen from s.graphql:[1, 1]. Do not edit.\n")
        assert "from __future__ import annotations" in text

    def test_description_becomes_docstring(self) -> None:
        text = render('"A person." type User { id: ID! }')
        assert '    """A person."""' in text

    def test_batch_lookup_contract(self) -> None:
        text = render("type User { id: ID! }")
        assert "from apigen import runtime as _runtime" in text
        assert "class UserResolver(_runtime.Resolver[User]):" in text

    def test_no_contract_without_identity(self) -> None:
        text = render("type Post { title: String }")
        assert "Resolver" not in text
        assert "_runtime" not in text

    def test_computed_fields_are_not_stored(self) -> None:
        text = render("type User { name: String posts(first: Int = 10, after: String): [Post!]! }")
        assert "    posts:" not in text
        assert "class UserPostsResolver(_runtime.FieldResolver['list[Post]']):" in text
        assert "ARGUMENTS: tuple[str, ...] = ('first', 'after',)" in text
        assert "from apigen import runtime as _runtime" in text

    def test_keyword_field_names(self) -> None:
        text = render("type Flow { from: String! class: Int }")
        assert "    from_: str\n" in text
        assert "    class_: int | None = None\n" in text

    def test_dependencies_are_type_checking_imports(self) -> None:
        deps = (
            Dependency("Post", "com.blog", Origin.GENERATION),
            Dependency("Tag", "ns", Origin.REFERENCE),
        )
        text = render("type User { posts: [Post] tag: Tag }", deps)
        assert "from typing import TYPE_CHECKING" in text
        assert (
            "if TYPE_CHECKING:\n"
            "    from com.blog.post import Post\n"
            "    from ns.tag import Tag"
        ) in text

    def test_contract_base_is_evaluated_at_import(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("type User { id: ID! name: String }"), monkeypatch)
        assert module.User(id="1").name is None
        assert issubclass(module.UserResolver, Resolver)
        with pytest.raises(TypeError):
            module.UserResolver()


class TestOtherKinds:
    def test_input_defaults(self) -> None:
        text = render('input Filter { term: String = "x" limit: Int! = 10 tags: [String] = ["a"] q: String! }')
        assert "import dataclasses as _dataclasses" in text
        assert "    term: str | None = 'x'\n" in text
        assert "    limit: int = 10\n" in text
        assert "    tags: list[str | None] | None = _dataclasses.field(default_factory=lambda: ['a'])\n" in text
        assert "    q: str\n" in text

    def test_input_never_gets_contracts(self) -> None:
        assert "Resolver" not in render("input UserInput { id: ID! }")

    def test_interface_is_a_protocol(self) -> None:
        text = render("interface Node { id: ID! label(lang: String): String }")
        assert "class Node(Protocol):" in text
        assert "    id: str\n" in text
        assert "label" not in text.split("class Node")[1]

    def test_union_alias(self) -> None:
        deps = (
            Dependency("User", "ns", Origin.GENERATION),
            Dependency("Post", "ns", Origin.GENERATION),
        )
        text = render("union SearchResult = User | Post", deps)
        assert "from typing import TYPE_CHECKING, TypeAlias, Union" in text
        assert "SearchResult: TypeAlias = Union['User', 'Post']" in text

    def test_empty_union(self) -> None:
        assert "Empty: TypeAlias = object" in render("union Empty")

    def test_enum(self) -> None:
        text = render('enum Role { "Administrator" ADMIN USER }')
        assert "class Role(Enum):" in text
        assert "    ADMIN = 'ADMIN'\n" in text
        assert "    USER = 'USER'" in text

    def test_enum_is_usable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("enum Role { ADMIN USER }"), monkeypatch)
        assert module.Role("ADMIN").name == "ADMIN"

    def test_scalar(self) -> None:
        assert "DateTime = NewType('DateTime', object)" in render("scalar DateTime")

    def test_non_type_definition_is_rejected(self) -> None:
        definition = parse("directive @x on OBJECT")[0]
        entry = TypeEntry.build(definition, "s.graphql", "ns", Origin.GENERATION)
        with pytest.raises(ValueError):
            PythonTarget().render(entry, (), frozenset())


class TestDocstrings:
    def test_triple_quotes_in_descriptions_are_escaped(self) -> None:
        text = render('"""He said \\""" hi""" type T { a: Int }')
        assert ast.get_docstring(ast.parse(text).body[-1]) == 'He said """ hi'

    def test_multiline_description(self) -> None:
        text = render('"""\nLine one.\nLine two.\n""" enum E { A }')
        assert "Line one.\n    Line two." in text


class TestContractsEnum:
    def test_contract_members(self) -> None:
        assert {c.name for c in Contract} == {"BATCH_LOOKUP", "FIELD_RESOLUTION"}


class TestGeneratedNames:
    def test_type_named_like_a_contract_base(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("type Resolver { id: ID! }"), monkeypatch)
        assert issubclass(module.ResolverResolver, Resolver)
        assert module.Resolver(id="1").id == "1"

    def test_type_named_like_field_contract_base(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("type FieldResolver { n(x: Int): Int }"), monkeypatch)
        assert issubclass(module.FieldResolverNResolver, FieldResolver)

    def test_field_named_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("input F { field: [Int] = [1] other: [Int] = [2] }"), monkeypatch)
        assert module.F().field == [1]
        assert module.F().other == [2]

    def test_field_named_dataclass(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = load(render("type T { dataclass: Int tags: [Int] }"), monkeypatch)
        assert module.T(dataclass=1).dataclass == 1

    def test_keyword_type_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        text = render("type class { x: Int }")
        assert "class class_:" in text
        assert load(text, monkeypatch).class_(x=1).x == 1

    @pytest.mark.parametrize("source, expected", [
        ("interface def { a: Int }", "class def_(Protocol):"),
        ("enum None { A }", "class None_(Enum):"),
        ("scalar lambda", "lambda_ = NewType('lambda_', object)"),
        ("union U = class | def", "U: TypeAlias = Union['class_', 'def_']"),
    ])
    def test_keyword_names_in_other_kinds(self, source: str, expected: str) -> None:
        assert expected in render(source)

    def test_keyword_dependencies(self) -> None:
        deps = (Dependency("import", "ns", Origin.GENERATION),)
        text = render("type Holder { item: import }", deps)
        assert "    from ns.import_ import import_" in text
        assert "    item: import_ | None = None\n" in text

    @pytest.mark.parametrize("source", [
        "type _runtime { id: ID! }",
        "type T { _dataclasses: [Int] }",
        "input _dataclasses { a: Int }",
    ])
    def test_reserved_names_are_rejected(self, source: str) -> None:
        entry = TypeEntry.build(parse(source)[0], "s.graphql", "ns", Origin.GENERATION)
        with pytest.raises(ValueError, match="reserved"):
            PythonTarget().render(entry, (), contracts_for(entry))
