"""Unit tests for apigen.grammar.tokens: TokenType enum and Token dataclass."""
from __future__ import annotations

import dataclasses

import pytest

from apigen.grammar.tokens import DEFINITION_KEYWORDS, PUNCTUATORS, Token, TokenType


class TestTokenTypeEnum:
    def test_token_type_members_are_unique(self) -> None:
        values = [t.value for t in TokenType]
        assert len(values) == len(set(values))

    def test_every_single_char_punctuator_is_mapped(self) -> None:
        assert set(PUNCTUATORS) == set("!$&():=@[]{|}")

    def test_spread_is_not_a_single_char_punctuator(self) -> None:
        assert TokenType.SPREAD not in PUNCTUATORS.values()


class TestDefinitionKeywords:
    @pytest.mark.parametrize("keyword", [
        "schema", "scalar", "type", "interface", "union", "enum", "input", "directive", "extend",
    ])
    def test_keyword_is_listed(self, keyword: str) -> None:
        assert keyword in DEFINITION_KEYWORDS

    def test_operation_names_are_not_definition_keywords(self) -> None:
        assert "query" not in DEFINITION_KEYWORDS


class TestToken:
    def _token(self, token_type: TokenType, value: str) -> Token:
        return Token(type=token_type, value=value, line=1, col=1, offset=0, end=len(value))

    def test_token_is_frozen(self) -> None:
        tok = self._token(TokenType.NAME, "User")
        with pytest.raises(dataclasses.FrozenInstanceError):
            tok.value = "Post"  # type: ignore[misc]

    def test_is_string_covers_block_strings(self) -> None:
        assert self._token(TokenType.STRING, "x").is_string
        assert self._token(TokenType.BLOCK_STRING, "x").is_string
        assert not self._token(TokenType.NAME, "x").is_string

    def test_is_name_without_values(self) -> None:
        assert self._token(TokenType.NAME, "type").is_name()

    def test_is_name_with_values(self) -> None:
        tok = self._token(TokenType.NAME, "implements")
        assert tok.is_name("implements", "on")
        assert not tok.is_name("type")

    def test_string_token_is_never_a_name(self) -> None:
        assert not self._token(TokenType.STRING, "type").is_name("type")

    def test_repr_includes_position(self) -> None:
        assert repr(self._token(TokenType.NAME, "id")) == "Token(NAME, 'id', 1:1)"
