"""Unit tests for apigen.lexer: tokenization of SDL source text."""
from __future__ import annotations

import pytest

from apigen.core.errors import SchemaSyntaxError
from apigen.grammar.tokens import TokenType
from apigen.lexer.lexer import LexError, Lexer, dedent_block_string, tokenize


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def types_of(tokens: list) -> list[TokenType]:
    """Return just the token types, excluding COMMENT and EOF."""
    excluded = {TokenType.COMMENT, TokenType.EOF}
    return [t.type for t in tokens if t.type not in excluded]


def single(source: str):
    tokens = [t for t in tokenize(source) if t.type is not TokenType.EOF]
    assert len(tokens) == 1
    return tokens[0]


# ---------------------------------------------------------------------------
# Empty and ignored input
# ---------------------------------------------------------------------------


class TestIgnoredInput:
    def test_empty_string_produces_only_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF

    def test_whitespace_commas_and_bom_are_ignored(self) -> None:
        assert types_of(tokenize("\ufeff  ,\t,\r\n ,")) == []

    def test_comment_runs_to_end_of_line(self) -> None:
        tokens = tokenize("# a comment\ntype")
        assert tokens[0].type is TokenType.COMMENT
        assert tokens[0].value == " a comment"
        assert tokens[1].is_name("type")
        assert tokens[1].line == 2

    def test_commas_separate_names(self) -> None:
        tokens = tokenize("a,b")
        assert [t.value for t in tokens[:2]] == ["a", "b"]


# ---------------------------------------------------------------------------
# Punctuators and names
# ---------------------------------------------------------------------------


class TestPunctuators:
    @pytest.mark.parametrize("source, expected", [
        ("!", TokenType.BANG),
        ("$", TokenType.DOLLAR),
        ("&", TokenType.AMP),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        ("...", TokenType.SPREAD),
        (":", TokenType.COLON),
        ("=", TokenType.EQUALS),
        ("@", TokenType.AT),
        ("[", TokenType.LBRACKET),
        ("]", TokenType.RBRACKET),
        ("{", TokenType.LBRACE),
        ("|", TokenType.PIPE),
        ("}", TokenType.RBRACE),
    ])
    def test_punctuator(self, source: str, expected: TokenType) -> None:
        assert single(source).type is expected

    def test_lone_dot_is_an_error(self) -> None:
        with pytest.raises(LexError, match="did you mean"):
            tokenize("a.b")

    def test_unknown_character_is_an_error(self) -> None:
        with pytest.raises(LexError, match="Unexpected character"):
            tokenize("type User ~")


class TestNames:
    @pytest.mark.parametrize("name", ["User", "_private", "id2", "snake_case", "type"])
    def test_name(self, name: str) -> None:
        tok = single(name)
        assert tok.type is TokenType.NAME
        assert tok.value == name

    def test_field_definition_sequence(self) -> None:
        assert types_of(tokenize("posts(first: Int = 10): [Post!]!")) == [
            TokenType.NAME, TokenType.LPAREN, TokenType.NAME, TokenType.COLON,
            TokenType.NAME, TokenType.EQUALS, TokenType.INT, TokenType.RPAREN,
            TokenType.COLON, TokenType.LBRACKET, TokenType.NAME, TokenType.BANG,
            TokenType.RBRACKET, TokenType.BANG,
        ]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestNumbers:
    @pytest.mark.parametrize("source", ["0", "42", "-7"])
    def test_int(self, source: str) -> None:
        tok = single(source)
        assert tok.type is TokenType.INT
        assert tok.value == source

    @pytest.mark.parametrize("source", ["1.5", "-0.25", "1e10", "6.02E+23", "2e-3"])
    def test_float(self, source: str) -> None:
        tok = single(source)
        assert tok.type is TokenType.FLOAT
        assert tok.value == source

    @pytest.mark.parametrize("source", ["01", "1.", "1.x", "12abc", "-", "1e"])
    def test_invalid_number(self, source: str) -> None:
        with pytest.raises(LexError, match="Invalid number"):
            tokenize(source)


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


class TestStrings:
    def test_simple_string(self) -> None:
        tok = single('"com.example"')
        assert tok.type is TokenType.STRING
        assert tok.value == "com.example"

    @pytest.mark.parametrize("source, expected", [
        (r'"a\"b"', 'a"b'),
        (r'"a\\b"', "a\\b"),
        (r'"a\/b"', "a/b"),
        (r'"tab\there"', "tab\there"),
        (r'"line\nbreak"', "line\nbreak"),
        (r'"été"', "été"),
    ])
    def test_escapes(self, source: str, expected: str) -> None:
        assert single(source).value == expected

    def test_invalid_escape(self) -> None:
        with pytest.raises(LexError, match="Invalid escape"):
            tokenize(r'"\q"')

    def test_invalid_unicode_escape(self) -> None:
        with pytest.raises(LexError, match="Invalid unicode escape"):
            tokenize(r'"\u12G4"')

    def test_newline_in_string_is_an_error(self) -> None:
        with pytest.raises(LexError, match="newline"):
            tokenize('"abc\ndef"')

    def test_unterminated_string_at_eof(self) -> None:
        with pytest.raises(LexError, match="EOF"):
            tokenize('"abc')

    def test_block_string_is_dedented(self) -> None:
        tok = single('"""\n    A user.\n      Indented.\n"""')
        assert tok.type is TokenType.BLOCK_STRING
        assert tok.value == "A user.\n  Indented."

    def test_block_string_escaped_triple_quote(self) -> None:
        assert single('"""say \\""" please"""').value == 'say """ please'

    def test_unterminated_block_string(self) -> None:
        with pytest.raises(LexError, match="block string"):
            tokenize('"""never closed')


class TestDedentBlockString:
    def test_first_line_keeps_its_text(self) -> None:
        assert dedent_block_string("Hello\n    world") == "Hello\nworld"

    def test_blank_edges_are_removed(self) -> None:
        assert dedent_block_string("\n\n  text\n  \n") == "text"

    def test_whitespace_only_lines_do_not_count_for_indent(self) -> None:
        assert dedent_block_string("\n    a\n  \n    b") == "a\n\nb"


# ---------------------------------------------------------------------------
# Positions and errors
# ---------------------------------------------------------------------------


class TestPositions:
    def test_line_and_column_tracking(self) -> None:
        tokens = tokenize("type User {\n  id: ID!\n}")
        id_tok = next(t for t in tokens if t.value == "id")
        assert (id_tok.line, id_tok.col) == (2, 3)

    def test_offsets_span_the_token_text(self) -> None:
        source = "type User"
        user = tokenize(source)[1]
        assert source[user.offset:user.end] == "User"

    def test_eof_token_position(self) -> None:
        tokens = tokenize("a\nb")
        assert tokens[-1].type is TokenType.EOF
        assert tokens[-1].line == 2


class TestLexErrors:
    def test_lex_error_is_a_schema_syntax_error(self) -> None:
        assert issubclass(LexError, SchemaSyntaxError)

    def test_error_carries_locator_and_position(self) -> None:
        with pytest.raises(LexError) as excinfo:
            Lexer("type\n  ~", locator="user.graphql").tokenize()
        error = excinfo.value
        assert error.location == "user.graphql:[2, 3]"
        assert error.offset == 7
        assert error.code == "APG001"

    def test_error_without_locator(self) -> None:
        with pytest.raises(LexError) as excinfo:
            tokenize("~")
        assert excinfo.value.location == "<unknown>:[1, 1]"
