"""SDL Lexer: converts raw schema text into a flat list of tokens.

The lexer is a single-pass character scanner that produces a
``list[Token]`` from an SDL source string.  It tracks line and column
numbers for every token so the parser can produce precise error
messages.

Ignored input:
    - whitespace, line terminators and the unicode BOM
    - commas, which are insignificant in GraphQL
    - ``#`` comments run to end of line and are emitted as COMMENT tokens

String literals are double-quoted and support ``\\"``, ``\\\\``,
``\\/``, ``\\b``, ``\\f``, ``\\n``, ``\\r``, ``\\t`` and ``\\uXXXX``.
Block strings are triple-quoted, may span lines, and have their common
indentation removed.
"""
from __future__ import annotations

import re
from typing import Final

from apigen.core.errors import SchemaSyntaxError
from apigen.grammar.tokens import PUNCTUATORS, Token, TokenType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_NAME_START: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_]")
_NAME_CONT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_]")
_DIGIT: Final[re.Pattern[str]] = re.compile(r"[0-9]")
_HEX4: Final[re.Pattern[str]] = re.compile(r"[0-9A-Fa-f]{4}")

_ESCAPE_MAP: Final[dict[str, str]] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class LexError(SchemaSyntaxError):
    """Raised when the lexer encounters invalid input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    source:
        Locator of the schema resource, if known.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    offset:
        0-based offset in the source where the error occurred.
    """

    def __init__(
        self, message: str, source: str | None, line: int, col: int, offset: int
    ) -> None:
        super().__init__(message, source, line, col)
        self.offset = offset


def dedent_block_string(raw: str) -> str:
    """Apply GraphQL block-string indentation rules to ``raw``.

    Common indentation of every line but the first is removed, then
    leading and trailing blank lines are dropped.
    """
    lines = raw.splitlines()
    common: int | None = None
    for line in lines[1:]:
        indent = len(line) - len(line.lstrip(" \t"))
        if indent < len(line):
            common = indent if common is None else min(common, indent)
    if common:
        lines = [lines[0]] + [line[common:] for line in lines[1:]]
    while lines and not lines[0].strip(" \t"):
        lines.pop(0)
    while lines and not lines[-1].strip(" \t"):
        lines.pop()
    return "\n".join(lines)


class Lexer:
    """Single-pass SDL lexer.

    Parameters
    ----------
    source:
        The complete schema text to tokenize.
    locator:
        Where the text came from; attached to every ``LexError``.
    """

    __slots__ = ("_text", "_locator", "_pos", "_line", "_col", "_tokens", "_token_line", "_token_col")

    def __init__(self, source: str, locator: str | None = None) -> None:
        self._text: str = source
        self._locator: str | None = locator
        self._pos: int = 0
        self._line: int = 1
        self._col: int = 1
        self._tokens: list[Token] = []
        self._token_line: int = 1
        self._token_col: int = 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the complete token list.

        The list always ends with an ``EOF`` token.

        Raises
        ------
        LexError
            On any character that cannot begin a valid token, and on
            unterminated strings.
        """
        while self._pos < len(self._text):
            self._scan_one()
        self._token_line = self._line
        self._token_col = self._col
        self._emit(TokenType.EOF, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _peek(self, offset: int = 1) -> str:
        idx = self._pos + offset
        return self._text[idx] if idx < len(self._text) else ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._text[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, start_offset: int) -> None:
        # line/col are the snapshot taken before scanning began
        self._tokens.append(
            Token(
                type=token_type,
                value=value,
                line=self._token_line,
                col=self._token_col,
                offset=start_offset,
                end=self._pos,
            )
        )

    def _error(self, message: str, start: int) -> LexError:
        return LexError(message, self._locator, self._token_line, self._token_col, start)

    def _scan_one(self) -> None:
        """Scan exactly one token (or skip ignored input)."""
        self._token_line = self._line
        self._token_col = self._col
        start = self._pos
        ch = self._current()

        if ch in (" ", "\t", "\r", "\n", ",", "\ufeff"):
            self._advance()
            return

        if ch == "#":
            self._scan_comment(start)
            return

        if ch == '"':
            if self._peek() == '"' and self._peek(2) == '"':
                self._scan_block_string(start)
            else:
                self._scan_string(start)
            return

        if ch == "-" or _DIGIT.match(ch):
            self._scan_number(start)
            return

        if _NAME_START.match(ch):
            self._scan_name(start)
            return

        if ch == ".":
            if self._peek() == "." and self._peek(2) == ".":
                self._advance()
                self._advance()
                self._advance()
                self._emit(TokenType.SPREAD, "...", start)
                return
            raise self._error("Unexpected '.'; did you mean '...'?", start)

        if ch in PUNCTUATORS:
            self._advance()
            self._emit(PUNCTUATORS[ch], ch, start)
            return

        raise self._error(f"Unexpected character {ch!r}", start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _scan_comment(self, start: int) -> None:
        """Consume a ``#`` comment through the end of the line."""
        self._advance()  # '#'
        text_start = self._pos
        while self._pos < len(self._text) and self._current() not in ("\n", "\r"):
            self._advance()
        self._emit(TokenType.COMMENT, self._text[text_start : self._pos], start)

    def _scan_string(self, start: int) -> None:
        """Consume a double-quoted string literal with escape support."""
        self._advance()  # opening "
        buf: list[str] = []
        while self._pos < len(self._text):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                self._emit(TokenType.STRING, "".join(buf), start)
                return
            if ch in ("\n", "\r"):
                raise self._error("Unterminated string literal (newline in string)", start)
            if ch == "\\":
                self._advance()
                esc = self._current()
                if esc in _ESCAPE_MAP:
                    buf.append(_ESCAPE_MAP[esc])
                    self._advance()
                elif esc == "u":
                    self._advance()
                    digits = self._text[self._pos : self._pos + 4]
                    if not _HEX4.fullmatch(digits):
                        raise self._error(f"Invalid unicode escape \\u{digits}", start)
                    for _ in range(4):
                        self._advance()
                    buf.append(chr(int(digits, 16)))
                else:
                    raise self._error(f"Invalid escape sequence \\{esc}", start)
            else:
                buf.append(self._advance())
        raise self._error("Unterminated string literal (EOF)", start)

    def _scan_block_string(self, start: int) -> None:
        """Consume a ``\"\"\"...\"\"\"`` block string."""
        for _ in range(3):
            self._advance()
        buf: list[str] = []
        while self._pos < len(self._text):
            if self._text.startswith('"""', self._pos):
                for _ in range(3):
                    self._advance()
                self._emit(TokenType.BLOCK_STRING, dedent_block_string("".join(buf)), start)
                return
            if self._text.startswith('\\"""', self._pos):
                for _ in range(4):
                    self._advance()
                buf.append('"""')
                continue
            buf.append(self._advance())
        raise self._error("Unterminated block string (EOF)", start)

    def _scan_number(self, start: int) -> None:
        """Consume an int or float literal."""
        buf: list[str] = []
        is_float = False
        if self._current() == "-":
            buf.append(self._advance())
        if self._current() == "0":
            buf.append(self._advance())
            if _DIGIT.match(self._current()):
                raise self._error("Invalid number, unexpected digit after 0", start)
        else:
            self._read_digits(buf, start)
        if self._current() == ".":
            is_float = True
            buf.append(self._advance())
            self._read_digits(buf, start)
        if self._current() in ("e", "E"):
            is_float = True
            buf.append(self._advance())
            if self._current() in ("+", "-"):
                buf.append(self._advance())
            self._read_digits(buf, start)
        ch = self._current()
        if ch == "." or _NAME_START.match(ch):
            raise self._error(f"Invalid number, unexpected character {ch!r}", start)
        self._emit(TokenType.FLOAT if is_float else TokenType.INT, "".join(buf), start)

    def _read_digits(self, buf: list[str], start: int) -> None:
        if not _DIGIT.match(self._current()):
            raise self._error(f"Invalid number, expected digit but got {self._current()!r}", start)
        while _DIGIT.match(self._current()):
            buf.append(self._advance())

    def _scan_name(self, start: int) -> None:
        buf: list[str] = []
        while self._pos < len(self._text) and _NAME_CONT.match(self._current()):
            buf.append(self._advance())
        self._emit(TokenType.NAME, "".join(buf), start)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str, locator: str | None = None) -> list[Token]:
    """Tokenize SDL text and return the complete token list.

    Parameters
    ----------
    source:
        Schema text.
    locator:
        Optional name of the resource, used in error messages.

    Returns
    -------
    list[Token]
        All tokens including COMMENT tokens, terminated by EOF.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.

    Example
    -------
    ::

        from apigen.lexer import tokenize
        tokens = tokenize("type User { id: ID! }")
    """
    return Lexer(source, locator).tokenize()
