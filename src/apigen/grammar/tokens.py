"""Token definitions for the GraphQL schema definition language.

Defines the token vocabulary used by the SDL lexer.  Every punctuator
and literal kind is represented as a member of the ``TokenType`` enum,
and every scanned token is represented by a ``Token`` dataclass that
carries its type, decoded text, and source position.

GraphQL has no reserved words: ``type``, ``enum`` and friends are plain
names that only carry meaning at the start of a definition.  The
``DEFINITION_KEYWORDS`` set lists them so the parser can find
synchronization points after an error.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Exhaustive enumeration of all SDL token types."""

    # -----------------------------------------------------------------
    # Punctuators
    # -----------------------------------------------------------------
    BANG = auto()        # !
    DOLLAR = auto()      # $
    AMP = auto()         # &
    LPAREN = auto()      # (
    RPAREN = auto()      # )
    SPREAD = auto()      # ...
    COLON = auto()       # :
    EQUALS = auto()      # =
    AT = auto()          # @
    LBRACKET = auto()    # [
    RBRACKET = auto()    # ]
    LBRACE = auto()      # {
    PIPE = auto()        # |
    RBRACE = auto()      # }

    # -----------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------
    NAME = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    BLOCK_STRING = auto()

    # -----------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------
    COMMENT = auto()
    EOF = auto()


PUNCTUATORS: dict[str, TokenType] = {
    "!": TokenType.BANG,
    "$": TokenType.DOLLAR,
    "&": TokenType.AMP,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    "@": TokenType.AT,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "|": TokenType.PIPE,
    "}": TokenType.RBRACE,
}

# Names that open a top-level definition.
DEFINITION_KEYWORDS: frozenset[str] = frozenset({
    "schema",
    "scalar",
    "type",
    "interface",
    "union",
    "enum",
    "input",
    "directive",
    "extend",
})


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The token text.  For string tokens this is the decoded value
        without quotes.
    line:
        1-based line number in the source text.
    col:
        1-based column number of the first character of the token.
    offset:
        0-based character offset from the start of the source string.
    end:
        0-based offset one past the last character of the token.
    """

    type: TokenType
    value: str
    line: int
    col: int
    offset: int
    end: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"

    @property
    def is_string(self) -> bool:
        """Return True for both quoted and block string tokens."""
        return self.type in (TokenType.STRING, TokenType.BLOCK_STRING)

    def is_name(self, *values: str) -> bool:
        """Return True if this is a NAME token, optionally one of ``values``."""
        if self.type is not TokenType.NAME:
            return False
        return not values or self.value in values
