"""SDL grammar vocabulary.

Exports the token types and the ``Token`` dataclass shared by the lexer
and the parser.
"""
from __future__ import annotations

from apigen.grammar.tokens import DEFINITION_KEYWORDS, PUNCTUATORS, Token, TokenType

__all__ = ["Token", "TokenType", "PUNCTUATORS", "DEFINITION_KEYWORDS"]
