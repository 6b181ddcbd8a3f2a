"""SDL Lexer module.

Exports the ``Lexer`` class and the ``tokenize`` convenience function.
"""
from __future__ import annotations

from apigen.lexer.lexer import LexError, Lexer, dedent_block_string, tokenize

__all__ = ["Lexer", "tokenize", "LexError", "dedent_block_string"]
