"""SDL Parser module.

Exports the ``Parser`` class, the ``parse`` convenience function, and
parse error types.
"""
from __future__ import annotations

from apigen.parser.errors import ParseError, ParseErrorCollection
from apigen.parser.parser import Parser, parse

__all__ = [
    "Parser",
    "parse",
    "ParseError",
    "ParseErrorCollection",
]
