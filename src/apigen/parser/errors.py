"""Parse error types for the SDL parser.

All parse errors carry source-location information so that the CLI can
display precise, actionable error messages.  Both types are
``SchemaSyntaxError`` subclasses, so callers that only care whether a
resource parsed can catch that one base class.
"""
from __future__ import annotations

from apigen.core.errors import SchemaSyntaxError
from apigen.grammar.tokens import Token, TokenType


class ParseError(SchemaSyntaxError):
    """A single parse error with location and expectation details.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    source:
        Locator of the schema resource, if known.
    found:
        The token that was encountered.
    expected:
        What token types were expected at this position.
    """

    def __init__(
        self,
        message: str,
        source: str | None,
        found: Token,
        expected: tuple[TokenType, ...] = (),
    ) -> None:
        super().__init__(message, source, found.line, found.col)
        self.found = found
        self.expected = expected

    def __str__(self) -> str:
        if self.found.type is TokenType.EOF:
            return f"ParseError at {self.location}: {self.message} (found end of input)"
        return (
            f"ParseError at {self.location}: {self.message} "
            f"(found {self.found.type.name} {self.found.value!r})"
        )


class ParseErrorCollection(SchemaSyntaxError):
    """Aggregates every ``ParseError`` from a single parse run.

    The parser continues past errors by synchronizing on the next
    top-level definition and collects them all rather than aborting at
    the first problem.  The collection itself reports the location of
    the first error.

    Parameters
    ----------
    errors:
        Ordered, non-empty list of errors encountered during parsing.
    """

    def __init__(self, errors: list[ParseError]) -> None:
        first = errors[0]
        super().__init__(
            f"{len(errors)} syntax error(s); first: {first.message}",
            first.source,
            first.line,
            first.col,
        )
        self.errors = list(errors)

    def __str__(self) -> str:
        lines = [f"ParseErrorCollection ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
