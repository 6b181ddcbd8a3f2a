"""Namespace resolution from definition directives.

A type definition may carry a customization directive that moves its
generated module into another namespace::

    type User @java(package: "com.example.model") {
      id: ID!
    }

Only the **first** directive of a definition is ever examined.  If it
is not ``@java``, or it lacks a ``package`` argument, the default
namespace is used even when a later directive would supply one.
Generated layouts of existing schemas depend on this rule.
"""
from __future__ import annotations

from collections.abc import Sequence

from apigen.ast.nodes import Directive, StringValue
from apigen.core.errors import DirectiveValueError

CUSTOMIZATION_DIRECTIVE = "java"
NAMESPACE_ARGUMENT = "package"


def resolve_namespace(
    directives: Sequence[Directive],
    default: str,
    location: str = "<unknown>",
) -> str:
    """Return the effective namespace for a definition.

    Parameters
    ----------
    directives:
        The definition's directives in declaration order.
    default:
        Namespace used when no override applies.
    location:
        Rendered source location, used in error messages.

    Returns
    -------
    str
        The ``package`` argument of a leading ``@java`` directive, else
        ``default``.

    Raises
    ------
    DirectiveValueError
        If the ``package`` argument is not a string literal.
    """
    for directive in directives:
        if directive.name == CUSTOMIZATION_DIRECTIVE:
            for argument in directive.arguments:
                if argument.name == NAMESPACE_ARGUMENT:
                    return _string_literal(directive, argument.name, argument.value, location)
        break
    return default


def _string_literal(directive: Directive, argument: str, value: object, location: str) -> str:
    if not isinstance(value, StringValue):
        raise DirectiveValueError(
            directive.name,
            argument,
            location,
            f"expected a string literal, got {type(value).__name__}",
        )
    return value.value
