"""Resolver contracts implemented by application code for generated types.

Generated modules declare abstract subclasses of these contracts; an
application supplies the concrete implementations.

``Resolver``
    Batch identity lookup.  Receives a list of partially populated
    instances (typically only ``id`` is set) and returns the fully
    resolved instances in the same order, which leaves room for
    batching and caching.
``FieldResolver``
    Computes the value of one field that takes arguments, given the
    resolution context of that field.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResolutionContext:
    """Everything a ``FieldResolver`` knows about the field being resolved.

    Parameters
    ----------
    source:
        The parent object the field belongs to.
    arguments:
        Field arguments by name, after defaults were applied.
    context:
        Request-scoped application state, e.g. the current user.
    """

    source: Any
    arguments: Mapping[str, Any] = field(default_factory=dict)
    context: Any = None


class Resolver(ABC, Generic[T]):
    """Resolve a batch of identity references into full instances."""

    @abstractmethod
    def resolve(self, unresolved: list[T]) -> list[T]:
        """Return one resolved instance per element of ``unresolved``."""


class FieldResolver(ABC, Generic[T]):
    """Resolve a single computed field value."""

    @abstractmethod
    def resolve(self, env: ResolutionContext) -> T:
        """Return the field value for ``env``."""
