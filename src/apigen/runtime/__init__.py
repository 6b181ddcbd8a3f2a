"""Runtime support imported by generated modules."""
from __future__ import annotations

from apigen.runtime.resolvers import FieldResolver, ResolutionContext, Resolver

__all__ = ["Resolver", "FieldResolver", "ResolutionContext"]
