"""Schema resource discovery and publishing."""
from __future__ import annotations

from apigen.discovery.scanner import (
    REFERENCE_DIRECTORY,
    SCHEMA_SUFFIXES,
    SchemaResource,
    find_reference_schemas,
    find_schemas,
    publish_schemas,
    unreadable_resource,
)

__all__ = [
    "SchemaResource",
    "find_schemas",
    "find_reference_schemas",
    "publish_schemas",
    "unreadable_resource",
    "REFERENCE_DIRECTORY",
    "SCHEMA_SUFFIXES",
]
