#!/usr/bin/env python3
"""Example: Reference schemas across two builds

A shared project publishes its schema files; a downstream project
resolves against them without regenerating the shared types.

Usage:
    python examples/02_reference_schemas.py

Requirements:
    pip install graphql-apigen
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from apigen.compiler import MemorySink
from apigen.config import ApigenConfig
from apigen.pipeline import run

SHARED = 'type User @java(package: "shared.users") {\n  id: ID!\n  name: String\n}\n'
DOWNSTREAM = "type Comment {\n  text: String!\n  author: User!\n}\n"


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "shared" / "schema").mkdir(parents=True)
        (root / "shared" / "schema" / "user.graphql").write_text(SHARED, encoding="utf-8")
        (root / "comments" / "schema").mkdir(parents=True)
        (root / "comments" / "schema" / "comment.graphql").write_text(DOWNSTREAM, encoding="utf-8")

        # Step 1: Build the shared project and publish its schemas
        shared = run(
            ApigenConfig(
                source_directory=root / "shared" / "schema",
                publish_directory=root / "shared" / "build",
            ),
            MemorySink(),
        )
        print(f"shared:   {shared.summary()}")

        # Step 2: Build the downstream project against the published schemas
        comments = run(
            ApigenConfig(
                source_directory=root / "comments" / "schema",
                default_namespace="comments.types",
                reference_paths=(root / "shared" / "build",),
            ),
            MemorySink(),
        )
        print(f"comments: {comments.summary()}")
        for artifact in comments.artifacts:
            print(f"  {artifact.qualified_name}")
            for dep in artifact.dependencies:
                print(f"    imports {dep.type_name} from {dep.import_path} ({dep.origin.name.lower()})")


if __name__ == "__main__":
    main()
