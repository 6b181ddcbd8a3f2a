#!/usr/bin/env python3
"""Example: Quickstart for graphql-apigen

Generate Python modules for a small schema in memory and print the
module written for each type.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install graphql-apigen
"""
from __future__ import annotations

import apigen
from apigen.compiler import MemorySink

SCHEMA = '''
"""Somebody who writes posts."""
type Author @java(package: "blog.model") {
  id: ID!
  name: String!
  posts(first: Int = 10): [Post!]!
}

type Post @java(package: "blog.model") {
  id: ID!
  title: String!
  author: Author!
  status: Status!
}

enum Status {
  DRAFT
  PUBLISHED
}
'''


def main() -> None:
    print(f"graphql-apigen version: {apigen.__version__}")

    # Step 1: Generate every type of the schema into memory
    sink = MemorySink()
    result = apigen.generate(
        {"blog.graphql": SCHEMA},
        default_namespace="blog.types",
        injection_module="blog.bindings",
        sink=sink,
    )
    print(result.summary())

    # Step 2: Show where each module goes and what it depends on
    for artifact in result.artifacts:
        deps = ", ".join(d.type_name for d in artifact.dependencies) or "-"
        contracts = ", ".join(sorted(c.name for c in artifact.contracts)) or "-"
        print(f"  {artifact.relative_path:<28} deps: {deps:<16} contracts: {contracts}")

    # Step 3: Print one generated module
    print()
    print(sink.get("blog.model", "Author"))


if __name__ == "__main__":
    main()
