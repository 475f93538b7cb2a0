#!/usr/bin/env python3
"""Example: Policy documents

Loads a YAML policy document with several permission groups and
compiles one graph per group.

Usage:
    python examples/02_policy_document.py

Requirements:
    pip install permission-graph
"""
from __future__ import annotations

from permission_graph import PolicyLoader, format_path, paths_from_graph

POLICY = """\
version: "1"
compiler:
  on_error: skip
groups:
  administrators:
    - "/"
  analysts:
    - "/db/1/schema/"
    - "/db/1/schema/PUBLIC/table/4/read/"
    - "/download/db/1/native/"
  restricted:
    - "/block/db/1/"
    - "/collection/root/read/"
"""


def main() -> None:
    document = PolicyLoader().load_string(POLICY)
    for group, result in document.compile().items():
        print(f"{group}:")
        for path in paths_from_graph(result.graph):
            print(f"  {format_path(path)}")


if __name__ == "__main__":
    main()
