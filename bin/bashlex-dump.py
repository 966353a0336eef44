#!/usr/bin/env python3
"""
Debug helper: build a bash line with shline and dump its bashlex AST.

Usage:
    python bin/bashlex-dump.py CWD ARG [ARG ...]

Shows the generated line and how bash will split it into words, which is
useful when changing the bash quoting rules.
"""

import sys

try:
    import bashlex
except ImportError:
    print("Error: bashlex not installed. Run: pip install bashlex")
    sys.exit(1)

from shline import CommandLineOptions, Dialect, build_command_line


def dump_node(node, indent=0):
    """Recursively dump a bashlex AST node."""
    prefix = "  " * indent

    if hasattr(node, "kind"):
        print(f"{prefix}kind: {node.kind}")

    if hasattr(node, "word"):
        print(f"{prefix}word: {node.word!r}")

    if hasattr(node, "op"):
        print(f"{prefix}op: {node.op!r}")

    if hasattr(node, "parts"):
        print(f"{prefix}parts:")
        for part in node.parts:
            dump_node(part, indent + 1)


def main():
    if len(sys.argv) < 3:
        print("Usage: bashlex-dump.py CWD ARG [ARG ...]")
        print("Example: bashlex-dump.py /tmp echo \"it's a 'test'\"")
        sys.exit(1)

    options = CommandLineOptions(cwd=sys.argv[1], args=sys.argv[2:])
    line = build_command_line(Dialect.BASH, options)
    print(f"Line: {line}")
    print("-" * 40)

    try:
        parts = bashlex.parse(line)
        for i, part in enumerate(parts):
            print(f"Part {i}:")
            dump_node(part, 1)
            print()
    except bashlex.errors.ParsingError as e:
        print(f"Parse error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
