#!/usr/bin/env python3
"""Reject stdlib quoting helpers in the shline source tree.

shline owns quoting for every dialect it supports. The stdlib helpers below
look like drop-in replacements but target different parsers, so a stray use
would silently produce lines a live shell splits differently.

    Helper                   Quotes for                     Use instead
    -----------------------  -----------------------------  --------------------------
    shlex (any import)       POSIX sh words only            shline.dialects.bash
    subprocess.list2cmdline  MSVCRT argv parsing, not cmd   shline.dialects.cmd

Usage: check_style.py [SRC_DIR]   (defaults to ./src; exits 1 on violations)
"""

import ast
import os
import sys

QUOTING_MODULES = frozenset({"shlex"})
QUOTING_ATTRIBUTES = frozenset({("subprocess", "list2cmdline")})


def find_python_files(directory):
    """Sorted paths of every .py file below directory."""
    return sorted(
        os.path.join(root, name)
        for root, _dirs, names in os.walk(directory)
        for name in names
        if name.endswith(".py")
    )


def _violations(node):
    if isinstance(node, ast.Import):
        for alias in node.names:
            if alias.name in QUOTING_MODULES:
                yield f"import {alias.name}: use the shline.dialects quoters"
    elif isinstance(node, ast.ImportFrom):
        if node.module in QUOTING_MODULES:
            yield f"from {node.module} import: use the shline.dialects quoters"
        for alias in node.names:
            if (node.module, alias.name) in QUOTING_ATTRIBUTES:
                yield f"{node.module}.{alias.name}: use shline.dialects.cmd"
    elif isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name):
        if (node.value.id, node.attr) in QUOTING_ATTRIBUTES:
            yield f"{node.value.id}.{node.attr}: use shline.dialects.cmd"


def check_file(filepath):
    """Return (lineno, message) for each stdlib quoting helper used in filepath."""
    with open(filepath) as f:
        tree = ast.parse(f.read(), filepath)
    return [
        (getattr(node, "lineno", 0), message)
        for node in ast.walk(tree)
        for message in _violations(node)
    ]


def main():
    src_dir = sys.argv[1] if len(sys.argv) > 1 else "src"
    if not os.path.isdir(src_dir):
        print(f"Directory not found: {src_dir}")
        sys.exit(1)

    files = find_python_files(src_dir)
    if not files:
        print(f"No Python files found in: {src_dir}")
        sys.exit(1)

    found = []
    for filepath in files:
        try:
            found.extend((filepath, lineno, message) for lineno, message in check_file(filepath))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            sys.exit(1)

    if found:
        print(f"{len(found)} stdlib quoting helper(s) in {src_dir}:")
        for filepath, lineno, message in sorted(found):
            print(f"  {filepath}:{lineno}: {message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
