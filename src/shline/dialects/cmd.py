"""
Windows cmd.exe dialect.

cmd has no literal-string syntax: double quotes stop word splitting but %VAR%
is still substituted inside them, so strong quoting has to break percent
signs out of the quoted string.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from shline.core.quoting import QuotingFunctions, create_shell_command_line

if TYPE_CHECKING:
    from shline.core.commandline import CommandLineOptions

PATTERN = re.compile(r"cmd(\.exe)?$", re.IGNORECASE)
EXEC_ARGS = ("/c",)
SEPARATOR = " && "

_METACHARACTERS = re.compile(r'[%&\\<>^|"]')
_WHITESPACE = re.compile(r"\s+")
_TRAILING_BACKSLASHES = re.compile(r"\\+\Z")
_LINE_BREAK = re.compile(r"\r?\n")


def escape(arg: str) -> str:
    arg = _METACHARACTERS.sub(lambda m: "^" + m.group(0), arg)
    # Whitespace cannot be escaped with ^, only quoted
    return _WHITESPACE.sub(lambda m: '"' + m.group(0) + '"', arg)


def weak(arg: str) -> str:
    arg = arg.replace('"', '\\"')
    arg = _TRAILING_BACKSLASHES.sub(lambda m: m.group(0) * 2, arg)
    return _LINE_BREAK.sub(lambda m: "^" + m.group(0), '"' + arg + '"')


def strong(arg: str) -> str:
    """Weak quoting with every % moved outside the quotes as "%"."""
    return weak(arg).replace("%", '"%"')


QUOTING = QuotingFunctions(escape=escape, strong=strong, weak=weak)


def wrap_in_subshell(statements: list[str]) -> str:
    """Nest statements in one ``cmd /C "..."`` so ``set`` only lives for them."""
    return 'cmd /C "' + SEPARATOR.join(statements) + '"'


def build(options: CommandLineOptions) -> str:
    """Render cd, set and the invocation as one cmd line."""
    statements = []
    if options.cwd:
        statements.append(f"cd {strong(options.cwd)}")

    invocation = create_shell_command_line(options.args, QUOTING)
    if options.env:
        scoped = []
        for key, value in options.env.items():
            if value is None:
                # `set "NAME="` clears the variable
                scoped.append(f"set {strong(f'{key}=')}")
            else:
                scoped.append(f"set {strong(f'{key}={value}')}")
        scoped.append(invocation)
        statements.append(wrap_in_subshell(scoped))
    else:
        statements.append(invocation)

    return SEPARATOR.join(statements)
