"""
Bash dialect.

Environment changes go through a single ``env`` invocation so they only
affect the command being run, never the long-lived shell itself.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from shline.core.quoting import QuotingFunctions, create_shell_command_line

if TYPE_CHECKING:
    from shline.core.commandline import CommandLineOptions

PATTERN = re.compile(r"bash(\.exe)?$")
EXEC_ARGS = ("-l", "-c")
SEPARATOR = " && "

_METACHARACTERS = re.compile(r"""[\s\\|(){}<>$&;"']""")
_SINGLE_QUOTES = re.compile(r"'+")
_TRAILING_BACKSLASHES = re.compile(r"\\+\Z")


def escape(arg: str) -> str:
    return _METACHARACTERS.sub(lambda m: "\\" + m.group(0), arg)


def strong(arg: str) -> str:
    """Single-quote, splicing runs of embedded quotes as '"''"'."""
    return "'" + _SINGLE_QUOTES.sub(lambda m: "'\"" + m.group(0) + "\"'", arg) + "'"


def weak(arg: str) -> str:
    """Double-quote, leaving $ and backticks live."""
    # An already escaped quote needs its backslash escaped too
    arg = arg.replace('\\"', '\\\\"')
    arg = arg.replace('"', '\\"')
    # A trailing backslash would swallow the closing quote
    arg = _TRAILING_BACKSLASHES.sub(lambda m: m.group(0) * 2, arg)
    return '"' + arg + '"'


QUOTING = QuotingFunctions(escape=escape, strong=strong, weak=weak)


def build(options: CommandLineOptions) -> str:
    """Render cd, env and the invocation as one bash line."""
    statements = []
    if options.cwd:
        statements.append(f"cd {strong(options.cwd)}")

    words = []
    if options.env:
        words.append("env")
        for key, value in options.env.items():
            if value is None:
                words.extend(("-u", strong(key)))
            else:
                words.append(strong(f"{key}={value}"))
    words.append(create_shell_command_line(options.args, QUOTING))
    statements.append(" ".join(words))

    return SEPARATOR.join(statements)
