"""
PowerShell dialect (Windows PowerShell and pwsh).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from shline.core.quoting import QuotingFunctions, create_shell_command_line

if TYPE_CHECKING:
    from shline.core.commandline import CommandLineOptions

PATTERN = re.compile(r"(ps|pwsh|powershell)(\.exe)?$", re.IGNORECASE)
EXEC_ARGS = ("-c",)
SEPARATOR = "; "

_METACHARACTERS = re.compile(r"""[`|{}()<>;"' ]""")
_TRAILING_BACKTICKS = re.compile(r"`+\Z")


def escape(arg: str) -> str:
    return _METACHARACTERS.sub(lambda m: "`" + m.group(0), arg)


def strong(arg: str) -> str:
    # '' is the only escape inside a single-quoted string
    return "'" + arg.replace("'", "''") + "'"


def weak(arg: str) -> str:
    arg = arg.replace('`"', '``"')
    arg = arg.replace('"', '`"')
    arg = _TRAILING_BACKTICKS.sub(lambda m: m.group(0) * 2, arg)
    return '"' + arg + '"'


QUOTING = QuotingFunctions(escape=escape, strong=strong, weak=weak)


def env_variable(name: str) -> str:
    """Return the ``${env:...}`` expression for a variable name.

    The name is parsed once by the brace syntax and once more as an
    environment provider path where ` and ? are wildcard-significant, so
    backticks are quadrupled and ? gets a doubled backtick.
    """
    quoted = name.replace("`", "````").replace("?", "``?")
    return "${env:" + quoted + "}"


def build(options: CommandLineOptions) -> str:
    """Render cd, env assignments and the invocation as one PowerShell line."""
    statements = []
    if options.cwd:
        statements.append(f"cd {strong(options.cwd)}")

    for key, value in (options.env or {}).items():
        if value is None:
            # Assigning $null removes the variable from the process environment
            statements.append(f"{env_variable(key)}=$null")
        else:
            statements.append(f"{env_variable(key)}={strong(value)}")

    statements.append("& " + create_shell_command_line(options.args, QUOTING))
    return SEPARATOR.join(statements)
