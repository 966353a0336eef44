"""
shline - Command lines for long-lived shells.

Quotes a command, its working directory and environment changes into one
line that an already running bash, cmd or PowerShell session can execute.
"""

from __future__ import annotations

__version__ = "0.1.0"

from shline.core.commandline import (
    CommandLineOptions,
    InvalidCommandError,
    build_command_line,
    prepare_command_line,
    shell_task_invocation,
)
from shline.core.quoting import (
    QuotingFunctions,
    ShellQuotedString,
    ShellQuoting,
    create_shell_command_line,
    escape_for_shell,
)
from shline.dialects import Dialect, detect_dialect, quoting_for

__all__ = [
    "CommandLineOptions",
    "Dialect",
    "InvalidCommandError",
    "QuotingFunctions",
    "ShellQuotedString",
    "ShellQuoting",
    "build_command_line",
    "create_shell_command_line",
    "detect_dialect",
    "escape_for_shell",
    "prepare_command_line",
    "quoting_for",
    "shell_task_invocation",
    "__version__",
]
