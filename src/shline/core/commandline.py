"""
Command line construction for long-lived shells.

The target shell is already running, so a fresh process with a clean
environment is not an option: the working directory and environment changes
are encoded into the command line written to the shell's input.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

import structlog

from shline.core.quoting import ShellQuotedString, create_shell_command_line
from shline.dialects import Dialect, detect_dialect, get_handler, quoting_for

log = structlog.get_logger()


class InvalidCommandError(ValueError):
    """Command options that cannot be turned into a command line."""


class ProcessInfo(Protocol):
    """The running shell process, as far as quoting is concerned."""

    executable: str | None


Arg = str | ShellQuotedString


@dataclass(frozen=True)
class CommandLineOptions:
    """What to run: working directory, argv and an environment patch.

    ``env`` maps names to values; ``None`` removes the variable. Order is
    kept in the generated line.
    """

    cwd: str = ""
    args: Sequence[Arg] = ()
    env: Mapping[str, str | None] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.cwd is None:
            object.__setattr__(self, "cwd", "")
        if not isinstance(self.cwd, str):
            raise InvalidCommandError(f"cwd must be a string, got {type(self.cwd).__name__}")
        if isinstance(self.args, (str, bytes)) or not isinstance(self.args, Sequence):
            raise InvalidCommandError("args must be a sequence of strings")
        for arg in self.args:
            if not isinstance(arg, (str, ShellQuotedString)):
                raise InvalidCommandError(f"argument {arg!r} is not a string")
        object.__setattr__(self, "args", tuple(self.args))
        if self.env is not None:
            if not isinstance(self.env, Mapping):
                raise InvalidCommandError("env must be a mapping")
            for key, value in self.env.items():
                if not isinstance(key, str) or not key:
                    raise InvalidCommandError(f"invalid environment variable name {key!r}")
                if value is not None and not isinstance(value, str):
                    raise InvalidCommandError(
                        f"environment value for {key!r} must be a string or null"
                    )
            object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CommandLineOptions:
        """Build options from decoded JSON ({"cwd", "args", "env"})."""
        if not isinstance(data, Mapping):
            raise InvalidCommandError("command must be an object")
        return cls(cwd=data.get("cwd") or "", args=data.get("args") or (), env=data.get("env"))


def _plain(arg: Arg) -> str:
    return arg.value if isinstance(arg, ShellQuotedString) else arg


def build_command_line(
    dialect: Dialect, options: CommandLineOptions, executable: str | None = None
) -> str:
    """Render options as one line for the given dialect.

    UNKNOWN cannot be quoted safely: the arguments are joined with spaces
    as they are, cwd/env are dropped and an ``unknown_shell`` warning is
    logged.
    """
    handler = get_handler(dialect)
    if handler is None:
        log.warning(
            "unknown_shell",
            executable=executable or "undefined",
            reason="could not escape arguments",
        )
        return " ".join(_plain(arg) for arg in options.args)
    line = handler.build(options)
    log.debug("command_line_built", dialect=dialect.value, line=line)
    return line


def prepare_command_line(
    process: ProcessInfo | str | None, options: CommandLineOptions
) -> str:
    """Build the line to write into an already running shell.

    ``process`` is the shell process (anything with an ``executable``), its
    executable path, or None when the shell is not known yet.
    """
    executable = process if isinstance(process, str) or process is None else process.executable
    return build_command_line(detect_dialect(executable), options, executable)


# === Shell tasks ===


def is_windows() -> bool:
    return platform.system() == "Windows"


def default_shell() -> str:
    """The shell used when a task does not name one."""
    if is_windows():
        return os.environ.get("COMSPEC", "cmd.exe")
    return os.environ.get("SHELL", "/bin/sh")


@dataclass(frozen=True)
class ShellInvocation:
    """A fresh shell process running one command string."""

    executable: str
    args: tuple[str, ...]
    cwd: str


def shell_task_invocation(
    command: str | None,
    args: Sequence[Arg] | None = None,
    *,
    cwd: str | None,
    shell: str | None = None,
    shell_args: Sequence[str] | None = None,
) -> ShellInvocation:
    """Run ``command`` with ``args`` through a new shell process.

    The command and its arguments are quoted for the shell and passed as a
    single argument after the shell's own arguments (``-l -c`` for bash,
    ``/c`` for cmd, ``-c`` for PowerShell unless ``shell_args`` is given).
    Raises InvalidCommandError when cwd or command is missing.
    """
    if not cwd:
        raise InvalidCommandError("can't run a task when 'cwd' is not provided")
    if command is None:
        raise InvalidCommandError("the 'command' of a task cannot be undefined")

    executable = shell or default_shell()
    dialect = detect_dialect(executable)
    handler = get_handler(dialect)
    exec_args = handler.EXEC_ARGS if handler is not None else ()
    argv = list(shell_args if shell_args is not None else exec_args)

    if args:
        argv.append(create_shell_command_line([command, *args], quoting_for(dialect)))
    else:
        argv.append(command)
    return ShellInvocation(executable=executable, args=tuple(argv), cwd=cwd)
