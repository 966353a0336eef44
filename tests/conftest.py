"""
Shared test fixtures for shline tests.
"""

from __future__ import annotations

import shutil
import subprocess
import sys

import pytest
import structlog

from shline.core.commandline import CommandLineOptions

# Prints the named variable as [value], or [None] when it is not set
PRINT_ENV = "import os, sys; print('[' + str(os.environ.get(sys.argv[1])) + ']')"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration done by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def options():
    """Factory for CommandLineOptions with keyword defaults."""

    def _make(*args: str, cwd: str = "", env=None) -> CommandLineOptions:
        return CommandLineOptions(cwd=cwd, args=list(args), env=env)

    return _make


def bash_words(line: str) -> list[list[str]]:
    """Split a bash line into the argv of each simple command.

    bashlex finds the command boundaries; bash itself performs quote removal,
    by printing each command's words NUL-separated.
    """
    bashlex = pytest.importorskip("bashlex")
    bash = find_shell("bash") if sys.platform != "win32" else None
    if bash is None:
        pytest.skip("bash not available")

    spans: list[str] = []

    def walk(node) -> None:
        if node.kind == "command":
            start, end = node.pos
            spans.append(line[start:end])
            return
        for child in getattr(node, "list", None) or getattr(node, "parts", None) or []:
            walk(child)

    for part in bashlex.parse(line):
        walk(part)

    commands = []
    for span in spans:
        result = subprocess.run(
            [bash, "--noprofile", "--norc", "-c", "printf '%s\\0' " + span],
            capture_output=True,
            check=True,
            timeout=60,
        )
        commands.append([w.decode() for w in result.stdout.split(b"\0")[:-1]])
    return commands


def find_shell(*names: str) -> str | None:
    """First of names found on PATH."""
    for name in names:
        path = shutil.which(name)
        if path:
            return path
    return None


SHELL_ARGS = {
    "bash": ["--noprofile", "--norc"],
    "powershell": ["-NoLogo", "-NoProfile", "-NonInteractive", "-Command", "-"],
    "cmd": ["/Q"],
}


def run_in_shell(shell: str, kind: str, line: str, env: dict | None = None) -> str:
    """Write line into a fresh shell's stdin, as a terminal would, and return stdout."""
    # PowerShell reading from stdin only runs a statement after an extra newline
    submit = "\n\n" if kind == "powershell" else "\n"
    result = subprocess.run(
        [shell, *SHELL_ARGS[kind]],
        input=line + submit,
        capture_output=True,
        text=True,
        timeout=60,
        env=env,
    )
    return result.stdout


PYTHON = sys.executable
