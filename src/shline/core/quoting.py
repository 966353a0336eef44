"""Shell quoting primitives shared by every dialect.

A token is rendered in one of three modes:

    Mode     Effect                                   Example (bash)
    -------  ---------------------------------------  ----------------
    escape   prefix metacharacters, stay word-split   a\\ b
    strong   literal string, no expansion at all      'a b'
    weak     quoted, shell interpolation still works  "a $HOME"

Each dialect supplies a QuotingFunctions record. A mode the record does not
provide is passed through unmodified.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum


class ShellQuoting(str, Enum):
    """How a token must be quoted for the target shell."""

    ESCAPE = "escape"
    STRONG = "strong"
    WEAK = "weak"


@dataclass(frozen=True)
class ShellQuotedString:
    """A value paired with the quoting mode to render it with."""

    value: str
    quoting: ShellQuoting = ShellQuoting.STRONG


@dataclass(frozen=True)
class QuotingFunctions:
    """Per-dialect quoting capabilities. Any member may be missing."""

    escape: Callable[[str], str] | None = None
    """Add escape characters in front of forbidden characters."""

    strong: Callable[[str], str] | None = None
    """Quote so that variables CANNOT be expanded."""

    weak: Callable[[str], str] | None = None
    """Quote so that variables CAN be expanded."""

    def get(self, quoting: ShellQuoting) -> Callable[[str], str] | None:
        return getattr(self, ShellQuoting(quoting).value)


def escape_for_shell(arg: str | ShellQuotedString, quoting: QuotingFunctions) -> str:
    """Quote a single token.

    Plain strings use strong quoting. When the dialect has no function for
    the requested mode the value comes back unchanged.
    """
    if isinstance(arg, ShellQuotedString):
        mode, value = arg.quoting, arg.value
    else:
        mode, value = ShellQuoting.STRONG, arg
    func = quoting.get(mode)
    if func is None:
        return value
    return func(value)


def create_shell_command_line(
    args: Iterable[str | ShellQuotedString], quoting: QuotingFunctions
) -> str:
    """Join tokens into one command line, quoting each for the dialect.

    The first token is the command itself. Order is kept and nothing is
    dropped; an empty sequence yields an empty string.
    """
    return " ".join(escape_for_shell(arg, quoting) for arg in args)
