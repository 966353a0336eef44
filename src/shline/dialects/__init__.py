"""
Shell dialects supported by shline.

Each dialect module exports:
- PATTERN: re.Pattern - matched against the shell executable path
- EXEC_ARGS: tuple[str, ...] - arguments making the shell run one command string
- QUOTING: QuotingFunctions - escape/strong/weak quoting for a single token
- build(options: CommandLineOptions) -> str - render cd, env and invocation
"""

from __future__ import annotations

import importlib
import re
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

from shline.core.quoting import QuotingFunctions

if TYPE_CHECKING:
    from shline.core.commandline import CommandLineOptions


class Dialect(str, Enum):
    """Shell grammar of a target shell. Values are the dialect module names."""

    BASH = "bash"
    POWERSHELL = "powershell"
    CMD = "cmd"
    UNKNOWN = "unknown"


class DialectHandler(Protocol):
    """Protocol for dialect modules."""

    PATTERN: re.Pattern[str]
    EXEC_ARGS: tuple[str, ...]
    QUOTING: QuotingFunctions

    def build(self, options: CommandLineOptions) -> str:
        """Render a full command line for this dialect."""
        ...


# Detection order: first matching pattern wins
DETECTION_ORDER = (Dialect.BASH, Dialect.POWERSHELL, Dialect.CMD)


@lru_cache(maxsize=8)
def get_handler(dialect: Dialect) -> DialectHandler | None:
    """Load the module implementing a dialect. None for UNKNOWN."""
    if dialect is Dialect.UNKNOWN:
        return None
    return importlib.import_module(f".{dialect.value}", package="shline.dialects")


def detect_dialect(executable: str | None) -> Dialect:
    """Classify a shell by its executable path or name. Never raises."""
    if not executable:
        return Dialect.UNKNOWN
    for dialect in DETECTION_ORDER:
        if get_handler(dialect).PATTERN.search(executable):
            return dialect
    return Dialect.UNKNOWN


def quoting_for(dialect: Dialect) -> QuotingFunctions:
    """Quoting functions for a dialect; UNKNOWN gets an empty set."""
    handler = get_handler(dialect)
    if handler is None:
        return QuotingFunctions()
    return handler.QUOTING
