"""Command-line entry point: build a shell line from a JSON request.

Reads one JSON object from stdin:

    {"shell": "/bin/bash", "cwd": "/tmp", "args": ["ls", "-la"], "env": {"A": "1", "B": null}}

and prints the line to write into that shell:

    {"dialect": "bash", "commandLine": "cd '/tmp' && env 'A=1' -u 'B' 'ls' '-la'", "escaped": true}

``shell`` falls back to the configured default shell. The configured default
environment is applied first; the request's ``env`` wins on conflicts.

Exit codes:
- 0: Success.
- 2: Invalid request or configuration. {"error": ...} is printed.

Decisions are logged as JSON lines when ``set log <path>`` is configured.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import structlog

from shline.core.commandline import (
    CommandLineOptions,
    InvalidCommandError,
    build_command_line,
)
from shline.core.config import Config, load_config
from shline.dialects import Dialect, detect_dialect


def setup_logging(config: Config) -> None:
    """Configure structlog to write JSON to the configured log file."""
    level = logging.DEBUG if config.verbose else logging.INFO
    file_handler = None
    if config.log is not None:
        try:
            config.log.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(config.log)
        except OSError as e:
            print(f"Warning: cannot open log file {config.log}: {e}", file=sys.stderr)
    if file_handler is None:
        # stdout carries the response, so warnings go to stderr
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        )
        return
    file_handler.setLevel(level)
    logging.basicConfig(format="%(message)s", handlers=[file_handler], level=level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=file_handler.stream),
    )


def _fail(message: str) -> NoReturn:
    print(json.dumps({"error": message}))
    sys.exit(2)


def handle_request(request: dict, config: Config) -> dict:
    """Turn a decoded request into the response object."""
    if not isinstance(request, dict):
        raise InvalidCommandError("request must be a JSON object")
    shell = request.get("shell")
    if shell is not None and not isinstance(shell, str):
        raise InvalidCommandError("shell must be a string")
    shell = shell or config.shell
    request_env = request.get("env") or {}
    if not isinstance(request_env, dict):
        raise InvalidCommandError("env must be an object")
    env = {**config.env, **request_env}
    options = CommandLineOptions.from_dict({**request, "env": env or None})

    dialect = detect_dialect(shell)
    line = build_command_line(dialect, options, shell)
    return {
        "dialect": dialect.value,
        "commandLine": line,
        "escaped": dialect is not Dialect.UNKNOWN,
    }


# === Entry point ===


def main() -> None:
    try:
        config = load_config(Path.cwd())
    except ValueError as e:
        _fail(f"invalid config: {e}")
    setup_logging(config)
    log = structlog.get_logger()

    try:
        request = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        log.info("rejected", reason="invalid_json")
        _fail(f"invalid JSON: {e}")

    try:
        response = handle_request(request, config)
    except InvalidCommandError as e:
        log.info("rejected", reason="invalid_command", error=str(e))
        _fail(str(e))

    log.info("built", dialect=response["dialect"], escaped=response["escaped"])
    print(json.dumps(response))
    sys.exit(0)


if __name__ == "__main__":
    main()
