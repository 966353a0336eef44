"""shline configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

USER_CONFIG = Path.home() / ".shline" / "config"
PROJECT_CONFIG_NAME = ".shline"
ENV_CONFIG = "SHLINE_CONFIG"


@dataclass
class Config:
    """Parsed configuration."""

    shell: str | None = None
    """Shell executable used when a request does not name one."""

    env: dict[str, str | None] = field(default_factory=dict)
    """Default environment patch, in load order. None removes a variable."""

    verbose: bool = False
    log: Path | None = None  # None = no logging


# === Config Loading ===


def _find_project_config(cwd: Path) -> Path | None:
    """Walk up from cwd to find .shline file."""
    current = cwd.resolve()
    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # reached root
            return None
        current = parent


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Env entries accumulate, settings override."""
    env = dict(base.env)
    for key, value in overlay.env.items():
        # Re-setting a name moves it to the end, like a later assignment would
        env.pop(key, None)
        env[key] = value
    return replace(
        base,
        shell=overlay.shell if overlay.shell is not None else base.shell,
        env=env,
        verbose=overlay.verbose if overlay.verbose else base.verbose,
        log=overlay.log if overlay.log is not None else base.log,
    )


def load_config(cwd: Path) -> Config:
    """Load config from ~/.shline/config, .shline, and $SHLINE_CONFIG. Last match wins."""
    config = Config()

    # 1. User config (lowest priority)
    if USER_CONFIG.is_file():
        config = _merge_configs(config, parse_config(USER_CONFIG.read_text()))

    # 2. Project config (walk up from cwd)
    project_path = _find_project_config(cwd)
    if project_path is not None:
        config = _merge_configs(config, parse_config(project_path.read_text()))

    # 3. Env override (highest priority)
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _merge_configs(config, parse_config(env_config_path.read_text()))

    return config


def parse_config(text: str) -> Config:
    """Parse config text into Config object. Raises ValueError on syntax errors."""
    env: dict[str, str | None] = {}
    settings: dict[str, bool | str | Path] = {}

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        directive = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        try:
            if directive == "env":
                name, sep, value = rest.partition("=")
                if not sep or not name:
                    raise ValueError("'env' requires NAME=VALUE")
                env.pop(name, None)
                env[name] = value

            elif directive == "unset":
                if not rest:
                    raise ValueError("'unset' requires a variable name")
                env.pop(rest, None)
                env[rest] = None

            elif directive == "set":
                _apply_setting(settings, rest)

            else:
                raise ValueError(f"unknown directive '{directive}'")

        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    return Config(
        shell=settings.get("shell"),
        env=env,
        verbose=settings.get("verbose", False),
        log=settings.get("log"),
    )


def _apply_setting(settings: dict[str, bool | str | Path], rest: str) -> None:
    """Parse and apply a 'set' directive. Raises ValueError on invalid setting."""
    if not rest:
        raise ValueError("'set' requires a setting name")

    parts = rest.split(None, 1)
    key = parts[0].lower()
    value = parts[1] if len(parts) > 1 else None

    # Boolean settings (no value required)
    if key == "verbose":
        if value is not None:
            raise ValueError(f"'{key}' takes no value")
        settings[key] = True

    elif key == "shell":
        if value is None:
            raise ValueError("'shell' requires an executable")
        settings[key] = value

    # Path settings
    elif key == "log":
        if value is None:
            raise ValueError("'log' requires a path")
        settings[key] = Path(value).expanduser()

    else:
        raise ValueError(f"unknown setting '{key}'")
