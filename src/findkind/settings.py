"""Optional settings file supplying defaults for scan options.

Settings are read from a JSON file given explicitly or through the
``FINDKIND_SETTINGS`` environment variable. When neither is set the built-in
defaults apply and no file is required. Command line flags always win over
values loaded here.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

from .errors import ConfigError
from .models import WILDCARD, default_max_concurrency

SETTINGS_PATH_ENV_VAR = "FINDKIND_SETTINGS"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "maxProcs": {"type": "integer", "minimum": 1},
        "branchFilters": {"type": "array", "items": {"type": "string"}},
        "noGit": {"type": "boolean"},
        "stream": {"type": "boolean"},
        "group": {"type": "string", "minLength": 1},
        "apiVersion": {"type": "string", "minLength": 1},
    },
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Defaults for options the user did not pass on the command line."""

    max_procs: int
    branch_filters: tuple[str, ...] = ()
    no_git: bool = False
    stream: bool = True
    group: str = WILDCARD
    api_version: str = WILDCARD

    @classmethod
    def defaults(cls) -> Settings:
        return cls(max_procs=default_max_concurrency())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        base = cls.defaults()
        return cls(
            max_procs=data.get("maxProcs", base.max_procs),
            branch_filters=tuple(data.get("branchFilters", base.branch_filters)),
            no_git=data.get("noGit", base.no_git),
            stream=data.get("stream", base.stream),
            group=data.get("group", base.group),
            api_version=data.get("apiVersion", base.api_version),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_settings(data: Any) -> None:
    """Raise ConfigError listing every schema violation in ``data``."""
    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Settings failed validation:\n" + _format_errors(errors))


def _resolve_settings_path(path: Path | str | None = None) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. FINDKIND_SETTINGS environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(SETTINGS_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the settings file. If not provided, uses the
            FINDKIND_SETTINGS env var or falls back to built-in defaults.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    settings_path = _resolve_settings_path(path)
    if settings_path is None:
        return Settings.defaults()

    if not settings_path.exists():
        raise ConfigError(f"Settings file not found: {settings_path}")

    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read settings file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in settings file: {exc}") from exc

    validate_settings(data)
    return Settings.from_dict(data)
