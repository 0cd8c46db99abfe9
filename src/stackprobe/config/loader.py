"""Config file discovery and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from stackprobe import StackprobeError
from stackprobe.config.settings import (
    DetectionSettings,
    LoggingSettings,
    StackprobeSettings,
)

CONFIG_FILENAMES = ["stackprobe.yaml", "stackprobe.yml", ".stackprobe.yaml", ".stackprobe.yml"]

_SECTIONS = ("detection", "logging")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from start_dir, walking up to root."""
    directory = start_dir or Path.cwd()
    directory = directory.resolve()

    while True:
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        parent = directory.parent
        if parent == directory:
            break
        directory = parent

    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and parse a YAML config file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise StackprobeError(f"Invalid config file {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    project_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> StackprobeSettings:
    """Load settings with full layering: defaults -> config file -> env -> overrides."""
    file_data: dict[str, Any] = {}
    config_file = find_config_file(project_path)
    if config_file:
        file_data = load_config_file(config_file)

    sections: dict[str, dict[str, Any]] = {}
    for name in _SECTIONS:
        section = file_data.get(name)
        sections[name] = dict(section) if isinstance(section, dict) else {}
        # Pydantic doesn't parse env vars when we pass explicit kwargs,
        # so they are merged by hand before the overrides
        _merge_env_vars(sections[name], f"STACKPROBE_{name.upper()}__")

    if overrides:
        sections = _deep_merge(sections, overrides)

    return StackprobeSettings(
        detection=DetectionSettings(**sections.get("detection", {})),
        logging=LoggingSettings(**sections.get("logging", {})),
    )


def _merge_env_vars(data: dict[str, Any], prefix: str) -> None:
    """Merge environment variables with the given prefix into data dict."""
    for key, value in os.environ.items():
        if key.startswith(prefix):
            field_name = key[len(prefix):].lower()
            # Digits stay numeric so "1" can mean max_depth=1
            if value.isdigit():
                data[field_name] = int(value)
            elif value.lower() in ("true", "yes", "on"):
                data[field_name] = True
            elif value.lower() in ("false", "no", "off"):
                data[field_name] = False
            else:
                data[field_name] = value
