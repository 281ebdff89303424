from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_ERROR_LOG_DIR,
    DEFAULT_FILE_PATTERN,
    DEFAULT_MAX_WORKERS,
    ReportConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default: config/report.yml, overridable with FSR_CONFIG)
- Validate it against the packaged JSON schema
- Apply defaults for optional keys
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "default_config",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).parent / "schema.json"
DEFAULT_CONFIG_PATH = Path("config/report.yml")
CONFIG_ENV_VAR = "FSR_CONFIG"


class ConfigError(Exception):
    pass


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """Config path: explicit argument > $FSR_CONFIG > config/report.yml."""
    if explicit:
        return Path(explicit)
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def default_config(source_directory: str = ".") -> ReportConfig:
    return ReportConfig(source_directory=source_directory)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ReportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    patterns = data.get("sheet_patterns")
    for p in patterns or []:
        try:
            re.compile(p)
        except re.error as e:
            raise ConfigError(f"invalid sheet pattern {p!r}: {e}") from e
    return ReportConfig(
        source_directory=data["source_directory"],
        file_pattern=data.get("file_pattern", DEFAULT_FILE_PATTERN),
        max_workers=data.get("max_workers", DEFAULT_MAX_WORKERS),
        sheet_patterns=tuple(patterns) if patterns is not None else None,
        error_log_dir=data.get("error_log_dir", DEFAULT_ERROR_LOG_DIR),
    )
