"""
Configuration for screenwork applications.

Configuration Hierarchy (highest to lowest precedence):
1. Explicit overrides (CLI options, bootstrapper arguments)
2. Environment variables (SCREENWORK_LOG_LEVEL, SCREENWORK_LOG_FILE, SCREENWORK_LOGGING)
3. YAML file (explicit path, or SCREENWORK_CONFIG)
4. Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SCREENWORK_CONFIG"
_ENV_KEYS = {
    "SCREENWORK_LOG_LEVEL": "log_level",
    "SCREENWORK_LOG_FILE": "log_file",
    "SCREENWORK_LOGGING": "logging_enabled",
}
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScreenworkConfig(BaseModel):
    """Effective framework configuration."""

    logging_enabled: bool = Field(True, description="Master switch for framework logging")
    log_level: str = Field("INFO", description="Level of the screenwork logger")
    log_file: Optional[Path] = Field(None, description="Rotating log file; console only when unset")
    log_max_bytes: int = Field(1 * 1024 * 1024, gt=0, description="Rotate the log file past this size")
    log_backups: int = Field(3, ge=0, description="Rotated log files to keep")
    view_modules: List[str] = Field(default_factory=list, description="Extra modules searched for views")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: Any) -> str:
        text = str(value).strip().upper()
        if text.isdigit():
            text = logging.getLevelName(int(text))
        if text not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(_LEVELS)}")
        return text


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Configuration file {path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
    # Accept both a flat file and one nested under a `screenwork:` key
    nested = data.get("screenwork")
    return dict(nested) if isinstance(nested, dict) else data


def _read_env(environ: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for var, key in _ENV_KEYS.items():
        raw = environ.get(var)
        if raw is None or not raw.strip():
            continue
        if key == "logging_enabled":
            values[key] = raw.strip().lower() in {"1", "true", "yes", "on"}
        else:
            values[key] = raw.strip()
    return values


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> ScreenworkConfig:
    """Build the effective configuration.

    Args:
        path: YAML file to read; falls back to $SCREENWORK_CONFIG when omitted
        overrides: Values taking precedence over everything else (None values are skipped)
        environ: Environment mapping, defaults to os.environ

    Raises:
        ConfigError: the file is missing or malformed, or a value fails validation
    """
    environ = os.environ if environ is None else environ
    merged: Dict[str, Any] = {}

    file_path = path or environ.get(CONFIG_ENV_VAR)
    if file_path:
        merged.update(_read_yaml(Path(file_path).expanduser()))
        logger.debug("Loaded configuration file %s", file_path)

    merged.update(_read_env(environ))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ScreenworkConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid screenwork configuration: {e}") from e
