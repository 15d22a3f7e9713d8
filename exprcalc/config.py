# config.py
"""Persisted calculator settings.

Settings live in a small JSON file (``~/.exprcalc.json`` by default).
Environment variables named ``EXPRCALC_<FIELD>`` override values from the
file; the command-line entry point loads a ``.env`` file first, so they can
also be set there.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .registry import AngleMode

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(os.path.expanduser("~/.exprcalc.json"))
ENV_PREFIX = "EXPRCALC_"


class Settings(BaseModel):
    """Model for the calculator settings."""
    angle_mode: AngleMode = AngleMode.RADIANS
    history_size: int = Field(25, ge=0, le=100, description="Expressions kept in the history")
    max_input_length: int = Field(1024, ge=1, description="Longest input accepted by the parser")
    strict: bool = Field(False, description="Reject tokens after a complete expression")
    precision: int = Field(16, ge=1, le=17, description="Significant digits shown")

    @field_validator('angle_mode', mode='before')
    @classmethod
    def angle_mode_aliases(cls, v: Any) -> Any:
        # Accept 'deg'/'rad' as well as the full names.
        if isinstance(v, str):
            v = v.strip().lower()
            return {'deg': 'degrees', 'rad': 'radians'}.get(v, v)
        return v


def _env_overrides() -> Dict[str, str]:
    overrides = {}
    for name in Settings.model_fields:
        value = os.getenv(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path``, applying environment overrides.

    A missing file gives the defaults. Raises ConfigError if the file cannot
    be parsed or holds invalid values.
    """
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    data: Dict[str, Any] = {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info(f"No settings file at {path}, using defaults")
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in settings file {path}: {e}")
        raise ConfigError(f"Invalid settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings file {path}: expected a JSON object")

    data.update(_env_overrides())
    try:
        return Settings(**data)
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        raise ConfigError(f"Invalid settings: {e}") from e


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> Path:
    """Write ``settings`` to ``path`` as JSON and return the path."""
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings.model_dump(mode='json'), f, indent=4)
    except OSError as e:
        logger.error(f"Could not write settings to {path}: {e}")
        raise ConfigError(f"Could not write settings to {path}: {e}") from e
    return path
