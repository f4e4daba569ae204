# File: src/parklot/infrastructure/config.py
"""
Application configuration

Settings come from three places, later ones winning:
1. defaults declared on AppSettings
2. an optional YAML file
3. explicit overrides (the command line)

The lot capacity is fixed and deliberately not configurable here.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.models import ParkingLotError


class ConfigurationError(ParkingLotError):
    """Raised when the configuration file or values are invalid"""
    pass


class AppSettings(BaseModel):
    """Runtime settings for the console application"""

    model_config = ConfigDict(extra='forbid', frozen=True)

    data_file: str = Field(default="parking_data.txt", min_length=1)
    log_dir: str = Field(default="logs", min_length=1)
    log_level: str = "INFO"
    log_to_console: bool = False

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_file(self) -> Path:
        return Path(self.log_dir) / "parklot.log"


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as config_file:
            data = yaml.safe_load(config_file)
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}") from None
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> AppSettings:
    """
    Build the settings from an optional YAML file and overrides

    Overrides whose value is None are ignored, so unset command-line
    options fall through to the file or the defaults.
    """
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AppSettings.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
