"""Configuration for commit-history."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from commit_history.errors import ConfigError
from commit_history.models.commit import DEFAULT_TIMESTAMP_FORMAT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class HistoryConfig(BaseModel):
    """Runtime settings shared by repositories and the CLI."""

    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    default_history_count: int = Field(default=10, ge=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


DEFAULT_CONFIG = HistoryConfig()


def load_config(path: Optional[Path] = None) -> HistoryConfig:
    """Load configuration from a JSON file, or return the defaults."""
    if path is None:
        return DEFAULT_CONFIG

    config_file = Path(path)
    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_file}")

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_file}: {e}") from e

    try:
        return HistoryConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}") from e
