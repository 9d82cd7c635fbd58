"""Settings for the rules engines, read from environment variables."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

LOG_LEVEL_ENV = "BOARD_RULES_LOG_LEVEL"
LOG_FILE_ENV = "BOARD_RULES_LOG_FILE"
VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class EngineSettings(BaseModel):
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {value!r}. Pick one from {','.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level


def load_settings() -> EngineSettings:
    """Build the settings from the environment. Unset variables fall back to the defaults."""
    values: dict[str, str] = {}
    if LOG_LEVEL_ENV in os.environ:
        values["log_level"] = os.environ[LOG_LEVEL_ENV]
    log_file = os.environ.get(LOG_FILE_ENV, "").strip()
    if log_file:
        values["log_file"] = log_file
    return EngineSettings(**values)
