"""
Logging configuration.

Configuration comes from an optional TOML file (a ``[logging]`` table) with
``LOGSMITH_*`` environment variables layered on top, validated by pydantic.
"""

import sys
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .levels import Level

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_LOG_FILE = Path("logs/logsmith.log")
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5

FORMATS = ("console", "json", "rich")
OUTPUTS = ("console", "file")


class LoggingConfig(BaseModel):
    """Configuration for the logging system."""

    level: str = Field("INFO", description="Root level: trace, debug, info, warn, error")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )
    service_name: str = Field("logsmith", description="Service name for JSON records")
    version: str = Field("unknown", description="Service version for JSON records")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Union[str, int, Level]) -> str:
        return Level.parse(v).name

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in FORMATS:
            raise ValueError(f"format must be one of: {', '.join(FORMATS)}")
        return v

    @field_validator("output", mode="before")
    @classmethod
    def validate_output(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        for output in v:
            if output not in OUTPUTS:
                raise ValueError(f"output must contain only: {', '.join(OUTPUTS)}")
        return v

    @property
    def numeric_level(self) -> int:
        return Level[self.level].value


class LoggingSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    logsmith_level: Optional[str] = Field(None, alias="LOGSMITH_LEVEL")
    logsmith_format: Optional[str] = Field(None, alias="LOGSMITH_FORMAT")
    logsmith_output: Optional[str] = Field(None, alias="LOGSMITH_OUTPUT")
    logsmith_file_path: Optional[str] = Field(None, alias="LOGSMITH_FILE_PATH")

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    def overrides(self) -> dict:
        values = {
            "level": self.logsmith_level,
            "format": self.logsmith_format,
            "output": self.logsmith_output,
            "file_path": self.logsmith_file_path,
        }
        return {key: value for key, value in values.items() if value}


def load_config(path: Optional[Union[str, Path]] = None) -> LoggingConfig:
    """Load logging configuration from ``path`` and the environment.

    Raises:
        ConfigurationError: if the file cannot be read or parsed, or the
            resulting configuration is invalid.
    """
    data = {}
    if path is not None:
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f).get("logging", {})
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read logging configuration {path}: {e}",
                help_text="Check that the file exists and is readable",
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Invalid TOML in {path}: {e}",
                help_text="Logging settings belong in a [logging] table",
            ) from e

    data.update(LoggingSettings().overrides())

    try:
        return LoggingConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Logging configuration validation failed: {e}",
            help_text="Valid formats are console, json and rich; valid outputs are console and file",
        ) from e
