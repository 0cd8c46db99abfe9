"""Pydantic Settings models for stackprobe configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseModel):
    """Scanner and rule engine configuration."""

    max_depth: int = Field(default=2, ge=0)
    parallel: bool = False
    max_workers: int = Field(default=4, ge=1)
    dedupe_frameworks: bool = False


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = "WARNING"
    use_rich: bool = True
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names from YAML or the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class StackprobeSettings(BaseSettings):
    """Root settings with layered config: defaults -> file -> env -> overrides."""

    model_config = SettingsConfigDict(
        env_prefix="STACKPROBE_",
        env_nested_delimiter="__",
    )

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
