"""Configuration schema.

Settings come from, in increasing priority: field defaults, a ``.env`` file,
``FAILURE_DIAGNOSIS_*`` environment variables (``__`` separates nested
keys, e.g. ``FAILURE_DIAGNOSIS_ANALYSIS__MAX_SUGGESTIONS=2``), and values
passed in from a YAML file.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisConfig(BaseModel):
    """Tuning for the diagnosis engine."""

    context_lines_before: int = Field(3, ge=0, le=50, description="Snippet lines above the error")
    context_lines_after: int = Field(2, ge=0, le=50, description="Snippet lines below the error")
    max_suggestions: int = Field(4, ge=0, le=4, description="Suggestions kept after the first")
    max_file_size: int = Field(1_048_576, ge=1, description="Largest source file read, in bytes")
    redact_secrets: bool = Field(True, description="Scrub credentials from source excerpts")


class FileLoggingConfig(BaseModel):
    """Optional log file next to stderr output."""

    enabled: bool = False
    path: Path = Path("failure-diagnosis.log")


class LoggingConfig(BaseModel):
    """Log level, rendering and destinations."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = Field(default_factory=FileLoggingConfig)


class DiagnosisConfig(BaseSettings):
    """Root configuration for failure-diagnosis."""

    model_config = SettingsConfigDict(
        env_prefix="FAILURE_DIAGNOSIS_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
