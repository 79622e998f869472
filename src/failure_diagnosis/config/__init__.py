"""Configuration loading and validation."""

from .loader import CONFIG_FILE_NAMES, find_config_file, load_config
from .schema import AnalysisConfig, DiagnosisConfig, FileLoggingConfig, LoggingConfig

__all__ = [
    # Loader
    "CONFIG_FILE_NAMES",
    "find_config_file",
    "load_config",
    # Root config
    "DiagnosisConfig",
    # Sections
    "AnalysisConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
