"""Shared helpers: credential scrubbing and structured logging."""

from failure_diagnosis.utils.logging import (
    LogFormat,
    LogLevel,
    configure_logging,
    diagnosis_context,
    sanitize_log_value,
)
from failure_diagnosis.utils.security import (
    RedactionError,
    SecretPattern,
    SecretRedactor,
    SecurityError,
    sanitize_for_logging,
)

__all__ = [
    # Logging
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "diagnosis_context",
    "sanitize_log_value",
    # Security
    "RedactionError",
    "SecretPattern",
    "SecretRedactor",
    "SecurityError",
    "sanitize_for_logging",
]
