"""Data models and transfer objects."""

from .diagnosis import (
    Classification,
    CodeContext,
    DiagnosisResult,
    ErrorPattern,
    LocatorDetails,
    Severity,
)
from .trace import EnhancedStackTrace, StackTraceInfo

__all__ = [
    # Trace models
    "StackTraceInfo",
    "EnhancedStackTrace",
    # Diagnosis models
    "Severity",
    "Classification",
    "CodeContext",
    "LocatorDetails",
    "ErrorPattern",
    "DiagnosisResult",
]
