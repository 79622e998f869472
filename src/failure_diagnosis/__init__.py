"""Failure diagnosis for test-run errors.

Classifies raw error output from Playwright, Cypress, Selenium and
JavaScript/TypeScript test runs and explains it: category, confidence,
severity, likely causes, remediation steps and source context.

Example:
    from failure_diagnosis import classify

    result = classify("ReferenceError: foo is not defined")
    print(result.category, result.quick_solution)
"""

from failure_diagnosis.core.engine import DiagnosisEngine, classify
from failure_diagnosis.models import (
    CodeContext,
    DiagnosisResult,
    ErrorPattern,
    LocatorDetails,
    Severity,
    StackTraceInfo,
)

__all__ = [
    "CodeContext",
    "DiagnosisEngine",
    "DiagnosisResult",
    "ErrorPattern",
    "LocatorDetails",
    "Severity",
    "StackTraceInfo",
    "classify",
]
