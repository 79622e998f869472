"""Data models for error diagnosis results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from failure_diagnosis.models.trace import StackTraceInfo


class Severity(StrEnum):
    """Severity of a diagnosed failure."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class CodeContext:
    """Source location and excerpt for the failing line.

    Every field is optional; ``None`` means it could not be determined.
    """

    file_name: str | None = None
    line_number: int | None = None
    column_number: int | None = None
    function_name: str | None = None
    code_snippet: str | None = None
    error_line_content: str | None = None
    project_path: str | None = None

    @property
    def has_location(self) -> bool:
        """Check if both a file name and a line number were resolved."""
        return bool(self.file_name and self.line_number)


@dataclass(frozen=True)
class LocatorDetails:
    """UI-automation metadata pulled from an error message."""

    selector: str = ""
    action: str = "unknown"
    timeout: str | None = None  # e.g., "5000ms"
    expected_state: str | None = None  # "clickable", "visible" or "hidden"
    framework: str | None = None  # "playwright", "cypress", "selenium", "generic"


@dataclass(frozen=True)
class ErrorPattern:
    """Causes and ordered solutions for a diagnosed error type."""

    error_type: str  # Display name, e.g., "Element Timeout Error"
    common_causes: tuple[str, ...]
    solutions: tuple[str, ...]  # solutions[0] is the quick solution


@dataclass(frozen=True)
class Classification:
    """Outcome of matching a message against the rule table."""

    error_type: str  # Type tag, e.g., "element-timeout"
    weight: int

    @property
    def is_unknown(self) -> bool:
        """True when no rule matched."""
        return self.weight == 0


@dataclass(frozen=True)
class DiagnosisResult:
    """Structured diagnosis of a single error message."""

    category: str
    confidence: float
    severity: Severity
    quick_solution: str
    suggestions: tuple[str, ...]
    code_context: CodeContext
    patterns: ErrorPattern
    related_files: tuple[str, ...] = ()
    locator_details: LocatorDetails | None = None
    stack_trace: StackTraceInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["severity"] = self.severity.value
        return _tuples_to_lists(data)


def _tuples_to_lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _tuples_to_lists(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_tuples_to_lists(v) for v in value]
    return value
