"""Synthesis of causes, solutions, confidence and severity.

The synthesizer turns a classified error type plus whatever context the
earlier stages resolved into the final pattern, score and severity.
"""

from __future__ import annotations

import structlog

from failure_diagnosis.config.schema import AnalysisConfig
from failure_diagnosis.core.context_extractor import UNKNOWN_FUNCTION
from failure_diagnosis.core.knowledge import lookup
from failure_diagnosis.models.diagnosis import CodeContext, ErrorPattern, Severity
from failure_diagnosis.models.trace import StackTraceInfo

log = structlog.get_logger()

BASE_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.98

DEFAULT_QUICK_SOLUTION = "Review the error details and check your code"

# (required substrings, bonus) for well-known messages
CONFIDENCE_BOOSTS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("webServer", "timeout"), 0.3),
    (("ReferenceError", "not defined"), 0.35),
    (("TypeError", "null"), 0.3),
)

# First bucket with a matching substring wins
SEVERITY_RULES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("security", "authentication"), Severity.CRITICAL),
    (("database", "data loss"), Severity.HIGH),
    (("timeout", "network"), Severity.MEDIUM),
    (("syntax", "typo"), Severity.LOW),
)


class SolutionSynthesizer:
    """Builds error patterns and scores from classification and context.

    Example:
        synthesizer = SolutionSynthesizer()
        pattern = synthesizer.build_pattern("element-timeout", context)
        quick, rest = synthesizer.split_solutions(pattern)
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()

    def build_pattern(self, error_type: str, code_context: CodeContext) -> ErrorPattern:
        """Look up the knowledge entry and add context-specific hints.

        Args:
            error_type: Classifier type tag
            code_context: Resolved code context

        Returns:
            ErrorPattern with the display name, causes and ordered solutions
        """
        entry = lookup(error_type)
        solutions = list(entry.solutions)

        if code_context.has_location:
            solutions.insert(
                0, f"Check line {code_context.line_number} in {code_context.file_name}"
            )

        if code_context.function_name and code_context.function_name != UNKNOWN_FUNCTION:
            solutions.append(f"Review function: {code_context.function_name}")

        return ErrorPattern(
            error_type=entry.error_type,
            common_causes=entry.common_causes,
            solutions=tuple(solutions),
        )

    def split_solutions(self, pattern: ErrorPattern) -> tuple[str, tuple[str, ...]]:
        """Split solutions into the quick solution and secondary suggestions.

        Returns:
            Tuple of (quick_solution, suggestions)
        """
        if not pattern.solutions:
            return DEFAULT_QUICK_SOLUTION, ()

        suggestions = pattern.solutions[1 : 1 + self._config.max_suggestions]
        return pattern.solutions[0], suggestions

    def calculate_confidence(
        self,
        error_message: str,
        stack_trace: StackTraceInfo | None,
        code_context: CodeContext,
    ) -> float:
        """Score how much the diagnosis can be trusted.

        Args:
            error_message: Raw error message
            stack_trace: Parsed stack trace, if any
            code_context: Resolved code context

        Returns:
            Confidence in [0.5, 0.98]
        """
        confidence = BASE_CONFIDENCE

        for needles, bonus in CONFIDENCE_BOOSTS:
            if all(needle in error_message for needle in needles):
                confidence += bonus

        if stack_trace is not None and stack_trace.has_frames:
            confidence += 0.1

        if code_context.line_number:
            confidence += 0.1
        if code_context.code_snippet:
            confidence += 0.05

        return round(min(MAX_CONFIDENCE, confidence), 2)

    def determine_severity(self, error_message: str) -> Severity:
        """Pick a severity from message keywords, defaulting to medium."""
        for needles, severity in SEVERITY_RULES:
            if any(needle in error_message for needle in needles):
                return severity
        return Severity.MEDIUM
