"""Diagnosis engine: the pipeline from raw error text to DiagnosisResult.

Stages run in a fixed order for every call:
1. Stack-trace parsing (permissive and enhanced passes)
2. Weighted error-type classification
3. Code context extraction and related-file discovery
4. Locator/selector extraction
5. Pattern, confidence and severity synthesis

The engine keeps no state between calls. Rule and knowledge tables are
immutable module data, so one engine can serve concurrent callers.
"""

from __future__ import annotations

import structlog

from failure_diagnosis.config.schema import AnalysisConfig
from failure_diagnosis.core.classifier import ErrorClassifier
from failure_diagnosis.core.context_extractor import ContextExtractor, find_related_files
from failure_diagnosis.core.locator_extractor import LocatorExtractor
from failure_diagnosis.core.stack_trace_parser import StackTraceParser
from failure_diagnosis.core.synthesizer import SolutionSynthesizer
from failure_diagnosis.models.diagnosis import DiagnosisResult
from failure_diagnosis.models.trace import EnhancedStackTrace, StackTraceInfo
from failure_diagnosis.utils.security import sanitize_for_logging

log = structlog.get_logger()

_MESSAGE_PREVIEW_LENGTH = 120


class DiagnosisEngine:
    """Classifies test failures and explains them.

    Example:
        engine = DiagnosisEngine()
        result = engine.classify("ReferenceError: foo is not defined")
        print(result.category, result.quick_solution)
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        """Initialize the DiagnosisEngine.

        Args:
            config: Analysis configuration (defaults reproduce reference behavior)
        """
        self._config = config or AnalysisConfig()
        self._parser = StackTraceParser()
        self._classifier = ErrorClassifier()
        self._context_extractor = ContextExtractor(self._config)
        self._locator_extractor = LocatorExtractor()
        self._synthesizer = SolutionSynthesizer(self._config)

    def classify(
        self,
        error_message: str,
        file_path: str | None = None,
        context: str | None = None,
    ) -> DiagnosisResult:
        """Diagnose a raw error message.

        Never raises for incomplete or unrecognized input; fields that could
        not be determined are left as None.

        Args:
            error_message: Raw error text from a failing test
            file_path: Source file the caller believes is involved
            context: Extra text scanned for related-file references

        Returns:
            DiagnosisResult

        Raises:
            TypeError: If an argument is not a string
        """
        _require_str("error_message", error_message)
        _require_str("file_path", file_path, optional=True)
        _require_str("context", context, optional=True)

        log.debug(
            "diagnosis_started",
            message_preview=sanitize_for_logging(error_message[:_MESSAGE_PREVIEW_LENGTH]),
            file_path=file_path,
        )

        enhanced_trace = self._parser.parse_enhanced(error_message)
        stack_trace = _merge_test_frame(self._parser.parse(error_message), enhanced_trace)

        classification = self._classifier.classify(error_message)

        code_context = self._context_extractor.extract(error_message, enhanced_trace, file_path)
        related_files = find_related_files(error_message, code_context.file_name, context)

        locator_details = self._locator_extractor.extract(error_message)

        pattern = self._synthesizer.build_pattern(classification.error_type, code_context)
        quick_solution, suggestions = self._synthesizer.split_solutions(pattern)

        result = DiagnosisResult(
            category=classification.error_type,
            confidence=self._synthesizer.calculate_confidence(
                error_message, stack_trace, code_context
            ),
            severity=self._synthesizer.determine_severity(error_message),
            quick_solution=quick_solution,
            suggestions=suggestions,
            code_context=code_context,
            patterns=pattern,
            related_files=tuple(related_files),
            locator_details=locator_details if locator_details.selector else None,
            stack_trace=stack_trace,
        )

        log.info(
            "diagnosis_complete",
            category=result.category,
            confidence=result.confidence,
            severity=result.severity.value,
            has_stack_trace=stack_trace is not None,
            file_name=code_context.file_name,
        )

        return result


def _merge_test_frame(
    stack_trace: StackTraceInfo | None,
    enhanced_trace: EnhancedStackTrace | None,
) -> StackTraceInfo | None:
    """Attach the test file found by the enhanced pass to the basic trace."""
    if stack_trace is None or enhanced_trace is None:
        return stack_trace

    return StackTraceInfo(
        main_error=stack_trace.main_error,
        location=stack_trace.location,
        call_stack=stack_trace.call_stack,
        test_file=enhanced_trace.test_file,
        project_path=enhanced_trace.project_path,
    )


def _require_str(name: str, value: object, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")


_default_engine: DiagnosisEngine | None = None


def get_engine() -> DiagnosisEngine:
    """Get or create the shared default engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = DiagnosisEngine()
    return _default_engine


def classify(
    error_message: str,
    file_path: str | None = None,
    context: str | None = None,
) -> DiagnosisResult:
    """Diagnose a raw error message with the default engine.

    See DiagnosisEngine.classify.
    """
    return get_engine().classify(error_message, file_path, context)
