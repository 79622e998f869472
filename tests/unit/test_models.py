"""Tests for diagnosis and stack-trace data models."""

import dataclasses

import pytest

from failure_diagnosis.models import (
    Classification,
    CodeContext,
    DiagnosisResult,
    EnhancedStackTrace,
    ErrorPattern,
    LocatorDetails,
    Severity,
    StackTraceInfo,
)


@pytest.fixture
def result() -> DiagnosisResult:
    """Create a fully populated DiagnosisResult."""
    return DiagnosisResult(
        category="element-timeout",
        confidence=0.75,
        severity=Severity.MEDIUM,
        quick_solution="Check line 7 in checkout.spec.ts",
        suggestions=("Increase timeout for slow elements: { timeout: 60000 }",),
        code_context=CodeContext(file_name="checkout.spec.ts", line_number=7),
        patterns=ErrorPattern(
            error_type="Element Timeout Error",
            common_causes=("Slow page loading or network issues",),
            solutions=("Check line 7 in checkout.spec.ts",),
        ),
        related_files=("package.json",),
        locator_details=LocatorDetails(selector="#submit", action="click", timeout="5000ms"),
        stack_trace=StackTraceInfo(
            main_error="locator.click: Timeout 5000ms exceeded.",
            location="page.js:120",
            call_stack=("at Page.click (page.js:120:14)",),
        ),
    )


class TestStackTraceInfo:
    """Tests for StackTraceInfo model."""

    def test_defaults(self) -> None:
        """Test default values for an empty trace."""
        trace = StackTraceInfo(main_error="boom")

        assert trace.location == "unknown"
        assert trace.call_stack == ()
        assert trace.test_file is None
        assert trace.has_frames is False

    def test_has_frames(self) -> None:
        """Test has_frames with a frame."""
        assert StackTraceInfo(main_error="boom", call_stack=("at x (a.js:1:1)",)).has_frames

    def test_frozen(self) -> None:
        """Test that traces are immutable."""
        trace = StackTraceInfo(main_error="boom")
        with pytest.raises(dataclasses.FrozenInstanceError):
            trace.main_error = "other"  # type: ignore[misc]


class TestEnhancedStackTrace:
    """Tests for EnhancedStackTrace model."""

    def test_test_file_properties(self) -> None:
        """Test that test_file and project_path mirror the frame."""
        trace = EnhancedStackTrace(
            file_path="/repo/tests/cart.test.ts",
            file_name="cart.test.ts",
            line_number=18,
            column_number=22,
            main_error="boom",
            location="cart.test.ts:18",
        )

        assert trace.test_file == "cart.test.ts"
        assert trace.project_path == "/repo/tests/cart.test.ts"


class TestCodeContext:
    """Tests for CodeContext model."""

    @pytest.mark.parametrize(
        ("context", "expected"),
        [
            (CodeContext(), False),
            (CodeContext(file_name="a.ts"), False),
            (CodeContext(line_number=3), False),
            (CodeContext(file_name="a.ts", line_number=3), True),
        ],
    )
    def test_has_location(self, context: CodeContext, expected: bool) -> None:
        """Test that a location needs both file name and line."""
        assert context.has_location is expected


class TestClassification:
    """Tests for Classification model."""

    def test_is_unknown(self) -> None:
        """Test that weight 0 means no rule matched."""
        assert Classification("unknown-error", 0).is_unknown is True
        assert Classification("cors-error", 8).is_unknown is False


class TestDiagnosisResult:
    """Tests for DiagnosisResult model."""

    def test_to_dict_shapes(self, result: DiagnosisResult) -> None:
        """Test that nested models become plain dicts and lists."""
        data = result.to_dict()

        assert data["severity"] == "medium"
        assert data["suggestions"] == ["Increase timeout for slow elements: { timeout: 60000 }"]
        assert data["related_files"] == ["package.json"]
        assert data["code_context"]["line_number"] == 7
        assert data["code_context"]["code_snippet"] is None
        assert data["patterns"]["solutions"] == ["Check line 7 in checkout.spec.ts"]
        assert data["locator_details"]["selector"] == "#submit"
        assert data["stack_trace"]["call_stack"] == ["at Page.click (page.js:120:14)"]

    def test_to_dict_optional_sections(self, result: DiagnosisResult) -> None:
        """Test that missing optional sections serialize as None."""
        bare = dataclasses.replace(result, locator_details=None, stack_trace=None)

        data = bare.to_dict()

        assert data["locator_details"] is None
        assert data["stack_trace"] is None

    def test_severity_is_string_enum(self) -> None:
        """Test that severities compare equal to their string values."""
        assert Severity.CRITICAL == "critical"
        assert [s.value for s in Severity] == ["low", "medium", "high", "critical"]
