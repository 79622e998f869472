"""Data models for JavaScript/TypeScript stack traces."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StackTraceInfo:
    """A stack trace extracted from an error message."""

    main_error: str  # First line, without a leading "Error:"
    location: str = "unknown"  # e.g., "login.spec.ts:42"
    call_stack: tuple[str, ...] = ()  # Raw "at ..." lines, input order
    test_file: str | None = None
    project_path: str | None = None

    @property
    def has_frames(self) -> bool:
        """Check if at least one call-stack frame was found."""
        return len(self.call_stack) > 0


@dataclass(frozen=True)
class EnhancedStackTrace:
    """A stack trace anchored on the first test-file frame.

    Only produced when a frame points at a ``*.spec.*`` or ``*.test.*``
    file with a ts/js/tsx/jsx extension.
    """

    file_path: str
    file_name: str
    line_number: int
    column_number: int
    main_error: str
    location: str
    call_stack: tuple[str, ...] = ()

    @property
    def test_file(self) -> str:
        """Base name of the test file."""
        return self.file_name

    @property
    def project_path(self) -> str:
        """Path of the test file as written in the trace."""
        return self.file_path
