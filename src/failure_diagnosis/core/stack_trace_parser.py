"""Parser for JavaScript/TypeScript stack traces.

This module implements the StackTraceParser class that pulls call-stack
frames out of test-runner error output. It supports:
- A permissive pass that records every ``at ...`` frame and the first
  ``file:line`` location
- An enhanced pass that anchors on the first test-file frame
  (``*.spec.ts``, ``*.test.js``, ...)

Neither pass raises: input without a trace simply yields ``None``.
"""

from __future__ import annotations

import os
import re

import structlog

from failure_diagnosis.models.trace import EnhancedStackTrace, StackTraceInfo

log = structlog.get_logger()


class StackTraceParser:
    """Parser for stack traces embedded in error messages.

    Example:
        parser = StackTraceParser()
        trace = parser.parse(error_output)
        if trace is not None:
            print(trace.location)
    """

    # Substrings that mark the start of a trace
    TRACE_MARKERS = ("at ", "Error:", "TypeError:", "ReferenceError:")

    # "at fn (path/file.ts:10:5)" or "at path/file.ts:10:5"
    FRAME_LOCATION_PATTERN = re.compile(r"at\s+(?:.*?\s+)?\(?(.*?):(\d+):(\d+)\)?")
    TEST_FRAME_PATTERN = re.compile(
        r"at\s+(?:.*?\s+)?\(?([^:]+\.(?:spec|test)\.(?:ts|js|tsx|jsx)):(\d+):(\d+)\)?"
    )
    ERROR_PREFIX_PATTERN = re.compile(r"^\s*Error:\s*")

    def contains_trace(self, text: str) -> bool:
        """Check if text contains stack trace markers.

        Args:
            text: Error output to check

        Returns:
            True if any line carries a trace marker
        """
        return self._find_trace_start(text.split("\n")) != -1

    def parse(self, text: str) -> StackTraceInfo | None:
        """Parse the call stack from error output.

        Args:
            text: Raw error output

        Returns:
            StackTraceInfo, or None if no trace markers are present
        """
        lines = text.split("\n")
        start = self._find_trace_start(lines)
        if start == -1:
            return None

        call_stack: list[str] = []
        location = "unknown"

        for line in self._frame_lines(lines, start):
            call_stack.append(line)

            # First frame with a file:line:col wins
            if location == "unknown":
                match = self.FRAME_LOCATION_PATTERN.search(line)
                if match and match.group(1) and match.group(2):
                    location = f"{os.path.basename(match.group(1))}:{match.group(2)}"

        return StackTraceInfo(
            main_error=self._main_error(lines, start),
            location=location,
            call_stack=tuple(call_stack),
        )

    def parse_enhanced(self, text: str) -> EnhancedStackTrace | None:
        """Parse the call stack and locate the first test-file frame.

        Args:
            text: Raw error output

        Returns:
            EnhancedStackTrace, or None if no frame points at a test file
        """
        lines = text.split("\n")
        start = self._find_trace_start(lines)
        if start == -1:
            return None

        call_stack: list[str] = []
        test_frame: re.Match[str] | None = None

        for line in self._frame_lines(lines, start):
            call_stack.append(line)
            if test_frame is None:
                test_frame = self.TEST_FRAME_PATTERN.search(line)

        if test_frame is None:
            log.debug("test_frame_not_found", frames_count=len(call_stack))
            return None

        file_path = test_frame.group(1)
        file_name = os.path.basename(file_path)
        line_number = test_frame.group(2)

        return EnhancedStackTrace(
            file_path=file_path,
            file_name=file_name,
            line_number=int(line_number),
            column_number=int(test_frame.group(3)),
            main_error=self._main_error(lines, start),
            location=f"{file_name}:{line_number}",
            call_stack=tuple(call_stack),
        )

    def _find_trace_start(self, lines: list[str]) -> int:
        for index, line in enumerate(lines):
            if any(marker in line for marker in self.TRACE_MARKERS):
                return index
        return -1

    def _frame_lines(self, lines: list[str], start: int) -> list[str]:
        """Return trimmed ``at ...`` lines from start onward, in order."""
        frames: list[str] = []
        for raw_line in lines[start:]:
            line = raw_line.strip()
            if line.startswith("at "):
                frames.append(line)
        return frames

    def _main_error(self, lines: list[str], start: int) -> str:
        main_error = lines[0] if lines[0] else lines[start]
        return self.ERROR_PREFIX_PATTERN.sub("", main_error, count=1).strip()
