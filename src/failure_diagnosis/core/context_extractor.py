"""Code context extraction for diagnosed errors.

This module implements the ContextExtractor class that resolves where an
error happened and what the code around it looks like. It handles:
- File/line/column resolution from the enhanced stack trace
- Fallback ``name.ext:line`` scanning of the raw message
- Bounded, read-only excerpting of the source file
- Inference of the enclosing test or function name
- Discovery of related files mentioned in (or implied by) the message

File access is best effort: a missing, oversized or unreadable file leaves
the snippet fields unset and never aborts the diagnosis.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import structlog

from failure_diagnosis.config.schema import AnalysisConfig
from failure_diagnosis.core.errors import SourceReadError
from failure_diagnosis.models.diagnosis import CodeContext
from failure_diagnosis.models.trace import EnhancedStackTrace
from failure_diagnosis.utils.security import SecretRedactor

log = structlog.get_logger()

UNKNOWN_FUNCTION = "unknown"

# "login.spec.ts:42" anywhere in the message
FILE_LINE_PATTERN = re.compile(r"([^/\s()'\"]+\.(?:jsx|js|tsx|ts|py|java|cpp)):(\d+)")

# Test declarations carry a quoted description
TEST_DECLARATION_PATTERNS = (
    re.compile(r"\btest\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
    re.compile(r"\bit\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
    re.compile(r"\bdescribe\s*\(\s*['\"`]([^'\"`]+)['\"`]"),
)

FUNCTION_DECLARATION_PATTERNS = (
    re.compile(r"(?:function\s+(\w+)|(\w+)\s*[=:]\s*(?:function|\(|async))"),
    re.compile(r"async\s+(\w+)\s*\("),
    re.compile(r"(\w+)\s*:\s*async"),
)

# Longer extensions first so "package.json" is not cut to "package.js"
RELATED_FILE_PATTERN = re.compile(r"[a-zA-Z0-9_\-./]+\.(?:json|jsx|js|tsx|ts|yaml|yml|config)")

WEBSERVER_RELATED_FILES = (
    "playwright.config.ts",
    "package.json",
    "vite.config.js",
    "next.config.js",
)
MODULE_RELATED_FILES = ("package.json", "tsconfig.json", "node_modules")


class ContextExtractor:
    """Resolves the code context of an error message.

    Security:
    - Only reads files, never writes
    - Skips files above ``max_file_size``
    - Applies SecretRedactor to extracted code

    Example:
        extractor = ContextExtractor(AnalysisConfig())
        context = extractor.extract(message, enhanced_trace)
        print(context.function_name)
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        redactor: SecretRedactor | None = None,
    ) -> None:
        """Initialize the ContextExtractor.

        Args:
            config: Analysis configuration (snippet window, size limit)
            redactor: Redactor applied to excerpts; created on demand
        """
        self._config = config or AnalysisConfig()
        self._redactor = redactor or SecretRedactor()

    def extract(
        self,
        error_message: str,
        enhanced_trace: EnhancedStackTrace | None = None,
        file_path: str | None = None,
    ) -> CodeContext:
        """Resolve file, line, snippet and enclosing function for an error.

        Args:
            error_message: Raw error message
            enhanced_trace: Test-file frame, if the parser found one
            file_path: Source file supplied by the caller

        Returns:
            CodeContext; fields that could not be determined are None
        """
        if enhanced_trace is not None:
            return self._from_enhanced_trace(enhanced_trace)

        return self._from_message(error_message, file_path)

    def _from_enhanced_trace(self, trace: EnhancedStackTrace) -> CodeContext:
        excerpt = self._excerpt(trace.file_path, trace.line_number)

        return CodeContext(
            file_name=trace.file_name,
            line_number=trace.line_number,
            column_number=trace.column_number,
            project_path=trace.project_path,
            **excerpt,
        )

    def _from_message(self, error_message: str, file_path: str | None) -> CodeContext:
        match = FILE_LINE_PATTERN.search(error_message)

        if match is None:
            if file_path is None:
                return CodeContext()
            return CodeContext(file_name=os.path.basename(file_path), project_path=file_path)

        file_name = match.group(1)
        line_number = int(match.group(2))

        # The caller's path only counts when it names the same file
        if file_path is None or os.path.basename(file_path) != file_name:
            return CodeContext(file_name=file_name, line_number=line_number)

        return CodeContext(
            file_name=file_name,
            line_number=line_number,
            project_path=file_path,
            **self._excerpt(file_path, line_number),
        )

    def _excerpt(self, file_path: str, line_number: int) -> dict[str, str]:
        """Read the source file and cut the snippet around line_number.

        Returns:
            Keyword arguments for CodeContext; empty if the file could not be
            read or the line is out of bounds
        """
        try:
            lines = self.read_source_lines(Path(file_path))
        except SourceReadError as e:
            log.debug("source_read_failed", file_path=file_path, error=str(e))
            return {}

        if lines is None or not 0 < line_number <= len(lines):
            return {}

        error_index = line_number - 1
        start = max(0, error_index - self._config.context_lines_before)
        end = min(len(lines), error_index + self._config.context_lines_after + 1)

        return {
            "code_snippet": self._redact("\n".join(lines[start:end])),
            "error_line_content": self._redact(lines[error_index]),
            "function_name": find_containing_function(lines, line_number),
        }

    def read_source_lines(self, path: Path) -> list[str] | None:
        """Read a source file as a list of lines.

        Args:
            path: File to read

        Returns:
            The file's lines, or None if the path is not an existing file

        Raises:
            SourceReadError: If the path is unusable, or the file is too large or
                cannot be read
        """
        try:
            if not path.is_file():
                log.debug("file_not_found", file_path=str(path))
                return None

            size = path.stat().st_size
            if size > self._config.max_file_size:
                raise SourceReadError(
                    f"{path} is {size} bytes, limit is {self._config.max_file_size}"
                )
            content = path.read_text(encoding="utf-8", errors="replace")
        except (OSError, ValueError) as e:
            raise SourceReadError(f"Failed to read {path}: {e}") from e

        return content.split("\n")

    def _redact(self, text: str) -> str:
        if not self._config.redact_secrets:
            return text
        kinds = self._redactor.find_secrets(text)
        if not kinds:
            return text
        log.debug("secrets_redacted", kinds=kinds)
        return self._redactor.redact(text)


def find_containing_function(lines: list[str], error_line: int) -> str:
    """Find the test or function enclosing a line.

    Scans backward from the error line itself. On each line a test
    declaration (``test``/``it``/``describe`` with a quoted description) is
    preferred over a plain function declaration.

    Args:
        lines: Source lines
        error_line: 1-indexed line number

    Returns:
        Test description or function name, or "unknown"
    """
    for index in range(min(error_line, len(lines)) - 1, -1, -1):
        line = lines[index]
        if not line:
            continue

        for pattern in TEST_DECLARATION_PATTERNS:
            match = pattern.search(line)
            if match:
                return match.group(1)

        for pattern in FUNCTION_DECLARATION_PATTERNS:
            match = pattern.search(line)
            if match:
                name = next((group for group in match.groups() if group), None)
                if name:
                    return name

    return UNKNOWN_FUNCTION


def find_related_files(
    error_message: str,
    file_name: str | None = None,
    context: str | None = None,
) -> list[str]:
    """Collect files mentioned in or implied by an error message.

    Args:
        error_message: Raw error message
        file_name: Already-resolved file, excluded from the result
        context: Extra caller-supplied text scanned for file references

    Returns:
        Unique file names, in order of first appearance
    """
    related: list[str] = []

    for text in (error_message, context or ""):
        related.extend(
            match.group(0)
            for match in RELATED_FILE_PATTERN.finditer(text)
            if not file_name or match.group(0) != file_name
        )

    if "webServer" in error_message:
        related.extend(WEBSERVER_RELATED_FILES)

    if "import" in error_message or "module" in error_message:
        related.extend(MODULE_RELATED_FILES)

    return list(dict.fromkeys(related))
