"""Credential scrubbing for source excerpts and log output.

Test files carry credentials in plain sight: login fixtures, seeded API
keys, database URLs in global setup, storage-state JWTs. Every excerpt the
engine lifts from a test file is scrubbed here before it lands in a
DiagnosisResult, and the logging pipeline scrubs every field it renders.

Scrubbing fails closed. A pattern that does not compile, or a substitution
that errors, raises RedactionError; unscrubbed text is never returned.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
# Everything below 0x20 except \t, \n and \r, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when text cannot be scrubbed safely."""


class SecretPattern(NamedTuple):
    """A compiled credential pattern and a human-readable kind."""

    regex: re.Pattern[str]
    kind: str


class SecretRedactor:
    """Finds and masks credentials in text.

    Usage:
        redactor = SecretRedactor()
        safe_snippet = redactor.redact(snippet)
        kinds = redactor.find_secrets(snippet)  # ["Password assignment", ...]

    Extra (regex, kind) pairs can be passed as custom_patterns; they are
    applied after the built-in ones.
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # key = value in fixtures, .env files and config objects
        (
            r"(?i)(api[_-]?key|secret|token|password|passwd|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Credential assignment",
        ),
        # Authorization headers set via extraHTTPHeaders or request fixtures
        (r"(?i)\bbearer\s+[\w\-.~+/]{20,}=*", "Bearer token"),
        (r"(?i)\bbasic\s+[A-Za-z0-9+/]{16,}={0,2}", "Basic auth header"),
        # Source hosting and chat tokens used by CI helpers
        (r"ghp_[a-zA-Z0-9]{36}", "GitHub PAT"),
        (r"github_pat_[a-zA-Z0-9_]{22,}", "GitHub fine-grained PAT"),
        (r"gh[our]_[a-zA-Z0-9]{36}", "GitHub OAuth token"),
        (r"xox[baprs]-[\w-]+", "Slack token"),
        # Model provider keys
        (r"sk-ant-[\w-]{40,}", "Anthropic API key"),
        (r"sk-proj-[a-zA-Z0-9]{20,}", "OpenAI project API key"),
        (r"sk-[a-zA-Z0-9]{48}", "OpenAI API key"),
        # Cloud and payment keys
        (r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"sk_live_[a-zA-Z0-9]{24,}", "Stripe secret key"),
        # user:password@host URLs from e2e database setup
        (
            r"(?i)(postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis|amqp)://[^:\s]+:[^@\s]+@\S+",
            "Database URL",
        ),
        (r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----", "Private key"),
        # Session cookies and saved storage state
        (r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*", "JWT"),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Compile the built-in and custom patterns.

        Args:
            placeholder: Replacement text for each match.
            custom_patterns: Additional (regex, kind) pairs.

        Raises:
            RedactionError: If a pattern does not compile.
        """
        self.placeholder = placeholder
        self._compiled = tuple(
            self._compile(source, kind)
            for source, kind in (*self.DEFAULT_PATTERNS, *(custom_patterns or ()))
        )

    @staticmethod
    def _compile(source: str, kind: str) -> SecretPattern:
        try:
            return SecretPattern(re.compile(source), kind)
        except re.error as e:
            log.error("secret_pattern_invalid", kind=kind, error=str(e))
            raise RedactionError(f"Invalid secret pattern for {kind!r}: {e}") from e

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Compiled expressions in the order they are applied."""
        return [entry.regex for entry in self._compiled]

    def redact(self, text: str) -> str:
        """Return text with every credential match replaced by the placeholder.

        Raises:
            RedactionError: If any substitution fails.
        """
        if not text:
            return text

        scrubbed = text
        try:
            for entry in self._compiled:
                scrubbed = entry.regex.sub(self.placeholder, scrubbed)
        except (re.error, IndexError, TypeError) as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e
        return scrubbed

    def find_secrets(self, text: str) -> list[str]:
        """Return the kinds of credential present in text, in pattern order."""
        if not text:
            return []
        return [entry.kind for entry in self._compiled if entry.regex.search(text)]

    def has_secrets(self, text: str) -> bool:
        """Check whether text contains any credential."""
        return bool(self.find_secrets(text))


def sanitize_for_logging(text: str) -> str:
    """Strip terminal escape sequences and control characters.

    Runner output is usually colorized. Newlines, tabs and carriage returns
    are kept so stack traces stay readable.
    """
    if not text:
        return text
    return _CONTROL_CHARS.sub("", _ANSI_ESCAPE.sub("", text))
