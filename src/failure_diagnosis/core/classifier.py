"""Weighted error-type classification.

Every rule whose pattern matches the message is a candidate; the candidate
with the greatest weight wins. Rules are scanned in table order and the best
match is only replaced on a strictly greater weight, so the first rule to
reach the maximum weight wins ties. Reordering ``CLASSIFICATION_RULES``
therefore changes results for messages that hit several equal-weight rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from failure_diagnosis.models.diagnosis import Classification

log = structlog.get_logger()

UNKNOWN_ERROR = "unknown-error"


@dataclass(frozen=True)
class ClassificationRule:
    """A weighted pattern that maps a message to an error type tag."""

    pattern: re.Pattern[str]
    error_type: str
    weight: int

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


def _rule(pattern: str, error_type: str, weight: int) -> ClassificationRule:
    return ClassificationRule(re.compile(pattern, re.IGNORECASE), error_type, weight)


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    # Playwright / generic test-runner errors
    _rule(r"webServer.*timeout|Timed out.*webServer", "webserver-lifecycle-timeout", 10),
    _rule(
        r"locator.*timeout|waiting.*timeout.*locator|Timeout.*waiting for locator",
        "element-timeout",
        9,
    ),
    _rule(r"page.*timeout|navigation.*timeout|goto.*timeout", "page-navigation-timeout", 8),
    _rule(
        r"element.*not.*visible|locator.*not.*visible|element.*hidden",
        "element-not-visible",
        8,
    ),
    _rule(
        r"element.*not.*attached|locator.*not.*attached|element.*detached",
        "element-detached",
        8,
    ),
    _rule(
        r"intercepts pointer events|element.*other element|covered by",
        "element-intercepted",
        9,
    ),
    _rule(
        r"strict mode violation|multiple elements|found \d+ elements",
        "multiple-elements-found",
        8,
    ),
    _rule(r"selector.*resolved to.*elements|0 elements found", "element-not-found", 8),
    # Cypress
    _rule(r"cy\.[^(]+\(\).*failed|cypress.*command.*failed", "cypress-command-failed", 9),
    _rule(
        r"expected.*element.*to.*exist|element.*does not exist",
        "cypress-element-not-exist",
        8,
    ),
    _rule(
        r"element.*is.*not.*actionable|element.*cannot.*be.*interacted",
        "cypress-element-not-actionable",
        8,
    ),
    # Selenium
    _rule(
        r"NoSuchElementException|element.*not.*found|Unable to locate element",
        "selenium-element-not-found",
        8,
    ),
    _rule(
        r"ElementNotInteractableException|element.*not.*interactable",
        "selenium-element-not-interactable",
        8,
    ),
    _rule(
        r"StaleElementReferenceException|stale.*element.*reference",
        "selenium-stale-element",
        9,
    ),
    _rule(r"TimeoutException.*selenium|WebDriverWait.*timeout", "selenium-timeout", 8),
    # JavaScript / TypeScript runtime
    _rule(r"ReferenceError.*not defined", "undefined-variable", 10),
    _rule(r"TypeError.*null|Cannot read.*null|null.*is not an object", "null-reference", 9),
    _rule(
        r"TypeError.*undefined|Cannot read.*undefined|undefined.*is not an object",
        "undefined-reference",
        9,
    ),
    _rule(r"TypeError.*not a function|is not a function", "function-not-found", 9),
    _rule(r"SyntaxError", "syntax-error", 8),
    _rule(
        r"Cannot access.*before initialization|temporal dead zone",
        "temporal-dead-zone",
        8,
    ),
    _rule(r"Maximum call stack size exceeded|stack overflow", "stack-overflow", 9),
    # Async / promises
    _rule(
        r"UnhandledPromiseRejectionWarning|unhandled promise rejection",
        "unhandled-promise-rejection",
        8,
    ),
    _rule(r"await.*is only valid|await.*outside.*async", "await-outside-async", 8),
    # Network / HTTP
    _rule(r"fetch.*failed|Network.*error|Failed to fetch", "network-request-failed", 8),
    _rule(r"ECONNREFUSED|connection refused", "connection-refused", 9),
    _rule(r"timeout.*request|request.*timeout|ETIMEDOUT", "request-timeout", 7),
    _rule(r"ENOTFOUND|getaddrinfo.*ENOTFOUND", "dns-resolution-failed", 8),
    _rule(r"403.*Forbidden|forbidden.*request", "api-forbidden", 7),
    _rule(r"401.*Unauthorized|unauthorized.*request", "api-unauthorized", 7),
    _rule(r"404.*Not Found|not.*found.*endpoint", "api-not-found", 7),
    _rule(r"500.*Internal Server Error|server.*error", "api-server-error", 7),
    _rule(r"CORS.*error|Cross-Origin.*blocked", "cors-error", 8),
    # Modules / imports
    _rule(
        r"Cannot find module|Module not found|Cannot resolve module",
        "module-not-found",
        9,
    ),
    _rule(
        r"import.*error|export.*error|Invalid or unexpected token.*import",
        "import-export-error",
        8,
    ),
    _rule(
        r"Unexpected token.*export|Unexpected reserved word.*export",
        "es6-module-error",
        8,
    ),
    # Configuration / build
    _rule(
        r"config.*error|configuration.*invalid|Invalid configuration",
        "configuration-error",
        7,
    ),
    _rule(r"tsconfig.*error|TypeScript.*configuration", "typescript-config-error", 7),
    _rule(r"webpack.*error|bundle.*error|Build failed", "build-error", 7),
    # Database
    _rule(r"database.*error|sql.*error|connection.*database", "database-error", 8),
    _rule(r"migration.*failed|schema.*error", "database-migration-error", 8),
    # Authentication / authorization
    _rule(r"authentication.*failed|auth.*error|login.*failed", "authentication-error", 8),
    _rule(
        r"permission.*denied|access.*denied|insufficient.*privileges",
        "permission-denied",
        8,
    ),
    # Memory / resources
    _rule(r"out of memory|memory.*exceeded|heap.*out of memory", "memory-error", 9),
    _rule(r"EMFILE|too many open files|file descriptor", "file-descriptor-limit", 8),
    # React
    _rule(r"Warning.*React|React.*warning|Invalid hook call", "react-warning", 6),
    _rule(
        r"Cannot update.*unmounted component|memory leak.*component",
        "react-memory-leak",
        8,
    ),
    _rule(r"Maximum update depth exceeded|infinite.*render", "react-infinite-render", 9),
)


class ErrorClassifier:
    """Maps an error message to a single error type tag.

    Example:
        classifier = ErrorClassifier()
        result = classifier.classify("ReferenceError: foo is not defined")
        assert result.error_type == "undefined-variable"
    """

    def __init__(self, rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES) -> None:
        """Initialize the classifier.

        Args:
            rules: Ordered rule table; order decides ties
        """
        self._rules = rules

    @property
    def rules(self) -> tuple[ClassificationRule, ...]:
        """The rule table, in evaluation order."""
        return self._rules

    def classify(self, message: str) -> Classification:
        """Select the highest-weight rule matching the message.

        Args:
            message: Raw error message

        Returns:
            Classification with the winning tag, or ``unknown-error`` with
            weight 0 if no rule matches
        """
        best_type = UNKNOWN_ERROR
        best_weight = 0

        for rule in self._rules:
            if rule.weight > best_weight and rule.matches(message):
                best_type = rule.error_type
                best_weight = rule.weight

        log.debug("error_classified", error_type=best_type, weight=best_weight)
        return Classification(error_type=best_type, weight=best_weight)

    def matching_rules(self, message: str) -> list[ClassificationRule]:
        """Return every rule that matches the message, in table order."""
        return [rule for rule in self._rules if rule.matches(message)]
