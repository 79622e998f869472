"""Selector and interaction metadata extraction for UI-automation errors."""

from __future__ import annotations

import re

import structlog

from failure_diagnosis.models.diagnosis import LocatorDetails

log = structlog.get_logger()

# (pattern, framework), tried in order; the first match decides both
SELECTOR_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"Selector:\s*(.+?)(?:\n|$)", re.IGNORECASE), "playwright"),
    (re.compile(r"locator\s*\(\s*[\"']([^\"']+)[\"']\s*\)", re.IGNORECASE), "playwright"),
    (re.compile(r"Expected to find element:\s*(.+?)(?:\n|$)", re.IGNORECASE), "cypress"),
    (re.compile(r"\"selector\":\"([^\"]+)\"", re.IGNORECASE), "selenium"),
    (re.compile(r"click\s*\(\s*[\"']([^\"']+)[\"']\s*\)", re.IGNORECASE), "generic"),
    (re.compile(r"waitForSelector\s*\(\s*[\"']([^\"']+)[\"']", re.IGNORECASE), "generic"),
)

TIMEOUT_PATTERN = re.compile(r"Timeout\s+(\d+)ms", re.IGNORECASE)

ACTION_PATTERNS = (
    re.compile(r"locator\.(\w+):", re.IGNORECASE),  # Playwright: locator.click:
    re.compile(r"cy\.(\w+)\(", re.IGNORECASE),  # Cypress: cy.click(
    re.compile(r"(\w+)Element", re.IGNORECASE),  # Selenium: clickElement
)

# Checked in order; a later hit overwrites an earlier one
EXPECTED_STATES = ("clickable", "visible", "hidden")


class LocatorExtractor:
    """Pulls selector, action, timeout and expected state out of a message.

    Example:
        details = LocatorExtractor().extract(
            "locator.click: Timeout 5000ms exceeded waiting for locator('#submit')"
        )
        assert details.selector == "#submit"
    """

    def extract(self, error_message: str) -> LocatorDetails:
        """Extract UI-interaction metadata from an error message.

        Args:
            error_message: Raw error message

        Returns:
            LocatorDetails; ``selector`` is empty and ``action`` is
            "unknown" when nothing was found
        """
        selector, framework = self._extract_selector(error_message)

        details = LocatorDetails(
            selector=selector,
            action=self._extract_action(error_message),
            timeout=self._extract_timeout(error_message),
            expected_state=self._extract_expected_state(error_message),
            framework=framework,
        )

        if selector:
            log.debug("locator_extracted", selector=selector, framework=framework)

        return details

    def _extract_selector(self, error_message: str) -> tuple[str, str | None]:
        for pattern, framework in SELECTOR_PATTERNS:
            match = pattern.search(error_message)
            if match and match.group(1):
                return match.group(1).strip(), framework
        return "", None

    def _extract_timeout(self, error_message: str) -> str | None:
        match = TIMEOUT_PATTERN.search(error_message)
        if match is None:
            return None
        return f"{match.group(1)}ms"

    def _extract_action(self, error_message: str) -> str:
        for pattern in ACTION_PATTERNS:
            match = pattern.search(error_message)
            if match:
                return match.group(1)
        return "unknown"

    def _extract_expected_state(self, error_message: str) -> str | None:
        # Last matching state wins: "visible ... hidden" yields "hidden"
        expected_state = None
        for state in EXPECTED_STATES:
            if state in error_message:
                expected_state = state
        return expected_state
