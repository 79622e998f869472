"""Shared test fixtures for failure-diagnosis."""

from pathlib import Path

import pytest

from failure_diagnosis.core.engine import DiagnosisEngine

SPEC_FILE_CONTENT = """import { test, expect } from '@playwright/test';

test.describe('checkout', () => {
  test('submits the order', async ({ page }) => {
    await page.goto('/checkout');
    await page.fill('#card', '4242424242424242');
    await page.locator('#submit').click();
    await expect(page.locator('.confirmation')).toBeVisible();
  });
});
"""


@pytest.fixture
def engine() -> DiagnosisEngine:
    """Create a DiagnosisEngine with default configuration."""
    return DiagnosisEngine()


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    """Write a small Playwright spec file and return its path."""
    path = tmp_path / "tests" / "checkout.spec.ts"
    path.parent.mkdir(parents=True)
    path.write_text(SPEC_FILE_CONTENT)
    return path


@pytest.fixture
def playwright_timeout() -> str:
    """Return a Playwright locator timeout message without a stack."""
    return (
        "TimeoutError: locator.click: Timeout 30000ms exceeded "
        "waiting for locator('button')"
    )


@pytest.fixture
def playwright_failure(spec_file: Path) -> str:
    """Return a Playwright failure whose stack points into spec_file (line 7)."""
    return (
        "Error: locator.click: Timeout 5000ms exceeded.\n"
        "Call log:\n"
        "  - waiting for locator('#submit')\n"
        "\n"
        "    at Page.click (/app/node_modules/playwright-core/lib/page.js:120:14)\n"
        f"    at {spec_file}:7:37\n"
        "    at processTicksAndRejections (node:internal/process/task_queues:95:5)\n"
    )
