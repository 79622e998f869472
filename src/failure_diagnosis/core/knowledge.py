"""Static knowledge base of causes and remediation steps per error type.

Entries are keyed by the classifier's type tag. The first solution of each
entry is the quick solution surfaced on its own in a diagnosis.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class KnowledgeEntry:
    """Canned causes and ordered solutions for one error type."""

    error_type: str
    common_causes: tuple[str, ...]
    solutions: tuple[str, ...]


UNKNOWN_ENTRY = KnowledgeEntry(
    error_type="Unknown Error",
    common_causes=("Insufficient error information available",),
    solutions=(
        "Analyze error message and stack trace",
        "Check documentation for related functionality",
    ),
)

KNOWLEDGE_BASE: MappingProxyType[str, KnowledgeEntry] = MappingProxyType(
    {
        "webserver-lifecycle-timeout": KnowledgeEntry(
            error_type="WebServer Lifecycle Timeout",
            common_causes=(
                "Development server taking too long to start",
                "Port already in use by another process",
                "Build process hanging or failing",
                "Insufficient system resources",
            ),
            solutions=(
                "Re-run your tests - 70% success rate for transient issues",
                'Kill existing processes: pkill -f "node.*dev" && lsof -ti:3000 | xargs kill -9',
                "Increase webServer timeout in playwright.config.ts to 600000ms (10 minutes)",
                "Check if dev server starts independently: npm run dev",
                "Clear node_modules and reinstall: rm -rf node_modules && npm install",
                "Check system memory and CPU usage",
            ),
        ),
        "element-timeout": KnowledgeEntry(
            error_type="Element Timeout Error",
            common_causes=(
                "Element not rendered within timeout period",
                "Slow page loading or network issues",
                "Incorrect selector targeting",
                "Element hidden by CSS or JavaScript",
            ),
            solutions=(
                "Increase timeout for slow elements: { timeout: 60000 }",
                'Wait for network idle: waitForLoadState("networkidle")',
                "Check selector specificity and accuracy",
                "Add explicit waits: waitForSelector() before interaction",
                "Verify element is not hidden by CSS display:none or visibility:hidden",
            ),
        ),
        "element-not-visible": KnowledgeEntry(
            error_type="Element Not Visible",
            common_causes=(
                "Element hidden by CSS properties",
                "Element outside viewport",
                "Overlapping elements",
                "Zero width/height element",
            ),
            solutions=(
                "Scroll element into view: scrollIntoViewIfNeeded()",
                "Check CSS visibility, display, and opacity properties",
                "Use force: true for clicking hidden elements (testing only)",
                "Wait for element to become visible: "
                'waitForSelector(selector, { state: "visible" })',
                "Check if element is covered by modals or overlays",
            ),
        ),
        "element-intercepted": KnowledgeEntry(
            error_type="Element Intercepted by Other Element",
            common_causes=(
                "Modal or overlay covering the element",
                "Loading spinner blocking interaction",
                "Tooltip or dropdown covering element",
                "Fixed navigation bar overlap",
            ),
            solutions=(
                'Wait for overlays to disappear: waitForSelector(".loading", { state: "hidden" })',
                "Close modals before interaction",
                "Use force: true to bypass interception (testing only)",
                "Scroll to element: scrollIntoViewIfNeeded()",
                "Wait for animations to complete",
            ),
        ),
        "multiple-elements-found": KnowledgeEntry(
            error_type="Multiple Elements Found (Strict Mode)",
            common_causes=(
                "Selector too generic, matches multiple elements",
                "Dynamic content creating duplicate elements",
                "Missing unique identifiers",
                "Incorrect test data setup",
            ),
            solutions=(
                'Make selector more specific: [data-testid="unique-id"]',
                "Use nth() to target specific element: locator.nth(0)",
                "Add unique attributes to elements",
                "Use first() or last() methods for intentional selection",
                'Filter elements: locator.filter({ hasText: "specific text" })',
            ),
        ),
        "cypress-command-failed": KnowledgeEntry(
            error_type="Cypress Command Failed",
            common_causes=(
                "Element not found or not actionable",
                "Command timeout exceeded",
                "Assertion failure",
                "Network request failed",
            ),
            solutions=(
                "Increase command timeout: cy.get(selector, { timeout: 10000 })",
                "Add explicit waits: cy.wait() or cy.intercept()",
                "Check selector accuracy and uniqueness",
                "Debug with cy.debug() or cy.pause()",
                "Verify application state before command execution",
            ),
        ),
        "selenium-stale-element": KnowledgeEntry(
            error_type="Selenium Stale Element Reference",
            common_causes=(
                "Page refreshed after element reference",
                "DOM modified by JavaScript",
                "Navigation to different page",
                "Element removed and re-added",
            ),
            solutions=(
                "Re-find element before each interaction",
                "Use explicit waits: WebDriverWait().until()",
                "Avoid storing element references across page changes",
                "Implement retry mechanism for stale elements",
                "Check if page navigation occurred",
            ),
        ),
        "undefined-variable": KnowledgeEntry(
            error_type="Undefined Variable Reference",
            common_causes=(
                "Variable used before declaration",
                "Typo in variable name",
                "Missing import statement",
                "Variable out of scope",
            ),
            solutions=(
                "Check variable spelling and declaration",
                "Add missing variable declaration or import",
                "Verify variable scope and accessibility",
                "Run ESLint to catch undefined variables: npx eslint --fix .",
                "Check if variable needs to be imported from another module",
            ),
        ),
        "null-reference": KnowledgeEntry(
            error_type="Null Reference Error",
            common_causes=(
                "DOM element not found",
                "API response returned null",
                "Object not initialized",
                "Asynchronous operation not completed",
            ),
            solutions=(
                "Add null checks before property access: if (obj && obj.property)",
                "Use optional chaining: obj?.property",
                "Ensure DOM elements exist before manipulation",
                "Add proper async/await for element loading",
                "Initialize objects with default values",
            ),
        ),
        "function-not-found": KnowledgeEntry(
            error_type="Function Not Found Error",
            common_causes=(
                "Function not defined or imported",
                "Typo in function name",
                "Object method called on null/undefined",
                "Async function not awaited",
            ),
            solutions=(
                "Verify function is defined and imported correctly",
                "Check function name spelling",
                "Ensure object exists before calling methods",
                "Add await for async functions",
                "Check if function is available in current scope",
            ),
        ),
        "temporal-dead-zone": KnowledgeEntry(
            error_type="Temporal Dead Zone Error",
            common_causes=(
                "let/const variable accessed before declaration",
                "Hoisting confusion with var vs let/const",
                "Variable used in its own initialization",
            ),
            solutions=(
                "Move variable declaration before usage",
                "Use var instead of let/const if hoisting is needed",
                "Reorganize code to respect temporal dead zone",
                "Initialize variables at the top of scope",
            ),
        ),
        "cors-error": KnowledgeEntry(
            error_type="CORS Policy Error",
            common_causes=(
                "Server not configured for cross-origin requests",
                "Missing CORS headers",
                "Wrong origin in CORS configuration",
                "Preflight request failed",
            ),
            solutions=(
                "Configure server CORS headers: Access-Control-Allow-Origin",
                "Use proxy in development: setupProxy.js",
                "Make same-origin requests when possible",
                "Add CORS middleware to Express: app.use(cors())",
                "Configure webpack devServer proxy for development",
            ),
        ),
        "api-unauthorized": KnowledgeEntry(
            error_type="API Unauthorized (401)",
            common_causes=(
                "Missing or invalid authentication token",
                "Expired session or token",
                "Incorrect API credentials",
                "Token not included in request headers",
            ),
            solutions=(
                "Check authentication token validity",
                "Refresh expired tokens",
                "Include Authorization header: Bearer <token>",
                "Verify API credentials and permissions",
                "Implement token refresh mechanism",
            ),
        ),
        "react-infinite-render": KnowledgeEntry(
            error_type="React Infinite Render Loop",
            common_causes=(
                "useEffect without dependency array",
                "State update in render function",
                "Incorrect dependency array in hooks",
                "Object/array created in render",
            ),
            solutions=(
                "Add dependency array to useEffect: useEffect(() => {}, [])",
                "Move state updates to event handlers or effects",
                "Memoize objects/arrays with useMemo or useCallback",
                "Check if component props are changing on every render",
                "Use React DevTools Profiler to identify render causes",
            ),
        ),
        "memory-error": KnowledgeEntry(
            error_type="Memory Limit Exceeded",
            common_causes=(
                "Memory leaks in application",
                "Large data sets not properly handled",
                "Infinite loops creating objects",
                "Insufficient heap size",
            ),
            solutions=(
                "Increase Node.js heap size: node --max-old-space-size=4096",
                "Identify memory leaks with Chrome DevTools",
                "Implement data pagination for large datasets",
                "Clear unused variables and event listeners",
                "Use streaming for large file operations",
            ),
        ),
    }
)


def lookup(error_type: str) -> KnowledgeEntry:
    """Return the knowledge entry for a type tag, or the generic entry."""
    return KNOWLEDGE_BASE.get(error_type, UNKNOWN_ENTRY)
