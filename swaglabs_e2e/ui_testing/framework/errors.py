"""
================================================================================
Framework Errors
================================================================================

Exception taxonomy shared by the UI framework.

    ConfigurationError       required setting missing/invalid, aborts the run
    SessionStartError        browser failed to launch, aborts a single test
    ElementTimeoutError      element did not reach the expected state in time
    NavigationTimeoutError   expected URL/screen did not appear in time
    AssertionFailure         an explicit verification did not hold
    SoftAssertionError       aggregated failure raised by an AssertionBatch
    TeardownWarning          session close / artifact capture problem (logged)

Timeouts are *infrastructure* failures; assertion errors are *assertion*
failures. ``classify_failure`` tells them apart for reporting.

================================================================================
"""

from __future__ import annotations

from typing import Optional

from loguru import logger


class FrameworkError(Exception):
    """Base class for infrastructure errors raised by the framework."""
    pass


class ConfigurationError(FrameworkError):
    """Raised when configuration loading or access fails."""
    pass


class SessionStartError(FrameworkError):
    """Raised when a browser session cannot be launched or opened."""
    pass


class ElementTimeoutError(FrameworkError):
    """Raised when an element does not become visible/enabled within the timeout."""

    def __init__(self, element_name: str, timeout_ms: int, details: str = ""):
        self.element_name = element_name
        self.timeout_ms = timeout_ms
        message = f"Element '{element_name}' not ready within {timeout_ms}ms"
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class NavigationTimeoutError(FrameworkError):
    """Raised when the expected page/URL does not load within the timeout."""

    def __init__(self, target: str, timeout_ms: int, current_url: Optional[str] = None):
        self.target = target
        self.timeout_ms = timeout_ms
        self.current_url = current_url
        message = f"Navigation to '{target}' did not complete within {timeout_ms}ms"
        if current_url:
            message = f"{message} (current URL: {current_url})"
        super().__init__(message)


class AssertionFailure(AssertionError):
    """An explicit verification or assertion did not hold."""
    pass


class SoftAssertionError(AssertionFailure):
    """Aggregated failure listing every failed check of an AssertionBatch."""

    def __init__(self, message: str, failures=None):
        super().__init__(message)
        self.failures = list(failures or [])


class TeardownWarning(UserWarning):
    """Non-fatal problem while closing a session or capturing artifacts."""
    pass


def report_teardown_problem(message: str, error: Optional[BaseException] = None) -> TeardownWarning:
    """
    Log a teardown problem without raising it.

    Returns the TeardownWarning so callers can keep a record of it.
    """
    detail = f"{message}: {error}" if error is not None else message
    logger.warning(f"[TeardownWarning] {detail}")
    return TeardownWarning(detail)


def classify_failure(error: Optional[BaseException]) -> str:
    """
    Classify a test failure cause for triage.

    Returns:
        ``"assertion"`` for assertion mismatches, ``"infrastructure"`` for
        everything else (timeouts, missing elements, session problems).
    """
    if isinstance(error, AssertionError):
        return "assertion"
    return "infrastructure"


__all__ = [
    "FrameworkError",
    "ConfigurationError",
    "SessionStartError",
    "ElementTimeoutError",
    "NavigationTimeoutError",
    "AssertionFailure",
    "SoftAssertionError",
    "TeardownWarning",
    "report_teardown_problem",
    "classify_failure",
]
