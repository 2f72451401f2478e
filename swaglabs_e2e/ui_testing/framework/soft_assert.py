"""
================================================================================
Assertion Batch
================================================================================

Soft assertions for independent checks within one test.

Every check is evaluated and recorded; nothing is raised until the batch is
finalised, which then fails once with a message listing every failed check.

    with AssertionBatch("Cart contents") as batch:
        batch.equal(await cart.get_item_count(), 2, "item count")
        batch.contains(names, "Sauce Labs Backpack", "backpack in cart")
        batch.approx(subtotal, Decimal("39.98"), message="subtotal")

Key Features:
- check / equal / contains / approx
- One aggregated SoftAssertionError at assert_all() or block exit
- JSON summary attached to Allure at finalisation

================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List

from loguru import logger

from swaglabs_tools.report_tools.allure_utils import attach_json

from .errors import SoftAssertionError


@dataclass
class CheckResult:
    """Result of a single soft check."""
    passed: bool
    check_type: str
    message: str
    expected: Any = None
    actual: Any = None

    def describe(self) -> str:
        if self.check_type == "check":
            return self.message
        return f"{self.message}: expected {self.expected!r}, actual {self.actual!r}"


class AssertionBatch:
    """
    Accumulator of independent checks.

    Each check method returns whether it passed, so a test may branch on it,
    but failures are only raised by ``assert_all()``.
    """

    def __init__(self, name: str = "Soft assertions"):
        self.name = name
        self.results: List[CheckResult] = []
        self._finalised = False

    def __enter__(self) -> "AssertionBatch":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.assert_all()
        else:
            # The body already failed; keep its exception, still report checks.
            self._attach_summary()
        return False

    def _record(self, result: CheckResult) -> bool:
        self.results.append(result)
        if result.passed:
            logger.debug(f"[{self.name}] passed: {result.message}")
        else:
            logger.warning(f"[{self.name}] failed: {result.describe()}")
        return result.passed

    def check(self, condition: Any, message: str) -> bool:
        return self._record(CheckResult(bool(condition), "check", message))

    def equal(self, actual: Any, expected: Any, message: str = "values differ") -> bool:
        return self._record(
            CheckResult(actual == expected, "equal", message, expected, actual)
        )

    def contains(self, container: Any, item: Any, message: str = "item missing") -> bool:
        try:
            passed = item in container
        except TypeError:
            passed = False
        return self._record(CheckResult(passed, "contains", message, item, container))

    def approx(
        self,
        actual: Any,
        expected: Any,
        tolerance: Any = Decimal("0.01"),
        message: str = "values not within tolerance",
    ) -> bool:
        """
        Numeric closeness check, computed in Decimal (money-safe).
        """
        try:
            delta = abs(Decimal(str(actual)) - Decimal(str(expected)))
            passed = delta <= Decimal(str(tolerance))
        except (InvalidOperation, TypeError, ValueError):
            passed = False
        return self._record(CheckResult(passed, "approx", message, expected, actual))

    @property
    def failures(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]

    def all_passed(self) -> bool:
        return not self.failures

    def assert_all(self) -> None:
        """
        Finalise the batch.

        Raises:
            SoftAssertionError: listing every failed check
        """
        self._attach_summary()
        failures = self.failures
        if not failures:
            logger.info(f"[{self.name}] all {len(self.results)} checks passed")
            return

        lines = [f"{self.name}: {len(failures)} of {len(self.results)} checks failed"]
        lines.extend(f"  {i}. {f.describe()}" for i, f in enumerate(failures, start=1))
        message = "\n".join(lines)
        logger.error(message)
        raise SoftAssertionError(message, failures=[f.describe() for f in failures])

    def _attach_summary(self) -> None:
        if self._finalised:
            return
        self._finalised = True
        attach_json(
            {
                "batch": self.name,
                "total": len(self.results),
                "failed": len(self.failures),
                "results": [asdict(r) for r in self.results],
            },
            name=f"{self.name} (soft assertions)",
        )


__all__ = [
    "AssertionBatch",
    "CheckResult",
]
