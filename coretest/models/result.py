"""Models for test outcomes and aggregated run results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from coretest.models.discovery import TestCase, TestCategory


@dataclass(frozen=True)
class Pass:
    """The test case succeeded."""


@dataclass(frozen=True, kw_only=True)
class Fail:
    """An assertion reported a mismatch between actual and expected values."""

    actual: Any
    expected: Any


@dataclass(frozen=True, kw_only=True)
class Error:
    """Anything other than an assertion mismatch went wrong.

    Covers compile failures, unexpected exceptions and timeouts. ``context`` is
    the module path for compile failures and the function name otherwise.
    """

    reason: Any
    context: str


Outcome = Pass | Fail | Error

PASS = Pass()


@dataclass(frozen=True, kw_only=True)
class CaseResult:
    """A test case paired with its classified outcome."""

    case: TestCase
    outcome: Outcome
    duration: float = 0.0


@dataclass(frozen=True, kw_only=True)
class CategoryTally:
    """Pass/fail/error counters for one category or for the whole run."""

    passed: int = 0
    failed: int = 0
    errored: int = 0

    def __add__(self, other: "CategoryTally") -> "CategoryTally":
        return CategoryTally(
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            errored=self.errored + other.errored,
        )

    def record(self, outcome: Outcome) -> "CategoryTally":
        """Return a tally with the counter matching ``outcome`` incremented."""
        match outcome:
            case Pass():
                return CategoryTally(
                    passed=self.passed + 1, failed=self.failed, errored=self.errored
                )
            case Fail():
                return CategoryTally(
                    passed=self.passed, failed=self.failed + 1, errored=self.errored
                )
            case Error():
                return CategoryTally(
                    passed=self.passed, failed=self.failed, errored=self.errored + 1
                )
        raise TypeError(f"Not an outcome: {outcome!r}")

    @property
    def count(self) -> int:
        return self.passed + self.failed + self.errored

    @property
    def is_clean(self) -> bool:
        return self.failed == 0 and self.errored == 0


def _empty_tallies() -> Mapping[TestCategory, CategoryTally]:
    return MappingProxyType({category: CategoryTally() for category in TestCategory})


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Aggregated result of one harness invocation.

    ``categories`` holds one tally per category, Uncategorized included; the
    total is always derived from them so it cannot drift.
    """

    verbose: bool = False
    categories: Mapping[TestCategory, CategoryTally] = field(
        default_factory=_empty_tallies
    )
    results: Sequence[CaseResult] = ()

    @property
    def total(self) -> CategoryTally:
        total = CategoryTally()
        for tally in self.categories.values():
            total = total + tally
        return total

    @property
    def tallies(self) -> Mapping[str, CategoryTally]:
        """Reported tallies keyed by their wire-format marker."""
        return {
            TestCategory.UNIT.value: self.categories[TestCategory.UNIT],
            TestCategory.INTEGRATION.value: self.categories[TestCategory.INTEGRATION],
            TestCategory.SYSTEM.value: self.categories[TestCategory.SYSTEM],
            "total": self.total,
        }

    def __add__(self, other: "RunReport") -> "RunReport":
        return RunReport(
            verbose=self.verbose or other.verbose,
            categories=MappingProxyType(
                {
                    category: self.categories[category] + other.categories[category]
                    for category in TestCategory
                }
            ),
            results=(*self.results, *other.results),
        )
