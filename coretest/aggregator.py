"""Fold classified test results into per-category tallies."""

from collections.abc import Iterable
from types import MappingProxyType

from coretest.models.discovery import TestCategory
from coretest.models.result import CaseResult, CategoryTally, RunReport


def aggregate(results: Iterable[CaseResult], *, verbose: bool = False) -> RunReport:
    """Count each outcome once, in the category of its test module."""
    ordered = tuple(results)
    tallies = {category: CategoryTally() for category in TestCategory}
    for result in ordered:
        category = result.case.module.category
        tallies[category] = tallies[category].record(result.outcome)

    return RunReport(
        verbose=verbose, categories=MappingProxyType(tallies), results=ordered
    )
