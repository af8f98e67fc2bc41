"""Render run reports in the fixed record format."""

from collections.abc import Sequence

from coretest.models.discovery import TestCategory
from coretest.models.result import CaseResult, CategoryTally, Error, Fail, RunReport

VERBOSE_MARKER = "verbose"


def _fields(marker: str, tally: CategoryTally) -> list[str]:
    return [marker, str(tally.passed), str(tally.failed), str(tally.errored)]


def format_record(report: RunReport) -> str:
    """Format tallies as ``{unit,p,f,e,integration,...,total,p,f,e}``.

    Verbose reports carry a leading ``verbose`` field; the rest is identical.
    """
    fields = [VERBOSE_MARKER] if report.verbose else []
    for marker, tally in report.tallies.items():
        fields.extend(_fields(marker, tally))
    return "{" + ",".join(fields) + "}"


def format_outcome(result: CaseResult) -> str:
    match result.outcome:
        case Fail(actual=actual, expected=expected):
            return f"fail actual={actual!r} expected={expected!r}"
        case Error(reason=reason, context=context):
            return f"error reason={reason!r} context={context}"
        case _:
            return "pass"


def format_detail(result: CaseResult) -> str:
    """Format one test case line for verbose output."""
    return (
        f"{result.case.qualified_name} {result.case.module.category} "
        f"{format_outcome(result)}"
    )


def exit_code(report: RunReport) -> int:
    """Return 0 if nothing failed or errored in any category, else 1."""
    return 0 if all(tally.is_clean for tally in report.categories.values()) else 1


def render(report: RunReport) -> tuple[Sequence[str], int]:
    """Render the report as output lines plus the process exit code."""
    lines: list[str] = []
    if report.verbose:
        lines.extend(format_detail(result) for result in report.results)
        uncategorized = report.categories[TestCategory.UNCATEGORIZED]
        lines.append(",".join(_fields(TestCategory.UNCATEGORIZED, uncategorized)))
    lines.append(format_record(report))
    return lines, exit_code(report)


def outcome_status(result: CaseResult) -> str:
    """Short status name of a result: pass, fail or error."""
    match result.outcome:
        case Fail():
            return "fail"
        case Error():
            return "error"
        case _:
            return "pass"
