"""Classify raw invocation results into pass, fail or error outcomes."""

from coretest.assertions import AssertionFailure
from coretest.models.invocation import Raised, RawResult, Returned
from coretest.models.result import PASS, Error, Fail, Outcome, Pass


def classify(raw: RawResult, *, context: str) -> Outcome:
    """Interpret what a test function returned or raised.

    A returned ``Pass`` or ``Fail`` is taken as is, and a complete
    ``AssertionFailure`` becomes a ``Fail``. Any other exception is an
    ``Error`` carrying ``context``. Any other returned value is a pass,
    since no failure was signalled.

    Args:
        raw: The captured return value or exception
        context: Name of the test function, recorded on errors

    """
    match raw:
        case Returned(value=Pass() as outcome):
            return outcome
        case Returned(value=Fail() as outcome):
            return outcome
        case Raised(exception=AssertionFailure() as failure) if failure.is_complete:
            return Fail(actual=failure.actual, expected=failure.expected)
        case Raised(exception=exception):
            return Error(reason=exception, context=context)
        case _:
            return PASS
