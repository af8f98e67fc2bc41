"""Tests for result classification."""

import pytest

from coretest.assertions import AssertionFailure
from coretest.classifier import classify
from coretest.models.invocation import Raised, Returned
from coretest.models.result import PASS, Error, Fail, Pass


def test_returned_pass_is_pass() -> None:
    """The success marker classifies as Pass."""
    assert classify(Returned(value=PASS), context="test_ok") == Pass()


def test_returned_fail_is_preserved_verbatim() -> None:
    """A returned Fail keeps its actual and expected values."""
    fail = Fail(actual={"a": [1]}, expected={"a": [2]})

    assert classify(Returned(value=fail), context="test_bad") is fail


def test_raised_assertion_failure_is_fail() -> None:
    """A complete raised AssertionFailure classifies as Fail."""
    raw = Raised(exception=AssertionFailure("equal", 1, 2))

    assert classify(raw, context="test_bad") == Fail(actual=1, expected=2)


def test_incomplete_assertion_failure_is_error() -> None:
    """An AssertionFailure missing values classifies as Error."""
    failure = AssertionFailure("equal", 1)

    outcome = classify(Raised(exception=failure), context="test_partial")

    assert outcome == Error(reason=failure, context="test_partial")


@pytest.mark.parametrize(
    "exception",
    [
        ZeroDivisionError("division by zero"),
        AssertionError("bare assert"),
        KeyError("missing"),
        SystemExit(3),
    ],
)
def test_other_raised_payloads_are_errors(exception: BaseException) -> None:
    """Any raised payload other than a complete AssertionFailure is an Error."""
    outcome = classify(Raised(exception=exception), context="test_crash")

    assert isinstance(outcome, Error)
    assert outcome.reason is exception
    assert outcome.context == "test_crash"


@pytest.mark.parametrize("value", [None, 42, "ok", True, False, [1, 2]])
def test_other_returned_values_are_pass(value: object) -> None:
    """Returning anything without a failure signal counts as passing."""
    assert classify(Returned(value=value), context="test_value") == PASS


def test_returned_error_value_is_not_special() -> None:
    """Only Pass and Fail markers are recognised among returned values."""
    raw = Returned(value=Error(reason="x", context="y"))

    assert classify(raw, context="test_value") == PASS
