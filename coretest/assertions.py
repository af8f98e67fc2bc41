"""Assertion helpers for test modules run by the harness.

Two families are provided. The plain family (``assert_equal`` etc.) returns
``PASS`` or a ``Fail`` outcome and never raises, so a test function can simply
return its result. The ``_or_raise`` family returns ``PASS`` on success and
raises ``AssertionFailure`` on mismatch.
"""

import dataclasses
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Final

from pydantic import BaseModel

from coretest.models.result import PASS, Fail, Pass

_MISSING: Final = object()


class _Anything:
    def __repr__(self) -> str:
        return "ANY"


ANY: Final = _Anything()
"""Wildcard matching any value in ``assert_match`` patterns."""


class AssertionFailure(AssertionError):
    """Raised by the ``_or_raise`` assertion family on mismatch."""

    def __init__(
        self, kind: str, actual: Any = _MISSING, expected: Any = _MISSING
    ) -> None:
        super().__init__(kind, actual, expected)
        self.kind = kind
        self.actual = actual
        self.expected = expected

    @property
    def is_complete(self) -> bool:
        """Whether both the actual and the expected value were recorded."""
        return self.actual is not _MISSING and self.expected is not _MISSING

    def __str__(self) -> str:
        if not self.is_complete:
            return f"assert_{self.kind} failed"
        return (
            f"assert_{self.kind} failed: actual={self.actual!r} "
            f"expected={self.expected!r}"
        )


def structurally_equal(left: Any, right: Any) -> bool:
    """Compare two values by shape and content without type coercion.

    Sequences, mappings, dataclasses and pydantic models are compared
    recursively; every other value must have the exact same type and be
    ``==``. ``1``, ``1.0``, ``True`` and ``"1"`` are all distinct.
    """
    return _compare(left, right, structurally_equal)


def _matches(value: Any, pattern: Any) -> bool:
    if pattern is ANY:
        return True
    if isinstance(pattern, re.Pattern):
        return isinstance(value, str) and pattern.fullmatch(value) is not None
    return _compare(value, pattern, _matches)


def _paired(
    left: Iterable[Any], right: Iterable[Any]
) -> list[tuple[Any, Any]] | None:
    """Pair the members of two hashed collections.

    Hash lookup alone treats 1, 1.0 and True as one key, so each pair must also
    be structurally equal. Returns None when the members cannot all be paired.
    """
    stored = {item: item for item in right}
    pairs: list[tuple[Any, Any]] = []
    for item in left:
        if item not in stored or not structurally_equal(item, stored[item]):
            return None
        pairs.append((item, stored[item]))
    return pairs if len(pairs) == len(stored) else None


def _compare(left: Any, right: Any, nested: Callable[[Any, Any], bool]) -> bool:
    if left is right:
        return True
    if type(left) is not type(right):
        return False

    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            nested(a, b) for a, b in zip(left, right, strict=True)
        )

    if isinstance(left, Mapping):
        pairs = _paired(left.keys(), right.keys())
        return pairs is not None and all(nested(left[a], right[b]) for a, b in pairs)

    if isinstance(left, (set, frozenset)):
        return _paired(left, right) is not None

    if dataclasses.is_dataclass(left) and not isinstance(left, type):
        return all(
            nested(getattr(left, f.name), getattr(right, f.name))
            for f in dataclasses.fields(left)
        )

    if isinstance(left, BaseModel):
        return nested(dict(left), dict(right))

    return bool(left == right)


def assert_equal(actual: Any, expected: Any) -> Pass | Fail:
    """Pass when ``actual`` is structurally equal to ``expected``."""
    if structurally_equal(actual, expected):
        return PASS
    return Fail(actual=actual, expected=expected)


def assert_not_equal(actual: Any, expected: Any) -> Pass | Fail:
    """Pass when ``actual`` differs structurally from ``expected``."""
    if not structurally_equal(actual, expected):
        return PASS
    return Fail(actual=actual, expected=expected)


def assert_true(value: Any) -> Pass | Fail:
    """Pass only for the literal ``True``."""
    return assert_equal(value, True)


def assert_false(value: Any) -> Pass | Fail:
    """Pass only for the literal ``False``."""
    return assert_equal(value, False)


def assert_match(value: Any, pattern: Any) -> Pass | Fail:
    """Pass when ``value`` matches ``pattern``.

    ``ANY`` in the pattern matches any value and a compiled regular expression
    must fully match a string. Everything else compares structurally.
    """
    if _matches(value, pattern):
        return PASS
    return Fail(actual=value, expected=pattern)


def _raise_on_fail(kind: str, result: Pass | Fail) -> Pass:
    if isinstance(result, Fail):
        raise AssertionFailure(kind, result.actual, result.expected)
    return result


def assert_equal_or_raise(actual: Any, expected: Any) -> Pass:
    return _raise_on_fail("equal", assert_equal(actual, expected))


def assert_not_equal_or_raise(actual: Any, expected: Any) -> Pass:
    return _raise_on_fail("not_equal", assert_not_equal(actual, expected))


def assert_true_or_raise(value: Any) -> Pass:
    return _raise_on_fail("true", assert_true(value))


def assert_false_or_raise(value: Any) -> Pass:
    return _raise_on_fail("false", assert_false(value))


def assert_match_or_raise(value: Any, pattern: Any) -> Pass:
    return _raise_on_fail("match", assert_match(value, pattern))
