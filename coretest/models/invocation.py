"""Models for the raw result of invoking a test function."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, kw_only=True)
class Returned:
    """The test function returned normally."""

    value: Any


@dataclass(frozen=True, kw_only=True)
class Raised:
    """The test function raised; the exception is kept as the payload."""

    exception: BaseException


type RawResult = Returned | Raised
