"""Models for discovered test modules and test cases."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class TestCategory(StrEnum):
    """Category of a test module, derived from its parent directory name."""

    __test__ = False

    UNIT = "unit"
    INTEGRATION = "integration"
    SYSTEM = "system"
    UNCATEGORIZED = "uncategorized"

    @classmethod
    def from_directory(cls, name: str) -> "TestCategory":
        """Map a parent directory name to a category (case-sensitive)."""
        if name in (cls.UNIT, cls.INTEGRATION, cls.SYSTEM):
            return cls(name)
        return cls.UNCATEGORIZED


@dataclass(frozen=True, kw_only=True)
class TestModule:
    """A discovered source file matching the test module convention."""

    __test__ = False

    path: Path
    category: TestCategory


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """One test function within a compiled test module."""

    __test__ = False

    module: TestModule
    function_name: str
    arity: int = 0

    @property
    def qualified_name(self) -> str:
        return f"{self.module.path}::{self.function_name}/{self.arity}"
