"""Fixtures for integration tests."""

import textwrap
from pathlib import Path
from typing import Protocol

import pytest

from coretest.harness import TestHarness
from coretest.models.config import HarnessConfig
from coretest.toolchains.python import PythonToolchain


class WriteModuleFn(Protocol):
    """Protocol for test module creation function."""

    def __call__(self, relative_path: str, source: str) -> Path:
        """Write a test module below the root and return its path."""


@pytest.fixture
def test_root(tmp_path: Path) -> Path:
    """Create an empty root directory for test modules."""
    root = tmp_path / "suite"
    root.mkdir()
    return root


@pytest.fixture
def write_module(test_root: Path) -> WriteModuleFn:
    """Return a function to write test modules into the root."""

    def _write(relative_path: str, source: str) -> Path:
        path = test_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def harness() -> TestHarness:
    """Create a harness using the Python toolchain."""
    return TestHarness(toolchain=PythonToolchain(), config=HarnessConfig(timeout=10.0))
