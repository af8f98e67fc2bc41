"""Discover test modules in a directory tree."""

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

from coretest.models.discovery import TestCategory, TestModule

log = logging.getLogger(__name__)


def discover(
    root: Path,
    *,
    suffixes: Collection[str] = (".py",),
    module_suffix: str = "_test",
    exclude_dirs: Collection[str] = (),
) -> Sequence[TestModule]:
    """Find test modules below ``root`` in deterministic path order.

    Args:
        root: Directory to walk recursively
        suffixes: Source file extensions of the toolchain (e.g., [".py"])
        module_suffix: Suffix a file stem must end with (e.g., "_test")
        exclude_dirs: Directory names that are never descended into

    Returns:
        Test modules sorted by path. Empty if ``root`` is not a directory.

    """
    if not root.is_dir():
        log.warning("Test root %s is not a readable directory", root)
        return []

    modules: list[TestModule] = []
    for directory, dirnames, filenames in root.walk(on_error=_skip_unreadable):
        dirnames[:] = sorted(name for name in dirnames if name not in exclude_dirs)

        category = (
            TestCategory.UNCATEGORIZED
            if directory == root
            else TestCategory.from_directory(directory.name)
        )
        modules.extend(
            TestModule(path=directory / filename, category=category)
            for filename in filenames
            if is_test_module(Path(filename), suffixes, module_suffix)
        )

    return sorted(modules, key=lambda module: module.path)


def is_test_module(path: Path, suffixes: Collection[str], module_suffix: str) -> bool:
    """Check if a file name follows the test module naming convention."""
    return path.suffix in suffixes and path.stem.endswith(module_suffix)


def _skip_unreadable(error: OSError) -> None:
    log.warning("Skipping unreadable entry %s: %s", error.filename, error.strerror)
