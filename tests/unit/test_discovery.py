"""Tests for test module discovery."""

import errno
import logging
import os
from pathlib import Path

import pytest

from coretest.discovery import discover, is_test_module
from coretest.models.discovery import TestCategory, TestModule


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


def test_finds_modules_by_suffix(tmp_path: Path) -> None:
    """Only files whose stem ends with _test and have a source suffix match."""
    _touch(tmp_path, "a_test.py")
    _touch(tmp_path, "test_b.py")
    _touch(tmp_path, "c_test.txt")
    _touch(tmp_path, "d_tests.py")
    _touch(tmp_path, "helper.py")

    modules = discover(tmp_path)

    assert modules == [
        TestModule(path=tmp_path / "a_test.py", category=TestCategory.UNCATEGORIZED)
    ]


def test_assigns_category_from_parent_directory(tmp_path: Path) -> None:
    """The immediate parent directory decides the category."""
    _touch(tmp_path, "unit/a_test.py")
    _touch(tmp_path, "integration/b_test.py")
    _touch(tmp_path, "system/c_test.py")
    _touch(tmp_path, "unit/nested/d_test.py")
    _touch(tmp_path, "other/system/e_test.py")
    _touch(tmp_path, "Unit/f_test.py")

    categories = {
        module.path.relative_to(tmp_path).as_posix(): module.category
        for module in discover(tmp_path)
    }

    assert categories == {
        "unit/a_test.py": TestCategory.UNIT,
        "integration/b_test.py": TestCategory.INTEGRATION,
        "system/c_test.py": TestCategory.SYSTEM,
        "unit/nested/d_test.py": TestCategory.UNCATEGORIZED,
        "other/system/e_test.py": TestCategory.SYSTEM,
        "Unit/f_test.py": TestCategory.UNCATEGORIZED,
    }


def test_root_is_uncategorized_even_when_named_unit(tmp_path: Path) -> None:
    """Files directly in the root are uncategorized whatever its name."""
    root = tmp_path / "unit"
    _touch(root, "a_test.py")

    assert discover(root)[0].category == TestCategory.UNCATEGORIZED


def test_order_is_lexicographic_and_repeatable(tmp_path: Path) -> None:
    """Modules come back sorted by path, identically on every run."""
    for relative in ["z_test.py", "system/b_test.py", "a/y_test.py", "unit/a_test.py"]:
        _touch(tmp_path, relative)

    first = discover(tmp_path)
    second = discover(tmp_path)

    assert first == second
    assert [m.path.relative_to(tmp_path).as_posix() for m in first] == [
        "a/y_test.py",
        "system/b_test.py",
        "unit/a_test.py",
        "z_test.py",
    ]


def test_skips_excluded_directories(tmp_path: Path) -> None:
    """Excluded directory names are not descended into."""
    _touch(tmp_path, "__pycache__/a_test.py")
    _touch(tmp_path, "unit/b_test.py")

    modules = discover(tmp_path, exclude_dirs={"__pycache__"})

    assert [m.path.name for m in modules] == ["b_test.py"]


def test_skips_unreadable_subdirectory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A directory that cannot be listed is skipped and the walk continues."""
    _touch(tmp_path, "integration/a_test.py")
    _touch(tmp_path, "system/b_test.py")
    _touch(tmp_path, "unit/c_test.py")
    blocked = tmp_path / "system"
    real_scandir = os.scandir

    def scandir(path: str | os.PathLike[str] = ".") -> object:
        if Path(path) == blocked:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    with caplog.at_level(logging.WARNING):
        modules = discover(tmp_path)

    assert [m.path.relative_to(tmp_path).as_posix() for m in modules] == [
        "integration/a_test.py",
        "unit/c_test.py",
    ]
    assert "Skipping unreadable entry" in caplog.text
    assert "Permission denied" in caplog.text


def test_missing_root_yields_nothing(tmp_path: Path) -> None:
    """A root that does not exist gives an empty sequence."""
    assert discover(tmp_path / "missing") == []


def test_file_root_yields_nothing(tmp_path: Path) -> None:
    """A root that is a file gives an empty sequence."""
    assert discover(_touch(tmp_path, "a_test.py")) == []


def test_custom_suffixes(tmp_path: Path) -> None:
    """Toolchain suffixes and module suffix are configurable."""
    _touch(tmp_path, "unit/a_check.core")
    _touch(tmp_path, "unit/b_test.py")

    modules = discover(tmp_path, suffixes=(".core",), module_suffix="_check")

    assert [m.path.name for m in modules] == ["a_check.core"]


def test_is_test_module() -> None:
    """The name predicate checks suffix and stem."""
    assert is_test_module(Path("a_test.py"), (".py",), "_test")
    assert not is_test_module(Path("a_test.pyc"), (".py",), "_test")
    assert not is_test_module(Path("test_a.py"), (".py",), "_test")
