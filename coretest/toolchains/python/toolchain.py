"""Python toolchain implementation."""

import asyncio
import importlib.util
import inspect
import itertools
import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, ClassVar

from coretest.toolchains.base import CompileError, ExportedFunction, Toolchain

log = logging.getLogger(__name__)

MODULE_PREFIX = "_coretest_"

_unit_ids = itertools.count(1)


@contextmanager
def _search_path(directory: Path) -> Iterator[None]:
    """Make sibling modules importable while a test module body executes."""
    entry = str(directory)
    sys.path.insert(0, entry)
    try:
        yield
    finally:
        if entry in sys.path:
            sys.path.remove(entry)


def required_arity(function: Any) -> int:
    """Count the parameters a caller must supply."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return 0
    return sum(
        1
        for parameter in signature.parameters.values()
        if parameter.default is inspect.Parameter.empty
        and parameter.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    )


@dataclass(frozen=True, kw_only=True)
class PythonToolchain(Toolchain[ModuleType]):
    """Loads test modules straight from their source files.

    Each file is executed as a fresh module under a unique private name, so
    two test modules with the same file name never share state.
    """

    source_suffixes: ClassVar[Sequence[str]] = (".py",)

    def compile(self, path: Path) -> ModuleType:
        """Load the module at ``path``."""
        name = f"{MODULE_PREFIX}{path.stem}_{next(_unit_ids)}"
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise CompileError(path, "no loader for this file type")

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            with _search_path(path.parent):
                spec.loader.exec_module(module)
        except (Exception, SystemExit) as e:
            del sys.modules[name]
            raise CompileError(path, f"{type(e).__name__}: {e}") from e

        log.debug("Loaded %s as %s", path, name)
        return module

    def unload(self, unit: ModuleType) -> None:
        """Drop the module from ``sys.modules`` once its tests have run."""
        sys.modules.pop(unit.__name__, None)

    def exported_functions(self, unit: ModuleType) -> Sequence[ExportedFunction]:
        """List functions defined by the module itself (not imported ones)."""
        return [
            ExportedFunction(name=name, arity=required_arity(value))
            for name, value in vars(unit).items()
            if inspect.isfunction(value) and value.__module__ == unit.__name__
        ]

    def invoke(self, unit: ModuleType, function_name: str) -> Any:
        """Call the function; coroutine functions are run to completion."""
        result = getattr(unit, function_name)()
        if inspect.iscoroutine(result):
            return asyncio.run(result)
        return result
