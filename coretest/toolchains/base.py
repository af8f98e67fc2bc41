"""Abstract base class for toolchains that compile and invoke test modules."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar


class CompileError(Exception):
    """Raised when a test module cannot be compiled or loaded."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


@dataclass(frozen=True, kw_only=True)
class ExportedFunction:
    """A function exported by a compiled unit."""

    name: str
    arity: int


@dataclass(frozen=True, kw_only=True)
class Toolchain[U](ABC):
    """Abstract base for toolchains.

    Generic type U represents the loaded unit - whatever handle the toolchain
    needs to pass from compile to invoke. For Python this is a module object.
    """

    source_suffixes: ClassVar[Sequence[str]] = ()

    @abstractmethod
    def compile(self, path: Path) -> U:
        """Compile and load the source file at ``path``.

        Raises:
            CompileError: If the file cannot be compiled or loaded

        """

    @abstractmethod
    def exported_functions(self, unit: U) -> Sequence[ExportedFunction]:
        """List the functions a loaded unit exports, in definition order."""

    def unload(self, unit: U) -> None:
        """Release a loaded unit after its tests have run. Does nothing by default."""

    @abstractmethod
    def invoke(self, unit: U, function_name: str) -> Any:
        """Call a zero-argument function of a loaded unit and return its value.

        Whatever the function raises propagates to the caller.
        """
