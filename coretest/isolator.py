"""Run the test functions of one module, each inside a containment boundary."""

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from coretest.classifier import classify
from coretest.models.discovery import TestCase, TestModule
from coretest.models.invocation import Raised, RawResult, Returned
from coretest.models.result import CaseResult, Error
from coretest.toolchains.base import CompileError, Toolchain

log = logging.getLogger(__name__)

COMPILE_CASE_NAME = "<compile>"
DEFAULT_FUNCTION_PREFIX = "test_"


class TestTimeoutError(Exception):
    """Raised when a test function does not finish within the wait limit."""

    __test__ = False


def is_test_entry_point(
    name: str, arity: int, prefix: str = DEFAULT_FUNCTION_PREFIX
) -> bool:
    """Check if an exported function is a test the harness can call."""
    return name.startswith(prefix) and arity == 0


def compile_failure(module: TestModule, error: BaseException) -> CaseResult:
    """Build the single synthetic result recorded for an unloadable module."""
    return CaseResult(
        case=TestCase(module=module, function_name=COMPILE_CASE_NAME, arity=0),
        outcome=Error(reason=error, context=str(module.path)),
    )


def _capture(call: Callable[[], Any]) -> RawResult:
    try:
        return Returned(value=call())
    except (Exception, SystemExit) as e:
        return Raised(exception=e)


@dataclass(frozen=True, kw_only=True)
class ExecutionIsolator[U]:
    """Compiles a test module and runs each of its test functions.

    Nothing raised by a test function escapes ``run``: every invocation goes
    through ``invoke_contained``, which turns a return or an exception into
    data. With a ``timeout`` the function runs on a daemon thread and is
    abandoned once the limit passes.
    """

    toolchain: Toolchain[U]
    timeout: float | None = None
    function_prefix: str = DEFAULT_FUNCTION_PREFIX

    def run(self, module: TestModule) -> Sequence[CaseResult]:
        """Run every test function of ``module`` in definition order.

        Args:
            module: The discovered test module

        Returns:
            One result per test function, or a single error result when the
            module fails to compile

        """
        try:
            unit = self.toolchain.compile(module.path)
        except CompileError as e:
            log.warning("Failed to compile %s: %s", module.path, e.message)
            return [compile_failure(module, e)]

        cases = [
            TestCase(module=module, function_name=function.name, arity=function.arity)
            for function in self.toolchain.exported_functions(unit)
            if is_test_entry_point(function.name, function.arity, self.function_prefix)
        ]
        log.debug("Found %d test function(s) in %s", len(cases), module.path)

        try:
            return [self._run_case(unit, case) for case in cases]
        finally:
            self.toolchain.unload(unit)

    def _run_case(self, unit: U, case: TestCase) -> CaseResult:
        log.debug("Running %s", case.qualified_name)
        started = time.monotonic()
        raw = self.invoke_contained(
            lambda: self.toolchain.invoke(unit, case.function_name),
            name=case.qualified_name,
        )
        duration = time.monotonic() - started

        outcome = classify(raw, context=case.function_name)
        log.debug("%s -> %s", case.qualified_name, type(outcome).__name__)
        return CaseResult(case=case, outcome=outcome, duration=duration)

    def invoke_contained(self, call: Callable[[], Any], *, name: str) -> RawResult:
        """Call ``call`` and capture its return value or exception.

        ``KeyboardInterrupt`` raised on the main thread still propagates so
        that a run can be interrupted.
        """
        if self.timeout is None:
            return _capture(call)

        captured: list[RawResult] = []

        def target() -> None:
            try:
                captured.append(_capture(call))
            except BaseException as e:
                captured.append(Raised(exception=e))

        worker = threading.Thread(target=target, name=f"coretest {name}", daemon=True)
        worker.start()
        worker.join(self.timeout)

        if worker.is_alive():
            log.warning("%s did not finish within %.1fs", name, self.timeout)
            return Raised(
                exception=TestTimeoutError(
                    f"Test did not complete within {self.timeout} seconds"
                )
            )
        return captured[0]
