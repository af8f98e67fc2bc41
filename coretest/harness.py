"""Test harness coordinating discovery, execution and aggregation."""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from coretest.aggregator import aggregate
from coretest.discovery import discover
from coretest.isolator import ExecutionIsolator, compile_failure
from coretest.models.config import HarnessConfig
from coretest.models.discovery import TestModule
from coretest.models.result import CaseResult, RunReport
from coretest.toolchains.base import Toolchain

log = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the harness cannot start, e.g. the root path is unusable."""


def check_root(root: Path) -> None:
    """Make sure ``root`` is a directory the harness can list.

    Raises:
        ConfigurationError: If the root is missing, not a directory or unreadable

    """
    if not root.exists():
        raise ConfigurationError(f"Test root does not exist: {root}")
    if not root.is_dir():
        raise ConfigurationError(f"Test root is not a directory: {root}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise ConfigurationError(f"Test root is not readable: {root}")


@dataclass(frozen=True, kw_only=True)
class TestHarness:
    """Runs every test module under a root directory, one after another."""

    __test__ = False

    toolchain: Toolchain[Any]
    config: HarnessConfig = field(default_factory=HarnessConfig)

    def run(self, root: Path, *, verbose: bool = False) -> RunReport:
        """Discover, execute and aggregate all tests below ``root``.

        Args:
            root: Directory containing the test modules
            verbose: Whether the report is rendered in verbose form

        Returns:
            The aggregated report

        Raises:
            ConfigurationError: If ``root`` cannot be used

        """
        check_root(root)

        modules = discover(
            root,
            suffixes=self.toolchain.source_suffixes,
            module_suffix=self.config.module_suffix,
            exclude_dirs=self.config.exclude_dirs,
        )
        log.info("Discovered %d test module(s) under %s", len(modules), root)

        isolator = ExecutionIsolator(
            toolchain=self.toolchain,
            timeout=self.config.wait_limit,
            function_prefix=self.config.function_prefix,
        )

        results: list[CaseResult] = []
        for module in modules:
            results.extend(self._run_module(isolator, module))

        log.info("Test execution completed: %d test case(s)", len(results))
        return aggregate(results, verbose=verbose)

    def _run_module(
        self, isolator: ExecutionIsolator[Any], module: TestModule
    ) -> Sequence[CaseResult]:
        log.info("Running %s (%s)", module.path, module.category)
        try:
            return isolator.run(module)
        except (Exception, SystemExit) as e:
            log.error("Failed to load %s: %s", module.path, e, exc_info=e)
            return [compile_failure(module, e)]
