"""CLI entry point for the coretest harness."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from coretest.config_loader import load_config
from coretest.harness import ConfigurationError, TestHarness
from coretest.models.result import CaseResult, Error, Fail
from coretest.reporter import outcome_status, render
from coretest.toolchains.loading import ToolchainNotFoundError, load_toolchain_manifest

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
    "error": "❗",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def log_results_summary(log: logging.Logger, results: Sequence[CaseResult]) -> None:
    """Log a formatted summary of test results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in results:
        status = outcome_status(result)
        log.info(
            "%s %s: %s (%.2fs)",
            STATUS_SYMBOLS.get(status, "?"),
            result.case.qualified_name,
            status,
            result.duration,
        )
        match result.outcome:
            case Fail(actual=actual, expected=expected):
                log.info("  Actual: %r", actual)
                log.info("  Expected: %r", expected)
            case Error(reason=reason):
                log.info("  Reason: %s", reason)


def run(
    root: Path,
    *,
    verbose: bool = False,
    timeout: float | None = None,
    config_path: Path | None = None,
    toolchain_key: str | None = None,
) -> int:
    """Run all tests under ``root``, print the report and return the exit code."""
    log = logging.getLogger("coretest")

    try:
        config = load_config(
            root, config_path, timeout=timeout, toolchain=toolchain_key
        )
        log.info("Loading toolchain: %s", config.toolchain)
        manifest = load_toolchain_manifest(config.toolchain)
    except (FileNotFoundError, ValueError, ToolchainNotFoundError) as e:
        log.error("Invalid configuration: %s", e)
        return 1

    harness = TestHarness(toolchain=manifest.toolchain_factory(), config=config)
    try:
        report = harness.run(root, verbose=verbose)
    except ConfigurationError as e:
        log.error("Invalid configuration: %s", e)
        return 1

    log_results_summary(log, report.results)

    lines, exit_code = render(report)
    for line in lines:
        print(line)
    return exit_code


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="coretest",
        description="Discover and run *_test modules and report per-category tallies",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Root directory to search for test modules (default: current directory)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print one line per test case before the final record",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-test wait limit in seconds, 0 waits indefinitely (default: 60)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file (default: <path>/coretest.yaml if present)",
    )
    parser.add_argument(
        "--toolchain",
        default=None,
        help="Toolchain key used to load test modules (default: python)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVELS,
        help="Log level for diagnostics written to stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = run(
        args.path,
        verbose=args.verbose,
        timeout=args.timeout,
        config_path=args.config,
        toolchain_key=args.toolchain,
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
