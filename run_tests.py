#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# This is the main entry point for executing the UI scenario suite.
# It builds the pytest command line, passes browser choices to the framework
# through environment overrides and post-processes the reports.
#
# Features:
#   - Run BDD UI scenarios filtered by marker / tag
#   - Parallel execution through pytest-xdist
#   - Allure results + cucumber JSON output
#   - Allure HTML report generation
#
# Usage:
#   python run_tests.py --browser firefox --tags smoke
#   python run_tests.py --parallel 4 --headed
#   python run_tests.py --suite unit
#
# ================================================================================

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from autotest_tools.common import init_logger
from autotest_tools.report_tools.allure_utils import (
    generate_allure_report,
    summarize_cucumber_json,
)
from testsuites.ui_testing.framework.browser_manager import SUPPORTED_BROWSERS
from testsuites.ui_testing.framework.config import TestConfig, env_key


SUITE_PATHS = {
    "ui": "testsuites/ui_testing/tests",
    "unit": "testsuites/unit",
}


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    This class handles:
    - Suite selection and marker filtering
    - Parallel execution configuration
    - Report generation
    """

    __test__ = False

    def __init__(
        self,
        suite: str = "ui",
        tags: Optional[List[str]] = None,
        parallel: int = 1,
        browser: Optional[str] = None,
        headless: Optional[bool] = None,
        allure_report: bool = True,
        verbose: bool = False,
        config: Optional[TestConfig] = None,
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "ui" or "unit"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers
            browser: Browser tag; None keeps the configured browser
            headless: Headless mode; None keeps the configured value
            allure_report: Generate Allure report
            verbose: Enable verbose output
            config: Settings used for report directories
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.browser = browser
        self.headless = headless
        self.allure_report = allure_report
        self.verbose = verbose

        self.root_dir = Path(__file__).parent
        config = config or TestConfig.load()
        self.allure_results = self.root_dir / config.allure_results_directory
        self.cucumber_dir = self.root_dir / config.cucumber_reports_directory
        self.cucumber_report = self.cucumber_dir / "cucumber.json"

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.suite == "ui":
            logger.info(f"Browser: {self.browser or 'from config'}")
            logger.info(f"Headless: {'from config' if self.headless is None else self.headless}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=str(self.root_dir), env=self.build_environment())
            exit_code = result.returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report and self.suite == "ui":
            generate_allure_report(str(self.allure_results))

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        self.allure_results.mkdir(parents=True, exist_ok=True)
        self.cucumber_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Report directories prepared")

    def build_environment(self) -> Dict[str, str]:
        """Environment for the pytest subprocess with browser overrides applied."""
        env = dict(os.environ)
        if self.browser:
            env[env_key("browser")] = self.browser
        if self.headless is not None:
            env[env_key("headless")] = str(self.headless).lower()
        return env

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", SUITE_PATHS[self.suite]]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.suite == "ui":
            if self.allure_report:
                cmd.extend(["--alluredir", str(self.allure_results)])
            cmd.extend(["--cucumberjson", str(self.cucumber_report)])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _print_summary(self, exit_code: int) -> None:
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.suite == "ui" and self.cucumber_report.exists():
            summary = summarize_cucumber_json(self.cucumber_report)
            logger.info(
                f"Scenarios: {summary.total} total, {summary.passed} passed, "
                f"{summary.failed} failed, {summary.skipped} skipped"
            )
            logger.info(f"Cucumber report: {self.cucumber_report}")

        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Web UI BDD Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run every UI scenario with the configured browser
  python run_tests.py

  # Run smoke scenarios in parallel on Firefox
  python run_tests.py --browser firefox --tags smoke --parallel 4

  # Watch the browser
  python run_tests.py --headed --verbose

  # Framework unit tests only
  python run_tests.py --suite unit
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="ui",
        help="Test suite to run (default: ui)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., smoke login P0)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--browser",
        choices=SUPPORTED_BROWSERS,
        default=None,
        help="Browser for UI tests (default: value from config)"
    )

    parser.add_argument(
        "--headed",
        action="store_true",
        help="Run browser in headed mode (visible)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    init_logger(level="DEBUG" if args.verbose else "INFO")

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        browser=args.browser,
        headless=False if args.headed else None,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )
    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
