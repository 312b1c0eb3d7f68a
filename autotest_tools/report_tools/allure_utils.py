"""
================================================================================
Allure Report Utilities
================================================================================

This module provides utilities for enriching Allure reports from UI scenarios
and for post-processing the results after a run.

Features:
- Attachment helpers (text, JSON, HTML page source, PNG screenshots)
- Result summaries from allure-results and cucumber JSON
- HTML report generation with history carry-over

================================================================================
"""

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(json_str, name=name, attachment_type=allure.attachment_type.JSON)


def attach_text(text: str, name: str = "Text"):
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_html(html: str, name: str = "Page Source"):
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_png(data: bytes, name: str = "Screenshot"):
    """
    Attach raw PNG bytes to Allure report.

    Args:
        data: PNG image bytes
        name: Attachment name
    """
    allure.attach(data, name=name, attachment_type=allure.attachment_type.PNG)


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""

    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def record(self, status: str, duration_ms: int = 0):
        """Count one result with the given Allure status."""
        self.total += 1
        if status == "passed":
            self.passed += 1
        elif status == "failed":
            self.failed += 1
        elif status == "broken":
            self.broken += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.unknown += 1
        self.duration_ms += duration_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


def summarize_cucumber_json(report_file: Path) -> TestResultSummary:
    """
    Summarize a cucumber JSON report written by pytest-bdd.

    A scenario counts as failed if any step failed, skipped if any step was
    skipped and none failed, and passed otherwise. Step durations are in
    nanoseconds.

    Returns:
        Empty summary if the file is missing or unreadable
    """
    summary = TestResultSummary()
    try:
        with open(report_file, encoding="utf-8") as f:
            features = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read cucumber report {report_file}: {e}")
        return summary

    for feature in features:
        for element in feature.get("elements", []):
            if element.get("type", "scenario") != "scenario":
                continue
            steps = element.get("steps", [])
            statuses = [step.get("result", {}).get("status") for step in steps]
            duration_ns = sum(step.get("result", {}).get("duration", 0) or 0 for step in steps)

            if "failed" in statuses:
                status = "failed"
            elif "skipped" in statuses:
                status = "skipped"
            elif statuses and all(s == "passed" for s in statuses):
                status = "passed"
            else:
                status = "unknown"
            summary.record(status, duration_ns // 1_000_000)

    return summary


class AllureReportProcessor:
    """
    Processes Allure results and generates reports.

    Provides methods for analyzing results, generating summaries,
    and managing report history.
    """

    def __init__(
        self,
        results_dir: Path,
        report_dir: Optional[Path] = None
    ):
        """
        Initialize processor.

        Args:
            results_dir: Allure results directory
            report_dir: Output report directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")

    def parse_results(self) -> List[Dict[str, Any]]:
        """Parse every *-result.json file in the results directory."""
        results = []

        for result_file in self.results_dir.glob("*-result.json"):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")

        return results

    def generate_summary(self) -> TestResultSummary:
        summary = TestResultSummary()
        for result in self.parse_results():
            summary.record(
                result.get("status", "unknown"),
                result.get("stop", 0) - result.get("start", 0),
            )
        return summary

    def failed_tests(self) -> List[str]:
        """Names of failed or broken results, for the console summary."""
        return sorted(
            result.get("name", "<unnamed>")
            for result in self.parse_results()
            if result.get("status") in ("failed", "broken")
        )

    def copy_history(self):
        """Copy history from previous report to results."""
        history_source = self.report_dir / "history"
        history_dest = self.results_dir / "history"

        if history_source.exists():
            if history_dest.exists():
                shutil.rmtree(history_dest)
            shutil.copytree(history_source, history_dest)
            logger.info("Copied history from previous report")

    def generate_report(self) -> bool:
        """
        Generate Allure HTML report.

        Returns:
            True if successful
        """
        self.copy_history()

        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean"
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.error("Allure command not found. Install allure-commandline.")
            return False

        if result.returncode == 0:
            logger.info(f"Report generated at {self.report_dir}")
            return True

        logger.error(f"Report generation failed: {result.stderr}")
        return False

    def print_summary(self):
        """Print summary to console."""
        summary = self.generate_summary()

        print("\n" + "=" * 60)
        print("UI TEST EXECUTION SUMMARY")
        print("=" * 60)
        print(f"Total Scenarios: {summary.total}")
        print(f"Passed:          {summary.passed}")
        print(f"Failed:          {summary.failed}")
        print(f"Broken:          {summary.broken}")
        print(f"Skipped:         {summary.skipped}")
        print(f"Pass Rate:       {summary.pass_rate:.2f}%")
        print(f"Duration:        {summary.duration_ms / 1000:.2f}s")
        for name in self.failed_tests():
            print(f"  FAILED: {name}")
        print("=" * 60 + "\n")


# ================================================================================
# Convenience Functions
# ================================================================================

def generate_allure_report(
    results_dir: str,
    output_dir: Optional[str] = None,
    open_report: bool = False
) -> bool:
    """
    Generate Allure report from results.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Optional output directory
        open_report: Whether to open report in browser

    Returns:
        True if successful
    """
    processor = AllureReportProcessor(
        Path(results_dir),
        Path(output_dir) if output_dir else None
    )

    success = processor.generate_report()

    if success:
        processor.print_summary()
        if open_report:
            subprocess.run(["allure", "open", str(processor.report_dir)])

    return success
