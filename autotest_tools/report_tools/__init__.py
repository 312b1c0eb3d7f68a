"""Allure attachment helpers and report post-processing."""

from .allure_utils import (
    AllureReportProcessor,
    TestResultSummary,
    attach_html,
    attach_json,
    attach_png,
    attach_text,
    generate_allure_report,
    summarize_cucumber_json,
)

__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_html",
    "attach_json",
    "attach_png",
    "attach_text",
    "generate_allure_report",
    "summarize_cucumber_json",
]
