"""
================================================================================
Autotest Tools
================================================================================

Support utilities for the UI automation framework.

Modules:
    - common: Logging setup and filesystem helpers
    - report_tools: Allure attachment helpers and report generation

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import generate_allure_report

    init_logger(level="DEBUG")
    generate_allure_report("target/allure-results")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
