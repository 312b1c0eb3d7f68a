"""
================================================================================
Root Pytest Configuration
================================================================================

This module registers the project's markers and tags UI scenarios
automatically so they can be filtered with `-m ui`.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification scenarios"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression suite"
    )
    config.addinivalue_line(
        "markers", "negative: Scenarios exercising invalid input"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven scenarios"
    )
    config.addinivalue_line(
        "markers", "unit: Framework unit tests (no browser)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "login: Scenarios covering the login page"
    )
    config.addinivalue_line(
        "markers", "navigation: Scenarios covering browser navigation"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-tag tests by directory."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Web UI BDD Automation Framework",
        "=" * 60,
        "",
    ]
