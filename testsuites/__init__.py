"""
Test suites package.

Keeps `testsuites` importable so that:
  - `run_tests.py` can read the framework's browser list and settings
  - unit tests can import the framework and page objects directly
  - pytest-bdd step modules can be registered as plugins

All configuration shipped here is demo-safe and contains no secrets.
"""
