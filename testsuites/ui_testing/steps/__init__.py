"""
================================================================================
Step Definitions
================================================================================

pytest-bdd step definitions mapping Gherkin phrases to page-object calls.

Modules are registered as pytest plugins from the repository-level
conftest.py so every feature file can use them.

================================================================================
"""
