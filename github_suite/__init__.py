"""
GitHub end-to-end regression suite.

This package holds the reusable building blocks the test suites drive:
configuration loading, the REST API client, Playwright page objects and
small helpers for naming, cleanup and session persistence.
"""

__version__ = "1.0.0"
