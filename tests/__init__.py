"""
Test suite for the GitHub regression suite.

This package contains:
- unit/: offline tests of the API client, page objects and helpers
- api/: live REST API scenarios and UI/API consistency checks
- e2e/: live browser scenarios driven through page objects
- cross_platform/: device, network, accessibility and timing scenarios
"""
