"""
Live browser scenarios against the GitHub web UI.

This package contains:
- Authentication and session management scenarios
- Repository workflows driven through the web UI
"""
