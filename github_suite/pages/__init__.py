"""
Page objects for the GitHub web UI.

Each page object wraps a shared ``BrowserActions`` capability rather than
inheriting from a base page class.
"""

from github_suite.pages.base_page import BrowserActions, apply_timeouts
from github_suite.pages.login_page import LoginPage, SignOutRoute
from github_suite.pages.repository_page import RepositoryPage

__all__ = ["BrowserActions", "apply_timeouts", "LoginPage", "RepositoryPage", "SignOutRoute"]
