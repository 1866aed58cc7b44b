"""
Playwright fixtures for the live browser scenarios.

Signing in through the form on every test is slow and trips GitHub's
abuse detection, so the first scenario that needs a signed-in browser
logs in once and saves the context's storage state. Later scenarios
start from that snapshot; it is reused across runs until it stops
carrying cookies.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from github_suite.config import Settings
from github_suite.pages.base_page import BrowserActions, apply_timeouts
from github_suite.pages.login_page import LoginPage
from github_suite.pages.repository_page import RepositoryPage
from github_suite.session import save_session_state, stored_session_state


@pytest.fixture(scope="session")
def auth_state(
    browser: Browser,
    browser_context_args: dict,
    settings: Settings,
    suite_logger: logging.Logger,
) -> Path:
    """Path to a storage-state snapshot of a signed-in session."""
    existing = stored_session_state(settings.auth_state_path)
    if existing is not None:
        suite_logger.info("Reusing stored session state %s", existing)
        return existing

    context = apply_timeouts(browser.new_context(**browser_context_args), settings)
    try:
        page = context.new_page()
        login_page = LoginPage(BrowserActions(page, settings, suite_logger))
        login_page.login(settings.username, settings.password)
        page.wait_for_url(f"{settings.base_url}/**", timeout=settings.visible_timeout_ms)
        if not login_page.is_logged_in():
            pytest.fail(
                f"Could not sign in as {settings.username}: "
                f"{login_page.get_error_message() or 'no avatar after login'}"
            )
        return save_session_state(context, settings.auth_state_path)
    finally:
        context.close()


@pytest.fixture
def authenticated_context(
    browser: Browser,
    browser_context_args: dict,
    settings: Settings,
    auth_state: Path,
) -> Generator[BrowserContext, None, None]:
    """Browser context restored from the signed-in snapshot."""
    context = apply_timeouts(
        browser.new_context(**browser_context_args, storage_state=str(auth_state)),
        settings,
    )
    yield context
    context.close()


@pytest.fixture
def authenticated_page(authenticated_context: BrowserContext) -> Generator[Page, None, None]:
    page = authenticated_context.new_page()
    yield page
    page.close()


@pytest.fixture
def authenticated_actions(
    authenticated_page: Page, settings: Settings, suite_logger: logging.Logger
) -> BrowserActions:
    return BrowserActions(authenticated_page, settings, suite_logger)


@pytest.fixture
def repository_page(authenticated_actions: BrowserActions) -> RepositoryPage:
    return RepositoryPage(authenticated_actions)


@pytest.fixture
def signed_in_login_page(login_page: LoginPage, settings: Settings) -> LoginPage:
    """
    Login page whose browser has just signed in through the form.

    Uses a fresh login rather than the shared snapshot because signing
    out revokes the server-side session the snapshot points at.
    """
    login_page.login(settings.username, settings.password)
    assert login_page.is_logged_in(), "login did not reach a signed-in page"
    return login_page
