"""
Shared pytest fixtures for the GitHub regression suite.

This module contains fixtures that are shared across every suite: the
frozen settings object, the REST client, unique repository names with
guaranteed teardown, and per-test Playwright browser contexts. Live
suites (marked ``live``) are skipped at collection time when no GitHub
credential is configured at all; a partial configuration fails fast.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Explicit configuration objects instead of module globals
- Teardown that logs cleanup failures instead of masking results
- Browser context isolation per test
- Screenshot capture on failure
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from faker import Faker
from playwright.sync_api import Browser, BrowserContext, Page

from github_suite.api import GitHubAPI
from github_suite.config import (
    DEFAULT_SCREENSHOT_DIR,
    Settings,
    credentials_configured,
    load_settings,
    logging_options,
)
from github_suite.helpers import generate_repo_name, safe_delete_repository
from github_suite.logging_config import configure_logging
from github_suite.pages.base_page import BrowserActions, apply_timeouts
from github_suite.pages.login_page import LoginPage


# -----------------------------------------------------------------------------
# Session setup
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Route suite logging to the console and the run's log file."""
    configure_logging(*logging_options())


def pytest_collection_modifyitems(config, items):
    """Skip live scenarios when the run has no GitHub credentials at all."""
    if credentials_configured():
        return
    skip_live = pytest.mark.skip(
        reason="GitHub credentials not configured; set GITHUB_USERNAME, "
        "GITHUB_PASSWORD and GITHUB_TOKEN to run live scenarios"
    )
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Load credentials once; raises ConfigurationError if any is missing."""
    return load_settings()


@pytest.fixture(scope="session")
def suite_logger() -> logging.Logger:
    return logging.getLogger("github_suite.scenarios")


@pytest.fixture(scope="session")
def fake() -> Faker:
    return Faker()


# -----------------------------------------------------------------------------
# API Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def api(settings: Settings, suite_logger: logging.Logger) -> GitHubAPI:
    """Authenticated REST client shared by the whole run."""
    return GitHubAPI.from_settings(settings, log=suite_logger)


@pytest.fixture(scope="session")
def owner(settings: Settings) -> str:
    return settings.username


@pytest.fixture
def created_repos(
    api: GitHubAPI, owner: str, suite_logger: logging.Logger
) -> Generator[list[str], None, None]:
    """
    Track repositories a scenario creates and delete them afterwards.

    Scenarios append every name they create (including rename targets).
    Deletion failures are logged and never re-raised.
    """
    names: list[str] = []
    yield names
    for name in names:
        safe_delete_repository(api, owner, name, log=suite_logger)


@pytest.fixture
def repo_name(settings: Settings, created_repos: list[str]) -> str:
    """Unique, prefixed repository name scheduled for cleanup."""
    name = generate_repo_name(settings.repo_prefix)
    created_repos.append(name)
    return name


@pytest.fixture
def repo_name_factory(
    settings: Settings, created_repos: list[str]
) -> Callable[[str | None], str]:
    """
    Factory for extra unique repository names within one scenario.

    Every name starts with ``settings.repo_prefix``; an optional label
    tells names apart in logs, e.g. ``repo_name_factory("concurrent-1")``.
    """

    def _make(label: str | None = None) -> str:
        name = generate_repo_name(settings.repo_prefix, label)
        created_repos.append(name)
        return name

    return _make


# -----------------------------------------------------------------------------
# Browser Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def browser_context_args():
    return {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(
    browser: Browser, browser_context_args: dict, settings: Settings
) -> Generator[BrowserContext, None, None]:
    """Fresh, unauthenticated browser context for each test."""
    context = apply_timeouts(browser.new_context(**browser_context_args), settings)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture
def actions(page: Page, settings: Settings, suite_logger: logging.Logger) -> BrowserActions:
    return BrowserActions(page, settings, suite_logger)


@pytest.fixture
def login_page(actions: BrowserActions) -> LoginPage:
    return LoginPage(actions)


# -----------------------------------------------------------------------------
# Screenshot on Failure
# -----------------------------------------------------------------------------

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture a screenshot of every open test page when a test fails."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        funcargs = getattr(item, "funcargs", {})
        pages = [
            (name, funcargs[name])
            for name in ("page", "authenticated_page")
            if isinstance(funcargs.get(name), Page)
        ]
        screenshot_dir = Path(os.environ.get("SCREENSHOT_DIR", DEFAULT_SCREENSHOT_DIR))
        for fixture_name, failed_page in pages:
            screenshot_dir.mkdir(parents=True, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = screenshot_dir / f"{test_name}-{fixture_name}.png"
            try:
                failed_page.screenshot(path=str(screenshot_path))
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
