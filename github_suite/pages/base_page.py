"""
Shared browser interaction capability for the page objects.

Page objects do not inherit from a base page; each one holds a
``BrowserActions`` instance and builds its workflows from these
primitives. Every wait carries an explicit timeout taken from
``Settings`` and a timeout surfaces as Playwright's ``TimeoutError``.

Key Concepts Demonstrated:
- Composition over inheritance for page objects
- Navigation that waits for ``load`` rather than ``networkidle``
- Ordered fallback strategies for unstable markup
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import BrowserContext, Page, expect

from github_suite.config import Settings

logger = logging.getLogger(__name__)

Attempt = tuple[str, Callable[[], object]]


def apply_timeouts(context: BrowserContext, settings: Settings) -> BrowserContext:
    """Apply the configured action, navigation and assertion timeouts."""
    context.set_default_timeout(settings.action_timeout_ms)
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)
    expect.set_options(timeout=settings.expect_timeout_ms)
    return context


class BrowserActions:
    """
    Interaction primitives bound to one Playwright page.

    Attributes:
        page: Playwright page instance.
        settings: Suite settings (base URL, timeouts, artifact paths).
        log: Logger receiving interaction diagnostics.
    """

    def __init__(self, page: Page, settings: Settings, log: logging.Logger | None = None):
        self.page = page
        self.settings = settings
        self.log = log or logger

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def url_for(self, path: str = "") -> str:
        """Absolute URL for a path on the web UI."""
        return self.settings.url(path)

    def goto(self, url: str) -> None:
        """
        Navigate and wait for the ``load`` event.

        ``networkidle`` is avoided because the product keeps long-lived
        connections open on most pages.

        Args:
            url: Absolute URL or a path relative to the base URL.
        """
        if not url.startswith("http"):
            url = self.url_for(url)
        self.page.goto(url, wait_until="domcontentloaded")
        self.wait_for_load()

    def wait_for_load(self) -> None:
        self.page.wait_for_load_state("load", timeout=self.settings.navigation_timeout_ms)

    # -------------------------------------------------------------------------
    # Element actions
    # -------------------------------------------------------------------------

    def click(self, selector: str, timeout: int | None = None) -> None:
        """Wait for ``selector`` to be visible, then click it."""
        self.page.wait_for_selector(
            selector,
            state="visible",
            timeout=timeout or self.settings.visible_timeout_ms,
        )
        self.page.click(selector)

    def fill(self, selector: str, text: str) -> None:
        self.page.fill(selector, text)

    def get_text(self, selector: str) -> str | None:
        return self.page.text_content(selector)

    def is_visible(self, selector: str) -> bool:
        return self.page.is_visible(selector)

    def wait_for_selector(self, selector: str, **kwargs) -> None:
        self.page.wait_for_selector(selector, **kwargs)

    def pause(self, milliseconds: int | None = None) -> None:
        """Let asynchronous UI updates settle."""
        self.page.wait_for_timeout(
            self.settings.settle_ms if milliseconds is None else milliseconds
        )

    # -------------------------------------------------------------------------
    # Fallback strategies
    # -------------------------------------------------------------------------

    def first_successful(self, attempts: Iterable[Attempt]) -> str | None:
        """
        Run labelled attempts in order until one completes.

        An attempt fails by raising a Playwright error (timeouts included).

        Args:
            attempts: ``(label, callable)`` pairs evaluated lazily.

        Returns:
            Label of the first attempt that completed, or None when every
            attempt failed.
        """
        for label, attempt in attempts:
            try:
                attempt()
            except PlaywrightError as exc:
                self.log.debug("Strategy %r failed: %s", label, exc)
                continue
            self.log.debug("Strategy %r succeeded", label)
            return label
        return None

    # -------------------------------------------------------------------------
    # Artifacts and assertions
    # -------------------------------------------------------------------------

    def screenshot(self, name: str, full_page: bool = True) -> Path:
        """
        Save a screenshot under the configured screenshot directory.

        Args:
            name: File stem; ``.png`` is appended.
            full_page: Capture the full scrollable page.

        Returns:
            Path to the saved screenshot.
        """
        self.settings.screenshot_dir.mkdir(parents=True, exist_ok=True)
        path = self.settings.screenshot_dir / f"{name}.png"
        self.page.screenshot(path=str(path), full_page=full_page)
        return path

    def assert_url_contains(self, expected: str) -> None:
        """Assert that the current URL contains ``expected``."""
        expect(self.page).to_have_url(re.compile(re.escape(expected)))
