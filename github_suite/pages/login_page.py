"""
Login page object: sign in, detect the signed-in state, sign out.

Sign-out is the one genuinely multi-step flow in the suite::

    LoggedIn -> MenuOpen -> SignOutTriggered -> IntermediateConfirm -> SignedOut
                                             \\-> SignedOut

The account menu has no stable markup across GitHub surfaces, so it is
opened through an ordered list of strategies; when all of them fail a
``StrategyExhaustedError`` is raised. The intermediate "select account to
sign out" page only appears for some sessions and its absence is fine.
"""

from __future__ import annotations

from enum import Enum

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from github_suite.errors import StrategyExhaustedError
from github_suite.pages.base_page import Attempt, BrowserActions


class SignOutRoute(str, Enum):
    """How a logout reached the signed-out state."""

    DIRECT = "direct"
    CONFIRMED = "confirmed"


class LoginPage:
    """Page object for the login surface and the account menu."""

    URL_PATH = "/login"

    LOGIN_FIELD = "#login_field"
    PASSWORD_FIELD = "#password"
    SUBMIT_BUTTON = 'input[type="submit"][value="Sign in"]'
    ERROR_MESSAGE = ".flash-error"

    AVATAR_SELECTORS = (
        '[data-target="react-app.embeddedData"] img.avatar',
        "img.avatar-user",
        "summary img.avatar",
        '[aria-label="Open user navigation menu"]',
    )
    AVATAR_IN_SUMMARY = "img.avatar, img.avatar-user"
    MENU_LABEL_SELECTORS = (
        '[aria-label*="Open user menu"]',
        '[aria-label*="User account"]',
        'button[aria-label*="user" i]',
    )
    SIGN_OUT_ITEM = 'button:has-text("Sign out"), a:has-text("Sign out")'
    SIGN_OUT_BUTTON = 'button:has-text("Sign out")'
    SIGN_OUT_ALL = 'a:has-text("Sign out from all accounts")'

    def __init__(self, actions: BrowserActions):
        self.actions = actions
        self.page = actions.page
        self.settings = actions.settings
        self.log = actions.log

    # -------------------------------------------------------------------------
    # Sign in
    # -------------------------------------------------------------------------

    def navigate(self) -> "LoginPage":
        self.actions.goto(self.URL_PATH)
        return self

    def submit_credentials(self, username: str, password: str) -> None:
        """Fill and submit the form without waiting for the outcome."""
        self.actions.fill(self.LOGIN_FIELD, username)
        self.actions.fill(self.PASSWORD_FIELD, password)
        self.actions.click(self.SUBMIT_BUTTON)

    def login(self, username: str, password: str) -> None:
        """
        Sign in through the login form.

        Success is not checked here; call ``is_logged_in`` afterwards.
        """
        self.navigate()
        self.submit_credentials(username, password)
        self.actions.wait_for_load()

    def is_logged_in(self) -> bool:
        """Return True when any known avatar indicator appears."""
        timeout = self.settings.probe_timeout_ms
        attempts: list[Attempt] = [
            (selector, lambda s=selector: self.page.wait_for_selector(s, timeout=timeout))
            for selector in self.AVATAR_SELECTORS
        ]
        return self.actions.first_successful(attempts) is not None

    def get_error_message(self) -> str | None:
        try:
            return self.actions.get_text(self.ERROR_MESSAGE)
        except PlaywrightError:
            return None

    # -------------------------------------------------------------------------
    # Sign out
    # -------------------------------------------------------------------------

    def _ensure_on_site(self) -> None:
        current_url = self.page.url
        if not current_url.startswith(self.settings.base_url) or "/login" in current_url:
            self.actions.goto(self.settings.base_url)

    def _wait_for_sign_out_item(self) -> None:
        self.page.wait_for_selector(self.SIGN_OUT_ITEM, timeout=self.settings.probe_timeout_ms)

    def _open_menu_via_avatar_summary(self) -> None:
        for summary in self.page.query_selector_all("summary"):
            if summary.query_selector(self.AVATAR_IN_SUMMARY):
                summary.click()
                self._wait_for_sign_out_item()
                return
        raise PlaywrightError("No <summary> element carries an avatar")

    def _open_menu_via_label(self, selector: str) -> None:
        self.page.click(selector, timeout=self.settings.probe_timeout_ms)
        self._wait_for_sign_out_item()

    def _menu_strategies(self, include_labels: bool = True) -> list[Attempt]:
        strategies: list[Attempt] = [("avatar summary", self._open_menu_via_avatar_summary)]
        if include_labels:
            strategies.extend(
                (selector, lambda s=selector: self._open_menu_via_label(s))
                for selector in self.MENU_LABEL_SELECTORS
            )
        return strategies

    def open_account_menu(self, include_labels: bool = True) -> str:
        """
        Open the account menu.

        Returns:
            Label of the strategy that opened the menu.

        Raises:
            StrategyExhaustedError: If no strategy opened the menu.
        """
        opened_by = self.actions.first_successful(self._menu_strategies(include_labels))
        if opened_by is None:
            raise StrategyExhaustedError("Could not open user menu to logout")
        self.log.debug("Account menu opened via %s", opened_by)
        return opened_by

    def logout(self) -> SignOutRoute:
        """
        Sign out of the current session.

        Returns:
            ``SignOutRoute.CONFIRMED`` when the intermediate account page
            was handled, ``SignOutRoute.DIRECT`` otherwise.

        Raises:
            StrategyExhaustedError: If the account menu could not be opened.
        """
        self._ensure_on_site()
        self.open_account_menu()
        self.page.click(self.SIGN_OUT_ITEM)

        route = SignOutRoute.DIRECT
        try:
            self.page.wait_for_url(
                "**/logout**", timeout=self.settings.logout_confirm_timeout_ms
            )
        except PlaywrightTimeoutError:
            self.log.info("No intermediate logout page, continuing")
        else:
            sign_out_button = self.page.query_selector(self.SIGN_OUT_BUTTON)
            if sign_out_button:
                sign_out_button.click()
            else:
                self.page.click(self.SIGN_OUT_ALL)
            self._wait_for_login_redirect()
            route = SignOutRoute.CONFIRMED

        self.actions.pause()
        return route

    def logout_from_all_accounts(self) -> None:
        """Sign out every account signed in on this browser."""
        self._ensure_on_site()
        self.open_account_menu(include_labels=False)
        self.page.click(self.SIGN_OUT_ITEM)
        self.page.wait_for_url("**/logout**", timeout=self.settings.logout_confirm_timeout_ms)
        self.page.click(self.SIGN_OUT_ALL)
        self._wait_for_login_redirect()
        self.actions.pause()

    def _wait_for_login_redirect(self) -> None:
        try:
            self.page.wait_for_url("**/login**", timeout=self.settings.visible_timeout_ms)
        except PlaywrightTimeoutError:
            # sometimes lands on the home page instead
            self.log.debug("Logout did not redirect to /login")
