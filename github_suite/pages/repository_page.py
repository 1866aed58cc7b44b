"""
Repository page object.

This page object drives repository workflows through the web UI:
creation, settings, rename, deletion and file creation/upload. GitHub's
markup differs between empty and populated repositories and between
releases, so several actions try an accessible-role locator first and
fall back to a text/CSS locator.

Key Concepts Demonstrated:
- Role- and label-based locators with ``or_`` fallbacks
- Optional dialogs handled without failing the flow
- Safety gates that require retyping ``owner/name``
"""

from __future__ import annotations

import re
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator

from github_suite.errors import StrategyExhaustedError
from github_suite.pages.base_page import BrowserActions


class RepositoryPage:
    """
    Page object for repository pages.

    Provides methods for:
    - Creating, renaming and deleting repositories
    - Creating and uploading files
    - Editing files and the repository description
    """

    NEW_REPO_PATH = "/new"

    SETTINGS_TAB = "#settings-tab"
    DESCRIPTION_INPUTS = ('input[name="Description"]', "#repository_description")
    DELETE_DIALOG_BUTTON = "#dialog-show-repo-delete-menu-dialog"
    DELETE_PROCEED_BUTTON = "#repo-delete-proceed-button"
    DELETE_CONFIRM_INPUT = "#verification_field"
    ADD_FILE_SUMMARY = 'summary:has-text("Add file")'
    FILE_INPUT = 'input[type="file"]'
    FILENAME_INPUT = 'input[name="filename"]'
    EDITOR_CONTENT = ".cm-editor .cm-content"
    RENAME_INPUTS = 'input#rename-field, input[name="repository[name]"], input[name="new_name"]'
    EDIT_FILE_BUTTON = 'button[aria-label="Edit file"]'
    EDIT_DETAILS_BUTTON = 'button[aria-label="Edit repository details"]'
    DESCRIPTION_FIELD = 'input[name="repository[description]"]'
    SAVE_BUTTON = 'button:has-text("Save")'

    def __init__(self, actions: BrowserActions):
        self.actions = actions
        self.page = actions.page
        self.settings = actions.settings
        self.log = actions.log

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def go_to_repository(self, owner: str, repo: str) -> "RepositoryPage":
        self.actions.goto(f"/{owner}/{repo}")
        return self

    def go_to_settings(self, owner: str, repo: str) -> "RepositoryPage":
        self.go_to_repository(owner, repo)
        self.actions.click(self.SETTINGS_TAB)
        self.actions.wait_for_load()
        return self

    # -------------------------------------------------------------------------
    # Repository lifecycle
    # -------------------------------------------------------------------------

    def create_repository(self, name: str, description: str = "", private: bool = False) -> None:
        """
        Create a repository from the "new repository" form.

        Post-submit timing varies, so this only waits a bounded settle
        period; verify the result through the API.

        Args:
            name: Repository name.
            description: Optional description.
            private: Choose private visibility when True.
        """
        self.actions.goto(self.NEW_REPO_PATH)

        name_input = self.page.get_by_role("textbox", name=re.compile("repository name", re.I))
        name_input.click()
        name_input.clear()
        name_input.fill(name)
        # Tab out to trigger the availability check
        name_input.press("Tab")
        self.actions.pause()

        if description:
            description_input = self.page.get_by_placeholder(re.compile("description", re.I))
            for selector in self.DESCRIPTION_INPUTS:
                description_input = description_input.or_(self.page.locator(selector))
            if description_input.count() > 0:
                description_input.first.fill(description)

        if private:
            visibility = self.page.get_by_role("radio", name=re.compile("private", re.I)).or_(
                self.page.locator('input[value="private"]')
            )
            if visibility.count() == 0:
                raise StrategyExhaustedError("Could not select private visibility")
            visibility.first.check()

        self.actions.pause()
        create_button = self.page.get_by_role("button", name="Create repository").first
        create_button.wait_for(state="visible", timeout=self.settings.visible_timeout_ms)
        create_button.scroll_into_view_if_needed()
        create_button.click()
        self.actions.pause(self.settings.settle_ms * 3)
        self.log.info("Submitted repository creation form for %s", name)

    def rename_repository(self, owner: str, old_name: str, new_name: str) -> None:
        """Rename through settings, confirming the optional dialog if shown."""
        self.go_to_settings(owner, old_name)

        name_input = self.page.get_by_label(re.compile("repository name", re.I)).or_(
            self.page.locator(self.RENAME_INPUTS)
        )
        name_input.first.click()
        name_input.first.fill(new_name)

        rename_button = self.page.get_by_role("button", name=re.compile("rename", re.I)).first
        rename_button.wait_for(state="visible", timeout=self.settings.visible_timeout_ms)
        rename_button.scroll_into_view_if_needed()
        rename_button.click()

        dialog = self.page.get_by_role("dialog")
        if self._is_visible(dialog):
            confirm_input = dialog.get_by_role("textbox").or_(dialog.locator('input[type="text"]'))
            if confirm_input.count() > 0:
                confirm_input.first.fill(f"{owner}/{new_name}")
            dialog.get_by_role("button", name=re.compile("rename", re.I)).first.click()

        self.page.wait_for_url(
            re.compile(rf"/{re.escape(owner)}/{re.escape(new_name)}(/|$)"),
            timeout=self.settings.navigation_timeout_ms,
        )
        self.log.info("Renamed %s/%s to %s", owner, old_name, new_name)

    def delete_repository(self, owner: str, repo: str) -> None:
        """
        Delete through the settings danger zone.

        GitHub walks through several confirmation steps and finally
        requires retyping ``owner/repo`` before the delete is accepted.
        """
        self.go_to_settings(owner, repo)

        delete_button = self.page.locator(self.DELETE_DIALOG_BUTTON)
        delete_button.scroll_into_view_if_needed()
        self.actions.pause(self.settings.settle_ms // 2)
        delete_button.click()

        proceed = self.page.locator(self.DELETE_PROCEED_BUTTON)
        proceed.click()
        proceed.click()
        self.actions.wait_for_selector(
            self.DELETE_CONFIRM_INPUT, timeout=self.settings.logout_confirm_timeout_ms
        )
        self.actions.fill(self.DELETE_CONFIRM_INPUT, f"{owner}/{repo}")
        proceed.click()
        self.actions.wait_for_load()
        self.log.info("Deleted %s/%s through the UI", owner, repo)

    def update_description(self, owner: str, repo: str, new_description: str) -> None:
        self.go_to_repository(owner, repo)
        self.page.click(self.EDIT_DETAILS_BUTTON)
        self.actions.fill(self.DESCRIPTION_FIELD, new_description)
        self.page.click(self.SAVE_BUTTON)
        self.actions.pause()

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def _open_add_file_entry(self, empty_state_link: str, menu_item: str) -> None:
        """
        Open the create/upload entry point.

        Empty repositories show an inline link; populated ones hide the
        same action behind the "Add file" menu.
        """
        empty_link = self.page.get_by_role("link", name=re.compile(empty_state_link, re.I))
        if empty_link.count() > 0:
            empty_link.first.click()
            return

        timeout = self.settings.probe_timeout_ms
        opened_by = self.actions.first_successful(
            [
                (
                    "add file button",
                    lambda: self.page.get_by_role("button", name=re.compile("add file", re.I)).click(
                        timeout=timeout
                    ),
                ),
                ("add file summary", lambda: self.page.click(self.ADD_FILE_SUMMARY, timeout=timeout)),
            ]
        )
        if opened_by is None:
            raise StrategyExhaustedError("Could not open the Add file menu")

        item = self.page.get_by_role("menuitem", name=re.compile(menu_item, re.I)).or_(
            self.page.locator(f'a:has-text("{menu_item}")')
        )
        item.first.click()

    def create_file(self, owner: str, repo: str, file_name: str, content: str) -> None:
        """Create a file in the web editor and commit it to the default branch."""
        self.go_to_repository(owner, repo)
        self._open_add_file_entry("creating a new file", "Create new file")

        name_input = self.page.locator(self.FILENAME_INPUT).or_(
            self.page.get_by_placeholder(re.compile("file name", re.I))
        )
        name_input.first.click()
        name_input.first.fill(file_name)

        editor = self.page.locator(self.EDITOR_CONTENT)
        editor.first.click()
        editor.first.fill(content)

        self._commit_button("commit (new file|changes)").first.click()
        self.page.wait_for_url(re.compile(r"/blob/"), timeout=self.settings.navigation_timeout_ms)
        self.log.info("Created %s in %s/%s through the UI", file_name, owner, repo)

    def upload_file(self, owner: str, repo: str, file_path: Path) -> None:
        """Upload a local file and commit it."""
        self.go_to_repository(owner, repo)
        self._open_add_file_entry("uploading an existing file", "Upload files")

        self.page.locator(self.FILE_INPUT).set_input_files(str(file_path))
        self._commit_button("commit changes").first.click()
        self.actions.wait_for_load()
        self.log.info("Uploaded %s to %s/%s through the UI", file_path.name, owner, repo)

    def edit_file(self, owner: str, repo: str, file_name: str, branch: str = "main") -> None:
        """Open a file in the web editor."""
        self.actions.goto(f"/{owner}/{repo}/blob/{branch}/{file_name}")
        self.page.click(self.EDIT_FILE_BUTTON)
        self.actions.wait_for_load()

    def _commit_button(self, pattern: str) -> Locator:
        return self.page.get_by_role("button", name=re.compile(pattern, re.I)).or_(
            self.page.locator('button:has-text("Commit")')
        )

    @staticmethod
    def _is_visible(locator: Locator) -> bool:
        try:
            return locator.is_visible()
        except PlaywrightError:
            return False
