"""Fixtures for device emulation, extra browser contexts and performance budgets."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import pytest
from playwright.sync_api import Browser, BrowserContext, Playwright

from github_suite.config import Settings
from github_suite.pages.base_page import apply_timeouts
from github_suite.thresholds import load_thresholds

THRESHOLDS_FILE = Path(__file__).resolve().parent / "thresholds.yml"


@pytest.fixture(scope="session")
def thresholds() -> dict[str, float]:
    return load_thresholds(THRESHOLDS_FILE)


@pytest.fixture
def device_args(playwright: Playwright, browser_name: str) -> Callable[[str], dict[str, Any]]:
    """
    Factory for ``new_context`` keyword arguments emulating a named device.

    Mobile profiles are skipped on Firefox, which cannot emulate them.
    """

    def _args(device_name: str) -> dict[str, Any]:
        profile = dict(playwright.devices[device_name])
        profile.pop("default_browser_type", None)
        if profile.get("is_mobile") and browser_name == "firefox":
            pytest.skip(f"{device_name} emulation is not supported on Firefox")
        return profile

    return _args


@pytest.fixture
def open_context(browser: Browser, settings: Settings) -> Callable[..., Any]:
    """Context-manager factory for extra browser contexts within one test."""

    @contextmanager
    def _open(**context_args: Any) -> Iterator[BrowserContext]:
        context = apply_timeouts(browser.new_context(**context_args), settings)
        try:
            yield context
        finally:
            context.close()

    return _open
