"""
Suite configuration module.

Credentials and tunables are read from environment variables once per
process and frozen into a ``Settings`` object that is passed explicitly
to every component (API client, page objects, fixtures). A ``.env`` file
at the project root or under ``tests/`` is loaded first; values already
present in the environment win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from github_suite.errors import ConfigurationError

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

REQUIRED_VARIABLES = {
    "username": "GITHUB_USERNAME",
    "password": "GITHUB_PASSWORD",
    "token": "GITHUB_TOKEN",
}

ENV_FILES = (BASE_DIR / ".env", BASE_DIR / "tests" / ".env")

DEFAULT_AUTH_STATE_PATH = BASE_DIR / "tests" / ".auth" / "user.json"
DEFAULT_SCREENSHOT_DIR = BASE_DIR / "test-results" / "screenshots"
DEFAULT_LOG_FILE = BASE_DIR / "test-results" / "logs" / "tests.log"


@dataclass(frozen=True)
class Settings:
    """Immutable configuration shared by the API client and page objects."""

    username: str
    password: str
    token: str

    base_url: str = "https://github.com"
    api_base_url: str = "https://api.github.com"
    repo_prefix: str = "test-automation-repo"

    # Browser timeouts (milliseconds)
    navigation_timeout_ms: int = 30_000
    visible_timeout_ms: int = 10_000
    action_timeout_ms: int = 15_000
    expect_timeout_ms: int = 10_000
    probe_timeout_ms: int = 2_000
    logout_confirm_timeout_ms: int = 5_000
    settle_ms: int = 1_000

    # REST timeout (seconds)
    api_timeout: float = 30.0

    auth_state_path: Path = DEFAULT_AUTH_STATE_PATH
    screenshot_dir: Path = DEFAULT_SCREENSHOT_DIR
    log_file: Path = DEFAULT_LOG_FILE
    log_level: str = "INFO"

    def url(self, path: str = "") -> str:
        """Build an absolute web UI URL for ``path``."""
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def load_env_files() -> None:
    """Load ``.env`` files into ``os.environ`` without overriding it."""
    for env_file in ENV_FILES:
        if env_file.exists():
            load_dotenv(env_file, override=False)


def logging_options(environ: Mapping[str, str] | None = None) -> tuple[Path, str]:
    """
    Return ``(log_file, log_level)`` without requiring credentials.

    Used before settings are loaded, so ``.env`` files are read here too.
    """
    if environ is None:
        load_env_files()
        environ = os.environ
    log_file = Path(environ["LOG_FILE"]) if environ.get("LOG_FILE") else DEFAULT_LOG_FILE
    return log_file, (environ.get("LOG_LEVEL") or "INFO").upper()


def credentials_configured(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when at least one required credential variable is set."""
    if environ is None:
        load_env_files()
        environ = os.environ
    return any(environ.get(name) for name in REQUIRED_VARIABLES.values())


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build ``Settings`` from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ`` after
            loading any ``.env`` files.

    Returns:
        Frozen settings object.

    Raises:
        ConfigurationError: If any of ``GITHUB_USERNAME``,
            ``GITHUB_PASSWORD`` or ``GITHUB_TOKEN`` is missing or empty.
    """
    if environ is None:
        load_env_files()
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES.values() if not environ.get(name)]
    if missing:
        raise ConfigurationError(f"Missing required credentials: {', '.join(missing)}")

    overrides: dict = {}
    if environ.get("BASE_URL"):
        overrides["base_url"] = environ["BASE_URL"].rstrip("/")
    if environ.get("API_BASE_URL"):
        overrides["api_base_url"] = environ["API_BASE_URL"].rstrip("/")
    if environ.get("TEST_REPO_PREFIX"):
        overrides["repo_prefix"] = environ["TEST_REPO_PREFIX"]
    if environ.get("AUTH_STATE_PATH"):
        overrides["auth_state_path"] = Path(environ["AUTH_STATE_PATH"])
    if environ.get("SCREENSHOT_DIR"):
        overrides["screenshot_dir"] = Path(environ["SCREENSHOT_DIR"])
    if environ.get("LOG_FILE"):
        overrides["log_file"] = Path(environ["LOG_FILE"])
    if environ.get("LOG_LEVEL"):
        overrides["log_level"] = environ["LOG_LEVEL"].upper()

    return Settings(
        **{field: environ[name] for field, name in REQUIRED_VARIABLES.items()},
        **overrides,
    )
