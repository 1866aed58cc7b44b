"""
GitHub REST API client used by the API and consistency suites.

The client is a thin pass-through: each method issues one request (or one
paginated sequence) and returns the decoded JSON body. Any non-2xx
response or transport failure is normalised into ``RemoteOperationError``
carrying the remote ``message`` when GitHub supplied one. Nothing is
retried here; retry policy belongs to the test runner.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from github_suite.config import Settings
from github_suite.errors import RemoteOperationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of calling the authenticated-user endpoint."""

    success: bool
    status: int | None
    message: str | None = None


def _error_message(response: requests.Response) -> str:
    """Prefer GitHub's JSON ``message``; fall back to body text or reason."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    if response.text:
        return response.text
    return response.reason or f"HTTP {response.status_code}"


def _repo_path(owner: str, repo: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"


def _contents_path(owner: str, repo: str, path: str) -> str:
    # "#" and "?" in a file name would otherwise end the URL path
    return f"{_repo_path(owner, repo)}/contents/{quote(path, safe='/')}"


class GitHubAPI:
    """
    Authenticated client for repository, contents and rate-limit endpoints.

    Attributes:
        base_url: REST API root, e.g. ``https://api.github.com``.
        timeout: Per-request timeout in seconds.
        session: ``requests.Session`` carrying the auth headers.
    """

    PER_PAGE = 100

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        log: logging.Logger | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.log = log or logger
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, log: logging.Logger | None = None
    ) -> "GitHubAPI":
        """Build a client from suite settings."""
        return cls(
            settings.token,
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            log=log,
        )

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _send(self, method: str, path_or_url: str, **kwargs) -> requests.Response:
        """Issue a request and return the raw response (no status checks)."""
        if path_or_url.startswith("http"):
            url = path_or_url
        else:
            url = f"{self.base_url}/{path_or_url.lstrip('/')}"
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        self.log.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def _request(self, action: str, method: str, path: str, **kwargs) -> requests.Response:
        """
        Issue a request and raise ``RemoteOperationError`` on failure.

        Args:
            action: Human-readable operation, used in the error message.
            method: HTTP verb.
            path: Path relative to the API root, or an absolute URL.

        Raises:
            RemoteOperationError: On transport failure or non-2xx status.
        """
        try:
            response = self._send(method, path, **kwargs)
        except requests.RequestException as exc:
            raise RemoteOperationError(f"Failed to {action}: {exc}") from exc

        if not response.ok:
            raise RemoteOperationError(
                f"Failed to {action}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    def create_repository(self, name: str, **options: Any) -> dict[str, Any]:
        """Create a repository for the authenticated user."""
        response = self._request(
            "create repository", "POST", "/user/repos", json={"name": name, **options}
        )
        return response.json()

    def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        response = self._request("get repository", "GET", _repo_path(owner, repo))
        return response.json()

    def update_repository(self, owner: str, repo: str, **changes: Any) -> dict[str, Any]:
        """Patch only the given repository fields and return the new state."""
        response = self._request(
            "update repository", "PATCH", _repo_path(owner, repo), json=changes
        )
        return response.json()

    def delete_repository(self, owner: str, repo: str) -> bool:
        """
        Delete a repository.

        Returns:
            True when deleted, False when the repository was already absent.

        Raises:
            RemoteOperationError: For every failure other than 404.
        """
        try:
            self._request("delete repository", "DELETE", _repo_path(owner, repo))
        except RemoteOperationError as exc:
            if exc.status_code == 404:
                return False
            raise
        return True

    def list_repositories(self, owner: str) -> list[dict[str, Any]]:
        """List a user's public repositories in the order GitHub returns them."""
        repositories: list[dict[str, Any]] = []
        next_url: str | None = f"/users/{quote(owner, safe='')}/repos"
        params: dict[str, Any] | None = {"per_page": self.PER_PAGE}
        while next_url:
            response = self._request("list repositories", "GET", next_url, params=params)
            repositories.extend(response.json())
            next_url = response.links.get("next", {}).get("url")
            # the "next" link already carries the query string
            params = None
        return repositories

    # -------------------------------------------------------------------------
    # Contents
    # -------------------------------------------------------------------------

    def create_or_update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str | bytes,
        message: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """
        Write a file. Without ``sha`` this is a create; with it, an update
        that GitHub rejects unless ``sha`` matches the current blob.
        """
        raw = content.encode("utf-8") if isinstance(content, str) else content
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(raw).decode("ascii"),
        }
        if sha:
            payload["sha"] = sha
        response = self._request(
            "create/update file",
            "PUT",
            _contents_path(owner, repo, path),
            json=payload,
        )
        return response.json()

    def get_file_content(self, owner: str, repo: str, path: str) -> dict[str, Any]:
        response = self._request(
            "get file content", "GET", _contents_path(owner, repo, path)
        )
        return response.json()

    def delete_file(self, owner: str, repo: str, path: str, message: str, sha: str) -> bool:
        self._request(
            "delete file",
            "DELETE",
            _contents_path(owner, repo, path),
            json={"message": message, "sha": sha},
        )
        return True

    # -------------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------------

    def check_rate_limit(self) -> dict[str, Any]:
        response = self._request("check rate limit", "GET", "/rate_limit")
        return response.json()

    def get_authenticated_user(self) -> dict[str, Any]:
        response = self._request("get authenticated user", "GET", "/user")
        return response.json()

    # -------------------------------------------------------------------------
    # Negative-path probes (return booleans, never raise)
    # -------------------------------------------------------------------------

    def test_resource_not_found(self, owner: str, repo: str) -> bool:
        """Return True exactly when GitHub answers 404 for the repository."""
        try:
            response = self._send("GET", _repo_path(owner, repo))
        except requests.RequestException:
            return False
        return response.status_code == 404

    def test_unprocessable_entity(self, payload: dict[str, Any]) -> bool:
        """Return True when creating a repository from ``payload`` yields 422."""
        try:
            response = self._send("POST", "/user/repos", json=payload)
        except requests.RequestException:
            return False
        return response.status_code == 422

    def check_token(self) -> TokenCheck:
        """Call ``/user`` and report whether the configured token is accepted."""
        try:
            response = self._send("GET", "/user")
        except requests.RequestException as exc:
            return TokenCheck(success=False, status=None, message=str(exc))
        if response.ok:
            return TokenCheck(success=True, status=response.status_code)
        return TokenCheck(
            success=False,
            status=response.status_code,
            message=_error_message(response),
        )
