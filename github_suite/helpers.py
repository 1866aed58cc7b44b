"""
Helper utilities shared by the test suites.

Naming, delays, structural comparison, content decoding and the cleanup
routines that delete repositories created during a run. Cleanup helpers
log their own failures and never re-raise, so a failed teardown cannot
mask the result of the scenario it follows.
"""

from __future__ import annotations

import base64
import json
import logging
import random
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from github_suite.api import GitHubAPI
from github_suite.errors import RemoteOperationError

logger = logging.getLogger(__name__)


def generate_repo_name(prefix: str = "test-repo", label: str | None = None) -> str:
    """
    Generate a repository name unlikely to collide across runs.

    Combines a millisecond timestamp with a random suffix, e.g.
    ``test-repo-1718000000000-42``. An optional ``label`` goes after the
    prefix, so labelled names still match the cleanup prefix filter:
    ``test-repo-r1-1718000000000-42``.
    """
    timestamp = int(time.time() * 1000)
    suffix = random.randint(0, 999)
    stem = f"{prefix}-{label}" if label else prefix
    return f"{stem}-{timestamp}-{suffix}"


def delay(milliseconds: int) -> None:
    """Block for ``milliseconds`` to let remote state settle."""
    time.sleep(milliseconds / 1000)


@contextmanager
def stopwatch() -> Iterator[dict[str, float]]:
    """
    Time the wrapped block.

    Yields a dict whose ``ms`` key holds the elapsed milliseconds once
    the block exits, e.g. ``with stopwatch() as timing: ...``.
    """
    timing: dict[str, float] = {}
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing["ms"] = (time.perf_counter() - start) * 1000


def deep_equal(first: Any, second: Any) -> bool:
    """Compare two JSON-compatible structures irrespective of key order."""
    return json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def decode_content(file_data: dict[str, Any]) -> bytes:
    """Decode the base64 ``content`` of a contents-API file payload."""
    # GitHub wraps the base64 payload at 60 characters
    encoded = "".join(file_data["content"].split())
    return base64.b64decode(encoded)


def safe_delete_repository(
    api: GitHubAPI, owner: str, repo: str, log: logging.Logger | None = None
) -> bool:
    """
    Delete a repository during teardown, logging instead of raising.

    Returns:
        True when the repository was deleted, False when it was already
        gone or the deletion failed.
    """
    log = log or logger
    try:
        deleted = api.delete_repository(owner, repo)
    except RemoteOperationError as exc:
        log.warning("Cleanup skipped for %s: %s", repo, exc)
        return False
    if deleted:
        log.info("Cleaned up test repository: %s", repo)
    else:
        log.info("Test repository already absent: %s", repo)
    return deleted


def cleanup_test_repos(
    api: GitHubAPI,
    username: str,
    prefix: str = "test-",
    log: logging.Logger | None = None,
) -> tuple[int, int]:
    """
    Delete every repository of ``username`` whose name starts with ``prefix``.

    Returns:
        ``(deleted, failed)`` counts. Listing failures are logged and
        reported as ``(0, 0)``.
    """
    log = log or logger
    try:
        repos = api.list_repositories(username)
    except RemoteOperationError as exc:
        log.error("Cleanup failed: %s", exc)
        return 0, 0

    names = [repo["name"] for repo in repos if repo["name"].startswith(prefix)]
    log.info("Found %d test repositories to cleanup", len(names))
    return delete_test_repos(api, username, names, log=log)


def delete_test_repos(
    api: GitHubAPI,
    username: str,
    names: Iterable[str],
    log: logging.Logger | None = None,
) -> tuple[int, int]:
    """
    Delete the named repositories of ``username``.

    Returns:
        ``(deleted, failed)`` counts. A repository that is already gone
        is logged and counted in neither.
    """
    log = log or logger
    deleted = failed = 0
    for name in names:
        try:
            removed = api.delete_repository(username, name)
        except RemoteOperationError as exc:
            log.warning("Failed to delete %s: %s", name, exc)
            failed += 1
            continue
        if removed:
            log.info("Deleted: %s", name)
            deleted += 1
        else:
            log.info("Test repository already absent: %s", name)
    return deleted, failed
