"""
Delete leftover test repositories.

Scenarios clean up after themselves, but an interrupted run can leave
prefixed repositories behind. This command lists the configured user's
repositories, shows the ones matching the test prefix and deletes them
after a short grace period.

Exit codes:

- ``0``: nothing to delete, or every deletion succeeded
- ``1``: at least one repository could not be deleted
- ``2``: the script itself failed (missing credentials, API error)

Usage::

    github-suite-cleanup --prefix test-automation-repo --yes
"""

from __future__ import annotations

import argparse
import logging
import time

from github_suite.api import GitHubAPI
from github_suite.config import load_settings
from github_suite.errors import ConfigurationError, RemoteOperationError
from github_suite.helpers import delete_test_repos
from github_suite.logging_config import configure_logging

EXIT_OK = 0
EXIT_DELETE_FAILED = 1
EXIT_SCRIPT_ERROR = 2

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the cleanup command."""
    parser = argparse.ArgumentParser(description="Delete leftover test repositories.")
    parser.add_argument(
        "--prefix",
        default=None,
        help="Repository name prefix (defaults to TEST_REPO_PREFIX)",
    )
    parser.add_argument(
        "--grace-seconds",
        type=float,
        default=3.0,
        help="Seconds to wait before deleting, so the run can be cancelled",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the grace period",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only list matching repositories",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"ERROR: {exc}")
        return EXIT_SCRIPT_ERROR

    configure_logging(settings.log_file, settings.log_level)
    prefix = args.prefix or settings.repo_prefix
    api = GitHubAPI.from_settings(settings)

    try:
        repos = api.list_repositories(settings.username)
    except RemoteOperationError as exc:
        logger.error("Cleanup failed: %s", exc)
        return EXIT_SCRIPT_ERROR

    matching = [repo for repo in repos if repo["name"].startswith(prefix)]
    print(f"User: {settings.username}")
    print(f"Prefix: {prefix}")
    if not matching:
        print("No test repositories found. Nothing to clean up.")
        return EXIT_OK

    print(f"Found {len(matching)} test repositories:")
    for index, repo in enumerate(matching, start=1):
        visibility = "private" if repo.get("private") else "public"
        print(f"  {index}. {repo['name']} ({visibility})")

    if args.dry_run:
        return EXIT_OK

    if not args.yes:
        print(f"Deleting in {args.grace_seconds:g} seconds; press Ctrl+C to cancel.")
        time.sleep(args.grace_seconds)

    deleted, failed = delete_test_repos(
        api, settings.username, [repo["name"] for repo in matching], log=logger
    )
    print(f"Deleted: {deleted}  Failed: {failed}")
    return EXIT_DELETE_FAILED if failed else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
