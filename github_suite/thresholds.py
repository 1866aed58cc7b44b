"""
Performance budgets for the cross-platform suite.

Budgets live in a YAML file so they can be tuned per environment without
touching test code. Every key is a millisecond limit; a missing or
non-numeric key is a configuration mistake and fails loudly.
"""

from __future__ import annotations

from pathlib import Path

import yaml

THRESHOLD_KEYS = (
    "max_page_load_ms",
    "max_api_response_ms",
    "max_repo_creation_ms",
    "max_navigation_ms",
)


def load_thresholds(path: Path) -> dict[str, float]:
    """
    Read performance limits from a YAML file.

    Args:
        path: YAML file defining every key in ``THRESHOLD_KEYS``.

    Returns:
        Mapping of threshold name to limit in milliseconds.

    Raises:
        ValueError: If a key is missing or non-numeric.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    try:
        return {key: float(data[key]) for key in THRESHOLD_KEYS}
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(
            f"Thresholds file must define numeric {', '.join(THRESHOLD_KEYS)}"
        ) from exc
