"""Persist and reuse an authenticated browser session between scenarios."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from playwright.sync_api import BrowserContext

logger = logging.getLogger(__name__)


def save_session_state(context: BrowserContext, path: Path) -> Path:
    """Write the context's cookies and storage to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    context.storage_state(path=str(path))
    logger.info("Saved authenticated session state to %s", path)
    return path


def stored_session_state(path: Path) -> Path | None:
    """
    Return ``path`` when it holds a usable storage-state snapshot.

    The snapshot is treated as opaque; the only check is that it parses
    and carries at least one cookie. Expiry is left to the remote side.
    """
    if not path.exists():
        return None
    try:
        state = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable session state %s: %s", path, exc)
        return None
    if not isinstance(state, dict) or not state.get("cookies"):
        return None
    return path
