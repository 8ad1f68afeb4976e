"""Decide whether cached builtin metadata must be refreshed."""

import time

from loguru import logger
from pydantic import ValidationError

from go_docs_mcp.models import UpdatePolicy
from go_docs_mcp.store import CacheStore

DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> float:
    return time.time() * 1000


def should_refresh(
    store: CacheStore,
    version: str,
    policy: UpdatePolicy,
    now: float | None = None,
) -> bool:
    """Return True if ``policy`` requires re-acquiring metadata for ``version``.

    Args:
        store: Cache store holding the version's freshness marker.
        version: Go version identifier.
        policy: ``manual`` never refreshes, ``startup`` always does,
            ``daily`` refreshes when the marker is missing, unreadable,
            or at least 24 hours old.
        now: Current time in epoch milliseconds (defaults to the wall clock).

    Reads the marker only; never writes.
    """
    policy = UpdatePolicy(policy)
    if policy is UpdatePolicy.MANUAL:
        return False
    if policy is UpdatePolicy.STARTUP:
        return True

    try:
        marker = store.read_marker(version)
    except (OSError, ValidationError) as e:
        logger.debug(f"Unreadable freshness marker for {version}, refreshing: {e}")
        return True

    if marker is None:
        return True

    current = now_ms() if now is None else now
    return current - marker.last_update >= DAY_MS
