"""Tests for src/go_docs_mcp/freshness.py: update policy evaluation."""

import time
from unittest.mock import patch

import pytest

from go_docs_mcp.freshness import DAY_MS, should_refresh
from go_docs_mcp.models import UpdatePolicy

NOW_MS = 1_700_000_000_000.0


def _write_raw_marker(store, content: str) -> None:
    path = store.metadata_path("1.21.0")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestManualAndStartup:
    def test_manual_never_refreshes_without_marker(self, store):
        assert should_refresh(store, "1.21.0", UpdatePolicy.MANUAL) is False

    def test_manual_never_refreshes_with_ancient_marker(self, store):
        store.write_marker("1.21.0", 0.0)
        assert should_refresh(store, "1.21.0", UpdatePolicy.MANUAL, now=NOW_MS) is False

    def test_startup_always_refreshes(self, store):
        assert should_refresh(store, "1.21.0", UpdatePolicy.STARTUP) is True
        store.write_marker("1.21.0", NOW_MS)
        assert should_refresh(store, "1.21.0", UpdatePolicy.STARTUP, now=NOW_MS) is True

    def test_accepts_policy_strings(self, store):
        assert should_refresh(store, "1.21.0", "startup") is True
        assert should_refresh(store, "1.21.0", "manual") is False

    def test_unknown_policy_rejected(self, store):
        with pytest.raises(ValueError):
            should_refresh(store, "1.21.0", "hourly")


class TestDaily:
    def test_missing_marker_refreshes(self, store):
        assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY) is True

    def test_recent_marker_is_fresh(self, store):
        store.write_marker("1.21.0", NOW_MS)
        assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS + 1) is False

    def test_just_under_a_day_is_fresh(self, store):
        store.write_marker("1.21.0", NOW_MS)
        assert (
            should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS + DAY_MS - 1)
            is False
        )

    def test_exactly_a_day_is_stale(self, store):
        store.write_marker("1.21.0", NOW_MS)
        assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS + DAY_MS) is True

    def test_round_trip_with_simulated_clock(self, store):
        """Marker written now is fresh 1 ms later and stale after 24h."""
        start = time.time()
        with patch("go_docs_mcp.freshness.time.time", return_value=start):
            store.write_marker("1.21.0", start * 1000)
        with patch("go_docs_mcp.freshness.time.time", return_value=start + 0.001):
            assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY) is False
        with patch("go_docs_mcp.freshness.time.time", return_value=start + 86401):
            assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY) is True

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            '{"version": "1.21.0"}',
            '{"lastUpdate": "yesterday", "version": "1.21.0"}',
            "",
        ],
    )
    def test_unparseable_marker_refreshes(self, store, content):
        _write_raw_marker(store, content)
        assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS) is True

    def test_marker_without_version_is_fresh(self, store):
        _write_raw_marker(store, f'{{"lastUpdate": {NOW_MS}}}')
        assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS + 1) is False

    def test_unreadable_marker_refreshes(self, store):
        store.write_marker("1.21.0", NOW_MS)
        with patch.object(store, "read_marker", side_effect=OSError("denied")):
            assert should_refresh(store, "1.21.0", UpdatePolicy.DAILY, now=NOW_MS) is True

    def test_evaluation_has_no_side_effects(self, store):
        should_refresh(store, "1.21.0", UpdatePolicy.DAILY)
        assert not store.partition("1.21.0").exists()
