"""Tests for breakthrough history and the key/value stores behind it."""
import json

import pytest

from cinematic.breakthrough.history import (
    HISTORY_KEY,
    BreakthroughHistory,
    clear_breakthrough_history,
    get_breakthrough_history,
    get_history_stats,
    get_recent_intensities,
    get_recent_variant_ids,
    record_breakthrough,
)
from cinematic.storage import JsonFileStore, MemoryStore, StoreError


def _record(history, variant_id, intensity="medium", completed=True, safe=False):
    return history.record(variant_id, 1, intensity, "mid", completed, safe)


class TestRecord:
    def test_append_and_read(self, history):
        _record(history, "a")
        _record(history, "b")
        assert [e.variant_id for e in history.entries()] == ["a", "b"]

    def test_entry_fields(self, history):
        entry = history.record("breath_out", 42, "low", "low", False, True)
        assert entry.seed == 42
        assert entry.quality_tier == "low"
        assert entry.completed is False
        assert entry.was_safe_mode is True
        assert entry.timestamp

    def test_evicts_oldest_beyond_limit(self):
        history = BreakthroughHistory(store=MemoryStore(), limit=5)
        for i in range(8):
            _record(history, f"v{i}")
        assert [e.variant_id for e in history.entries()] == ["v3", "v4", "v5", "v6", "v7"]

    def test_default_limit_is_50(self, history):
        for i in range(60):
            _record(history, f"v{i}")
        entries = history.entries()
        assert len(entries) == 50
        assert entries[0].variant_id == "v10"

    def test_clear(self, history):
        _record(history, "a")
        history.clear()
        assert history.entries() == []


class TestRecentReads:
    def test_most_recent_first(self, history):
        for vid in ("a", "b", "c"):
            _record(history, vid)
        assert history.recent_variant_ids() == ["c", "b", "a"]

    def test_limit(self, history):
        for i in range(15):
            _record(history, f"v{i}")
        recent = history.recent_variant_ids(10)
        assert len(recent) == 10
        assert recent[0] == "v14"

    def test_intensities(self, history):
        _record(history, "a", "low")
        _record(history, "b", "extreme")
        assert history.recent_intensities(5) == ["extreme", "low"]

    def test_stats(self, history):
        _record(history, "a", completed=True)
        _record(history, "b", completed=False, safe=True)
        stats = history.stats()
        assert stats["total"] == 2
        assert stats["completed"] == 1
        assert stats["safe_mode"] == 1
        assert stats["completion_rate"] == pytest.approx(0.5)

    def test_empty_stats(self, history):
        assert history.stats()["completion_rate"] == 0.0


class TestCorruption:
    def test_corrupt_json_reads_empty(self):
        store = MemoryStore()
        store.set_raw(HISTORY_KEY, "{not json")
        history = BreakthroughHistory(store=store)
        assert history.entries() == []
        assert history.recent_variant_ids() == []

    def test_wrong_shape_reads_empty(self):
        store = MemoryStore()
        store.set(HISTORY_KEY, {"oops": True})
        assert BreakthroughHistory(store=store).entries() == []

    def test_malformed_entries_skipped(self):
        store = MemoryStore()
        store.set(HISTORY_KEY, [
            {"variant_id": "ok", "seed": 1, "intensity": "low", "quality_tier": "mid",
             "completed": True, "was_safe_mode": False, "timestamp": "t"},
            {"variant_id": "missing_fields"},
            "garbage",
        ])
        assert [e.variant_id for e in BreakthroughHistory(store=store).entries()] == ["ok"]

    def test_record_after_corruption_recovers(self):
        store = MemoryStore()
        store.set_raw(HISTORY_KEY, "[[[")
        history = BreakthroughHistory(store=store)
        _record(history, "fresh")
        assert [e.variant_id for e in history.entries()] == ["fresh"]

    def test_unwritable_store_does_not_raise(self):
        class BrokenStore(MemoryStore):
            def set(self, key, value):
                raise StoreError("disk full")

        history = BreakthroughHistory(store=BrokenStore())
        entry = _record(history, "a")
        assert entry.variant_id == "a"
        assert history.entries() == []


class TestModuleFunctions:
    def test_default_history_round_trip(self):
        record_breakthrough("a", 1, "high", "mid", True, False)
        record_breakthrough("b", 2, "low", "mid", True, False)
        assert get_recent_variant_ids() == ["b", "a"]
        assert get_recent_intensities(1) == ["low"]
        assert len(get_breakthrough_history()) == 2
        assert get_history_stats()["total"] == 2
        clear_breakthrough_history()
        assert get_breakthrough_history() == []


class TestJsonFileStore:
    def test_round_trip(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.set("some.key", [1, 2, 3])
        assert store.get("some.key") == [1, 2, 3]

    def test_missing_key_default(self, tmp_path):
        assert JsonFileStore(str(tmp_path)).get("nope", "d") == "d"

    def test_corrupt_file_raises_store_error(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.set("k", 1)
        (tmp_path / "k.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(StoreError):
            store.get("k")

    def test_file_backed_history(self, tmp_path):
        history = BreakthroughHistory(store=JsonFileStore(str(tmp_path)))
        _record(history, "persisted")
        again = BreakthroughHistory(store=JsonFileStore(str(tmp_path)))
        assert again.recent_variant_ids() == ["persisted"]
        files = list(tmp_path.glob("*.json"))
        assert len(files) == 1
        assert json.loads(files[0].read_text(encoding="utf-8"))[0]["variant_id"] == "persisted"

    def test_remove_missing_is_noop(self, tmp_path):
        JsonFileStore(str(tmp_path)).remove("never-set")
