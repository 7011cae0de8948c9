"""Breakthrough history: bounded, persisted log of past plays.

Used only as a selection signal (recency and fatigue). Loss-tolerant: a
missing, corrupt or unwritable store reads as an empty history and never
raises to the caller.
"""

import logging
from datetime import datetime, timezone

from cinematic.breakthrough.types import HistoryEntry
from cinematic.storage import JsonFileStore, StoreError

logger = logging.getLogger(__name__)

HISTORY_KEY = "cinematic.breakthrough.history.v1"
HISTORY_LIMIT = 50
RECENT_WINDOW = 10


class BreakthroughHistory:
    """Append-only play log, oldest entries evicted beyond ``limit``."""

    def __init__(self, store=None, limit: int = HISTORY_LIMIT):
        self._store = store if store is not None else JsonFileStore()
        self._limit = limit

    # --- Persistence ---

    def _load(self) -> list[HistoryEntry]:
        try:
            data = self._store.get(HISTORY_KEY, [])
        except StoreError as e:
            logger.warning("[History] Unreadable history, treating as empty: %s", e)
            return []

        if not isinstance(data, list):
            logger.warning("[History] Unexpected history format (%s), treating as empty",
                           type(data).__name__)
            return []

        entries = []
        for item in data:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.debug("[History] Skipping malformed entry: %r", item)
        return entries[-self._limit:]

    def _save(self, entries: list[HistoryEntry]):
        try:
            self._store.set(HISTORY_KEY, [e.to_dict() for e in entries])
        except StoreError as e:
            logger.warning("[History] Failed to persist history: %s", e)

    # --- Public API ---

    def record(self, variant_id: str, seed: int, intensity: str, quality_tier: str,
               completed: bool, was_safe_mode: bool) -> HistoryEntry:
        entry = HistoryEntry(
            variant_id=variant_id,
            seed=seed,
            intensity=intensity,
            quality_tier=quality_tier,
            completed=completed,
            was_safe_mode=was_safe_mode,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        entries = self._load()
        entries.append(entry)
        self._save(entries[-self._limit:])
        return entry

    def clear(self):
        try:
            self._store.remove(HISTORY_KEY)
        except StoreError as e:
            logger.warning("[History] Failed to clear history: %s", e)

    def entries(self) -> list[HistoryEntry]:
        """All entries, oldest first."""
        return self._load()

    def recent_variant_ids(self, limit: int = RECENT_WINDOW) -> list[str]:
        """Variant ids of the last ``limit`` plays, most recent first."""
        return [e.variant_id for e in reversed(self._load()[-limit:])]

    def recent_intensities(self, limit: int = RECENT_WINDOW) -> list[str]:
        """Intensity bands of the last ``limit`` plays, most recent first."""
        return [e.intensity for e in reversed(self._load()[-limit:])]

    def stats(self) -> dict:
        entries = self._load()
        completed = sum(1 for e in entries if e.completed)
        return {
            "total": len(entries),
            "completed": completed,
            "safe_mode": sum(1 for e in entries if e.was_safe_mode),
            "completion_rate": completed / len(entries) if entries else 0.0,
        }


_default_history: BreakthroughHistory | None = None


def get_default_history() -> BreakthroughHistory:
    global _default_history
    if _default_history is None:
        _default_history = BreakthroughHistory()
    return _default_history


def set_default_history(history: BreakthroughHistory | None):
    """Swap the process-wide history (None restores the file-backed default)."""
    global _default_history
    _default_history = history


def record_breakthrough(variant_id: str, seed: int, intensity: str, quality_tier: str,
                        completed: bool, was_safe_mode: bool) -> HistoryEntry:
    return get_default_history().record(
        variant_id, seed, intensity, quality_tier, completed, was_safe_mode
    )


def clear_breakthrough_history():
    get_default_history().clear()


def get_breakthrough_history() -> list[HistoryEntry]:
    return get_default_history().entries()


def get_recent_variant_ids(limit: int = RECENT_WINDOW) -> list[str]:
    return get_default_history().recent_variant_ids(limit)


def get_recent_intensities(limit: int = RECENT_WINDOW) -> list[str]:
    return get_default_history().recent_intensities(limit)


def get_history_stats() -> dict:
    return get_default_history().stats()
