"""Analytics sink for breakthrough lifecycle events.

Fire-and-forget: transport failures are logged here and never reach the
caller. The opt-out flag is persisted; an unreadable flag counts as enabled.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from cinematic.storage import JsonFileStore, StoreError

logger = logging.getLogger(__name__)

ANALYTICS_ENABLED_KEY = "cinematic.analytics.enabled"

EVENT_TYPES = ("started", "completed", "aborted", "fallback", "fps_dip", "error", "performance")

# Event names as the dashboards know them: cinematic_<name>
_PUBLIC_NAMES = {"aborted": "skipped"}


@dataclass(frozen=True)
class BreakthroughEvent:
    event_type: str
    variant_id: str
    seed: int
    intensity_band: str
    quality_tier: str
    duration: float | None = None   # ms since play()
    avg_fps: float | None = None
    min_fps: float | None = None
    error: str | None = None
    was_safe_mode: bool = False
    extra: dict = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def public_name(self) -> str:
        return "cinematic_" + _PUBLIC_NAMES.get(self.event_type, self.event_type)

    def to_dict(self) -> dict:
        return asdict(self)


class Analytics:
    """Forwards events to ``transport(name, payload)`` if analytics is enabled."""

    def __init__(self, transport=None, store=None):
        self._transport = transport
        self._store = store if store is not None else JsonFileStore()

    def is_enabled(self) -> bool:
        try:
            return self._store.get(ANALYTICS_ENABLED_KEY, True) is not False
        except StoreError:
            return True

    def set_enabled(self, enabled: bool):
        try:
            self._store.set(ANALYTICS_ENABLED_KEY, bool(enabled))
        except StoreError as e:
            logger.warning("[Analytics] Could not persist opt-out flag: %s", e)

    def track(self, event: BreakthroughEvent):
        if not self.is_enabled():
            return

        payload = event.to_dict()
        logger.info("[Analytics] %s variant=%s seed=%s", event.public_name,
                    event.variant_id, event.seed)

        if self._transport is None:
            return
        try:
            self._transport(event.public_name, payload)
        except Exception as e:
            logger.warning("[Analytics] Transport failed for %s: %s", event.public_name, e)


_default_analytics: Analytics | None = None


def get_default_analytics() -> Analytics:
    global _default_analytics
    if _default_analytics is None:
        _default_analytics = Analytics()
    return _default_analytics


def set_default_analytics(analytics: Analytics | None):
    global _default_analytics
    _default_analytics = analytics


def set_analytics_enabled(enabled: bool):
    get_default_analytics().set_enabled(enabled)


def is_analytics_enabled() -> bool:
    return get_default_analytics().is_enabled()
