"""Breakthrough Director: lifecycle of one cinematic sequence at a time.

    idle -> prewarming -> ready -> playing -> settling -> cleanup -> idle

Prewarm picks (and mutates) a variant ahead of time so play() starts
instantly. While playing, an FPS safety net flips the director into safe mode
when the renderer can't keep up, and a max-duration guard forces completion
if the presentation layer never calls complete(). Every run ends in exactly
one on_complete / on_abort callback and one history entry.

Nothing here raises to the caller: selection failures fall back to a safe
variant, misuse is logged and ignored.
"""

import asyncio
import dataclasses
import logging
from collections import deque

import numpy as np

from cinematic.analytics import BreakthroughEvent, get_default_analytics
from cinematic.breakthrough.history import get_default_history
from cinematic.breakthrough.scheduler import LoopScheduler
from cinematic.breakthrough.selector import (
    build_selection_context,
    select_fallback_variant,
    select_variant,
)
from cinematic.breakthrough.types import DirectorPhase, DirectorState, MutatedVariant
from cinematic.feature_flags import is_breakthrough_v2_enabled

logger = logging.getLogger(__name__)

# Safety net
FPS_THRESHOLD = 30          # fps, mean over the sample window
FPS_SAMPLE_WINDOW = 30      # samples needed before judging
FPS_HISTORY_LIMIT = 60      # ring buffer size (1s at 60fps)
FPS_CHECK_INTERVAL = 0.5    # 500ms

# Timers
MAX_DURATION = 15.0         # 15s, forced completion
SETTLE_DURATION = 0.3       # 300ms between complete() and finalize
PLAY_POLL_INTERVAL = 0.05   # 50ms while waiting for a superseded run

DEFAULT_QUALITY_TIER = "mid"

_RUNNING = (DirectorPhase.PLAYING, DirectorPhase.SETTLING)


class BreakthroughDirector:
    """Owns the director state, its timers and the prewarmed variant.

    Collaborators are injectable for tests and the headless preview:
    ``select(context) -> SelectionResult``, ``fallback(tier) -> MutatedVariant``
    and ``is_enabled() -> bool`` default to the selector and the kill switch.
    """

    def __init__(self, history=None, scheduler=None, analytics=None,
                 select=None, fallback=None, is_enabled=None):
        self._history = history if history is not None else get_default_history()
        self._scheduler = scheduler if scheduler is not None else LoopScheduler()
        self._analytics = analytics if analytics is not None else get_default_analytics()
        self._select = select or select_variant
        self._fallback = fallback or select_fallback_variant
        self._is_enabled = is_enabled or is_breakthrough_v2_enabled

        self._state = DirectorState()
        self._quality_tier = DEFAULT_QUALITY_TIER

        self._prewarmed: MutatedVariant | None = None
        self._prewarm_tier: str | None = None

        self._fps_timer = None
        self._max_duration_timer = None
        self._settle_timer = None

        self._on_complete = None
        self._on_abort = None
        self._on_phase_change = None

    # --- Accessors ---

    def get_state(self) -> DirectorState:
        """Snapshot copy; mutating it does not affect the director."""
        return dataclasses.replace(self._state, fps_history=list(self._state.fps_history))

    def is_safe_mode(self) -> bool:
        return self._state.is_safe_mode

    def get_current_variant(self) -> MutatedVariant | None:
        return self._state.current_variant

    @property
    def prewarmed_variant(self) -> MutatedVariant | None:
        return self._prewarmed

    def set_callbacks(self, on_complete=None, on_abort=None, on_phase_change=None):
        """Replace all three callbacks at once; omitted ones are cleared."""
        self._on_complete = on_complete
        self._on_abort = on_abort
        self._on_phase_change = on_phase_change

    # --- Lifecycle ---

    async def prewarm(self, entities=(), breakthrough_type: str | None = None,
                      quality_tier: str = DEFAULT_QUALITY_TIER,
                      reduced_motion: bool = False) -> MutatedVariant:
        """Select a variant for the next play(). Never raises.

        While a run is on screen the variant is cached for the next play()
        without touching the current phase.
        """
        if self._state.phase in _RUNNING:
            variant = self._choose_variant(entities, breakthrough_type, quality_tier, reduced_motion)
            self._prewarmed, self._prewarm_tier = variant, quality_tier
            logger.info("[Director] Queued %s behind the running sequence", variant.id)
            return variant

        self._set_phase(DirectorPhase.PREWARMING)
        variant = self._choose_variant(entities, breakthrough_type, quality_tier, reduced_motion)

        if self._state.phase is not DirectorPhase.PREWARMING:
            # Aborted while selecting
            return variant

        self._prewarmed, self._prewarm_tier = variant, quality_tier
        logger.info("[Director] Prewarm complete: %s (seed=%d)", variant.id, variant.seed)
        self._set_phase(DirectorPhase.READY)
        return variant

    async def play(self, variant: MutatedVariant | None = None, quality_tier: str | None = None):
        """Start a run. Supersedes (aborts) a run already on screen.

        Uses ``variant``, else the prewarmed one, else a fallback in safe mode.
        """
        if self._state.phase in _RUNNING:
            logger.info("[Director] Superseding %s", self._state.current_variant.id)
            self.abort("new_play_requested")
            while self._state.phase is not DirectorPhase.IDLE:
                await asyncio.sleep(PLAY_POLL_INTERVAL)

        tier = quality_tier or self._prewarm_tier or DEFAULT_QUALITY_TIER
        chosen = variant or self._prewarmed
        self._prewarmed, self._prewarm_tier = None, None

        safe_mode = False
        if chosen is None:
            logger.warning("[Director] play() without a prewarmed variant, using fallback")
            chosen = self._fallback(tier)
            safe_mode = True

        self._quality_tier = tier
        self._state = DirectorState(
            phase=self._state.phase,
            current_variant=chosen,
            start_time=self._scheduler.now(),
            fps_history=deque(maxlen=FPS_HISTORY_LIMIT),
            is_safe_mode=safe_mode,
        )
        self._set_phase(DirectorPhase.PLAYING)
        if self._state.phase is not DirectorPhase.PLAYING:
            return

        self._track("started")
        self._fps_timer = self._scheduler.call_every(FPS_CHECK_INTERVAL, self._check_fps)
        self._max_duration_timer = self._scheduler.call_later(MAX_DURATION, self._on_max_duration)

    def report_fps(self, fps: float):
        if self._state.phase is not DirectorPhase.PLAYING:
            return
        self._state.fps_history.append(float(fps))

    def complete(self):
        """The sequence's timeline ended naturally: settle, then finalize."""
        if self._state.phase is not DirectorPhase.PLAYING:
            logger.warning("[Director] complete() ignored in phase %s", self._state.phase.value)
            return
        self._set_phase(DirectorPhase.SETTLING)
        self._settle_timer = self._scheduler.call_later(SETTLE_DURATION, self._on_settled)

    def abort(self, reason: str = "user_abort"):
        """Cancel whatever is in progress. Returns with the director idle."""
        phase = self._state.phase
        if phase in (DirectorPhase.IDLE, DirectorPhase.CLEANUP):
            return

        logger.info("[Director] Aborted in %s: %s", phase.value, reason)
        if phase in (DirectorPhase.PREWARMING, DirectorPhase.READY):
            self._prewarmed, self._prewarm_tier = None, None

        self._track("aborted", extra={"reason": reason})
        self._finalize(False, reason)

    def trigger_safe_mode(self):
        if self._state.is_safe_mode or self._state.phase is not DirectorPhase.PLAYING:
            return
        logger.warning("[Director] Entering safe mode")
        self._state.is_safe_mode = True
        self._track("fallback")

    def handle_webgl_context_lost(self):
        if self._state.phase is not DirectorPhase.PLAYING:
            return
        logger.warning("[Director] Rendering context lost during %s", self._state.current_variant.id)
        self._state.error = "webgl_context_lost"
        self.abort("webgl_context_lost")

    def dispose(self):
        """Full teardown: no callbacks fire, nothing is recorded."""
        self._cancel_timers()
        self._state = DirectorState()
        self._quality_tier = DEFAULT_QUALITY_TIER
        self._prewarmed, self._prewarm_tier = None, None
        self.set_callbacks()

    # --- Internals ---

    def _choose_variant(self, entities, breakthrough_type, quality_tier, reduced_motion) -> MutatedVariant:
        if not self._is_enabled():
            logger.info("[Director] Breakthrough v2 disabled, using fallback variant")
            return self._fallback(quality_tier)

        try:
            context = build_selection_context(
                entities, breakthrough_type, quality_tier, reduced_motion, history=self._history
            )
            return self._select(context).variant
        except Exception as e:
            logger.error("[Director] Selection failed, using fallback: %s", e, exc_info=True)
            variant = self._fallback(quality_tier)
            self._track("error", variant=variant, quality_tier=quality_tier, error=str(e))
            return variant

    def _set_phase(self, phase: DirectorPhase):
        self._state.phase = phase
        logger.debug("[Director] Phase -> %s", phase.value)
        self._emit(self._on_phase_change, phase)

    def _emit(self, callback, *args):
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("[Director] Callback %r failed", callback)

    def _check_fps(self):
        if self._state.phase is not DirectorPhase.PLAYING:
            if self._fps_timer is not None:
                self._fps_timer.cancel()
                self._fps_timer = None
            return

        history = self._state.fps_history
        if len(history) < FPS_SAMPLE_WINDOW:
            return
        avg_fps = float(np.mean(list(history)[-FPS_SAMPLE_WINDOW:]))
        if avg_fps < FPS_THRESHOLD:
            logger.warning("[Director] FPS %.1f below %d", avg_fps, FPS_THRESHOLD)
            self._track("fps_dip", extra={"window_avg_fps": avg_fps})
            self.trigger_safe_mode()

    def _on_max_duration(self):
        self._max_duration_timer = None
        if self._state.phase is DirectorPhase.PLAYING:
            logger.warning("[Director] Max duration (%.0fs) reached, forcing completion", MAX_DURATION)
            self.complete()

    def _on_settled(self):
        self._settle_timer = None
        if self._state.phase is DirectorPhase.SETTLING:
            self._finalize(True)

    def _cancel_timers(self):
        for timer in (self._fps_timer, self._max_duration_timer, self._settle_timer):
            if timer is not None:
                timer.cancel()
        self._fps_timer = self._max_duration_timer = self._settle_timer = None

    def _finalize(self, completed: bool, reason: str | None = None):
        self._set_phase(DirectorPhase.CLEANUP)
        self._cancel_timers()

        variant = self._state.current_variant
        if variant is not None:
            self._history.record(
                variant.id, variant.seed, variant.intensity, self._quality_tier,
                completed, self._state.is_safe_mode,
            )
            if completed:
                self._track("completed")
            self._track_performance()

        if completed:
            self._emit(self._on_complete)
        else:
            self._emit(self._on_abort, reason or "unknown")

        self._state = DirectorState(phase=DirectorPhase.CLEANUP)
        self._set_phase(DirectorPhase.IDLE)

    def _track_performance(self):
        if not self._state.fps_history:
            return
        samples = np.asarray(self._state.fps_history, dtype=np.float64)
        self._track("performance", extra={
            "max_fps": float(samples.max()),
            "sample_count": int(samples.size),
            "particle_count": self._state.current_variant.final_particle_count,
        })

    def _track(self, event_type: str, variant: MutatedVariant | None = None,
               quality_tier: str | None = None, error: str | None = None, extra: dict | None = None):
        variant = variant or self._state.current_variant
        if variant is None or self._analytics is None:
            return

        try:
            fps = self._state.fps_history
            start = self._state.start_time
            event = BreakthroughEvent(
                event_type=event_type,
                variant_id=variant.id,
                seed=variant.seed,
                intensity_band=variant.intensity,
                quality_tier=quality_tier or self._quality_tier,
                duration=(self._scheduler.now() - start) * 1000 if start is not None else None,
                avg_fps=float(np.mean(fps)) if fps else None,
                min_fps=float(min(fps)) if fps else None,
                error=error or self._state.error,
                was_safe_mode=self._state.is_safe_mode,
                extra=extra or {},
            )
            self._analytics.track(event)
        except Exception as e:
            logger.warning("[Director] Failed to track %s: %s", event_type, e)


_director: BreakthroughDirector | None = None


def get_breakthrough_director() -> BreakthroughDirector:
    global _director
    if _director is None:
        _director = BreakthroughDirector()
    return _director


def reset_breakthrough_director():
    """Dispose and forget the shared instance (tests)."""
    global _director
    if _director is not None:
        _director.dispose()
        _director = None
