"""Headless preview: drives the director the way a renderer would.

Steps a virtual frame clock instead of a window: prewarm, play, report FPS
every frame, call complete() once the variant's duration has elapsed, and
optionally lose the rendering context mid-run. Used by main.py and tests.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum, auto

from cinematic.breakthrough.director import BreakthroughDirector
from cinematic.breakthrough.scheduler import ManualScheduler
from cinematic.breakthrough.types import DirectorPhase
from cinematic.device_tier import PARTICLE_BUDGETS, particle_budget

logger = logging.getLogger(__name__)

DEFAULT_FPS = 60.0


class PreviewState(Enum):
    IDLE = auto()
    PREWARMING = auto()
    PLAYING = auto()
    DONE = auto()


@dataclass
class RunReport:
    """What one previewed run looked like from the presentation side."""
    variant_id: str
    variant_class: str
    intensity: str
    seed: int
    final_duration: int          # ms, as mutated
    particle_count: int          # after tier budget / safe mode
    frames: int = 0
    elapsed: float = 0.0         # seconds of virtual time
    outcome: str = ""            # "completed" | "aborted"
    abort_reason: str | None = None
    safe_mode: bool = False
    phases: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


class PreviewPresenter:
    """Frame-stepping stand-in for the renderer."""

    def __init__(self, quality_tier: str = "mid", reduced_motion: bool = False,
                 fps: float = DEFAULT_FPS, lose_context_at: int | None = None,
                 breakthrough_type: str | None = None, entities=(),
                 director: BreakthroughDirector | None = None,
                 scheduler: ManualScheduler | None = None):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self.quality_tier = quality_tier
        self.reduced_motion = reduced_motion
        self.fps = fps
        self.lose_context_at = lose_context_at
        self.breakthrough_type = breakthrough_type
        self.entities = tuple(entities)

        self.scheduler = scheduler or ManualScheduler()
        self.director = director or BreakthroughDirector(scheduler=self.scheduler)

        self.state = PreviewState.IDLE
        self._report: RunReport | None = None

        self.director.set_callbacks(
            on_complete=self._on_complete,
            on_abort=self._on_abort,
            on_phase_change=self._on_phase_change,
        )

    # --- Director callbacks ---

    def _on_complete(self):
        if self._report is None:
            return
        self._report.outcome = "completed"
        self.state = PreviewState.DONE

    def _on_abort(self, reason: str):
        if self._report is None:
            return
        self._report.outcome = "aborted"
        self._report.abort_reason = reason
        self.state = PreviewState.DONE

    def _on_phase_change(self, phase: DirectorPhase):
        if self._report is not None:
            self._report.phases.append(phase.value)

    # --- Run loop ---

    def _rendered_particles(self, variant) -> int:
        budget = particle_budget(self.quality_tier)
        if self.director.is_safe_mode():
            budget = min(budget, PARTICLE_BUDGETS["low"])
        return min(variant.final_particle_count, budget)

    async def run_once(self) -> RunReport:
        self.state = PreviewState.PREWARMING
        self._report = None
        await self.director.prewarm(
            self.entities, self.breakthrough_type, self.quality_tier, self.reduced_motion
        )

        await self.director.play(quality_tier=self.quality_tier)
        variant = self.director.get_current_variant()
        self._report = report = RunReport(
            variant_id=variant.id,
            variant_class=variant.variant_class,
            intensity=variant.intensity,
            seed=variant.seed,
            final_duration=variant.final_duration,
            particle_count=self._rendered_particles(variant),
            phases=[DirectorPhase.PLAYING.value],
        )
        self.state = PreviewState.PLAYING
        logger.info("[Preview] Playing %s (%s, %d particles)", variant.id,
                    variant.intensity, report.particle_count)

        dt = 1.0 / self.fps
        while self.state is PreviewState.PLAYING:
            if self.lose_context_at is not None and report.frames == self.lose_context_at:
                self.director.handle_webgl_context_lost()
                if self.state is not PreviewState.PLAYING:
                    break

            self.director.report_fps(self.fps)
            if self.director.is_safe_mode():
                report.safe_mode = True
                report.particle_count = self._rendered_particles(variant)

            report.frames += 1
            self.scheduler.advance(dt)
            report.elapsed += dt

            if (report.elapsed * 1000 >= variant.final_duration
                    and self.director.get_state().phase is DirectorPhase.PLAYING):
                self.director.complete()

        logger.info("[Preview] %s %s after %d frames", variant.id, report.outcome, report.frames)
        return report

    async def run(self, runs: int = 1) -> list[RunReport]:
        return [await self.run_once() for _ in range(runs)]
