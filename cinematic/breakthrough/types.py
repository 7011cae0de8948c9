"""Breakthrough data model: templates, mutated instances, history and director state.

Templates are authored once in catalog.py and never change. Everything the
renderer consumes is a MutatedVariant, derived from a template plus a seed.
"""

from dataclasses import dataclass, field
from enum import Enum


# Taxonomy lookups
BREAKTHROUGH_CLASSES = (
    "reveal", "release", "reframe", "resolve", "courage", "boundary",
    "choice", "integration", "clarity", "emergence", "flow", "spark",
)
INTENSITY_BANDS = ("low", "medium", "high", "extreme")
QUALITY_TIERS = ("low", "mid", "high")
COLOR_MOODS = (
    "warm", "cool", "nature", "electric", "cosmic",
    "dawn", "dusk", "monochrome", "rainbow", "neutral",
)
CURVE_PROFILES = ("ease", "snap", "wave", "bounce", "pulse", "linear")
EFFECT_NAMES = ("bloom", "chromatic_aberration", "motion_blur", "vignette")


class DirectorPhase(str, Enum):
    IDLE = "idle"
    PREWARMING = "prewarming"
    READY = "ready"
    PLAYING = "playing"
    SETTLING = "settling"
    CLEANUP = "cleanup"


@dataclass(frozen=True)
class MutationBounds:
    """Min/max ranges a mutation may pick from."""
    duration_range: tuple        # (min_ms, max_ms)
    particle_count_range: tuple  # (min, max)
    speed_range: tuple           # multiplier
    scale_range: tuple           # multiplier


@dataclass(frozen=True)
class CameraPath:
    start: tuple      # (x, y, z)
    end: tuple        # (x, y, z)
    fov_from: float
    fov_to: float
    look_at: str = "center"


@dataclass(frozen=True)
class EffectFlags:
    bloom: bool = False
    chromatic_aberration: bool = False
    motion_blur: bool = False
    vignette: bool = False


@dataclass(frozen=True)
class BaseVariant:
    """Hand-authored breakthrough template."""
    id: str
    name: str
    description: str
    variant_class: str
    intensity: str
    color_mood: str
    audio_mood: str
    base_duration: int          # ms
    base_particle_count: int
    particle_pattern: str
    camera_archetype: str
    curve_profile: str
    tags: tuple
    low_tier_safe: bool
    is_fallback: bool
    mutation_bounds: MutationBounds
    base_colors: tuple
    camera_path: CameraPath
    effects: EffectFlags


@dataclass(frozen=True)
class MutationKnobs:
    """Per-instance parameters derived from a template's bounds and a seed."""
    duration_range: tuple
    particle_count_range: tuple
    curve_profile: str
    camera_archetype: str
    palette_seed: float
    audio_intensity: float      # 0.5-1.0
    audio_timing_offset: float  # ms, -100..100
    speed_multiplier: float
    scale_multiplier: float
    extra_visuals_count: int    # 0-2


@dataclass(frozen=True)
class MutatedVariant(BaseVariant):
    """A playable instance. The only type the presentation layer renders."""
    mutation: MutationKnobs
    seed: int
    final_duration: int         # ms
    final_particle_count: int
    final_colors: tuple


@dataclass(frozen=True)
class HistoryEntry:
    variant_id: str
    seed: int
    intensity: str
    quality_tier: str
    completed: bool
    was_safe_mode: bool
    timestamp: str              # ISO-8601, UTC

    def to_dict(self) -> dict:
        return {
            "variant_id": self.variant_id,
            "seed": self.seed,
            "intensity": self.intensity,
            "quality_tier": self.quality_tier,
            "completed": self.completed,
            "was_safe_mode": self.was_safe_mode,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        return cls(
            variant_id=str(data["variant_id"]),
            seed=int(data["seed"]),
            intensity=str(data["intensity"]),
            quality_tier=str(data["quality_tier"]),
            completed=bool(data["completed"]),
            was_safe_mode=bool(data["was_safe_mode"]),
            timestamp=str(data.get("timestamp", "")),
        )


@dataclass(frozen=True)
class SessionEntity:
    """Snapshot of one entity from the user's session."""
    type: str
    label: str
    valence: float | None = None

    @classmethod
    def from_any(cls, entity) -> "SessionEntity":
        """Accept a SessionEntity or a ``{type, label, metadata: {valence}}`` dict."""
        if isinstance(entity, SessionEntity):
            return entity
        metadata = entity.get("metadata") or {}
        valence = metadata.get("valence", entity.get("valence"))
        return cls(
            type=str(entity.get("type", "")),
            label=str(entity.get("label", "")),
            valence=float(valence) if valence is not None else None,
        )


@dataclass(frozen=True)
class SelectionContext:
    entities: tuple
    breakthrough_type: str | None
    quality_tier: str
    reduced_motion: bool
    sentiment: float | None           # mean valence, None = no signal
    friction_intensity: float | None  # share of friction entities, None = no entities
    recent_variant_ids: tuple         # most recent first
    recent_intensities: tuple = ()    # most recent first


@dataclass
class DirectorState:
    phase: DirectorPhase = DirectorPhase.IDLE
    current_variant: MutatedVariant | None = None
    start_time: float | None = None
    error: str | None = None
    fps_history: list = field(default_factory=list)  # bounded deque while playing, list in snapshots
    is_safe_mode: bool = False
