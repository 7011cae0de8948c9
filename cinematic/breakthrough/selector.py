"""Variant selection: hard constraints, then a weighted random draw.

Candidates are filtered by accessibility and device tier, then weighted by
recency, fatigue and context affinity. The draw itself is live and unseeded;
only the mutation of the winner is reproducible (via its seed).
"""

import logging
from dataclasses import dataclass

import numpy as np

from cinematic.breakthrough.catalog import (
    get_all_variants,
    get_fallback_variants,
    get_low_tier_variants,
)
from cinematic.breakthrough.history import RECENT_WINDOW, get_default_history
from cinematic.breakthrough.mutation import generate_seed, mutate_variant
from cinematic.breakthrough.types import MutatedVariant, SelectionContext, SessionEntity

logger = logging.getLogger(__name__)

FATIGUE_WINDOW = 5          # plays inspected for intensity fatigue
FATIGUE_THRESHOLD = 2       # heavy plays within the window that trigger it
FRICTION_DOMINANCE = 0.5    # share of friction entities
SENTIMENT_THRESHOLD = 0.3

# Weight multipliers (base weight 1.0)
_W_PREVIOUS = 0.02
_W_RECENT = 0.15
_W_FATIGUE = {"low": 2.5, "medium": 2.5, "high": 0.4, "extreme": 0.2}
_W_FRICTION = 2.0
_W_HINT = 3.0
_W_SENTIMENT = 1.3

HEAVY_INTENSITIES = ("high", "extreme")
FRICTION_CLASSES = ("release", "resolve", "courage")
NEGATIVE_SENTIMENT_CLASSES = ("release", "resolve", "clarity")
POSITIVE_SENTIMENT_CLASSES = ("spark", "emergence", "integration")

PREFERRED_FALLBACK_ID = "clarity_pulse"
_W_PREFERRED_FALLBACK = 3.0

_rng = np.random.default_rng()


class SelectionError(RuntimeError):
    """No playable variant could be chosen for the given context."""


@dataclass(frozen=True)
class SelectionResult:
    variant: MutatedVariant
    weight: float
    candidate_count: int
    reasons: tuple


def build_selection_context(entities, breakthrough_type: str | None = None,
                            quality_tier: str = "mid", reduced_motion: bool = False,
                            history=None) -> SelectionContext:
    """Snapshot entities, derive sentiment/friction, and read recent plays.

    ``sentiment`` is the mean valence of entities that carry one, and
    ``friction_intensity`` the share of friction-typed entities. Both are None
    when there is nothing to measure; 0.0 is a real reading.
    """
    snapshot = tuple(SessionEntity.from_any(e) for e in (entities or ()))
    history = history if history is not None else get_default_history()

    valences = [e.valence for e in snapshot if e.valence is not None]
    sentiment = sum(valences) / len(valences) if valences else None

    friction_intensity = None
    if snapshot:
        friction_intensity = sum(1 for e in snapshot if e.type == "friction") / len(snapshot)

    return SelectionContext(
        entities=snapshot,
        breakthrough_type=breakthrough_type,
        quality_tier=quality_tier,
        reduced_motion=reduced_motion,
        sentiment=sentiment,
        friction_intensity=friction_intensity,
        recent_variant_ids=tuple(history.recent_variant_ids(RECENT_WINDOW)),
        recent_intensities=tuple(history.recent_intensities(FATIGUE_WINDOW)),
    )


def filter_candidates(variants, context: SelectionContext) -> list:
    """Apply hard constraints. May return an empty list."""
    pool = list(variants)
    if context.reduced_motion:
        pool = [v for v in pool if v.intensity == "low" and v.curve_profile == "ease"]
    if context.quality_tier == "low":
        pool = [v for v in pool if v.low_tier_safe]
    return pool


def score_candidate(variant, context: SelectionContext) -> tuple:
    """Return (weight, reasons) for one candidate. Weight is always > 0."""
    weight = 1.0
    reasons = []

    recent = context.recent_variant_ids[:RECENT_WINDOW]
    if recent and variant.id == recent[0]:
        weight *= _W_PREVIOUS
        reasons.append("previous")
    elif variant.id in recent:
        weight *= _W_RECENT
        reasons.append("recent")

    heavy = sum(1 for i in context.recent_intensities[:FATIGUE_WINDOW] if i in HEAVY_INTENSITIES)
    if heavy >= FATIGUE_THRESHOLD:
        weight *= _W_FATIGUE.get(variant.intensity, 1.0)
        reasons.append("fatigue")

    if (context.friction_intensity is not None
            and context.friction_intensity >= FRICTION_DOMINANCE
            and variant.variant_class in FRICTION_CLASSES):
        weight *= _W_FRICTION
        reasons.append("friction")

    if context.breakthrough_type and variant.variant_class == context.breakthrough_type:
        weight *= _W_HINT
        reasons.append("hint")

    if context.sentiment is not None:
        if context.sentiment <= -SENTIMENT_THRESHOLD and variant.variant_class in NEGATIVE_SENTIMENT_CLASSES:
            weight *= _W_SENTIMENT
            reasons.append("sentiment")
        elif context.sentiment >= SENTIMENT_THRESHOLD and variant.variant_class in POSITIVE_SENTIMENT_CLASSES:
            weight *= _W_SENTIMENT
            reasons.append("sentiment")

    return weight, tuple(reasons)


def _weighted_index(weights, rng=None) -> int:
    weights = np.asarray(weights, dtype=np.float64)
    total = weights.sum()
    if not np.isfinite(total) or total <= 0:
        raise SelectionError("Candidate weights sum to zero")
    return int((rng or _rng).choice(len(weights), p=weights / total))


def select_variant(context: SelectionContext, rng=None, variants=None) -> SelectionResult:
    """Pick and mutate one variant for ``context``.

    Raises SelectionError when the hard constraints leave nothing to pick.
    """
    pool = filter_candidates(variants if variants is not None else get_all_variants(), context)
    if not pool:
        raise SelectionError(
            f"No variant satisfies tier={context.quality_tier} "
            f"reduced_motion={context.reduced_motion}"
        )

    scored = [score_candidate(v, context) for v in pool]
    index = _weighted_index([w for w, _ in scored], rng)
    weight, reasons = scored[index]

    variant = mutate_variant(pool[index], generate_seed())
    logger.debug("[Selector] Picked %s (seed=%d, weight=%.3f, %d candidates, %s)",
                 variant.id, variant.seed, weight, len(pool), ",".join(reasons) or "-")
    return SelectionResult(
        variant=variant,
        weight=weight,
        candidate_count=len(pool),
        reasons=reasons,
    )


def select_fallback_variant(quality_tier: str = "mid", rng=None) -> MutatedVariant:
    """Guaranteed-safe variant, ignoring context and history. Never raises."""
    pool = get_fallback_variants()
    if quality_tier == "low":
        pool = [v for v in pool if v.low_tier_safe]
    if not pool:
        pool = get_low_tier_variants() or list(get_all_variants())

    weights = [_W_PREFERRED_FALLBACK if v.id == PREFERRED_FALLBACK_ID else 1.0 for v in pool]
    template = pool[_weighted_index(weights, rng)]
    variant = mutate_variant(template, generate_seed())
    logger.info("[Selector] Fallback variant %s (tier=%s)", variant.id, quality_tier)
    return variant
