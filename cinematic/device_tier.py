"""Coarse device capability bucket used to constrain variants and particle counts."""

import logging
import os

logger = logging.getLogger(__name__)

QUALITY_TIER_ENV = "CINEMATIC_QUALITY_TIER"

# Max particles the renderer should draw per tier
PARTICLE_BUDGETS = {
    "low": 800,
    "mid": 1600,
    "high": 2600,
}


def detect_quality_tier(cpu_count: int | None = None) -> str:
    """low / mid / high from core count, overridable via CINEMATIC_QUALITY_TIER."""
    override = os.environ.get(QUALITY_TIER_ENV, "").strip().lower()
    if override in PARTICLE_BUDGETS:
        return override
    if override:
        logger.warning("Ignoring unknown %s=%r", QUALITY_TIER_ENV, override)

    cores = cpu_count if cpu_count is not None else (os.cpu_count() or 4)
    if cores <= 2:
        return "low"
    if cores <= 4:
        return "mid"
    return "high"


def particle_budget(quality_tier: str) -> int:
    return PARTICLE_BUDGETS.get(quality_tier, PARTICLE_BUDGETS["mid"])
