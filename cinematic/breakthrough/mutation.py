"""Deterministic mutation: expand a template into a playable instance.

All derived values come from one mulberry32 stream seeded by the caller, drawn
in a fixed order:

    palette seed, audio intensity, audio timing offset, speed multiplier,
    scale multiplier, extra visuals, final duration, final particle count,
    hue shift

The order is part of the contract. Integer math is done modulo 2**32 and
rounding matches JavaScript's Math.round, so a seed reproduces the same
instance as the web client bit for bit.
"""

import math
import re
import secrets
from dataclasses import fields

from cinematic.breakthrough.types import BaseVariant, MutatedVariant, MutationKnobs

_MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5
_MAX_SEED = 2147483647

HUE_SHIFT_RANGE = 30.0  # degrees, centered (±15)

# fmt: off
COLOR_PALETTES = {
    "warm": (
        ("#f97316", "#fb923c", "#fbbf24", "#ffffff"),
        ("#ef4444", "#f97316", "#fbbf24", "#fef3c7"),
        ("#dc2626", "#ea580c", "#f59e0b", "#fde68a"),
    ),
    "cool": (
        ("#3b82f6", "#60a5fa", "#93c5fd", "#ffffff"),
        ("#0ea5e9", "#38bdf8", "#7dd3fc", "#e0f2fe"),
        ("#6366f1", "#818cf8", "#a5b4fc", "#c7d2fe"),
    ),
    "nature": (
        ("#22c55e", "#10b981", "#34d399", "#ffffff"),
        ("#16a34a", "#22c55e", "#4ade80", "#bbf7d0"),
        ("#15803d", "#16a34a", "#22c55e", "#86efac"),
    ),
    "electric": (
        ("#f0abfc", "#e879f9", "#d946ef", "#ffffff"),
        ("#22d3ee", "#67e8f9", "#a5f3fc", "#ecfeff"),
        ("#a855f7", "#c084fc", "#d8b4fe", "#f3e8ff"),
    ),
    "cosmic": (
        ("#8b5cf6", "#a78bfa", "#c4b5fd", "#ffffff"),
        ("#7c3aed", "#8b5cf6", "#a78bfa", "#ddd6fe"),
        ("#6d28d9", "#7c3aed", "#8b5cf6", "#c4b5fd"),
    ),
    "dawn": (
        ("#fda4af", "#fb7185", "#f43f5e", "#fecdd3"),
        ("#fdba74", "#fb923c", "#f97316", "#fed7aa"),
        ("#fcd34d", "#fbbf24", "#f59e0b", "#fef3c7"),
    ),
    "dusk": (
        ("#c084fc", "#a855f7", "#9333ea", "#f3e8ff"),
        ("#f472b6", "#ec4899", "#db2777", "#fce7f3"),
        ("#818cf8", "#6366f1", "#4f46e5", "#e0e7ff"),
    ),
    "monochrome": (
        ("#f8fafc", "#e2e8f0", "#94a3b8", "#475569"),
        ("#fafafa", "#d4d4d4", "#a3a3a3", "#525252"),
        ("#fafaf9", "#d6d3d1", "#a8a29e", "#57534e"),
    ),
    "rainbow": (
        ("#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6", "#8b5cf6"),
        ("#f43f5e", "#fb923c", "#fbbf24", "#4ade80", "#60a5fa", "#a78bfa"),
    ),
    "neutral": (
        ("#ffffff", "#f1f5f9", "#cbd5e1", "#94a3b8"),
        ("#fafafa", "#f5f5f5", "#e5e5e5", "#a3a3a3"),
    ),
}
# fmt: on

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


class Mulberry32:
    """mulberry32 PRNG: 32-bit integer state, next_float() in [0, 1)."""

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        self._state = seed & _MASK32

    def next_float(self) -> float:
        self._state = (self._state + _GOLDEN_GAMMA) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    __call__ = next_float


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a*b (Math.imul, unsigned view)."""
    return (a * b) & _MASK32


def _js_round(x: float) -> int:
    """Math.round: halves round toward +infinity."""
    return int(math.floor(x + 0.5))


def _lerp(lo, hi, t):
    return lo + t * (hi - lo)


def hex_to_hsl(hex_color: str) -> tuple:
    """'#rrggbb' -> (h degrees, s %, l %). Unparseable input reads as white."""
    match = _HEX_RE.match(hex_color)
    if not match:
        return 0.0, 0.0, 100.0

    r, g, b = (int(part, 16) / 255 for part in match.groups())
    mx, mn = max(r, g, b), min(r, g, b)
    h = s = 0.0
    l = (mx + mn) / 2

    if mx != mn:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
        if mx == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif mx == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return h * 360, s * 100, l * 100


def hsl_to_hex(h: float, s: float, l: float) -> str:
    h = (math.fmod(h, 360) + 360) % 360
    s = max(0.0, min(100.0, s)) / 100
    l = max(0.0, min(100.0, l)) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return "#" + "".join(format(max(0, _js_round((n + m) * 255)), "02x") for n in (r, g, b))


def rotate_hue(hex_color: str, degrees: float) -> str:
    h, s, l = hex_to_hsl(hex_color)
    return hsl_to_hex(h + degrees, s, l)


def mutate_variant(variant: BaseVariant, seed: int) -> MutatedVariant:
    """Derive a playable instance from a template. Same (variant, seed), same output."""
    rng = Mulberry32(seed)
    bounds = variant.mutation_bounds

    mutation = MutationKnobs(
        duration_range=bounds.duration_range,
        particle_count_range=bounds.particle_count_range,
        curve_profile=variant.curve_profile,
        camera_archetype=variant.camera_archetype,
        palette_seed=rng(),
        audio_intensity=0.5 + rng() * 0.5,
        audio_timing_offset=(rng() - 0.5) * 200,
        speed_multiplier=_lerp(*bounds.speed_range, rng()),
        scale_multiplier=_lerp(*bounds.scale_range, rng()),
        extra_visuals_count=int(math.floor(rng() * 3)),
    )

    final_duration = _js_round(_lerp(*bounds.duration_range, rng()))
    final_particle_count = _js_round(_lerp(*bounds.particle_count_range, rng()))

    palettes = COLOR_PALETTES.get(variant.color_mood) or ()
    palette_index = int(math.floor(mutation.palette_seed * len(palettes)))
    palette = palettes[palette_index] if palette_index < len(palettes) else variant.base_colors

    hue_shift = (rng() - 0.5) * HUE_SHIFT_RANGE
    final_colors = tuple(rotate_hue(color, hue_shift) for color in palette)

    template = {f.name: getattr(variant, f.name) for f in fields(BaseVariant)}
    return MutatedVariant(
        **template,
        mutation=mutation,
        seed=seed,
        final_duration=final_duration,
        final_particle_count=final_particle_count,
        final_colors=final_colors,
    )


def generate_seed() -> int:
    """Fresh, non-reproducible seed from the OS entropy pool."""
    return secrets.randbelow(_MAX_SEED)
