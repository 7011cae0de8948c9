"""Breakthrough catalog: hand-authored base variants and read accessors.

Each template declares its classification, a baseline look, and the bounds
mutate_variant() may pick from. Templates are immutable and shared; callers
get a MutatedVariant to render, never a template.
"""

from cinematic.breakthrough.types import (
    BREAKTHROUGH_CLASSES,
    COLOR_MOODS,
    CURVE_PROFILES,
    EFFECT_NAMES,
    INTENSITY_BANDS,
    BaseVariant,
    CameraPath,
    EffectFlags,
    MutationBounds,
)


def _variant(id, name, description, *, cls, intensity, color, audio, duration, particles,
             pattern, camera, curve, tags, bounds, colors, path, effects,
             low_tier_safe=False, fallback=False):
    """Build a template from the compact table form below."""
    for value, allowed in ((cls, BREAKTHROUGH_CLASSES), (intensity, INTENSITY_BANDS),
                           (color, COLOR_MOODS), (curve, CURVE_PROFILES)):
        if value not in allowed:
            raise ValueError(f"{id}: unknown value {value!r}")
    unknown = set(effects) - set(EFFECT_NAMES)
    if unknown:
        raise ValueError(f"{id}: unknown effects {sorted(unknown)}")
    duration_range, particle_range, speed_range, scale_range = bounds
    start, end, fov_from, fov_to = path
    return BaseVariant(
        id=id,
        name=name,
        description=description,
        variant_class=cls,
        intensity=intensity,
        color_mood=color,
        audio_mood=audio,
        base_duration=duration,
        base_particle_count=particles,
        particle_pattern=pattern,
        camera_archetype=camera,
        curve_profile=curve,
        tags=tuple(tags),
        low_tier_safe=low_tier_safe,
        is_fallback=fallback,
        mutation_bounds=MutationBounds(
            duration_range=tuple(duration_range),
            particle_count_range=tuple(particle_range),
            speed_range=tuple(speed_range),
            scale_range=tuple(scale_range),
        ),
        base_colors=tuple(colors),
        camera_path=CameraPath(start=tuple(start), end=tuple(end),
                               fov_from=fov_from, fov_to=fov_to),
        effects=EffectFlags(**{effect: True for effect in effects}),
    )


# bounds = (duration ms, particle count, speed mult, scale mult)
# path = (camera from, camera to, fov from, fov to)
# fmt: off
BREAKTHROUGH_VARIANTS = (
    _variant(
        "gentle_unfold", "Gentle Unfold",
        "Soft petals of light slowly reveal the truth",
        cls="reveal", intensity="low", color="dawn", audio="serene",
        duration=4000, particles=600,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("soft", "gentle", "opening", "discovery"),
        low_tier_safe=True,
        bounds=((3500, 5000), (400, 800), (0.6, 1.2), (0.8, 1.2)),
        colors=("#fda4af", "#fb7185", "#f43f5e", "#ffffff"),
        path=((0, 0, 15), (0, 0, 8), 60, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "veil_lift", "Veil Lift",
        "A translucent curtain rises to show clarity",
        cls="reveal", intensity="medium", color="cool", audio="mysterious",
        duration=4500, particles=800,
        pattern="cascade", camera="crane", curve="ease",
        tags=("unveiling", "clarity", "hidden"),
        low_tier_safe=True,
        bounds=((4000, 5500), (600, 1000), (0.7, 1.3), (0.9, 1.3)),
        colors=("#3b82f6", "#60a5fa", "#93c5fd", "#ffffff"),
        path=((0, -8, 12), (0, 4, 8), 65, 55),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "dawn_break", "Dawn Break",
        "Light breaks through darkness like sunrise",
        cls="reveal", intensity="medium", color="warm", audio="triumphant",
        duration=5000, particles=1000,
        pattern="pulse_wave", camera="dolly", curve="ease",
        tags=("morning", "hope", "new-beginning"),
        bounds=((4500, 6000), (800, 1200), (0.8, 1.4), (1.0, 1.5)),
        colors=("#f97316", "#fbbf24", "#fef3c7", "#ffffff"),
        path=((-15, 0, 20), (0, 0, 5), 70, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "mist_clear", "Mist Clear",
        "Dense fog parts to reveal the path",
        cls="reveal", intensity="low", color="neutral", audio="contemplative",
        duration=4000, particles=1200,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("fog", "clearing", "vision"),
        low_tier_safe=True,
        bounds=((3500, 4500), (800, 1500), (0.5, 1.0), (0.8, 1.1)),
        colors=("#f8fafc", "#e2e8f0", "#94a3b8", "#ffffff"),
        path=((0, 0, 20), (0, 0, 6), 75, 55),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "truth_bloom", "Truth Bloom",
        "A flower of light blooms with understanding",
        cls="reveal", intensity="high", color="nature", audio="ethereal",
        duration=5500, particles=1400,
        pattern="fountain", camera="orbit", curve="ease",
        tags=("growth", "bloom", "understanding"),
        bounds=((5000, 6500), (1000, 1800), (0.9, 1.5), (1.0, 1.6)),
        colors=("#22c55e", "#10b981", "#34d399", "#ffffff"),
        path=((8, -5, 12), (-3, 3, 7), 55, 50),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "tension_dissolve", "Tension Dissolve",
        "Tight knots of energy unravel and float away",
        cls="release", intensity="medium", color="cool", audio="serene",
        duration=4500, particles=1000,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("letting-go", "relief", "unbinding"),
        low_tier_safe=True,
        bounds=((4000, 5500), (800, 1200), (0.6, 1.2), (0.9, 1.3)),
        colors=("#0ea5e9", "#38bdf8", "#7dd3fc", "#ffffff"),
        path=((0, 0, 10), (0, 3, 12), 55, 60),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "weight_lift", "Weight Lift",
        "Heavy burdens float upward and disappear",
        cls="release", intensity="medium", color="dawn", audio="contemplative",
        duration=5000, particles=800,
        pattern="fountain", camera="crane", curve="ease",
        tags=("burden", "lightness", "freedom"),
        low_tier_safe=True,
        bounds=((4500, 6000), (600, 1000), (0.7, 1.3), (0.8, 1.2)),
        colors=("#fcd34d", "#fbbf24", "#f59e0b", "#ffffff"),
        path=((0, -5, 12), (0, 8, 10), 60, 50),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "particle_unbind", "Particle Unbind",
        "Compressed particles expand outward in relief",
        cls="release", intensity="high", color="electric", audio="energetic",
        duration=3500, particles=2000,
        pattern="explosion", camera="zoom_rush", curve="snap",
        tags=("explosion", "expansion", "freedom"),
        bounds=((3000, 4500), (1500, 2500), (1.0, 1.8), (1.0, 1.5)),
        colors=("#22d3ee", "#67e8f9", "#a5f3fc", "#ffffff"),
        path=((0, 0, 20), (0, 0, 4), 80, 55),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "breath_out", "Breath Out",
        "A deep exhale releases all held tension",
        cls="release", intensity="low", color="nature", audio="serene",
        duration=5500, particles=600,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("breath", "calm", "peace"),
        low_tier_safe=True,
        fallback=True,
        bounds=((5000, 6500), (400, 800), (0.4, 0.9), (0.7, 1.1)),
        colors=("#86efac", "#4ade80", "#22c55e", "#ffffff"),
        path=((0, 0, 8), (0, 0, 12), 50, 55),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "chain_break", "Chain Break",
        "Invisible chains shatter into light fragments",
        cls="release", intensity="extreme", color="warm", audio="dramatic",
        duration=4000, particles=1800,
        pattern="explosion", camera="snap", curve="snap",
        tags=("breaking-free", "liberation", "power"),
        bounds=((3500, 5000), (1400, 2200), (1.2, 2.0), (1.1, 1.7)),
        colors=("#ef4444", "#f97316", "#fbbf24", "#ffffff"),
        path=((0, 0, 8), (0, 0, 15), 50, 70),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "perspective_shift", "Perspective Shift",
        "The world tilts to show a new angle",
        cls="reframe", intensity="medium", color="cosmic", audio="mysterious",
        duration=4500, particles=800,
        pattern="orbit", camera="pivot", curve="ease",
        tags=("perspective", "new-view", "rotation"),
        low_tier_safe=True,
        bounds=((4000, 5500), (600, 1000), (0.7, 1.3), (0.9, 1.3)),
        colors=("#8b5cf6", "#a78bfa", "#c4b5fd", "#ffffff"),
        path=((10, 0, 8), (-10, 5, 8), 55, 55),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "connection_redraw", "Connection Redraw",
        "Lines between elements rearrange into new patterns",
        cls="reframe", intensity="medium", color="electric", audio="contemplative",
        duration=5000, particles=1200,
        pattern="streak", camera="orbit", curve="wave",
        tags=("connections", "network", "relationships"),
        bounds=((4500, 6000), (900, 1500), (0.8, 1.4), (1.0, 1.4)),
        colors=("#f0abfc", "#e879f9", "#d946ef", "#ffffff"),
        path=((0, 0, 15), (0, 8, 10), 65, 55),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "kaleidoscope", "Kaleidoscope",
        "Reality fragments and reassembles beautifully",
        cls="reframe", intensity="high", color="rainbow", audio="ethereal",
        duration=5500, particles=1600,
        pattern="crystallize", camera="spiral", curve="wave",
        tags=("patterns", "beauty", "complexity"),
        bounds=((5000, 6500), (1200, 2000), (0.9, 1.5), (1.0, 1.5)),
        colors=("#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6", "#8b5cf6"),
        path=((0, -10, 15), (0, 5, 5), 70, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "mirror_flip", "Mirror Flip",
        "The reflection becomes the reality",
        cls="reframe", intensity="medium", color="cool", audio="mysterious",
        duration=4000, particles=900,
        pattern="pulse_wave", camera="snap", curve="bounce",
        tags=("reflection", "opposite", "reversal"),
        low_tier_safe=True,
        bounds=((3500, 5000), (700, 1100), (0.8, 1.4), (0.9, 1.3)),
        colors=("#6366f1", "#818cf8", "#a5b4fc", "#ffffff"),
        path=((0, 0, 10), (0, 0, -10), 55, 55),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "node_merge", "Node Merge",
        "Conflicting points converge into harmony",
        cls="resolve", intensity="medium", color="nature", audio="serene",
        duration=5000, particles=1000,
        pattern="implosion", camera="dolly", curve="ease",
        tags=("harmony", "unity", "resolution"),
        low_tier_safe=True,
        bounds=((4500, 6000), (800, 1200), (0.7, 1.2), (0.9, 1.3)),
        colors=("#16a34a", "#22c55e", "#4ade80", "#ffffff"),
        path=((0, 0, 18), (0, 0, 6), 65, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "orbit_stable", "Orbit Stable",
        "Chaotic elements find their stable orbits",
        cls="resolve", intensity="low", color="cosmic", audio="contemplative",
        duration=5500, particles=800,
        pattern="orbit", camera="drift", curve="ease",
        tags=("balance", "stability", "order"),
        low_tier_safe=True,
        bounds=((5000, 6500), (600, 1000), (0.5, 1.0), (0.8, 1.2)),
        colors=("#7c3aed", "#8b5cf6", "#a78bfa", "#ffffff"),
        path=((5, 5, 15), (0, 0, 10), 60, 55),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "puzzle_complete", "Puzzle Complete",
        "The final piece clicks into place",
        cls="resolve", intensity="high", color="warm", audio="triumphant",
        duration=4000, particles=1400,
        pattern="crystallize", camera="zoom_rush", curve="snap",
        tags=("completion", "solution", "achievement"),
        bounds=((3500, 5000), (1100, 1700), (1.0, 1.6), (1.0, 1.5)),
        colors=("#fbbf24", "#f59e0b", "#d97706", "#ffffff"),
        path=((0, 0, 20), (0, 0, 4), 75, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "peace_settle", "Peace Settle",
        "Turbulent waters become still and clear",
        cls="resolve", intensity="low", color="cool", audio="serene",
        duration=6000, particles=600,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("peace", "calm", "stillness"),
        low_tier_safe=True,
        fallback=True,
        bounds=((5500, 7000), (400, 800), (0.4, 0.8), (0.7, 1.0)),
        colors=("#38bdf8", "#7dd3fc", "#bae6fd", "#ffffff"),
        path=((0, 3, 12), (0, 0, 10), 55, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "barrier_break", "Barrier Break",
        "An invisible wall shatters before you",
        cls="courage", intensity="extreme", color="warm", audio="dramatic",
        duration=3500, particles=2000,
        pattern="explosion", camera="zoom_rush", curve="snap",
        tags=("breakthrough", "power", "determination"),
        bounds=((3000, 4500), (1600, 2400), (1.3, 2.0), (1.2, 1.8)),
        colors=("#dc2626", "#ef4444", "#f97316", "#ffffff"),
        path=((0, 0, 25), (0, 0, 3), 85, 55),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "forward_leap", "Forward Leap",
        "A powerful surge propels you forward",
        cls="courage", intensity="high", color="electric", audio="energetic",
        duration=3000, particles=1500,
        pattern="streak", camera="zoom_rush", curve="snap",
        tags=("momentum", "action", "boldness"),
        bounds=((2500, 4000), (1200, 1800), (1.2, 1.8), (1.1, 1.6)),
        colors=("#a855f7", "#c084fc", "#d8b4fe", "#ffffff"),
        path=((0, 0, 30), (0, 0, 2), 90, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "flame_rise", "Flame Rise",
        "Inner fire ignites and rises",
        cls="courage", intensity="high", color="warm", audio="dramatic",
        duration=4000, particles=1400,
        pattern="fountain", camera="crane", curve="pulse",
        tags=("fire", "passion", "intensity"),
        bounds=((3500, 5000), (1100, 1700), (1.0, 1.6), (1.0, 1.5)),
        colors=("#f97316", "#fb923c", "#fbbf24", "#ffffff"),
        path=((0, -10, 12), (0, 8, 8), 60, 50),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "stand_tall", "Stand Tall",
        "Rising up with quiet, steady strength",
        cls="courage", intensity="medium", color="nature", audio="contemplative",
        duration=4500, particles=900,
        pattern="fountain", camera="crane", curve="ease",
        tags=("strength", "resilience", "dignity"),
        low_tier_safe=True,
        bounds=((4000, 5500), (700, 1100), (0.8, 1.3), (0.9, 1.4)),
        colors=("#15803d", "#16a34a", "#22c55e", "#ffffff"),
        path=((0, -5, 10), (0, 5, 10), 55, 55),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "line_draw", "Line Draw",
        "A clear boundary forms with precision",
        cls="boundary", intensity="low", color="monochrome", audio="minimal",
        duration=4000, particles=500,
        pattern="streak", camera="dolly", curve="linear",
        tags=("clarity", "definition", "separation"),
        low_tier_safe=True,
        fallback=True,
        bounds=((3500, 5000), (350, 650), (0.6, 1.1), (0.8, 1.2)),
        colors=("#f8fafc", "#e2e8f0", "#94a3b8", "#ffffff"),
        path=((0, 0, 15), (0, 0, 8), 55, 50),
        effects=("vignette",),
    ),
    _variant(
        "space_create", "Space Create",
        "Breathing room opens up around you",
        cls="boundary", intensity="low", color="cool", audio="serene",
        duration=5000, particles=600,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("space", "breathing-room", "openness"),
        low_tier_safe=True,
        bounds=((4500, 6000), (450, 750), (0.5, 1.0), (0.8, 1.2)),
        colors=("#bae6fd", "#7dd3fc", "#38bdf8", "#ffffff"),
        path=((0, 0, 6), (0, 0, 14), 50, 60),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "shield_form", "Shield Form",
        "A protective barrier materializes",
        cls="boundary", intensity="medium", color="cosmic", audio="mysterious",
        duration=4500, particles=900,
        pattern="ring", camera="orbit", curve="ease",
        tags=("protection", "safety", "boundary"),
        low_tier_safe=True,
        bounds=((4000, 5500), (700, 1100), (0.7, 1.2), (0.9, 1.3)),
        colors=("#6d28d9", "#7c3aed", "#8b5cf6", "#ffffff"),
        path=((8, 0, 10), (-8, 0, 10), 55, 55),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "path_illuminate", "Path Illuminate",
        "One path brightens among many",
        cls="choice", intensity="medium", color="warm", audio="contemplative",
        duration=4500, particles=800,
        pattern="streak", camera="dolly", curve="ease",
        tags=("decision", "direction", "clarity"),
        low_tier_safe=True,
        bounds=((4000, 5500), (600, 1000), (0.7, 1.2), (0.9, 1.3)),
        colors=("#fbbf24", "#fcd34d", "#fef3c7", "#ffffff"),
        path=((0, 0, 15), (0, 0, 5), 65, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "branch_focus", "Branch Focus",
        "Possibilities narrow to the essential",
        cls="choice", intensity="medium", color="nature", audio="contemplative",
        duration=5000, particles=1000,
        pattern="spiral_arm", camera="spiral", curve="ease",
        tags=("focus", "narrowing", "commitment"),
        bounds=((4500, 6000), (800, 1200), (0.8, 1.3), (0.9, 1.4)),
        colors=("#4ade80", "#22c55e", "#16a34a", "#ffffff"),
        path=((10, 5, 15), (0, 0, 6), 70, 50),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "door_open", "Door Open",
        "A doorway of light opens before you",
        cls="choice", intensity="high", color="dawn", audio="triumphant",
        duration=4000, particles=1200,
        pattern="pulse_wave", camera="zoom_rush", curve="ease",
        tags=("opportunity", "threshold", "beginning"),
        bounds=((3500, 5000), (900, 1500), (0.9, 1.5), (1.0, 1.5)),
        colors=("#fda4af", "#fbbf24", "#fef3c7", "#ffffff"),
        path=((0, 0, 20), (0, 0, 3), 75, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "harmony_align", "Harmony Align",
        "All elements find their perfect positions",
        cls="integration", intensity="medium", color="cosmic", audio="ethereal",
        duration=5500, particles=1200,
        pattern="crystallize", camera="orbit", curve="ease",
        tags=("harmony", "alignment", "wholeness"),
        bounds=((5000, 6500), (900, 1500), (0.7, 1.2), (0.9, 1.4)),
        colors=("#a78bfa", "#8b5cf6", "#7c3aed", "#ffffff"),
        path=((0, -8, 15), (0, 0, 8), 65, 55),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "weave_complete", "Weave Complete",
        "Threads of understanding interlock",
        cls="integration", intensity="medium", color="rainbow", audio="contemplative",
        duration=5000, particles=1400,
        pattern="spiral_arm", camera="spiral", curve="wave",
        tags=("connection", "weaving", "synthesis"),
        bounds=((4500, 6000), (1100, 1700), (0.8, 1.4), (1.0, 1.5)),
        colors=("#f43f5e", "#fb923c", "#fbbf24", "#4ade80", "#60a5fa", "#a78bfa"),
        path=((0, 0, 18), (0, 5, 6), 70, 50),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "constellation_form", "Constellation Form",
        "Stars connect to form a meaningful pattern",
        cls="integration", intensity="low", color="cosmic", audio="ethereal",
        duration=6000, particles=700,
        pattern="nebula", camera="drift", curve="ease",
        tags=("stars", "meaning", "big-picture"),
        low_tier_safe=True,
        bounds=((5500, 7000), (500, 900), (0.4, 0.9), (0.8, 1.2)),
        colors=("#ddd6fe", "#c4b5fd", "#a78bfa", "#ffffff"),
        path=((0, 0, 25), (0, 0, 12), 60, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "clarity_pulse", "Clarity Pulse",
        "A simple, reliable moment of clarity",
        cls="clarity", intensity="low", color="neutral", audio="minimal",
        duration=3000, particles=300,
        pattern="pulse_wave", camera="dolly", curve="ease",
        tags=("simple", "reliable", "clear"),
        low_tier_safe=True,
        fallback=True,
        bounds=((2500, 3500), (200, 400), (0.8, 1.2), (0.9, 1.1)),
        colors=("#ffffff", "#f1f5f9", "#e2e8f0", "#94a3b8"),
        path=((0, 0, 12), (0, 0, 8), 55, 50),
        effects=("bloom",),
    ),
    _variant(
        "soft_glow", "Soft Glow",
        "A gentle warmth of understanding",
        cls="clarity", intensity="low", color="warm", audio="minimal",
        duration=3500, particles=400,
        pattern="dissolve", camera="drift", curve="ease",
        tags=("gentle", "warm", "simple"),
        low_tier_safe=True,
        fallback=True,
        bounds=((3000, 4000), (300, 500), (0.6, 1.0), (0.8, 1.1)),
        colors=("#fef3c7", "#fde68a", "#fcd34d", "#ffffff"),
        path=((0, 0, 10), (0, 0, 8), 52, 50),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "crystal_form", "Crystal Form",
        "Order crystallizes from chaos",
        cls="emergence", intensity="high", color="electric", audio="dramatic",
        duration=4500, particles=1600,
        pattern="crystallize", camera="orbit", curve="snap",
        tags=("structure", "formation", "emergence"),
        bounds=((4000, 5500), (1200, 2000), (0.9, 1.5), (1.0, 1.5)),
        colors=("#67e8f9", "#22d3ee", "#06b6d4", "#ffffff"),
        path=((10, 5, 15), (0, 0, 7), 65, 50),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "butterfly_emerge", "Butterfly Emerge",
        "Transformation completes with graceful emergence",
        cls="emergence", intensity="medium", color="dusk", audio="ethereal",
        duration=5000, particles=1000,
        pattern="fountain", camera="crane", curve="ease",
        tags=("transformation", "metamorphosis", "beauty"),
        low_tier_safe=True,
        bounds=((4500, 6000), (800, 1200), (0.7, 1.2), (0.9, 1.4)),
        colors=("#f472b6", "#ec4899", "#db2777", "#ffffff"),
        path=((0, -8, 12), (0, 5, 8), 60, 50),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "river_flow", "River Flow",
        "Smooth, continuous motion like a river",
        cls="flow", intensity="low", color="cool", audio="serene",
        duration=5500, particles=800,
        pattern="cascade", camera="drift", curve="wave",
        tags=("flow", "continuous", "natural"),
        low_tier_safe=True,
        bounds=((5000, 6500), (600, 1000), (0.5, 1.0), (0.8, 1.2)),
        colors=("#7dd3fc", "#38bdf8", "#0ea5e9", "#ffffff"),
        path=((-5, 0, 12), (5, 0, 10), 55, 55),
        effects=("bloom", "motion_blur", "vignette"),
    ),
    _variant(
        "wind_dance", "Wind Dance",
        "Playful energy moves with the wind",
        cls="flow", intensity="medium", color="nature", audio="energetic",
        duration=4500, particles=1000,
        pattern="cascade", camera="spiral", curve="wave",
        tags=("wind", "playful", "movement"),
        low_tier_safe=True,
        bounds=((4000, 5500), (800, 1200), (0.8, 1.4), (0.9, 1.3)),
        colors=("#86efac", "#4ade80", "#22c55e", "#bbf7d0"),
        path=((0, 0, 15), (3, 3, 8), 60, 55),
        effects=("bloom", "motion_blur"),
    ),
    _variant(
        "lightbulb_moment", "Lightbulb Moment",
        "A flash of brilliant inspiration",
        cls="spark", intensity="high", color="warm", audio="energetic",
        duration=2500, particles=1200,
        pattern="explosion", camera="snap", curve="snap",
        tags=("insight", "flash", "eureka"),
        bounds=((2000, 3000), (900, 1500), (1.2, 1.8), (1.0, 1.5)),
        colors=("#fef3c7", "#fbbf24", "#f59e0b", "#ffffff"),
        path=((0, 0, 10), (0, 0, 5), 60, 50),
        effects=("bloom", "chromatic_aberration"),
    ),
    _variant(
        "spark_cascade", "Spark Cascade",
        "One spark ignites a cascade of ideas",
        cls="spark", intensity="extreme", color="electric", audio="dramatic",
        duration=3000, particles=1800,
        pattern="cascade", camera="zoom_rush", curve="pulse",
        tags=("chain-reaction", "cascade", "ignition"),
        bounds=((2500, 3500), (1400, 2200), (1.3, 2.0), (1.1, 1.7)),
        colors=("#f0abfc", "#e879f9", "#d946ef", "#ffffff"),
        path=((0, 0, 18), (0, 0, 3), 80, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "echo_fade", "Echo Fade",
        "Ripples of understanding echo outward",
        cls="reveal", intensity="low", color="dusk", audio="contemplative",
        duration=5000, particles=700,
        pattern="ring", camera="drift", curve="wave",
        tags=("echo", "ripple", "gradual"),
        low_tier_safe=True,
        bounds=((4500, 5500), (500, 900), (0.5, 1.0), (0.8, 1.2)),
        colors=("#c084fc", "#a855f7", "#9333ea", "#ffffff"),
        path=((0, 0, 12), (0, 0, 9), 55, 52),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "gravity_shift", "Gravity Shift",
        "The center of gravity moves to a new place",
        cls="reframe", intensity="high", color="cosmic", audio="dramatic",
        duration=4000, particles=1300,
        pattern="implosion", camera="pivot", curve="bounce",
        tags=("gravity", "shift", "dramatic"),
        bounds=((3500, 4500), (1000, 1600), (1.0, 1.6), (1.0, 1.5)),
        colors=("#6d28d9", "#7c3aed", "#8b5cf6", "#ffffff"),
        path=((5, 5, 12), (-5, -5, 8), 60, 55),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "root_ground", "Root Ground",
        "Deep roots anchor into solid ground",
        cls="boundary", intensity="medium", color="nature", audio="serene",
        duration=5500, particles=900,
        pattern="rain", camera="crane", curve="ease",
        tags=("grounding", "roots", "stability"),
        low_tier_safe=True,
        bounds=((5000, 6000), (700, 1100), (0.6, 1.1), (0.9, 1.3)),
        colors=("#15803d", "#166534", "#14532d", "#86efac"),
        path=((0, 8, 12), (0, -2, 8), 60, 52),
        effects=("bloom", "vignette"),
    ),
    _variant(
        "phoenix_rise", "Phoenix Rise",
        "From ashes, renewed strength emerges",
        cls="courage", intensity="extreme", color="warm", audio="triumphant",
        duration=4500, particles=2200,
        pattern="fountain", camera="crane", curve="pulse",
        tags=("rebirth", "phoenix", "transformation"),
        bounds=((4000, 5500), (1800, 2600), (1.2, 1.9), (1.2, 1.8)),
        colors=("#dc2626", "#ea580c", "#f59e0b", "#fef3c7"),
        path=((0, -12, 15), (0, 10, 6), 70, 50),
        effects=("bloom", "chromatic_aberration", "motion_blur"),
    ),
    _variant(
        "compass_point", "Compass Point",
        "The needle settles on true north",
        cls="choice", intensity="low", color="monochrome", audio="minimal",
        duration=4000, particles=500,
        pattern="streak", camera="dolly", curve="linear",
        tags=("direction", "compass", "certainty"),
        low_tier_safe=True,
        fallback=True,
        bounds=((3500, 4500), (350, 650), (0.7, 1.2), (0.8, 1.1)),
        colors=("#fafafa", "#d4d4d4", "#a3a3a3", "#525252"),
        path=((0, 0, 14), (0, 0, 7), 58, 50),
        effects=("vignette",),
    ),
)
# fmt: on

_BY_ID = {v.id: v for v in BREAKTHROUGH_VARIANTS}
if len(_BY_ID) != len(BREAKTHROUGH_VARIANTS):
    raise ValueError("duplicate variant id in catalog")


def get_all_variants() -> tuple:
    return BREAKTHROUGH_VARIANTS


def get_variant_by_id(variant_id: str) -> BaseVariant | None:
    return _BY_ID.get(variant_id)


def get_variants_by_class(breakthrough_class: str) -> list[BaseVariant]:
    return [v for v in BREAKTHROUGH_VARIANTS if v.variant_class == breakthrough_class]


def get_low_tier_variants() -> list[BaseVariant]:
    """Templates cheap enough for low-end devices."""
    return [v for v in BREAKTHROUGH_VARIANTS if v.low_tier_safe]


def get_fallback_variants() -> list[BaseVariant]:
    """Templates that are always safe to play when selection is unavailable."""
    return [v for v in BREAKTHROUGH_VARIANTS if v.is_fallback]


def get_variants_by_intensity(intensity: str) -> list[BaseVariant]:
    return [v for v in BREAKTHROUGH_VARIANTS if v.intensity == intensity]


def get_catalog_stats() -> dict:
    """Counts by class and intensity, plus low-tier and fallback totals."""
    by_class: dict[str, int] = {}
    by_intensity: dict[str, int] = {}
    for v in BREAKTHROUGH_VARIANTS:
        by_class[v.variant_class] = by_class.get(v.variant_class, 0) + 1
        by_intensity[v.intensity] = by_intensity.get(v.intensity, 0) + 1
    return {
        "total": len(BREAKTHROUGH_VARIANTS),
        "by_class": by_class,
        "by_intensity": by_intensity,
        "low_tier_safe": sum(1 for v in BREAKTHROUGH_VARIANTS if v.low_tier_safe),
        "fallbacks": sum(1 for v in BREAKTHROUGH_VARIANTS if v.is_fallback),
    }
