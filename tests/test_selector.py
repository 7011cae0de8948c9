"""Tests for variant selection."""
from collections import Counter

import numpy as np
import pytest

from cinematic.breakthrough.catalog import get_all_variants, get_variant_by_id
from cinematic.breakthrough.selector import (
    SelectionError,
    build_selection_context,
    filter_candidates,
    score_candidate,
    select_fallback_variant,
    select_variant,
)
from cinematic.breakthrough.types import SelectionContext, SessionEntity


def _ctx(**overrides):
    values = dict(
        entities=(), breakthrough_type=None, quality_tier="mid", reduced_motion=False,
        sentiment=None, friction_intensity=None, recent_variant_ids=(), recent_intensities=(),
    )
    values.update(overrides)
    return SelectionContext(**values)


class TestBuildContext:
    def test_sentiment_is_mean_valence(self, history):
        entities = [
            {"type": "goal", "label": "ship", "metadata": {"valence": 0.9}},
            {"type": "goal", "label": "rest", "metadata": {"valence": 0.7}},
            {"type": "person", "label": "sam"},
        ]
        ctx = build_selection_context(entities, history=history)
        assert ctx.sentiment == pytest.approx(0.8)

    def test_no_valence_means_no_sentiment(self, history):
        ctx = build_selection_context([{"type": "goal", "label": "x"}], history=history)
        assert ctx.sentiment is None

    def test_zero_valence_is_a_reading(self, history):
        ctx = build_selection_context([SessionEntity("goal", "x", 0.0)], history=history)
        assert ctx.sentiment == 0.0

    def test_friction_share(self, history):
        entities = [SessionEntity("friction", "a"), SessionEntity("friction", "b"),
                    SessionEntity("goal", "c")]
        ctx = build_selection_context(entities, history=history)
        assert ctx.friction_intensity == pytest.approx(2 / 3)

    def test_no_entities(self, history):
        ctx = build_selection_context([], history=history)
        assert ctx.friction_intensity is None
        assert ctx.sentiment is None
        assert ctx.entities == ()

    def test_pulls_recent_history(self, history):
        history.record("a", 1, "high", "mid", True, False)
        history.record("b", 2, "low", "mid", True, False)
        ctx = build_selection_context([], "clarity", "low", True, history=history)
        assert ctx.recent_variant_ids == ("b", "a")
        assert ctx.recent_intensities == ("low", "high")
        assert ctx.breakthrough_type == "clarity"
        assert ctx.quality_tier == "low"
        assert ctx.reduced_motion is True

    def test_uses_default_history(self, history):
        history.record("default_one", 1, "low", "mid", True, False)
        assert build_selection_context([]).recent_variant_ids == ("default_one",)


class TestHardConstraints:
    def test_reduced_motion(self):
        pool = filter_candidates(get_all_variants(), _ctx(reduced_motion=True))
        assert pool
        assert all(v.intensity == "low" and v.curve_profile == "ease" for v in pool)

    def test_low_tier(self):
        pool = filter_candidates(get_all_variants(), _ctx(quality_tier="low"))
        assert pool
        assert all(v.low_tier_safe for v in pool)

    def test_high_tier_unfiltered(self):
        assert len(filter_candidates(get_all_variants(), _ctx(quality_tier="high"))) == 44

    @pytest.mark.parametrize("tier", ["low", "mid", "high"])
    def test_selection_respects_constraints(self, tier):
        rng = np.random.default_rng(3)
        for _ in range(30):
            v = select_variant(_ctx(quality_tier=tier, reduced_motion=True), rng=rng).variant
            assert v.intensity == "low"
            assert v.curve_profile == "ease"
            if tier == "low":
                assert v.low_tier_safe

    def test_empty_pool_raises(self):
        extreme = [v for v in get_all_variants() if v.intensity == "extreme"]
        with pytest.raises(SelectionError):
            select_variant(_ctx(reduced_motion=True), variants=extreme)


class TestWeights:
    def test_base_weight(self):
        weight, reasons = score_candidate(get_variant_by_id("clarity_pulse"), _ctx())
        assert weight == 1.0
        assert reasons == ()

    def test_previous_play_near_zero(self):
        weight, reasons = score_candidate(
            get_variant_by_id("clarity_pulse"), _ctx(recent_variant_ids=("clarity_pulse", "x"))
        )
        assert weight == pytest.approx(0.02)
        assert reasons == ("previous",)

    def test_recent_play_down_weighted(self):
        weight, reasons = score_candidate(
            get_variant_by_id("clarity_pulse"), _ctx(recent_variant_ids=("x", "clarity_pulse"))
        )
        assert weight == pytest.approx(0.15)
        assert reasons == ("recent",)

    def test_outside_recent_window_ignored(self):
        recent = tuple(f"v{i}" for i in range(10)) + ("clarity_pulse",)
        weight, _ = score_candidate(get_variant_by_id("clarity_pulse"), _ctx(recent_variant_ids=recent))
        assert weight == 1.0

    def test_fatigue(self):
        ctx = _ctx(recent_intensities=("high", "extreme", "low"))
        low = [v for v in get_all_variants() if v.intensity == "low"][0]
        extreme = [v for v in get_all_variants() if v.intensity == "extreme"][0]
        assert score_candidate(low, ctx)[0] == pytest.approx(2.5)
        assert score_candidate(extreme, ctx)[0] == pytest.approx(0.2)

    def test_single_heavy_play_no_fatigue(self):
        ctx = _ctx(recent_intensities=("extreme", "low", "low"))
        extreme = [v for v in get_all_variants() if v.intensity == "extreme"][0]
        assert score_candidate(extreme, ctx)[0] == 1.0

    def test_friction_affinity(self):
        release = [v for v in get_all_variants() if v.variant_class == "release"][0]
        spark = [v for v in get_all_variants() if v.variant_class == "spark"][0]
        ctx = _ctx(friction_intensity=0.6)
        assert score_candidate(release, ctx)[0] == pytest.approx(2.0)
        assert score_candidate(spark, ctx)[0] == 1.0

    def test_hint_affinity(self):
        ctx = _ctx(breakthrough_type="spark")
        spark = [v for v in get_all_variants() if v.variant_class == "spark"][0]
        assert score_candidate(spark, ctx) == (pytest.approx(3.0), ("hint",))

    def test_sentiment_affinity(self):
        clarity = get_variant_by_id("clarity_pulse")
        assert score_candidate(clarity, _ctx(sentiment=-0.5))[0] == pytest.approx(1.3)
        assert score_candidate(clarity, _ctx(sentiment=0.5))[0] == 1.0
        assert score_candidate(clarity, _ctx(sentiment=0.0))[0] == 1.0


class TestRecencyAvoidance:
    def test_recent_ids_rarely_selected(self, history):
        recent = [v.id for v in get_all_variants()[:10]]
        for vid in recent:
            history.record(vid, 1, "medium", "mid", True, False)

        rng = np.random.default_rng(11)
        ctx = build_selection_context([], history=history)
        picks = [select_variant(ctx, rng=rng).variant.id for _ in range(200)]
        share = sum(1 for p in picks if p in recent) / len(picks)
        assert share < 0.5

    def test_back_to_back_repeats_rare(self, history):
        rng = np.random.default_rng(5)
        previous, repeats = None, 0
        for _ in range(60):
            ctx = build_selection_context([], quality_tier="low", history=history)
            v = select_variant(ctx, rng=rng).variant
            repeats += v.id == previous
            previous = v.id
            history.record(v.id, v.seed, v.intensity, "low", True, False)
        assert repeats <= 3

    def test_repeat_still_possible_in_single_pool(self, history):
        only = get_variant_by_id("clarity_pulse")
        history.record(only.id, 1, "low", "mid", True, False)
        ctx = build_selection_context([], history=history)
        assert select_variant(ctx, variants=[only]).variant.id == "clarity_pulse"


class TestSelectionResult:
    def test_fields(self):
        result = select_variant(_ctx(breakthrough_type="clarity"), rng=np.random.default_rng(1))
        assert result.candidate_count == 44
        assert result.weight > 0
        assert result.variant.seed >= 0
        if result.variant.variant_class == "clarity":
            assert "hint" in result.reasons

    def test_fresh_seed_each_call(self):
        rng = np.random.default_rng(1)
        seeds = {select_variant(_ctx(), rng=rng).variant.seed for _ in range(20)}
        assert len(seeds) == 20


class TestFallback:
    @pytest.mark.parametrize("tier", ["low", "mid", "high"])
    def test_always_safe(self, tier):
        for _ in range(30):
            v = select_fallback_variant(tier)
            assert v.is_fallback
            assert v.low_tier_safe

    def test_prefers_clarity_pulse(self):
        rng = np.random.default_rng(9)
        counts = Counter(select_fallback_variant("mid", rng=rng).id for _ in range(400))
        assert counts.most_common(1)[0][0] == "clarity_pulse"

    def test_ignores_history(self, history):
        for _ in range(10):
            history.record("clarity_pulse", 1, "low", "mid", True, False)
        rng = np.random.default_rng(9)
        counts = Counter(select_fallback_variant("mid", rng=rng).id for _ in range(400))
        assert counts["clarity_pulse"] > 100
