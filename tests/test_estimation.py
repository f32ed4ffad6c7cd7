"""Tests for complexity scoring, story points and hour estimates."""

import pytest
from hypothesis import given, strategies as st

from triage_service.estimation import (
    MAX_COMPLEXITY,
    STORY_POINT_SCALE,
    estimate_hours,
    score_complexity,
    to_story_points,
)


class TestScoreComplexity:

    def test_empty_text_uses_minimum_length(self):
        assert score_complexity("") == pytest.approx(1 / 120)

    def test_length_contributes_up_to_one(self):
        assert score_complexity("word " * 60) == pytest.approx(0.5)
        assert score_complexity("word " * 500) == pytest.approx(1.0)

    def test_tiny_keywords_clamp_at_zero(self):
        assert score_complexity("fix typo in readme") == 0.0

    def test_each_matching_keyword_adds_weight(self):
        # 2 tokens + api (+0.15) + schema (+0.15)
        assert score_complexity("api schema") == pytest.approx(2 / 120 + 0.30)

    def test_large_keywords_clamp_at_max(self):
        text = "payment encryption security outage deadlock compliance"
        assert score_complexity(text) == MAX_COMPLEXITY

    def test_multi_word_keyword(self):
        assert score_complexity("data loss") == pytest.approx(2 / 120 + 0.35)


class TestStoryPoints:

    @pytest.mark.parametrize("score,points", [
        (0.0, 1), (0.15, 1), (0.16, 2), (0.30, 2), (0.31, 3), (0.50, 3),
        (0.79, 5), (0.80, 5), (1.0, 8), (1.10, 8), (1.2, 13), (1.5, 13), (2.0, 13),
    ])
    def test_thresholds(self, score, points):
        assert to_story_points(score) == points


class TestEstimateHours:

    @pytest.mark.parametrize("points,hours", [(1, 4), (2, 6), (3, 8), (5, 16), (8, 32), (13, 56)])
    def test_base_hours(self, points, hours):
        assert estimate_hours(points, "plain task") == hours

    def test_uncertainty_multiplier(self):
        assert estimate_hours(3, "investigate flaky job") == 10  # 8 * 1.3 = 10.4

    def test_simplicity_multiplier_on_hyphenated_word(self):
        assert estimate_hours(5, "well-defined task") == 13  # 16 * 0.8 = 12.8

    def test_multipliers_compose(self):
        # 16 * 1.3 * 1.25 = 26
        assert estimate_hours(5, "investigate legacy cross-team dependency") == 26
        # 56 * 1.3 * 0.8 = 58.24
        assert estimate_hours(13, "simple spike") == 58

    def test_unknown_points_fall_back(self):
        assert estimate_hours(4, "plain task") == 8


@given(st.text(max_size=400))
def test_story_points_and_hours_in_range(text):
    score = score_complexity(text)
    assert 0.0 <= score <= MAX_COMPLEXITY
    points = to_story_points(score)
    assert points in STORY_POINT_SCALE
    assert estimate_hours(points, text) >= 1
