"""
Tests for the influencer and campaign dimension scorers.
"""

import pytest

from ranking.logic.dimension_scorers import (
    score_niche_match,
    score_engagement_rate,
    score_audience_relevance,
    score_location_match,
    score_past_performance,
    score_collaboration_charges,
    score_geographic_reach,
    score_completion_rate,
    score_applicant_quality,
)


class TestNicheMatch:
    def test_no_target_is_neutral(self):
        assert score_niche_match([1, 2], None) == 70.0
        assert score_niche_match([], []) == 70.0

    def test_no_overlap(self):
        assert score_niche_match([1, 2], [3]) == 30.0
        assert score_niche_match([], [3]) == 30.0

    def test_full_coverage(self):
        assert score_niche_match([1, 2, 5], [1, 2]) == 100.0

    def test_partial_coverage(self):
        assert score_niche_match([1], [1, 2]) == 75.0
        assert score_niche_match([1], [1, 2, 3, 4]) == 62.5


@pytest.mark.parametrize("rate, expected", [
    (None, 50.0),
    (0.0, 0.0),
    (0.5, 10.0),
    (1.5, 30.0),
    (2.5, 50.0),
    (3.5, 67.5),
    (4.5, 80.0),
    (5.5, 92.5),
    (6.0, 100.0),
    (12.0, 100.0),
])
def test_engagement_rate_bands(rate, expected):
    assert score_engagement_rate(rate) == pytest.approx(expected)


@pytest.mark.parametrize("followers, expected", [
    (2_000_000, 100.0),
    (1_000_000, 100.0),
    (500_000, 95.0),
    (100_000, 90.0),
    (50_000, 80.0),
    (10_000, 70.0),
    (5_000, 60.0),
    (1_000, 50.0),
    (999, 40.0),
    (0, 40.0),
])
def test_audience_relevance_tiers(followers, expected):
    assert score_audience_relevance(followers) == expected


class TestLocationMatch:
    def test_pan_india_always_matches(self):
        assert score_location_match(7, [1, 2], is_pan_india=True) == 100.0

    def test_no_target_cities_matches(self):
        assert score_location_match(7, None) == 100.0

    def test_city_in_targets(self):
        assert score_location_match(2, [1, 2]) == 100.0

    def test_city_outside_targets(self):
        assert score_location_match(7, [1, 2]) == 50.0
        assert score_location_match(None, [1, 2]) == 50.0


@pytest.mark.parametrize("experiences, success_rate, expected", [
    (0, 0.0, 50.0),
    (1, 20.0, 65.0),
    (3, 39.9, 70.0),
    (5, 50.0, 80.0),
    (10, 60.0, 90.0),
    (20, 80.0, 100.0),
])
def test_past_performance_bands_and_cap(experiences, success_rate, expected):
    assert score_past_performance(experiences, success_rate) == expected


class TestCollaborationCharges:
    def test_no_budget_given(self):
        assert score_collaboration_charges(5000, None, None) == 70.0
        assert score_collaboration_charges(5000, 0, 0) == 70.0

    def test_rate_unset(self):
        assert score_collaboration_charges(0, 1000, 2000) == 50.0

    @pytest.mark.parametrize("cost, expected", [
        (1500, 100.0),
        (2000, 100.0),
        (500, 70.0),
        (2500, 60.0),
        (5000, 40.0),
    ])
    def test_min_only(self, cost, expected):
        assert score_collaboration_charges(cost, min_budget=1000) == expected

    @pytest.mark.parametrize("cost, expected", [
        (900, 100.0),
        (1100, 70.0),
        (1500, 40.0),
    ])
    def test_max_only(self, cost, expected):
        assert score_collaboration_charges(cost, max_budget=1000) == expected

    @pytest.mark.parametrize("cost, expected", [
        (1500, 100.0),
        (500, 80.0),
        (2300, 60.0),
        (3000, 30.0),
    ])
    def test_both_bounds(self, cost, expected):
        assert score_collaboration_charges(cost, 1000, 2000) == expected


def test_geographic_reach():
    assert score_geographic_reach(True, 0, 10) == 100.0
    assert score_geographic_reach(False, 5, 10) == 50.0
    assert score_geographic_reach(False, 25, 10) == 100.0
    assert score_geographic_reach(False, 0, 10) == 0.0


def test_completion_rate_by_status():
    assert score_completion_rate("completed") == 100.0
    assert score_completion_rate("active") == 50.0
    assert score_completion_rate("draft") == 0.0
    assert score_completion_rate("") == 0.0


def test_applicant_quality_placeholder():
    assert score_applicant_quality(4) == 50.0
    assert score_applicant_quality(0) == 0.0
