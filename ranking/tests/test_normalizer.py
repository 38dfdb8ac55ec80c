"""
Tests for the three normalization families.
"""

import pytest

from ranking.logic.normalizer import (
    TierBucketNormalizer,
    MaxRelativeNormalizer,
    InverseRecencyNormalizer,
    RecentActivityNormalizer,
    batch_max,
    clamp_score,
)


def test_clamp_score_bounds():
    assert clamp_score(-5) == 0.0
    assert clamp_score(150) == 100.0
    assert clamp_score(42.5) == 42.5


def test_batch_max_has_floor_of_one():
    assert batch_max([]) == 1.0
    assert batch_max([0, 0]) == 1.0
    assert batch_max([3, 7]) == 7


def test_tier_bucket_first_reached_floor_wins():
    normalizer = TierBucketNormalizer([(10, 50.0), (100, 90.0)], below_floor=5.0)

    assert normalizer(1000) == 90.0
    assert normalizer(100) == 90.0
    assert normalizer(99) == 50.0
    assert normalizer(3) == 5.0


def test_tier_bucket_callable_band_interpolates():
    normalizer = TierBucketNormalizer([(0, lambda v: v * 10), (10, 100.0)])

    assert normalizer(2.5) == 25.0
    assert normalizer(12) == 100.0


def test_max_relative_scales_by_batch_maximum():
    normalizer = MaxRelativeNormalizer.fit([2, 4, 8])

    assert normalizer(8) == 100.0
    assert normalizer(4) == 50.0
    assert normalizer(0) == 0.0


def test_max_relative_all_zero_batch_scores_zero():
    normalizer = MaxRelativeNormalizer.fit([0, 0, 0])
    assert normalizer(0) == 0.0


def test_max_relative_equal_non_zero_batch_scores_hundred():
    normalizer = MaxRelativeNormalizer.fit([7, 7, 7])
    assert normalizer(7) == 100.0


def test_inverse_recency_newest_scores_highest():
    normalizer = InverseRecencyNormalizer.fit([0, 5, 10])

    assert normalizer(0) == 100.0
    assert normalizer(5) == 50.0
    assert normalizer(10) == 0.0


@pytest.mark.parametrize("days, expected", [
    (None, 0.0),
    (0, 100.0),
    (15, 50.0),
    (30, 0.0),
    (90, 0.0),
])
def test_recent_activity_uses_fixed_window(days, expected):
    assert RecentActivityNormalizer(30)(days) == pytest.approx(expected)
