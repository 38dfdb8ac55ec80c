"""
Dimension Scorers

Individual scoring functions for each evaluation dimension.
Each scorer produces a sub-score between 0 and 100.
All logic is deterministic and batch-independent; batch-relative
dimensions are handled by the aggregator through the Normalizer.
"""

from typing import Iterable, Optional

from .constants import (
    AUDIENCE_SIZE_BANDS,
    AUDIENCE_SIZE_FLOOR_SCORE,
    ENGAGEMENT_RATE_BANDS,
    EXPERIENCE_BONUS_BANDS,
    SUCCESS_RATE_BONUS_BANDS,
    PAST_PERFORMANCE_BASE,
    COMPLETION_RATE_BY_STATUS,
    NICHE_MATCH_NO_TARGET,
    NICHE_MATCH_NONE,
    NICHE_MATCH_PARTIAL_BASE,
    ENGAGEMENT_DEFAULT,
    LOCATION_MATCH,
    LOCATION_MISMATCH,
    CHARGES_NO_BUDGET,
    CHARGES_RATE_UNSET,
    APPLICANT_QUALITY_PLACEHOLDER,
    MAX_SCORE,
    MIN_SCORE,
)
from .normalizer import TierBucketNormalizer, clamp_score


def _linear_band(floor: float, base: float, slope: float):
    return lambda rate: base + (rate - floor) * slope


audience_size_normalizer = TierBucketNormalizer(AUDIENCE_SIZE_BANDS, AUDIENCE_SIZE_FLOOR_SCORE)

engagement_rate_normalizer = TierBucketNormalizer(
    [(floor, _linear_band(floor, base, slope)) for floor, base, slope in ENGAGEMENT_RATE_BANDS]
)

experience_bonus = TierBucketNormalizer(EXPERIENCE_BONUS_BANDS)
success_rate_bonus = TierBucketNormalizer(SUCCESS_RATE_BONUS_BANDS)


# =============================================================================
# INFLUENCER DIMENSIONS
# =============================================================================

def score_niche_match(
    influencer_niche_ids: Iterable[int],
    target_niche_ids: Optional[Iterable[int]]
) -> float:
    """
    Score how well the influencer's niches cover the requested niches.

    - No target niches: neutral 70
    - No overlap (or influencer has no niches): 30
    - All targets covered: 100
    - Partial: 50 + (matches / targets) * 50
    """
    targets = list(dict.fromkeys(target_niche_ids or []))
    if not targets:
        return NICHE_MATCH_NO_TARGET

    owned = set(influencer_niche_ids)
    matches = sum(1 for niche_id in targets if niche_id in owned)
    if matches == 0:
        return NICHE_MATCH_NONE
    if matches >= len(targets):
        return MAX_SCORE

    match_percentage = (matches / len(targets)) * 100
    return NICHE_MATCH_PARTIAL_BASE + match_percentage / 2


def score_engagement_rate(engagement_rate: Optional[float]) -> float:
    """
    Score engagement rate (average likes / followers, in percent).

    Good engagement for influencers sits around 3-6%:
    0% = 0, 1% = 20, 2% = 40, 3% = 60, 4% = 75, 5% = 85, 6%+ = 100,
    interpolated linearly inside each band.
    Unmeasurable (no posts or no followers) scores a neutral 50.
    """
    if engagement_rate is None:
        return ENGAGEMENT_DEFAULT
    return engagement_rate_normalizer(engagement_rate)


def score_audience_relevance(followers_count: int) -> float:
    """Score audience size by follower tier (1M+ = 100 down to <1K = 40)."""
    return audience_size_normalizer(followers_count)


def score_location_match(
    city_id: Optional[int],
    target_city_ids: Optional[Iterable[int]],
    is_pan_india: bool = False
) -> float:
    """Pan-India or no target cities is a full match; otherwise city membership."""
    targets = set(target_city_ids or [])
    if is_pan_india or not targets:
        return LOCATION_MATCH
    if city_id is not None and city_id in targets:
        return LOCATION_MATCH
    return LOCATION_MISMATCH


def score_past_performance(completed_campaigns: int, success_rate: float) -> float:
    """
    Score past campaign history.

    Base 50, up to +30 for completed campaigns (1/3/5/10/20 bands) and
    up to +20 for application success rate (20/40/60/80% bands), capped at 100.
    """
    score = PAST_PERFORMANCE_BASE
    score += experience_bonus(completed_campaigns)
    score += success_rate_bonus(success_rate)
    return min(score, MAX_SCORE)


def score_collaboration_charges(
    post_cost: float,
    min_budget: Optional[float] = None,
    max_budget: Optional[float] = None
) -> float:
    """
    Score how well the influencer's per-post rate fits the requested budget.
    A budget of 0 counts as not given.
    """
    if not min_budget and not max_budget:
        return CHARGES_NO_BUDGET
    if not post_cost:
        return CHARGES_RATE_UNSET

    # Min only
    if min_budget and not max_budget:
        if min_budget <= post_cost <= min_budget * 2:
            return 100.0
        if post_cost < min_budget:
            return 70.0  # Cheaper than asked, fine for the brand
        if post_cost <= min_budget * 3:
            return 60.0
        return 40.0

    # Max only
    if max_budget and not min_budget:
        if post_cost <= max_budget:
            return 100.0
        if post_cost <= max_budget * 1.2:
            return 70.0
        return 40.0

    # Both
    if min_budget <= post_cost <= max_budget:
        return 100.0
    if post_cost < min_budget:
        return 80.0
    if post_cost <= max_budget * 1.2:
        return 60.0
    return 30.0


# =============================================================================
# CAMPAIGN DIMENSIONS (batch-independent ones)
# =============================================================================

def score_geographic_reach(is_pan_india: bool, cities_count: int, full_reach_city_count: int) -> float:
    """Pan-India is full reach; otherwise proportional to cities, capped at 100."""
    if is_pan_india:
        return MAX_SCORE
    return clamp_score((cities_count / max(full_reach_city_count, 1)) * 100)


def score_completion_rate(status: str) -> float:
    return COMPLETION_RATE_BY_STATUS.get((status or "").lower(), MIN_SCORE)


def score_applicant_quality(applications_count: int) -> float:
    # TODO: derive from applicant follower/engagement data once the
    # applications endpoint exposes it; flat placeholder for now
    return APPLICANT_QUALITY_PLACEHOLDER if applications_count > 0 else MIN_SCORE
