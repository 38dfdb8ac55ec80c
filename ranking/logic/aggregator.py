"""
Score Aggregator

Combines individual dimension scores into a composite score.
Composite = sum(sub_score * weight) / 100, with weights expressed in percent.

Influencers are scored one at a time (all their dimensions are
tier-bucket or rule based). Brands and campaigns are scored as a batch
because their max-relative and recency dimensions depend on the whole
qualified set.
"""

import math
from typing import Dict, List, Mapping, Optional

from .contracts import (
    InfluencerCandidate,
    BrandCandidate,
    CampaignCandidate,
    InfluencerWeights,
    ScoredCandidate,
    ScoringPolicy,
    TopInfluencersRequest,
)
from .dimension_scorers import (
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
from .normalizer import (
    MaxRelativeNormalizer,
    InverseRecencyNormalizer,
    RecentActivityNormalizer,
)
from .classifier import classify_score
from .constants import (
    BRAND_DIMENSION_WEIGHTS,
    CAMPAIGN_DIMENSION_WEIGHTS,
    SUB_SCORE_DECIMALS,
    INFLUENCER_COMPOSITE_DECIMALS,
    BATCH_COMPOSITE_DECIMALS,
)


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves away from zero for positives (2.25 -> 2.3), unlike round()."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def weighted_composite(sub_scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """
    Weighted sum of sub-scores divided by 100.

    Weights are not renormalized: weights summing to less than 100 give
    a proportionally smaller composite.
    """
    return sum(sub_scores.get(dimension, 0.0) * weight for dimension, weight in weights.items()) / 100


# =============================================================================
# INFLUENCERS
# =============================================================================

def score_influencer(
    candidate: InfluencerCandidate,
    request: TopInfluencersRequest,
    weights: Optional[InfluencerWeights] = None,
    policy: Optional[ScoringPolicy] = None
) -> ScoredCandidate:
    """
    Compute all influencer dimensions and aggregate into a composite.

    Args:
        candidate: Influencer with raw metrics
        request: Targeting (niches, cities, budget) from the caller
        weights: Dimension weights, the request's own when omitted
        policy: Tier boundaries

    Returns:
        ScoredCandidate with sub-scores, composite and tier
    """
    metrics = candidate.metrics
    weights = weights or request.weights()

    raw_scores = {
        "niche_match": score_niche_match(metrics.niche_ids, request.niche_ids),
        "engagement_rate": score_engagement_rate(metrics.engagement_rate),
        "audience_relevance": score_audience_relevance(metrics.followers_count),
        "location_match": score_location_match(metrics.city_id, request.city_ids, request.is_pan_india),
        "past_performance": score_past_performance(metrics.completed_campaigns, metrics.success_rate),
        "collaboration_charges": score_collaboration_charges(
            metrics.instagram_post_cost, request.min_budget, request.max_budget
        ),
    }
    # Composite and tier use the unrounded values; rounding is for display only
    composite = weighted_composite(raw_scores, weights.by_dimension())
    sub_scores = {
        dimension: round_half_up(score, SUB_SCORE_DECIMALS)
        for dimension, score in raw_scores.items()
    }

    return ScoredCandidate(
        candidate=candidate,
        sub_scores=sub_scores,
        composite_score=round_half_up(composite, INFLUENCER_COMPOSITE_DECIMALS),
        tier=classify_score(composite, policy),
        sort_values=influencer_sort_values(candidate),
    )


def influencer_sort_values(candidate: InfluencerCandidate) -> Dict[str, float]:
    metrics = candidate.metrics
    return {
        "posts": metrics.posts_count,
        "followers": metrics.followers_count,
        "following": metrics.following_count,
        "campaigns": metrics.completed_campaigns,
    }


def describe_influencer(candidate: InfluencerCandidate) -> ScoredCandidate:
    """Unscored entry for plain listings: zero breakdown, lowest tier."""
    return ScoredCandidate(
        candidate=candidate,
        sub_scores={},
        composite_score=0.0,
        tier=classify_score(0.0),
        sort_values=influencer_sort_values(candidate),
    )


# =============================================================================
# BRANDS
# =============================================================================

def _brand_counters(candidate: BrandCandidate) -> Dict[str, float]:
    metrics = candidate.metrics
    return {
        "posts": metrics.posts_count,
        "followers": metrics.followers_count,
        "following": metrics.following_count,
        "campaigns": metrics.total_campaigns,
    }


def score_brand_batch(candidates: List[BrandCandidate]) -> List[ScoredCandidate]:
    """
    Score a batch of already qualified brands.

    Each dimension is normalized against the batch maximum, so the
    result depends on which brands are in the batch.
    """
    if not candidates:
        return []

    raw = {
        "campaigns": [c.metrics.total_campaigns for c in candidates],
        "niches": [c.metrics.unique_niches_count for c in candidates],
        "influencers": [c.metrics.selected_influencers_count for c in candidates],
        "payout": [c.metrics.average_payout for c in candidates],
    }
    normalizers = {dimension: MaxRelativeNormalizer.fit(values) for dimension, values in raw.items()}

    scored = []
    for index, candidate in enumerate(candidates):
        sub_scores = {
            dimension: normalizers[dimension](raw[dimension][index])
            for dimension in BRAND_DIMENSION_WEIGHTS
        }
        composite = weighted_composite(sub_scores, BRAND_DIMENSION_WEIGHTS)

        scored.append(ScoredCandidate(
            candidate=candidate,
            sub_scores=sub_scores,
            composite_score=round_half_up(composite, BATCH_COMPOSITE_DECIMALS),
            sort_values={**_brand_counters(candidate), **sub_scores, "composite": composite},
        ))
    return scored


def describe_brand(candidate: BrandCandidate) -> ScoredCandidate:
    return ScoredCandidate(candidate=candidate, sort_values=_brand_counters(candidate))


# =============================================================================
# CAMPAIGNS
# =============================================================================

def score_campaign_batch(
    candidates: List[CampaignCandidate],
    policy: Optional[ScoringPolicy] = None
) -> List[ScoredCandidate]:
    """
    Score a batch of already qualified campaigns on eleven dimensions.

    Max-relative: applications, total budget, budget per deliverable,
    niches, selected influencers. Inverse recency: days since launch.
    Fixed window: days since the last application.
    Rule based: conversion rate, applicant quality, geographic reach,
    completion rate.
    """
    if not candidates:
        return []
    policy = policy or ScoringPolicy()
    metrics_list = [c.metrics for c in candidates]

    applications = MaxRelativeNormalizer.fit(m.applications_count for m in metrics_list)
    total_budget = MaxRelativeNormalizer.fit(m.total_budget for m in metrics_list)
    budget_per_deliverable = MaxRelativeNormalizer.fit(m.budget_per_deliverable for m in metrics_list)
    niches = MaxRelativeNormalizer.fit(m.niches_count for m in metrics_list)
    selected = MaxRelativeNormalizer.fit(m.selected_influencers for m in metrics_list)
    launched = InverseRecencyNormalizer.fit(m.days_since_launch for m in metrics_list)
    recently_active = RecentActivityNormalizer(policy.recent_activity_window_days)

    scored = []
    for candidate in candidates:
        m = candidate.metrics
        sub_scores = {
            "applications_count": applications(m.applications_count),
            "conversion_rate": m.conversion_rate,
            "applicant_quality": score_applicant_quality(m.applications_count),
            "total_budget": total_budget(m.total_budget),
            "budget_per_deliverable": budget_per_deliverable(m.budget_per_deliverable),
            "geographic_reach": score_geographic_reach(
                m.is_pan_india, m.cities_count, policy.full_reach_city_count
            ),
            "niches_count": niches(m.niches_count),
            "selected_influencers": selected(m.selected_influencers),
            "completion_rate": score_completion_rate(m.status),
            "recently_launched": launched(m.days_since_launch),
            "recently_active": recently_active(m.days_since_last_application),
        }
        composite = weighted_composite(sub_scores, CAMPAIGN_DIMENSION_WEIGHTS)

        scored.append(ScoredCandidate(
            candidate=candidate,
            sub_scores=sub_scores,
            composite_score=round_half_up(composite, BATCH_COMPOSITE_DECIMALS),
            # cities_count sorts on the raw count, not a normalized score
            sort_values={**sub_scores, "cities_count": m.cities_count, "composite": composite},
        ))
    return scored
