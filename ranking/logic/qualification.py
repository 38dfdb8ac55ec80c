"""
Qualification Filter

Post-metric thresholds that decide whether a candidate enters a batch,
and the caller's ad hoc filters applied once scores are known.
Pre-score hard gates (active, verified, profile complete, status,
timeframe) live in the extractor's queries.
"""

from typing import List, Optional

from .contracts import (
    BrandCandidate,
    CampaignCandidate,
    ScoredCandidate,
    ScoringPolicy,
)


def passes_brand_gates(candidate: BrandCandidate, policy: ScoringPolicy) -> bool:
    """A top brand needs enough campaigns, niche variety and at least one hire."""
    metrics = candidate.metrics
    return (
        metrics.total_campaigns >= policy.brand_min_campaigns
        and metrics.unique_niches_count >= policy.brand_min_unique_niches
        and metrics.selected_influencers_count >= policy.brand_min_selected_influencers
    )


def passes_campaign_gates(candidate: CampaignCandidate, policy: ScoringPolicy) -> bool:
    metrics = candidate.metrics
    return (
        metrics.applications_count >= policy.campaign_min_applications
        and metrics.deliverables_count >= policy.campaign_min_deliverables
    )


def _at_least(value: float, threshold: Optional[float]) -> bool:
    # 0 / None thresholds are "not applied"
    return not threshold or value >= threshold


def _at_most(value: float, threshold: Optional[float]) -> bool:
    return not threshold or value <= threshold


def filter_influencers(
    scored: List[ScoredCandidate],
    min_followers: Optional[int] = None,
    max_followers: Optional[int] = None,
    min_budget: Optional[float] = None,
    max_budget: Optional[float] = None,
    min_score: Optional[float] = None
) -> List[ScoredCandidate]:
    """
    Apply the influencer ad hoc filters.

    Budget bounds only exclude influencers who have a post rate set;
    an unset rate (0) is never filtered out on budget.
    """
    survivors = []
    for item in scored:
        metrics = item.candidate.metrics
        if not _at_least(metrics.followers_count, min_followers):
            continue
        if not _at_most(metrics.followers_count, max_followers):
            continue

        post_cost = metrics.instagram_post_cost
        if post_cost > 0:
            if not _at_least(post_cost, min_budget):
                continue
            if not _at_most(post_cost, max_budget):
                continue

        if not _at_least(item.composite_score, min_score):
            continue
        survivors.append(item)
    return survivors


def filter_brands(
    scored: List[ScoredCandidate],
    min_campaigns: Optional[int] = None,
    min_selected_influencers: Optional[int] = None,
    min_composite_score: Optional[float] = None
) -> List[ScoredCandidate]:
    return [
        item for item in scored
        if _at_least(item.candidate.metrics.total_campaigns, min_campaigns)
        and _at_least(item.candidate.metrics.selected_influencers_count, min_selected_influencers)
        and _at_least(item.composite_score, min_composite_score)
    ]


def filter_campaigns(
    scored: List[ScoredCandidate],
    min_composite_score: Optional[float] = None
) -> List[ScoredCandidate]:
    return [item for item in scored if _at_least(item.composite_score, min_composite_score)]
