"""
Output Assembler

Transforms scored candidates and pages into the response contracts.
Display values are rounded here; ordering has already happened upstream.
"""

from typing import Dict

from .contracts import (
    ScoredCandidate,
    Page,
    InfluencerWeights,
    InfluencerScoreBreakdown,
    TopInfluencerItem,
    BrandMetricsOut,
    TopBrandItem,
    ApplicationMetricsOut,
    BudgetMetricsOut,
    ScopeMetricsOut,
    EngagementMetricsOut,
    RecencyMetricsOut,
    CampaignMetricsOut,
    TopCampaignItem,
    InfluencerRankingResponse,
    BrandRankingResponse,
    CampaignRankingResponse,
)
from .aggregator import round_half_up
from .constants import (
    RecommendationTier,
    Timeframe,
    CampaignStatusFilter,
    TopCampaignsSortBy,
    BATCH_COMPOSITE_DECIMALS,
)


def _page_envelope(page: Page) -> Dict[str, object]:
    return {
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "total_pages": page.total_pages,
        "has_next": page.has_next,
        "has_previous": page.has_previous,
    }


def _money(value: float) -> float:
    return round_half_up(value, BATCH_COMPOSITE_DECIMALS)


# =============================================================================
# INFLUENCERS
# =============================================================================

def assemble_influencer(scored: ScoredCandidate) -> TopInfluencerItem:
    """
    Convert a scored influencer into its response item.

    engagementRate is the engagement sub-score divided by 10, not the
    measured rate. Unscored listing rows carry an all-zero breakdown and
    a zero engagement rate.
    """
    candidate = scored.candidate
    metrics = candidate.metrics
    subs = scored.sub_scores

    engagement_rate = subs.get("engagement_rate", 0.0) / 10

    breakdown = InfluencerScoreBreakdown(
        niche_match_score=subs.get("niche_match", 0.0),
        engagement_rate_score=subs.get("engagement_rate", 0.0),
        audience_relevance_score=subs.get("audience_relevance", 0.0),
        location_match_score=subs.get("location_match", 0.0),
        past_performance_score=subs.get("past_performance", 0.0),
        collaboration_charges_score=subs.get("collaboration_charges", 0.0),
        overall_score=scored.composite_score,
        recommendation_level=scored.tier or RecommendationTier.NOT_RECOMMENDED,
    )

    return TopInfluencerItem(
        id=candidate.id,
        name=candidate.name,
        username=candidate.username,
        profile_image=candidate.profile_image,
        bio=candidate.bio,
        profile_headline=candidate.profile_headline,
        city=candidate.city,
        country=candidate.country,
        is_verified=candidate.is_verified,
        followers_count=metrics.followers_count,
        following_count=metrics.following_count,
        engagement_rate=engagement_rate,
        posts_count=metrics.posts_count,
        completed_campaigns=metrics.completed_campaigns,
        niches=list(candidate.niches),
        instagram_post_cost=metrics.instagram_post_cost,
        instagram_reel_cost=metrics.instagram_reel_cost,
        score_breakdown=breakdown,
    )


def assemble_influencer_response(page: Page, weights: InfluencerWeights) -> InfluencerRankingResponse:
    return InfluencerRankingResponse(
        items=[assemble_influencer(s) for s in page.items],
        applied_weights=weights,
        **_page_envelope(page),
    )


# =============================================================================
# BRANDS
# =============================================================================

def assemble_brand(scored: ScoredCandidate) -> TopBrandItem:
    candidate = scored.candidate
    metrics = candidate.metrics

    return TopBrandItem(
        id=candidate.id,
        brand_name=candidate.brand_name,
        username=candidate.username,
        email=candidate.email,
        profile_image=candidate.profile_image,
        brand_bio=candidate.brand_bio,
        website_url=candidate.website_url,
        is_verified=candidate.is_verified,
        metrics=BrandMetricsOut(
            total_campaigns=metrics.total_campaigns,
            unique_niches_count=metrics.unique_niches_count,
            selected_influencers_count=metrics.selected_influencers_count,
            average_payout=_money(metrics.average_payout),
            composite_score=scored.composite_score,
            posts_count=metrics.posts_count,
            followers_count=metrics.followers_count,
            following_count=metrics.following_count,
        ),
        created_at=candidate.created_at,
    )


def assemble_brand_response(page: Page, sort_by: str, timeframe: Timeframe) -> BrandRankingResponse:
    return BrandRankingResponse(
        items=[assemble_brand(s) for s in page.items],
        sort_by=sort_by,
        timeframe=timeframe,
        **_page_envelope(page),
    )


# =============================================================================
# CAMPAIGNS
# =============================================================================

def assemble_campaign(scored: ScoredCandidate) -> TopCampaignItem:
    """Group the campaign's raw metrics and rule-based scores the way the dashboard shows them."""
    candidate = scored.candidate
    m = candidate.metrics
    subs = scored.sub_scores

    return TopCampaignItem(
        id=candidate.id,
        name=candidate.name,
        description=candidate.description,
        category=candidate.category,
        type=candidate.type,
        status=candidate.status,
        brand=candidate.brand,
        metrics=CampaignMetricsOut(
            application=ApplicationMetricsOut(
                applications_count=m.applications_count,
                conversion_rate=_money(m.conversion_rate),
                applicant_quality=subs.get("applicant_quality", 0.0),
            ),
            budget=BudgetMetricsOut(
                total_budget=_money(m.total_budget),
                budget_per_deliverable=_money(m.budget_per_deliverable),
                deliverables_count=m.deliverables_count,
            ),
            scope=ScopeMetricsOut(
                is_pan_india=m.is_pan_india,
                cities_count=m.cities_count,
                niches_count=m.niches_count,
                geographic_reach=_money(subs.get("geographic_reach", 0.0)),
            ),
            engagement=EngagementMetricsOut(
                selected_influencers=m.selected_influencers,
                completion_rate=_money(subs.get("completion_rate", 0.0)),
                status=m.status,
            ),
            recency=RecencyMetricsOut(
                days_since_launch=m.days_since_launch,
                days_since_last_application=m.days_since_last_application,
                created_at=candidate.created_at,
            ),
            composite_score=scored.composite_score,
        ),
        created_at=candidate.created_at,
    )


def assemble_campaign_response(
    page: Page,
    sort_by: TopCampaignsSortBy,
    timeframe: Timeframe,
    status_filter: CampaignStatusFilter
) -> CampaignRankingResponse:
    return CampaignRankingResponse(
        items=[assemble_campaign(s) for s in page.items],
        sort_by=sort_by,
        timeframe=timeframe,
        status_filter=status_filter,
        **_page_envelope(page),
    )
