"""
Engine Runner

Orchestrates one ranking request:
1. Accepts a validated request
2. Fetches candidates via the extractor (adapter)
3. Runs the ranking engine
4. Assembles the response

This is a pure orchestration layer - NO scoring, NO direct queries.
Database errors are not caught here; they propagate to the route.
"""

import logging
import time
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from .adapter import (
    fetch_influencer_candidates,
    fetch_brand_candidates,
    fetch_campaign_candidates,
    utc_now,
)
from .contracts import (
    ScoringPolicy,
    InfluencerWeights,
    TopInfluencersRequest,
    InfluencerListRequest,
    TopBrandsRequest,
    BrandListRequest,
    TopCampaignsRequest,
    InfluencerRankingResponse,
    BrandRankingResponse,
    CampaignRankingResponse,
)
from .engine import RankingEngine
from .output_assembler import (
    assemble_influencer_response,
    assemble_brand_response,
    assemble_campaign_response,
)
from .constants import ProfileFilter

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def run_top_influencers(
    db: Session,
    request: TopInfluencersRequest,
    policy: Optional[ScoringPolicy] = None
) -> InfluencerRankingResponse:
    """
    Main entry point for the top influencers ranking.

    Args:
        db: Database session
        request: Targeting, weights, filters and paging
        policy: Threshold overrides, defaults when omitted

    Returns:
        InfluencerRankingResponse with one page of scored influencers
    """
    start_time = time.perf_counter()
    policy = policy or ScoringPolicy()
    logger.info(f"🚀 Starting top influencers ranking (page={request.page}, limit={request.limit})")
    logger.info(f"🎯 Target niches: {request.niche_ids}, cities: {request.city_ids}, panIndia: {request.is_pan_india}")

    candidates = fetch_influencer_candidates(db, request, policy)
    page = RankingEngine(policy).rank_top_influencers(candidates, request)

    logger.info(f"🏆 Influencers ranked: {page.total} ({_elapsed_ms(start_time)}ms)")
    return assemble_influencer_response(page, request.weights())


def run_influencer_listing(
    db: Session,
    request: InfluencerListRequest,
    policy: Optional[ScoringPolicy] = None
) -> InfluencerRankingResponse:
    if request.profile_filter == ProfileFilter.TOP_PROFILE:
        return run_top_influencers(db, request, policy)

    start_time = time.perf_counter()
    policy = policy or ScoringPolicy()
    logger.info(f"📋 Listing influencers (filter={request.profile_filter.value}, sortBy={request.sort_by.value})")

    candidates = fetch_influencer_candidates(db, request, policy, profile_filter=request.profile_filter)
    page = RankingEngine(policy).list_influencers(candidates, request)

    logger.info(f"✅ Influencers listed: {page.total} ({_elapsed_ms(start_time)}ms)")
    return assemble_influencer_response(page, InfluencerWeights.zero())


def run_top_brands(
    db: Session,
    request: TopBrandsRequest,
    policy: Optional[ScoringPolicy] = None,
    now: Optional[datetime] = None
) -> BrandRankingResponse:
    """
    Main entry point for the top brands ranking.

    `now` anchors the timeframe window; pass it to make runs repeatable.
    """
    start_time = time.perf_counter()
    policy = policy or ScoringPolicy()
    now = now or utc_now()
    logger.info(f"🚀 Starting top brands ranking (sortBy={request.sort_by.value}, timeframe={request.timeframe.value})")

    candidates = fetch_brand_candidates(db, request.timeframe, now)
    page = RankingEngine(policy).rank_top_brands(candidates, request)

    if page.total == 0 and candidates:
        logger.warning(f"⚠️ No brand out of {len(candidates)} passed the qualification gates")
    logger.info(f"🏆 Brands ranked: {page.total} ({_elapsed_ms(start_time)}ms)")
    return assemble_brand_response(page, request.sort_by.value, request.timeframe)


def run_brand_listing(
    db: Session,
    request: BrandListRequest,
    policy: Optional[ScoringPolicy] = None,
    now: Optional[datetime] = None
) -> BrandRankingResponse:
    start_time = time.perf_counter()
    policy = policy or ScoringPolicy()
    now = now or utc_now()
    logger.info(f"📋 Listing brands (filter={request.profile_filter.value}, sortBy={request.sort_by.value})")

    candidates = fetch_brand_candidates(
        db,
        request.timeframe,
        now,
        profile_filter=request.profile_filter,
        search_query=request.search_query,
        location_search=request.location_search,
        niche_search=request.niche_search,
    )
    engine = RankingEngine(policy)
    page = engine.list_brands(candidates, request)

    logger.info(f"✅ Brands listed: {page.total} ({_elapsed_ms(start_time)}ms)")
    return assemble_brand_response(page, request.sort_by.value, request.timeframe)


def run_top_campaigns(
    db: Session,
    request: TopCampaignsRequest,
    policy: Optional[ScoringPolicy] = None,
    now: Optional[datetime] = None
) -> CampaignRankingResponse:
    """
    Main entry point for the top campaigns ranking.

    `now` anchors both the timeframe window and the recency scores.
    """
    start_time = time.perf_counter()
    policy = policy or ScoringPolicy()
    now = now or utc_now()
    logger.info(
        f"🚀 Starting top campaigns ranking (sortBy={request.sort_by.value}, "
        f"timeframe={request.timeframe.value}, status={request.status.value})"
    )

    candidates = fetch_campaign_candidates(
        db,
        timeframe=request.timeframe,
        status=request.status,
        verified_brands_only=request.verified_brands_only,
        now=now,
    )
    page = RankingEngine(policy).rank_top_campaigns(candidates, request)

    logger.info(f"🏆 Campaigns ranked: {page.total} ({_elapsed_ms(start_time)}ms)")
    return assemble_campaign_response(page, request.sort_by, request.timeframe, request.status)
