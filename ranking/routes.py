"""
Ranking API Routes

Exposes the ranking engine to the admin dashboard.
POST /admin/dashboard/top-influencers, /influencers, /top-brands,
/brands and /top-campaigns, plus a health check.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from .logic.contracts import (
    TopInfluencersRequest,
    InfluencerListRequest,
    TopBrandsRequest,
    BrandListRequest,
    TopCampaignsRequest,
    InfluencerRankingResponse,
    BrandRankingResponse,
    CampaignRankingResponse,
)
from .logic.runner import (
    run_top_influencers,
    run_influencer_listing,
    run_top_brands,
    run_brand_listing,
    run_top_campaigns,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/dashboard", tags=["ranking"])


def _failure(action: str, error: Exception) -> JSONResponse:
    """Log and map a pipeline failure: 503 for the database, 500 otherwise."""
    if isinstance(error, SQLAlchemyError):
        logger.exception(f"❌ Database error while {action}")
        return JSONResponse(
            status_code=503,
            content={"error": "Ranking data is temporarily unavailable"}
        )
    logger.exception(f"❌ Unexpected error while {action}")
    return JSONResponse(status_code=500, content={"error": str(error)})


# =============================================================================
# INFLUENCERS
# =============================================================================

@router.post(
    "/top-influencers",
    response_model=InfluencerRankingResponse,
    summary="Rank influencers by weighted multi-factor score"
)
def top_influencers(request: TopInfluencersRequest, db: Session = Depends(get_db)):
    """
    Score every active, profile-complete influencer matching the filters.

    **Request Body (camelCase):**
    - `nicheIds`, `cityIds`, `isPanIndia`: targeting used by the niche and location scores
    - `minBudget`, `maxBudget`: budget window for the charges score and filter
    - `*Weight`: six dimension weights (0-100), not required to sum to 100
    - `minFollowers`, `maxFollowers`, `minScore`: applied after scoring
    - `page`, `limit`: pagination

    **Response:**
    - One page of influencers with a full score breakdown and recommendation level
    """
    try:
        return run_top_influencers(db, request)
    except Exception as e:
        return _failure("ranking influencers", e)


@router.post(
    "/influencers",
    response_model=InfluencerRankingResponse,
    summary="List influencers by profile filter"
)
def list_influencers(request: InfluencerListRequest, db: Session = Depends(get_db)):
    """`topProfile` runs the scoring; other filters list plain rows ordered by `sortBy`."""
    try:
        return run_influencer_listing(db, request)
    except Exception as e:
        return _failure("listing influencers", e)


# =============================================================================
# BRANDS
# =============================================================================

@router.post("/top-brands", response_model=BrandRankingResponse, summary="Rank qualified brands")
def top_brands(request: TopBrandsRequest, db: Session = Depends(get_db)):
    """
    Rank verified brands with at least 2 campaigns, 2 niches and 1 selected
    influencer, normalized against the best brand in the batch.
    """
    try:
        return run_top_brands(db, request)
    except Exception as e:
        return _failure("ranking brands", e)


@router.post("/brands", response_model=BrandRankingResponse, summary="List brands by profile filter")
def list_brands(request: BrandListRequest, db: Session = Depends(get_db)):
    try:
        return run_brand_listing(db, request)
    except Exception as e:
        return _failure("listing brands", e)


# =============================================================================
# CAMPAIGNS
# =============================================================================

@router.post("/top-campaigns", response_model=CampaignRankingResponse, summary="Rank campaigns")
def top_campaigns(request: TopCampaignsRequest, db: Session = Depends(get_db)):
    """Rank campaigns with at least 3 applications and 1 deliverable on eleven weighted dimensions."""
    try:
        return run_top_campaigns(db, request)
    except Exception as e:
        return _failure("ranking campaigns", e)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Ranking engine health check")
def health_check():
    """Check if the ranking engine is operational."""
    return {"status": "ok", "engine": "ranking", "version": "1.0.0"}
