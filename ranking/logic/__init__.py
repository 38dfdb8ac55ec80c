"""
Ranking Logic Module

Provides the deterministic scoring and ranking engine for influencers,
brands and campaigns.
"""

from .contracts import (
    ScoringPolicy,
    InfluencerWeights,
    TopInfluencersRequest,
    InfluencerListRequest,
    TopBrandsRequest,
    BrandListRequest,
    TopCampaignsRequest,
    InfluencerCandidate,
    BrandCandidate,
    CampaignCandidate,
    InfluencerMetrics,
    BrandMetrics,
    CampaignMetrics,
    ScoredCandidate,
    Page,
)
from .engine import RankingEngine
from .constants import RecommendationTier

__all__ = [
    # Main engine
    "RankingEngine",

    # Requests & configuration
    "ScoringPolicy",
    "InfluencerWeights",
    "TopInfluencersRequest",
    "InfluencerListRequest",
    "TopBrandsRequest",
    "BrandListRequest",
    "TopCampaignsRequest",

    # Candidates
    "InfluencerCandidate",
    "BrandCandidate",
    "CampaignCandidate",
    "InfluencerMetrics",
    "BrandMetrics",
    "CampaignMetrics",
    "ScoredCandidate",
    "Page",

    # Enums
    "RecommendationTier",
]
