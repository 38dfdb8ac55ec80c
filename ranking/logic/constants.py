"""
Scoring Engine Constants

Defines all band mappings, weights, thresholds, and enums used by the ranking engine.
All values are static, human-chosen constants - no learned components.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class RecommendationTier(str, Enum):
    """Influencer-only label derived from the composite score."""
    HIGHLY_RECOMMENDED = "highly_recommended"
    RECOMMENDED = "recommended"
    CONSIDER = "consider"
    NOT_RECOMMENDED = "not_recommended"


class ProfileFilter(str, Enum):
    ALL_PROFILE = "allProfile"
    TOP_PROFILE = "topProfile"
    VERIFIED_PROFILE = "verifiedProfile"
    UNVERIFIED_PROFILE = "unverifiedProfile"


class InfluencerSortBy(str, Enum):
    POSTS = "posts"
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    CAMPAIGNS = "campaigns"
    CREATED_AT = "createdAt"


class TopBrandsSortBy(str, Enum):
    CAMPAIGNS = "campaigns"
    NICHES = "niches"
    INFLUENCERS = "influencers"
    PAYOUT = "payout"
    COMPOSITE = "composite"


class BrandSortBy(str, Enum):
    POSTS = "posts"
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    CAMPAIGNS = "campaigns"
    CREATED_AT = "createdAt"
    COMPOSITE = "composite"


class TopCampaignsSortBy(str, Enum):
    # Application metrics
    APPLICATIONS_COUNT = "applications_count"
    CONVERSION_RATE = "conversion_rate"
    APPLICANT_QUALITY = "applicant_quality"

    # Budget & payout
    TOTAL_BUDGET = "total_budget"
    BUDGET_PER_DELIVERABLE = "budget_per_deliverable"

    # Campaign scope
    GEOGRAPHIC_REACH = "geographic_reach"
    CITIES_COUNT = "cities_count"
    NICHES_COUNT = "niches_count"

    # Engagement & success
    SELECTED_INFLUENCERS = "selected_influencers"
    COMPLETION_RATE = "completion_rate"

    # Recency
    RECENTLY_LAUNCHED = "recently_launched"
    RECENTLY_ACTIVE = "recently_active"

    COMPOSITE = "composite"


class Timeframe(str, Enum):
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"
    ALL_TIME = "all"


class CampaignStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


TIMEFRAME_DAYS: Dict[Timeframe, int] = {
    Timeframe.SEVEN_DAYS: 7,
    Timeframe.THIRTY_DAYS: 30,
    Timeframe.NINETY_DAYS: 90,
}


# =============================================================================
# TIER-BUCKET MAPPINGS
# =============================================================================

# Follower count -> audience relevance score (first matching floor wins)
AUDIENCE_SIZE_BANDS: List[Tuple[int, float]] = [
    (1_000_000, 100.0),  # Mega (1M+)
    (500_000, 95.0),     # Major (500K-1M)
    (100_000, 90.0),     # Macro (100K-500K)
    (50_000, 80.0),      # Mid-tier (50K-100K)
    (10_000, 70.0),      # Micro (10K-50K)
    (5_000, 60.0),       # Nano (5K-10K)
    (1_000, 50.0),       # Emerging (1K-5K)
]
AUDIENCE_SIZE_FLOOR_SCORE = 40.0  # Below 1K

# Engagement rate (%) -> (band floor, score at floor, slope per point)
ENGAGEMENT_RATE_BANDS: List[Tuple[float, float, float]] = [
    (6.0, 100.0, 0.0),
    (5.0, 85.0, 15.0),
    (4.0, 75.0, 10.0),
    (3.0, 60.0, 15.0),
    (2.0, 40.0, 20.0),
    (1.0, 20.0, 20.0),
    (0.0, 0.0, 20.0),
]

# Completed experiences -> past performance bonus
EXPERIENCE_BONUS_BANDS: List[Tuple[int, float]] = [
    (20, 30.0),
    (10, 25.0),
    (5, 20.0),
    (3, 15.0),
    (1, 10.0),
]

# Application success rate (%) -> past performance bonus
SUCCESS_RATE_BONUS_BANDS: List[Tuple[float, float]] = [
    (80.0, 20.0),
    (60.0, 15.0),
    (40.0, 10.0),
    (20.0, 5.0),
]

PAST_PERFORMANCE_BASE = 50.0

# Campaign status -> completion rate sub-score
COMPLETION_RATE_BY_STATUS: Dict[str, float] = {
    "completed": 100.0,
    "active": 50.0,
}


# =============================================================================
# DEFAULT / NEUTRAL SUB-SCORES
# =============================================================================

NICHE_MATCH_NO_TARGET = 70.0
NICHE_MATCH_NONE = 30.0
NICHE_MATCH_PARTIAL_BASE = 50.0

ENGAGEMENT_DEFAULT = 50.0  # No posts or no followers

LOCATION_MATCH = 100.0
LOCATION_MISMATCH = 50.0

CHARGES_NO_BUDGET = 70.0
CHARGES_RATE_UNSET = 50.0

APPLICANT_QUALITY_PLACEHOLDER = 50.0


# =============================================================================
# DIMENSION WEIGHTS (percent; composite = sum(score * weight) / 100)
# =============================================================================

INFLUENCER_DEFAULT_WEIGHTS: Dict[str, float] = {
    "niche_match": 30.0,
    "engagement_rate": 25.0,
    "audience_relevance": 15.0,
    "location_match": 15.0,
    "past_performance": 10.0,
    "collaboration_charges": 5.0,
}

BRAND_DIMENSION_WEIGHTS: Dict[str, float] = {
    "campaigns": 25.0,
    "niches": 25.0,
    "influencers": 25.0,
    "payout": 25.0,
}

CAMPAIGN_DIMENSION_WEIGHTS: Dict[str, float] = {
    "applications_count": 10.0,
    "conversion_rate": 15.0,
    "applicant_quality": 5.0,
    "total_budget": 10.0,
    "budget_per_deliverable": 10.0,
    "geographic_reach": 8.0,
    "niches_count": 7.0,
    "selected_influencers": 15.0,
    "completion_rate": 10.0,
    "recently_launched": 5.0,
    "recently_active": 5.0,
}


# =============================================================================
# QUALIFICATION & CLASSIFICATION THRESHOLDS
# =============================================================================

BRAND_MIN_CAMPAIGNS = 2
BRAND_MIN_UNIQUE_NICHES = 2
BRAND_MIN_SELECTED_INFLUENCERS = 1

CAMPAIGN_MIN_APPLICATIONS = 3
CAMPAIGN_MIN_DELIVERABLES = 1

TIER_HIGHLY_RECOMMENDED = 80.0
TIER_RECOMMENDED = 60.0
TIER_CONSIDER = 40.0

RECENT_ACTIVITY_WINDOW_DAYS = 30
FULL_REACH_CITY_COUNT = 10
ENGAGEMENT_POST_WINDOW = 20


# =============================================================================
# ROUNDING & PAGINATION
# =============================================================================

SUB_SCORE_DECIMALS = 1
INFLUENCER_COMPOSITE_DECIMALS = 1
BATCH_COMPOSITE_DECIMALS = 2

DEFAULT_PAGE = 1
MAX_PAGE_SIZE = 100
DEFAULT_INFLUENCER_PAGE_SIZE = 20
DEFAULT_TOP_N = 10

MAX_SCORE = 100.0
MIN_SCORE = 0.0
