"""
Data Contracts for the Ranking Engine

Defines Pydantic models for ranking requests (input), candidates and their
raw metric bundles (intermediate), and ranked pages (output).
These contracts are the API boundary for the ranking engine.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import (
    RecommendationTier,
    ProfileFilter,
    InfluencerSortBy,
    TopBrandsSortBy,
    BrandSortBy,
    TopCampaignsSortBy,
    Timeframe,
    CampaignStatusFilter,
    INFLUENCER_DEFAULT_WEIGHTS,
    BRAND_MIN_CAMPAIGNS,
    BRAND_MIN_UNIQUE_NICHES,
    BRAND_MIN_SELECTED_INFLUENCERS,
    CAMPAIGN_MIN_APPLICATIONS,
    CAMPAIGN_MIN_DELIVERABLES,
    TIER_HIGHLY_RECOMMENDED,
    TIER_RECOMMENDED,
    TIER_CONSIDER,
    RECENT_ACTIVITY_WINDOW_DAYS,
    FULL_REACH_CITY_COUNT,
    ENGAGEMENT_POST_WINDOW,
    DEFAULT_PAGE,
    MAX_PAGE_SIZE,
    DEFAULT_INFLUENCER_PAGE_SIZE,
    DEFAULT_TOP_N,
)


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, snake_case also accepted."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# =============================================================================
# CONFIGURATION
# =============================================================================

class ScoringPolicy(BaseModel):
    """
    Thresholds used by the engine.
    Passed in explicitly so gates and tier boundaries can be tuned
    (and tested) independently of the algorithm.
    """
    # Top brand qualification
    brand_min_campaigns: int = BRAND_MIN_CAMPAIGNS
    brand_min_unique_niches: int = BRAND_MIN_UNIQUE_NICHES
    brand_min_selected_influencers: int = BRAND_MIN_SELECTED_INFLUENCERS

    # Top campaign qualification
    campaign_min_applications: int = CAMPAIGN_MIN_APPLICATIONS
    campaign_min_deliverables: int = CAMPAIGN_MIN_DELIVERABLES

    # Recommendation tiers
    tier_highly_recommended: float = TIER_HIGHLY_RECOMMENDED
    tier_recommended: float = TIER_RECOMMENDED
    tier_consider: float = TIER_CONSIDER

    # Windows
    recent_activity_window_days: int = RECENT_ACTIVITY_WINDOW_DAYS
    full_reach_city_count: int = FULL_REACH_CITY_COUNT
    engagement_post_window: int = ENGAGEMENT_POST_WINDOW

    class Config:
        frozen = True


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

def _parse_id_list(value: Any) -> Optional[List[int]]:
    """Accept [1, 2], ["1", "2"] or "1, 2"; any other token is rejected."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
        bad = [part for part in parts if not part.isdigit()]
        if bad:
            raise ValueError(f"ids must be comma separated integers, got {bad}")
        return [int(part) for part in parts]
    if isinstance(value, (list, tuple)):
        return [int(item) if isinstance(item, str) else item for item in value]
    return value


class PaginationParams(CamelModel):
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_INFLUENCER_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class InfluencerWeights(CamelModel):
    """Caller-overridable influencer weights. Not required to sum to 100."""
    niche_match_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["niche_match"], ge=0, le=100)
    engagement_rate_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["engagement_rate"], ge=0, le=100)
    audience_relevance_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["audience_relevance"], ge=0, le=100)
    location_match_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["location_match"], ge=0, le=100)
    past_performance_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["past_performance"], ge=0, le=100)
    collaboration_charges_weight: float = Field(default=INFLUENCER_DEFAULT_WEIGHTS["collaboration_charges"], ge=0, le=100)

    @classmethod
    def zero(cls) -> "InfluencerWeights":
        """All weights 0, reported by listings that score nothing."""
        return cls(**{name: 0.0 for name in cls.model_fields})

    def by_dimension(self) -> Dict[str, float]:
        return {
            "niche_match": self.niche_match_weight,
            "engagement_rate": self.engagement_rate_weight,
            "audience_relevance": self.audience_relevance_weight,
            "location_match": self.location_match_weight,
            "past_performance": self.past_performance_weight,
            "collaboration_charges": self.collaboration_charges_weight,
        }


class TopInfluencersRequest(InfluencerWeights, PaginationParams):
    """Request body for the top influencers ranking."""
    search_query: Optional[str] = None
    location_search: Optional[str] = None
    niche_search: Optional[str] = None

    # Targeting
    niche_ids: Optional[List[int]] = None
    city_ids: Optional[List[int]] = None
    is_pan_india: bool = False

    # Ad hoc filters (applied after scoring)
    min_followers: Optional[int] = Field(default=None, ge=0)
    max_followers: Optional[int] = Field(default=None, ge=0)
    min_budget: Optional[float] = Field(default=None, ge=0)
    max_budget: Optional[float] = Field(default=None, ge=0)
    min_score: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("niche_ids", "city_ids", mode="before")
    @classmethod
    def split_ids(cls, value):
        return _parse_id_list(value)

    def weights(self) -> InfluencerWeights:
        return InfluencerWeights(**{
            name: getattr(self, name) for name in InfluencerWeights.model_fields
        })


class InfluencerListRequest(TopInfluencersRequest):
    """Admin influencer listing; topProfile delegates to the ranking."""
    profile_filter: ProfileFilter
    sort_by: InfluencerSortBy = InfluencerSortBy.CREATED_AT


class TopBrandsRequest(PaginationParams):
    limit: int = Field(default=DEFAULT_TOP_N, ge=1, le=MAX_PAGE_SIZE)
    sort_by: TopBrandsSortBy = TopBrandsSortBy.COMPOSITE
    timeframe: Timeframe = Timeframe.ALL_TIME
    min_composite_score: Optional[float] = Field(default=None, ge=0, le=100)


class BrandListRequest(PaginationParams):
    """Admin brand listing; topProfile runs the top brands scoring."""
    profile_filter: ProfileFilter
    sort_by: BrandSortBy = BrandSortBy.COMPOSITE
    timeframe: Timeframe = Timeframe.ALL_TIME
    search_query: Optional[str] = None
    location_search: Optional[str] = None
    niche_search: Optional[str] = None
    min_campaigns: Optional[int] = Field(default=None, ge=0)
    min_selected_influencers: Optional[int] = Field(default=None, ge=0)
    min_composite_score: Optional[float] = Field(default=None, ge=0, le=100)


class TopCampaignsRequest(PaginationParams):
    limit: int = Field(default=DEFAULT_TOP_N, ge=1, le=MAX_PAGE_SIZE)
    sort_by: TopCampaignsSortBy = TopCampaignsSortBy.COMPOSITE
    timeframe: Timeframe = Timeframe.ALL_TIME
    status: CampaignStatusFilter = CampaignStatusFilter.ALL
    verified_brands_only: bool = False
    min_composite_score: Optional[float] = Field(default=None, ge=0, le=100)


# =============================================================================
# CANDIDATES (one tagged union member per kind)
# =============================================================================

class InfluencerMetrics(BaseModel):
    """Raw counters for one influencer. Zero means unknown or absent."""
    followers_count: int = 0
    following_count: int = 0
    posts_count: int = 0

    # Engagement window (most recent active posts)
    recent_posts_count: int = 0
    average_likes: float = 0.0

    # Targeting facts
    niche_ids: List[int] = Field(default_factory=list)
    city_id: Optional[int] = None

    # Rates (INR); 0 means the influencer has not set one
    instagram_post_cost: float = 0.0
    instagram_reel_cost: float = 0.0

    # History
    completed_campaigns: int = 0
    total_applications: int = 0
    selected_applications: int = 0

    class Config:
        frozen = True

    @property
    def engagement_rate(self) -> Optional[float]:
        """Average likes as a percentage of followers, None when unmeasurable."""
        if self.recent_posts_count == 0 or self.followers_count == 0:
            return None
        return (self.average_likes / self.followers_count) * 100

    @property
    def success_rate(self) -> float:
        if self.total_applications == 0:
            return 0.0
        return (self.selected_applications / self.total_applications) * 100


class BrandMetrics(BaseModel):
    total_campaigns: int = 0
    unique_niches_count: int = 0
    selected_influencers_count: int = 0
    average_payout: float = 0.0
    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0

    class Config:
        frozen = True


class CampaignMetrics(BaseModel):
    applications_count: int = 0
    selected_influencers: int = 0
    total_budget: float = 0.0
    deliverables_count: int = 0
    cities_count: int = 0
    is_pan_india: bool = False
    niches_count: int = 0
    status: str = ""
    days_since_launch: int = 0
    days_since_last_application: Optional[int] = None

    class Config:
        frozen = True

    @property
    def conversion_rate(self) -> float:
        if self.applications_count == 0:
            return 0.0
        return (self.selected_influencers / self.applications_count) * 100

    @property
    def budget_per_deliverable(self) -> float:
        if self.deliverables_count == 0:
            return 0.0
        return self.total_budget / self.deliverables_count


class InfluencerCandidate(BaseModel):
    kind: Literal["influencer"] = "influencer"
    id: int
    name: str = ""
    username: str = ""
    profile_image: str = ""
    bio: str = ""
    profile_headline: str = ""
    city: str = ""
    country: str = ""
    is_verified: bool = False
    niches: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    metrics: InfluencerMetrics = Field(default_factory=InfluencerMetrics)

    class Config:
        frozen = True


class BrandCandidate(BaseModel):
    kind: Literal["brand"] = "brand"
    id: int
    brand_name: str = ""
    username: str = ""
    email: Optional[str] = None
    profile_image: Optional[str] = None
    brand_bio: Optional[str] = None
    website_url: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None
    metrics: BrandMetrics = Field(default_factory=BrandMetrics)

    class Config:
        frozen = True


class CampaignBrand(CamelModel):
    id: int
    brand_name: str = ""
    username: str = ""
    profile_image: Optional[str] = None
    is_verified: bool = False


class CampaignCandidate(BaseModel):
    kind: Literal["campaign"] = "campaign"
    id: int
    name: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    status: str = ""
    created_at: Optional[datetime] = None
    brand: CampaignBrand
    metrics: CampaignMetrics = Field(default_factory=CampaignMetrics)

    class Config:
        frozen = True


Candidate = Annotated[
    Union[InfluencerCandidate, BrandCandidate, CampaignCandidate],
    Field(discriminator="kind"),
]


class ScoredCandidate(BaseModel):
    """
    A candidate with computed scores.
    Used between scoring and ranking stages.
    """
    candidate: Candidate
    sub_scores: Dict[str, float] = Field(default_factory=dict)
    composite_score: float = 0.0
    tier: Optional[RecommendationTier] = None
    sort_values: Dict[str, float] = Field(default_factory=dict)

    @property
    def id(self) -> int:
        return self.candidate.id


class Page(BaseModel):
    """One slice of a ranked list plus pagination metadata."""
    items: List[ScoredCandidate] = Field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_INFLUENCER_PAGE_SIZE
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class InfluencerScoreBreakdown(CamelModel):
    niche_match_score: float = 0.0
    engagement_rate_score: float = 0.0
    audience_relevance_score: float = 0.0
    location_match_score: float = 0.0
    past_performance_score: float = 0.0
    collaboration_charges_score: float = 0.0
    overall_score: float = 0.0
    recommendation_level: RecommendationTier = RecommendationTier.NOT_RECOMMENDED


class TopInfluencerItem(CamelModel):
    id: int
    name: str
    username: str
    profile_image: str = ""
    bio: str = ""
    profile_headline: str = ""
    city: str = ""
    country: str = ""
    is_verified: bool = False
    followers_count: int = 0
    following_count: int = 0
    engagement_rate: float = Field(
        default=0.0,
        description="Engagement sub-score / 10 (0-10), not the measured likes/followers rate",
    )
    posts_count: int = 0
    completed_campaigns: int = 0
    niches: List[str] = Field(default_factory=list)
    instagram_post_cost: float = 0.0
    instagram_reel_cost: float = 0.0
    score_breakdown: InfluencerScoreBreakdown = Field(default_factory=InfluencerScoreBreakdown)


class BrandMetricsOut(CamelModel):
    total_campaigns: int = 0
    unique_niches_count: int = 0
    selected_influencers_count: int = 0
    average_payout: float = 0.0
    composite_score: float = 0.0
    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0


class TopBrandItem(CamelModel):
    id: int
    brand_name: str
    username: str
    email: Optional[str] = None
    profile_image: Optional[str] = None
    brand_bio: Optional[str] = None
    website_url: Optional[str] = None
    is_verified: bool = False
    metrics: BrandMetricsOut
    created_at: Optional[datetime] = None


class ApplicationMetricsOut(CamelModel):
    applications_count: int
    conversion_rate: float
    applicant_quality: float


class BudgetMetricsOut(CamelModel):
    total_budget: float
    budget_per_deliverable: float
    deliverables_count: int


class ScopeMetricsOut(CamelModel):
    is_pan_india: bool
    cities_count: int
    niches_count: int
    geographic_reach: float


class EngagementMetricsOut(CamelModel):
    selected_influencers: int
    completion_rate: float
    status: str


class RecencyMetricsOut(CamelModel):
    days_since_launch: int
    days_since_last_application: Optional[int] = None
    created_at: Optional[datetime] = None


class CampaignMetricsOut(CamelModel):
    application: ApplicationMetricsOut
    budget: BudgetMetricsOut
    scope: ScopeMetricsOut
    engagement: EngagementMetricsOut
    recency: RecencyMetricsOut
    composite_score: float


class TopCampaignItem(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    status: str
    brand: CampaignBrand
    metrics: CampaignMetricsOut
    created_at: Optional[datetime] = None


class RankedResponse(CamelModel):
    """Pagination envelope shared by every ranking response."""
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_INFLUENCER_PAGE_SIZE
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False


class InfluencerRankingResponse(RankedResponse):
    items: List[TopInfluencerItem] = Field(default_factory=list)
    applied_weights: InfluencerWeights = Field(default_factory=InfluencerWeights)


class BrandRankingResponse(RankedResponse):
    items: List[TopBrandItem] = Field(default_factory=list)
    sort_by: str = TopBrandsSortBy.COMPOSITE.value
    timeframe: Timeframe = Timeframe.ALL_TIME


class CampaignRankingResponse(RankedResponse):
    items: List[TopCampaignItem] = Field(default_factory=list)
    sort_by: TopCampaignsSortBy = TopCampaignsSortBy.COMPOSITE
    timeframe: Timeframe = Timeframe.ALL_TIME
    status_filter: CampaignStatusFilter = CampaignStatusFilter.ALL
