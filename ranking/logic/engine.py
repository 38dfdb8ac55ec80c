"""
Ranking Engine

Main orchestrator that turns a candidate list into one ranked page.
Works on already extracted candidates, so it never touches the database
and the same input always yields the same page.

Pipeline flow:
1. Qualification - post-metric gates (brands, campaigns)
2. Normalization & Aggregation - sub-scores and composite per candidate
3. Ad hoc filters - caller thresholds on the finished scores
4. Ranking - order by the requested key, ties by id
5. Pagination - slice one page
"""

from typing import List, Optional, Union

from .contracts import (
    InfluencerCandidate,
    BrandCandidate,
    CampaignCandidate,
    ScoredCandidate,
    ScoringPolicy,
    Page,
    TopInfluencersRequest,
    InfluencerListRequest,
    TopBrandsRequest,
    BrandListRequest,
    TopCampaignsRequest,
)
from .aggregator import (
    score_influencer,
    describe_influencer,
    score_brand_batch,
    describe_brand,
    score_campaign_batch,
)
from .qualification import (
    passes_brand_gates,
    passes_campaign_gates,
    filter_influencers,
    filter_brands,
    filter_campaigns,
)
from .ranker import (
    rank_candidates,
    rank_by_created_at,
    paginate,
    COMPOSITE_KEY,
    CREATED_AT_KEY,
)
from .constants import ProfileFilter


class RankingEngine:
    """Scores, filters, ranks and paginates candidates of one kind."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()
        self.version = "1.0.0"

    @staticmethod
    def _order(entries: List[ScoredCandidate], key: str) -> List[ScoredCandidate]:
        if key == CREATED_AT_KEY:
            return rank_by_created_at(entries)
        return rank_candidates(entries, key)

    # -------------------------------------------------------------------------
    # Influencers
    # -------------------------------------------------------------------------

    def rank_top_influencers(
        self,
        candidates: List[InfluencerCandidate],
        request: TopInfluencersRequest
    ) -> Page:
        """
        Score every influencer against the request's targeting and weights.

        Args:
            candidates: Full candidate superset from the extractor
            request: Targeting, weights, ad hoc filters and paging

        Returns:
            Page ordered by composite score (descending)
        """
        weights = request.weights()
        scored = [score_influencer(c, request, weights, self.policy) for c in candidates]

        survivors = filter_influencers(
            scored,
            min_followers=request.min_followers,
            max_followers=request.max_followers,
            min_budget=request.min_budget,
            max_budget=request.max_budget,
            min_score=request.min_score,
        )
        ranked = rank_candidates(survivors, COMPOSITE_KEY)
        return paginate(ranked, request.page, request.limit)

    def list_influencers(
        self,
        candidates: List[InfluencerCandidate],
        request: InfluencerListRequest
    ) -> Page:
        """topProfile delegates to the scoring; other filters list unscored rows."""
        if request.profile_filter == ProfileFilter.TOP_PROFILE:
            return self.rank_top_influencers(candidates, request)

        entries = filter_influencers(
            [describe_influencer(c) for c in candidates],
            min_followers=request.min_followers,
            max_followers=request.max_followers,
        )
        ordered = self._order(entries, request.sort_by.value)
        return paginate(ordered, request.page, request.limit)

    # -------------------------------------------------------------------------
    # Brands
    # -------------------------------------------------------------------------

    def rank_top_brands(
        self,
        candidates: List[BrandCandidate],
        request: Union[TopBrandsRequest, BrandListRequest]
    ) -> Page:
        """
        Gate, normalize against the qualified batch, then filter and rank.

        The batch maxima are computed over qualified brands only, so the
        gates must run before scoring.
        """
        qualified = [c for c in candidates if passes_brand_gates(c, self.policy)]
        scored = score_brand_batch(qualified)

        survivors = filter_brands(
            scored,
            min_campaigns=getattr(request, "min_campaigns", None),
            min_selected_influencers=getattr(request, "min_selected_influencers", None),
            min_composite_score=request.min_composite_score,
        )
        ranked = self._order(survivors, request.sort_by.value)
        return paginate(ranked, request.page, request.limit)

    def list_brands(self, candidates: List[BrandCandidate], request: BrandListRequest) -> Page:
        if request.profile_filter == ProfileFilter.TOP_PROFILE:
            return self.rank_top_brands(candidates, request)

        entries = filter_brands(
            [describe_brand(c) for c in candidates],
            min_campaigns=request.min_campaigns,
            min_selected_influencers=request.min_selected_influencers,
        )
        # Unscored rows have no composite to sort on
        key = request.sort_by.value
        if key == COMPOSITE_KEY:
            key = CREATED_AT_KEY
        return paginate(self._order(entries, key), request.page, request.limit)

    # -------------------------------------------------------------------------
    # Campaigns
    # -------------------------------------------------------------------------

    def rank_top_campaigns(
        self,
        candidates: List[CampaignCandidate],
        request: TopCampaignsRequest
    ) -> Page:
        qualified = [c for c in candidates if passes_campaign_gates(c, self.policy)]
        scored = score_campaign_batch(qualified, self.policy)
        survivors = filter_campaigns(scored, request.min_composite_score)
        ranked = rank_candidates(survivors, request.sort_by.value)
        return paginate(ranked, request.page, request.limit)
