"""
Metric Extractor for the Ranking Engine

Reads influencers, brands and campaigns from the production tables and
attaches raw counters to each one, producing typed candidates.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes

Counters are gathered with one grouped query per counter type rather than
one query per candidate. A record whose bundle cannot be built (malformed
JSON, bad numeric strings) falls back to an empty bundle and is logged;
failures of the queries themselves propagate to the caller.
"""

import json
import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ranking.models import (
    Brand,
    BrandNiche,
    Campaign,
    CampaignApplication,
    CampaignCity,
    CampaignDeliverable,
    City,
    Country,
    Experience,
    Follow,
    Influencer,
    InfluencerNiche,
    Niche,
    Post,
    CampaignStatus,
    ApplicationStatus,
)
from .constants import (
    ProfileFilter,
    Timeframe,
    CampaignStatusFilter,
    TIMEFRAME_DAYS,
)
from .contracts import (
    InfluencerCandidate,
    InfluencerMetrics,
    BrandCandidate,
    BrandMetrics,
    CampaignBrand,
    CampaignCandidate,
    CampaignMetrics,
    ScoringPolicy,
    TopInfluencersRequest,
)

logger = logging.getLogger(__name__)

INFLUENCER = "influencer"
BRAND = "brand"


def utc_now() -> datetime:
    """Naive UTC, matching how created_at columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_since(now: datetime, then: Optional[datetime]) -> Optional[int]:
    """Whole days elapsed (floored), None when there is no timestamp."""
    if then is None:
        return None
    return (_as_naive_utc(now) - _as_naive_utc(then)).days


def timeframe_cutoff(timeframe: Timeframe, now: datetime) -> Optional[datetime]:
    days = TIMEFRAME_DAYS.get(timeframe)
    if days is None:
        return None
    return _as_naive_utc(now) - timedelta(days=days)


def _like(text: Optional[str]) -> Optional[str]:
    if text and text.strip():
        return f"%{text.strip()}%"
    return None


def _load_json(value: Any) -> Any:
    """JSON columns may come back as text on some drivers."""
    if isinstance(value, str):
        return json.loads(value) if value.strip() else None
    return value


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def collaboration_cost(costs: Any, platform: str, fmt: str) -> float:
    """Rate for one platform/format from the collaboration_costs JSON; 0 when unset."""
    costs = _load_json(costs) or {}
    platform_costs = costs.get(platform) or {}
    return _to_float(platform_costs.get(fmt))


# =============================================================================
# GROUPED COUNTERS
# =============================================================================

# relation -> (owner column, extra conditions)
_COUNTED_RELATIONS = {
    "followers": (Follow.following_influencer_id, [Follow.following_type == INFLUENCER]),
    "following": (
        Follow.follower_influencer_id,
        [Follow.follower_type == INFLUENCER, Follow.following_influencer_id.isnot(None)],
    ),
    "posts": (Post.influencer_id, [Post.user_type == INFLUENCER, Post.is_active.is_(True)]),
    "experiences": (Experience.influencer_id, []),
    "applications": (CampaignApplication.influencer_id, []),
    "selected_applications": (
        CampaignApplication.influencer_id,
        [CampaignApplication.status == ApplicationStatus.SELECTED],
    ),
    "brand_followers": (Follow.following_brand_id, [Follow.following_type == BRAND]),
    "brand_following": (Follow.follower_brand_id, [Follow.follower_type == BRAND]),
    "brand_posts": (Post.brand_id, [Post.user_type == BRAND, Post.is_active.is_(True)]),
}

def count_related(db: Session, relation: str, ids: Iterable[int]) -> Dict[int, int]:
    """
    Count related rows per owner id with a single grouped query.

    Args:
        db: Database session
        relation: Key of _COUNTED_RELATIONS
        ids: Owner ids (influencer or brand ids)

    Returns:
        Dict owner_id -> count; owners with no rows are absent (read as 0)
    """
    if relation not in _COUNTED_RELATIONS:
        raise ValueError(f"Unknown relation: {relation}")

    ids = list(ids)
    if not ids:
        return {}

    owner, conditions = _COUNTED_RELATIONS[relation]
    stmt = (
        select(owner, func.count())
        .where(owner.in_(ids), *conditions)
        .group_by(owner)
    )
    return {owner_id: count for owner_id, count in db.execute(stmt).all()}


def recent_post_likes(db: Session, influencer_ids: List[int], window: int) -> Dict[int, Tuple[int, float]]:
    """
    Average likes over each influencer's most recent active posts.

    Returns:
        Dict influencer_id -> (posts in window, average likes)
    """
    if not influencer_ids:
        return {}

    ranked = (
        select(
            Post.influencer_id.label("owner_id"),
            Post.likes_count.label("likes"),
            func.row_number().over(
                partition_by=Post.influencer_id,
                order_by=(Post.created_at.desc(), Post.id.desc()),
            ).label("position"),
        )
        .where(
            Post.influencer_id.in_(influencer_ids),
            Post.user_type == INFLUENCER,
            Post.is_active.is_(True),
        )
        .subquery()
    )
    stmt = (
        select(ranked.c.owner_id, func.count(), func.avg(ranked.c.likes))
        .where(ranked.c.position <= window)
        .group_by(ranked.c.owner_id)
    )
    return {
        owner_id: (count, _to_float(average))
        for owner_id, count, average in db.execute(stmt).all()
    }


def _names_by_id(db: Session, model, ids: Iterable[Optional[int]]) -> Dict[int, str]:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    rows = db.execute(select(model.id, model.name).where(model.id.in_(ids))).all()
    return {row_id: name for row_id, name in rows}


# =============================================================================
# INFLUENCERS
# =============================================================================

def _influencer_statement(filters: TopInfluencersRequest, profile_filter: Optional[ProfileFilter]):
    stmt = select(Influencer).where(
        Influencer.is_profile_completed.is_(True),
        Influencer.is_active.is_(True),
    )

    pattern = _like(filters.search_query)
    if pattern:
        stmt = stmt.where(or_(Influencer.name.ilike(pattern), Influencer.username.ilike(pattern)))

    if filters.city_ids and not filters.is_pan_india:
        stmt = stmt.where(Influencer.city_id.in_(filters.city_ids))

    pattern = _like(filters.location_search)
    if pattern:
        stmt = stmt.join(City, City.id == Influencer.city_id).where(City.name.ilike(pattern))

    pattern = _like(filters.niche_search)
    if pattern:
        niche_owners = (
            select(InfluencerNiche.influencer_id)
            .join(Niche, Niche.id == InfluencerNiche.niche_id)
            .where(Niche.name.ilike(pattern))
        )
        stmt = stmt.where(Influencer.id.in_(niche_owners))

    if profile_filter == ProfileFilter.VERIFIED_PROFILE:
        stmt = stmt.where(Influencer.is_verified.is_(True))
    elif profile_filter == ProfileFilter.UNVERIFIED_PROFILE:
        stmt = stmt.where(Influencer.is_verified.is_(False))

    return stmt.order_by(Influencer.created_at.asc(), Influencer.id.asc())


def fetch_influencer_candidates(
    db: Session,
    filters: TopInfluencersRequest,
    policy: Optional[ScoringPolicy] = None,
    profile_filter: Optional[ProfileFilter] = None
) -> List[InfluencerCandidate]:
    """
    Fetch every influencer matching the filters, with raw metrics attached.
    Not paginated: scoring needs the whole comparison set.
    """
    policy = policy or ScoringPolicy()

    influencers = db.execute(_influencer_statement(filters, profile_filter)).scalars().all()
    logger.info(f"🔍 Influencers fetched from DB: {len(influencers)}")
    if not influencers:
        return []

    ids = [inf.id for inf in influencers]
    counters = {relation: count_related(db, relation, ids) for relation in (
        "followers", "following", "posts", "experiences", "applications", "selected_applications"
    )}
    likes = recent_post_likes(db, ids, policy.engagement_post_window)
    cities = _names_by_id(db, City, (inf.city_id for inf in influencers))
    countries = _names_by_id(db, Country, (inf.country_id for inf in influencers))

    niches: Dict[int, List[Tuple[int, str]]] = defaultdict(list)
    niche_rows = db.execute(
        select(InfluencerNiche.influencer_id, Niche.id, Niche.name)
        .join(Niche, Niche.id == InfluencerNiche.niche_id)
        .where(InfluencerNiche.influencer_id.in_(ids))
        .order_by(InfluencerNiche.id)
    ).all()
    for influencer_id, niche_id, niche_name in niche_rows:
        niches[influencer_id].append((niche_id, niche_name))

    candidates = []
    for inf in influencers:
        try:
            recent_count, average_likes = likes.get(inf.id, (0, 0.0))
            metrics = InfluencerMetrics(
                followers_count=counters["followers"].get(inf.id, 0),
                following_count=counters["following"].get(inf.id, 0),
                posts_count=counters["posts"].get(inf.id, 0),
                recent_posts_count=recent_count,
                average_likes=average_likes,
                niche_ids=[niche_id for niche_id, _ in niches[inf.id]],
                city_id=inf.city_id,
                instagram_post_cost=collaboration_cost(inf.collaboration_costs, "instagram", "post"),
                instagram_reel_cost=collaboration_cost(inf.collaboration_costs, "instagram", "reel"),
                completed_campaigns=counters["experiences"].get(inf.id, 0),
                total_applications=counters["applications"].get(inf.id, 0),
                selected_applications=counters["selected_applications"].get(inf.id, 0),
            )
        except Exception as e:
            logger.warning(f"⚠️ Metrics unavailable for influencer {inf.id}, using empty bundle: {e}")
            metrics = InfluencerMetrics()

        candidates.append(InfluencerCandidate(
            id=inf.id,
            name=inf.name or "",
            username=inf.username or "",
            profile_image=inf.profile_image or "",
            bio=inf.bio or "",
            profile_headline=inf.profile_headline or "",
            city=cities.get(inf.city_id, ""),
            country=countries.get(inf.country_id, ""),
            is_verified=bool(inf.is_verified),
            niches=[name for _, name in niches[inf.id]],
            created_at=inf.created_at,
            metrics=metrics,
        ))

    logger.info(f"✅ Influencer candidates built: {len(candidates)}")
    return candidates


# =============================================================================
# BRANDS
# =============================================================================

def _brand_statement(
    profile_filter: ProfileFilter,
    search_query: Optional[str],
    location_search: Optional[str],
    niche_search: Optional[str]
):
    stmt = select(Brand).where(
        Brand.is_active.is_(True),
        Brand.is_profile_completed.is_(True),
    )

    if profile_filter in (ProfileFilter.TOP_PROFILE, ProfileFilter.VERIFIED_PROFILE):
        stmt = stmt.where(Brand.is_verified.is_(True))
    elif profile_filter == ProfileFilter.UNVERIFIED_PROFILE:
        stmt = stmt.where(Brand.is_verified.is_(False))

    pattern = _like(search_query)
    if pattern:
        stmt = stmt.where(or_(Brand.brand_name.ilike(pattern), Brand.username.ilike(pattern)))

    pattern = _like(location_search)
    if pattern:
        stmt = stmt.join(City, City.id == Brand.headquarter_city_id).where(City.name.ilike(pattern))

    pattern = _like(niche_search)
    if pattern:
        niche_owners = (
            select(BrandNiche.brand_id)
            .join(Niche, Niche.id == BrandNiche.niche_id)
            .where(Niche.name.ilike(pattern))
        )
        stmt = stmt.where(Brand.id.in_(niche_owners))

    return stmt.order_by(Brand.created_at.asc(), Brand.id.asc())


def _brand_campaign_metrics(
    db: Session,
    brand_ids: List[int],
    cutoff: Optional[datetime]
) -> Dict[int, Dict[str, Any]]:
    """Per-brand campaign rows plus per-campaign selected counts and budgets."""
    stmt = (
        select(Campaign.id, Campaign.brand_id, Campaign.niche_ids)
        .where(Campaign.brand_id.in_(brand_ids), Campaign.status != CampaignStatus.CANCELLED)
    )
    if cutoff is not None:
        stmt = stmt.where(Campaign.created_at >= cutoff)
    campaigns = db.execute(stmt).all()

    campaign_ids = [row.id for row in campaigns]
    selected: Dict[int, int] = {}
    budgets: Dict[int, Any] = {}
    if campaign_ids:
        selected = dict(db.execute(
            select(CampaignApplication.campaign_id, func.count())
            .where(
                CampaignApplication.campaign_id.in_(campaign_ids),
                CampaignApplication.status == ApplicationStatus.SELECTED,
            )
            .group_by(CampaignApplication.campaign_id)
        ).all())
        budgets = dict(db.execute(
            select(CampaignDeliverable.campaign_id, func.sum(CampaignDeliverable.budget))
            .where(CampaignDeliverable.campaign_id.in_(campaign_ids))
            .group_by(CampaignDeliverable.campaign_id)
        ).all())

    by_brand: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
    for row in campaigns:
        by_brand[row.brand_id].append({
            "niche_ids": row.niche_ids,
            "selected": selected.get(row.id, 0),
            "budget": budgets.get(row.id),
        })
    return by_brand


def _summarize_brand_campaigns(campaigns: List[Dict[str, Any]]) -> Dict[str, Any]:
    niche_ids = set()
    for campaign in campaigns:
        for niche_id in _load_json(campaign["niche_ids"]) or []:
            if niche_id is not None:
                niche_ids.add(niche_id)

    # Average only over campaigns that carry a budget
    budgets = [_to_float(c["budget"]) for c in campaigns]
    budgets = [b for b in budgets if b > 0]

    return {
        "total_campaigns": len(campaigns),
        "unique_niches_count": len(niche_ids),
        "selected_influencers_count": sum(c["selected"] for c in campaigns),
        "average_payout": sum(budgets) / len(budgets) if budgets else 0.0,
    }


def fetch_brand_candidates(
    db: Session,
    timeframe: Timeframe = Timeframe.ALL_TIME,
    now: Optional[datetime] = None,
    profile_filter: ProfileFilter = ProfileFilter.TOP_PROFILE,
    search_query: Optional[str] = None,
    location_search: Optional[str] = None,
    niche_search: Optional[str] = None
) -> List[BrandCandidate]:
    """
    Fetch brands with campaign metrics (non-cancelled campaigns inside the
    timeframe) and social counters attached.

    topProfile restricts to verified brands; the gate on campaign counts
    is applied later by the qualification filter.
    """
    now = now or utc_now()

    brands = db.execute(
        _brand_statement(profile_filter, search_query, location_search, niche_search)
    ).scalars().all()
    logger.info(f"🔍 Brands fetched from DB: {len(brands)} (profile={profile_filter.value}, timeframe={timeframe.value})")
    if not brands:
        return []

    ids = [brand.id for brand in brands]
    campaigns = _brand_campaign_metrics(db, ids, timeframe_cutoff(timeframe, now))
    posts = count_related(db, "brand_posts", ids)
    followers = count_related(db, "brand_followers", ids)
    following = count_related(db, "brand_following", ids)

    candidates = []
    for brand in brands:
        try:
            metrics = BrandMetrics(
                **_summarize_brand_campaigns(campaigns.get(brand.id, [])),
                posts_count=posts.get(brand.id, 0),
                followers_count=followers.get(brand.id, 0),
                following_count=following.get(brand.id, 0),
            )
        except Exception as e:
            logger.warning(f"⚠️ Metrics unavailable for brand {brand.id}, using empty bundle: {e}")
            metrics = BrandMetrics()

        candidates.append(BrandCandidate(
            id=brand.id,
            brand_name=brand.brand_name or "",
            username=brand.username or "",
            email=brand.email,
            profile_image=brand.profile_image,
            brand_bio=brand.brand_bio,
            website_url=brand.website_url,
            is_verified=bool(brand.is_verified),
            created_at=brand.created_at,
            metrics=metrics,
        ))

    logger.info(f"✅ Brand candidates built: {len(candidates)}")
    return candidates


# =============================================================================
# CAMPAIGNS
# =============================================================================

def fetch_campaign_candidates(
    db: Session,
    timeframe: Timeframe = Timeframe.ALL_TIME,
    status: CampaignStatusFilter = CampaignStatusFilter.ALL,
    verified_brands_only: bool = False,
    now: Optional[datetime] = None
) -> List[CampaignCandidate]:
    """Fetch campaigns with application, budget, scope and recency metrics."""
    now = now or utc_now()

    stmt = select(Campaign, Brand).join(Brand, Brand.id == Campaign.brand_id)
    if status == CampaignStatusFilter.ALL:
        stmt = stmt.where(Campaign.status != CampaignStatus.CANCELLED)
    else:
        stmt = stmt.where(Campaign.status == status.value)

    cutoff = timeframe_cutoff(timeframe, now)
    if cutoff is not None:
        stmt = stmt.where(Campaign.created_at >= cutoff)
    if verified_brands_only:
        stmt = stmt.where(Brand.is_verified.is_(True))

    rows = db.execute(stmt.order_by(Campaign.id)).all()
    logger.info(f"🔍 Campaigns fetched from DB: {len(rows)} (status={status.value}, timeframe={timeframe.value})")
    if not rows:
        return []

    ids = [campaign.id for campaign, _ in rows]
    applications = {
        campaign_id: (count, last_applied)
        for campaign_id, count, last_applied in db.execute(
            select(
                CampaignApplication.campaign_id,
                func.count(),
                func.max(CampaignApplication.created_at),
            )
            .where(CampaignApplication.campaign_id.in_(ids))
            .group_by(CampaignApplication.campaign_id)
        ).all()
    }
    selected = dict(db.execute(
        select(CampaignApplication.campaign_id, func.count())
        .where(
            CampaignApplication.campaign_id.in_(ids),
            CampaignApplication.status == ApplicationStatus.SELECTED,
        )
        .group_by(CampaignApplication.campaign_id)
    ).all())
    deliverables = {
        campaign_id: (count, total)
        for campaign_id, count, total in db.execute(
            select(
                CampaignDeliverable.campaign_id,
                func.count(),
                func.sum(CampaignDeliverable.budget),
            )
            .where(CampaignDeliverable.campaign_id.in_(ids))
            .group_by(CampaignDeliverable.campaign_id)
        ).all()
    }
    cities = dict(db.execute(
        select(CampaignCity.campaign_id, func.count())
        .where(CampaignCity.campaign_id.in_(ids))
        .group_by(CampaignCity.campaign_id)
    ).all())

    candidates = []
    for campaign, brand in rows:
        try:
            applications_count, last_applied = applications.get(campaign.id, (0, None))
            deliverables_count, total_budget = deliverables.get(campaign.id, (0, None))
            metrics = CampaignMetrics(
                applications_count=applications_count,
                selected_influencers=selected.get(campaign.id, 0),
                total_budget=_to_float(total_budget),
                deliverables_count=deliverables_count,
                cities_count=cities.get(campaign.id, 0),
                is_pan_india=bool(campaign.is_pan_india),
                niches_count=len(_load_json(campaign.niche_ids) or []),
                status=campaign.status or "",
                days_since_launch=days_since(now, campaign.created_at) or 0,
                days_since_last_application=days_since(now, _parse_timestamp(last_applied)),
            )
        except Exception as e:
            logger.warning(f"⚠️ Metrics unavailable for campaign {campaign.id}, using empty bundle: {e}")
            metrics = CampaignMetrics(status=campaign.status or "")

        candidates.append(CampaignCandidate(
            id=campaign.id,
            name=campaign.name or "",
            description=campaign.description,
            category=campaign.category,
            type=campaign.type,
            status=campaign.status or "",
            created_at=campaign.created_at,
            brand=CampaignBrand(
                id=brand.id,
                brand_name=brand.brand_name or "",
                username=brand.username or "",
                profile_image=brand.profile_image,
                is_verified=bool(brand.is_verified),
            ),
            metrics=metrics,
        ))

    logger.info(f"✅ Campaign candidates built: {len(candidates)}")
    return candidates


def _parse_timestamp(value: Any) -> Optional[datetime]:
    # Aggregates over DateTime columns come back as text on SQLite
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
