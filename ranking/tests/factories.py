"""
Builders shared by the ranking tests: in-memory candidates for the pure
engine tests, and a Seeder that writes rows for the extractor and API tests.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from ranking.logic.contracts import (
    InfluencerCandidate,
    InfluencerMetrics,
    BrandCandidate,
    BrandMetrics,
    CampaignBrand,
    CampaignCandidate,
    CampaignMetrics,
    ScoredCandidate,
)
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
    ApplicationStatus,
)

NOW = datetime(2025, 6, 1, 12, 0, 0)


# =============================================================================
# IN-MEMORY CANDIDATES
# =============================================================================

def influencer_candidate(id: int, created_at: Optional[datetime] = None, **metrics) -> InfluencerCandidate:
    return InfluencerCandidate(
        id=id,
        name=f"Influencer {id}",
        username=f"influencer{id}",
        created_at=created_at or NOW - timedelta(days=id),
        metrics=InfluencerMetrics(**metrics),
    )


def brand_candidate(id: int, created_at: Optional[datetime] = None, **metrics) -> BrandCandidate:
    return BrandCandidate(
        id=id,
        brand_name=f"Brand {id}",
        username=f"brand{id}",
        is_verified=True,
        created_at=created_at or NOW - timedelta(days=id),
        metrics=BrandMetrics(**metrics),
    )


def campaign_candidate(id: int, **metrics) -> CampaignCandidate:
    metrics.setdefault("status", "active")
    return CampaignCandidate(
        id=id,
        name=f"Campaign {id}",
        status=metrics["status"],
        created_at=NOW - timedelta(days=metrics.get("days_since_launch", 0)),
        brand=CampaignBrand(id=1, brand_name="Brand 1", username="brand1", is_verified=True),
        metrics=CampaignMetrics(**metrics),
    )


def scored(id: int, composite: float = 0.0, created_at: Optional[datetime] = None, **sort_values) -> ScoredCandidate:
    return ScoredCandidate(
        candidate=influencer_candidate(id, created_at=created_at),
        composite_score=composite,
        sort_values=sort_values,
    )


# =============================================================================
# DATABASE ROWS
# =============================================================================

class Seeder:
    """Writes ranking fixtures through a session; call commit() when done."""

    def __init__(self, db):
        self.db = db
        self._fake_ids = 10_000

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def _next_fake_id(self) -> int:
        self._fake_ids += 1
        return self._fake_ids

    def commit(self):
        self.db.commit()

    # Reference data
    def country(self, name: str = "India") -> Country:
        return self.add(Country(name=name, code=name[:2].upper()))

    def city(self, name: str, country: Optional[Country] = None) -> City:
        return self.add(City(name=name, country_id=country.id if country else None))

    def niche(self, name: str) -> Niche:
        return self.add(Niche(name=name))

    # Influencers
    def influencer(self, username: str, niches: List[Niche] = (), **fields) -> Influencer:
        fields.setdefault("name", username.title())
        fields.setdefault("is_profile_completed", True)
        fields.setdefault("is_active", True)
        fields.setdefault("created_at", NOW - timedelta(days=100))
        influencer = self.add(Influencer(username=username, **fields))
        for niche in niches:
            self.add(InfluencerNiche(influencer_id=influencer.id, niche_id=niche.id))
        return influencer

    def followers(self, influencer: Influencer, count: int):
        self.db.add_all([
            Follow(
                follower_type="influencer",
                follower_influencer_id=self._next_fake_id(),
                following_type="influencer",
                following_influencer_id=influencer.id,
            )
            for _ in range(count)
        ])
        self.db.flush()

    def follows_brand(self, influencer: Influencer, brand: Brand):
        self.add(Follow(
            follower_type="influencer",
            follower_influencer_id=influencer.id,
            following_type="brand",
            following_brand_id=brand.id,
        ))

    def posts(self, influencer: Influencer, likes: List[int], is_active: bool = True):
        """One post per entry in `likes`, newest first, a day apart."""
        self.db.add_all([
            Post(
                user_type="influencer",
                influencer_id=influencer.id,
                likes_count=like_count,
                is_active=is_active,
                created_at=NOW - timedelta(days=index),
            )
            for index, like_count in enumerate(likes)
        ])
        self.db.flush()

    def experiences(self, influencer: Influencer, count: int):
        self.db.add_all([
            Experience(influencer_id=influencer.id, campaign_name=f"Past {i}")
            for i in range(count)
        ])
        self.db.flush()

    # Brands & campaigns
    def brand(self, username: str, **fields) -> Brand:
        fields.setdefault("brand_name", username.title())
        fields.setdefault("is_verified", True)
        fields.setdefault("is_active", True)
        fields.setdefault("is_profile_completed", True)
        fields.setdefault("created_at", NOW - timedelta(days=200))
        return self.add(Brand(username=username, **fields))

    def brand_niche(self, brand: Brand, niche: Niche):
        self.add(BrandNiche(brand_id=brand.id, niche_id=niche.id))

    def brand_posts(self, brand: Brand, count: int):
        self.db.add_all([
            Post(user_type="brand", brand_id=brand.id, likes_count=0, created_at=NOW)
            for _ in range(count)
        ])
        self.db.flush()

    def campaign(self, brand: Brand, name: str = "Campaign", **fields) -> Campaign:
        fields.setdefault("status", "active")
        fields.setdefault("niche_ids", [])
        fields.setdefault("created_at", NOW - timedelta(days=10))
        return self.add(Campaign(brand_id=brand.id, name=name, **fields))

    def applications(
        self,
        campaign: Campaign,
        count: int,
        selected: int = 0,
        created_at: Optional[datetime] = None,
        influencer: Optional[Influencer] = None
    ):
        """`count` applications, the first `selected` of them selected."""
        self.db.add_all([
            CampaignApplication(
                campaign_id=campaign.id,
                influencer_id=influencer.id if influencer else self._next_fake_id(),
                status=ApplicationStatus.SELECTED if i < selected else ApplicationStatus.APPLIED,
                created_at=created_at or NOW - timedelta(days=1),
            )
            for i in range(count)
        ])
        self.db.flush()

    def deliverable(self, campaign: Campaign, budget: float):
        self.add(CampaignDeliverable(campaign_id=campaign.id, platform="instagram", type="post", budget=budget))

    def campaign_cities(self, campaign: Campaign, cities: List[City]):
        for city in cities:
            self.add(CampaignCity(campaign_id=campaign.id, city_id=city.id))
