from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, ForeignKey

from .base import Base


class Influencer(Base):
    __tablename__ = "influencers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    profile_image = Column(String)
    bio = Column(Text)
    profile_headline = Column(String)

    # Location
    city_id = Column(Integer, ForeignKey("cities.id"))
    country_id = Column(Integer, ForeignKey("countries.id"))

    # {"instagram": {"post": 5000, "reel": 8000, ...}, "youtube": {...}}
    collaboration_costs = Column(JSON)

    # Status flags
    is_profile_completed = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class InfluencerNiche(Base):
    __tablename__ = "influencer_niches"

    id = Column(Integer, primary_key=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True, nullable=False)
    niche_id = Column(Integer, ForeignKey("niches.id"), nullable=False)


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True)
    influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True, nullable=False)
    campaign_name = Column(String)
    brand_name = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
