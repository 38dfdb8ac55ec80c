from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, Numeric, ForeignKey

from .base import Base


class CampaignStatus:
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ApplicationStatus:
    APPLIED = "applied"
    UNDER_REVIEW = "under_review"
    SELECTED = "selected"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text)
    category = Column(String)
    type = Column(String)
    status = Column(String, default=CampaignStatus.DRAFT, nullable=False)
    is_pan_india = Column(Boolean, default=False, nullable=False)
    niche_ids = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class CampaignApplication(Base):
    __tablename__ = "campaign_applications"

    id = Column(Integer, primary_key=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id"), index=True, nullable=False)
    influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True, nullable=False)
    status = Column(String, default=ApplicationStatus.APPLIED, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class CampaignDeliverable(Base):
    __tablename__ = "campaign_deliverables"

    id = Column(Integer, primary_key=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id"), index=True, nullable=False)
    platform = Column(String)
    type = Column(String)
    budget = Column(Numeric(12, 2))
    quantity = Column(Integer, default=1)


class CampaignCity(Base):
    __tablename__ = "campaign_cities"

    id = Column(Integer, primary_key=True)
    campaign_id = Column(Integer, ForeignKey("campaigns.id"), index=True, nullable=False)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
