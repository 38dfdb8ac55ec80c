# Export all ranking models for easy imports
from .base import Base
from .geo import Country, City, Niche
from .influencer import Influencer, InfluencerNiche, Experience
from .brand import Brand, BrandNiche
from .campaign import (
    Campaign,
    CampaignApplication,
    CampaignDeliverable,
    CampaignCity,
    CampaignStatus,
    ApplicationStatus,
)
from .social import Post, Follow

__all__ = [
    "Base",
    "Country",
    "City",
    "Niche",
    "Influencer",
    "InfluencerNiche",
    "Experience",
    "Brand",
    "BrandNiche",
    "Campaign",
    "CampaignApplication",
    "CampaignDeliverable",
    "CampaignCity",
    "CampaignStatus",
    "ApplicationStatus",
    "Post",
    "Follow",
]
