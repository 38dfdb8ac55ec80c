from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey

from .base import Base


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True)
    brand_name = Column(String, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String)
    profile_image = Column(String)
    brand_bio = Column(Text)
    website_url = Column(String)
    headquarter_city_id = Column(Integer, ForeignKey("cities.id"))

    # Status flags
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_profile_completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class BrandNiche(Base):
    __tablename__ = "brand_niches"

    id = Column(Integer, primary_key=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), index=True, nullable=False)
    niche_id = Column(Integer, ForeignKey("niches.id"), nullable=False)
