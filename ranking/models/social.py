from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey

from .base import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    user_type = Column(String, nullable=False)  # influencer | brand
    influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), index=True)
    content = Column(Text)
    likes_count = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Follow(Base):
    __tablename__ = "follows"

    id = Column(Integer, primary_key=True)
    follower_type = Column(String, nullable=False)  # influencer | brand
    follower_influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True)
    follower_brand_id = Column(Integer, ForeignKey("brands.id"), index=True)
    following_type = Column(String, nullable=False)
    following_influencer_id = Column(Integer, ForeignKey("influencers.id"), index=True)
    following_brand_id = Column(Integer, ForeignKey("brands.id"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
