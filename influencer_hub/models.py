# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey, Boolean, Float, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

class Profile(Base):
    __tablename__ = "profiles"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)
    name = Column(String, nullable=True)
    avatar_url = Column(Text, nullable=True)

    # Audience descriptors collected during onboarding
    audience_type = Column(String, nullable=True)
    audience_age = Column(String, nullable=True)
    audience_size = Column(String, nullable=True)
    niche = Column(String, nullable=True)
    interests = Column(Text, nullable=True)
    brand_collaborations = Column(Text, nullable=True) # free-text history

    email_confirmed = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    social_connections = relationship("SocialConnection", back_populates="user", cascade="all, delete-orphan")
    posts = relationship("PostAutomation", back_populates="user", cascade="all, delete-orphan")
    voice_settings = relationship("VoiceSettings", back_populates="user", uselist=False, cascade="all, delete-orphan")
    applications = relationship("CollaborationApplication", back_populates="user")

class SocialConnection(Base):
    __tablename__ = "social_connections"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    platform = Column(String, nullable=False)
    username = Column(String, nullable=False)
    access_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)
    token_expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("Profile", back_populates="social_connections")

    __table_args__ = (UniqueConstraint("user_id", "platform", name="uq_user_platform"),)

class PostAutomation(Base):
    __tablename__ = "post_automations"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=True)
    content_type = Column(String, default="text") # text, image, video
    platforms = Column(JSON, nullable=False, default=list) # ["instagram", "twitter"]

    schedule = Column(JSON, nullable=True) # {"date": "2026-01-31", "time": "09:00", "timezone": "UTC"}
    scheduled_at = Column(DateTime(timezone=True), nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)

    status = Column(String, nullable=False, default="draft", index=True) # draft, scheduled, published
    media_urls = Column(JSON, nullable=False, default=list)
    media_included = Column(Boolean, default=False) # AI avatar video requested
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("Profile", back_populates="posts")

class AIResponse(Base):
    __tablename__ = "ai_responses"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    response_type = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    # "metadata" is reserved on declarative models
    response_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Caption(Base):
    __tablename__ = "captions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    theme = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class MonetizationInsight(Base):
    __tablename__ = "monetization_insights"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    insight_type = Column(String, nullable=False, default="opportunity")
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    estimated_value = Column(Float, nullable=True)
    is_implemented = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Hashtag(Base):
    __tablename__ = "hashtags"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    category = Column(String, nullable=True)
    trend_score = Column(Float, nullable=True)
    trending = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class BrandCollaboration(Base):
    __tablename__ = "brand_collaborations"
    id = Column(Integer, primary_key=True, index=True)
    brand_name = Column(String, nullable=False)
    brand_description = Column(Text, nullable=True)
    collaboration_type = Column(String, default="sponsored_post") # sponsored_post, ambassador, affiliate, ...
    requirements = Column(Text, nullable=True)
    compensation = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, index=True)
    created_by = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    applications = relationship("CollaborationApplication", back_populates="collaboration", cascade="all, delete-orphan")

class CollaborationApplication(Base):
    __tablename__ = "collaboration_applications"
    id = Column(Integer, primary_key=True, index=True)
    collaboration_id = Column(Integer, ForeignKey("brand_collaborations.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    message = Column(Text, nullable=True)
    status = Column(String, default="pending") # pending, approved, rejected
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    collaboration = relationship("BrandCollaboration", back_populates="applications")
    user = relationship("Profile", back_populates="applications")

    __table_args__ = (UniqueConstraint("collaboration_id", "user_id", name="uq_collaboration_user"),)

class VoiceSettings(Base):
    __tablename__ = "voice_settings"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), unique=True, nullable=False)
    voice_id = Column(String, nullable=True)
    voice_name = Column(String, nullable=True)
    pitch = Column(Integer, default=50)
    speed = Column(Integer, default=50)
    clarity = Column(Integer, default=75)
    sample_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("Profile", back_populates="voice_settings")

class TrainingJob(Base):
    __tablename__ = "training_jobs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    kind = Column(String, nullable=False) # avatar, voice
    file_urls = Column(JSON, nullable=False, default=list)
    started_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
