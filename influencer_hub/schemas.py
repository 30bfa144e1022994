from pydantic import BaseModel, Field, AliasChoices, ConfigDict, field_validator
from datetime import datetime, date as date_type
from typing import Any

class UserCreate(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=6)

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class ProfileOut(BaseModel):
    id: int
    email: str
    name: str | None = None
    avatar_url: str | None = None
    audience_type: str | None = None
    audience_age: str | None = None
    audience_size: str | None = None
    niche: str | None = None
    interests: str | None = None
    brand_collaborations: str | None = None
    email_confirmed: bool = False
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    name: str | None = None
    avatar_url: str | None = None
    audience_type: str | None = None
    audience_age: str | None = None
    audience_size: str | None = None
    niche: str | None = None
    interests: str | None = None
    brand_collaborations: str | None = None

class ResendConfirmationIn(BaseModel):
    email: str

class PlatformStatusOut(BaseModel):
    id: str
    name: str
    connected: bool
    username: str | None = None
    token_expires_at: datetime | None = None

class SocialConnectionIn(BaseModel):
    username: str
    access_token: str | None = None
    refresh_token: str | None = None
    token_expires_at: datetime | None = None

class ScheduleIn(BaseModel):
    date: date_type
    time: str = "00:00"
    timezone: str | None = None

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        try:
            hour, minute = map(int, v.split(":")[:2])
        except ValueError:
            raise ValueError("time must be HH:MM")
        if not (0 <= hour < 24 and 0 <= minute < 60):
            raise ValueError("time must be HH:MM")
        return f"{hour:02d}:{minute:02d}"

class PostCreate(BaseModel):
    content: str = ""
    platforms: list[str] = Field(default_factory=list)
    title: str | None = None
    content_type: str = "text"
    schedule: ScheduleIn | None = None
    media_included: bool = False
    media_urls: list[str] = Field(default_factory=list)

class PostUpdate(BaseModel):
    title: str | None = None
    content: str | None = None
    content_type: str | None = None
    platforms: list[str] | None = None
    schedule: ScheduleIn | None = None
    media_included: bool | None = None
    media_urls: list[str] | None = None
    is_active: bool | None = None

class PostOut(BaseModel):
    id: int
    user_id: int
    title: str
    content: str | None = None
    content_type: str | None = None
    platforms: list[str] = Field(default_factory=list)
    schedule: dict[str, Any] | None = None
    scheduled_at: datetime | None = None
    published_at: datetime | None = None
    status: str
    media_urls: list[str] = Field(default_factory=list)
    media_included: bool = False
    is_active: bool = True
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True

class GeneratedPostOut(BaseModel):
    content: str

class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    prompt: str
    platform: str | None = None
    content_length: str | None = Field(default=None, alias="contentLength")

class AIResponseIn(BaseModel):
    response_type: str
    content: str
    metadata: dict[str, Any] | None = None

class AIResponseOut(BaseModel):
    id: int
    user_id: int
    response_type: str
    content: str
    metadata: dict[str, Any] | None = Field(default=None, validation_alias=AliasChoices("response_metadata", "metadata"))
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class CaptionSaveIn(BaseModel):
    caption: str
    prompt: str = ""

class HashtagsSaveIn(BaseModel):
    hashtags: list[str]
    content: str = ""

class CommentResponseSaveIn(BaseModel):
    response: str
    comment: str = ""

class RepurposedSaveIn(BaseModel):
    content: str
    original_content: str = ""
    platform: str = "instagram"
    content_length: str = "medium"

class InsightSaveIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    estimated_value: str | float | None = Field(default=None, alias="estimatedValue")
    profile: str = ""

class InsightOut(BaseModel):
    id: int
    insight_type: str
    title: str
    description: str | None = None
    estimated_value: float | None = None
    is_implemented: bool = False
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class HashtagOut(BaseModel):
    id: int
    name: str
    category: str | None = None
    trend_score: float | None = None
    trending: bool = False
    class Config:
        from_attributes = True

class CollaborationCreate(BaseModel):
    brand_name: str
    brand_description: str = ""
    collaboration_type: str = "sponsored_post"
    requirements: str = ""
    compensation: str = ""

class CollaborationOut(BaseModel):
    id: int
    brand_name: str
    brand_description: str | None = None
    collaboration_type: str | None = None
    type_label: str | None = None
    requirements: str | None = None
    compensation: str | None = None
    is_active: bool = True
    created_by: int | None = None
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class ApplicationIn(BaseModel):
    message: str = ""

class ApplicationStatusIn(BaseModel):
    status: str

class ApplicationOut(BaseModel):
    id: int
    collaboration_id: int
    user_id: int
    message: str | None = None
    status: str
    brand_name: str | None = None
    created_at: datetime | None = None
    class Config:
        from_attributes = True

class VoiceSettingsOut(BaseModel):
    id: int
    user_id: int
    voice_id: str | None = None
    voice_name: str | None = None
    pitch: int
    speed: int
    clarity: int
    sample_url: str | None = None
    updated_at: datetime | None = None
    class Config:
        from_attributes = True

class VoiceSettingsUpdate(BaseModel):
    voice_id: str | None = None
    voice_name: str | None = None
    pitch: int | None = Field(default=None, ge=0, le=100)
    speed: int | None = Field(default=None, ge=0, le=100)
    clarity: int | None = Field(default=None, ge=0, le=100)

class TrainingJobOut(BaseModel):
    id: int
    kind: str
    file_urls: list[str] = Field(default_factory=list)
    started_at: datetime
    progress: int
    status: str
