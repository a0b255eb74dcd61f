# api/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import (
    AfterValidator, AnyUrl, BaseModel, BeforeValidator, ConfigDict, EmailStr,
    Field, TypeAdapter, field_validator,
)

from .models import CampaignStatus, Platform

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # validate, but keep the caller's spelling rather than the normalised form
    _url_adapter.validate_python(value)
    return value


def _decimal_to_float(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


Url     = Annotated[str, AfterValidator(_check_url)]
Numeric = Annotated[float, BeforeValidator(_decimal_to_float)]


def _reject_null(value):
    if value is None:
        raise ValueError("may be omitted but not set to null")
    return value


# ————————————————
# Entities
# ————————————————
class Influencer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str]
    bio: Optional[str]
    portfolio_description: Optional[str]
    created_at: datetime
    updated_at: datetime


class SocialMediaAccount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    influencer_id: int
    platform: Platform
    username: str
    url: str
    follower_count: Optional[int]
    created_at: datetime


class Sponsor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    contact_email: str
    contact_phone: Optional[str]
    industry: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sponsor_id: int
    name: str
    description: Optional[str]
    category: str
    target_audience: Optional[str]
    created_at: datetime
    updated_at: datetime


class Campaign(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sponsor_id: int
    product_id: int
    title: str
    description: Optional[str]
    budget: Numeric
    target_audience: Optional[str]
    objectives: Optional[str]
    status: CampaignStatus
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class PerformanceIndicators(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    influencer_id: int
    platform: Platform
    followers_count: int
    avg_views: Optional[int]
    avg_engagement_rate: Optional[Numeric]
    total_posts: Optional[int]
    last_updated: datetime
    created_at: datetime


# ————————————————
# Create inputs
# ————————————————
class CreateInfluencerInput(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    bio: Optional[str] = None
    portfolio_description: Optional[str] = None


class CreateSocialMediaAccountInput(BaseModel):
    influencer_id: int
    platform: Platform
    username: str
    url: Url
    follower_count: Optional[int] = Field(default=None, ge=0)


class CreateSponsorInput(BaseModel):
    company_name: str
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    industry: str
    description: Optional[str] = None


class CreateProductInput(BaseModel):
    sponsor_id: int
    name: str
    description: Optional[str] = None
    category: str
    target_audience: Optional[str] = None


class CreateCampaignInput(BaseModel):
    sponsor_id: int
    product_id: int
    title: str
    description: Optional[str] = None
    budget: float = Field(..., gt=0)
    target_audience: Optional[str] = None
    objectives: Optional[str] = None
    status: CampaignStatus = CampaignStatus.draft
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class CreatePerformanceIndicatorsInput(BaseModel):
    influencer_id: int
    platform: Platform
    followers_count: int = Field(..., ge=0)
    avg_views: Optional[int] = Field(default=None, ge=0)
    avg_engagement_rate: Optional[float] = Field(default=None, ge=0, le=100)
    total_posts: Optional[int] = Field(default=None, ge=0)


# ————————————————
# Update inputs: only the fields a caller sends are applied,
# an explicit null clears a nullable column
# ————————————————
class UpdateInfluencerInput(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    portfolio_description: Optional[str] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class UpdateSponsorInput(BaseModel):
    id: int
    company_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None

    @field_validator("company_name", "contact_email", "industry", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class UpdateCampaignInput(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    budget: Optional[float] = Field(default=None, gt=0)
    target_audience: Optional[str] = None
    objectives: Optional[str] = None
    status: Optional[CampaignStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("title", "budget", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


# ————————————————
# Search inputs
# ————————————————
class SearchInfluencersInput(BaseModel):
    category: Optional[str] = None
    min_followers: Optional[int] = Field(default=None, ge=0)
    max_followers: Optional[int] = Field(default=None, ge=0)
    platform: Optional[Platform] = None
    min_engagement_rate: Optional[float] = Field(default=None, ge=0, le=100)
    limit: int = Field(default=50, gt=0)
    offset: int = Field(default=0, ge=0)


class SearchCampaignsInput(BaseModel):
    category: Optional[str] = None
    min_budget: Optional[float] = Field(default=None, gt=0)
    max_budget: Optional[float] = Field(default=None, gt=0)
    status: Optional[CampaignStatus] = None
    sponsor_id: Optional[int] = None
    limit: int = Field(default=50, gt=0)
    offset: int = Field(default=0, ge=0)


# ————————————————
# Misc
# ————————————————
class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


class DashboardStats(BaseModel):
    influencers: int
    sponsors: int
    campaigns: int
    active_campaigns: int
