# api/models.py
import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Numeric, Enum, ForeignKey,
    create_engine, event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

Base = declarative_base()


class Platform(str, enum.Enum):
    instagram = "instagram"
    youtube   = "youtube"
    tiktok    = "tiktok"
    twitter   = "twitter"
    linkedin  = "linkedin"
    facebook  = "facebook"
    other     = "other"


class CampaignStatus(str, enum.Enum):
    draft     = "draft"
    active    = "active"
    paused    = "paused"
    completed = "completed"
    cancelled = "cancelled"


def _enum_values(cls):
    return [member.value for member in cls]


PlatformType = Enum(Platform, name="platform", values_callable=_enum_values)
StatusType   = Enum(CampaignStatus, name="campaign_status", values_callable=_enum_values)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Influencer(Base):
    __tablename__ = "influencers"

    id                    = Column(Integer,  primary_key=True, index=True)
    name                  = Column(Text,     nullable=False)
    email                 = Column(String,   nullable=False, unique=True)
    phone                 = Column(Text)
    bio                   = Column(Text)
    portfolio_description = Column(Text)
    created_at            = Column(DateTime, nullable=False, default=utcnow)
    updated_at            = Column(DateTime, nullable=False, default=utcnow)

    social_media_accounts  = relationship(
        "SocialMediaAccount", back_populates="influencer",
        cascade="all, delete", passive_deletes=True,
    )
    performance_indicators = relationship(
        "PerformanceIndicators", back_populates="influencer",
        cascade="all, delete", passive_deletes=True,
    )


class SocialMediaAccount(Base):
    __tablename__ = "social_media_accounts"

    id             = Column(Integer,  primary_key=True, index=True)
    influencer_id  = Column(Integer,  ForeignKey("influencers.id", ondelete="CASCADE"),
                            nullable=False, index=True)
    platform       = Column(PlatformType, nullable=False)
    username       = Column(Text,     nullable=False)
    url            = Column(Text,     nullable=False)
    follower_count = Column(Integer)
    created_at     = Column(DateTime, nullable=False, default=utcnow)

    influencer = relationship("Influencer", back_populates="social_media_accounts")


class Sponsor(Base):
    __tablename__ = "sponsors"

    id            = Column(Integer,  primary_key=True, index=True)
    company_name  = Column(Text,     nullable=False)
    contact_email = Column(String,   nullable=False, unique=True)
    contact_phone = Column(Text)
    industry      = Column(Text,     nullable=False)
    description   = Column(Text)
    created_at    = Column(DateTime, nullable=False, default=utcnow)
    updated_at    = Column(DateTime, nullable=False, default=utcnow)

    products  = relationship(
        "Product", back_populates="sponsor",
        cascade="all, delete", passive_deletes=True,
    )
    campaigns = relationship(
        "Campaign", back_populates="sponsor",
        cascade="all, delete", passive_deletes=True,
    )


class Product(Base):
    __tablename__ = "products"

    id              = Column(Integer,  primary_key=True, index=True)
    sponsor_id      = Column(Integer,  ForeignKey("sponsors.id", ondelete="CASCADE"),
                             nullable=False, index=True)
    name            = Column(Text,     nullable=False)
    description     = Column(Text)
    category        = Column(Text,     nullable=False)
    target_audience = Column(Text)
    created_at      = Column(DateTime, nullable=False, default=utcnow)
    updated_at      = Column(DateTime, nullable=False, default=utcnow)

    sponsor   = relationship("Sponsor", back_populates="products")
    campaigns = relationship(
        "Campaign", back_populates="product",
        cascade="all, delete", passive_deletes=True,
    )


class Campaign(Base):
    __tablename__ = "campaigns"

    id              = Column(Integer,  primary_key=True, index=True)
    sponsor_id      = Column(Integer,  ForeignKey("sponsors.id", ondelete="CASCADE"),
                             nullable=False, index=True)
    product_id      = Column(Integer,  ForeignKey("products.id", ondelete="CASCADE"),
                             nullable=False, index=True)
    title           = Column(Text,     nullable=False)
    description     = Column(Text)
    budget          = Column(Numeric(10, 2), nullable=False)
    target_audience = Column(Text)
    objectives      = Column(Text)
    status          = Column(StatusType, nullable=False, default=CampaignStatus.draft)
    start_date      = Column(DateTime)
    end_date        = Column(DateTime)
    created_at      = Column(DateTime, nullable=False, default=utcnow)
    updated_at      = Column(DateTime, nullable=False, default=utcnow)

    sponsor = relationship("Sponsor", back_populates="campaigns")
    product = relationship("Product", back_populates="campaigns")


class PerformanceIndicators(Base):
    __tablename__ = "performance_indicators"

    id                  = Column(Integer,  primary_key=True, index=True)
    influencer_id       = Column(Integer,  ForeignKey("influencers.id", ondelete="CASCADE"),
                                 nullable=False, index=True)
    platform            = Column(PlatformType, nullable=False)
    followers_count     = Column(Integer,  nullable=False)
    avg_views           = Column(Integer)
    avg_engagement_rate = Column(Numeric(5, 2))
    total_posts         = Column(Integer)
    last_updated        = Column(DateTime, nullable=False, default=utcnow)
    created_at          = Column(DateTime, nullable=False, default=utcnow)

    influencer = relationship("Influencer", back_populates="performance_indicators")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str):
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, pool_recycle=1800)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.endswith("://"):
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine       = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
