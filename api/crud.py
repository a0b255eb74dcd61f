# api/crud.py
import functools
import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import schemas
from .errors import NotFoundError, ReferentialIntegrityError
from .models import (
    Campaign, CampaignStatus, Influencer, PerformanceIndicators, Product,
    SocialMediaAccount, Sponsor, utcnow,
)

logger = logging.getLogger(__name__)


def logged(action: str):
    """Roll back, log and re-raise any persistence error raised by a handler."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return fn(db, *args, **kwargs)
            except SQLAlchemyError:
                db.rollback()
                logger.exception("%s failed", action)
                raise
        return wrapper
    return decorator


def to_decimal(value) -> Optional[Decimal]:
    # str() first so 1234.56 is stored as 1234.56, not its binary expansion
    return None if value is None else Decimal(str(value))


def touch(row) -> None:
    """Refresh updated_at, never letting it stand still or go backwards."""
    now = utcnow()
    if row.updated_at is not None and now <= row.updated_at:
        now = row.updated_at + timedelta(microseconds=1)
    row.updated_at = now


def to_contract(schema, row):
    """Coerce a row, or a list of rows, into its output model. None stays None."""
    if row is None:
        return None
    if isinstance(row, list):
        return [schema.model_validate(r) for r in row]
    return schema.model_validate(row)


def _save(db: Session, row):
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _update(db: Session, model, data, label: str, converters=None):
    changes = data.model_dump(exclude_unset=True)
    row_id = changes.pop("id")

    row = db.get(model, row_id)
    if row is None:
        raise NotFoundError(f"{label} with id {row_id} not found")

    for field, value in changes.items():
        if converters and field in converters:
            value = converters[field](value)
        setattr(row, field, value)
    touch(row)

    db.commit()
    db.refresh(row)
    logger.info("Updated %s #%s (%s)", label.lower(), row_id, ", ".join(changes) or "timestamp only")
    return row


# ————————————————
# Influencers
# ————————————————
@logged("Influencer creation")
def create_influencer(db: Session, data: schemas.CreateInfluencerInput) -> schemas.Influencer:
    now = utcnow()
    inst = Influencer(
        name=data.name,
        email=data.email,
        phone=data.phone or None,
        bio=data.bio or None,
        portfolio_description=data.portfolio_description or None,
        created_at=now,
        updated_at=now,
    )
    _save(db, inst)
    logger.info("Created influencer #%s", inst.id)
    return to_contract(schemas.Influencer, inst)


@logged("Fetching influencers")
def get_influencers(db: Session) -> list[schemas.Influencer]:
    rows = db.query(Influencer).order_by(Influencer.id).all()
    return to_contract(schemas.Influencer, rows)


@logged("Fetching influencer by id")
def get_influencer_by_id(db: Session, id: int) -> Optional[schemas.Influencer]:
    return to_contract(schemas.Influencer, db.get(Influencer, id))


@logged("Influencer update")
def update_influencer(db: Session, data: schemas.UpdateInfluencerInput) -> schemas.Influencer:
    row = _update(db, Influencer, data, "Influencer")
    return to_contract(schemas.Influencer, row)


# ————————————————
# Social media accounts
# ————————————————
@logged("Social media account creation")
def create_social_media_account(
    db: Session, data: schemas.CreateSocialMediaAccountInput
) -> schemas.SocialMediaAccount:
    if db.get(Influencer, data.influencer_id) is None:
        raise ReferentialIntegrityError(
            f"Influencer with id {data.influencer_id} not found"
        )

    inst = SocialMediaAccount(
        influencer_id=data.influencer_id,
        platform=data.platform,
        username=data.username,
        url=data.url,
        follower_count=data.follower_count,
        created_at=utcnow(),
    )
    _save(db, inst)
    logger.info("Linked %s account #%s to influencer #%s",
                inst.platform.value, inst.id, inst.influencer_id)
    return to_contract(schemas.SocialMediaAccount, inst)


@logged("Fetching social media accounts")
def get_social_media_accounts_by_influencer(
    db: Session, influencer_id: int
) -> list[schemas.SocialMediaAccount]:
    rows = (
        db.query(SocialMediaAccount)
          .filter(SocialMediaAccount.influencer_id == influencer_id)
          .order_by(SocialMediaAccount.id)
          .all()
    )
    return to_contract(schemas.SocialMediaAccount, rows)


# ————————————————
# Sponsors
# ————————————————
@logged("Sponsor creation")
def create_sponsor(db: Session, data: schemas.CreateSponsorInput) -> schemas.Sponsor:
    now = utcnow()
    inst = Sponsor(
        company_name=data.company_name,
        contact_email=data.contact_email,
        contact_phone=data.contact_phone or None,
        industry=data.industry,
        description=data.description or None,
        created_at=now,
        updated_at=now,
    )
    _save(db, inst)
    logger.info("Created sponsor #%s", inst.id)
    return to_contract(schemas.Sponsor, inst)


@logged("Fetching sponsors")
def get_sponsors(db: Session) -> list[schemas.Sponsor]:
    rows = db.query(Sponsor).order_by(Sponsor.id).all()
    return to_contract(schemas.Sponsor, rows)


@logged("Fetching sponsor by id")
def get_sponsor_by_id(db: Session, id: int) -> Optional[schemas.Sponsor]:
    return to_contract(schemas.Sponsor, db.get(Sponsor, id))


@logged("Sponsor update")
def update_sponsor(db: Session, data: schemas.UpdateSponsorInput) -> schemas.Sponsor:
    row = _update(db, Sponsor, data, "Sponsor")
    return to_contract(schemas.Sponsor, row)


# ————————————————
# Products
# ————————————————
@logged("Product creation")
def create_product(db: Session, data: schemas.CreateProductInput) -> schemas.Product:
    if db.get(Sponsor, data.sponsor_id) is None:
        raise ReferentialIntegrityError(f"Sponsor with id {data.sponsor_id} not found")

    now = utcnow()
    inst = Product(
        sponsor_id=data.sponsor_id,
        name=data.name,
        description=data.description or None,
        category=data.category,
        target_audience=data.target_audience or None,
        created_at=now,
        updated_at=now,
    )
    _save(db, inst)
    logger.info("Created product #%s for sponsor #%s", inst.id, inst.sponsor_id)
    return to_contract(schemas.Product, inst)


@logged("Fetching products")
def get_products(db: Session) -> list[schemas.Product]:
    rows = db.query(Product).order_by(Product.id).all()
    return to_contract(schemas.Product, rows)


@logged("Fetching products by sponsor")
def get_products_by_sponsor(db: Session, sponsor_id: int) -> list[schemas.Product]:
    rows = (
        db.query(Product)
          .filter(Product.sponsor_id == sponsor_id)
          .order_by(Product.id)
          .all()
    )
    return to_contract(schemas.Product, rows)


# ————————————————
# Campaigns
# ————————————————
@logged("Campaign creation")
def create_campaign(db: Session, data: schemas.CreateCampaignInput) -> schemas.Campaign:
    if db.get(Sponsor, data.sponsor_id) is None:
        raise ReferentialIntegrityError(f"Sponsor with id {data.sponsor_id} not found")

    product = db.get(Product, data.product_id)
    if product is None:
        raise ReferentialIntegrityError(f"Product with id {data.product_id} not found")
    if product.sponsor_id != data.sponsor_id:
        raise ReferentialIntegrityError(
            f"Product {data.product_id} does not belong to sponsor {data.sponsor_id}"
        )

    now = utcnow()
    inst = Campaign(
        sponsor_id=data.sponsor_id,
        product_id=data.product_id,
        title=data.title,
        description=data.description or None,
        budget=to_decimal(data.budget),
        target_audience=data.target_audience or None,
        objectives=data.objectives or None,
        status=data.status or CampaignStatus.draft,
        start_date=data.start_date,
        end_date=data.end_date,
        created_at=now,
        updated_at=now,
    )
    _save(db, inst)
    logger.info("Created campaign #%s for sponsor #%s", inst.id, inst.sponsor_id)
    return to_contract(schemas.Campaign, inst)


@logged("Fetching campaigns")
def get_campaigns(db: Session) -> list[schemas.Campaign]:
    rows = db.query(Campaign).order_by(Campaign.id).all()
    return to_contract(schemas.Campaign, rows)


@logged("Fetching campaign by id")
def get_campaign_by_id(db: Session, id: int) -> Optional[schemas.Campaign]:
    return to_contract(schemas.Campaign, db.get(Campaign, id))


@logged("Campaign update")
def update_campaign(db: Session, data: schemas.UpdateCampaignInput) -> schemas.Campaign:
    # status is a free-form tag: any value may follow any other
    row = _update(db, Campaign, data, "Campaign", converters={"budget": to_decimal})
    return to_contract(schemas.Campaign, row)


# ————————————————
# Performance indicators
# ————————————————
@logged("Performance indicators creation")
def create_performance_indicators(
    db: Session, data: schemas.CreatePerformanceIndicatorsInput
) -> schemas.PerformanceIndicators:
    if db.get(Influencer, data.influencer_id) is None:
        raise ReferentialIntegrityError(
            f"Influencer with id {data.influencer_id} not found"
        )

    now = utcnow()
    inst = PerformanceIndicators(
        influencer_id=data.influencer_id,
        platform=data.platform,
        followers_count=data.followers_count,
        avg_views=data.avg_views,
        avg_engagement_rate=to_decimal(data.avg_engagement_rate),
        total_posts=data.total_posts,
        last_updated=now,
        created_at=now,
    )
    _save(db, inst)
    logger.info("Recorded %s metrics for influencer #%s",
                inst.platform.value, inst.influencer_id)
    return to_contract(schemas.PerformanceIndicators, inst)


@logged("Fetching performance indicators")
def get_performance_indicators_by_influencer(
    db: Session, influencer_id: int
) -> list[schemas.PerformanceIndicators]:
    rows = (
        db.query(PerformanceIndicators)
          .filter(PerformanceIndicators.influencer_id == influencer_id)
          .order_by(PerformanceIndicators.id)
          .all()
    )
    return to_contract(schemas.PerformanceIndicators, rows)


# ————————————————
# Dashboard
# ————————————————
@logged("Computing dashboard stats")
def get_dashboard_stats(db: Session) -> schemas.DashboardStats:
    def count(model, *criteria):
        return db.query(func.count(model.id)).filter(*criteria).scalar() or 0

    return schemas.DashboardStats(
        influencers=count(Influencer),
        sponsors=count(Sponsor),
        campaigns=count(Campaign),
        active_campaigns=count(Campaign, Campaign.status == CampaignStatus.active),
    )
