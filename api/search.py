# api/search.py
"""
Discovery queries for influencers and campaigns.

Each search is described by a table of filters. An entry names the input
field, the tables the predicate needs joined in, and a factory producing the
predicate from the supplied value. A query joins only the union of the tables
required by the filters actually supplied, then ANDs all predicates together.
"""
from typing import Callable, NamedTuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from . import schemas
from .crud import logged, to_contract, to_decimal
from .models import Campaign, Influencer, PerformanceIndicators, Product, SocialMediaAccount


class Filter(NamedTuple):
    field: str
    joins: tuple
    predicate: Callable


def _supplied(value) -> bool:
    return value is not None and value != ""


def _build_query(db: Session, root, filters, join_on, params, dedupe: bool):
    """
    Compile `params` against a filter table into a single query on `root`.

    `join_on` maps each joinable table to its ON clause and fixes the order in
    which joins are emitted. With `dedupe`, a joined query is grouped on the
    root's columns so one-to-many joins do not repeat root rows.
    """
    active = [(f, getattr(params, f.field)) for f in filters if _supplied(getattr(params, f.field))]
    needed = {table for f, _ in active for table in f.joins}

    q = db.query(root)
    for table, on_clause in join_on.items():
        if table in needed:
            q = q.join(table, on_clause)

    if active:
        q = q.filter(and_(*(f.predicate(value) for f, value in active)))
    if dedupe and needed:
        q = q.group_by(*root.__table__.columns)

    return q.order_by(root.id).limit(params.limit).offset(params.offset)


# ————————————————
# Influencers
# ————————————————
def _matches_category(value):
    pattern = f"%{value}%"
    return or_(
        Influencer.bio.ilike(pattern),
        Influencer.portfolio_description.ilike(pattern),
    )


INFLUENCER_FILTERS = (
    Filter("category",            (PerformanceIndicators, SocialMediaAccount), _matches_category),
    Filter("min_followers",       (PerformanceIndicators,), lambda v: PerformanceIndicators.followers_count >= v),
    Filter("max_followers",       (PerformanceIndicators,), lambda v: PerformanceIndicators.followers_count <= v),
    Filter("platform",            (SocialMediaAccount,),    lambda v: SocialMediaAccount.platform == v),
    Filter("min_engagement_rate", (PerformanceIndicators,),
           lambda v: PerformanceIndicators.avg_engagement_rate >= to_decimal(v)),
)

INFLUENCER_JOINS = {
    SocialMediaAccount:    SocialMediaAccount.influencer_id == Influencer.id,
    PerformanceIndicators: PerformanceIndicators.influencer_id == Influencer.id,
}


@logged("Influencer search")
def search_influencers(db: Session, params: schemas.SearchInfluencersInput) -> list[schemas.Influencer]:
    q = _build_query(db, Influencer, INFLUENCER_FILTERS, INFLUENCER_JOINS, params, dedupe=True)
    return to_contract(schemas.Influencer, q.all())


# ————————————————
# Campaigns
# ————————————————
CAMPAIGN_FILTERS = (
    Filter("category",   (Product,), lambda v: Product.category == v),
    Filter("min_budget", (),         lambda v: Campaign.budget >= to_decimal(v)),
    Filter("max_budget", (),         lambda v: Campaign.budget <= to_decimal(v)),
    Filter("status",     (),         lambda v: Campaign.status == v),
    Filter("sponsor_id", (),         lambda v: Campaign.sponsor_id == v),
)

CAMPAIGN_JOINS = {
    Product: Product.id == Campaign.product_id,
}


@logged("Campaign search")
def search_campaigns(db: Session, params: schemas.SearchCampaignsInput) -> list[schemas.Campaign]:
    # each campaign has exactly one product, so the join never repeats rows
    q = _build_query(db, Campaign, CAMPAIGN_FILTERS, CAMPAIGN_JOINS, params, dedupe=False)
    return to_contract(schemas.Campaign, q.all())
