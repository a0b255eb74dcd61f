#!/usr/bin/env python3
# etl/seed_ingest.py
import argparse
import json
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from sqlalchemy.orm import Session

from api import crud
from api.models import SessionLocal, init_db
from api.schemas import (
    CreateCampaignInput, CreateInfluencerInput, CreatePerformanceIndicatorsInput,
    CreateProductInput, CreateSocialMediaAccountInput, CreateSponsorInput,
)


def load_seed(db: Session, cfg: dict) -> dict:
    """
    Insert a seed document through the regular handlers.

    Campaigns refer to their sponsor by `sponsor` (contact email) and to their
    product by `product` (name), since ids only exist once rows are written.
    """
    counts = dict.fromkeys(
        ("sponsors", "products", "influencers", "social_media_accounts",
         "performance_indicators", "campaigns"), 0
    )
    sponsors = {}
    products = {}

    for entry in cfg.get("sponsors") or []:
        entry = dict(entry)
        product_entries = entry.pop("products", None) or []
        sponsor = crud.create_sponsor(db, CreateSponsorInput(**entry))
        sponsors[sponsor.contact_email] = sponsor
        counts["sponsors"] += 1

        for prod in product_entries:
            product = crud.create_product(
                db, CreateProductInput(sponsor_id=sponsor.id, **prod)
            )
            products[(sponsor.id, product.name)] = product
            counts["products"] += 1

    for entry in cfg.get("influencers") or []:
        entry = dict(entry)
        accounts = entry.pop("social_media_accounts", None) or []
        metrics  = entry.pop("performance_indicators", None) or []
        influencer = crud.create_influencer(db, CreateInfluencerInput(**entry))
        counts["influencers"] += 1

        for acct in accounts:
            crud.create_social_media_account(
                db, CreateSocialMediaAccountInput(influencer_id=influencer.id, **acct)
            )
            counts["social_media_accounts"] += 1
        for row in metrics:
            crud.create_performance_indicators(
                db, CreatePerformanceIndicatorsInput(influencer_id=influencer.id, **row)
            )
            counts["performance_indicators"] += 1

    for entry in cfg.get("campaigns") or []:
        entry = dict(entry)
        sponsor_email = entry.pop("sponsor")
        product_name  = entry.pop("product")
        sponsor = sponsors.get(sponsor_email)
        if sponsor is None:
            raise KeyError(f"Campaign '{entry.get('title')}' names unknown sponsor {sponsor_email}")
        product = products.get((sponsor.id, product_name))
        if product is None:
            raise KeyError(f"Campaign '{entry.get('title')}' names unknown product {product_name}")

        crud.create_campaign(
            db, CreateCampaignInput(sponsor_id=sponsor.id, product_id=product.id, **entry)
        )
        counts["campaigns"] += 1

    return counts


def main(config_path: str, dry_run: bool = False) -> None:
    cfg = yaml.safe_load(Path(config_path).read_text())
    if dry_run:
        print(json.dumps(cfg, indent=2, default=str))
        return

    init_db()
    db = SessionLocal()
    try:
        counts = load_seed(db, cfg)
    finally:
        db.close()

    for table, n in counts.items():
        print(f"  • {table}: {n}")
    print(f"✅ Seeded marketplace from {config_path}")


if __name__ == "__main__":
    load_dotenv()

    p = argparse.ArgumentParser(description="Load sponsors, influencers and campaigns from YAML")
    p.add_argument("config", nargs="?", default="config/seed.yaml", help="Seed file")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the parsed seed file instead of inserting into DB"
    )
    args = p.parse_args()

    if not Path(args.config).exists():
        sys.exit(f"Seed file not found: {args.config}")
    main(args.config, dry_run=args.dry_run)
