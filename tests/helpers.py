import unittest
from itertools import count

from sqlalchemy.orm import sessionmaker

from api import crud
from api.models import build_engine, init_db
from api.schemas import (
    CreateCampaignInput, CreateInfluencerInput, CreatePerformanceIndicatorsInput,
    CreateProductInput, CreateSocialMediaAccountInput, CreateSponsorInput,
)

_seq = count(1)


class DbTestCase(unittest.TestCase):
    """
    Runs each test against a fresh in-memory SQLite database built with the
    same engine factory the service uses.
    """

    def setUp(self):
        self.engine = build_engine("sqlite+pysqlite:///:memory:")
        init_db(self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db = self.Session()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def make_influencer(self, **fields):
        n = next(_seq)
        data = {"name": f"Creator {n}", "email": f"creator{n}@example.com"}
        data.update(fields)
        return crud.create_influencer(self.db, CreateInfluencerInput(**data))

    def make_account(self, influencer, platform="instagram", **fields):
        data = {
            "influencer_id": influencer.id,
            "platform": platform,
            "username": f"user_{influencer.id}_{platform}",
            "url": f"https://{platform}.com/user_{influencer.id}",
        }
        data.update(fields)
        return crud.create_social_media_account(self.db, CreateSocialMediaAccountInput(**data))

    def make_metrics(self, influencer, platform="instagram", followers_count=1000, **fields):
        data = {
            "influencer_id": influencer.id,
            "platform": platform,
            "followers_count": followers_count,
        }
        data.update(fields)
        return crud.create_performance_indicators(
            self.db, CreatePerformanceIndicatorsInput(**data)
        )

    def make_sponsor(self, **fields):
        n = next(_seq)
        data = {
            "company_name": f"Company {n}",
            "contact_email": f"brand{n}@example.com",
            "industry": "Retail",
        }
        data.update(fields)
        return crud.create_sponsor(self.db, CreateSponsorInput(**data))

    def make_product(self, sponsor, **fields):
        data = {"sponsor_id": sponsor.id, "name": "Widget", "category": "gadgets"}
        data.update(fields)
        return crud.create_product(self.db, CreateProductInput(**data))

    def make_campaign(self, sponsor, product, **fields):
        data = {
            "sponsor_id": sponsor.id,
            "product_id": product.id,
            "title": "Launch",
            "budget": 1000,
        }
        data.update(fields)
        return crud.create_campaign(self.db, CreateCampaignInput(**data))
