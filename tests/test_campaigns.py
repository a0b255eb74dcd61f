import unittest
from datetime import datetime

from api import crud
from api.errors import NotFoundError, ReferentialIntegrityError
from api.schemas import CreateCampaignInput, SearchCampaignsInput, UpdateCampaignInput
from api.search import search_campaigns
from tests.helpers import DbTestCase


class CreateCampaignTests(DbTestCase):
    def setUp(self):
        super().setUp()
        self.sponsor = self.make_sponsor()
        self.product = self.make_product(self.sponsor, category="fitness")

    def _input(self, **fields):
        data = {
            "sponsor_id": self.sponsor.id,
            "product_id": self.product.id,
            "title": "Spring push",
            "budget": 1234.56,
        }
        data.update(fields)
        return CreateCampaignInput(**data)

    def test_defaults(self):
        campaign = crud.create_campaign(self.db, self._input())
        self.assertEqual(campaign.status.value, "draft")
        self.assertIsNone(campaign.description)
        self.assertIsNone(campaign.objectives)
        self.assertIsNone(campaign.start_date)
        self.assertEqual(campaign.created_at, campaign.updated_at)

    def test_dates_are_kept(self):
        start = datetime(2025, 3, 1, 9, 0)
        end = datetime(2025, 4, 1, 9, 0)
        campaign = crud.create_campaign(self.db, self._input(start_date=start, end_date=end))
        self.assertEqual(campaign.start_date, start)
        self.assertEqual(campaign.end_date, end)

    def test_budget_is_a_number_on_every_read_path(self):
        created = crud.create_campaign(self.db, self._input())
        self.assertIsInstance(created.budget, float)
        self.assertEqual(created.budget, 1234.56)

        self.assertEqual(crud.get_campaign_by_id(self.db, created.id).budget, 1234.56)
        self.assertEqual(crud.get_campaigns(self.db)[0].budget, 1234.56)
        self.assertEqual(search_campaigns(self.db, SearchCampaignsInput())[0].budget, 1234.56)

        updated = crud.update_campaign(self.db, UpdateCampaignInput(id=created.id, title="Renamed"))
        self.assertIsInstance(updated.budget, float)
        self.assertEqual(updated.budget, 1234.56)

    def test_missing_sponsor_is_checked_first(self):
        with self.assertRaises(ReferentialIntegrityError) as ctx:
            crud.create_campaign(self.db, self._input(sponsor_id=999, product_id=888))
        self.assertIn("Sponsor with id 999 not found", str(ctx.exception))

    def test_missing_product(self):
        with self.assertRaises(ReferentialIntegrityError) as ctx:
            crud.create_campaign(self.db, self._input(product_id=888))
        self.assertIn("Product with id 888 not found", str(ctx.exception))

    def test_product_of_another_sponsor(self):
        other = self.make_sponsor()
        with self.assertRaises(ReferentialIntegrityError) as ctx:
            crud.create_campaign(self.db, self._input(sponsor_id=other.id))
        self.assertIn("does not belong to sponsor", str(ctx.exception))
        self.assertEqual(crud.get_campaigns(self.db), [])


class UpdateCampaignTests(DbTestCase):
    def setUp(self):
        super().setUp()
        sponsor = self.make_sponsor()
        self.campaign = self.make_campaign(sponsor, self.make_product(sponsor), objectives="Reach")

    def test_budget_update(self):
        updated = crud.update_campaign(self.db, UpdateCampaignInput(id=self.campaign.id, budget=2500.75))
        self.assertEqual(updated.budget, 2500.75)
        self.assertEqual(updated.title, self.campaign.title)
        self.assertEqual(updated.objectives, "Reach")
        self.assertGreater(updated.updated_at, self.campaign.updated_at)

    def test_any_status_may_follow_any_other(self):
        for status in ("completed", "draft", "cancelled", "active"):
            updated = crud.update_campaign(self.db, UpdateCampaignInput(id=self.campaign.id, status=status))
            self.assertEqual(updated.status.value, status)

    def test_explicit_null_clears_objectives(self):
        updated = crud.update_campaign(self.db, UpdateCampaignInput(id=self.campaign.id, objectives=None))
        self.assertIsNone(updated.objectives)

    def test_update_missing_campaign(self):
        with self.assertRaises(NotFoundError) as ctx:
            crud.update_campaign(self.db, UpdateCampaignInput(id=404, title="Nope"))
        self.assertIn("Campaign with id 404 not found", str(ctx.exception))


class DashboardStatsTests(DbTestCase):
    def test_counts_are_recomputed(self):
        self.assertEqual(crud.get_dashboard_stats(self.db).campaigns, 0)

        sponsor = self.make_sponsor()
        product = self.make_product(sponsor)
        self.make_campaign(sponsor, product, status="active")
        self.make_campaign(sponsor, product)
        self.make_influencer()

        stats = crud.get_dashboard_stats(self.db)
        self.assertEqual(stats.influencers, 1)
        self.assertEqual(stats.sponsors, 1)
        self.assertEqual(stats.campaigns, 2)
        self.assertEqual(stats.active_campaigns, 1)


if __name__ == "__main__":
    unittest.main()
