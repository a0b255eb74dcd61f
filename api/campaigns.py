# api/campaigns.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import crud, schemas
from .dependencies import get_db
from .search import search_campaigns as run_campaign_search

router = APIRouter(tags=["campaigns"])


@router.post("/create_campaign", response_model=schemas.Campaign)
def create_campaign(payload: schemas.CreateCampaignInput, db: Session = Depends(get_db)):
    return crud.create_campaign(db, payload)


@router.get("/get_campaigns", response_model=list[schemas.Campaign])
def get_campaigns(db: Session = Depends(get_db)):
    return crud.get_campaigns(db)


@router.get("/get_campaign_by_id", response_model=Optional[schemas.Campaign])
def get_campaign_by_id(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_campaign_by_id(db, id)


@router.post("/update_campaign", response_model=schemas.Campaign)
def update_campaign(payload: schemas.UpdateCampaignInput, db: Session = Depends(get_db)):
    return crud.update_campaign(db, payload)


@router.post("/search_campaigns", response_model=list[schemas.Campaign])
def search_campaigns(payload: schemas.SearchCampaignsInput, db: Session = Depends(get_db)):
    return run_campaign_search(db, payload)
