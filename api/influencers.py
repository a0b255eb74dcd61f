# api/influencers.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import crud, schemas
from .dependencies import get_db
from .search import search_influencers as run_influencer_search

router = APIRouter(tags=["influencers"])


@router.post("/create_influencer", response_model=schemas.Influencer)
def create_influencer(payload: schemas.CreateInfluencerInput, db: Session = Depends(get_db)):
    return crud.create_influencer(db, payload)


@router.get("/get_influencers", response_model=list[schemas.Influencer])
def get_influencers(db: Session = Depends(get_db)):
    return crud.get_influencers(db)


@router.get("/get_influencer_by_id", response_model=Optional[schemas.Influencer])
def get_influencer_by_id(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_influencer_by_id(db, id)


@router.post("/update_influencer", response_model=schemas.Influencer)
def update_influencer(payload: schemas.UpdateInfluencerInput, db: Session = Depends(get_db)):
    return crud.update_influencer(db, payload)


@router.post("/search_influencers", response_model=list[schemas.Influencer])
def search_influencers(payload: schemas.SearchInfluencersInput, db: Session = Depends(get_db)):
    return run_influencer_search(db, payload)


# Social media accounts
@router.post("/create_social_media_account", response_model=schemas.SocialMediaAccount)
def create_social_media_account(
    payload: schemas.CreateSocialMediaAccountInput, db: Session = Depends(get_db)
):
    return crud.create_social_media_account(db, payload)


@router.get(
    "/get_social_media_accounts_by_influencer",
    response_model=list[schemas.SocialMediaAccount],
)
def get_social_media_accounts_by_influencer(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_social_media_accounts_by_influencer(db, id)


# Performance indicators
@router.post("/create_performance_indicators", response_model=schemas.PerformanceIndicators)
def create_performance_indicators(
    payload: schemas.CreatePerformanceIndicatorsInput, db: Session = Depends(get_db)
):
    return crud.create_performance_indicators(db, payload)


@router.get(
    "/get_performance_indicators_by_influencer",
    response_model=list[schemas.PerformanceIndicators],
)
def get_performance_indicators_by_influencer(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_performance_indicators_by_influencer(db, id)
