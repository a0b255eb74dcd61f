# api/sponsors.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import crud, schemas
from .dependencies import get_db

router = APIRouter(tags=["sponsors"])


@router.post("/create_sponsor", response_model=schemas.Sponsor)
def create_sponsor(payload: schemas.CreateSponsorInput, db: Session = Depends(get_db)):
    return crud.create_sponsor(db, payload)


@router.get("/get_sponsors", response_model=list[schemas.Sponsor])
def get_sponsors(db: Session = Depends(get_db)):
    return crud.get_sponsors(db)


@router.get("/get_sponsor_by_id", response_model=Optional[schemas.Sponsor])
def get_sponsor_by_id(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_sponsor_by_id(db, id)


@router.post("/update_sponsor", response_model=schemas.Sponsor)
def update_sponsor(payload: schemas.UpdateSponsorInput, db: Session = Depends(get_db)):
    return crud.update_sponsor(db, payload)


# Products
@router.post("/create_product", response_model=schemas.Product)
def create_product(payload: schemas.CreateProductInput, db: Session = Depends(get_db)):
    return crud.create_product(db, payload)


@router.get("/get_products", response_model=list[schemas.Product])
def get_products(db: Session = Depends(get_db)):
    return crud.get_products(db)


@router.get("/get_products_by_sponsor", response_model=list[schemas.Product])
def get_products_by_sponsor(id: int = Query(...), db: Session = Depends(get_db)):
    return crud.get_products_by_sponsor(db, id)
