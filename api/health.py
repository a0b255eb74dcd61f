# api/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from . import crud
from .dependencies import get_db
from .schemas import DashboardStats, HealthStatus

router = APIRouter(tags=["health"])


@router.get("/healthcheck", response_model=HealthStatus)
def healthcheck():
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


@router.get("/dashboard_stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    """Counts for the client dashboard, recomputed on every call."""
    return crud.get_dashboard_stats(db)
