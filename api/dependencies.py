# api/dependencies.py
from typing import Iterator

from sqlalchemy.orm import Session

from .models import SessionLocal


def get_db() -> Iterator[Session]:
    """One session per request, always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
