"""Leaderboard Router - public standings (registered teams only)."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from domain.contest import leaderboard
from .admin import StandingResponse, standings_response

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=List[StandingResponse])
def public_leaderboard(db: Session = Depends(get_db)):
    return standings_response(leaderboard.rank(db))


__all__ = ["router"]
