from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.db.database import get_db
from app.models.schemas import MatchCreate, MatchResponse
from app.services.user_service import MatchService

router = APIRouter(
    prefix="/api/matches",
    tags=["matches"],
    responses={404: {"description": "Not found"}},
)

@router.get("/", response_model=List[MatchResponse])
def get_all_matches(db: Session = Depends(get_db)):
    return MatchService(db).list_matches()

@router.post("/", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
def create_match(match_data: MatchCreate, db: Session = Depends(get_db)):
    """Record a pairing between two existing users."""
    return MatchService(db).create_match(match_data)

@router.get("/{match_id}", response_model=MatchResponse)
def get_match(match_id: int, db: Session = Depends(get_db)):
    return MatchService(db).get_match(match_id)
