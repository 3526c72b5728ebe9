from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.db.database import get_db
from app.models.schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from app.services.user_service import ProfileService

router = APIRouter(
    prefix="/api/profiles",
    tags=["profiles"],
    responses={404: {"description": "Not found"}},
)

@router.get("/", response_model=List[ProfileResponse])
def get_all_profiles(db: Session = Depends(get_db)):
    return ProfileService(db).list_profiles()

@router.post("/", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def add_profile(profile_data: ProfileCreate, db: Session = Depends(get_db)):
    return ProfileService(db).create_profile(profile_data)

@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(profile_id: int, db: Session = Depends(get_db)):
    return ProfileService(db).get_profile(profile_id)

@router.put("/{profile_id}", response_model=ProfileResponse)
def update_profile(profile_id: int, profile_data: ProfileUpdate, db: Session = Depends(get_db)):
    """Replace every editable field of a profile with the values sent."""
    return ProfileService(db).update_profile(profile_id, profile_data)
