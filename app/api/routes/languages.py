from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.db.database import get_db
from app.models.schemas import UserLanguageCreate, UserLanguageResponse
from app.services.user_service import LanguageService

router = APIRouter(
    prefix="/api/languages",
    tags=["languages"],
    responses={404: {"description": "Not found"}},
)

@router.get("/", response_model=List[UserLanguageResponse])
def get_all_languages(db: Session = Depends(get_db)):
    return LanguageService(db).list_languages()

@router.get("/user/{user_id}", response_model=List[UserLanguageResponse])
def get_user_languages(user_id: int, db: Session = Depends(get_db)):
    return LanguageService(db).list_for_user(user_id)

@router.post("/", response_model=UserLanguageResponse, status_code=status.HTTP_201_CREATED)
def add_language(language_data: UserLanguageCreate, db: Session = Depends(get_db)):
    return LanguageService(db).add_language(language_data)

@router.delete("/{language_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_language(language_id: int, db: Session = Depends(get_db)):
    LanguageService(db).delete_language(language_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
