# app/api/v1/profile.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.crud.profile import profile_crud
from app.models.user import User
from app.schemas.profile import ProfileOut, ProfileUpdate
from app.services.portfolio import profile_for

router = APIRouter()

@router.get("/profile", response_model=ProfileOut)
def read_my_profile(user: User = Depends(get_current_user)):
    return profile_for(user)

@router.put("/profile", response_model=ProfileOut)
def update_my_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ProfileOut.model_validate(profile_crud.upsert(db, user.id, body))
