from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from app_models import User, Profile
from routers.auth import get_current_user
from schemas import ProfileUpdate, ProfileResponse
import crud

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("")
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Caller's profile, or null when it was never saved"""
    profile = db.query(Profile).filter(Profile.id == user.id).first()
    return {
        "status": "success",
        "profile": ProfileResponse.model_validate(profile).model_dump() if profile else None,
    }


@router.put("")
def save_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        profile = crud.save_profile(db, user.id, payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "status": "success",
        "profile": ProfileResponse.model_validate(profile).model_dump(),
    }
