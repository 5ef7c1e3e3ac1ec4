from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from app_models import ServiceCategory, User
from routers.auth import get_current_user
from schemas import ServiceCategoryCreate, ServiceCategoryResponse
import crud

router = APIRouter(prefix="/api/service-categories", tags=["Service Categories"])


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    categories = db.query(ServiceCategory).order_by(ServiceCategory.name).all()
    return {
        "status": "success",
        "count": len(categories),
        "categories": [ServiceCategoryResponse.model_validate(c).model_dump() for c in categories],
    }


@router.post("", response_model=ServiceCategoryResponse)
def create_category(
    payload: ServiceCategoryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return crud.create_service_category(db, payload.name, payload.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
