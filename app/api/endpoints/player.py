from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import registration_service
from app.models import user as user_model
from app.schemas import registration_schemas, user_schemas
from app.api.dependencies import get_current_user, get_db

router = APIRouter()

@router.post("/tournaments/{tournament_id}/register", response_model=registration_schemas.RegistrationStatusRead, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    registration_status = registration_service.register(db=db, tournament_id=tournament_id, user_id=current_user.id)
    return {"status": registration_status}

@router.post("/tournaments/{tournament_id}/unregister", response_model=registration_schemas.RegistrationStatusRead)
async def unregister_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    registration_status = registration_service.unregister(db=db, tournament_id=tournament_id, user_id=current_user.id)
    return {"status": registration_status}

@router.get("/profile", response_model=user_schemas.UserRead)
async def profile_endpoint(
    current_user: user_model.User = Depends(get_current_user),
):
    return current_user
