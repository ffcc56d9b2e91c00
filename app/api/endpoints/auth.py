from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import auth_service
from app.models import user as user_model
from app.schemas import auth_schemas, user_schemas
from app.api.dependencies import get_current_user, get_db

router = APIRouter()

@router.post("/register", response_model=auth_schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    request: auth_schemas.RegisterRequest,
    db: Session = Depends(get_db),
):
    return auth_service.register(db=db, request=request)

@router.post("/login", response_model=auth_schemas.AuthResponse)
async def login_endpoint(
    request: auth_schemas.LoginRequest,
    db: Session = Depends(get_db),
):
    return auth_service.login(db=db, request=request)

@router.get("/me", response_model=user_schemas.UserRead)
async def read_me_endpoint(
    current_user: user_model.User = Depends(get_current_user),
):
    return current_user
