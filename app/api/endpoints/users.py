from typing import Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import auth_service
from app.schemas import user_schemas
from app.api.dependencies import get_db, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

@router.post("/players", response_model=user_schemas.PlayerCreated, status_code=status.HTTP_201_CREATED)
async def create_player_endpoint(
    player_in: user_schemas.PlayerCreate,
    db: Session = Depends(get_db),
):
    user, generated_password = auth_service.create_player(db=db, player_in=player_in)
    return user_schemas.PlayerCreated(
        user=user_schemas.UserRead.model_validate(user),
        generated_password=generated_password,
    )

@router.get("/players", response_model=Dict[str, List[user_schemas.UserRead]])
async def list_players_endpoint(
    db: Session = Depends(get_db),
):
    return {"players": auth_service.list_players(db=db)}
