from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.services import team_service
from app.schemas import team_schemas
from app.api.dependencies import get_db, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

@router.post("/teams", response_model=team_schemas.TeamRead, status_code=status.HTTP_201_CREATED)
async def create_team_endpoint(
    team_in: team_schemas.TeamCreate,
    db: Session = Depends(get_db),
):
    return team_service.create_team(db=db, team_in=team_in)

@router.patch("/teams/{team_id}", response_model=team_schemas.TeamRead)
async def update_team_endpoint(
    team_id: int,
    team_in: team_schemas.TeamUpdate,
    db: Session = Depends(get_db),
):
    return team_service.update_team(db=db, team_id=team_id, team_update=team_in)

@router.post("/teams/{team_id}/add-player", response_model=team_schemas.AddPlayerResult)
async def add_player_endpoint(
    team_id: int,
    request: team_schemas.AddPlayerRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    added = team_service.add_player_to_team(db=db, team_id=team_id, user_id=request.user_id)
    response.status_code = status.HTTP_201_CREATED if added else status.HTTP_200_OK
    return {"added": added}

@router.get("/teams", response_model=Dict[str, List[team_schemas.TeamWithMembers]])
async def list_teams_endpoint(
    tournament_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return {"teams": team_service.list_teams(db=db, tournament_id=tournament_id)}
