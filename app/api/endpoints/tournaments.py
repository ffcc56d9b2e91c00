from typing import Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import match_service, team_service, tournament_service
from app.schemas import match_schemas, tournament_schemas
from app.api.dependencies import get_db, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

def _generated_bracket(db: Session, tournament_id: int) -> match_schemas.GeneratedBracket:
    return match_schemas.GeneratedBracket(
        teams=team_service.list_teams(db=db, tournament_id=tournament_id),
        matches=match_service.list_bracket(db=db, tournament_id=tournament_id),
    )

@router.post("/tournaments", response_model=tournament_schemas.TournamentRead, status_code=status.HTTP_201_CREATED)
async def create_tournament_endpoint(
    tournament_in: tournament_schemas.TournamentCreate,
    db: Session = Depends(get_db),
):
    return tournament_service.create_tournament(db=db, tournament=tournament_in)

@router.get("/tournaments", response_model=Dict[str, List[tournament_schemas.TournamentRead]])
async def list_tournaments_endpoint(
    db: Session = Depends(get_db),
):
    return {"tournaments": tournament_service.list_tournaments(db=db)}

@router.patch("/tournaments/{tournament_id}", response_model=tournament_schemas.TournamentRead)
async def update_tournament_endpoint(
    tournament_id: int,
    tournament_in: tournament_schemas.TournamentUpdate,
    db: Session = Depends(get_db),
):
    return tournament_service.update_tournament(db=db, tournament_id=tournament_id, tournament_update=tournament_in)

@router.post("/tournaments/{tournament_id}/generate-teams", response_model=match_schemas.GeneratedBracket)
async def generate_teams_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
):
    tournament_service.generate_teams_and_bracket(db=db, tournament_id=tournament_id, regenerate=False)
    return _generated_bracket(db, tournament_id)

@router.post("/tournaments/{tournament_id}/regenerate-teams", response_model=match_schemas.GeneratedBracket)
async def regenerate_teams_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
):
    tournament_service.generate_teams_and_bracket(db=db, tournament_id=tournament_id, regenerate=True)
    return _generated_bracket(db, tournament_id)
