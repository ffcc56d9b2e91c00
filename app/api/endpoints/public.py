from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.services import match_service, team_service, tournament_service
from app.schemas import match_schemas, team_schemas, tournament_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("/tournaments", response_model=Dict[str, List[tournament_schemas.TournamentRead]])
async def list_tournaments_endpoint(db: Session = Depends(get_db)):
    return {"tournaments": tournament_service.list_tournaments(db=db)}

@router.get("/tournaments/{tournament_id}", response_model=tournament_schemas.TournamentWithWaitingPool)
async def get_tournament_endpoint(tournament_id: int, db: Session = Depends(get_db)):
    return tournament_service.get_tournament_with_waiting_pool(db=db, tournament_id=tournament_id)

@router.get("/teams", response_model=Dict[str, List[team_schemas.TeamWithMembers]])
async def list_teams_endpoint(tournament_id: int, db: Session = Depends(get_db)):
    return {"teams": team_service.list_teams(db=db, tournament_id=tournament_id)}

@router.get("/bracket", response_model=Dict[str, List[match_schemas.BracketMatch]])
async def get_bracket_endpoint(tournament_id: int, db: Session = Depends(get_db)):
    return {"matches": match_service.list_bracket(db=db, tournament_id=tournament_id)}

@router.get("/home", response_model=Dict[str, Optional[tournament_schemas.LatestWinner]])
async def home_endpoint(db: Session = Depends(get_db)):
    return {"winner": tournament_service.get_latest_winner(db=db)}

@router.get("/info")
async def info_endpoint():
    return {"message": "Five-a-side Tournament API", "version": "0.1.0"}
