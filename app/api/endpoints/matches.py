from typing import Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import match_service
from app.schemas import match_schemas
from app.api.dependencies import get_db, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

@router.patch("/matches/{match_id}", response_model=match_schemas.MatchRead)
async def update_match_endpoint(
    match_id: int,
    match_in: match_schemas.MatchUpdate,
    db: Session = Depends(get_db),
):
    return match_service.update_match(db=db, match_id=match_id, match_update=match_in)

@router.post("/matches/{match_id}/goals", response_model=match_schemas.GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal_endpoint(
    match_id: int,
    goal_in: match_schemas.GoalCreate,
    db: Session = Depends(get_db),
):
    return match_service.create_goal(db=db, match_id=match_id, goal_in=goal_in)

@router.get("/matches/{match_id}/goals", response_model=Dict[str, List[match_schemas.GoalRead]])
async def list_goals_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
):
    return {"goals": match_service.list_goals(db=db, match_id=match_id)}

@router.delete("/goals/{goal_id}", response_model=match_schemas.GoalRead)
async def delete_goal_endpoint(
    goal_id: int,
    db: Session = Depends(get_db),
):
    return match_service.delete_goal(db=db, goal_id=goal_id)
