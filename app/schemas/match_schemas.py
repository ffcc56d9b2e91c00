from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.match import MatchType, MatchStatus
from app.models.team import TeamColor
from .team_schemas import TeamWithMembers

class TeamSummary(BaseModel):
    id: int
    name: str
    color: Optional[TeamColor] = None

    class Config:
        from_attributes = True

class MatchRead(BaseModel):
    id: int
    tournament_id: int
    match_type: MatchType
    team_a_id: Optional[int] = None
    team_b_id: Optional[int] = None
    score_a: int
    score_b: int
    status: MatchStatus

    class Config:
        from_attributes = True

class BracketMatch(BaseModel):
    id: int
    match_type: MatchType
    status: MatchStatus
    score_a: int
    score_b: int
    team_a: Optional[TeamSummary] = None
    team_b: Optional[TeamSummary] = None

    class Config:
        from_attributes = True

class MatchUpdate(BaseModel):
    score_a: Optional[int] = Field(None, ge=0)
    score_b: Optional[int] = Field(None, ge=0)
    status: Optional[MatchStatus] = None

class GoalCreate(BaseModel):
    scoring_team_id: int
    scoring_player_id: int
    assist_player_id: Optional[int] = None
    minute: Optional[int] = Field(None, ge=0)

class GoalRead(BaseModel):
    id: int
    match_id: int
    scoring_team_id: int
    scoring_player_id: int
    assist_player_id: Optional[int] = None
    minute: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

class GeneratedBracket(BaseModel):
    """Teams and bracket as they stand after a (re)generation."""
    teams: List[TeamWithMembers]
    matches: List[BracketMatch]
