from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.tournament import TournamentStatus

class TournamentBase(BaseModel):
    name: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    start_time: Optional[datetime] = None

class TournamentCreate(TournamentBase):
    pass

class TournamentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    start_time: Optional[datetime] = None
    status: Optional[TournamentStatus] = None

class TournamentRead(TournamentBase):
    id: int
    format_snippet: str
    status: TournamentStatus
    max_teams: int
    players_per_team: int

    class Config:
        from_attributes = True

class WaitingPlayer(BaseModel):
    id: int
    full_name: str

    class Config:
        from_attributes = True

class TournamentWithWaitingPool(BaseModel):
    tournament: TournamentRead
    waiting_pool: List[WaitingPlayer]

class LatestWinner(BaseModel):
    headline: str
    hero_image_url: Optional[str] = None
    won_on: datetime
    team_name: str
    tournament_name: str
