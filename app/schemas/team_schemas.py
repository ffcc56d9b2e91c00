from pydantic import BaseModel, Field
from typing import Optional, List

from app.models.team import TeamColor
from .user_schemas import UserRead

class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1)
    tournament_id: Optional[int] = None
    color: Optional[TeamColor] = None

class TeamUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[TeamColor] = None

class TeamRead(BaseModel):
    id: int
    name: str
    tournament_id: Optional[int] = None
    color: Optional[TeamColor] = None

    class Config:
        from_attributes = True

class TeamWithMembers(TeamRead):
    members: List[UserRead] = Field(default_factory=list)

class AddPlayerRequest(BaseModel):
    user_id: int

class AddPlayerResult(BaseModel):
    added: bool
