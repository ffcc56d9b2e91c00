from enum import Enum
import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from app.core.config import settings
from app.core.database import Base

DEFAULT_FORMAT_SNIPPET = "5-a-side, 4 teams of 5, 30 min games, single elimination + 3rd/4th playoff"

class TournamentStatus(str, Enum):
    DRAFT = "DRAFT"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    TEAMS_LOCKED = "TEAMS_LOCKED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

# Team generation may only run from these states
GENERATION_STATUSES = {TournamentStatus.REGISTRATION_OPEN, TournamentStatus.TEAMS_LOCKED}

class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    start_time = Column(DateTime, nullable=True)
    format_snippet = Column(String, default=DEFAULT_FORMAT_SNIPPET, nullable=False)
    status = Column(SAEnum(TournamentStatus, native_enum=False, length=32), default=TournamentStatus.DRAFT, nullable=False)
    max_teams = Column(Integer, default=settings.DEFAULT_MAX_TEAMS, nullable=False)
    players_per_team = Column(Integer, default=settings.DEFAULT_PLAYERS_PER_TEAM, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    registrations = relationship("Registration", back_populates="tournament")
    teams = relationship("Team", back_populates="tournament", order_by="[Team.created_at, Team.id]")
    matches = relationship("Match", back_populates="tournament")

    @property
    def required_registrations(self) -> int:
        return self.max_teams * self.players_per_team
