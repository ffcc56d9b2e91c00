from enum import Enum
import datetime

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from app.core.database import Base

class TeamColor(str, Enum):
    BLUE = "BLUE"
    BLACK = "BLACK"
    WHITE = "WHITE"
    RED = "RED"

# Ordered: the i-th team of a tournament wears TEAM_COLOR_PALETTE[i]
TEAM_COLOR_PALETTE = (TeamColor.BLUE, TeamColor.BLACK, TeamColor.WHITE, TeamColor.RED)

class Team(Base):
    __tablename__ = "teams"
    # NULL colors never collide, so uncoloured teams are unconstrained
    __table_args__ = (
        UniqueConstraint("tournament_id", "color", name="uq_team_tournament_color"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="SET NULL"), nullable=True, index=True)
    color = Column(SAEnum(TeamColor, native_enum=False, length=16), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    tournament = relationship("Tournament", back_populates="teams")
    members = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")

class TeamMember(Base):
    __tablename__ = "team_players"
    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_player"),
    )

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    team = relationship("Team", back_populates="members")
    user = relationship("User")
