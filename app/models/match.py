from enum import Enum
import datetime

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from app.core.database import Base

class MatchType(str, Enum):
    SEMI_1 = "SEMI_1"
    SEMI_2 = "SEMI_2"
    FINAL = "FINAL"
    THIRD_PLACE = "THIRD_PLACE"

SEMIFINAL_TYPES = (MatchType.SEMI_1, MatchType.SEMI_2)

class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    FINAL = "FINAL"

class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("tournament_id", "match_type", name="uq_match_tournament_type"),
        CheckConstraint("score_a >= 0 AND score_b >= 0", name="ck_match_scores_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    match_type = Column(SAEnum(MatchType, native_enum=False, length=16), nullable=False)
    team_a_id = Column(Integer, ForeignKey("teams.id"), nullable=True)
    team_b_id = Column(Integer, ForeignKey("teams.id"), nullable=True)
    score_a = Column(Integer, default=0, nullable=False)
    score_b = Column(Integer, default=0, nullable=False)
    status = Column(SAEnum(MatchStatus, native_enum=False, length=16), default=MatchStatus.SCHEDULED, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    tournament = relationship("Tournament", back_populates="matches")
    team_a = relationship("Team", foreign_keys=[team_a_id])
    team_b = relationship("Team", foreign_keys=[team_b_id])
    goals = relationship("Goal", back_populates="match", cascade="all, delete-orphan", order_by="Goal.created_at")

    @property
    def is_semifinal(self) -> bool:
        return self.match_type in SEMIFINAL_TYPES
