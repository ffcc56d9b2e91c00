from sqlalchemy import Column, Integer, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class Goal(Base):
    __tablename__ = "match_goals"
    __table_args__ = (
        CheckConstraint("minute IS NULL OR minute >= 0", name="ck_goal_minute_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    scoring_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    scoring_player_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    assist_player_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    minute = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    match = relationship("Match", back_populates="goals")
    scoring_team = relationship("Team")
    scoring_player = relationship("User", foreign_keys=[scoring_player_id])
    assist_player = relationship("User", foreign_keys=[assist_player_id])
