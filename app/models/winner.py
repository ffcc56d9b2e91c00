from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class TournamentWinner(Base):
    """Home page showcase entry. Rows are curated directly in the database."""
    __tablename__ = "tournament_winners"

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    headline = Column(String, nullable=False)
    hero_image_url = Column(String, nullable=True)
    won_on = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    tournament = relationship("Tournament")
    team = relationship("Team")
