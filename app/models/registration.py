from enum import Enum
import datetime

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from app.core.database import Base

class RegistrationStatus(str, Enum):
    WAITING = "WAITING"
    ASSIGNED = "ASSIGNED"
    CANCELLED = "CANCELLED"

class Registration(Base):
    __tablename__ = "tournament_registrations"
    __table_args__ = (
        UniqueConstraint("tournament_id", "user_id", name="uq_registration_tournament_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(SAEnum(RegistrationStatus, native_enum=False, length=16), default=RegistrationStatus.WAITING, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    user = relationship("User", back_populates="registrations")
    tournament = relationship("Tournament", back_populates="registrations")
