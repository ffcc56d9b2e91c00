from app.core.database import Base, engine

# Import all models here to ensure they are registered with Base
from .user import User, UserRole
from .tournament import Tournament, TournamentStatus
from .registration import Registration, RegistrationStatus
from .team import Team, TeamMember, TeamColor, TEAM_COLOR_PALETTE
from .match import Match, MatchType, MatchStatus
from .goal import Goal
from .winner import TournamentWinner


def create_tables(bind=engine):
    """Create every table registered on Base. Called at application startup."""
    Base.metadata.create_all(bind=bind)
