import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import ColorConflict, EmptyUpdate, InvalidPlayer, NotFound
from app.models import team as team_model
from app.models import tournament as tournament_model
from app.models import user as user_model
from app.models.team import TeamColor
from app.models.user import UserRole
from app.schemas import team_schemas, user_schemas

logger = logging.getLogger(__name__)


def _ensure_color_free(db: Session, tournament_id: Optional[int], color: Optional[TeamColor], team_id: Optional[int] = None):
    if tournament_id is None or color is None:
        return
    query = db.query(team_model.Team).filter(
        team_model.Team.tournament_id == tournament_id,
        team_model.Team.color == color,
    )
    if team_id is not None:
        query = query.filter(team_model.Team.id != team_id)
    if query.first():
        raise ColorConflict(f"Color {color.value} already used in this tournament")


def _commit_team(db: Session, db_team: team_model.Team) -> team_model.Team:
    # A concurrent writer can still take the color between check and commit
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ColorConflict()
    db.refresh(db_team)
    return db_team


def get_team(db: Session, team_id: int) -> Optional[team_model.Team]:
    return db.query(team_model.Team).filter(team_model.Team.id == team_id).first()


def create_team(db: Session, team_in: team_schemas.TeamCreate) -> team_model.Team:
    if team_in.tournament_id is not None:
        tournament = db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == team_in.tournament_id).first()
        if not tournament:
            raise NotFound("Tournament not found")
    _ensure_color_free(db, team_in.tournament_id, team_in.color)

    db_team = team_model.Team(**team_in.model_dump())
    db.add(db_team)
    return _commit_team(db, db_team)


def update_team(db: Session, team_id: int, team_update: team_schemas.TeamUpdate) -> team_model.Team:
    # Unlike the other PATCH payloads, an explicit null clears the color
    update_data = team_update.model_dump(exclude_unset=True)
    if update_data.get("name", "") is None:
        del update_data["name"]
    if not update_data:
        raise EmptyUpdate()

    db_team = get_team(db, team_id)
    if not db_team:
        raise NotFound("Team not found")

    if "color" in update_data:
        _ensure_color_free(db, db_team.tournament_id, update_data["color"], team_id=db_team.id)

    for key, value in update_data.items():
        setattr(db_team, key, value)
    return _commit_team(db, db_team)


def add_player_to_team(db: Session, team_id: int, user_id: int) -> bool:
    """Adds a PLAYER to the roster. Returns False if they were already on it."""
    if not get_team(db, team_id):
        raise NotFound("Team not found")

    user = db.query(user_model.User).filter(user_model.User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    if user.role != UserRole.PLAYER:
        raise InvalidPlayer()

    existing = db.query(team_model.TeamMember).filter(
        team_model.TeamMember.team_id == team_id,
        team_model.TeamMember.user_id == user_id,
    ).first()
    if existing:
        return False

    db.add(team_model.TeamMember(team_id=team_id, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against an identical insert
        db.rollback()
        return False
    return True


def tournament_teams(db: Session, tournament_id: int) -> List[team_model.Team]:
    """Teams of a tournament in stable creation order (earliest first)."""
    return db.query(team_model.Team)\
        .filter(team_model.Team.tournament_id == tournament_id)\
        .order_by(team_model.Team.created_at.asc(), team_model.Team.id.asc())\
        .all()


def apply_colors(db: Session, teams: Sequence[team_model.Team], plan: Dict[int, TeamColor]):
    """
    Writes the color plan onto ``teams`` without ever holding two equal colors
    in one tournament: teams whose color changes are cleared and flushed
    first, then given their new color. Teams already wearing the planned
    color are not touched. Does not commit.
    """
    changing = [team for team in teams if team.color != plan.get(team.id)]
    if not changing:
        return

    for team in changing:
        team.color = None
    db.flush()

    for team in changing:
        team.color = plan.get(team.id)
    try:
        db.flush()
    except IntegrityError as exc:
        raise ColorConflict(f"Could not assign team colors: {exc.orig}")


def list_teams(db: Session, tournament_id: Optional[int] = None) -> List[team_schemas.TeamWithMembers]:
    query = db.query(team_model.Team).options(
        selectinload(team_model.Team.members).selectinload(team_model.TeamMember.user)
    )
    if tournament_id is not None:
        query = query.filter(team_model.Team.tournament_id == tournament_id)
    teams = query.order_by(team_model.Team.created_at.asc(), team_model.Team.id.asc()).all()

    return [
        team_schemas.TeamWithMembers(
            id=team.id,
            name=team.name,
            tournament_id=team.tournament_id,
            color=team.color,
            members=[
                user_schemas.UserRead.model_validate(member.user)
                for member in sorted(team.members, key=lambda m: m.id)
            ],
        )
        for team in teams
    ]
