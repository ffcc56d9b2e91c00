import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import EmptyUpdate, InvalidRegistrationCount, InvalidState, NotFound, TooManyTeams
from app.models import registration as registration_model
from app.models import team as team_model
from app.models import tournament as tournament_model
from app.models import winner as winner_model
from app.models.registration import RegistrationStatus
from app.models.tournament import GENERATION_STATUSES, TournamentStatus
from app.schemas import tournament_schemas
from app.services import bracket_builder, registration_service, team_assignor, team_service

logger = logging.getLogger(__name__)


def create_tournament(db: Session, tournament: tournament_schemas.TournamentCreate) -> tournament_model.Tournament:
    db_tournament = tournament_model.Tournament(
        **tournament.model_dump(),
        status=TournamentStatus.DRAFT,
    )
    db.add(db_tournament)
    db.commit()
    db.refresh(db_tournament)
    return db_tournament


def get_tournament(db: Session, tournament_id: int) -> Optional[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()


def list_tournaments(db: Session) -> List[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament)\
        .order_by(tournament_model.Tournament.created_at.asc(), tournament_model.Tournament.id.asc())\
        .all()


def update_tournament(db: Session, tournament_id: int, tournament_update: tournament_schemas.TournamentUpdate) -> tournament_model.Tournament:
    # An explicit null clears location or start_time; name and status can't be cleared
    update_data = tournament_update.model_dump(exclude_unset=True)
    for key in ("name", "status"):
        if update_data.get(key, "") is None:
            del update_data[key]
    if not update_data:
        raise EmptyUpdate()

    db_tournament = get_tournament(db, tournament_id)
    if not db_tournament:
        raise NotFound("Tournament not found")

    for key, value in update_data.items():
        setattr(db_tournament, key, value)

    db.commit()
    db.refresh(db_tournament)
    return db_tournament


def get_tournament_with_waiting_pool(db: Session, tournament_id: int) -> tournament_schemas.TournamentWithWaitingPool:
    db_tournament = get_tournament(db, tournament_id)
    if not db_tournament:
        raise NotFound("Tournament not found")

    return tournament_schemas.TournamentWithWaitingPool(
        tournament=tournament_schemas.TournamentRead.model_validate(db_tournament),
        waiting_pool=[
            tournament_schemas.WaitingPlayer.model_validate(user)
            for user in registration_service.waiting_pool(db, tournament_id)
        ],
    )


def _ensure_team_count(db: Session, tournament: tournament_model.Tournament) -> List[team_model.Team]:
    """Returns exactly ``max_teams`` teams in creation order, creating placeholders as needed."""
    teams = team_service.tournament_teams(db, tournament.id)
    if len(teams) > tournament.max_teams:
        raise TooManyTeams(f"Tournament has {len(teams)} teams, at most {tournament.max_teams} allowed")

    for index in range(len(teams), tournament.max_teams):
        team = team_model.Team(name=f"Team {index + 1}", tournament_id=tournament.id)
        db.add(team)
        teams.append(team)
    db.flush()
    return teams


def generate_teams_and_bracket(db: Session, tournament_id: int, regenerate: bool, rng: Optional[random.Random] = None) -> None:
    """
    Turns the waiting pool into teams and seeds the bracket, as one transaction.

    With ``regenerate`` the previous generation is undone first: assigned
    registrations go back to WAITING and the bracket is cleared. Any error
    rolls back every write, leaving the tournament as it was.
    """
    with atomic(db):
        # Row lock serialises concurrent generations of the same tournament
        tournament = db.query(tournament_model.Tournament)\
            .filter(tournament_model.Tournament.id == tournament_id)\
            .with_for_update()\
            .first()
        if not tournament:
            raise NotFound("Tournament not found")
        if tournament.status not in GENERATION_STATUSES:
            raise InvalidState(f"Tournament status {tournament.status.value} does not allow team generation")

        if regenerate:
            reverted = db.query(registration_model.Registration).filter(
                registration_model.Registration.tournament_id == tournament_id,
                registration_model.Registration.status == RegistrationStatus.ASSIGNED,
            ).update({registration_model.Registration.status: RegistrationStatus.WAITING})
            cleared = bracket_builder.clear_matches(db, tournament_id)
            logger.info(
                "Regenerating tournament %s: %d registrations back to WAITING, %d matches cleared",
                tournament_id, reverted, cleared,
            )

        waiting_ids = registration_service.waiting_user_ids(db, tournament_id)
        required = tournament.required_registrations
        if len(waiting_ids) != required:
            raise InvalidRegistrationCount(
                f"Invalid number of registrations: expected {required}, got {len(waiting_ids)}"
            )

        teams = _ensure_team_count(db, tournament)
        team_service.apply_colors(db, teams, team_assignor.color_plan([team.id for team in teams]))

        rosters = team_assignor.assign(waiting_ids, tournament.max_teams, tournament.players_per_team, rng=rng)

        db.query(team_model.TeamMember)\
            .filter(team_model.TeamMember.team_id.in_([team.id for team in teams]))\
            .delete(synchronize_session="fetch")
        db.add_all(
            team_model.TeamMember(team_id=team.id, user_id=user_id)
            for team, roster in zip(teams, rosters)
            for user_id in roster
        )

        db.query(registration_model.Registration).filter(
            registration_model.Registration.tournament_id == tournament_id,
            registration_model.Registration.status == RegistrationStatus.WAITING,
            # Registrations that arrived after the count stay in the pool
            registration_model.Registration.user_id.in_(waiting_ids),
        ).update({registration_model.Registration.status: RegistrationStatus.ASSIGNED}, synchronize_session="fetch")

        tournament.status = TournamentStatus.TEAMS_LOCKED

        bracket_builder.rebuild(db, tournament_id, teams)

    logger.info(
        "Generated %d teams of %d for tournament %s (regenerate=%s)",
        tournament.max_teams, tournament.players_per_team, tournament_id, regenerate,
    )


def get_latest_winner(db: Session) -> Optional[tournament_schemas.LatestWinner]:
    """Most recent showcase entry, or None when nothing has been published."""
    winner = db.query(winner_model.TournamentWinner)\
        .order_by(winner_model.TournamentWinner.won_on.desc(), winner_model.TournamentWinner.created_at.desc())\
        .first()
    if not winner:
        return None

    return tournament_schemas.LatestWinner(
        headline=winner.headline,
        hero_image_url=winner.hero_image_url,
        won_on=winner.won_on,
        team_name=winner.team.name,
        tournament_name=winner.tournament.name,
    )
