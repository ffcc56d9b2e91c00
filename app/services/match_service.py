import logging
from typing import List, NamedTuple, Optional

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import DrawNotAllowed, EmptyUpdate, MissingTeams, NotFound, TeamNotInMatch
from app.models import match as match_model
from app.models import goal as goal_model
from app.models import tournament as tournament_model
from app.models import user as user_model
from app.models.match import MatchStatus, MatchType, SEMIFINAL_TYPES
from app.schemas import match_schemas
from app.services.bracket_builder import BRACKET_ORDER, PLAYOFF_SOURCES

logger = logging.getLogger(__name__)


class SemifinalResult(NamedTuple):
    winner: int
    loser: int


def resolve_winner_loser(match: match_model.Match) -> SemifinalResult:
    """Winner and loser team ids of a decided match. Draws are rejected."""
    if not match.team_a_id or not match.team_b_id:
        raise MissingTeams(f"{match.match_type.value} teams not set")
    if match.score_a == match.score_b:
        raise DrawNotAllowed(f"{match.match_type.value} cannot end in a draw ({match.score_a}-{match.score_b})")
    if match.score_a > match.score_b:
        return SemifinalResult(winner=match.team_a_id, loser=match.team_b_id)
    return SemifinalResult(winner=match.team_b_id, loser=match.team_a_id)


def on_semifinal_finalized(db: Session, tournament_id: int) -> bool:
    """
    Seeds FINAL and THIRD_PLACE from the two semifinals once both are FINAL.

    Returns False (and writes nothing) while either semifinal is missing or
    not yet final. Playoff slots are always overwritten and reset to 0-0
    SCHEDULED, so re-running after a corrected semifinal re-derives them.
    Does not commit.
    """
    semis = db.query(match_model.Match).filter(
        match_model.Match.tournament_id == tournament_id,
        match_model.Match.match_type.in_(SEMIFINAL_TYPES),
    ).all()
    by_type = {m.match_type: m for m in semis}
    semi_1 = by_type.get(MatchType.SEMI_1)
    semi_2 = by_type.get(MatchType.SEMI_2)

    if semi_1 is None or semi_2 is None:
        return False
    if semi_1.status != MatchStatus.FINAL or semi_2.status != MatchStatus.FINAL:
        return False

    semi_1_result = resolve_winner_loser(semi_1)
    semi_2_result = resolve_winner_loser(semi_2)

    playoffs = db.query(match_model.Match).filter(
        match_model.Match.tournament_id == tournament_id,
        match_model.Match.match_type.in_(list(PLAYOFF_SOURCES)),
    ).all()
    for playoff in playoffs:
        outcome = PLAYOFF_SOURCES[playoff.match_type]
        playoff.team_a_id = getattr(semi_1_result, outcome)
        playoff.team_b_id = getattr(semi_2_result, outcome)
        playoff.score_a = 0
        playoff.score_b = 0
        playoff.status = MatchStatus.SCHEDULED

    if len(playoffs) != len(PLAYOFF_SOURCES):
        logger.warning("Tournament %s is missing playoff matches; only %d seeded", tournament_id, len(playoffs))

    db.flush()
    logger.info(
        "Tournament %s playoffs seeded: final %s vs %s, third place %s vs %s",
        tournament_id, semi_1_result.winner, semi_2_result.winner, semi_1_result.loser, semi_2_result.loser,
    )
    return True


def get_match(db: Session, match_id: int) -> Optional[match_model.Match]:
    return db.query(match_model.Match).filter(match_model.Match.id == match_id).first()


def update_match(db: Session, match_id: int, match_update: match_schemas.MatchUpdate) -> match_model.Match:
    """
    Applies a partial score/status update. When the match is a semifinal and
    ends up FINAL, the playoffs are re-seeded in the same transaction; a
    propagation error rolls back the score update too.

    The tournament row is locked before the match, the same order
    generation uses, so concurrent updates of one tournament's matches
    are serialised.
    """
    update_data = match_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise EmptyUpdate()

    with atomic(db):
        tournament_id = db.query(match_model.Match.tournament_id).filter(match_model.Match.id == match_id).scalar()
        if tournament_id is None:
            raise NotFound("Match not found")

        # Updates to matches of one tournament queue on the tournament row, so
        # whichever semifinal is finalized second sees the first one committed
        db.query(tournament_model.Tournament.id)\
            .filter(tournament_model.Tournament.id == tournament_id)\
            .with_for_update()\
            .first()
        db_match = db.query(match_model.Match).filter(match_model.Match.id == match_id).with_for_update().first()

        for key, value in update_data.items():
            setattr(db_match, key, value)
        db.flush()

        if db_match.is_semifinal and db_match.status == MatchStatus.FINAL:
            # Reject a drawn semifinal even while the other one is still open
            resolve_winner_loser(db_match)
            on_semifinal_finalized(db, db_match.tournament_id)

    db.refresh(db_match)
    return db_match


def list_bracket(db: Session, tournament_id: int) -> List[match_schemas.BracketMatch]:
    tournament = db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()
    if not tournament:
        raise NotFound("Tournament not found")

    matches = db.query(match_model.Match).filter(match_model.Match.tournament_id == tournament_id).all()
    matches.sort(key=lambda m: BRACKET_ORDER.get(m.match_type, len(BRACKET_ORDER)))
    return [match_schemas.BracketMatch.model_validate(m) for m in matches]


def create_goal(db: Session, match_id: int, goal_in: match_schemas.GoalCreate) -> goal_model.Goal:
    db_match = get_match(db, match_id)
    if not db_match:
        raise NotFound("Match not found")

    if goal_in.scoring_team_id not in (db_match.team_a_id, db_match.team_b_id):
        raise TeamNotInMatch()

    player_ids = {goal_in.scoring_player_id}
    if goal_in.assist_player_id is not None:
        player_ids.add(goal_in.assist_player_id)
    found = db.query(user_model.User.id).filter(user_model.User.id.in_(player_ids)).count()
    if found != len(player_ids):
        raise NotFound("Player not found")

    db_goal = goal_model.Goal(match_id=match_id, **goal_in.model_dump())
    db.add(db_goal)
    db.commit()
    db.refresh(db_goal)
    return db_goal


def list_goals(db: Session, match_id: int) -> List[goal_model.Goal]:
    if not get_match(db, match_id):
        raise NotFound("Match not found")
    return db.query(goal_model.Goal)\
        .filter(goal_model.Goal.match_id == match_id)\
        .order_by(goal_model.Goal.created_at.asc(), goal_model.Goal.id.asc())\
        .all()


def delete_goal(db: Session, goal_id: int) -> match_schemas.GoalRead:
    db_goal = db.query(goal_model.Goal).filter(goal_model.Goal.id == goal_id).first()
    if not db_goal:
        raise NotFound("Goal not found")
    deleted = match_schemas.GoalRead.model_validate(db_goal)
    db.delete(db_goal)
    db.commit()
    return deleted
