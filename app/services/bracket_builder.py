"""
The fixed four-team bracket: two semifinals feeding a final and a
third-place playoff.

The shape is a small constant table rather than a general N-team generator;
this tournament format never has more than four teams.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.models.match import Match, MatchStatus, MatchType
from app.models.team import Team

logger = logging.getLogger(__name__)

# (slot, index of team A in the seeded team list, index of team B).
# None means the slot is filled later from the semifinal results.
BRACKET_SLOTS: Tuple[Tuple[MatchType, Optional[int], Optional[int]], ...] = (
    (MatchType.SEMI_1, 0, 1),
    (MatchType.SEMI_2, 2, 3),
    (MatchType.FINAL, None, None),
    (MatchType.THIRD_PLACE, None, None),
)

# Playoff slots and which semifinal outcome feeds them: (team A, team B)
# always come from (SEMI_1, SEMI_2) in that order.
PLAYOFF_SOURCES = {
    MatchType.FINAL: "winner",
    MatchType.THIRD_PLACE: "loser",
}

BRACKET_ORDER = {slot: position for position, (slot, _, _) in enumerate(BRACKET_SLOTS)}


def _team_at(teams: Sequence[Team], index: Optional[int]) -> Optional[int]:
    if index is None or index >= len(teams):
        # Fewer than four teams only happens if upstream validation was skipped
        return None
    return teams[index].id


def build_matches(tournament_id: int, teams: Sequence[Team]) -> List[Match]:
    """Returns the four unsaved bracket matches, all 0-0 and SCHEDULED."""
    if len(teams) < len(BRACKET_SLOTS):
        logger.warning(
            "Building bracket for tournament %s with only %d teams; missing slots stay empty",
            tournament_id, len(teams),
        )
    return [
        Match(
            tournament_id=tournament_id,
            match_type=slot,
            team_a_id=_team_at(teams, team_a_index),
            team_b_id=_team_at(teams, team_b_index),
            score_a=0,
            score_b=0,
            status=MatchStatus.SCHEDULED,
        )
        for slot, team_a_index, team_b_index in BRACKET_SLOTS
    ]


def clear_matches(db: Session, tournament_id: int) -> int:
    """Deletes every match of the tournament (and their goals). Does not commit."""
    existing = db.query(Match).filter(Match.tournament_id == tournament_id).all()
    for match in existing:
        # Match.goals cascades, so the goals go with it
        db.delete(match)
    db.flush()
    return len(existing)


def rebuild(db: Session, tournament_id: int, teams: Sequence[Team]) -> List[Match]:
    """
    Replaces the tournament's bracket wholesale: existing matches are deleted
    first, then the four slots are inserted. Does not commit.
    """
    deleted = clear_matches(db, tournament_id)
    matches = build_matches(tournament_id, teams)
    db.add_all(matches)
    db.flush()
    logger.info("Built bracket for tournament %s (replaced %d matches)", tournament_id, deleted)
    return matches
