"""
Random partition of a tournament's waiting pool into equally sized teams,
plus the positional color plan for those teams.

Everything here is pure: callers load the inputs and persist the outputs.
"""
import random
from typing import Dict, Hashable, List, Optional, Sequence, TypeVar

from app.core.errors import ColorConflict, InvalidRegistrationCount
from app.models.team import TEAM_COLOR_PALETTE, TeamColor

T = TypeVar("T", bound=Hashable)


def assign(
    waiting_user_ids: Sequence[T],
    team_count: int,
    team_size: int,
    rng: Optional[random.Random] = None,
) -> List[List[T]]:
    """
    Shuffles the waiting users and slices them into ``team_count`` rosters of
    ``team_size`` each, in permutation order.

    The i-th roster is meant for the i-th team in stable (creation) order.
    Raises InvalidRegistrationCount unless there are exactly
    ``team_count * team_size`` distinct users.
    """
    required = team_count * team_size
    if len(waiting_user_ids) != required or len(set(waiting_user_ids)) != required:
        raise InvalidRegistrationCount(
            f"Invalid number of registrations: expected {required}, got {len(waiting_user_ids)}"
        )

    shuffled = list(waiting_user_ids)
    # random.shuffle is a Fisher-Yates shuffle: every permutation is equally likely
    (rng or random).shuffle(shuffled)

    return [shuffled[i * team_size:(i + 1) * team_size] for i in range(team_count)]


def color_plan(team_ids: Sequence[int], palette: Sequence[TeamColor] = TEAM_COLOR_PALETTE) -> Dict[int, TeamColor]:
    """Maps each team id to ``palette[position]``. Same ordering, same plan."""
    if len(team_ids) > len(palette):
        raise ColorConflict(
            f"Palette has {len(palette)} colors but {len(team_ids)} teams need one"
        )
    if len(set(palette[:len(team_ids)])) != len(team_ids):
        raise ColorConflict("Palette repeats a color")
    return {team_id: palette[index] for index, team_id in enumerate(team_ids)}
