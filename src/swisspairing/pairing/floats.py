"""Float budget, floater selection and bye selection."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import List, Optional, Sequence

from swisspairing.constants import (
    FLOAT_BUDGET_EARLY_SHARE,
    FLOAT_BUDGET_LATE_FACTOR,
    FLOAT_BUDGET_MIDDLE_FACTOR,
)
from swisspairing.pairing.score_groups import sort_by_rating
from swisspairing.pairing.swiss_player import SwissPlayer
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def calculate_max_floats(player_count: int, round_number: int) -> int:
    """Per-round float budget.

    A quarter of the field in rounds 1-2, three quarters of that in rounds
    3-5 and half of it from round 6 on, rounded down.
    """
    if round_number <= 2:
        factor = 1.0
    elif round_number <= 5:
        factor = FLOAT_BUDGET_MIDDLE_FACTOR
    else:
        factor = FLOAT_BUDGET_LATE_FACTOR
    return int(player_count * FLOAT_BUDGET_EARLY_SHARE * factor)


def can_float_up(player: SwissPlayer) -> bool:
    """A player who floated up last round should not float up again."""
    return not player.floated_up_last_round


def _has_fresh_opponent(player: SwissPlayer, group: Sequence[SwissPlayer]) -> bool:
    return any(other.id != player.id and not player.has_played(other) for other in group)


def find_downfloater(
    candidates: Sequence[SwissPlayer], group: Sequence[SwissPlayer]
) -> Optional[SwissPlayer]:
    """Pick the player to move up from the next lower score group.

    Parameters
    ----------
    candidates : sequence of SwissPlayer
        Unpaired players of the next lower score group.
    group : sequence of SwissPlayer
        The odd group that needs one more player.

    Returns
    -------
    SwissPlayer or None
        The highest rated candidate, preferring those allowed to float up
        who still have an unplayed opponent in ``group``. None when there
        are no candidates.
    """
    if not candidates:
        return None
    ranked = sort_by_rating(candidates)
    for player in ranked:
        if can_float_up(player) and _has_fresh_opponent(player, group):
            return player
    for player in ranked:
        if _has_fresh_opponent(player, group):
            return player
    return ranked[0]


def select_bye_player(candidates: Sequence[SwissPlayer]) -> Optional[SwissPlayer]:
    """Choose who sits out this round.

    Priority:
        1. A player without a previous bye from the lower rated half,
           lowest rating first.
        2. Any player without a previous bye, lowest rating first.
        3. The player with the fewest byes, lowest rating first.

    Players that are not bye eligible are only considered when nobody
    else is left.
    """
    if not candidates:
        return None

    eligible: List[SwissPlayer] = [p for p in candidates if p.is_bye_eligible]
    if not eligible:
        logger.warning("No bye eligible player left, choosing among all candidates")
        eligible = list(candidates)

    # lowest rating first
    ascending = list(reversed(sort_by_rating(eligible)))
    never_byed = [p for p in ascending if p.has_never_had_bye]

    lower_half = ascending[: (len(ascending) + 1) // 2]
    for player in lower_half:
        if player.has_never_had_bye:
            return player
    if never_byed:
        return never_byed[0]
    return min(ascending, key=lambda p: p.bye_count)


def select_round_bye(
    groups: Sequence[Sequence[SwissPlayer]],
) -> Optional[SwissPlayer]:
    """Choose the bye for an odd field before any group is paired.

    ``groups`` run from the highest score to the lowest. The bye goes to the
    lowest group holding a bye eligible player without a previous bye, and
    inside that group follows :func:`select_bye_player`. When everyone
    eligible has had a bye, the lowest group holding a player with the
    fewest byes is used instead.
    """
    groups = [group for group in groups if group]
    if not groups:
        return None
    for group in reversed(groups):
        fresh = [p for p in group if p.is_bye_eligible and p.has_never_had_bye]
        if fresh:
            return select_bye_player(fresh)

    eligible = [p for group in groups for p in group if p.is_bye_eligible]
    if not eligible:
        return select_bye_player(groups[-1])
    fewest = min(p.bye_count for p in eligible)
    for group in reversed(groups):
        candidates = [p for p in group if p.is_bye_eligible and p.bye_count == fewest]
        if candidates:
            logger.debug("Every eligible player has had a bye, repeating one")
            return select_bye_player(candidates)
    return None
