"""Score groups, accelerated pairings and late entries."""

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

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from swisspairing.constants import LATE_ENTRY_POINTS
from swisspairing.models.config import PairingConfig
from swisspairing.models.player import Player
from swisspairing.pairing.swiss_player import SwissPlayer
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import (
    validate_round_number_strict,
    validate_unique_ids_strict,
)

logger = setup_logger(__name__)

# points are stored in hundredths so quarter points stay exact
SCORE_SCALE = 100


@dataclass(frozen=True, order=True)
class ScoreKey:
    """Totally ordered score used to key score groups."""

    scaled: int

    @classmethod
    def from_points(cls, points: float) -> "ScoreKey":
        return cls(int(round(points * SCORE_SCALE)))

    @property
    def points(self) -> float:
        return self.scaled / SCORE_SCALE


@dataclass
class ScoreGroup:
    """Players sharing a score, strongest first."""

    key: ScoreKey
    players: List[SwissPlayer] = field(default_factory=list)

    @property
    def points(self) -> float:
        return self.key.points

    def __len__(self) -> int:
        return len(self.players)


def _rating_order(player: SwissPlayer):
    return (-player.rating, player.name, str(player.id))


def sort_by_rating(players: Iterable[SwissPlayer]) -> List[SwissPlayer]:
    """Rating descending, with name and id as deterministic tie breaks."""
    return sorted(players, key=_rating_order)


def form_score_groups(players: Iterable[SwissPlayer]) -> List[ScoreGroup]:
    """Partition players by pairing points (real plus virtual).

    Returns
    -------
    list of ScoreGroup
        Strictly descending by score; each group sorted by rating descending.
    """
    grouped: Dict[ScoreKey, List[SwissPlayer]] = {}
    for player in players:
        grouped.setdefault(ScoreKey.from_points(player.pairing_points), []).append(
            player
        )

    groups = [
        ScoreGroup(key=key, players=sort_by_rating(grouped[key]))
        for key in sorted(grouped, reverse=True)
    ]
    logger.debug(
        "Formed %d score groups: %s",
        len(groups),
        ", ".join(f"{g.points}:{len(g)}" for g in groups),
    )
    return groups


def uses_accelerated_pairings(
    player_count: int, round_number: int, config: PairingConfig
) -> bool:
    """Whether accelerated pairings apply to this round and field size."""
    return (
        config.use_accelerated_pairings
        and round_number <= min(config.accelerated_last_round, 2)
        and player_count >= config.accelerated_min_players
    )


def apply_accelerated_pairings(
    players: List[SwissPlayer],
    round_number: int,
    config: Optional[PairingConfig] = None,
) -> bool:
    """Give the top half of the field virtual points for early rounds.

    Round 1: the top quarter (by rating) gets 1.0, the second quarter 0.5.
    Round 2: top half players who already scored 1.0 get 0.5 in the top
    eighth and 0.25 otherwise; those who did not get 0.5 in the top quarter
    and 0.25 otherwise. Only ``virtual_points`` is touched.

    Returns
    -------
    bool
        True if virtual points were applied.
    """
    config = config or PairingConfig()
    for player in players:
        player.virtual_points = 0.0
    if not uses_accelerated_pairings(len(players), round_number, config):
        return False

    ranked = sort_by_rating(players)
    top_half = len(ranked) // 2
    for index, player in enumerate(ranked[:top_half]):
        if round_number == 1:
            player.virtual_points = 1.0 if index < top_half // 2 else 0.5
        elif player.points >= 1.0:
            player.virtual_points = 0.5 if index < top_half // 4 else 0.25
        else:
            player.virtual_points = 0.5 if index < top_half // 2 else 0.25

    logger.info(
        "Accelerated pairings applied to %d of %d players in round %d",
        top_half,
        len(ranked),
        round_number,
    )
    return True


def late_entry_points(round_number: int) -> float:
    """Compensatory points for a player joining in ``round_number``."""
    round_number = validate_round_number_strict(round_number)
    if round_number in LATE_ENTRY_POINTS:
        return LATE_ENTRY_POINTS[round_number]
    return (round_number - 1) * 0.5


def integrate_late_entries(
    existing: List[SwissPlayer],
    late_players: Iterable[Player],
    round_number: int,
    config: Optional[PairingConfig] = None,
) -> List[SwissPlayer]:
    """Add players joining mid-tournament with compensatory points.

    Raises
    ------
    InvalidInputException
        If a late player's id is already in the field.
    """
    config = config or PairingConfig()
    late_players = list(late_players)
    validate_unique_ids_strict([p.id for p in existing] + [p.id for p in late_players])

    points = late_entry_points(round_number)
    newcomers = [
        SwissPlayer(
            player=player,
            points=points,
            rating=player.rating if player.rating is not None else config.default_rating,
        )
        for player in late_players
    ]
    for newcomer in newcomers:
        logger.info(
            "Late entry %s joins in round %d with %.1f points",
            newcomer.name,
            round_number,
            points,
        )
    return list(existing) + newcomers
