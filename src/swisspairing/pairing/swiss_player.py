"""Per-round player state used by the pairing engine."""

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
from typing import Dict, Iterable, List, Optional, Set

from swisspairing.models.config import PairingConfig
from swisspairing.models.game import Game
from swisspairing.models.history import FloatDirection, PairingHistory
from swisspairing.models.player import Player, PlayerResult
from swisspairing.pairing.colors import Color, ColorPreference, calculate_color_preference
from swisspairing.type_hints import PlayerId
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_unique_ids_strict

logger = setup_logger(__name__)


@dataclass
class SwissPlayer:
    """A player enriched with everything the pairing rules look at.

    Rebuilt from authoritative records on every pairing call and never stored.

    Attributes
    ----------
    player : Player
        The underlying player record.
    points : float
        Real score before this round.
    rating : int
        Rating, with unrated players given the configured default.
    color_history : list of Color
        Colours played, in round order; byes and forfeits excluded.
    opponents : set
        Ids of everyone this player has already met.
    color_preference : ColorPreference
        Preference derived from ``color_history``.
    is_bye_eligible : bool
        Whether the player may receive a bye this round.
    float_history : list of FloatDirection
        Floats from earlier rounds, oldest first.
    bye_count : int
        Byes already received.
    floated_up_last_round : bool
        Whether the player was moved up a score group in the previous round.
    virtual_points : float
        Accelerated pairing bonus; only affects score group placement.
    """

    player: Player
    points: float = 0.0
    rating: int = 0
    color_history: List[Color] = field(default_factory=list)
    opponents: Set[PlayerId] = field(default_factory=set)
    color_preference: ColorPreference = field(default_factory=ColorPreference.none)
    is_bye_eligible: bool = True
    float_history: List[FloatDirection] = field(default_factory=list)
    bye_count: int = 0
    floated_up_last_round: bool = False
    virtual_points: float = 0.0

    @property
    def id(self) -> PlayerId:
        return self.player.id

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def club(self) -> Optional[str]:
        return self.player.club

    @property
    def country_code(self) -> Optional[str]:
        return self.player.country_code

    @property
    def pairing_points(self) -> float:
        """Points used for score group placement (real plus virtual)."""
        return self.points + self.virtual_points

    @property
    def has_never_had_bye(self) -> bool:
        return self.bye_count == 0

    def has_played(self, other: "SwissPlayer") -> bool:
        return other.id in self.opponents

    def __repr__(self) -> str:
        return (
            f"SwissPlayer(id={self.id!r}, points={self.points}, rating={self.rating}, "
            f"pref={self.color_preference})"
        )


def _game_order_key(game: Game):
    created = game.created_at.timestamp() if game.created_at else 0.0
    return (game.round_number, created, game.id)


def build_swiss_players(
    players: Iterable[Player],
    player_results: Iterable[PlayerResult],
    game_history: Iterable[Game],
    config: Optional[PairingConfig] = None,
    history: Optional[PairingHistory] = None,
    round_number: Optional[int] = None,
) -> List[SwissPlayer]:
    """Turn raw records into one :class:`SwissPlayer` per player.

    Missing results give 0.0 points and missing ratings the configured
    default. Ongoing games are ignored. Bye games (no black player) count
    toward the bye total only. Forfeited games give neither a colour nor an
    opponent, so the two players may still be paired against each other.

    Parameters
    ----------
    players : iterable of Player
        Everyone taking part in the round.
    player_results : iterable of PlayerResult
        Scores before the round.
    game_history : iterable of Game
        Games of earlier rounds.
    config : PairingConfig, optional
        Engine settings; defaults apply when omitted.
    history : PairingHistory, optional
        Cross-round accumulator of matches, byes and floats.
    round_number : int, optional
        Round being paired, used to look up the previous round's floats.

    Returns
    -------
    list of SwissPlayer
        In the order the players were given.

    Raises
    ------
    InvalidInputException
        If a player id occurs twice.
    """
    config = config or PairingConfig()
    history = history or PairingHistory()
    players = list(players)
    validate_unique_ids_strict(p.id for p in players)

    points_by_id: Dict[PlayerId, float] = {r.player_id: r.points for r in player_results}
    colors: Dict[PlayerId, List[Color]] = {p.id: [] for p in players}
    opponents: Dict[PlayerId, Set[PlayerId]] = {p.id: set() for p in players}
    bye_rounds: Dict[PlayerId, Set[int]] = {
        p.id: set(history.byes.get(p.id, [])) for p in players
    }

    for game in sorted(game_history, key=_game_order_key):
        outcome = game.outcome
        if not outcome.is_completed:
            continue
        if game.is_bye:
            if game.white_player_id in bye_rounds:
                bye_rounds[game.white_player_id].add(game.round_number)
            continue
        if outcome.is_forfeit:
            continue
        white_id, black_id = game.white_player_id, game.black_player_id
        if white_id in colors:
            colors[white_id].append(Color.WHITE)
            opponents[white_id].add(black_id)
        if black_id in colors:
            colors[black_id].append(Color.BLACK)
            opponents[black_id].add(white_id)

    for match in history.previous_matches:
        pair = list(match)
        if len(pair) != 2:
            continue
        first, second = pair
        if first in opponents:
            opponents[first].add(second)
        if second in opponents:
            opponents[second].add(first)

    swiss_players = []
    for player in players:
        floats = sorted(history.floats.get(player.id, []), key=lambda entry: entry[0])
        bye_count = len(bye_rounds[player.id])
        floated_up_last_round = (
            round_number is not None
            and history.floated_up_in(player.id, round_number - 1)
        )
        swiss_players.append(
            SwissPlayer(
                player=player,
                points=points_by_id.get(player.id, 0.0),
                rating=player.rating if player.rating is not None else config.default_rating,
                color_history=colors[player.id],
                opponents=opponents[player.id],
                color_preference=calculate_color_preference(colors[player.id]),
                is_bye_eligible=not (config.one_bye_per_player and bye_count > 0),
                float_history=[direction for _, direction in floats],
                bye_count=bye_count,
                floated_up_last_round=floated_up_last_round,
            )
        )

    logger.debug("Built state for %d players", len(swiss_players))
    return swiss_players
