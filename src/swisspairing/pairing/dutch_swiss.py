"""Dutch Swiss Pairing System Implementation."""

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

from typing import Iterable, List, Optional, Tuple

from swisspairing.models.config import PairingConfig
from swisspairing.models.game import Game
from swisspairing.models.history import FloatDirection, PairingHistory
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player import Player, PlayerResult
from swisspairing.pairing.floats import (
    calculate_max_floats,
    find_downfloater,
    select_bye_player,
    select_round_bye,
)
from swisspairing.pairing.matcher import (
    MatchedPair,
    find_rematch_free_matching,
    pair_leftovers,
    pair_score_group,
)
from swisspairing.pairing.score_groups import (
    ScoreGroup,
    apply_accelerated_pairings,
    form_score_groups,
)
from swisspairing.pairing.swiss_player import SwissPlayer, build_swiss_players
from swisspairing.pairing.validation import validate_round
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_round_number_strict

logger = setup_logger(__name__)


class SwissPairingEngine:
    """Generates Dutch system pairings one round at a time.

    The engine holds no state between calls: everything a round needs is
    passed in, and cross-round fairness data lives in a
    :class:`~swisspairing.models.history.PairingHistory` owned by the caller.
    """

    def __init__(self, config: Optional[PairingConfig] = None):
        self.config = config or PairingConfig()

    def generate_pairings(
        self,
        players: Iterable[Player],
        player_results: Iterable[PlayerResult],
        game_history: Iterable[Game],
        round_number: int,
        history: Optional[PairingHistory] = None,
    ) -> PairingResult:
        """Pair one round.

        Parameters
        ----------
        players : iterable of Player
            Everyone to be paired this round.
        player_results : iterable of PlayerResult
            Scores before this round.
        game_history : iterable of Game
            Games of earlier rounds; ongoing games are ignored.
        round_number : int
            Round being paired, starting at 1.
        history : PairingHistory, optional
            Byes, floats and matches of earlier rounds.

        Returns
        -------
        PairingResult
            Boards numbered from 1, byes, the float count and any validation
            problems found.

        Raises
        ------
        InvalidInputException
            If the round number is below 1 or beyond ``total_rounds``, or a
            player id occurs twice.
        """
        config = self.config
        round_number = validate_round_number_strict(round_number, config.total_rounds)
        players = list(players)
        result = PairingResult(round_number=round_number)
        if not players:
            logger.info("Round %d has no players to pair", round_number)
            return result

        swiss_players = build_swiss_players(
            players, player_results, game_history, config, history, round_number
        )
        apply_accelerated_pairings(swiss_players, round_number, config)
        groups = form_score_groups(swiss_players)
        max_floats = calculate_max_floats(len(swiss_players), round_number)
        logger.info(
            "Pairing round %d: %d players in %d score groups, float budget %d",
            round_number,
            len(swiss_players),
            len(groups),
            max_floats,
        )

        pairs, leftovers = self._process_score_groups(groups, max_floats, result)
        if leftovers:
            pairs = self._pair_leftovers(pairs, leftovers, result)
        result.float_count = len(result.floats)

        result.pairings = [
            Pairing(white_player=white.player, black_player=black.player, board_number=board)
            for board, (white, black) in enumerate(pairs, start=1)
        ]
        result.validation_errors.extend(
            validate_round(result, swiss_players, config, max_floats)
        )
        for problem in result.validation_errors:
            logger.warning("Round %d: %s", round_number, problem)

        logger.info(
            "Round %d paired: %d boards, %d byes, %d floats",
            round_number,
            len(result.pairings),
            len(result.byes),
            result.float_count,
        )
        return result

    def _process_score_groups(
        self, groups: List[ScoreGroup], max_floats: int, result: PairingResult
    ) -> Tuple[List[MatchedPair], List[SwissPlayer]]:
        """Pair groups from the top down; returns pairs and players left over."""
        remaining = [list(group.players) for group in groups]
        if sum(map(len, remaining)) % 2 == 1 and not self.config.strict_float_limit:
            bye_player = select_round_bye(remaining)
            remaining = [[p for p in group if p is not bye_player] for group in remaining]
            result.byes.append(bye_player)
            logger.debug("%s receives a bye", bye_player.name)
        pairs: List[MatchedPair] = []
        carry: List[SwissPlayer] = []

        for index in range(len(remaining)):
            # emptied by an upfloat; unmatched players pass straight through
            if not remaining[index]:
                continue
            for player in carry:
                result.floats.setdefault(player.id, FloatDirection.DOWN)
            members = carry + remaining[index]
            remaining[index] = []
            carry = []

            if len(members) % 2 == 1:
                self._resolve_odd_group(members, remaining, index, max_floats, result)

            matched, carry = pair_score_group(members, self.config)
            pairs.extend(matched)
            if carry:
                logger.debug(
                    "Score group %.2f leaves %d players unmatched",
                    groups[index].points,
                    len(carry),
                )

        return pairs, carry

    def _resolve_odd_group(
        self,
        members: List[SwissPlayer],
        remaining: List[List[SwissPlayer]],
        index: int,
        max_floats: int,
        result: PairingResult,
    ) -> None:
        """Even out a group by pulling up a player from below, or by a bye."""
        lower_index = next(
            (j for j in range(index + 1, len(remaining)) if remaining[j]), None
        )
        budget_left = len(result.floats) < max_floats
        if lower_index is not None and (budget_left or not self.config.strict_float_limit):
            floater = find_downfloater(remaining[lower_index], members)
            remaining[lower_index].remove(floater)
            members.append(floater)
            result.floats[floater.id] = FloatDirection.UP
            logger.debug("%s floats up from the next score group", floater.name)
            return

        bye_player = select_bye_player(members)
        members.remove(bye_player)
        result.byes.append(bye_player)
        logger.debug("%s receives a bye", bye_player.name)

    def _pair_leftovers(
        self,
        pairs: List[MatchedPair],
        leftovers: List[SwissPlayer],
        result: PairingResult,
    ) -> List[MatchedPair]:
        """Place players not even the bottom group could pair; returns every pair."""
        leftovers = list(leftovers)
        if len(leftovers) % 2 == 1:
            bye_player = select_bye_player(leftovers)
            leftovers.remove(bye_player)
            result.byes.append(bye_player)
        if not leftovers:
            return pairs

        repaired = self._repair_lowest_boards(pairs, leftovers, result)
        if repaired is not None:
            return repaired

        if not self.config.allow_rematch_as_last_resort:
            logger.warning("%d players left unpaired", len(leftovers))
            return pairs
        logger.warning(
            "Pairing %d leftover players allowing rematches", len(leftovers)
        )
        return pairs + pair_leftovers(leftovers, self.config)

    def _repair_lowest_boards(
        self,
        pairs: List[MatchedPair],
        leftovers: List[SwissPlayer],
        result: PairingResult,
    ) -> Optional[List[MatchedPair]]:
        """Break up the lowest boards, one more at a time, until the leftovers
        fit in without a rematch. None when even the whole field cannot."""
        for count in range(len(pairs) + 1):
            cut = len(pairs) - count
            pool = list(leftovers) + [p for pair in pairs[cut:] for p in pair]
            matching = find_rematch_free_matching(pool, self.config)
            if matching is None:
                continue
            logger.info("Re-paired the lowest %d boards to avoid rematches", count)
            for white, black in matching:
                if white.pairing_points == black.pairing_points:
                    continue
                higher, lower = sorted(
                    (white, black), key=lambda p: p.pairing_points, reverse=True
                )
                result.floats.setdefault(higher.id, FloatDirection.DOWN)
                result.floats.setdefault(lower.id, FloatDirection.UP)
            return pairs[:cut] + matching
        return None


def generate_pairings(
    players: Iterable[Player],
    player_results: Iterable[PlayerResult],
    game_history: Iterable[Game],
    round_number: int,
    config: Optional[PairingConfig] = None,
    history: Optional[PairingHistory] = None,
) -> PairingResult:
    """Pair one round with a throwaway :class:`SwissPairingEngine`."""
    return SwissPairingEngine(config).generate_pairings(
        players, player_results, game_history, round_number, history
    )
