"""Checks run over a finished round of pairings.

Problems are returned as human readable strings; the engine attaches them to
the :class:`~swisspairing.models.pairing.PairingResult` rather than raising,
so callers decide whether a round with warnings is acceptable.
"""

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

from collections import Counter
from typing import Dict, List, Optional, Sequence

from swisspairing.models.config import PairingConfig
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.pairing.colors import Color
from swisspairing.pairing.matcher import are_same_club
from swisspairing.pairing.swiss_player import SwissPlayer
from swisspairing.type_hints import PlayerId

# longest run of one colour allowed
MAX_CONSECUTIVE_COLORS = 3
# allowed |whites - blacks| in long and short tournaments
LONG_EVENT_ROUNDS = 9
MAX_COLOR_IMBALANCE_LONG = 2
MAX_COLOR_IMBALANCE_SHORT = 3


def consecutive_run(color_history: Sequence[Color], assigned: Color) -> int:
    """Length of the run of ``assigned`` once it is appended to the history."""
    run = 1
    for color in reversed(color_history):
        if color is not assigned:
            break
        run += 1
    return run


def color_imbalance(color_history: Sequence[Color], assigned: Color) -> int:
    history = list(color_history) + [assigned]
    return abs(history.count(Color.WHITE) - history.count(Color.BLACK))


def validate_structure(result: PairingResult) -> List[str]:
    """Hard invariants: no self pairing, one appearance per player, boards 1..n."""
    errors = []
    appearances: Counter = Counter()
    names: Dict[PlayerId, str] = {}

    for pairing in result.pairings:
        if pairing.black_player is not None and pairing.white_player.id == pairing.black_player.id:
            errors.append(
                f"Player {pairing.white_player.name} is paired against themself "
                f"on board {pairing.board_number}"
            )
        for player in (pairing.white_player, pairing.black_player):
            if player is not None:
                appearances[player.id] += 1
                names[player.id] = player.name
    for bye_player in result.byes:
        appearances[bye_player.id] += 1
        names[bye_player.id] = bye_player.name

    for player_id, count in appearances.items():
        if count > 1:
            errors.append(
                f"Player {names[player_id]} appears {count} times in round "
                f"{result.round_number}"
            )

    boards = [p.board_number for p in result.pairings]
    if sorted(boards) != list(range(1, len(boards) + 1)):
        errors.append(f"Board numbers are not contiguous from 1: {sorted(boards)}")
    return errors


def _color_warnings(
    pairing: Pairing, players: Dict[PlayerId, SwissPlayer], round_number: int
) -> List[str]:
    warnings = []
    seats = ((pairing.white_player, Color.WHITE), (pairing.black_player, Color.BLACK))
    for player, assigned in seats:
        swiss = players.get(player.id)
        if swiss is None:
            continue
        pref = swiss.color_preference
        if pref.is_absolute and pref.color is not assigned:
            warnings.append(
                f"Player {player.name} has an absolute {pref.color.value} preference "
                f"but plays {assigned.value}"
            )
        run = consecutive_run(swiss.color_history, assigned)
        if run > MAX_CONSECUTIVE_COLORS:
            warnings.append(
                f"Player {player.name} gets {assigned.value} for the {run}th time in a row"
            )
        limit = (
            MAX_COLOR_IMBALANCE_LONG
            if round_number >= LONG_EVENT_ROUNDS
            else MAX_COLOR_IMBALANCE_SHORT
        )
        imbalance = color_imbalance(swiss.color_history, assigned)
        if imbalance > limit:
            warnings.append(
                f"Player {player.name} colour imbalance of {imbalance} exceeds {limit}"
            )
    return warnings


def validate_round(
    result: PairingResult,
    players: Sequence[SwissPlayer],
    config: Optional[PairingConfig] = None,
    max_floats: Optional[int] = None,
) -> List[str]:
    """Collect every invariant violation and warning for a round.

    Parameters
    ----------
    result : PairingResult
        The generated round.
    players : sequence of SwissPlayer
        Player state the round was generated from.
    config : PairingConfig, optional
        Engine settings (club avoidance).
    max_floats : int, optional
        Soft float budget; exceeding it is reported.

    Returns
    -------
    list of str
        Empty when the round is clean.
    """
    config = config or PairingConfig()
    by_id = {p.id: p for p in players}
    problems = validate_structure(result)

    if max_floats is not None and result.float_count > max_floats:
        problems.append(
            f"{result.float_count} floats exceed the limit of {max_floats} "
            f"for round {result.round_number} with {len(players)} players"
        )

    for pairing in result.pairings:
        if pairing.black_player is None:
            continue
        white = by_id.get(pairing.white_player.id)
        black = by_id.get(pairing.black_player.id)
        if white is not None and black is not None:
            if white.has_played(black) or black.has_played(white):
                problems.append(
                    f"Rematch: {white.name} vs {black.name} have already played"
                )
            if config.avoid_same_club and are_same_club(white, black):
                problems.append(
                    f"Same club pairing: {white.name} vs {black.name} "
                    f"(both from '{white.club}')"
                )
        problems.extend(_color_warnings(pairing, by_id, result.round_number))

    for bye_player in result.byes:
        previous = by_id.get(bye_player.id, bye_player).bye_count
        if previous > 0:
            problems.append(
                f"Player {bye_player.name} receives another bye "
                f"({previous} before this round)"
            )

    seated = {pid for pairing in result.pairings for pid in pairing.player_ids}
    seated.update(result.bye_player_ids)
    for player in players:
        if player.id not in seated:
            problems.append(f"Player {player.name} could not be paired")

    return problems
