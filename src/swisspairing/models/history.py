"""Cross-round pairing history."""

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
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

from swisspairing.type_hints import PlayerId

if TYPE_CHECKING:
    from swisspairing.models.pairing import PairingResult


class FloatDirection(str, Enum):
    """Direction a player moved between score groups."""

    UP = "up"
    DOWN = "down"


@dataclass
class PairingHistory:
    """
    Tracks what happened in earlier rounds so fairness holds across rounds.

    The engine is stateless; callers persist this object between rounds and
    update it with :meth:`record_round` once a round is finalized.

    Attributes
    ----------
    previous_matches : set of frozenset
        Pairs of player ids that have already met.
    byes : dict of player id to list of int
        Rounds in which each player received a bye.
    floats : dict of player id to list of (int, FloatDirection)
        Rounds in which each player floated, with the direction.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    byes: Dict[PlayerId, List[int]] = field(default_factory=dict)
    floats: Dict[PlayerId, List[Tuple[int, FloatDirection]]] = field(
        default_factory=dict
    )

    def add_pairing(self, player1_id: PlayerId, player2_id: PlayerId) -> None:
        """Record that two players have been paired."""
        self.previous_matches.add(frozenset({player1_id, player2_id}))

    def have_played(self, player1_id: PlayerId, player2_id: PlayerId) -> bool:
        """Check if two players have previously played each other."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def add_bye(self, player_id: PlayerId, round_number: int) -> None:
        rounds = self.byes.setdefault(player_id, [])
        if round_number not in rounds:
            rounds.append(round_number)

    def add_float(
        self, player_id: PlayerId, round_number: int, direction: FloatDirection
    ) -> None:
        self.floats.setdefault(player_id, []).append((round_number, direction))

    def bye_count(self, player_id: PlayerId) -> int:
        return len(self.byes.get(player_id, []))

    def has_had_bye(self, player_id: PlayerId) -> bool:
        return self.bye_count(player_id) > 0

    def last_float(
        self, player_id: PlayerId, before_round: Optional[int] = None
    ) -> Optional[Tuple[int, FloatDirection]]:
        """Most recent float of a player, optionally only rounds before ``before_round``."""
        entries = [
            entry
            for entry in self.floats.get(player_id, [])
            if before_round is None or entry[0] < before_round
        ]
        if not entries:
            return None
        return max(entries, key=lambda entry: entry[0])

    def floated_up_in(self, player_id: PlayerId, round_number: int) -> bool:
        return (round_number, FloatDirection.UP) in self.floats.get(player_id, [])

    def record_round(self, result: "PairingResult") -> None:
        """Fold a finalized round into the history."""
        for pairing in result.pairings:
            if pairing.black_player is not None:
                self.add_pairing(pairing.white_player.id, pairing.black_player.id)
        for bye_player in result.byes:
            self.add_bye(bye_player.id, result.round_number)
        for player_id, direction in result.floats.items():
            self.add_float(player_id, result.round_number, direction)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": [sorted(pair, key=str) for pair in self.previous_matches],
            "byes": [[pid, rounds] for pid, rounds in self.byes.items()],
            "floats": [
                [pid, [[rnd, direction.value] for rnd, direction in entries]]
                for pid, entries in self.floats.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(pair) for pair in data.get("previous_matches", [])
            ),
            byes={pid: list(rounds) for pid, rounds in data.get("byes", [])},
            floats={
                pid: [(int(rnd), FloatDirection(direction)) for rnd, direction in entries]
                for pid, entries in data.get("floats", [])
            },
        )
