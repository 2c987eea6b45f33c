"""Pairing and PairingResult data classes."""

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
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from swisspairing.exceptions import InvalidPairingException
from swisspairing.models.history import FloatDirection
from swisspairing.models.player import Player
from swisspairing.type_hints import PairingIDs, PlayerId

if TYPE_CHECKING:
    from swisspairing.pairing.swiss_player import SwissPlayer


@dataclass(frozen=True)
class Pairing:
    """One board of a round.

    Attributes:
        white_player: Player with the white pieces
        black_player: Player with the black pieces, None for a bye
        board_number: 1-based board number, unique within a round
    """

    white_player: Player
    black_player: Optional[Player]
    board_number: int

    @property
    def is_bye(self) -> bool:
        return self.black_player is None

    @property
    def player_ids(self) -> List[PlayerId]:
        """Ids of everyone seated at this board."""
        if self.black_player is None:
            return [self.white_player.id]
        return [self.white_player.id, self.black_player.id]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "white_player": self.white_player.to_dict(),
            "black_player": self.black_player.to_dict() if self.black_player else None,
            "board_number": self.board_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        black = data.get("black_player")
        return cls(
            white_player=Player.from_dict(data["white_player"]),
            black_player=Player.from_dict(black) if black else None,
            board_number=data["board_number"],
        )


@dataclass
class PairingResult:
    """Result of a pairing computation for a single round.

    Attributes:
        round_number: Round these pairings belong to
        pairings: Boards, numbered contiguously from 1
        byes: Players without an opponent this round
        float_count: Number of players moved between score groups
        validation_errors: Invariant violations and non-fatal warnings
        floats: Direction each floated player moved, keyed by player id
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    byes: List["SwissPlayer"] = field(default_factory=list)
    float_count: int = 0
    validation_errors: List[str] = field(default_factory=list)
    floats: Dict[PlayerId, FloatDirection] = field(default_factory=dict)

    @property
    def pairing_ids(self) -> List[PairingIDs]:
        """(white id, black id) for every board."""
        return [
            (p.white_player.id, p.black_player.id)
            for p in self.pairings
            if p.black_player is not None
        ]

    @property
    def bye_player_ids(self) -> List[PlayerId]:
        return [sp.id for sp in self.byes]

    @property
    def is_valid(self) -> bool:
        """True when no validation problem was recorded."""
        return not self.validation_errors

    def raise_if_invalid(self) -> None:
        """Raise InvalidPairingException listing every recorded problem."""
        if self.validation_errors:
            raise InvalidPairingException(
                f"Round {self.round_number}: " + "; ".join(self.validation_errors)
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the round's pairings to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "byes": [sp.player.to_dict() for sp in self.byes],
            "float_count": self.float_count,
            "validation_errors": list(self.validation_errors),
            "floats": {str(k): v.value for k, v in self.floats.items()},
        }


#  LocalWords:  PairingResult
