"""Game records and result classification."""

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

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from dateutil.parser import isoparse

from swisspairing.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    RESULT_BLACK_FORFEIT_WIN,
    RESULT_BLACK_WIN,
    RESULT_DOUBLE_FORFEIT,
    RESULT_DRAW_ALIASES,
    RESULT_FORFEIT_ALIASES,
    RESULT_ONGOING,
    RESULT_WHITE_FORFEIT_WIN,
    RESULT_WHITE_WIN,
    WIN_SCORE,
)
from swisspairing.exceptions import InvalidResultException
from swisspairing.type_hints import BLACK, WHITE, Colour, PlayerId
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class GameOutcome(Enum):
    """Classified outcome of a game, with the points each side earns."""

    WHITE_WIN = "white_win"
    BLACK_WIN = "black_win"
    DRAW = "draw"
    WHITE_FORFEIT_WIN = "white_forfeit_win"
    BLACK_FORFEIT_WIN = "black_forfeit_win"
    DOUBLE_FORFEIT = "double_forfeit"
    ONGOING = "ongoing"
    UNKNOWN = "unknown"

    @property
    def white_score(self) -> float:
        return _OUTCOME_SCORES[self][0]

    @property
    def black_score(self) -> float:
        return _OUTCOME_SCORES[self][1]

    @property
    def is_completed(self) -> bool:
        """Whether the game has a final result."""
        return self is not GameOutcome.ONGOING

    @property
    def is_forfeit(self) -> bool:
        """Whether the result was decided without play."""
        return self in (
            GameOutcome.WHITE_FORFEIT_WIN,
            GameOutcome.BLACK_FORFEIT_WIN,
            GameOutcome.DOUBLE_FORFEIT,
        )

    def score_for(self, colour: Colour) -> float:
        """Points earned by the given side."""
        return self.white_score if colour == WHITE else self.black_score


_OUTCOME_SCORES = {
    GameOutcome.WHITE_WIN: (WIN_SCORE, LOSS_SCORE),
    GameOutcome.BLACK_WIN: (LOSS_SCORE, WIN_SCORE),
    GameOutcome.DRAW: (DRAW_SCORE, DRAW_SCORE),
    GameOutcome.WHITE_FORFEIT_WIN: (WIN_SCORE, LOSS_SCORE),
    GameOutcome.BLACK_FORFEIT_WIN: (LOSS_SCORE, WIN_SCORE),
    GameOutcome.DOUBLE_FORFEIT: (LOSS_SCORE, LOSS_SCORE),
    GameOutcome.ONGOING: (LOSS_SCORE, LOSS_SCORE),
    GameOutcome.UNKNOWN: (LOSS_SCORE, LOSS_SCORE),
}

_RESULT_TABLE = {
    RESULT_WHITE_WIN: GameOutcome.WHITE_WIN,
    RESULT_BLACK_WIN: GameOutcome.BLACK_WIN,
    RESULT_ONGOING: GameOutcome.ONGOING,
    RESULT_WHITE_FORFEIT_WIN: GameOutcome.WHITE_FORFEIT_WIN,
    RESULT_BLACK_FORFEIT_WIN: GameOutcome.BLACK_FORFEIT_WIN,
    RESULT_DOUBLE_FORFEIT: GameOutcome.DOUBLE_FORFEIT,
}
_RESULT_TABLE.update({alias: GameOutcome.DRAW for alias in RESULT_DRAW_ALIASES})
_RESULT_TABLE.update(
    {alias: _RESULT_TABLE[code] for alias, code in RESULT_FORFEIT_ALIASES.items()}
)


def parse_game_result(result: Optional[str], strict: bool = False) -> GameOutcome:
    """Classify a stored result string.

    Parameters
    ----------
    result : str
        Result as stored, e.g. "1-0", "1/2-1/2" or "*".
    strict : bool
        Raise instead of returning ``GameOutcome.UNKNOWN`` for unknown strings.

    Returns
    -------
    GameOutcome
        The classified outcome. Missing results count as ongoing.
    """
    if result is None:
        return GameOutcome.ONGOING
    outcome = _RESULT_TABLE.get(result.strip())
    if outcome is not None:
        return outcome
    if strict:
        raise InvalidResultException(f"Unrecognised game result: {result!r}")
    logger.warning("Unrecognised game result %r, scoring it as no points", result)
    return GameOutcome.UNKNOWN


@dataclass(frozen=True)
class Game:
    """A scheduled or completed game.

    A game without a black player is a bye for the white player.

    Attributes
    ----------
    id : int
        Game identifier.
    round_number : int
        Round the game belongs to (1-indexed).
    white_player_id : int or str
        Player with the white pieces (or the bye receiver).
    black_player_id : int or str, optional
        Player with the black pieces, None for a bye.
    result : str
        Result string, "*" while the game is ongoing.
    created_at : datetime, optional
        When the game was stored; orders games within a round.
    """

    id: int
    round_number: int
    white_player_id: PlayerId
    black_player_id: Optional[PlayerId]
    result: str = RESULT_ONGOING
    created_at: Optional[datetime] = None

    @property
    def outcome(self) -> GameOutcome:
        """Classified result of this game."""
        return parse_game_result(self.result)

    @property
    def is_bye(self) -> bool:
        return self.black_player_id is None

    @property
    def is_completed(self) -> bool:
        return self.outcome.is_completed

    def involves(self, player_id: PlayerId) -> bool:
        """Whether the player sat at this board."""
        return player_id in (self.white_player_id, self.black_player_id)

    def colour_of(self, player_id: PlayerId) -> Optional[Colour]:
        """Colour the player had, None if not involved."""
        if self.white_player_id == player_id:
            return WHITE
        if self.black_player_id == player_id:
            return BLACK
        return None

    def opponent_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        """Opponent id of the player, None for byes or uninvolved players."""
        if self.white_player_id == player_id:
            return self.black_player_id
        if self.black_player_id == player_id:
            return self.white_player_id
        return None

    def score_for(self, player_id: PlayerId) -> float:
        """Points the player earned in this game (0.0 if not involved)."""
        colour = self.colour_of(player_id)
        if colour is None:
            return LOSS_SCORE
        return self.outcome.score_for(colour)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "white_player_id": self.white_player_id,
            "black_player_id": self.black_player_id,
            "result": self.result,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        """Deserialize game from dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            round_number=data["round_number"],
            white_player_id=data["white_player_id"],
            black_player_id=data.get("black_player_id"),
            result=data.get("result", RESULT_ONGOING),
            created_at=isoparse(created_at) if created_at else None,
        )


def bye_game(
    game_id: int, round_number: int, player_id: PlayerId, result: str = RESULT_WHITE_WIN
) -> Game:
    """Build the game record representing a bye."""
    return Game(
        id=game_id,
        round_number=round_number,
        white_player_id=player_id,
        black_player_id=None,
        result=result,
    )


__all__ = [
    "Game",
    "GameOutcome",
    "bye_game",
    "parse_game_result",
]
