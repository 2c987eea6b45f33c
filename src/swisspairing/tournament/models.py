"""Standings and tiebreak data models."""

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
from typing import Any, Dict, List, Optional, Tuple, Union

from swisspairing.constants import TIEBREAK_DISPLAY_DECIMALS
from swisspairing.models.player import Player


class TiebreakType(str, Enum):
    """Tiebreak kinds, serialized as snake_case strings."""

    BUCHHOLZ_FULL = "buchholz_full"
    BUCHHOLZ_CUT_1 = "buchholz_cut1"
    BUCHHOLZ_CUT_2 = "buchholz_cut2"
    BUCHHOLZ_MEDIAN = "buchholz_median"
    SONNEBORN_BERGER = "sonneborn_berger"
    PROGRESSIVE_SCORE = "progressive_score"
    CUMULATIVE_SCORE = "cumulative_score"
    DIRECT_ENCOUNTER = "direct_encounter"
    AVERAGE_RATING_OF_OPPONENTS = "average_rating_of_opponents"
    TOURNAMENT_PERFORMANCE_RATING = "tournament_performance_rating"
    NUMBER_OF_WINS = "number_of_wins"
    NUMBER_OF_GAMES_WITH_BLACK = "number_of_games_with_black"
    NUMBER_OF_WINS_WITH_BLACK = "number_of_wins_with_black"
    KOYA_SYSTEM = "koya_system"
    AROC_CUT_1 = "aroc_cut1"
    AROC_CUT_2 = "aroc_cut2"
    MATCH_POINTS = "match_points"
    GAME_POINTS = "game_points"
    BOARD_POINTS = "board_points"

    @property
    def display_name(self) -> str:
        return TIEBREAK_DISPLAY_NAMES[self]

    @property
    def short_name(self) -> str:
        return TIEBREAK_SHORT_NAMES[self]

    @classmethod
    def parse(cls, value: Union["TiebreakType", str]) -> Union["TiebreakType", str]:
        """Known kinds become members; unknown strings are kept as they are."""
        if isinstance(value, TiebreakType):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


TIEBREAK_DISPLAY_NAMES = {
    TiebreakType.BUCHHOLZ_FULL: "Buchholz",
    TiebreakType.BUCHHOLZ_CUT_1: "Buchholz Cut-1",
    TiebreakType.BUCHHOLZ_CUT_2: "Buchholz Cut-2",
    TiebreakType.BUCHHOLZ_MEDIAN: "Median Buchholz",
    TiebreakType.SONNEBORN_BERGER: "Sonneborn-Berger",
    TiebreakType.PROGRESSIVE_SCORE: "Progressive Score",
    TiebreakType.CUMULATIVE_SCORE: "Cumulative Score",
    TiebreakType.DIRECT_ENCOUNTER: "Direct Encounter",
    TiebreakType.AVERAGE_RATING_OF_OPPONENTS: "Average Rating of Opponents (ARO)",
    TiebreakType.TOURNAMENT_PERFORMANCE_RATING: "Tournament Performance Rating (TPR)",
    TiebreakType.NUMBER_OF_WINS: "Number of Wins",
    TiebreakType.NUMBER_OF_GAMES_WITH_BLACK: "Games with Black",
    TiebreakType.NUMBER_OF_WINS_WITH_BLACK: "Wins with Black",
    TiebreakType.KOYA_SYSTEM: "Koya System",
    TiebreakType.AROC_CUT_1: "AROC Cut-1",
    TiebreakType.AROC_CUT_2: "AROC Cut-2",
    TiebreakType.MATCH_POINTS: "Match Points",
    TiebreakType.GAME_POINTS: "Game Points",
    TiebreakType.BOARD_POINTS: "Board Points",
}

TIEBREAK_SHORT_NAMES = {
    TiebreakType.BUCHHOLZ_FULL: "Buch",
    TiebreakType.BUCHHOLZ_CUT_1: "Buch-1",
    TiebreakType.BUCHHOLZ_CUT_2: "Buch-2",
    TiebreakType.BUCHHOLZ_MEDIAN: "Med-Buch",
    TiebreakType.SONNEBORN_BERGER: "S-B",
    TiebreakType.PROGRESSIVE_SCORE: "Prog",
    TiebreakType.CUMULATIVE_SCORE: "Cumul",
    TiebreakType.DIRECT_ENCOUNTER: "DE",
    TiebreakType.AVERAGE_RATING_OF_OPPONENTS: "ARO",
    TiebreakType.TOURNAMENT_PERFORMANCE_RATING: "TPR",
    TiebreakType.NUMBER_OF_WINS: "Wins",
    TiebreakType.NUMBER_OF_GAMES_WITH_BLACK: "Black",
    TiebreakType.NUMBER_OF_WINS_WITH_BLACK: "W-Black",
    TiebreakType.KOYA_SYSTEM: "Koya",
    TiebreakType.AROC_CUT_1: "AROC-1",
    TiebreakType.AROC_CUT_2: "AROC-2",
    TiebreakType.MATCH_POINTS: "MP",
    TiebreakType.GAME_POINTS: "GP",
    TiebreakType.BOARD_POINTS: "BP",
}

DEFAULT_TIEBREAK_ORDER = [
    TiebreakType.BUCHHOLZ_FULL,
    TiebreakType.BUCHHOLZ_CUT_1,
    TiebreakType.NUMBER_OF_WINS,
    TiebreakType.DIRECT_ENCOUNTER,
]

# A configured tiebreak: a known kind, or an unrecognised name kept verbatim
TiebreakKind = Union[TiebreakType, str]


def _kind_to_str(kind: TiebreakKind) -> str:
    return kind.value if isinstance(kind, TiebreakType) else str(kind)


def format_tiebreak_value(value: float) -> str:
    return f"{value:.{TIEBREAK_DISPLAY_DECIMALS}f}"


@dataclass
class TournamentTiebreakConfig:
    """Which tiebreaks a tournament uses, in priority order.

    Attributes:
        tournament_id: Tournament the configuration belongs to
        tiebreaks: Ordered tiebreak kinds; unknown names are kept and score 0.0
        use_fide_defaults: Whether the FIDE default order was chosen
    """

    tournament_id: int = 0
    tiebreaks: List[TiebreakKind] = field(
        default_factory=lambda: list(DEFAULT_TIEBREAK_ORDER)
    )
    use_fide_defaults: bool = True

    def __post_init__(self):
        self.tiebreaks = [TiebreakType.parse(kind) for kind in self.tiebreaks]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "tournament_id": self.tournament_id,
            "tiebreaks": [_kind_to_str(kind) for kind in self.tiebreaks],
            "use_fide_defaults": self.use_fide_defaults,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentTiebreakConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            tournament_id=data.get("tournament_id", 0),
            tiebreaks=data.get("tiebreaks", list(DEFAULT_TIEBREAK_ORDER)),
            use_fide_defaults=data.get("use_fide_defaults", True),
        )


@dataclass
class TiebreakScore:
    """One tiebreak value of one player."""

    tiebreak_type: TiebreakKind
    value: float
    display_value: str = ""

    def __post_init__(self):
        if not self.display_value:
            self.display_value = format_tiebreak_value(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tiebreak_type": _kind_to_str(self.tiebreak_type),
            "value": self.value,
            "display_value": self.display_value,
        }


@dataclass
class PlayerStanding:
    """A player's line in the standings.

    Attributes:
        player: The player
        rank: 1-based rank; tied players share the rank of the first of them
        points: Total score
        games_played: Completed games with an opponent
        wins, draws, losses: Game counters
        tiebreak_scores: Values in the configured tiebreak order
        performance_rating: Rating performance, None without rated opponents
    """

    player: Player
    rank: int = 0
    points: float = 0.0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    tiebreak_scores: List[TiebreakScore] = field(default_factory=list)
    performance_rating: Optional[int] = None

    @property
    def tiebreak_values(self) -> Tuple[float, ...]:
        return tuple(score.value for score in self.tiebreak_scores)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "player": self.player.to_dict(),
            "rank": self.rank,
            "points": self.points,
            "games_played": self.games_played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "tiebreak_scores": [score.to_dict() for score in self.tiebreak_scores],
            "performance_rating": self.performance_rating,
        }


@dataclass
class StandingsResult:
    """Full standings with the time they were computed."""

    standings: List[PlayerStanding]
    last_updated: str
    tiebreak_config: TournamentTiebreakConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "standings": [s.to_dict() for s in self.standings],
            "last_updated": self.last_updated,
            "tiebreak_config": self.tiebreak_config.to_dict(),
        }
