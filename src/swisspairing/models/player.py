"""Player records supplied by the persistence layer."""

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
from typing import Any, Dict, Optional

from swisspairing.type_hints import PlayerId
from swisspairing.utils.validation import validate_points_strict, validate_rating_strict


@dataclass(frozen=True)
class Player:
    """A tournament entrant.

    Attributes
    ----------
    id : int or str
        Unique identifier of the player within the tournament.
    name : str
        Player's full name.
    rating : int, optional
        Rating, or None when unrated.
    club : str, optional
        Club affiliation, used for team avoidance.
    country_code : str, optional
        Federation code, used for optional federation avoidance.
    """

    id: PlayerId
    name: str
    rating: Optional[int] = None
    club: Optional[str] = None
    country_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "club": self.club,
            "country_code": self.country_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", f"Player {data['id']}"),
            rating=validate_rating_strict(data.get("rating")),
            club=data.get("club"),
            country_code=data.get("country_code"),
        )


@dataclass
class PlayerResult:
    """A player's standing before the round being paired.

    Attributes
    ----------
    player_id : int or str
        Id of the player these totals belong to.
    points : float
        Current score.
    games_played, wins, draws, losses : int
        Game counters for completed games.
    """

    player_id: PlayerId
    points: float = 0.0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize result totals to dictionary."""
        return {
            "player_id": self.player_id,
            "points": self.points,
            "games_played": self.games_played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerResult":
        """Deserialize result totals from dictionary."""
        return cls(
            player_id=data["player_id"],
            points=validate_points_strict(data.get("points", 0.0)),
            games_played=data.get("games_played", 0),
            wins=data.get("wins", 0),
            draws=data.get("draws", 0),
            losses=data.get("losses", 0),
        )
