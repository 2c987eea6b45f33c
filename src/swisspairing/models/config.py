"""Pairing engine configuration."""

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

from swisspairing.constants import (
    ACCELERATED_LAST_ROUND,
    ACCELERATED_MIN_PLAYERS,
    DEFAULT_RATING,
)
from swisspairing.exceptions import InvalidConfigurationException


@dataclass
class PairingConfig:
    """Settings for the Dutch pairing engine.

    Attributes
    ----------
    total_rounds : int, optional
        Tournament length; round numbers beyond it are rejected.
    accelerated_min_players : int
        Smallest field that gets accelerated pairings.
    accelerated_last_round : int
        Last round that gets accelerated pairings.
    use_accelerated_pairings : bool
        Switch accelerated pairings on or off.
    avoid_same_club : bool
        Penalize pairing two members of the same (non generic) club.
    avoid_same_federation : bool
        Penalize pairing two players of the same federation.
    strict_float_limit : bool
        Give a bye instead of floating once the float budget is spent.
        By default the budget is a soft target and overruns are only reported.
    allow_rematch_as_last_resort : bool
        Pair leftover players even if they already met, rather than leaving
        them unpaired.
    one_bye_per_player : bool
        Players who already had a bye are not bye eligible.
    default_rating : int
        Rating assumed for unrated players.
    """

    total_rounds: Optional[int] = None
    accelerated_min_players: int = ACCELERATED_MIN_PLAYERS
    accelerated_last_round: int = ACCELERATED_LAST_ROUND
    use_accelerated_pairings: bool = True
    avoid_same_club: bool = True
    avoid_same_federation: bool = False
    strict_float_limit: bool = False
    allow_rematch_as_last_resort: bool = True
    one_bye_per_player: bool = False
    default_rating: int = DEFAULT_RATING

    def __post_init__(self):
        if self.total_rounds is not None and self.total_rounds < 1:
            raise InvalidConfigurationException(
                f"total_rounds must be at least 1: {self.total_rounds}"
            )
        if self.accelerated_min_players < 2:
            raise InvalidConfigurationException(
                f"accelerated_min_players must be at least 2: {self.accelerated_min_players}"
            )
        if self.accelerated_last_round < 0:
            raise InvalidConfigurationException(
                f"accelerated_last_round cannot be negative: {self.accelerated_last_round}"
            )
        if self.default_rating < 0:
            raise InvalidConfigurationException(
                f"default_rating cannot be negative: {self.default_rating}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "total_rounds": self.total_rounds,
            "accelerated_min_players": self.accelerated_min_players,
            "accelerated_last_round": self.accelerated_last_round,
            "use_accelerated_pairings": self.use_accelerated_pairings,
            "avoid_same_club": self.avoid_same_club,
            "avoid_same_federation": self.avoid_same_federation,
            "strict_float_limit": self.strict_float_limit,
            "allow_rematch_as_last_resort": self.allow_rematch_as_last_resort,
            "one_bye_per_player": self.one_bye_per_player,
            "default_rating": self.default_rating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingConfig":
        """Deserialize configuration from dictionary."""
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown pairing settings: {sorted(unknown)}"
            )
        return cls(**data)
