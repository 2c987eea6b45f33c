"""Swiss Pairing: Dutch system pairings and tournament standings."""

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

from swisspairing.exceptions import (
    InvalidInputException,
    PlayerNotFoundException,
    SwissPairingException,
)
from swisspairing.models import (
    Game,
    PairingConfig,
    PairingHistory,
    PairingResult,
    Player,
    PlayerResult,
)
from swisspairing.pairing import SwissPairingEngine, generate_pairings
from swisspairing.tournament import (
    TiebreakCalculator,
    TiebreakType,
    TournamentTiebreakConfig,
    calculate_standings,
)

__version__ = "0.1.0"

__all__ = [
    "Game",
    "InvalidInputException",
    "PairingConfig",
    "PairingHistory",
    "PairingResult",
    "Player",
    "PlayerNotFoundException",
    "PlayerResult",
    "SwissPairingException",
    "SwissPairingEngine",
    "TiebreakCalculator",
    "TiebreakType",
    "TournamentTiebreakConfig",
    "calculate_standings",
    "generate_pairings",
]
