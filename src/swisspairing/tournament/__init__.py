"""Standings and tiebreaks."""

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

from swisspairing.tournament.models import (
    PlayerStanding,
    StandingsResult,
    TiebreakScore,
    TiebreakType,
    TournamentTiebreakConfig,
)
from swisspairing.tournament.repository import (
    InMemoryTournamentRepository,
    JsonTournamentRepository,
    TournamentRepository,
)
from swisspairing.tournament.standings import assign_ranks, sort_standings
from swisspairing.tournament.tiebreak_calculator import (
    TiebreakCalculator,
    calculate_standings,
)

__all__ = [
    "InMemoryTournamentRepository",
    "JsonTournamentRepository",
    "PlayerStanding",
    "StandingsResult",
    "TiebreakCalculator",
    "TiebreakScore",
    "TiebreakType",
    "TournamentRepository",
    "TournamentTiebreakConfig",
    "assign_ranks",
    "calculate_standings",
    "sort_standings",
]
