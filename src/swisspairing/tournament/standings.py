"""Ordering standings and assigning ranks."""

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

from typing import List

from swisspairing.tournament.models import PlayerStanding


def _standing_sort_key(standing: PlayerStanding):
    return (
        -standing.points,
        tuple(-value for value in standing.tiebreak_values),
        standing.player.name,
    )


def sort_standings(standings: List[PlayerStanding]) -> List[PlayerStanding]:
    """Sort in place: points, then each tiebreak (all descending), then name.

    Returns the same list for convenience.
    """
    standings.sort(key=_standing_sort_key)
    return standings


def is_tied(first: PlayerStanding, second: PlayerStanding) -> bool:
    """Equal points and an identical tiebreak vector."""
    return (
        first.points == second.points
        and first.tiebreak_values == second.tiebreak_values
    )


def assign_ranks(standings: List[PlayerStanding]) -> List[PlayerStanding]:
    """Give every player a rank, sharing it among ties.

    A tied run gets the 1-based position of its first member; the next run
    continues from its own position (1, 2, 2, 4).
    """
    rank = 1
    for position, standing in enumerate(standings, start=1):
        if position > 1 and not is_tied(standings[position - 2], standing):
            rank = position
        standing.rank = rank
    return standings
