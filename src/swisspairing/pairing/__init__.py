"""Dutch system Swiss pairing."""

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

from swisspairing.pairing.colors import (
    Color,
    ColorPreference,
    PreferenceStrength,
    calculate_color_preference,
)
from swisspairing.pairing.dutch_swiss import SwissPairingEngine, generate_pairings
from swisspairing.pairing.swiss_player import SwissPlayer, build_swiss_players

__all__ = [
    "Color",
    "ColorPreference",
    "PreferenceStrength",
    "SwissPairingEngine",
    "SwissPlayer",
    "build_swiss_players",
    "calculate_color_preference",
    "generate_pairings",
]
