"""Data models exchanged with the pairing engine and standings calculator."""

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

from swisspairing.models.config import PairingConfig
from swisspairing.models.game import Game, GameOutcome, bye_game, parse_game_result
from swisspairing.models.history import FloatDirection, PairingHistory
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player import Player, PlayerResult

__all__ = [
    "FloatDirection",
    "Game",
    "GameOutcome",
    "Pairing",
    "PairingConfig",
    "PairingHistory",
    "PairingResult",
    "Player",
    "PlayerResult",
    "bye_game",
    "parse_game_result",
]
