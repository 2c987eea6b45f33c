"""Exceptions for use in Swiss Pairing"""

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


# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every engine error with a single except clause.
    """

    pass


# ========== Input Exceptions ==========


class InvalidInputException(SwissPairingException):
    """Raised when caller supplied data cannot be processed.

    Examples are a round number below 1 or above the tournament length,
    duplicate player ids, or a malformed configuration.
    """

    pass


# ========== Lookup Exceptions ==========


class NotFoundException(SwissPairingException):
    """Base exception for failed lookups."""

    pass


class PlayerNotFoundException(NotFoundException):
    """Raised when a referenced player is missing from the player list."""

    def __init__(self, player_id) -> None:
        super().__init__(f"Player not found: {player_id}")
        self.player_id = player_id


# ========== Pairing Exceptions ==========


class PairingException(SwissPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a generated round breaks a pairing rule."""

    pass


# ========== Result Exceptions ==========


class InvalidResultException(SwissPairingException):
    """Raised when a game result string cannot be classified."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException, InvalidInputException):
    """Raised when configuration data is invalid."""

    pass
