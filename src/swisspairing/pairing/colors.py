"""Colour preferences and the colour preference classifier."""

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
from enum import Enum
from typing import Optional, Sequence

from swisspairing.exceptions import InvalidInputException


class Color(str, Enum):
    """A side of the board. Compares equal to the WHITE/BLACK strings."""

    WHITE = "White"
    BLACK = "Black"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @classmethod
    def parse(cls, value) -> "Color":
        """Accept a Color, "White"/"Black" or "w"/"b" (any case)."""
        if isinstance(value, Color):
            return value
        text = str(value).strip().lower()
        if text in ("white", "w"):
            return cls.WHITE
        if text in ("black", "b"):
            return cls.BLACK
        raise InvalidInputException(f"Unknown colour: {value!r}")


class PreferenceStrength(Enum):
    """How strongly a player needs a colour, strongest first."""

    ABSOLUTE = 3
    STRONG = 2
    MILD = 1
    NONE = 0


@dataclass(frozen=True)
class ColorPreference:
    """A colour requirement: strength plus the wanted colour (None for no preference)."""

    strength: PreferenceStrength
    color: Optional[Color] = None

    @classmethod
    def absolute(cls, color: Color) -> "ColorPreference":
        return cls(PreferenceStrength.ABSOLUTE, color)

    @classmethod
    def strong(cls, color: Color) -> "ColorPreference":
        return cls(PreferenceStrength.STRONG, color)

    @classmethod
    def mild(cls, color: Color) -> "ColorPreference":
        return cls(PreferenceStrength.MILD, color)

    @classmethod
    def none(cls) -> "ColorPreference":
        return cls(PreferenceStrength.NONE, None)

    @property
    def is_absolute(self) -> bool:
        return self.strength is PreferenceStrength.ABSOLUTE

    @property
    def is_strong(self) -> bool:
        return self.strength is PreferenceStrength.STRONG

    @property
    def has_preference(self) -> bool:
        return self.strength is not PreferenceStrength.NONE

    def wants(self, color: Color) -> bool:
        """True when this preference asks for ``color``."""
        return self.has_preference and self.color is color

    def __str__(self) -> str:
        if not self.has_preference:
            return "None"
        return f"{self.strength.name.title()}({self.color.value})"


def calculate_color_preference(color_history: Sequence[Color]) -> ColorPreference:
    """Derive a colour preference from the colours a player has had.

    Parameters
    ----------
    color_history : sequence of Color
        Colours in round order, byes excluded.

    Returns
    -------
    ColorPreference
        Absolute opposite colour after three identical colours in a row,
        strong opposite colour after two, mild toward the under represented
        colour when the totals differ by more than one, otherwise none.
    """
    history = [Color.parse(c) for c in color_history]
    if len(history) < 2:
        return ColorPreference.none()

    last = history[-1]
    if len(history) >= 3 and history[-3] == history[-2] == last:
        return ColorPreference.absolute(last.opposite)
    if history[-2] == last:
        return ColorPreference.strong(last.opposite)

    white_count = history.count(Color.WHITE)
    black_count = history.count(Color.BLACK)
    if white_count - black_count > 1:
        return ColorPreference.mild(Color.BLACK)
    if black_count - white_count > 1:
        return ColorPreference.mild(Color.WHITE)
    return ColorPreference.none()
