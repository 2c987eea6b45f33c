"""Input validation helpers.

Validators return a :class:`ValidationResult`; the ``*_strict`` variants raise
:class:`~swisspairing.exceptions.InvalidInputException` instead.
"""

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

from typing import Iterable, Optional

from swisspairing.exceptions import InvalidInputException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value=None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _raise_if_invalid(result: ValidationResult):
    if not result.is_valid:
        raise InvalidInputException(result.error_message)
    return result.sanitized_value


# ========== Rating Validation ==========


def validate_rating(
    rating: Optional[int], min_rating: int = 0, max_rating: int = 3500
) -> ValidationResult:
    """Validate a chess rating. ``None`` (unrated) is valid.

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with the rating as int (or None) when valid
    """
    if rating is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        rating_int = int(rating)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=rating_int)


def validate_rating_strict(rating: Optional[int]) -> Optional[int]:
    """Validate rating and return it, or raise InvalidInputException."""
    return _raise_if_invalid(validate_rating(rating))


# ========== Round Validation ==========


def validate_round_number(
    round_number: int, total_rounds: Optional[int] = None
) -> ValidationResult:
    """Validate a 1-based round number against the tournament length.

    Args:
        round_number: Round being paired
        total_rounds: Tournament length, if known

    Returns:
        ValidationResult with the round as int when valid
    """
    if isinstance(round_number, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Round number must be an integer: {round_number}",
        )
    try:
        round_int = int(round_number)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Round number must be an integer: {round_number}",
        )

    if round_int < 1:
        return ValidationResult(
            is_valid=False,
            error_message=f"Round number must be at least 1: {round_int}",
        )

    if total_rounds is not None and round_int > total_rounds:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Round number {round_int} exceeds tournament length of "
                f"{total_rounds} rounds"
            ),
        )

    return ValidationResult(is_valid=True, sanitized_value=round_int)


def validate_round_number_strict(
    round_number: int, total_rounds: Optional[int] = None
) -> int:
    """Validate a round number and return it, or raise InvalidInputException."""
    return _raise_if_invalid(validate_round_number(round_number, total_rounds))


# ========== Score Validation ==========


def validate_points(points) -> ValidationResult:
    """Validate a tournament score (non-negative multiple of a quarter point)."""
    try:
        float_points = float(points)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Points must be a number: {points}",
        )

    if float_points < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Points cannot be negative: {float_points}",
        )

    return ValidationResult(is_valid=True, sanitized_value=float_points)


def validate_points_strict(points) -> float:
    """Validate points and return them as float, or raise InvalidInputException."""
    return _raise_if_invalid(validate_points(points))


# ========== Identity Validation ==========


def validate_unique_ids(ids: Iterable) -> ValidationResult:
    """Check that no player id occurs twice."""
    seen = set()
    duplicates = []
    for player_id in ids:
        if player_id in seen:
            duplicates.append(player_id)
        seen.add(player_id)

    if duplicates:
        return ValidationResult(
            is_valid=False,
            error_message=f"Duplicate player ids: {sorted(map(str, duplicates))}",
        )
    return ValidationResult(is_valid=True)


def validate_unique_ids_strict(ids: Iterable) -> None:
    """Raise InvalidInputException when a player id occurs twice."""
    _raise_if_invalid(validate_unique_ids(ids))
