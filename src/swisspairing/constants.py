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

# --- Constants ---

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Rating used for unrated players when pairing
DEFAULT_RATING = 1200

# Result strings (as stored by the game repository)
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_ONGOING = "*"
RESULT_DRAW_ALIASES = ("1/2-1/2", "0.5-0.5", "½-½")
RESULT_WHITE_FORFEIT_WIN = "1-0 FF"  # Black did not show
RESULT_BLACK_FORFEIT_WIN = "0-1 FF"  # White did not show
RESULT_DOUBLE_FORFEIT = "0-0 FF"
RESULT_FORFEIT_ALIASES = {
    "+/-": RESULT_WHITE_FORFEIT_WIN,
    "-/+": RESULT_BLACK_FORFEIT_WIN,
    "-/-": RESULT_DOUBLE_FORFEIT,
}

# Accelerated pairings
ACCELERATED_MIN_PLAYERS = 16
ACCELERATED_LAST_ROUND = 2

# Float budget as a share of the field
FLOAT_BUDGET_EARLY_SHARE = 0.25  # rounds 1-2
FLOAT_BUDGET_MIDDLE_FACTOR = 0.75  # rounds 3-5, applied to the early budget
FLOAT_BUDGET_LATE_FACTOR = 0.5  # round 6 onwards

# Partner attempts before the rematch-free search gives up
MATCHING_SEARCH_LIMIT = 5000

# Pairing score weights
BASE_PAIRING_SCORE = 1000.0
RATING_DIFF_DIVISOR = 50.0
MAX_RATING_PENALTY = 100.0
COLOR_WEIGHT = 200.0
REMATCH_PENALTY = -10000.0
SAME_CLUB_PENALTY = -5000.0
MAJOR_FEDERATION_PENALTY = -2000.0
MINOR_FEDERATION_PENALTY = -4000.0
POINTS_DIFF_PENALTY = 50.0
VARIETY_BONUS = 10.0
VARIETY_MIN_RATING_GAP = 100
VARIETY_MAX_RATING_GAP = 400

# Colour compatibility factors (multiplied by COLOR_WEIGHT)
COMPAT_ABSOLUTE_PAIR = 1.0
COMPAT_ABSOLUTE_SINGLE = 0.9
COMPAT_STRONG = 0.6
COMPAT_MILD_PAIR = 0.3
CONFLICT_ABSOLUTE = -100.0
CONFLICT_STRONG = -50.0
CONFLICT_MILD = -10.0

GENERIC_CLUB_NAMES = (
    "unaffiliated",
    "independent",
    "no club",
    "individual",
    "private",
    "local club",
    "chess club",
    "unknown",
    "n/a",
    "none",
    "tbd",
)

MAJOR_FEDERATIONS = (
    "RUS",
    "USA",
    "CHN",
    "IND",
    "FRA",
    "GER",
    "UKR",
    "ARM",
    "IRA",
)

# Compensatory points for late entries, by entry round
LATE_ENTRY_POINTS = {1: 0.0, 2: 0.0, 3: 0.5, 4: 1.0, 5: 1.5}

# Tiebreak display precision
TIEBREAK_DISPLAY_DECIMALS = 3

# Tournament performance rating clamp
TPR_MAX_DIFFERENCE = 800.0
