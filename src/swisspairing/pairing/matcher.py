"""Matching players inside a score group and assigning colours."""

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

from typing import List, Optional, Sequence, Tuple

from swisspairing.constants import (
    BASE_PAIRING_SCORE,
    COLOR_WEIGHT,
    COMPAT_ABSOLUTE_PAIR,
    COMPAT_ABSOLUTE_SINGLE,
    COMPAT_MILD_PAIR,
    COMPAT_STRONG,
    CONFLICT_ABSOLUTE,
    CONFLICT_MILD,
    CONFLICT_STRONG,
    GENERIC_CLUB_NAMES,
    MAJOR_FEDERATION_PENALTY,
    MAJOR_FEDERATIONS,
    MATCHING_SEARCH_LIMIT,
    MAX_RATING_PENALTY,
    MINOR_FEDERATION_PENALTY,
    POINTS_DIFF_PENALTY,
    RATING_DIFF_DIVISOR,
    REMATCH_PENALTY,
    SAME_CLUB_PENALTY,
    VARIETY_BONUS,
    VARIETY_MAX_RATING_GAP,
    VARIETY_MIN_RATING_GAP,
)
from swisspairing.models.config import PairingConfig
from swisspairing.pairing.colors import Color, ColorPreference, PreferenceStrength
from swisspairing.pairing.score_groups import sort_by_rating
from swisspairing.pairing.swiss_player import SwissPlayer
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

# (white, black)
MatchedPair = Tuple[SwissPlayer, SwissPlayer]


# ========== Team avoidance ==========


def is_generic_club_name(club_name: str) -> bool:
    """Club names such as "Unaffiliated" never trigger avoidance."""
    return club_name.strip().lower() in GENERIC_CLUB_NAMES


def are_same_club(player1: SwissPlayer, player2: SwissPlayer) -> bool:
    club1, club2 = player1.club, player2.club
    if not club1 or not club2:
        return False
    if club1.strip().lower() != club2.strip().lower():
        return False
    return not is_generic_club_name(club1)


def federation_penalty(country_code: str) -> float:
    """Penalty for a same federation pairing; major federations get the milder one."""
    if country_code.strip().upper() in MAJOR_FEDERATIONS:
        return MAJOR_FEDERATION_PENALTY
    return MINOR_FEDERATION_PENALTY


def calculate_team_avoidance_penalty(
    player1: SwissPlayer, player2: SwissPlayer, config: PairingConfig
) -> float:
    if config.avoid_same_club and are_same_club(player1, player2):
        return SAME_CLUB_PENALTY
    if config.avoid_same_federation:
        country1, country2 = player1.country_code, player2.country_code
        if country1 and country2 and country1.strip().upper() == country2.strip().upper():
            return federation_penalty(country1)
    return 0.0


# ========== Scoring ==========


def calculate_color_compatibility(
    pref1: ColorPreference, pref2: ColorPreference
) -> float:
    """Bonus (or penalty) for how well two colour preferences fit together."""
    s1, s2 = pref1.strength, pref2.strength
    absolute, strong, mild = (
        PreferenceStrength.ABSOLUTE,
        PreferenceStrength.STRONG,
        PreferenceStrength.MILD,
    )

    if s1 is absolute and s2 is absolute:
        if pref1.color is not pref2.color:
            return COMPAT_ABSOLUTE_PAIR * COLOR_WEIGHT
        return CONFLICT_ABSOLUTE
    if s1 is absolute or s2 is absolute:
        return COMPAT_ABSOLUTE_SINGLE * COLOR_WEIGHT
    if s1 is strong and s2 is strong:
        if pref1.color is not pref2.color:
            return COMPAT_STRONG * COLOR_WEIGHT
        return CONFLICT_STRONG
    if s1 is strong or s2 is strong:
        return COMPAT_STRONG * COLOR_WEIGHT
    if s1 is mild and s2 is mild:
        if pref1.color is not pref2.color:
            return COMPAT_MILD_PAIR * COLOR_WEIGHT
        return CONFLICT_MILD
    return 0.0


def calculate_pairing_score(
    player1: SwissPlayer,
    player2: SwissPlayer,
    config: Optional[PairingConfig] = None,
) -> float:
    """Weighted desirability of pairing two players; higher is better.

    Parameters
    ----------
    player1, player2 : SwissPlayer
        The candidate pair.
    config : PairingConfig, optional
        Controls club and federation avoidance.

    Returns
    -------
    float
        Base 1000, minus a rating gap penalty (capped at 100), plus the
        colour compatibility term, minus 10000 for a rematch, minus the team
        avoidance penalty, minus 50 per point of score difference, plus a
        small bonus for rating gaps of 100-400.
    """
    config = config or PairingConfig()
    score = BASE_PAIRING_SCORE

    rating_gap = abs(player1.rating - player2.rating)
    score -= min(rating_gap / RATING_DIFF_DIVISOR, MAX_RATING_PENALTY)

    score += calculate_color_compatibility(
        player1.color_preference, player2.color_preference
    )

    if player1.has_played(player2) or player2.has_played(player1):
        score += REMATCH_PENALTY

    score += calculate_team_avoidance_penalty(player1, player2, config)

    points_gap = abs(player1.pairing_points - player2.pairing_points)
    if points_gap > 0:
        score -= POINTS_DIFF_PENALTY * points_gap

    if VARIETY_MIN_RATING_GAP <= rating_gap <= VARIETY_MAX_RATING_GAP:
        score += VARIETY_BONUS

    return score


# ========== Colours ==========


def assign_colors(player1: SwissPlayer, player2: SwissPlayer) -> MatchedPair:
    """Decide who gets white.

    Absolute preferences win over strong ones; within a strength the first
    player's wish is looked at before the second's, white before black.
    Without a deciding preference the higher rated player gets white.
    """
    for strength in (PreferenceStrength.ABSOLUTE, PreferenceStrength.STRONG):
        for player, other in ((player1, player2), (player2, player1)):
            pref = player.color_preference
            if pref.strength is not strength:
                continue
            if pref.color is Color.WHITE:
                return player, other
            if pref.color is Color.BLACK:
                return other, player

    if player1.rating >= player2.rating:
        return player1, player2
    return player2, player1


# ========== Matching ==========


def _is_rematch(player1: SwissPlayer, player2: SwissPlayer) -> bool:
    return player1.has_played(player2) or player2.has_played(player1)


def greedy_match(
    players: Sequence[SwissPlayer], config: Optional[PairingConfig] = None
) -> Tuple[List[MatchedPair], List[SwissPlayer]]:
    """Pair each player, strongest first, with their best scoring partner.

    Rematches are never chosen. Players without an acceptable partner are
    returned unmatched.
    """
    config = config or PairingConfig()
    ordered = sort_by_rating(players)
    matched = [False] * len(ordered)
    pairs: List[MatchedPair] = []

    for i, player in enumerate(ordered):
        if matched[i]:
            continue
        best_index = None
        best_score = None
        for j in range(i + 1, len(ordered)):
            if matched[j] or _is_rematch(player, ordered[j]):
                continue
            score = calculate_pairing_score(player, ordered[j], config)
            if best_score is None or score > best_score:
                best_index, best_score = j, score
        if best_index is None:
            logger.debug("No partner for %s in this group", player.name)
            continue
        matched[i] = matched[best_index] = True
        pairs.append(assign_colors(player, ordered[best_index]))
        logger.debug(
            "Matched %s with %s (score %.1f)",
            player.name,
            ordered[best_index].name,
            best_score,
        )

    unmatched = [p for p, used in zip(ordered, matched) if not used]
    return pairs, unmatched


def constrained_first_match(
    players: Sequence[SwissPlayer], config: Optional[PairingConfig] = None
) -> Tuple[List[MatchedPair], List[SwissPlayer]]:
    """Maximal matching that serves the most constrained players first.

    A player's constraint is how few legal partners they have left in the
    group. Allowed pairs are taken in order of the scarcer partner count of
    the two players, then by how many opponents they have already met (most
    first), then by pairing score.
    """
    config = config or PairingConfig()
    ordered = sort_by_rating(players)
    allowed = [
        [j for j in range(len(ordered)) if j != i and not _is_rematch(ordered[i], ordered[j])]
        for i in range(len(ordered))
    ]
    candidates = []
    for i in range(len(ordered)):
        for j in allowed[i]:
            if j <= i:
                continue
            options = min(len(allowed[i]), len(allowed[j]))
            met = len(ordered[i].opponents) + len(ordered[j].opponents)
            score = calculate_pairing_score(ordered[i], ordered[j], config)
            candidates.append((options, -met, -score, i, j))
    candidates.sort()

    used = set()
    pairs: List[MatchedPair] = []
    for *_, i, j in candidates:
        if i in used or j in used:
            continue
        used.update((i, j))
        pairs.append(assign_colors(ordered[i], ordered[j]))

    unmatched = [p for index, p in enumerate(ordered) if index not in used]
    return pairs, unmatched


def pair_score_group(
    players: Sequence[SwissPlayer], config: Optional[PairingConfig] = None
) -> Tuple[List[MatchedPair], List[SwissPlayer]]:
    """Pair a score group.

    Runs the greedy pass and, when it leaves two or more players unmatched,
    the constrained-first matching; whichever pairs more players wins.

    Returns
    -------
    tuple
        (pairs as (white, black), unmatched players)
    """
    pairs, unmatched = greedy_match(players, config)
    if len(unmatched) >= 2:
        alt_pairs, alt_unmatched = constrained_first_match(players, config)
        if len(alt_pairs) > len(pairs):
            logger.debug(
                "Using constrained-first matching (%d vs %d pairs)",
                len(alt_pairs),
                len(pairs),
            )
            return alt_pairs, alt_unmatched
    return pairs, unmatched


def find_rematch_free_matching(
    players: Sequence[SwissPlayer],
    config: Optional[PairingConfig] = None,
    max_steps: int = MATCHING_SEARCH_LIMIT,
) -> Optional[List[MatchedPair]]:
    """Pair every player without a rematch, or return None.

    Depth-first search that always extends the free player with the fewest
    legal partners left and tries partners in pairing score order. The
    search gives up after ``max_steps`` partner attempts.
    """
    config = config or PairingConfig()
    if len(players) % 2 == 1:
        return None
    ordered = sort_by_rating(players)
    partners = {}
    for i, player in enumerate(ordered):
        legal = [j for j in range(len(ordered)) if j != i and not _is_rematch(player, ordered[j])]
        legal.sort(key=lambda j: (-calculate_pairing_score(player, ordered[j], config), j))
        partners[i] = legal

    chosen: List[Tuple[int, int]] = []
    steps = 0

    def search(free: frozenset) -> bool:
        nonlocal steps
        if not free:
            return True
        i = min(free, key=lambda k: (sum(1 for j in partners[k] if j in free), k))
        for j in partners[i]:
            if j not in free:
                continue
            steps += 1
            if steps > max_steps:
                return False
            chosen.append((i, j))
            if search(free - {i, j}):
                return True
            chosen.pop()
        return False

    if not search(frozenset(range(len(ordered)))):
        if steps > max_steps:
            logger.debug("Gave up matching %d players after %d steps", len(ordered), max_steps)
        return None
    chosen.sort(key=min)
    return [assign_colors(ordered[i], ordered[j]) for i, j in chosen]


def pair_leftovers(
    players: Sequence[SwissPlayer], config: Optional[PairingConfig] = None
) -> List[MatchedPair]:
    """Pair players nothing else could place, allowing rematches.

    Fresh opponents are still preferred through the rematch penalty.
    """
    config = config or PairingConfig()
    remaining = sort_by_rating(players)
    pairs: List[MatchedPair] = []
    while len(remaining) >= 2:
        player = remaining.pop(0)
        best = max(
            range(len(remaining)),
            key=lambda k: (calculate_pairing_score(player, remaining[k], config), -k),
        )
        pairs.append(assign_colors(player, remaining.pop(best)))
    return pairs
