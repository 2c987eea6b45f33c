"""Tiebreak calculation for tournaments.

This module handles calculation of the tiebreak systems used to order
tournament standings.
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

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil import tz

from swisspairing.constants import DRAW_SCORE, TPR_MAX_DIFFERENCE, WIN_SCORE
from swisspairing.exceptions import ConfigurationException, PlayerNotFoundException
from swisspairing.models.game import Game, GameOutcome
from swisspairing.models.player import Player, PlayerResult
from swisspairing.tournament.models import (
    PlayerStanding,
    StandingsResult,
    TiebreakKind,
    TiebreakScore,
    TiebreakType,
    TournamentTiebreakConfig,
)
from swisspairing.tournament.repository import TournamentRepository
from swisspairing.tournament.standings import assign_ranks, sort_standings
from swisspairing.type_hints import BLACK, Colour, PlayerId
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class GameEntry:
    """One completed game seen from one player's side."""

    round_number: int
    opponent_id: Optional[PlayerId]  # None for a bye
    score: float
    colour: Colour
    outcome: GameOutcome

    @property
    def is_bye(self) -> bool:
        return self.opponent_id is None


def _game_order_key(game: Game):
    created = game.created_at.timestamp() if game.created_at else 0.0
    return (game.round_number, created, game.id)


def collect_game_entries(
    players: Iterable[Player], games: Iterable[Game]
) -> Dict[PlayerId, List[GameEntry]]:
    """Completed games per player, in round order.

    Raises:
        PlayerNotFoundException: If a game references an unknown player
    """
    entries: Dict[PlayerId, List[GameEntry]] = {p.id: [] for p in players}
    for game in sorted(games, key=_game_order_key):
        outcome = game.outcome
        if not outcome.is_completed:
            continue
        for player_id in (game.white_player_id, game.black_player_id):
            if player_id is not None and player_id not in entries:
                raise PlayerNotFoundException(player_id)
        for player_id in (game.white_player_id, game.black_player_id):
            if player_id is None:
                continue
            colour = game.colour_of(player_id)
            entries[player_id].append(
                GameEntry(
                    round_number=game.round_number,
                    opponent_id=game.opponent_of(player_id),
                    score=outcome.score_for(colour),
                    colour=colour,
                    outcome=outcome,
                )
            )
    return entries


def calculate_player_results(
    players: Iterable[Player], games: Iterable[Game]
) -> Dict[PlayerId, PlayerResult]:
    """Score and win/draw/loss counters per player.

    Byes add their points without counting as a game. Unrecognised results
    count as a game played with no points and no win, draw or loss.
    """
    players = list(players)
    results = {p.id: PlayerResult(player_id=p.id) for p in players}
    for player_id, entries in collect_game_entries(players, games).items():
        result = results[player_id]
        for entry in entries:
            result.points += entry.score
            if entry.is_bye:
                continue
            result.games_played += 1
            if entry.outcome is GameOutcome.UNKNOWN:
                continue
            if entry.score == WIN_SCORE:
                result.wins += 1
            elif entry.score == DRAW_SCORE:
                result.draws += 1
            else:
                result.losses += 1
    return results


class TournamentData:
    """Players, per-player games and totals for one standings calculation."""

    def __init__(self, players: Iterable[Player], games: Iterable[Game]):
        players = list(players)
        games = list(games)
        self.players: Dict[PlayerId, Player] = {p.id: p for p in players}
        self.entries = collect_game_entries(players, games)
        self.results = calculate_player_results(players, games)

    def games(self, player_id: PlayerId) -> List[GameEntry]:
        """Games against an opponent (byes excluded)."""
        return [e for e in self.entries.get(player_id, []) if not e.is_bye]

    def opponent_scores(self, player_id: PlayerId) -> List[float]:
        return [self.results[e.opponent_id].points for e in self.games(player_id)]

    def opponent_ratings(self, player_id: PlayerId) -> List[int]:
        return [rating for rating, _ in self.rated_results(player_id)]

    def rated_results(self, player_id: PlayerId) -> List[Tuple[int, float]]:
        """(opponent rating, score) for games against rated opponents."""
        rated = []
        for entry in self.games(player_id):
            rating = self.players[entry.opponent_id].rating
            if rating is not None:
                rated.append((rating, entry.score))
        return rated


class TiebreakCalculator:
    """Calculates tiebreak scores and full standings.

    Supported systems:

    - Buchholz (full, Cut-1, Cut-2, median)
    - Sonneborn-Berger
    - Progressive and cumulative score
    - Number of wins, games with black, wins with black
    - Average rating of opponents, with AROC Cut-1 and Cut-2
    - Tournament performance rating
    - Koya system
    - Match, game and board points
    - Direct encounter (placeholder, always 0.0)

    Unknown tiebreak kinds score 0.0. The calculator keeps no state between
    calls, so one instance can serve several tournaments.
    """

    def __init__(self, repository: Optional[TournamentRepository] = None):
        self.repository = repository
        self._dispatch = {
            TiebreakType.BUCHHOLZ_FULL: self._calculate_buchholz_full,
            TiebreakType.BUCHHOLZ_CUT_1: self._calculate_buchholz_cut_1,
            TiebreakType.BUCHHOLZ_CUT_2: self._calculate_buchholz_cut_2,
            TiebreakType.BUCHHOLZ_MEDIAN: self._calculate_buchholz_median,
            TiebreakType.SONNEBORN_BERGER: self._calculate_sonneborn_berger,
            TiebreakType.PROGRESSIVE_SCORE: self._calculate_progressive,
            TiebreakType.CUMULATIVE_SCORE: self._calculate_progressive,
            TiebreakType.DIRECT_ENCOUNTER: self._calculate_direct_encounter,
            TiebreakType.AVERAGE_RATING_OF_OPPONENTS: self._calculate_aro,
            TiebreakType.TOURNAMENT_PERFORMANCE_RATING: self._calculate_tpr,
            TiebreakType.NUMBER_OF_WINS: self._calculate_wins,
            TiebreakType.NUMBER_OF_GAMES_WITH_BLACK: self._calculate_black_games,
            TiebreakType.NUMBER_OF_WINS_WITH_BLACK: self._calculate_black_wins,
            TiebreakType.KOYA_SYSTEM: self._calculate_koya,
            TiebreakType.AROC_CUT_1: self._calculate_aroc_cut_1,
            TiebreakType.AROC_CUT_2: self._calculate_aroc_cut_2,
            TiebreakType.MATCH_POINTS: self._calculate_game_points,
            TiebreakType.GAME_POINTS: self._calculate_game_points,
            TiebreakType.BOARD_POINTS: self._calculate_game_points,
        }

    # ========== Standings ==========

    def calculate_standings(
        self,
        tournament_id: int,
        config: Optional[TournamentTiebreakConfig] = None,
    ) -> StandingsResult:
        """Standings of a tournament read from the repository.

        Raises:
            ConfigurationException: If the calculator has no repository
            PlayerNotFoundException: If a game references an unknown player
        """
        if self.repository is None:
            raise ConfigurationException("calculate_standings needs a repository")
        config = config or TournamentTiebreakConfig(tournament_id=tournament_id)
        players = self.repository.get_players(tournament_id)
        games = self.repository.get_games(tournament_id)
        return self.compute_standings(players, games, config)

    def compute_standings(
        self,
        players: Iterable[Player],
        games: Iterable[Game],
        config: Optional[TournamentTiebreakConfig] = None,
    ) -> StandingsResult:
        """Standings from players and games already in hand.

        Args:
            players: Everyone in the tournament
            games: All games; ongoing ones are ignored
            config: Tiebreaks in priority order

        Returns:
            StandingsResult sorted and ranked, stamped with the UTC time
        """
        config = config or TournamentTiebreakConfig()
        players = list(players)
        games = list(games)
        data = TournamentData(players, games)
        logger.info(
            "Calculating standings for %d players and %d games", len(players), len(games)
        )

        standings = []
        for player in players:
            result = data.results[player.id]
            standings.append(
                PlayerStanding(
                    player=player,
                    points=result.points,
                    games_played=result.games_played,
                    wins=result.wins,
                    draws=result.draws,
                    losses=result.losses,
                    tiebreak_scores=[
                        self.calculate_tiebreak_score(data, player.id, kind)
                        for kind in config.tiebreaks
                    ],
                    performance_rating=self.calculate_performance_rating(
                        data, player.id
                    ),
                )
            )

        assign_ranks(sort_standings(standings))
        return StandingsResult(
            standings=standings,
            last_updated=datetime.now(tz.tzutc()).isoformat(),
            tiebreak_config=config,
        )

    # ========== Dispatch ==========

    def calculate_tiebreak_score(
        self, data: TournamentData, player_id: PlayerId, kind: TiebreakKind
    ) -> TiebreakScore:
        """One tiebreak for one player; unknown kinds give 0.0."""
        calculate = self._dispatch.get(TiebreakType.parse(kind))
        if calculate is None:
            logger.warning("Unknown tiebreak %r, scoring 0.0", kind)
            value = 0.0
        else:
            value = float(calculate(data, player_id))
        return TiebreakScore(tiebreak_type=kind, value=value)

    # ========== Buchholz family ==========

    def _calculate_buchholz_full(self, data: TournamentData, player_id: PlayerId) -> float:
        """Sum of all opponents' scores."""
        return sum(data.opponent_scores(player_id))

    def _calculate_buchholz_cut_1(self, data: TournamentData, player_id: PlayerId) -> float:
        """Buchholz without the lowest opponent score."""
        scores = sorted(data.opponent_scores(player_id))
        if not scores:
            return 0.0
        return sum(scores[1:])

    def _calculate_buchholz_cut_2(self, data: TournamentData, player_id: PlayerId) -> float:
        """Buchholz without the lowest and highest opponent scores.

        With fewer than three opponents nothing is dropped.
        """
        scores = sorted(data.opponent_scores(player_id))
        if len(scores) < 3:
            return sum(scores)
        return sum(scores[1:-1])

    def _calculate_buchholz_median(self, data: TournamentData, player_id: PlayerId) -> float:
        """Median opponent score (extremes dropped) times the opponents kept."""
        scores = sorted(data.opponent_scores(player_id))
        if not scores:
            return 0.0
        if len(scores) > 2:
            scores = scores[1:-1]
        mid = len(scores) // 2
        if len(scores) % 2 == 0:
            median = (scores[mid - 1] + scores[mid]) / 2
        else:
            median = scores[mid]
        return median * len(scores)

    # ========== Score based ==========

    def _calculate_sonneborn_berger(self, data: TournamentData, player_id: PlayerId) -> float:
        """Each game's score times that opponent's total."""
        return sum(
            entry.score * data.results[entry.opponent_id].points
            for entry in data.games(player_id)
        )

    def _calculate_progressive(self, data: TournamentData, player_id: PlayerId) -> float:
        """Sum of the running score after every round, byes included."""
        running = 0.0
        progressive = 0.0
        for entry in data.entries.get(player_id, []):
            running += entry.score
            progressive += running
        return progressive

    def _calculate_koya(self, data: TournamentData, player_id: PlayerId) -> float:
        """Points scored against opponents who finished on at least the same score."""
        own_points = data.results[player_id].points
        return sum(
            entry.score
            for entry in data.games(player_id)
            if data.results[entry.opponent_id].points >= own_points
        )

    def _calculate_game_points(self, data: TournamentData, player_id: PlayerId) -> float:
        return sum(entry.score for entry in data.games(player_id))

    def _calculate_direct_encounter(self, data: TournamentData, player_id: PlayerId) -> float:
        # TODO: compare results among the tied group once ties are known here
        return 0.0

    # ========== Counts ==========

    def _calculate_wins(self, data: TournamentData, player_id: PlayerId) -> float:
        return float(data.results[player_id].wins)

    def _calculate_black_games(self, data: TournamentData, player_id: PlayerId) -> float:
        return float(sum(1 for e in data.games(player_id) if e.colour == BLACK))

    def _calculate_black_wins(self, data: TournamentData, player_id: PlayerId) -> float:
        """Wins over the board with black; forfeit wins do not count."""
        return float(
            sum(1 for e in data.games(player_id) if e.outcome is GameOutcome.BLACK_WIN)
        )

    # ========== Rating based ==========

    def _calculate_aro(self, data: TournamentData, player_id: PlayerId) -> float:
        """Mean rating of rated opponents, 0.0 if there are none."""
        ratings = data.opponent_ratings(player_id)
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)

    def _calculate_aroc_cut_1(self, data: TournamentData, player_id: PlayerId) -> float:
        ratings = sorted(data.opponent_ratings(player_id))
        if not ratings:
            return 0.0
        if len(ratings) > 1:
            ratings = ratings[1:]
        return sum(ratings) / len(ratings)

    def _calculate_aroc_cut_2(self, data: TournamentData, player_id: PlayerId) -> float:
        ratings = sorted(data.opponent_ratings(player_id))
        if not ratings:
            return 0.0
        if len(ratings) >= 3:
            ratings = ratings[1:-1]
        return sum(ratings) / len(ratings)

    def _calculate_tpr(self, data: TournamentData, player_id: PlayerId) -> float:
        """Performance from the logistic rating difference, clamped to +/-800."""
        rated = data.rated_results(player_id)
        if not rated:
            return 0.0
        average = sum(r for r, _ in rated) / len(rated)
        percentage = sum(s for _, s in rated) / len(rated)
        if percentage >= 0.99:
            difference = TPR_MAX_DIFFERENCE
        elif percentage <= 0.01:
            difference = -TPR_MAX_DIFFERENCE
        else:
            difference = 400.0 * math.log(percentage / (1.0 - percentage)) / math.log(2.0)
        return float(int(average + difference))

    def calculate_performance_rating(
        self, data: TournamentData, player_id: PlayerId
    ) -> Optional[int]:
        """Average opponent rating plus 400 x (score fraction - 0.5).

        Only games against rated opponents count; None if there are none.
        """
        rated = data.rated_results(player_id)
        if not rated:
            return None
        average = sum(r for r, _ in rated) / len(rated)
        percentage = sum(s for _, s in rated) / len(rated)
        return int(average + 400.0 * (percentage - 0.5))


def calculate_standings(
    repository: TournamentRepository,
    tournament_id: int,
    config: Optional[TournamentTiebreakConfig] = None,
) -> StandingsResult:
    """Standings of one tournament, read through ``repository``."""
    return TiebreakCalculator(repository).calculate_standings(tournament_id, config)
