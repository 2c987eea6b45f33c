"""Read-only access to tournament players and games.

The standings calculator only needs three reads; anything that can answer
them (a database, a saved tournament file, a test double) can back it.
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

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from swisspairing.exceptions import InvalidInputException, PlayerNotFoundException
from swisspairing.models.game import Game
from swisspairing.models.player import Player
from swisspairing.type_hints import PlayerId
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentRepository(ABC):
    """Minimal read contract used by the standings calculator."""

    @abstractmethod
    def get_players(self, tournament_id: int) -> List[Player]:
        """All players registered in a tournament."""

    @abstractmethod
    def get_games(self, tournament_id: int) -> List[Game]:
        """All games of a tournament, finished or not."""

    @abstractmethod
    def get_player(self, player_id: PlayerId) -> Player:
        """Look up one player.

        Raises:
            PlayerNotFoundException: If no such player exists
        """


class InMemoryTournamentRepository(TournamentRepository):
    """Repository holding tournaments in dictionaries."""

    def __init__(self):
        self._players: Dict[int, Dict[PlayerId, Player]] = {}
        self._games: Dict[int, List[Game]] = {}

    def add_player(self, tournament_id: int, player: Player) -> None:
        self._players.setdefault(tournament_id, {})[player.id] = player

    def add_players(self, tournament_id: int, players: Iterable[Player]) -> None:
        for player in players:
            self.add_player(tournament_id, player)

    def add_game(self, tournament_id: int, game: Game) -> None:
        self._games.setdefault(tournament_id, []).append(game)

    def add_games(self, tournament_id: int, games: Iterable[Game]) -> None:
        for game in games:
            self.add_game(tournament_id, game)

    def get_players(self, tournament_id: int) -> List[Player]:
        return list(self._players.get(tournament_id, {}).values())

    def get_games(self, tournament_id: int) -> List[Game]:
        return list(self._games.get(tournament_id, []))

    def get_player(self, player_id: PlayerId) -> Player:
        for players in self._players.values():
            if player_id in players:
                return players[player_id]
        raise PlayerNotFoundException(player_id)


class JsonTournamentRepository(InMemoryTournamentRepository):
    """Repository loaded from a saved tournament document.

    Expected layout::

        {"tournaments": [{"id": 1, "players": [...], "games": [...]}]}

    Players and games use the ``to_dict`` layout of :class:`Player` and
    :class:`Game`; game timestamps are ISO-8601 strings.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputException(f"Invalid tournament file {self.path}: {e}") from e

        for tournament in data.get("tournaments", []):
            tournament_id = tournament["id"]
            self.add_players(
                tournament_id, (Player.from_dict(p) for p in tournament.get("players", []))
            )
            self.add_games(
                tournament_id, (Game.from_dict(g) for g in tournament.get("games", []))
            )
        logger.info("Loaded %d tournaments from %s", len(self._players), self.path)

    @staticmethod
    def dump(
        path: Union[str, Path],
        tournaments: Dict[int, Dict[str, Any]],
    ) -> None:
        """Write tournaments given as ``{id: {"players": [...], "games": [...]}}``."""
        data = {
            "tournaments": [
                {
                    "id": tournament_id,
                    "players": [p.to_dict() for p in content.get("players", [])],
                    "games": [g.to_dict() for g in content.get("games", [])],
                }
                for tournament_id, content in tournaments.items()
            ]
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)


def repository_from_records(
    tournament_id: int,
    players: Iterable[Player],
    games: Iterable[Game],
    repository: Optional[InMemoryTournamentRepository] = None,
) -> InMemoryTournamentRepository:
    """Build (or extend) an in-memory repository for one tournament."""
    repository = repository or InMemoryTournamentRepository()
    repository.add_players(tournament_id, players)
    repository.add_games(tournament_id, games)
    return repository
