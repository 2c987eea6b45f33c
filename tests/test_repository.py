import json

import pytest

from swisspairing.exceptions import InvalidInputException, PlayerNotFoundException
from swisspairing.models.game import Game
from swisspairing.models.player import Player
from swisspairing.tournament.repository import (
    InMemoryTournamentRepository,
    JsonTournamentRepository,
    repository_from_records,
)


def test_in_memory_repository(make_player):
    repository = InMemoryTournamentRepository()
    repository.add_players(1, [make_player(1), make_player(2)])
    repository.add_game(1, Game(1, 1, 1, 2, "1-0"))

    assert [p.id for p in repository.get_players(1)] == [1, 2]
    assert len(repository.get_games(1)) == 1
    assert repository.get_players(2) == []
    assert repository.get_player(2).name == "Player 2"
    with pytest.raises(PlayerNotFoundException):
        repository.get_player(99)


def test_repository_from_records_extends_existing(make_player):
    repository = repository_from_records(1, [make_player(1)], [])
    same = repository_from_records(2, [make_player(5)], [], repository)
    assert same is repository
    assert [p.id for p in repository.get_players(2)] == [5]


def test_json_round_trip(tmp_path):
    path = tmp_path / "event.json"
    players = [Player(1, "Alice", 1900, club="North"), Player(2, "Bob")]
    games = [Game(1, 1, 1, 2, "1/2-1/2")]
    JsonTournamentRepository.dump(path, {3: {"players": players, "games": games}})

    repository = JsonTournamentRepository(path)
    assert repository.get_players(3) == players
    assert repository.get_games(3) == games


def test_json_repository_reads_iso_timestamps(tmp_path):
    path = tmp_path / "event.json"
    document = {
        "tournaments": [
            {
                "id": 1,
                "players": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}],
                "games": [
                    {
                        "id": 1,
                        "round_number": 1,
                        "white_player_id": "a",
                        "black_player_id": "b",
                        "result": "0-1",
                        "created_at": "2025-05-04T10:00:00+02:00",
                    }
                ],
            }
        ]
    }
    path.write_text(json.dumps(document), encoding="utf-8")

    game = JsonTournamentRepository(path).get_games(1)[0]
    assert game.created_at.utcoffset().total_seconds() == 7200


def test_invalid_json_is_rejected(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidInputException):
        JsonTournamentRepository(path)
