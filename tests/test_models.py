from datetime import datetime, timezone

import pytest

from swisspairing.exceptions import (
    InvalidConfigurationException,
    InvalidInputException,
    InvalidResultException,
)
from swisspairing.models.config import PairingConfig
from swisspairing.models.game import Game, GameOutcome, bye_game, parse_game_result
from swisspairing.models.history import FloatDirection, PairingHistory
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player, PlayerResult
from swisspairing.type_hints import BLACK, WHITE


@pytest.mark.parametrize(
    "result, outcome, white, black",
    [
        ("1-0", GameOutcome.WHITE_WIN, 1.0, 0.0),
        ("0-1", GameOutcome.BLACK_WIN, 0.0, 1.0),
        ("1/2-1/2", GameOutcome.DRAW, 0.5, 0.5),
        ("0.5-0.5", GameOutcome.DRAW, 0.5, 0.5),
        ("½-½", GameOutcome.DRAW, 0.5, 0.5),
        ("1-0 FF", GameOutcome.WHITE_FORFEIT_WIN, 1.0, 0.0),
        ("-/+", GameOutcome.BLACK_FORFEIT_WIN, 0.0, 1.0),
        ("0-0 FF", GameOutcome.DOUBLE_FORFEIT, 0.0, 0.0),
        (" 1-0 ", GameOutcome.WHITE_WIN, 1.0, 0.0),
    ],
)
def test_result_strings(result, outcome, white, black):
    parsed = parse_game_result(result)
    assert parsed is outcome
    assert (parsed.white_score, parsed.black_score) == (white, black)
    assert parsed.is_completed


def test_ongoing_and_unknown_results():
    assert parse_game_result("*") is GameOutcome.ONGOING
    assert parse_game_result(None) is GameOutcome.ONGOING
    assert not GameOutcome.ONGOING.is_completed
    assert parse_game_result("2-0") is GameOutcome.UNKNOWN
    with pytest.raises(InvalidResultException):
        parse_game_result("2-0", strict=True)


def test_forfeit_flag():
    assert GameOutcome.DOUBLE_FORFEIT.is_forfeit
    assert not GameOutcome.WHITE_WIN.is_forfeit


def test_game_helpers():
    game = Game(id=1, round_number=2, white_player_id="a", black_player_id="b", result="0-1")
    assert game.colour_of("a") == WHITE
    assert game.colour_of("b") == BLACK
    assert game.colour_of("c") is None
    assert game.opponent_of("b") == "a"
    assert game.score_for("b") == 1.0
    assert game.score_for("c") == 0.0
    assert game.involves("a") and not game.involves("c")
    assert not game.is_bye


def test_bye_game():
    game = bye_game(5, 3, "a")
    assert game.is_bye
    assert game.opponent_of("a") is None
    assert game.score_for("a") == 1.0


def test_game_from_dict_parses_timestamps():
    game = Game.from_dict(
        {
            "id": 3,
            "round_number": 1,
            "white_player_id": 1,
            "black_player_id": 2,
            "result": "1-0",
            "created_at": "2025-03-01T18:30:00Z",
        }
    )
    assert game.created_at == datetime(2025, 3, 1, 18, 30, tzinfo=timezone.utc)
    assert Game.from_dict(game.to_dict()) == game


def test_player_from_dict_validates_rating():
    player = Player.from_dict({"id": 1, "rating": "1850"})
    assert player.rating == 1850
    assert player.name == "Player 1"
    with pytest.raises(InvalidInputException):
        Player.from_dict({"id": 1, "rating": -5})


def test_player_result_rejects_negative_points():
    with pytest.raises(InvalidInputException):
        PlayerResult.from_dict({"player_id": 1, "points": -1})


def test_pairing_serialization():
    pairing = Pairing(Player(1, "A", 1500), Player(2, "B"), board_number=1)
    assert pairing.player_ids == [1, 2]
    assert Pairing.from_dict(pairing.to_dict()) == pairing


def test_history_serialization():
    history = PairingHistory()
    history.add_pairing(1, 2)
    history.add_bye(3, 1)
    history.add_float(2, 2, FloatDirection.UP)
    history.add_float(2, 4, FloatDirection.DOWN)

    restored = PairingHistory.from_dict(history.to_dict())
    assert restored == history
    assert restored.have_played(2, 1)
    assert restored.bye_count(3) == 1
    assert restored.has_had_bye(3) and not restored.has_had_bye(1)
    assert restored.last_float(2) == (4, FloatDirection.DOWN)
    assert restored.last_float(2, before_round=4) == (2, FloatDirection.UP)
    assert restored.floated_up_in(2, 2)


def test_config_round_trip_and_validation():
    config = PairingConfig(total_rounds=7, avoid_same_federation=True)
    assert PairingConfig.from_dict(config.to_dict()) == config

    with pytest.raises(InvalidConfigurationException):
        PairingConfig(total_rounds=0)
    with pytest.raises(InvalidConfigurationException):
        PairingConfig.from_dict({"avoid_same_team": True})
    # configuration errors are input errors too
    with pytest.raises(InvalidInputException):
        PairingConfig(default_rating=-1)
