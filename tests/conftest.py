import pytest

from swisspairing.models.game import Game, bye_game
from swisspairing.models.player import Player, PlayerResult
from swisspairing.pairing.colors import Color, calculate_color_preference
from swisspairing.pairing.swiss_player import SwissPlayer


@pytest.fixture
def make_player():
    def _make(player_id, rating=1500, name=None, club=None, country_code=None):
        return Player(
            id=player_id,
            name=name or f"Player {player_id}",
            rating=rating,
            club=club,
            country_code=country_code,
        )

    return _make


@pytest.fixture
def make_swiss(make_player):
    def _make(
        player_id,
        rating=1500,
        points=0.0,
        colors=(),
        opponents=(),
        bye_count=0,
        club=None,
        country_code=None,
        floated_up_last_round=False,
    ):
        history = [Color.parse(c) for c in colors]
        return SwissPlayer(
            player=make_player(
                player_id, rating=rating, club=club, country_code=country_code
            ),
            points=points,
            rating=rating,
            color_history=history,
            opponents=set(opponents),
            color_preference=calculate_color_preference(history),
            bye_count=bye_count,
            floated_up_last_round=floated_up_last_round,
        )

    return _make


@pytest.fixture
def game_log():
    """Builds numbered games: log.add(round, white, black, result)."""

    class GameLog:
        def __init__(self):
            self.games = []

        def add(self, round_number, white_id, black_id, result):
            self.games.append(
                Game(
                    id=len(self.games) + 1,
                    round_number=round_number,
                    white_player_id=white_id,
                    black_player_id=black_id,
                    result=result,
                )
            )
            return self

        def bye(self, round_number, player_id, result="1-0"):
            self.games.append(
                bye_game(len(self.games) + 1, round_number, player_id, result)
            )
            return self

    return GameLog()


def results_from_points(points_by_id):
    return [PlayerResult(player_id=pid, points=pts) for pid, pts in points_by_id.items()]


@pytest.fixture
def results():
    return results_from_points
