import pytest

from swisspairing.exceptions import InvalidInputException, InvalidPairingException
from swisspairing.models.config import PairingConfig
from swisspairing.models.history import FloatDirection, PairingHistory
from swisspairing.pairing.dutch_swiss import SwissPairingEngine, generate_pairings


def _boards(result):
    return [(p.board_number, p.white_player.id, p.black_player.id) for p in result.pairings]


def _partner(result, player_id):
    for white_id, black_id in result.pairing_ids:
        if white_id == player_id:
            return black_id
        if black_id == player_id:
            return white_id
    return None


def test_two_players_higher_rating_gets_white(make_player):
    players = [make_player(1, rating=1400), make_player(2, rating=1600)]
    result = generate_pairings(players, [], [], 1)

    assert _boards(result) == [(1, 2, 1)]
    assert result.byes == []
    assert result.is_valid


def test_single_player_gets_a_bye(make_player):
    result = generate_pairings([make_player(1)], [], [], 1)
    assert result.pairings == []
    assert result.bye_player_ids == [1]
    assert result.is_valid


def test_no_players_gives_empty_round():
    result = generate_pairings([], [], [], 1)
    assert result.pairings == []
    assert result.byes == []


def test_odd_field_gives_bye_to_lowest_rated(make_player):
    players = [make_player(i, rating=2000 - 100 * i) for i in range(1, 6)]
    result = generate_pairings(players, [], [], 1)

    assert result.bye_player_ids == [5]
    assert len(result.pairings) == 2
    assert [p.board_number for p in result.pairings] == [1, 2]
    assert result.is_valid


def test_accelerated_first_round_keeps_top_quarter_together(make_player):
    players = [make_player(i, rating=2000 - 50 * i) for i in range(16)]
    result = generate_pairings(players, [], [], 1)

    assert len(result.pairings) == 8
    top_quarter = {0, 1, 2, 3}
    for board in result.pairings[:2]:
        assert set(board.player_ids) <= top_quarter
    assert result.float_count == 0
    assert result.is_valid


def test_acceleration_off_pairs_one_group(make_player):
    players = [make_player(i, rating=2000 - 50 * i) for i in range(16)]
    config = PairingConfig(use_accelerated_pairings=False)
    result = SwissPairingEngine(config).generate_pairings(players, [], [], 1)
    assert len(result.pairings) == 8
    assert result.float_count == 0


def test_previous_opponents_are_not_paired_again(make_player, results, game_log):
    players = [make_player(i, rating=2000 - 50 * i) for i in (1, 2, 3, 4)]
    game_log.add(1, 1, 2, "1/2-1/2").add(1, 3, 4, "1/2-1/2")
    result = generate_pairings(
        players, results({i: 0.5 for i in (1, 2, 3, 4)}), game_log.games, 2
    )

    assert _partner(result, 1) != 2
    assert _partner(result, 3) != 4
    assert result.is_valid


def test_odd_group_pulls_up_from_next_group(make_player, results):
    players = [make_player(i, rating=2100 - 100 * i) for i in range(1, 7)]
    points = results({1: 1.0, 2: 1.0, 3: 1.0, 4: 0.0, 5: 0.0, 6: 0.0})
    result = generate_pairings(players, points, [], 2)

    assert result.floats == {4: FloatDirection.UP}
    assert result.float_count == 1
    assert _partner(result, 4) in {1, 2, 3}
    assert result.byes == []
    assert result.is_valid


def test_unmatched_players_float_down(make_player, results, game_log):
    players = [make_player(i, rating=2100 - 100 * i) for i in (1, 2, 3, 4)]
    # the two leaders have already met
    game_log.add(1, 1, 3, "1/2-1/2").add(1, 2, 4, "1/2-1/2")
    points = results({1: 1.0, 2: 0.0, 3: 1.0, 4: 0.0})
    result = generate_pairings(players, points, game_log.games, 2)

    assert result.floats == {1: FloatDirection.DOWN, 3: FloatDirection.DOWN}
    assert sorted(map(sorted, result.pairing_ids)) == [[1, 2], [3, 4]]
    assert any("floats exceed" in problem for problem in result.validation_errors)


def test_strict_float_limit_gives_bye_instead(make_player, results):
    players = [make_player(i, rating=2200 - 200 * i) for i in (1, 2, 3)]
    points = results({1: 2.0, 2: 1.0, 3: 1.0})

    soft = generate_pairings(players, points, [], 6)
    assert soft.floats == {2: FloatDirection.UP}
    assert soft.bye_player_ids == [3]

    strict = generate_pairings(
        players, points, [], 6, config=PairingConfig(strict_float_limit=True)
    )
    assert strict.float_count == 0
    assert strict.bye_player_ids == [1]
    assert strict.pairing_ids == [(2, 3)]


def test_rematch_as_last_resort(make_player, results, game_log):
    players = [make_player(1, rating=1600), make_player(2, rating=1500)]
    game_log.add(1, 1, 2, "1-0")
    points = results({1: 1.0, 2: 0.0})

    result = generate_pairings(players, points, game_log.games, 2)
    assert len(result.pairings) == 1
    assert any(problem.startswith("Rematch") for problem in result.validation_errors)
    with pytest.raises(InvalidPairingException):
        result.raise_if_invalid()

    config = PairingConfig(allow_rematch_as_last_resort=False)
    result = generate_pairings(players, points, game_log.games, 2, config=config)
    assert result.pairings == []
    assert sum("could not be paired" in p for p in result.validation_errors) == 2


def test_forfeited_game_does_not_block_a_pairing(make_player, results, game_log):
    players = [make_player(1, rating=1600), make_player(2, rating=1500)]
    game_log.add(1, 1, 2, "1-0 FF")
    result = generate_pairings(players, results({1: 1.0}), game_log.games, 2)
    assert result.pairing_ids == [(1, 2)]
    assert not any(p.startswith("Rematch") for p in result.validation_errors)


def test_absolute_colour_preference_is_honoured(make_player, results, game_log):
    players = [make_player(i, rating=2000 - 100 * i) for i in (1, 2, 3, 4, 5, 6, 7, 8)]
    # player 1 has had white three times
    game_log.add(1, 1, 5, "1/2-1/2").add(2, 1, 6, "1/2-1/2").add(3, 1, 7, "1/2-1/2")
    result = generate_pairings(players, results({1: 1.5}), game_log.games, 4)

    black_ids = [black for _, black in result.pairing_ids]
    assert 1 in black_ids


def test_history_is_updated_by_caller(make_player):
    players = [make_player(i, rating=2000 - 100 * i) for i in (1, 2, 3)]
    history = PairingHistory()
    result = generate_pairings(players, [], [], 1, history=history)
    history.record_round(result)

    assert history.byes == {3: [1]}
    assert history.have_played(1, 2)

    # the history alone keeps the bye and the pairing in mind
    second = generate_pairings(players, [], [], 2, history=history)
    assert second.bye_player_ids != [3]
    assert (1, 2) not in second.pairing_ids and (2, 1) not in second.pairing_ids


@pytest.mark.parametrize("round_number", [0, -1])
def test_invalid_round_numbers(make_player, round_number):
    with pytest.raises(InvalidInputException):
        generate_pairings([make_player(1)], [], [], round_number)


def test_round_beyond_tournament_length(make_player):
    engine = SwissPairingEngine(PairingConfig(total_rounds=3))
    engine.generate_pairings([make_player(1), make_player(2)], [], [], 3)
    with pytest.raises(InvalidInputException):
        engine.generate_pairings([make_player(1), make_player(2)], [], [], 4)


def test_engine_is_repeatable(make_player):
    players = [make_player(i, rating=1500 + 37 * (i % 5)) for i in range(1, 12)]
    first = generate_pairings(players, [], [], 1)
    second = generate_pairings(players, [], [], 1)
    assert first.to_dict() == second.to_dict()


def test_equal_scores_in_round_two(make_player, results):
    players = [make_player(1, rating=1400), make_player(2, rating=1600)]
    result = generate_pairings(players, results({1: 0.5, 2: 0.5}), [], 2)
    assert result.pairing_ids == [(2, 1)]


def test_only_the_earlier_pairing_is_avoided(make_player, results, game_log):
    players = [make_player(i, rating=1500) for i in (1, 2, 3, 4)]
    game_log.add(1, 1, 2, "1/2-1/2").add(1, 3, 4, "*")
    result = generate_pairings(
        players, results({i: 0.5 for i in (1, 2, 3, 4)}), game_log.games, 2
    )
    assert {frozenset(pair) for pair in result.pairing_ids}.isdisjoint({frozenset({1, 2})})
    assert len(result.pairings) == 2


def test_five_players_each_get_one_bye_in_five_rounds(make_player, results):
    players = [make_player(i, rating=2000 - 100 * i) for i in range(1, 6)]
    history = PairingHistory()
    byes = []
    for round_number in range(1, 6):
        result = generate_pairings(
            players,
            results({i: 0.0 for i in range(1, 6)}),
            [],
            round_number,
            history=history,
        )
        assert len(result.pairings) == 2
        assert len(result.byes) == 1
        history.record_round(result)
        byes.extend(result.bye_player_ids)

    assert sorted(byes) == [1, 2, 3, 4, 5]


def test_stranded_bottom_pair_is_repaired_without_rematch(make_player, results, game_log):
    players = [make_player(i, rating=2100 - 100 * i) for i in (1, 2, 3, 4)]
    game_log.add(1, 1, 3, "1-0").add(1, 2, 4, "1-0").add(2, 3, 4, "1/2-1/2")
    points = results({1: 1.0, 2: 1.0, 3: 0.5, 4: 0.5})
    result = generate_pairings(players, points, game_log.games, 3)

    # 3 and 4 have met, so both leaders give up their own game
    assert sorted(map(sorted, result.pairing_ids)) == [[1, 4], [2, 3]]
    assert not any(p.startswith("Rematch") for p in result.validation_errors)
    assert result.float_count == len(result.floats)


@pytest.mark.parametrize(
    "earlier_byes, expected",
    [
        ({5: [1]}, [4]),
        # nobody in the bottom group is still owed a bye
        ({4: [1], 5: [1]}, [3]),
    ],
)
def test_bye_skips_players_who_already_had_one(make_player, results, earlier_byes, expected):
    players = [make_player(i, rating=2000 - 100 * i) for i in range(1, 6)]
    points = results({1: 1.0, 2: 1.0, 3: 1.0, 4: 0.0, 5: 0.0})
    history = PairingHistory(byes=earlier_byes)
    result = generate_pairings(players, points, [], 2, history=history)

    assert result.bye_player_ids == expected
    assert len(result.pairings) == 2
    assert not any("another bye" in p for p in result.validation_errors)
