import pytest

from swisspairing.pairing.floats import (
    calculate_max_floats,
    find_downfloater,
    select_bye_player,
)


@pytest.mark.parametrize(
    "players, round_number, expected",
    [(16, 1, 4), (16, 2, 4), (16, 3, 3), (16, 5, 3), (16, 6, 2), (7, 1, 1), (3, 7, 0)],
)
def test_float_budget(players, round_number, expected):
    assert calculate_max_floats(players, round_number) == expected


def test_downfloater_is_highest_rated_fresh_candidate(make_swiss):
    group = [make_swiss(1, rating=2000)]
    candidates = [
        make_swiss(2, rating=1900, opponents={1}),
        make_swiss(3, rating=1800),
        make_swiss(4, rating=1700),
    ]
    assert find_downfloater(candidates, group).id == 3


def test_downfloater_skips_repeat_up_floaters(make_swiss):
    group = [make_swiss(1, rating=2000)]
    candidates = [
        make_swiss(2, rating=1900, floated_up_last_round=True),
        make_swiss(3, rating=1800),
    ]
    assert find_downfloater(candidates, group).id == 3


def test_downfloater_falls_back_to_anyone(make_swiss):
    group = [make_swiss(1, rating=2000)]
    candidates = [
        make_swiss(2, rating=1900, opponents={1}),
        make_swiss(3, rating=1800, opponents={1}),
    ]
    assert find_downfloater(candidates, group).id == 2
    assert find_downfloater([], group) is None


def test_bye_goes_to_lowest_rated_without_bye(make_swiss):
    candidates = [
        make_swiss(1, rating=2000),
        make_swiss(2, rating=1800),
        make_swiss(3, rating=1600),
        make_swiss(4, rating=1400, bye_count=1),
    ]
    assert select_bye_player(candidates).id == 3


def test_bye_falls_back_to_upper_half(make_swiss):
    candidates = [
        make_swiss(1, rating=2000),
        make_swiss(2, rating=1800, bye_count=1),
        make_swiss(3, rating=1600, bye_count=1),
    ]
    assert select_bye_player(candidates).id == 1


def test_bye_with_everyone_byed_picks_fewest(make_swiss):
    candidates = [
        make_swiss(1, rating=2000, bye_count=1),
        make_swiss(2, rating=1800, bye_count=2),
        make_swiss(3, rating=1600, bye_count=2),
    ]
    assert select_bye_player(candidates).id == 1


def test_ineligible_players_only_as_last_resort(make_swiss):
    low = make_swiss(1, rating=1000)
    low.is_bye_eligible = False
    high = make_swiss(2, rating=2000)
    assert select_bye_player([low, high]).id == 2

    high.is_bye_eligible = False
    assert select_bye_player([low, high]).id == 1


def test_no_candidates_no_bye():
    assert select_bye_player([]) is None
