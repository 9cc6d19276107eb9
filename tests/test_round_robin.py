from collections import Counter
from itertools import combinations

import pytest

from tilepairing.exceptions import (
    InvalidConfigurationException,
    PairingException,
    PlayerNotFoundException,
)
from tilepairing.models import Player, matchup_key
from tilepairing.pairing import (
    RoundRobin,
    division_round_offset,
    generate_round_robin_schedule,
    vacate_inactive_boards,
)
from tilepairing.validation import validate_round_robin_schedule


def _field(count):
    return [Player(id=str(i), name=f"Player {i}", seed=i) for i in range(1, count + 1)]


def _meetings(schedule):
    return Counter(
        matchup_key(p.player1.id, p.player2.id)
        for pairings in schedule.values()
        for p in pairings
        if not p.is_bye
    )


@pytest.mark.parametrize("count", [4, 6, 8])
def test_even_field_meets_everyone_once(count):
    players = _field(count)
    schedule = generate_round_robin_schedule(players)

    assert sorted(schedule) == list(range(1, count))
    assert all(len(pairings) == count // 2 for pairings in schedule.values())
    meetings = _meetings(schedule)
    assert all(
        meetings[matchup_key(a.id, b.id)] == 1 for a, b in combinations(players, 2)
    )


def test_odd_field_gets_one_bye_per_player():
    schedule = generate_round_robin_schedule(_field(5))

    assert len(schedule) == 5
    byes = Counter(
        p.player1.id for pairings in schedule.values() for p in pairings if p.is_bye
    )
    assert byes == Counter({str(i): 1 for i in range(1, 6)})


def test_tables_start_over_every_round():
    schedule = generate_round_robin_schedule(_field(6))
    for pairings in schedule.values():
        assert sorted(p.table for p in pairings) == [1, 2, 3]


def test_second_cycle_swaps_sides():
    schedule = generate_round_robin_schedule(_field(4), repeats=2)

    assert len(schedule) == 6
    for first, again in zip(schedule[1], schedule[4]):
        assert first.player1.id == again.player2.id
        assert first.player2.id == again.player1.id


def test_back_to_back_matches_alternate_sides():
    schedule = generate_round_robin_schedule(_field(4), matches_per_opponent=2)

    assert len(schedule) == 6
    for first, second in zip(schedule[1], schedule[2]):
        assert first.player1.id == second.player2.id


def test_schedule_passes_validation():
    players = _field(7)
    schedule = generate_round_robin_schedule(players, repeats=2)
    report = validate_round_robin_schedule(schedule, players, repeats=2)
    assert report.is_valid
    assert not report.violations


def test_withdrawn_players_are_left_out():
    players = _field(4) + [Player(id="5", name="Gone", seed=5, status="withdrawn")]
    schedule = generate_round_robin_schedule(players)

    assert len(schedule) == 3
    assert not any(p.is_bye for pairings in schedule.values() for p in pairings)


def test_whole_roster_schedule_vacates_inactive_boards():
    players = _field(4) + [Player(id="5", name="Gone", seed=5, status="withdrawn")]
    schedule = generate_round_robin_schedule(players, include_inactive=True)

    assert len(schedule) == 5
    rounds = {r: vacate_inactive_boards(pairings) for r, pairings in schedule.items()}
    for pairings in rounds.values():
        seated = sorted(pid for p in pairings for pid in p.player_ids)
        assert seated == ["1", "2", "3", "4"]
    assert set(_meetings(rounds).values()) == {1}
    assert len(_meetings(rounds)) == 6


def test_empty_active_field_gives_empty_schedule():
    players = [Player(id="1", name="Gone", seed=1, status="paused")]
    assert generate_round_robin_schedule(players) == {}


def test_invalid_repeat_count():
    with pytest.raises(InvalidConfigurationException):
        generate_round_robin_schedule(_field(4), repeats=0)


def test_division_offset():
    assert division_round_offset("A", 3) == 65 % 3
    assert division_round_offset(None, 3) == 0
    assert division_round_offset("B", 0) == 0


def test_offset_rotates_the_schedule():
    plain = generate_round_robin_schedule(_field(4))
    shifted = generate_round_robin_schedule(_field(4), round_offset=1)
    assert _meetings(plain) == _meetings(shifted)
    assert [p.player2.id for p in shifted[1]] == [p.player2.id for p in plain[2]]


def test_round_robin_class():
    rr = RoundRobin(_field(4))

    assert rr.number_of_rounds == 3
    assert rr.get_round_pairings(2) == rr.schedule[2]
    assert len(rr.get_all_pairings()) == 3

    opponents = [opponent.id for _, opponent in rr.get_player_schedule("1")]
    assert sorted(opponents) == ["2", "3", "4"]
    assert "Round Robin: 4 players, 3 rounds" in str(rr)

    with pytest.raises(PairingException):
        rr.get_round_pairings(4)
    with pytest.raises(PlayerNotFoundException):
        rr.get_player_schedule("99")
