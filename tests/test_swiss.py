import pytest

from tilepairing.constants import NOTE_FORCED_REMATCH, NOTE_REMATCH_ALLOWED
from tilepairing.exceptions import DuplicatePlayerException, InvalidRosterException
from tilepairing.models import MatchResult, Player
from tilepairing.pairing import generate_swiss_pairings, select_bye_player


def _field(count, **overrides):
    return [
        Player(id=str(i), name=f"Player {i}", seed=i, **overrides.get(str(i), {}))
        for i in range(1, count + 1)
    ]


def _ids(pairing):
    return tuple(p.id for p in (pairing.player1, pairing.player2) if p is not None)


def test_four_players_round_one():
    pairings = generate_swiss_pairings(_field(4))

    assert len(pairings) == 2
    assert not any(p.is_bye for p in pairings)
    assert [_ids(p) for p in pairings] == [("1", "2"), ("3", "4")]
    assert [p.table for p in pairings] == [1, 2]
    first = pairings[0]
    assert first.player1.seed == 1 and first.player1_starts
    assert not first.player2_starts


def test_round_one_bye_goes_to_a_rated_player():
    players = _field(5, **{"3": {"rating": 1500}})

    pairings = generate_swiss_pairings(players)

    byes = [p for p in pairings if p.is_bye]
    assert len(byes) == 1
    assert pairings[0].is_bye
    assert byes[0].player1.id == "3"
    assert byes[0].table == "BYE"


def test_bye_prefers_fewest_byes_then_lowest_rank():
    players = [
        Player(id=str(i), name=f"Player {i}", seed=i, rank=i) for i in range(1, 6)
    ]
    results = [MatchResult(round=1, player1_id="5", player2_id=None, is_bye=True)]

    assert select_bye_player(players, results, round_number=2).id == "4"
    assert select_bye_player(players, [], round_number=2).id == "5"


def test_rematch_is_avoided_inside_the_group():
    pairings = generate_swiss_pairings(_field(4), previous_matchups=[("1", "2")])
    assert [_ids(p) for p in pairings] == [("1", "3"), ("2", "4")]
    assert all(p.note is None for p in pairings)


def test_forced_rematch_is_noted():
    results = [MatchResult(round=1, player1_id="1", player2_id="2", score1=1, score2=0)]
    pairings = generate_swiss_pairings(_field(2), all_results=results, round_number=2)

    assert [_ids(p) for p in pairings] == [("1", "2")]
    assert pairings[0].note == NOTE_FORCED_REMATCH


def test_max_repeats_allows_an_old_rematch():
    results = [MatchResult(round=1, player1_id="1", player2_id="2", score1=1, score2=0)]

    allowed = generate_swiss_pairings(
        _field(4), all_results=results, round_number=3, max_repeats=1
    )
    assert [_ids(p) for p in allowed] == [("1", "2"), ("3", "4")]
    assert allowed[0].note == NOTE_REMATCH_ALLOWED
    assert allowed[1].note is None

    blocked = generate_swiss_pairings(
        _field(4), all_results=results, round_number=3, max_repeats=2
    )
    assert [_ids(p) for p in blocked] == [("1", "3"), ("2", "4")]

    strict = generate_swiss_pairings(_field(4), all_results=results, round_number=3)
    assert [_ids(p) for p in strict] == [("1", "3"), ("2", "4")]


def test_leftover_floats_down_to_the_next_group():
    players = _field(
        4,
        **{"1": {"wins": 2}, "2": {"wins": 1}, "3": {"wins": 1}},
    )
    pairings = generate_swiss_pairings(players, round_number=3)
    assert [_ids(p) for p in pairings] == [("1", "2"), ("3", "4")]


def test_reserved_tables_are_honoured_and_kept_free():
    pairings = generate_swiss_pairings(_field(4), reserved_tables={"3": 5})
    assert [p.table for p in pairings] == [1, 5]

    pairings = generate_swiss_pairings(_field(4), reserved_tables={"9": 1})
    assert [p.table for p in pairings] == [2, 3]


def test_inactive_players_are_not_paired():
    players = _field(5, **{"5": {"status": "withdrawn"}})
    pairings = generate_swiss_pairings(players)

    assert len(pairings) == 2
    assert all("5" not in _ids(p) for p in pairings)


def test_every_active_player_seated_once():
    players = _field(9, **{"4": {"wins": 1}, "7": {"wins": 1}, "2": {"ties": 1}})
    pairings = generate_swiss_pairings(players, previous_matchups=[("4", "7")])

    seated = [pid for p in pairings for pid in _ids(p)]
    assert sorted(seated) == sorted(p.id for p in players)
    numbered = [p.table for p in pairings if not p.is_bye]
    assert len(numbered) == len(set(numbered))


def test_empty_roster_is_rejected():
    with pytest.raises(InvalidRosterException):
        generate_swiss_pairings([])


def test_duplicate_ids_are_rejected():
    players = _field(3) + [Player(id="2", name="Copy", seed=4)]
    with pytest.raises(DuplicatePlayerException):
        generate_swiss_pairings(players)
