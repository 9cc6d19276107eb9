from tilepairing.constants import MODE_BEST_OF_LEAGUE, NOTE_GIBSON, TABLE_GIBSON
from tilepairing.models import Pairing, Player
from tilepairing.pairing import (
    apply_gibson_rule_to_pairings,
    create_gibson_pairings,
    get_highest_ranked_non_prize_winner,
    has_clinched_first_place,
)


def _standings(wins):
    return [
        Player(id=str(rank), name=f"Player {rank}", seed=rank, rank=rank, wins=w)
        for rank, w in enumerate(wins, start=1)
    ]


def _ids(pairing):
    return {p.id for p in (pairing.player1, pairing.player2) if p is not None}


def test_clinch_needs_the_late_stage_window():
    leader = Player(id="1", name="Leader", seed=1, rank=1, wins=8, spread=100)
    second = Player(id="2", name="Second", seed=2, rank=2, wins=5, spread=0)
    players = [leader, second]

    assert has_clinched_first_place(leader, players, rounds_remaining=2)
    assert not has_clinched_first_place(leader, players, rounds_remaining=3)
    assert not has_clinched_first_place(leader, players, rounds_remaining=4)
    # a wider window lets the raw margin decide
    assert not has_clinched_first_place(
        leader, players, rounds_remaining=4, late_stage_rounds=5
    )


def test_only_the_leader_can_clinch():
    players = _standings([8, 2])
    assert not has_clinched_first_place(players[1], players, rounds_remaining=1)
    assert has_clinched_first_place(players[0], players[:1], rounds_remaining=1)


def test_best_of_league_uses_match_wins():
    leader = Player(id="1", name="Leader", seed=1, rank=1, wins=3, match_wins=6)
    second = Player(id="2", name="Second", seed=2, rank=2, wins=9, match_wins=2)
    players = [leader, second]

    assert has_clinched_first_place(
        leader, players, rounds_remaining=2, mode=MODE_BEST_OF_LEAGUE
    )
    assert not has_clinched_first_place(leader, players, rounds_remaining=2)


def test_highest_ranked_non_prize_winner():
    players = _standings([8, 5, 5, 4, 3, 2])
    assert get_highest_ranked_non_prize_winner(players, prize_count=3).id == "4"

    players[3] = players[3].with_updates(status="withdrawn")
    assert get_highest_ranked_non_prize_winner(players, prize_count=3).id == "5"
    assert get_highest_ranked_non_prize_winner(players, prize_count=6) is None


def test_create_gibson_pairings():
    players = _standings([8, 5, 5, 4, 3, 2])

    pairings = create_gibson_pairings(players, rounds_remaining=2, round_number=8)

    assert len(pairings) == 1
    gibson = pairings[0]
    assert gibson.table == TABLE_GIBSON
    assert gibson.is_gibson_pairing
    assert gibson.note == NOTE_GIBSON
    assert _ids(gibson) == {"1", "4"}


def test_apply_gibson_rule_re_pairs_former_opponents():
    players = _standings([8, 5, 5, 4, 3, 2])
    existing = [
        Pairing(table=1, round=8, player1=players[0], player2=players[1]),
        Pairing(table=2, round=8, player1=players[2], player2=players[3]),
        Pairing(table=3, round=8, player1=players[4], player2=players[5]),
    ]

    pairings = apply_gibson_rule_to_pairings(
        existing, players, current_round=8, total_rounds=10
    )

    assert pairings[0].is_gibson_pairing
    assert _ids(pairings[0]) == {"1", "4"}
    by_players = {frozenset(_ids(p)): p for p in pairings}
    assert by_players[frozenset({"2", "3"})].table == 1
    assert by_players[frozenset({"5", "6"})].table == 3
    seated = sorted(pid for p in pairings for pid in _ids(p))
    assert seated == ["1", "2", "3", "4", "5", "6"]
    assert all(p.player1_starts != p.player2_starts for p in pairings)


def test_lone_orphan_takes_the_bye():
    players = _standings([8, 5, 5, 4, 3])
    existing = [
        Pairing(table=1, round=9, player1=players[0], player2=players[1]),
        Pairing(table=2, round=9, player1=players[2], player2=players[4]),
        Pairing(table="BYE", round=9, player1=players[3]),
    ]

    pairings = apply_gibson_rule_to_pairings(
        existing, players, current_round=9, total_rounds=10
    )

    byes = [p for p in pairings if p.is_bye]
    assert [p.player1.id for p in byes] == ["2"]
    assert len(pairings) == 3


def test_gibson_rule_is_skipped_early():
    players = _standings([8, 1, 1, 0])
    existing = [
        Pairing(table=1, round=2, player1=players[0], player2=players[1]),
        Pairing(table=2, round=2, player1=players[2], player2=players[3]),
    ]
    assert apply_gibson_rule_to_pairings(existing, players, 2, 10) == tuple(existing)


def test_lone_orphan_meets_the_existing_bye_player():
    # player 4 was paused when the round was drawn
    players = _standings([8, 5, 5, 4, 3, 2])
    existing = [
        Pairing(table=1, round=9, player1=players[0], player2=players[1]),
        Pairing(table=2, round=9, player1=players[2], player2=players[4]),
        Pairing(table="BYE", round=9, player1=players[5]),
    ]

    pairings = apply_gibson_rule_to_pairings(
        existing, players, current_round=9, total_rounds=10
    )

    assert not [p for p in pairings if p.is_bye]
    assert _ids(pairings[0]) == {"1", "4"}
    by_players = {frozenset(_ids(p)): p for p in pairings}
    assert by_players[frozenset({"2", "6"})].table == 1
    assert by_players[frozenset({"3", "5"})].table == 2
    assert len(pairings) == 3
