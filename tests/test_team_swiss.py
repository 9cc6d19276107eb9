import pytest

from tilepairing.constants import NOTE_FORCED_REMATCH
from tilepairing.exceptions import DuplicatePlayerException, InvalidRosterException
from tilepairing.models import MatchResult, Team
from tilepairing.pairing import generate_team_swiss_pairings


def _teams(*wins):
    teams = []
    for i, w in enumerate(wins):
        letter = chr(ord("A") + i)
        teams.append(Team(id=letter, name=f"Team {letter}", rank=i + 1, team_wins=w))
    return teams


def _ids(pairing):
    return (pairing.team1.id, pairing.team2.id if pairing.team2 else None)


def test_teams_paired_by_score_group():
    pairings = generate_team_swiss_pairings(_teams(2, 1, 1, 0))
    assert [_ids(p) for p in pairings] == [("A", "B"), ("C", "D")]
    assert [p.table for p in pairings] == [1, 2]


def test_team_rematch_is_avoided():
    pairings = generate_team_swiss_pairings(
        _teams(2, 1, 1, 0), previous_team_matchups=[("A", "B")]
    )
    assert [_ids(p) for p in pairings] == [("A", "C"), ("B", "D")]


def test_forced_team_rematch():
    pairings = generate_team_swiss_pairings(_teams(1, 0), [("A", "B")])
    assert pairings[0].note == NOTE_FORCED_REMATCH


def test_team_bye_goes_to_fewest_byes():
    byes = [MatchResult(round=1, player1_id="C", player2_id=None, is_bye=True)]

    assert generate_team_swiss_pairings(_teams(1, 1, 0))[0].team1.id == "C"
    pairings = generate_team_swiss_pairings(_teams(1, 1, 0), all_results=byes)
    assert pairings[0].is_bye
    assert pairings[0].team1.id == "B"
    assert pairings[0].to_dict()["team2"] == {"name": "BYE"}


def test_team_roster_errors():
    with pytest.raises(InvalidRosterException):
        generate_team_swiss_pairings([])
    with pytest.raises(DuplicatePlayerException):
        generate_team_swiss_pairings(_teams(1, 0) + _teams(0))
