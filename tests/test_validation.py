from tilepairing.models import Pairing, Player
from tilepairing.pairing import generate_swiss_pairings
from tilepairing.validation import CriterionStatus, validate_pairings


def _field(count):
    return [Player(id=str(i), name=f"Player {i}", seed=i) for i in range(1, count + 1)]


def _board(table, first, second=None):
    return Pairing(table=table, round=1, player1=first, player2=second)


def _criterion(report, name):
    return next(r for r in report.criteria_results if r.criterion == name)


def test_generated_round_is_valid():
    players = _field(7)
    report = validate_pairings(generate_swiss_pairings(players), players, round_number=1)

    assert report.is_valid
    assert report.compliance_percentage == 100.0
    assert not report.quality_warnings


def test_unpaired_player_is_an_absolute_violation():
    p = _field(4)
    report = validate_pairings([_board(1, p[0], p[1])], p)

    assert not report.is_valid
    assert _criterion(report, "P1").details["missing"] == ["3", "4"]


def test_self_pairing_and_double_seating():
    p = _field(4)
    pairings = [_board(1, p[0], p[0]), _board(2, p[1], p[2]), _board(3, p[3], p[2])]
    report = validate_pairings(pairings, p)

    assert _criterion(report, "P2").is_violation
    assert _criterion(report, "P3").details["players"] == ["1", "3"]


def test_bye_must_go_to_fewest_byes():
    p = _field(3)
    pairings = [_board("BYE", p[0]), _board(1, p[1], p[2])]

    unfair = validate_pairings(pairings, p, bye_history={"1": 1})
    fair = validate_pairings(pairings, p, bye_history={"1": 1, "2": 1, "3": 1})

    assert _criterion(unfair, "P4").is_violation
    assert _criterion(fair, "P4").status == CriterionStatus.COMPLIANT


def test_rematches_and_shared_tables_are_quality_warnings():
    p = _field(4)
    pairings = [_board(1, p[0], p[1]), _board(1, p[2], p[3])]

    report = validate_pairings(pairings, p, previous_matches=[("1", "2")])

    assert report.is_valid
    assert {w.criterion for w in report.quality_warnings} == {"P5", "P6"}
    assert _criterion(report, "P5").details["tables"] == [1]


def test_no_bye_is_not_applicable():
    p = _field(2)
    report = validate_pairings([_board(1, p[0], p[1])], p)
    assert _criterion(report, "P4").status == CriterionStatus.NOT_APPLICABLE
