import pytest

from tilepairing.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerDataException,
    InvalidResultException,
)
from tilepairing.models import (
    MatchResult,
    Pairing,
    PairingHistory,
    Player,
    TournamentConfig,
    build_previous_matchups,
    matchup_key,
)


def test_player_from_record_fixes_the_id_type():
    player = Player.from_dict(
        {"player_id": 7, "name": "Seven", "initial_seed": 3, "rating": None}
    )
    assert player.id == "7"
    assert player.seed == 3
    assert player.rating == 0
    assert not player.is_rated
    assert player.is_active


def test_player_round_trip_keeps_fields():
    player = Player(id="x", name="X", seed=2, wins=3, ties=1, status="paused")
    restored = Player.from_dict(player.to_dict())
    assert restored == player
    assert restored.score == 3.5
    assert not restored.is_active


def test_withdrawn_flag_and_bad_status():
    assert Player.from_dict({"id": "1", "withdrawn": True}).status == "withdrawn"
    with pytest.raises(InvalidPlayerDataException):
        Player.from_dict({"id": "1", "status": "asleep"})


def test_result_rejects_two_starters():
    with pytest.raises(InvalidResultException):
        MatchResult(
            round=1,
            player1_id="1",
            player2_id="2",
            player1_starts=True,
            player2_starts=True,
        )


def test_result_record_with_bye_name():
    result = MatchResult.from_dict(
        {"round": 2, "player1_id": 4, "player2_id": 9, "player2_name": "BYE", "score1": 400}
    )
    assert result.is_bye
    assert result.player2_id is None
    assert result.player1_id == "4"
    assert result.is_bye_result and not result.is_complete


def test_bye_pairing_serializes_sentinel():
    player = Player(id="1", name="Solo")
    pairing = Pairing(table="BYE", round=1, player1=player)
    data = pairing.to_dict()

    assert pairing.is_bye
    assert data["player2"] == {"name": "BYE"}
    assert data["player1"]["player_id"] == "1"


def test_pairing_history():
    results = [
        MatchResult(round=1, player1_id="1", player2_id="2", score1=1),
        MatchResult(round=1, player1_id="3", player2_id=None, is_bye=True),
        MatchResult(round=3, player1_id="2", player2_id="3", score1=1),
    ]
    history = PairingHistory.from_results(results)

    assert history.have_played("2", "1")
    assert history.bye_count("3") == 1
    assert history.met_within("1", "2", current_round=2, window=1)
    assert not history.met_within("1", "2", current_round=4, window=2)
    assert build_previous_matchups(results) == {
        matchup_key("1", "2"),
        matchup_key("2", "3"),
    }
    assert PairingHistory.from_dict(history.to_dict()).previous_matches == (
        history.previous_matches
    )


def test_config_validation():
    TournamentConfig(name="OK", total_rounds=5, reserved_tables={"1": 3}).validate()

    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(name="Bad", total_rounds=5, pairing_system="dutch").validate()
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(
            name="Bad", total_rounds=5, reserved_tables={"1": 3, "2": 3}
        ).validate()
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig.from_dict({"name": "No rounds"})


def test_config_round_trip():
    config = TournamentConfig(
        name="Open", total_rounds=7, pairing_system="enhanced_swiss", gibson_enabled=True
    )
    assert TournamentConfig.from_dict(config.to_dict()) == config
    assert config.rounds_remaining(5) == 2


def test_result_record_without_round_is_rejected():
    with pytest.raises(InvalidResultException):
        MatchResult.from_dict({"player1_id": "1", "player2_id": "2", "score1": 400})
