from tilepairing.models.match_result import MatchResult
from tilepairing.models.pairing import Pairing, paired_player_ids
from tilepairing.models.pairing_history import (
    PairingHistory,
    build_previous_matchups,
    matchup_key,
)
from tilepairing.models.player import Player, Team, to_player_id
from tilepairing.models.tournament_config import (
    TournamentConfig,
    count_rounds_remaining,
)

__all__ = [
    "Player",
    "Team",
    "MatchResult",
    "Pairing",
    "PairingHistory",
    "TournamentConfig",
    "build_previous_matchups",
    "count_rounds_remaining",
    "matchup_key",
    "paired_player_ids",
    "to_player_id",
]
