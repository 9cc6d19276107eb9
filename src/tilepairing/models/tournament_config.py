"""TournamentConfig data class."""

# Tile Pairing
# Copyright (C) 2025  Tile Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Any, Dict

from tilepairing.constants import (
    DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS,
    DEFAULT_GAMES_PER_MATCH,
    DEFAULT_LATE_STAGE_ROUNDS,
    DEFAULT_MODE,
    DEFAULT_PAIRING_SYSTEM,
    DEFAULT_PRIZE_COUNT,
    PAIRING_SYSTEMS,
    STANDINGS_MODES,
)
from tilepairing.exceptions import InvalidConfigurationException
from tilepairing.type_hints import ReservedTables


def count_rounds_remaining(total_rounds: int, current_round: int) -> int:
    """Rounds still to be played after ``current_round``."""
    return max(0, total_rounds - current_round)


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    total_rounds : int
        Number of rounds in the tournament.
    pairing_system : str
        One of "swiss", "enhanced_swiss", "king_of_the_hill",
        "round_robin" and "manual".
    mode : str
        Standings mode, "individual" or "best_of_league".
    games_per_match : int
        Games in one best-of-league match.
    prize_count : int
        Number of prize positions.
    max_repeats : int
        Rematch policy. 0 allows no rematch unless forced; N allows a
        rematch once the pair has not met within the trailing N rounds.
    reserved_tables : dict of str to int
        Player id to reserved table number.
    gibson_enabled : bool
        Apply the Gibson rule in enhanced Swiss.
    late_stage_rounds : int
        Rounds remaining at or below which the event is in its late stage.
    contender_split_min_players : int
        Minimum pool size before contenders are paired separately.
    round_robin_repeats : int
        Number of round-robin cycles.
    """

    name: str
    total_rounds: int
    pairing_system: str = DEFAULT_PAIRING_SYSTEM
    mode: str = DEFAULT_MODE
    games_per_match: int = DEFAULT_GAMES_PER_MATCH
    prize_count: int = DEFAULT_PRIZE_COUNT
    max_repeats: int = 0
    reserved_tables: ReservedTables = field(default_factory=dict)
    gibson_enabled: bool = False
    late_stage_rounds: int = DEFAULT_LATE_STAGE_ROUNDS
    contender_split_min_players: int = DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS
    round_robin_repeats: int = 1

    def validate(self) -> None:
        """Check the configuration, raising on the first corrupt value.

        Raises:
            InvalidConfigurationException: If any setting is out of range
        """
        if self.total_rounds < 1:
            raise InvalidConfigurationException(
                f"total_rounds must be positive, got {self.total_rounds}"
            )
        if self.pairing_system not in PAIRING_SYSTEMS:
            raise InvalidConfigurationException(
                f"Unknown pairing system: {self.pairing_system}"
            )
        if self.mode not in STANDINGS_MODES:
            raise InvalidConfigurationException(f"Unknown standings mode: {self.mode}")
        if self.games_per_match < 1:
            raise InvalidConfigurationException(
                f"games_per_match must be positive, got {self.games_per_match}"
            )
        if self.prize_count < 0:
            raise InvalidConfigurationException(
                f"prize_count must not be negative, got {self.prize_count}"
            )
        if self.max_repeats < 0:
            raise InvalidConfigurationException(
                f"max_repeats must not be negative, got {self.max_repeats}"
            )
        if self.late_stage_rounds < 0 or self.contender_split_min_players < 2:
            raise InvalidConfigurationException("Invalid late stage thresholds")
        if self.round_robin_repeats < 1:
            raise InvalidConfigurationException(
                f"round_robin_repeats must be positive, got {self.round_robin_repeats}"
            )
        for player_id, table in self.reserved_tables.items():
            if not isinstance(table, int) or table < 1:
                raise InvalidConfigurationException(
                    f"Reserved table for {player_id} must be a positive number, got {table!r}"
                )
        tables = list(self.reserved_tables.values())
        if len(tables) != len(set(tables)):
            raise InvalidConfigurationException(
                "Two players cannot reserve the same table"
            )

    def rounds_remaining(self, current_round: int) -> int:
        """Rounds still to be played after ``current_round``."""
        return count_rounds_remaining(self.total_rounds, current_round)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "total_rounds": self.total_rounds,
            "pairing_system": self.pairing_system,
            "mode": self.mode,
            "games_per_match": self.games_per_match,
            "prize_count": self.prize_count,
            "max_repeats": self.max_repeats,
            "reserved_tables": dict(self.reserved_tables),
            "gibson_enabled": self.gibson_enabled,
            "late_stage_rounds": self.late_stage_rounds,
            "contender_split_min_players": self.contender_split_min_players,
            "round_robin_repeats": self.round_robin_repeats,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary and validate it."""
        try:
            config = cls(
                name=data.get("name", "Untitled Tournament"),
                total_rounds=int(data["total_rounds"]),
                pairing_system=data.get("pairing_system", DEFAULT_PAIRING_SYSTEM),
                mode=data.get("mode", DEFAULT_MODE),
                games_per_match=int(
                    data.get("games_per_match", DEFAULT_GAMES_PER_MATCH)
                ),
                prize_count=int(data.get("prize_count", DEFAULT_PRIZE_COUNT)),
                max_repeats=int(data.get("max_repeats", 0)),
                reserved_tables={
                    str(k): int(v) for k, v in data.get("reserved_tables", {}).items()
                },
                gibson_enabled=bool(data.get("gibson_enabled", False)),
                late_stage_rounds=int(
                    data.get("late_stage_rounds", DEFAULT_LATE_STAGE_ROUNDS)
                ),
                contender_split_min_players=int(
                    data.get(
                        "contender_split_min_players",
                        DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS,
                    )
                ),
                round_robin_repeats=int(data.get("round_robin_repeats", 1)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Corrupt configuration: {e}") from e
        config.validate()
        return config
