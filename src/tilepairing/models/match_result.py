"""Match result data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from tilepairing.constants import BYE_NAME
from tilepairing.exceptions import InvalidResultException
from tilepairing.type_hints import PlayerId


def _optional_id(value: Any) -> Optional[PlayerId]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single game.

    Attributes
    ----------
    round : int
        Round the game was played in (1-based).
    player1_id : str or None
        ID of the first player. Rows missing it are skipped by the
        standings calculator.
    player2_id : str or None
        ID of the second player, None for a bye.
    score1 : float
        Points scored by player 1.
    score2 : float
        Points scored by player 2.
    is_bye : bool
        Whether this row records a bye.
    is_forfeit : bool
        Whether the game was decided by forfeit.
    player1_starts : bool
        Player 1 moved first.
    player2_starts : bool
        Player 2 moved first.
    """

    round: int
    player1_id: Optional[PlayerId]
    player2_id: Optional[PlayerId]
    score1: float = 0
    score2: float = 0
    is_bye: bool = False
    is_forfeit: bool = False
    player1_starts: bool = False
    player2_starts: bool = False

    def __post_init__(self) -> None:
        if self.round < 1:
            raise InvalidResultException(f"Round must be positive, got {self.round}")
        if self.player1_starts and self.player2_starts:
            raise InvalidResultException(
                f"Both players marked as starting in round {self.round}"
            )

    @property
    def is_complete(self) -> bool:
        """Both sides are real players."""
        return bool(self.player1_id) and bool(self.player2_id)

    @property
    def is_bye_result(self) -> bool:
        return self.is_bye or (bool(self.player1_id) and not self.player2_id)

    def involves(self, player_id: PlayerId) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def is_between(self, player_a: PlayerId, player_b: PlayerId) -> bool:
        """Whether this game was played between exactly these two players."""
        return (self.player1_id == player_a and self.player2_id == player_b) or (
            self.player1_id == player_b and self.player2_id == player_a
        )

    def opponent_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        return None

    def score_for(self, player_id: PlayerId) -> float:
        return self.score1 if player_id == self.player1_id else self.score2

    def started(self, player_id: PlayerId) -> bool:
        """Whether the given player moved first in this game."""
        if player_id == self.player1_id:
            return self.player1_starts
        if player_id == self.player2_id:
            return self.player2_starts
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "round": self.round,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "score1": self.score1,
            "score2": self.score2,
            "is_bye": self.is_bye,
            "is_forfeit": self.is_forfeit,
            "player1_starts": self.player1_starts,
            "player2_starts": self.player2_starts,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from a persistence-layer record.

        A row whose ``player2_name`` is ``'BYE'`` is read as a bye.

        Raises:
            InvalidResultException: If the record has no round
        """
        if data.get("round") in (None, ""):
            raise InvalidResultException(f"Result record has no round: {data!r}")
        player2_id = _optional_id(data.get("player2_id"))
        is_bye = bool(data.get("is_bye")) or data.get("player2_name") == BYE_NAME
        if is_bye:
            player2_id = None
        return cls(
            round=int(data["round"]),
            player1_id=_optional_id(data.get("player1_id")),
            player2_id=player2_id,
            score1=data.get("score1") or 0,
            score2=data.get("score2") or 0,
            is_bye=is_bye,
            is_forfeit=bool(data.get("is_forfeit")),
            player1_starts=bool(data.get("player1_starts")),
            player2_starts=bool(data.get("player2_starts")),
        )
