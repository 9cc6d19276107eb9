"""A player in a tournament, as an immutable record."""

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

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from tilepairing.constants import (
    INACTIVE_STATUSES,
    PLAYER_STATUSES,
    STATUS_ACTIVE,
    TIE_SCORE,
    UNSEEDED,
    WIN_SCORE,
)
from tilepairing.exceptions import InvalidPlayerDataException
from tilepairing.type_hints import PlayerId


def to_player_id(value: Any) -> PlayerId:
    """Coerce a raw identifier from the persistence layer to a PlayerId.

    Raises:
        InvalidPlayerDataException: If the identifier is missing or blank
    """
    if value is None:
        raise InvalidPlayerDataException("Player id is required")
    player_id = str(value).strip()
    if not player_id:
        raise InvalidPlayerDataException("Player id must not be blank")
    return player_id


@dataclass(frozen=True)
class Player:
    """Represents a player in the tournament.

    Records are never mutated: the standings calculator and the pairers
    hand back new copies made with :meth:`with_updates`.

    Attributes:
        id: Canonical player identifier
        name: Display name
        seed: Initial placement, unique, lower is better
        rating: Rating, 0 means unrated
        wins: Games won as of the cutoff round
        losses: Games lost as of the cutoff round
        ties: Games tied as of the cutoff round
        spread: Cumulative score differential
        status: One of active, withdrawn, paused
        division: Division label, if any
        team_id: Team identifier, if any
        starts: Number of rounds the player moved first
        rank: Current standing, filled in by the standings calculator
        match_wins: Matches won in best-of-league events
        match_losses: Matches lost in best-of-league events
    """

    id: PlayerId
    name: str
    seed: int = UNSEEDED
    rating: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    spread: float = 0
    status: str = STATUS_ACTIVE
    division: Optional[str] = None
    team_id: Optional[str] = None
    starts: int = 0
    rank: Optional[int] = None
    match_wins: int = 0
    match_losses: int = 0

    @property
    def score(self) -> float:
        """Win-equivalent score: wins count one, ties count half."""
        return self.wins * WIN_SCORE + self.ties * TIE_SCORE

    @property
    def is_active(self) -> bool:
        return self.status not in INACTIVE_STATUSES

    @property
    def is_rated(self) -> bool:
        return (self.rating or 0) > 0

    def with_updates(self, **changes: Any) -> "Player":
        """Return a copy of this player with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize a player from a persistence-layer record.

        Accepts either ``id`` or ``player_id`` and either ``seed`` or
        ``initial_seed``; identifiers are fixed as strings here.
        """
        raw_id = data.get("id", data.get("player_id"))
        status = data.get("status") or STATUS_ACTIVE
        if data.get("withdrawn"):
            status = "withdrawn"
        if status not in PLAYER_STATUSES:
            raise InvalidPlayerDataException(f"Unknown player status: {status}")
        seed = data.get("seed", data.get("initial_seed"))
        rank = data.get("rank")
        return cls(
            id=to_player_id(raw_id),
            name=data.get("name") or str(raw_id),
            seed=int(seed) if seed is not None else UNSEEDED,
            rating=int(data.get("rating") or 0),
            wins=int(data.get("wins") or 0),
            losses=int(data.get("losses") or 0),
            ties=int(data.get("ties") or 0),
            spread=data.get("spread") or 0,
            status=status,
            division=data.get("division"),
            team_id=(
                str(data["team_id"]) if data.get("team_id") is not None else None
            ),
            starts=int(data.get("starts") or 0),
            rank=int(rank) if rank is not None else None,
            match_wins=int(data.get("match_wins") or 0),
            match_losses=int(data.get("match_losses") or 0),
        )

    def __str__(self) -> str:
        return f"{self.name} (#{self.seed})"


@dataclass(frozen=True)
class Team:
    """A team record for team Swiss events."""

    id: str
    name: str
    rank: Optional[int] = None
    team_wins: int = 0
    team_ties: int = 0

    @property
    def score(self) -> float:
        return self.team_wins * WIN_SCORE + self.team_ties * TIE_SCORE


#  LocalWords:  PlayerId
