"""Pairing data class."""

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
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tilepairing.constants import BYE_NAME, TABLE_BYE
from tilepairing.models.player import Player
from tilepairing.type_hints import PlayerId, Table


@dataclass(frozen=True)
class Pairing:
    """One board of a round.

    Attributes
    ----------
    table : int or str
        Table number, or ``'BYE'`` / ``'GIBSON'``.
    round : int
        Round the pairing belongs to.
    player1 : Player
        First player.
    player2 : Player or None
        Second player, None when player1 has the bye.
    player1_starts : bool
        Player 1 moves first.
    player2_starts : bool
        Player 2 moves first.
    is_gibson_pairing : bool
        Created by the Gibson rule.
    note : str or None
        Why the pairing looks the way it does (forced rematch, bye, ...).
    """

    table: Table
    round: int
    player1: Player
    player2: Optional[Player] = None
    player1_starts: bool = False
    player2_starts: bool = False
    is_gibson_pairing: bool = False
    note: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.player2 is None or self.table == TABLE_BYE

    @property
    def player_ids(self) -> Tuple[PlayerId, ...]:
        """Ids of the real players seated at this pairing."""
        if self.player2 is None:
            return (self.player1.id,)
        return (self.player1.id, self.player2.id)

    def involves(self, player_id: PlayerId) -> bool:
        return player_id in self.player_ids

    def opponent_of(self, player_id: PlayerId) -> Optional[Player]:
        if self.player2 is not None and player_id == self.player1.id:
            return self.player2
        if self.player2 is not None and player_id == self.player2.id:
            return self.player1
        return None

    def with_updates(self, **changes: Any) -> "Pairing":
        """Return a copy of this pairing with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing, writing the bye side as the ``{name: 'BYE'}`` sentinel."""
        return {
            "table": self.table,
            "round": self.round,
            "player1": _player_summary(self.player1, self.player1_starts),
            "player2": (
                {"name": BYE_NAME}
                if self.player2 is None
                else _player_summary(self.player2, self.player2_starts)
            ),
            "isGibsonPairing": self.is_gibson_pairing,
            "note": self.note,
        }

    def __str__(self) -> str:
        opponent = BYE_NAME if self.player2 is None else self.player2.name
        return f"[{self.table}] {self.player1.name} vs {opponent}"


def _player_summary(player: Player, starts: bool) -> Dict[str, Any]:
    return {
        "player_id": player.id,
        "name": player.name,
        "rating": player.rating,
        "division": player.division,
        "starts": starts,
    }


def paired_player_ids(pairings: Iterable[Pairing]) -> List[PlayerId]:
    """All real player ids seated in the given pairings, in order."""
    return [player_id for pairing in pairings for player_id in pairing.player_ids]


#  LocalWords:  PairingSet
