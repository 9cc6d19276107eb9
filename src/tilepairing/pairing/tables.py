"""Table number allocation."""

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

from typing import Iterable, Optional, Set

from tilepairing.type_hints import PlayerId, ReservedTables


class TableAllocator:
    """Hands out table numbers for one round.

    Reserved tables are honoured for their holders and never handed out
    to anyone else; every other pair gets the lowest unused number.
    """

    def __init__(
        self,
        reserved_tables: Optional[ReservedTables] = None,
        used: Iterable[int] = (),
    ):
        self.reserved_tables = dict(reserved_tables or {})
        self._reserved_numbers: Set[int] = set(self.reserved_tables.values())
        self._used: Set[int] = set(used)

    def is_free(self, table: int) -> bool:
        return table not in self._used

    def claim(self, table: int) -> int:
        self._used.add(table)
        return table

    def next_table(self) -> int:
        """Lowest table number that is neither used nor reserved."""
        table = 1
        while table in self._used or table in self._reserved_numbers:
            table += 1
        return self.claim(table)

    def reservation_for(self, player_id: PlayerId) -> Optional[int]:
        return self.reserved_tables.get(player_id)

    def table_for_pair(self, player1_id: PlayerId, player2_id: PlayerId) -> int:
        """Player 1's free reservation, else player 2's, else the next table."""
        for player_id in (player1_id, player2_id):
            table = self.reservation_for(player_id)
            if table is not None and self.is_free(table):
                return self.claim(table)
        return self.next_table()
