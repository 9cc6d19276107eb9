"""Pairing systems for Tile Pairing.

Every generator is a pure function of the roster, the results so far and
its settings; none keeps state between calls.
"""

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

from tilepairing.pairing.dispatcher import generate_pairings
from tilepairing.pairing.enhanced_swiss import generate_enhanced_swiss_pairings
from tilepairing.pairing.gibson import (
    apply_gibson_rule_to_pairings,
    create_gibson_pairings,
    get_highest_ranked_non_prize_winner,
    has_clinched_first_place,
)
from tilepairing.pairing.king_of_the_hill import generate_king_of_the_hill_pairings
from tilepairing.pairing.manual import (
    ManualPairingResult,
    PlayerMatch,
    TableRelocation,
    resolve_manual_bye,
    resolve_manual_pairing,
    resolve_player,
)
from tilepairing.pairing.round_robin import (
    RoundRobin,
    division_round_offset,
    generate_round_robin_schedule,
    vacate_inactive_boards,
)
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.swiss import (
    RematchPolicy,
    generate_swiss_pairings,
    select_bye_player,
)
from tilepairing.pairing.tables import TableAllocator
from tilepairing.pairing.team_swiss import TeamPairing, generate_team_swiss_pairings

__all__ = [
    "assign_starts",
    "generate_swiss_pairings",
    "select_bye_player",
    "RematchPolicy",
    "TableAllocator",
    "generate_king_of_the_hill_pairings",
    "generate_round_robin_schedule",
    "vacate_inactive_boards",
    "division_round_offset",
    "RoundRobin",
    "has_clinched_first_place",
    "get_highest_ranked_non_prize_winner",
    "create_gibson_pairings",
    "apply_gibson_rule_to_pairings",
    "generate_enhanced_swiss_pairings",
    "resolve_manual_pairing",
    "resolve_manual_bye",
    "resolve_player",
    "ManualPairingResult",
    "PlayerMatch",
    "TableRelocation",
    "generate_team_swiss_pairings",
    "TeamPairing",
    "generate_pairings",
]
