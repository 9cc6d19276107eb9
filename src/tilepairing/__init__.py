"""Tile Pairing - pairing and standings engine for tile-game tournaments."""

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

from tilepairing.models import MatchResult, Pairing, Player, Team, TournamentConfig
from tilepairing.pairing import (
    assign_starts,
    generate_enhanced_swiss_pairings,
    generate_king_of_the_hill_pairings,
    generate_pairings,
    generate_round_robin_schedule,
    generate_swiss_pairings,
    generate_team_swiss_pairings,
    has_clinched_first_place,
    resolve_manual_pairing,
)
from tilepairing.tournament import compute_standings, rank_players

__version__ = "0.1.0"

__all__ = [
    "Player",
    "Team",
    "MatchResult",
    "Pairing",
    "TournamentConfig",
    "compute_standings",
    "rank_players",
    "assign_starts",
    "generate_swiss_pairings",
    "generate_enhanced_swiss_pairings",
    "generate_king_of_the_hill_pairings",
    "generate_round_robin_schedule",
    "generate_team_swiss_pairings",
    "has_clinched_first_place",
    "resolve_manual_pairing",
    "generate_pairings",
]
