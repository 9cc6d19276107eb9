"""Pairing entry point driven by a tournament configuration."""

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

from typing import Sequence

from tilepairing.constants import (
    SYSTEM_ENHANCED_SWISS,
    SYSTEM_KING_OF_THE_HILL,
    SYSTEM_MANUAL,
    SYSTEM_ROUND_ROBIN,
    SYSTEM_SWISS,
)
from tilepairing.exceptions import InvalidConfigurationException, PairingException
from tilepairing.models import (
    MatchResult,
    Player,
    TournamentConfig,
    build_previous_matchups,
)
from tilepairing.pairing.enhanced_swiss import generate_enhanced_swiss_pairings
from tilepairing.pairing.king_of_the_hill import generate_king_of_the_hill_pairings
from tilepairing.pairing.round_robin import (
    generate_round_robin_schedule,
    vacate_inactive_boards,
)
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.swiss import generate_swiss_pairings
from tilepairing.tournament import compute_standings
from tilepairing.type_hints import PairingSet
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


def generate_pairings(
    config: TournamentConfig,
    players: Sequence[Player],
    results: Sequence[MatchResult],
    round_number: int,
) -> PairingSet:
    """Pair one round with the system named by ``config.pairing_system``.

    Standings are computed from the results of earlier rounds first, so
    every pairer sees current ranks.

    Args:
        config: Tournament configuration
        players: Roster
        results: Every result of the event so far
        round_number: Round being paired

    Returns:
        The round's pairings

    Raises:
        InvalidConfigurationException: If the configuration is corrupt or
            names the manual system, which has no generator
        PairingException: If a round-robin event has no such round
    """
    config.validate()
    standings = compute_standings(
        players,
        results,
        mode=config.mode,
        games_per_match=config.games_per_match,
        up_to_round=round_number - 1,
    )
    previous_matchups = build_previous_matchups(results)
    system = config.pairing_system
    logger.info("Pairing round %s of %s with %s", round_number, config.name, system)

    if system == SYSTEM_SWISS:
        return generate_swiss_pairings(
            standings,
            previous_matchups,
            results,
            round_number,
            max_repeats=config.max_repeats,
            reserved_tables=config.reserved_tables,
        )

    if system == SYSTEM_ENHANCED_SWISS:
        return generate_enhanced_swiss_pairings(
            standings,
            previous_matchups,
            results,
            round_number,
            config.total_rounds,
            gibson_enabled=config.gibson_enabled,
            prize_count=config.prize_count,
            mode=config.mode,
            max_repeats=config.max_repeats,
            reserved_tables=config.reserved_tables,
            late_stage_rounds=config.late_stage_rounds,
            contender_split_min_players=config.contender_split_min_players,
        )

    if system == SYSTEM_KING_OF_THE_HILL:
        return generate_king_of_the_hill_pairings(
            standings, previous_matchups, results, round_number
        )

    if system == SYSTEM_ROUND_ROBIN:
        # seat the whole roster so later rounds keep the original rotation
        schedule = generate_round_robin_schedule(
            standings,
            repeats=config.round_robin_repeats,
            reserved_tables=config.reserved_tables,
            include_inactive=True,
        )
        if round_number not in schedule:
            raise PairingException(
                f"Round {round_number} is outside the {len(schedule)} round schedule"
            )
        round_pairings = vacate_inactive_boards(schedule[round_number])
        return assign_starts(round_pairings, standings, results)

    if system == SYSTEM_MANUAL:
        raise InvalidConfigurationException(
            "Manual events are paired board by board with resolve_manual_pairing"
        )

    raise InvalidConfigurationException(f"Unknown pairing system: {system}")
