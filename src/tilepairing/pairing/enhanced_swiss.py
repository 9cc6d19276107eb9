"""Enhanced Swiss: Gibson pairings and a late-stage contender split."""

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

from typing import Iterable, List, Optional, Sequence, Tuple

from tilepairing.constants import (
    DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS,
    DEFAULT_LATE_STAGE_ROUNDS,
    DEFAULT_MODE,
    DEFAULT_PRIZE_COUNT,
)
from tilepairing.models import MatchResult, Pairing, Player, count_rounds_remaining
from tilepairing.pairing.gibson import create_gibson_pairings
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.swiss import (
    RematchPolicy,
    active_players,
    make_bye_pairing,
    pair_swiss_pool,
    select_bye_player,
    validate_roster,
)
from tilepairing.pairing.tables import TableAllocator
from tilepairing.type_hints import PairingSet, PlayerId, ReservedTables
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


def split_contenders(
    players: Iterable[Player], prize_count: int
) -> Tuple[List[Player], List[Player]]:
    """Split a pool into prize contenders and everyone else, order kept."""
    contenders: List[Player] = []
    others: List[Player] = []
    for player in players:
        if player.rank is not None and player.rank <= prize_count:
            contenders.append(player)
        else:
            others.append(player)
    return contenders, others


def generate_enhanced_swiss_pairings(
    players: Sequence[Player],
    previous_matchups: Iterable[Iterable[PlayerId]],
    all_results: Sequence[MatchResult],
    current_round: int,
    total_rounds: int,
    gibson_enabled: bool = False,
    prize_count: int = DEFAULT_PRIZE_COUNT,
    mode: str = DEFAULT_MODE,
    max_repeats: int = 0,
    reserved_tables: Optional[ReservedTables] = None,
    late_stage_rounds: int = DEFAULT_LATE_STAGE_ROUNDS,
    contender_split_min_players: int = DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS,
) -> PairingSet:
    """Swiss pairing tuned for the closing rounds of an event.

    In the late stage, when ``rounds remaining <= late_stage_rounds``:

    - Clinched leaders are taken out first with Gibson pairings, if enabled.
    - With at least ``contender_split_min_players`` left, the bye, if any,
      is chosen from the whole remaining pool. Prize contenders and the
      rest are then paired by separate Swiss passes; an odd contender
      group sends its lowest ranked member down to the other pass.

    Outside the late stage this is a single Swiss pass. All passes share
    one table allocator, so table numbers never repeat.

    Raises:
        InvalidRosterException: If the roster is empty or has duplicate ids
    """
    validate_roster(players)
    pool = active_players(players)
    rounds_remaining = count_rounds_remaining(total_rounds, current_round)
    late_stage = rounds_remaining <= late_stage_rounds

    pairings: List[Pairing] = []
    if gibson_enabled and late_stage and pool:
        gibson = create_gibson_pairings(
            pool, rounds_remaining, prize_count, mode, current_round, late_stage_rounds
        )
        gibson_ids = {pid for pairing in gibson for pid in pairing.player_ids}
        pool = [player for player in pool if player.id not in gibson_ids]
        pairings.extend(gibson)

    policy = RematchPolicy(previous_matchups, all_results, current_round, max_repeats)
    allocator = TableAllocator(reserved_tables)

    if late_stage and len(pool) >= contender_split_min_players:
        if len(pool) % 2:
            bye_player = select_bye_player(pool, all_results, current_round)
            pairings.append(make_bye_pairing(bye_player, current_round))
            pool = [player for player in pool if player.id != bye_player.id]

        contenders, others = split_contenders(pool, prize_count)
        if len(contenders) % 2:
            others.insert(0, contenders.pop())
        logger.info(
            "Round %s: pairing %s contenders apart from %s others",
            current_round,
            len(contenders),
            len(others),
        )
        sub_pools = [contenders, others]
    else:
        sub_pools = [pool]

    for sub_pool in sub_pools:
        if sub_pool:
            pairings.extend(pair_swiss_pool(sub_pool, policy, allocator, all_results))

    return assign_starts(pairings, players, all_results)
