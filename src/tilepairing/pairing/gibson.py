"""Gibson rule: clinch detection and Gibson pairings.

Once a leader cannot be caught even by losing every remaining game while
the runner-up wins every one, the leader is paired against the highest
ranked player who can no longer reach a prize. The rule only fires in the
last few rounds of an event.
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

from typing import Iterable, List, Optional, Sequence, Set

from tilepairing.constants import (
    DEFAULT_LATE_STAGE_ROUNDS,
    DEFAULT_MODE,
    DEFAULT_PRIZE_COUNT,
    MODE_BEST_OF_LEAGUE,
    NOTE_BYE,
    NOTE_GIBSON,
    TABLE_BYE,
    TABLE_GIBSON,
    UNSEEDED,
)
from tilepairing.models import MatchResult, Pairing, Player, count_rounds_remaining
from tilepairing.pairing.starts import assign_starts
from tilepairing.type_hints import PairingSet, PlayerId
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


def _by_rank(players: Iterable[Player]) -> List[Player]:
    return sorted(players, key=lambda p: p.rank or UNSEEDED)


def gibson_score(player: Player, mode: str = DEFAULT_MODE) -> float:
    """Match wins in best-of-league events, game score otherwise."""
    if mode == MODE_BEST_OF_LEAGUE:
        return player.match_wins
    return player.score


def has_clinched_first_place(
    player: Player,
    players: Sequence[Player],
    rounds_remaining: int,
    prize_count: int = DEFAULT_PRIZE_COUNT,
    mode: str = DEFAULT_MODE,
    late_stage_rounds: int = DEFAULT_LATE_STAGE_ROUNDS,
) -> bool:
    """Whether ``player`` has mathematically clinched first place.

    The player must be ranked first, lead the runner-up by more than the
    rounds remaining, and the event must be inside its late stage. A lone
    leader has clinched. ``prize_count`` plays no part in the clinch itself.
    """
    if not players or rounds_remaining > late_stage_rounds:
        return False

    ordered = _by_rank(players)
    if ordered[0].id != player.id:
        return False
    if len(ordered) < 2:
        return True

    leader_score = gibson_score(ordered[0], mode)
    second_score = gibson_score(ordered[1], mode)
    return leader_score > second_score + rounds_remaining


def get_highest_ranked_non_prize_winner(
    players: Sequence[Player],
    prize_count: int = DEFAULT_PRIZE_COUNT,
    exclude: Iterable[PlayerId] = (),
) -> Optional[Player]:
    """First active player ranked outside the prize positions, if any."""
    excluded = set(exclude)
    for player in _by_rank(players):
        if player.id in excluded or not player.is_active:
            continue
        if (player.rank or UNSEEDED) > prize_count:
            return player
    return None


def create_gibson_pairings(
    players: Sequence[Player],
    rounds_remaining: int,
    prize_count: int = DEFAULT_PRIZE_COUNT,
    mode: str = DEFAULT_MODE,
    round_number: int = 1,
    late_stage_rounds: int = DEFAULT_LATE_STAGE_ROUNDS,
) -> PairingSet:
    """Pair every clinched leader with the best available non-prize player.

    A player already claimed by one Gibson pairing is never reused.
    Start flags are left for :func:`assign_starts`.
    """
    pairings = []
    claimed: Set[PlayerId] = set()

    for player in _by_rank(players):
        if player.id in claimed:
            continue
        if not has_clinched_first_place(
            player, players, rounds_remaining, prize_count, mode, late_stage_rounds
        ):
            continue

        spoiler = get_highest_ranked_non_prize_winner(
            players, prize_count, exclude=claimed | {player.id}
        )
        if spoiler is None:
            logger.info("%s has clinched but no non-prize opponent is left", player.name)
            continue

        logger.info(
            "Round %s: Gibson rule triggered, %s has clinched and meets %s",
            round_number,
            player.name,
            spoiler.name,
        )
        pairings.append(
            Pairing(
                table=TABLE_GIBSON,
                round=round_number,
                player1=player,
                player2=spoiler,
                is_gibson_pairing=True,
                note=NOTE_GIBSON,
            )
        )
        claimed.update((player.id, spoiler.id))
    return tuple(pairings)


def apply_gibson_rule_to_pairings(
    existing_pairings: Sequence[Pairing],
    players: Sequence[Player],
    current_round: int,
    total_rounds: int,
    prize_count: int = DEFAULT_PRIZE_COUNT,
    mode: str = DEFAULT_MODE,
    late_stage_rounds: int = DEFAULT_LATE_STAGE_ROUNDS,
    all_results: Sequence[MatchResult] = (),
) -> PairingSet:
    """Retrofit Gibson pairings onto an already generated round.

    The Gibson players leave their boards; their former opponents meet
    each other at the first vacated table. A lone former opponent meets
    the round's existing bye player there, or takes the bye when the
    round has none. Gibson pairings come first in the returned set.
    """
    rounds_remaining = count_rounds_remaining(total_rounds, current_round)
    if rounds_remaining > late_stage_rounds:
        return tuple(existing_pairings)

    gibson = create_gibson_pairings(
        players, rounds_remaining, prize_count, mode, current_round, late_stage_rounds
    )
    if not gibson:
        return tuple(existing_pairings)

    gibson_ids = {player_id for pairing in gibson for player_id in pairing.player_ids}
    kept: List[Pairing] = []
    orphans: List[Player] = []
    vacated_table = None

    for pairing in existing_pairings:
        if not any(pairing.involves(player_id) for player_id in gibson_ids):
            kept.append(pairing)
            continue
        if vacated_table is None and isinstance(pairing.table, int):
            vacated_table = pairing.table
        for player in (pairing.player1, pairing.player2):
            if player is not None and player.id not in gibson_ids:
                orphans.append(player)

    if len(orphans) == 1:
        existing_bye = next((p for p in kept if p.is_bye), None)
        if existing_bye is not None:
            kept.remove(existing_bye)
            orphans.append(existing_bye.player1)

    if len(orphans) == 2:
        kept.append(
            Pairing(
                table=vacated_table if vacated_table is not None else _next_free(kept),
                round=current_round,
                player1=orphans[0],
                player2=orphans[1],
            )
        )
    elif len(orphans) == 1:
        kept.insert(
            0,
            Pairing(table=TABLE_BYE, round=current_round, player1=orphans[0], note=NOTE_BYE),
        )

    return assign_starts(gibson + tuple(kept), players, all_results)


def _next_free(pairings: Iterable[Pairing]) -> int:
    used = {p.table for p in pairings if isinstance(p.table, int)}
    table = 1
    while table in used:
        table += 1
    return table
