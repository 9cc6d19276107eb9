"""Start assignment: which side of a pairing moves first."""

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

from typing import Dict, Iterable, Sequence, Tuple

from tilepairing.models import MatchResult, Pairing, Player
from tilepairing.type_hints import PairingSet, PlayerId
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


def head_to_head_starts(
    player_id: PlayerId, opponent_id: PlayerId, all_results: Iterable[MatchResult]
) -> int:
    """Count the games against ``opponent_id`` in which ``player_id`` moved first."""
    return sum(
        1
        for result in all_results
        if result.is_between(player_id, opponent_id) and result.started(player_id)
    )


def player1_should_start(
    player1: Player, player2: Player, all_results: Sequence[MatchResult]
) -> bool:
    """Decide whether player 1 moves first.

    Fewer cumulative starts wins, then fewer starts in this pair's direct
    meetings, then the lower seed. Equal seeds leave the start to player 2.
    """
    if player1.starts != player2.starts:
        return player1.starts < player2.starts

    starts1 = head_to_head_starts(player1.id, player2.id, all_results)
    starts2 = head_to_head_starts(player2.id, player1.id, all_results)
    if starts1 != starts2:
        return starts1 < starts2

    return player1.seed < player2.seed


def assign_starts(
    pairings: Iterable[Pairing],
    players: Iterable[Player],
    all_results: Iterable[MatchResult],
) -> PairingSet:
    """Set the start flags on every pairing of a round.

    Args:
        pairings: Pairings of one round, in table order
        players: Current player records, the source of ``starts`` and ``seed``
        all_results: Every result of the event so far

    Returns:
        New pairings; byes have neither side starting, and a pairing whose
        players are not on the roster is returned unchanged
    """
    lookup: Dict[PlayerId, Player] = {player.id: player for player in players}
    results: Tuple[MatchResult, ...] = tuple(all_results)

    assigned = []
    for pairing in pairings:
        if pairing.is_bye:
            assigned.append(
                pairing.with_updates(player1_starts=False, player2_starts=False)
            )
            continue

        player1 = lookup.get(pairing.player1.id)
        player2 = lookup.get(pairing.player2.id)
        if player1 is None or player2 is None:
            logger.debug("Leaving starts of table %s untouched", pairing.table)
            assigned.append(pairing)
            continue

        first = player1_should_start(player1, player2, results)
        assigned.append(
            pairing.with_updates(player1_starts=first, player2_starts=not first)
        )
    return tuple(assigned)
