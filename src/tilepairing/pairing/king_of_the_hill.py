"""King of the Hill pairing: adjacent ranks meet."""

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

from typing import Iterable, List, Sequence, Tuple

from tilepairing.constants import NOTE_FORCED_REMATCH
from tilepairing.models import MatchResult, Pairing, Player
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.swiss import (
    RematchPolicy,
    active_players,
    make_bye_pairing,
    validate_roster,
)
from tilepairing.type_hints import PairingSet, PlayerId
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)

# How many following pairs are searched for a swap partner
SWAP_SEARCH_DEPTH = 2


def _rank_order(player: Player) -> Tuple[int, int, int]:
    if player.rank is None:
        return (1, 0, player.seed)
    return (0, player.rank, player.seed)


def resolve_rematches(
    pairs: List[Tuple[Player, Player]], policy: RematchPolicy
) -> List[Tuple[Player, Player, bool]]:
    """Swap partners with one of the next pairs to remove rematches.

    For a rematch ``p1 v p2`` the next two pairs ``a1 v a2`` are tried in
    order; the first one where neither ``p1 v a1`` nor ``p2 v a2`` is a
    rematch is used and the two new boards take consecutive slots. With
    no such pair the rematch stands.

    Returns:
        ``(player1, player2, forced)`` triples in table order
    """
    pairs = list(pairs)
    resolved: List[Tuple[Player, Player, bool]] = []
    index = 0
    while index < len(pairs):
        player1, player2 = pairs[index]
        if not policy.have_played(player1.id, player2.id):
            resolved.append((player1, player2, False))
            index += 1
            continue

        last = min(index + SWAP_SEARCH_DEPTH, len(pairs) - 1)
        for alt_index in range(index + 1, last + 1):
            alt1, alt2 = pairs[alt_index]
            if not policy.have_played(player1.id, alt1.id) and not policy.have_played(
                player2.id, alt2.id
            ):
                pairs.pop(alt_index)
                resolved.append((player1, alt1, False))
                resolved.append((player2, alt2, False))
                logger.debug(
                    "Swapped %s and %s to avoid rematch %s vs %s",
                    alt1.name,
                    player2.name,
                    player1.name,
                    player2.name,
                )
                break
        else:
            resolved.append((player1, player2, True))
        index += 1
    return resolved


def generate_king_of_the_hill_pairings(
    players: Sequence[Player],
    previous_matchups: Iterable[Iterable[PlayerId]] = (),
    all_results: Sequence[MatchResult] = (),
    current_round: int = 1,
) -> PairingSet:
    """Pair 1 v 2, 3 v 4 and so on down the standings.

    The last ranked active player takes the bye when the field is odd.
    Unranked players sort after ranked ones, then by seed.

    Raises:
        InvalidRosterException: If the roster is empty or has duplicate ids
    """
    validate_roster(players)
    ordered = sorted(active_players(players), key=_rank_order)
    policy = RematchPolicy(previous_matchups, all_results, current_round)

    pairings: List[Pairing] = []
    if len(ordered) % 2:
        pairings.append(make_bye_pairing(ordered.pop(), current_round))

    pairs = [(ordered[i], ordered[i + 1]) for i in range(0, len(ordered), 2)]
    for table, (player1, player2, forced) in enumerate(
        resolve_rematches(pairs, policy), start=1
    ):
        if forced:
            logger.info(
                "Round %s: rematch %s vs %s accepted, no swap available",
                current_round,
                player1.name,
                player2.name,
            )
        pairings.append(
            Pairing(
                table=table,
                round=current_round,
                player1=player1,
                player2=player2,
                note=NOTE_FORCED_REMATCH if forced else None,
            )
        )
    return assign_starts(pairings, players, all_results)
