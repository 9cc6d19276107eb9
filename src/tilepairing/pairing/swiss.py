"""Swiss pairing by score groups with rematch avoidance.

Players are bucketed by score, highest group first. Inside a group the
first player takes the first later member who is not a rematch; a group's
odd member floats to the front of the next group down. The heuristic is
greedy and order dependent on purpose: the same roster and history always
give the same pairings.
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

from typing import (
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from tilepairing.constants import (
    NOTE_BYE,
    NOTE_FORCED_REMATCH,
    NOTE_REMATCH_ALLOWED,
    TABLE_BYE,
)
from tilepairing.exceptions import (
    DuplicatePlayerException,
    InvalidRosterException,
    NoPairingAvailableException,
)
from tilepairing.models import (
    MatchResult,
    Pairing,
    PairingHistory,
    Player,
    matchup_key,
)
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.tables import TableAllocator
from tilepairing.type_hints import Matchups, PairingSet, PlayerId, ReservedTables
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


class RematchPolicy:
    """Answers whether two players may meet in the round being paired.

    With ``max_repeats`` of 0 any earlier meeting blocks the pair. With N
    greater than 0 the pair is only blocked if they met within the N rounds
    before ``round_number``.
    """

    def __init__(
        self,
        previous_matchups: Iterable[Iterable[PlayerId]] = (),
        all_results: Iterable[MatchResult] = (),
        round_number: int = 1,
        max_repeats: int = 0,
    ):
        self.history = PairingHistory.from_results(all_results)
        self.previous_matchups: Matchups = {
            matchup_key(*pair) for pair in previous_matchups
        }
        self.previous_matchups |= self.history.previous_matches
        self.round_number = round_number
        self.max_repeats = max_repeats

    def have_played(self, player1_id: PlayerId, player2_id: PlayerId) -> bool:
        return matchup_key(player1_id, player2_id) in self.previous_matchups

    def is_blocked(self, player1_id: PlayerId, player2_id: PlayerId) -> bool:
        if self.max_repeats > 0:
            return self.history.met_within(
                player1_id, player2_id, self.round_number, self.max_repeats
            )
        return self.have_played(player1_id, player2_id)

    def note_for(self, player1_id: PlayerId, player2_id: PlayerId) -> Optional[str]:
        """Note carried by an accepted, non-forced pairing."""
        if self.max_repeats > 0 and self.have_played(player1_id, player2_id):
            return NOTE_REMATCH_ALLOWED
        return None


def validate_roster(players: Sequence[Player]) -> None:
    """Fail fast on a roster no pairer can work with.

    Raises:
        InvalidRosterException: If the roster is empty
        DuplicatePlayerException: If two records share an id
    """
    if not players:
        raise InvalidRosterException("Cannot pair an empty roster")
    seen = set()
    for player in players:
        if player.id in seen:
            raise DuplicatePlayerException(f"Duplicate player id in roster: {player.id}")
        seen.add(player.id)


def active_players(players: Iterable[Player]) -> List[Player]:
    """Players neither withdrawn nor paused, in input order."""
    return [player for player in players if player.is_active]


def select_bye_player(
    players: Sequence[Player],
    all_results: Iterable[MatchResult] = (),
    round_number: int = 1,
) -> Player:
    """Choose who sits out an odd round.

    Candidates are the players with the fewest prior byes. In round 1
    they are narrowed to rated players when any is available, so unrated
    players get real games first. The lowest ranked candidate, then the
    highest seed, takes the bye.

    Raises:
        InvalidRosterException: If there is nobody to choose from
    """
    if not players:
        raise InvalidRosterException("No players available for a bye")

    history = PairingHistory.from_results(all_results)
    fewest = min(history.bye_count(player.id) for player in players)
    candidates = [p for p in players if history.bye_count(p.id) == fewest]

    if round_number == 1:
        rated = [p for p in candidates if p.is_rated]
        if rated:
            candidates = rated

    return max(candidates, key=lambda p: (p.rank or 0, p.seed))


def make_bye_pairing(player: Player, round_number: int) -> Pairing:
    logger.info("Round %s: bye assigned to %s", round_number, player.name)
    return Pairing(
        table=TABLE_BYE,
        round=round_number,
        player1=player,
        note=NOTE_BYE,
    )


def group_by_score(items: Iterable[T], score_of: Callable[[T], float]) -> List[List[T]]:
    """Bucket items by score, highest group first, input order kept inside."""
    groups: Dict[float, List[T]] = {}
    for item in items:
        groups.setdefault(score_of(item), []).append(item)
    return [groups[score] for score in sorted(groups, reverse=True)]


def pair_score_groups(
    items: Iterable[T],
    score_of: Callable[[T], float],
    is_blocked: Callable[[T, T], bool],
) -> List[Tuple[T, T, bool]]:
    """Greedy score-group pairing.

    Args:
        items: An even number of entrants, already without the bye
        score_of: Score used to form the groups
        is_blocked: Whether two entrants must not meet if avoidable

    Returns:
        ``(first, second, forced)`` triples in pairing order, ``forced``
        marking a pair accepted only because no alternative remained

    Raises:
        NoPairingAvailableException: If an entrant is left over at the bottom
    """
    groups = group_by_score(items, score_of)
    pairs: List[Tuple[T, T, bool]] = []

    for index, group in enumerate(groups):
        while len(group) >= 2:
            first = group.pop(0)
            for position, candidate in enumerate(group):
                if not is_blocked(first, candidate):
                    pairs.append((first, group.pop(position), False))
                    break
            else:
                pairs.append((first, group.pop(0), True))

        if group:
            if index + 1 < len(groups):
                groups[index + 1].insert(0, group.pop())
            else:
                raise NoPairingAvailableException(
                    f"Cannot pair {group[0]}: nobody left in a lower score group"
                )
    return pairs


def pair_swiss_pool(
    players: Sequence[Player],
    policy: RematchPolicy,
    allocator: TableAllocator,
    all_results: Iterable[MatchResult] = (),
) -> List[Pairing]:
    """Pair one pool of active players, bye first, without assigning starts.

    The enhanced Swiss orchestrator runs several pools through here with
    one shared table allocator.
    """
    pool = list(players)
    round_number = policy.round_number
    pairings: List[Pairing] = []

    if len(pool) % 2:
        bye_player = select_bye_player(pool, all_results, round_number)
        pairings.append(make_bye_pairing(bye_player, round_number))
        pool = [p for p in pool if p.id != bye_player.id]

    pairs = pair_score_groups(
        pool,
        score_of=lambda p: p.score,
        is_blocked=lambda a, b: policy.is_blocked(a.id, b.id),
    )
    for player1, player2, forced in pairs:
        if forced:
            logger.info(
                "Round %s: forced rematch %s vs %s, no other opponent left in group",
                round_number,
                player1.name,
                player2.name,
            )
            note = NOTE_FORCED_REMATCH
        else:
            note = policy.note_for(player1.id, player2.id)

        table = allocator.table_for_pair(player1.id, player2.id)
        logger.debug(
            "Round %s table %s: %s vs %s", round_number, table, player1, player2
        )
        pairings.append(
            Pairing(
                table=table,
                round=round_number,
                player1=player1,
                player2=player2,
                note=note,
            )
        )
    return pairings


def generate_swiss_pairings(
    players: Sequence[Player],
    previous_matchups: Iterable[Iterable[PlayerId]] = (),
    all_results: Sequence[MatchResult] = (),
    round_number: int = 1,
    max_repeats: int = 0,
    reserved_tables: Optional[ReservedTables] = None,
) -> PairingSet:
    """Generate Swiss pairings for one round.

    Args:
        players: Ranked roster; withdrawn and paused players are skipped
        previous_matchups: Pairs that have already met
        all_results: Every result of the event so far
        round_number: Round being paired
        max_repeats: Rematch policy, see :class:`RematchPolicy`
        reserved_tables: Player id to reserved table number

    Returns:
        The bye pairing first, if any, then the boards in pairing order

    Raises:
        InvalidRosterException: If the roster is empty or has duplicate ids
    """
    validate_roster(players)
    pool = active_players(players)
    logger.debug("Round %s: Swiss pairing %s active players", round_number, len(pool))

    policy = RematchPolicy(previous_matchups, all_results, round_number, max_repeats)
    allocator = TableAllocator(reserved_tables)
    pairings = pair_swiss_pool(pool, policy, allocator, all_results)
    return assign_starts(pairings, players, all_results)
