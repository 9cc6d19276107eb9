"""Manual pairings typed in by the tournament director.

Free-text player references are resolved against the roster, checked
against the boards already seated this round and placed on a table,
honouring table reservations.
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

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from tilepairing.constants import (
    FUZZY_CONFIRM_THRESHOLD,
    FUZZY_MATCH_FLOOR,
    MATCH_EXACT,
    MATCH_FUZZY,
    MATCH_ID,
    MATCH_PREFIX,
    MATCH_SUBSTRING,
    NOTE_BYE,
    NOTE_MANUAL,
    TABLE_BYE,
)
from tilepairing.exceptions import (
    AlreadyPairedException,
    AmbiguousPlayerReferenceException,
    InvalidPairingException,
    PlayerNotFoundException,
)
from tilepairing.models import MatchResult, Pairing, Player
from tilepairing.pairing.starts import assign_starts
from tilepairing.pairing.tables import TableAllocator
from tilepairing.type_hints import ReservedTables, Table
from tilepairing.utils import setup_logger
from tilepairing.utils.text import expand_aliases, jaro_winkler, normalize_name

logger = setup_logger(__name__)


@dataclass(frozen=True)
class PlayerMatch:
    """How a typed reference was resolved to a roster player."""

    reference: str
    player: Player
    method: str
    score: float = 1.0
    requires_confirmation: bool = False


@dataclass(frozen=True)
class TableRelocation:
    """A seated board moved off a table claimed by a reservation."""

    pairing: Pairing
    from_table: Table
    to_table: Table

    def __str__(self) -> str:
        return f"{self.pairing} moved from table {self.from_table} to {self.to_table}"


@dataclass(frozen=True)
class ManualPairingResult:
    """Outcome of one manual pairing.

    Attributes:
        pairing: The new board, starts assigned
        relocations: Boards moved to make room for a reservation
        pairings: Every board of the round after the change
        matches: Resolution of each typed reference
    """

    pairing: Pairing
    relocations: Tuple[TableRelocation, ...]
    pairings: Tuple[Pairing, ...]
    matches: Tuple[PlayerMatch, ...]

    @property
    def requires_confirmation(self) -> bool:
        return any(match.requires_confirmation for match in self.matches)


def _single(
    reference: str,
    candidates: List[Player],
    method: str,
) -> Optional[PlayerMatch]:
    if len(candidates) > 1:
        raise AmbiguousPlayerReferenceException(reference, candidates)
    if candidates:
        return PlayerMatch(reference, candidates[0], method)
    return None


def resolve_player(reference: str, roster: Sequence[Player]) -> PlayerMatch:
    """Resolve a typed reference to exactly one roster player.

    Stages, first hit wins: exact id, exact normalised name, name prefix,
    name substring, then Jaro-Winkler similarity. Nicknames in the first
    word are expanded before the name stages. A fuzzy hit at or above the
    floor is accepted; one scoring above the confirmation threshold is
    flagged for the operator.

    Raises:
        AmbiguousPlayerReferenceException: If a stage finds several players
        PlayerNotFoundException: If no stage finds anyone
    """
    text = (reference or "").strip()
    if not text:
        raise PlayerNotFoundException("Empty player reference")

    by_id = _single(text, [p for p in roster if p.id == text], MATCH_ID)
    if by_id:
        return by_id

    typed = normalize_name(text)
    wanted = {typed, expand_aliases(typed)}
    names = [(player, normalize_name(player.name)) for player in roster]

    stages: List[Tuple[str, Callable[[str], bool]]] = [
        (MATCH_EXACT, lambda name: name in wanted),
        (MATCH_PREFIX, lambda name: any(name.startswith(w) for w in wanted)),
        (MATCH_SUBSTRING, lambda name: any(w in name for w in wanted)),
    ]
    for method, accepts in stages:
        found = _single(text, [p for p, name in names if accepts(name)], method)
        if found:
            logger.debug("Resolved %r to %s by %s match", text, found.player.name, method)
            return found

    scored = []
    for player, name in names:
        score = max(jaro_winkler(w, name) for w in wanted)
        if score >= FUZZY_MATCH_FLOOR:
            scored.append((score, player))
    if not scored:
        raise PlayerNotFoundException(f"No player matches {text!r}")

    best = max(score for score, _ in scored)
    top = [player for score, player in scored if score == best]
    if len(top) > 1:
        raise AmbiguousPlayerReferenceException(text, top)

    logger.debug("Resolved %r to %s by similarity %.3f", text, top[0].name, best)
    return PlayerMatch(
        text,
        top[0],
        MATCH_FUZZY,
        score=best,
        requires_confirmation=best > FUZZY_CONFIRM_THRESHOLD,
    )


def _check_available(player: Player, existing_pairings: Sequence[Pairing]) -> None:
    if not player.is_active:
        raise InvalidPairingException(f"{player.name} is {player.status}")
    for pairing in existing_pairings:
        if pairing.involves(player.id):
            raise AlreadyPairedException(player.name, pairing.table)


def resolve_manual_pairing(
    text_a: str,
    text_b: str,
    round_number: int,
    roster: Sequence[Player],
    existing_pairings: Sequence[Pairing] = (),
    reserved_tables: Optional[ReservedTables] = None,
    all_results: Sequence[MatchResult] = (),
) -> ManualPairingResult:
    """Seat two typed players against each other.

    The board goes to player A's reservation, else player B's, else the
    lowest unused table. A reserved table that is already occupied is
    freed by moving its board to the lowest unused table.

    Raises:
        AmbiguousPlayerReferenceException: If a reference matches several players
        PlayerNotFoundException: If a reference matches nobody
        InvalidPairingException: If both references are one player, or one is inactive
        AlreadyPairedException: If either player already has a board this round
    """
    match_a = resolve_player(text_a, roster)
    match_b = resolve_player(text_b, roster)
    player1, player2 = match_a.player, match_b.player
    if player1.id == player2.id:
        raise InvalidPairingException(f"{player1.name} cannot play themselves")
    _check_available(player1, existing_pairings)
    _check_available(player2, existing_pairings)

    reserved = dict(reserved_tables or {})
    pairings = list(existing_pairings)
    used = [p.table for p in pairings if isinstance(p.table, int)]
    allocator = TableAllocator(reserved, used=used)
    relocations: List[TableRelocation] = []

    reservation = reserved.get(player1.id, reserved.get(player2.id))
    if reservation is None:
        table = allocator.next_table()
    elif allocator.is_free(reservation):
        table = allocator.claim(reservation)
    else:
        table = reservation
        new_table = allocator.next_table()
        for index, seated in enumerate(pairings):
            if seated.table == reservation:
                pairings[index] = seated.with_updates(table=new_table)
                relocations.append(TableRelocation(seated, reservation, new_table))
                logger.info(
                    "Round %s: moved %s from table %s to %s for a reservation",
                    round_number,
                    seated,
                    reservation,
                    new_table,
                )

    pairing = Pairing(
        table=table,
        round=round_number,
        player1=player1,
        player2=player2,
        note=NOTE_MANUAL,
    )
    pairing = assign_starts([pairing], roster, all_results)[0]
    logger.info("Round %s: manual pairing %s", round_number, pairing)

    return ManualPairingResult(
        pairing=pairing,
        relocations=tuple(relocations),
        pairings=tuple(pairings) + (pairing,),
        matches=(match_a, match_b),
    )


def resolve_manual_bye(
    text: str,
    round_number: int,
    roster: Sequence[Player],
    existing_pairings: Sequence[Pairing] = (),
) -> ManualPairingResult:
    """Give a typed player the bye for this round.

    Raises:
        AmbiguousPlayerReferenceException: If the reference matches several players
        PlayerNotFoundException: If the reference matches nobody
        AlreadyPairedException: If the player already has a board this round
    """
    match = resolve_player(text, roster)
    _check_available(match.player, existing_pairings)

    pairing = Pairing(
        table=TABLE_BYE,
        round=round_number,
        player1=match.player,
        note=NOTE_BYE,
    )
    logger.info("Round %s: manual bye for %s", round_number, match.player.name)
    return ManualPairingResult(
        pairing=pairing,
        relocations=(),
        pairings=tuple(existing_pairings) + (pairing,),
        matches=(match,),
    )
