"""
Round Robin Schedule Generation

This module builds complete round-robin schedules with the circle method
(Berger tables). Players are seated in seed order; an odd field gets an
empty seat and whoever faces it has the bye. Seat 0 stays fixed, the other
seats rotate one step each round, and seat i meets seat n-1-i.

Example:
    >>> rr = RoundRobin(players, repeats=2)
    >>> rr.number_of_rounds
    6
    >>> first_round = rr.get_round_pairings(1)
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

from typing import Iterable, List, Optional, Sequence, Tuple

from tilepairing.constants import NOTE_BYE, TABLE_BYE
from tilepairing.exceptions import (
    InvalidConfigurationException,
    PairingException,
    PlayerNotFoundException,
)
from tilepairing.models import Pairing, Player
from tilepairing.pairing.swiss import active_players, validate_roster
from tilepairing.pairing.tables import TableAllocator
from tilepairing.type_hints import PairingSet, PlayerId, ReservedTables, Schedule
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)

# A seat holds a player, or None for the empty seat of an odd field
Seat = Optional[Player]


def division_round_offset(division: Optional[str], rounds_per_cycle: int) -> int:
    """Rotation offset derived from a division name.

    Divisions of one event start at different points of the rotation so
    that their schedules do not mirror each other.
    """
    if not division or rounds_per_cycle <= 0:
        return 0
    return sum(ord(char) for char in division) % rounds_per_cycle


def berger_round(seats: Sequence[Seat], round_index: int) -> List[Tuple[Seat, Seat]]:
    """Pairs of seats for one round of the circle method.

    Args:
        seats: Even number of seats in seed order
        round_index: 0-indexed round within the cycle

    Returns:
        ``(seat i, seat n-1-i)`` pairs after rotating seats 1..n-1
        right by ``round_index``
    """
    n = len(seats)
    rest = list(seats[1:])
    shift = round_index % len(rest) if rest else 0
    if shift:
        rest = rest[-shift:] + rest[:-shift]
    working = [seats[0]] + rest
    return [(working[i], working[n - 1 - i]) for i in range(n // 2)]


def generate_round_robin_schedule(
    players: Sequence[Player],
    repeats: int = 1,
    matches_per_opponent: int = 1,
    reserved_tables: Optional[ReservedTables] = None,
    round_offset: int = 0,
    include_inactive: bool = False,
) -> Schedule:
    """Generate every round of a round-robin event.

    Args:
        players: Roster; withdrawn and paused players are left out unless
            ``include_inactive`` is set
        repeats: Number of full cycles; odd cycles swap player 1 and 2
        matches_per_opponent: Back-to-back rounds per pairing, alternating sides
        reserved_tables: Player id to reserved table number
        round_offset: Rotation steps added to every round index
        include_inactive: Seat the whole roster, so the schedule stays fixed
            when players withdraw or pause during the event

    Returns:
        Mapping of round number, counted across cycles from 1, to its pairings

    Raises:
        InvalidRosterException: If the roster is empty or has duplicate ids
        InvalidConfigurationException: If a repeat count is not positive
    """
    validate_roster(players)
    if repeats < 1 or matches_per_opponent < 1:
        raise InvalidConfigurationException(
            "repeats and matches_per_opponent must be positive"
        )

    seated = players if include_inactive else active_players(players)
    seats: List[Seat] = sorted(seated, key=lambda p: p.seed)
    if not seats:
        return {}
    if len(seats) % 2:
        seats.append(None)

    rounds_per_cycle = len(seats) - 1
    schedule: Schedule = {}
    round_number = 1

    for cycle in range(repeats):
        for r in range(rounds_per_cycle):
            base_pairs = berger_round(seats, r + round_offset)
            for match in range(matches_per_opponent):
                flip = (cycle % 2 + match % 2) % 2 != 0
                schedule[round_number] = _build_round(
                    base_pairs, round_number, flip, reserved_tables
                )
                round_number += 1

    logger.info(
        "Generated round robin for %s players: %s rounds",
        len([seat for seat in seats if seat is not None]),
        len(schedule),
    )
    return schedule


def _build_round(
    base_pairs: Sequence[Tuple[Seat, Seat]],
    round_number: int,
    flip: bool,
    reserved_tables: Optional[ReservedTables],
) -> PairingSet:
    # table numbers start over every round
    allocator = TableAllocator(reserved_tables)
    pairings = []
    for first, second in base_pairs:
        if flip:
            first, second = second, first
        if first is None or second is None:
            pairings.append(
                Pairing(
                    table=TABLE_BYE,
                    round=round_number,
                    player1=first or second,
                    note=NOTE_BYE,
                )
            )
            continue
        pairings.append(
            Pairing(
                table=allocator.table_for_pair(first.id, second.id),
                round=round_number,
                player1=first,
                player2=second,
            )
        )
    return tuple(pairings)


def vacate_inactive_boards(pairings: Sequence[Pairing]) -> PairingSet:
    """Drop withdrawn and paused players from one scheduled round.

    A board that loses one player becomes a bye for the other; a board
    or bye with nobody left is dropped.
    """
    vacated = []
    for pairing in pairings:
        remaining = [
            player
            for player in (pairing.player1, pairing.player2)
            if player is not None and player.is_active
        ]
        if len(remaining) == 2 or (remaining and pairing.is_bye):
            vacated.append(pairing)
        elif remaining:
            logger.info(
                "Round %s table %s: opponent inactive, bye to %s",
                pairing.round,
                pairing.table,
                remaining[0].name,
            )
            vacated.append(
                Pairing(
                    table=TABLE_BYE,
                    round=pairing.round,
                    player1=remaining[0],
                    note=NOTE_BYE,
                )
            )
    return tuple(vacated)


class RoundRobin:
    """
    A complete round-robin schedule.

    Attributes:
        players: Active players in seed order
        schedule: Round number to pairings
        number_of_rounds: Total number of rounds across all cycles
    """

    def __init__(
        self,
        players: Iterable[Player],
        repeats: int = 1,
        matches_per_opponent: int = 1,
        reserved_tables: Optional[ReservedTables] = None,
        round_offset: int = 0,
    ) -> None:
        roster = tuple(players)
        self.schedule = generate_round_robin_schedule(
            roster,
            repeats=repeats,
            matches_per_opponent=matches_per_opponent,
            reserved_tables=reserved_tables,
            round_offset=round_offset,
        )
        self.players = tuple(sorted(active_players(roster), key=lambda p: p.seed))
        self.number_of_rounds = len(self.schedule)

    def get_round_pairings(self, round_number: int) -> PairingSet:
        """
        Get pairings for a specific round.

        Args:
            round_number: 1-indexed round number

        Raises:
            PairingException: If the round is outside the schedule
        """
        if round_number not in self.schedule:
            raise PairingException(
                f"Round {round_number} is not valid. Schedule has "
                f"{self.number_of_rounds} rounds (1-{self.number_of_rounds})"
            )
        return self.schedule[round_number]

    def get_all_pairings(self) -> Tuple[PairingSet, ...]:
        return tuple(self.schedule[r] for r in sorted(self.schedule))

    def get_player_schedule(
        self, player_id: PlayerId
    ) -> List[Tuple[int, Optional[Player]]]:
        """
        Get the opponents of one player, round by round.

        Returns:
            ``(round_number, opponent)`` tuples, opponent None for a bye

        Raises:
            PlayerNotFoundException: If the player is not scheduled
        """
        if all(player.id != player_id for player in self.players):
            raise PlayerNotFoundException(f"Player {player_id} is not in this schedule")

        opponents = []
        for round_number in sorted(self.schedule):
            for pairing in self.schedule[round_number]:
                if pairing.involves(player_id):
                    opponents.append((round_number, pairing.opponent_of(player_id)))
                    break
        return opponents

    def __str__(self) -> str:
        lines = [
            f"Round Robin: {len(self.players)} players, {self.number_of_rounds} rounds"
        ]
        for round_number in sorted(self.schedule):
            lines.append(f"\nRound {round_number}:")
            lines.extend(f"  {pairing}" for pairing in self.schedule[round_number])
        return "\n".join(lines)
