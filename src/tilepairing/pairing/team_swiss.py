"""Swiss pairing for team events."""

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
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from tilepairing.constants import BYE_NAME, NOTE_BYE, NOTE_FORCED_REMATCH, TABLE_BYE
from tilepairing.exceptions import DuplicatePlayerException, InvalidRosterException
from tilepairing.models import MatchResult, PairingHistory, Team, matchup_key
from tilepairing.pairing.swiss import pair_score_groups
from tilepairing.type_hints import Table
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TeamPairing:
    """One team match of a round; ``team2`` is None for a bye."""

    table: Table
    team1: Team
    team2: Optional[Team] = None
    note: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.team2 is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "team1": {"id": self.team1.id, "name": self.team1.name},
            "team2": (
                {"name": BYE_NAME}
                if self.team2 is None
                else {"id": self.team2.id, "name": self.team2.name}
            ),
            "note": self.note,
        }


def select_bye_team(teams: Sequence[Team], all_results: Iterable[MatchResult] = ()) -> Team:
    """Lowest ranked team among those with the fewest prior byes."""
    history = PairingHistory.from_results(all_results)
    fewest = min(history.bye_count(team.id) for team in teams)
    candidates = [team for team in teams if history.bye_count(team.id) == fewest]
    return max(candidates, key=lambda team: team.rank or 0)


def generate_team_swiss_pairings(
    teams: Sequence[Team],
    previous_team_matchups: Iterable[Iterable[str]] = (),
    all_results: Sequence[MatchResult] = (),
) -> Tuple[TeamPairing, ...]:
    """Pair teams by score group, avoiding rematches where possible.

    Follows the individual Swiss rules: the bye first, groups by team
    score highest first, greedy first-fit inside a group, floaters moved
    to the front of the next group.

    Raises:
        InvalidRosterException: If there are no teams or two share an id
    """
    if not teams:
        raise InvalidRosterException("Cannot pair an empty list of teams")
    if len({team.id for team in teams}) != len(teams):
        raise DuplicatePlayerException("Duplicate team id")

    met = {matchup_key(*pair) for pair in previous_team_matchups}
    pool = list(teams)
    pairings: List[TeamPairing] = []

    if len(pool) % 2:
        bye_team = select_bye_team(pool, all_results)
        logger.info("Bye assigned to team %s", bye_team.name)
        pairings.append(TeamPairing(table=TABLE_BYE, team1=bye_team, note=NOTE_BYE))
        pool = [team for team in pool if team.id != bye_team.id]

    pairs = pair_score_groups(
        pool,
        score_of=lambda team: team.score,
        is_blocked=lambda a, b: matchup_key(a.id, b.id) in met,
    )
    for table, (team1, team2, forced) in enumerate(pairs, start=1):
        if forced:
            logger.info("Forced team rematch %s vs %s", team1.name, team2.name)
        pairings.append(
            TeamPairing(
                table=table,
                team1=team1,
                team2=team2,
                note=NOTE_FORCED_REMATCH if forced else None,
            )
        )
    return tuple(pairings)
