"""Pairing history derived from match results."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set

from tilepairing.models.match_result import MatchResult
from tilepairing.type_hints import MatchupKey, Matchups, PlayerId


def matchup_key(player1_id: PlayerId, player2_id: PlayerId) -> MatchupKey:
    """Order-independent key for a pair of players."""
    return frozenset({player1_id, player2_id})


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Set containing frozensets of player ID pairs representing
        matches that have already been played.
    rounds_met : dict of frozenset to list of int
        Rounds in which each pair met.
    bye_counts : dict of str to int
        Number of byes each player has received.
    """

    previous_matches: Matchups = field(default_factory=set)
    rounds_met: Dict[MatchupKey, List[int]] = field(default_factory=dict)
    bye_counts: Dict[PlayerId, int] = field(default_factory=dict)

    def add_pairing(self, player1_id: PlayerId, player2_id: PlayerId, round_number: int) -> None:
        """Record that two players have been paired."""
        key = matchup_key(player1_id, player2_id)
        self.previous_matches.add(key)
        self.rounds_met.setdefault(key, []).append(round_number)

    def add_bye(self, player_id: PlayerId) -> None:
        self.bye_counts[player_id] = self.bye_counts.get(player_id, 0) + 1

    def have_played(self, player1_id: PlayerId, player2_id: PlayerId) -> bool:
        """Check if two players have previously played each other."""
        return matchup_key(player1_id, player2_id) in self.previous_matches

    def met_within(
        self,
        player1_id: PlayerId,
        player2_id: PlayerId,
        current_round: int,
        window: int,
    ) -> bool:
        """Whether the pair met in any of the ``window`` rounds before ``current_round``."""
        earliest = current_round - window
        return any(
            earliest <= r < current_round
            for r in self.rounds_met.get(matchup_key(player1_id, player2_id), [])
        )

    def bye_count(self, player_id: PlayerId) -> int:
        return self.bye_counts.get(player_id, 0)

    @classmethod
    def from_results(cls, results: Iterable[MatchResult]) -> "PairingHistory":
        """Build the history of an event from its results."""
        history = cls()
        for result in results:
            if result.is_complete:
                history.add_pairing(result.player1_id, result.player2_id, result.round)
            elif result.is_bye_result:
                history.add_bye(result.player1_id)
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": [sorted(pair) for pair in self.previous_matches],
            "bye_counts": dict(self.bye_counts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(str, pair)) for pair in data.get("previous_matches", [])
            ),
            bye_counts={str(k): int(v) for k, v in data.get("bye_counts", {}).items()},
        )


def build_previous_matchups(results: Iterable[MatchResult]) -> Set[MatchupKey]:
    """Set of every pair that has met, for the pairers' ``previous_matchups``."""
    return set(PairingHistory.from_results(results).previous_matches)
