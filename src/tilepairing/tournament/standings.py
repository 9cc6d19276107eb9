"""Standings calculation for tournaments.

This module aggregates match results into ranked players.
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
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tilepairing.constants import (
    DEFAULT_GAMES_PER_MATCH,
    DEFAULT_MODE,
    MODE_BEST_OF_LEAGUE,
    STANDINGS_MODES,
)
from tilepairing.exceptions import InvalidConfigurationException
from tilepairing.models import MatchResult, Player, matchup_key
from tilepairing.type_hints import MatchupKey, PlayerId
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)

# (winner id, loser id) -> games won by winner against loser
HeadToHead = Dict[Tuple[PlayerId, PlayerId], int]


@dataclass
class _PlayerStats:
    """Running totals for one player while results are aggregated."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    spread: float = 0
    match_wins: int = 0
    match_losses: int = 0


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class StandingsCalculator:
    """Calculates standings from a roster and its results.

    The total order, best first, is:

    1. Match wins (best-of-league events only)
    2. Game score: wins plus half a point per tie
    3. Spread
    4. Head-to-head: direct wins between exactly the two tied players
    5. Seed, ascending

    Rows missing either player id, byes included, are skipped without
    complaint. Input records are never modified.
    """

    def __init__(
        self,
        mode: str = DEFAULT_MODE,
        games_per_match: int = DEFAULT_GAMES_PER_MATCH,
    ) -> None:
        if mode not in STANDINGS_MODES:
            raise InvalidConfigurationException(f"Unknown standings mode: {mode}")
        if games_per_match < 1:
            raise InvalidConfigurationException(
                f"games_per_match must be positive, got {games_per_match}"
            )
        self.mode = mode
        self.games_per_match = games_per_match

    @property
    def is_best_of_league(self) -> bool:
        return self.mode == MODE_BEST_OF_LEAGUE

    @property
    def majority(self) -> int:
        """Game wins needed to take a best-of-league match."""
        return self.games_per_match // 2 + 1

    def compute(
        self,
        players: Sequence[Player],
        results: Iterable[MatchResult],
        up_to_round: Optional[int] = None,
    ) -> Tuple[Player, ...]:
        """Aggregate results and rank the roster.

        Args:
            players: The roster
            results: Every result of the event
            up_to_round: Only count results up to and including this round

        Returns:
            One enriched copy per roster member, in rank order
        """
        counted = [
            r
            for r in results
            if r.is_complete and (up_to_round is None or r.round <= up_to_round)
        ]
        stats = self._aggregate_games(counted)
        if self.is_best_of_league:
            self._aggregate_matches(counted, stats)

        enriched = [self._enrich(player, stats.get(player.id)) for player in players]
        logger.debug(
            "Aggregated %s results for %s players (%s)",
            len(counted),
            len(enriched),
            self.mode,
        )
        return self.rank(enriched, counted)

    def rank(
        self, players: Sequence[Player], results: Iterable[MatchResult] = ()
    ) -> Tuple[Player, ...]:
        """Sort already-aggregated players and number them 1..N.

        Args:
            players: Players whose wins, ties and spread are current
            results: Results used for the head-to-head tiebreak

        Returns:
            New player records carrying their rank
        """
        head_to_head = self.calculate_head_to_head(results)

        def compare(a: Player, b: Player) -> int:
            return self._compare(a, b, head_to_head)

        ordered = sorted(players, key=cmp_to_key(compare))
        return tuple(
            player.with_updates(rank=index + 1) for index, player in enumerate(ordered)
        )

    def calculate_head_to_head(self, results: Iterable[MatchResult]) -> HeadToHead:
        """Count direct game wins for every pair that has met.

        Args:
            results: Results to scan; incomplete rows are ignored

        Returns:
            Mapping of (winner id, loser id) to games won
        """
        wins: HeadToHead = {}
        for result in results:
            if not result.is_complete:
                continue
            if result.score1 > result.score2:
                key = (result.player1_id, result.player2_id)
            elif result.score2 > result.score1:
                key = (result.player2_id, result.player1_id)
            else:
                continue
            wins[key] = wins.get(key, 0) + 1
        return wins

    def _compare(self, a: Player, b: Player, head_to_head: HeadToHead) -> int:
        if self.is_best_of_league and a.match_wins != b.match_wins:
            return b.match_wins - a.match_wins

        if a.score != b.score:
            return _sign(b.score - a.score)

        if a.spread != b.spread:
            return _sign(b.spread - a.spread)

        a_wins = head_to_head.get((a.id, b.id), 0)
        b_wins = head_to_head.get((b.id, a.id), 0)
        if a_wins != b_wins:
            return b_wins - a_wins

        return a.seed - b.seed

    def _aggregate_games(self, results: List[MatchResult]) -> Dict[PlayerId, _PlayerStats]:
        stats: Dict[PlayerId, _PlayerStats] = {}
        for result in results:
            s1 = stats.setdefault(result.player1_id, _PlayerStats())
            s2 = stats.setdefault(result.player2_id, _PlayerStats())

            if result.score1 > result.score2:
                s1.wins += 1
                s2.losses += 1
            elif result.score2 > result.score1:
                s2.wins += 1
                s1.losses += 1
            else:
                s1.ties += 1
                s2.ties += 1

            s1.spread += result.score1 - result.score2
            s2.spread += result.score2 - result.score1
        return stats

    def _aggregate_matches(
        self, results: List[MatchResult], stats: Dict[PlayerId, _PlayerStats]
    ) -> None:
        """Group games by fixed pair and credit the side reaching the majority."""
        games_by_pair: Dict[MatchupKey, List[MatchResult]] = {}
        for result in results:
            key = matchup_key(result.player1_id, result.player2_id)
            games_by_pair.setdefault(key, []).append(result)

        for games in games_by_pair.values():
            first_id = games[0].player1_id
            second_id = games[0].player2_id
            first_wins = 0
            second_wins = 0
            for game in games:
                first_score = game.score_for(first_id)
                second_score = game.score_for(second_id)
                if first_score > second_score:
                    first_wins += 1
                elif second_score > first_score:
                    second_wins += 1

            if first_wins >= self.majority:
                stats[first_id].match_wins += 1
                stats[second_id].match_losses += 1
            elif second_wins >= self.majority:
                stats[second_id].match_wins += 1
                stats[first_id].match_losses += 1

    def _enrich(self, player: Player, stats: Optional[_PlayerStats]) -> Player:
        stats = stats or _PlayerStats()
        changes = {
            "wins": stats.wins,
            "losses": stats.losses,
            "ties": stats.ties,
            "spread": stats.spread,
        }
        if self.is_best_of_league:
            changes["match_wins"] = stats.match_wins
            changes["match_losses"] = stats.match_losses
        return player.with_updates(**changes)


def compute_standings(
    players: Sequence[Player],
    results: Iterable[MatchResult],
    mode: str = DEFAULT_MODE,
    games_per_match: int = DEFAULT_GAMES_PER_MATCH,
    up_to_round: Optional[int] = None,
) -> Tuple[Player, ...]:
    """Rank a roster from its results; see :class:`StandingsCalculator`."""
    calculator = StandingsCalculator(mode, games_per_match)
    return calculator.compute(players, results, up_to_round)


def rank_players(
    players: Sequence[Player],
    results: Iterable[MatchResult] = (),
    mode: str = DEFAULT_MODE,
) -> Tuple[Player, ...]:
    """Rank players whose statistics are already aggregated."""
    return StandingsCalculator(mode).rank(players, results)
