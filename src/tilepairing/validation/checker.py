"""Pairing Checker - validation of generated rounds.

This module checks a round's pairings against the properties every
pairing system must respect, and a round-robin schedule against the
meeting guarantees of the circle method. Findings are reported, never
raised.
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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from tilepairing.constants import NOTE_FORCED_REMATCH, NOTE_REMATCH_ALLOWED
from tilepairing.models import Pairing, Player, matchup_key, paired_player_ids
from tilepairing.type_hints import Matchups, PlayerId, Schedule
from tilepairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of criterion violations."""

    ABSOLUTE = "ABSOLUTE"  # P1-P4: Must not violate
    QUALITY = "QUALITY"  # P5-P6: Should minimize


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for a round or a schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.overall_status != CriterionStatus.VIOLATION

    @property
    def compliance_percentage(self) -> float:
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=description,
    )


def _violation(
    criterion: str,
    violation_type: ViolationType,
    description: str,
    **details: object,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=dict(details),
    )


class AbsoluteCriteriaChecker:
    """Validates the absolute criteria (P1-P4)."""

    def check_p1_completeness(
        self, pairings: Sequence[Pairing], players: Sequence[Player]
    ) -> CriterionResult:
        """P1: Every active player is seated, and nobody else."""
        active = {p.id for p in players if p.is_active}
        seated = set(paired_player_ids(pairings))
        missing = sorted(active - seated)
        unexpected = sorted(seated - active)
        if missing or unexpected:
            return _violation(
                "P1",
                ViolationType.ABSOLUTE,
                f"{len(missing)} active players unpaired, {len(unexpected)} unexpected",
                missing=missing,
                unexpected=unexpected,
            )
        return _compliant("P1", f"All {len(active)} active players paired")

    def check_p2_no_self_pairing(self, pairings: Sequence[Pairing]) -> CriterionResult:
        """P2: No player is paired against themselves."""
        for pairing in pairings:
            if pairing.player2 is not None and pairing.player1.id == pairing.player2.id:
                return _violation(
                    "P2",
                    ViolationType.ABSOLUTE,
                    f"{pairing.player1.name} paired against themselves",
                    table=pairing.table,
                )
        return _compliant("P2", "No self pairings")

    def check_p3_unique_players(self, pairings: Sequence[Pairing]) -> CriterionResult:
        """P3: Each player appears in at most one pairing."""
        counts = Counter(paired_player_ids(pairings))
        repeated = sorted(pid for pid, count in counts.items() if count > 1)
        if repeated:
            return _violation(
                "P3",
                ViolationType.ABSOLUTE,
                f"{len(repeated)} players seated more than once",
                players=repeated,
            )
        return _compliant("P3", "Every player seated once")

    def check_p4_bye_fairness(
        self,
        pairings: Sequence[Pairing],
        players: Sequence[Player],
        bye_history: Mapping[PlayerId, int],
    ) -> CriterionResult:
        """P4: A bye goes to a player with the fewest prior byes."""
        byes = [p for p in pairings if p.is_bye]
        if not byes:
            return CriterionResult(
                criterion="P4",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No bye assigned in this round",
            )

        active = [p for p in players if p.is_active]
        fewest = min((bye_history.get(p.id, 0) for p in active), default=0)
        for pairing in byes:
            count = bye_history.get(pairing.player1.id, 0)
            if count > fewest:
                return _violation(
                    "P4",
                    ViolationType.ABSOLUTE,
                    f"{pairing.player1.name} has {count} byes, minimum is {fewest}",
                    player_id=pairing.player1.id,
                    bye_count=count,
                )
        return _compliant("P4", "Bye assignment fair")


class QualityCriteriaChecker:
    """Validates the quality criteria (P5-P6)."""

    def check_p5_rematch_avoidance(
        self, pairings: Sequence[Pairing], previous_matches: Matchups
    ) -> CriterionResult:
        """P5: Rematches should be avoided; those that remain are listed."""
        rematches = [
            pairing
            for pairing in pairings
            if pairing.player2 is not None
            and matchup_key(pairing.player1.id, pairing.player2.id) in previous_matches
        ]
        if not rematches:
            return _compliant("P5", "No rematches")
        return _violation(
            "P5",
            ViolationType.QUALITY,
            f"{len(rematches)} rematches",
            tables=[p.table for p in rematches],
            explained=sum(
                1
                for p in rematches
                if p.note in (NOTE_FORCED_REMATCH, NOTE_REMATCH_ALLOWED)
            ),
        )

    def check_p6_unique_tables(self, pairings: Sequence[Pairing]) -> CriterionResult:
        """P6: Numbered tables are used at most once."""
        counts = Counter(p.table for p in pairings if isinstance(p.table, int))
        repeated = sorted(table for table, count in counts.items() if count > 1)
        if repeated:
            return _violation(
                "P6",
                ViolationType.QUALITY,
                f"Tables used more than once: {repeated}",
                tables=repeated,
            )
        return _compliant("P6", "Table numbers unique")


def _build_report(results: List[CriterionResult], label: str) -> ValidationReport:
    absolute = [
        r
        for r in results
        if r.is_violation and r.violation_type == ViolationType.ABSOLUTE
    ]
    quality = [
        r
        for r in results
        if r.is_violation and r.violation_type == ViolationType.QUALITY
    ]
    overall = CriterionStatus.VIOLATION if absolute else CriterionStatus.COMPLIANT
    if absolute:
        summary = (
            f"{label}: absolute violations detected - {len(absolute)} criteria "
            f"failed; {len(quality)} quality warnings"
        )
    else:
        summary = f"{label}: absolute criteria satisfied; {len(quality)} quality criteria flagged"

    logger.info("Validation complete: %s", summary)
    return ValidationReport(
        total_criteria=len(results),
        compliant_count=sum(1 for r in results if r.status == CriterionStatus.COMPLIANT),
        violations=absolute,
        overall_status=overall,
        summary=summary,
        quality_warnings=quality,
        criteria_results=results,
    )


class PairingValidator:
    """Main pairing validator."""

    def __init__(self):
        self.absolute_checker = AbsoluteCriteriaChecker()
        self.quality_checker = QualityCriteriaChecker()

    def validate_round_pairings(
        self,
        pairings: Sequence[Pairing],
        players: Sequence[Player],
        previous_matches: Iterable[Iterable[PlayerId]] = (),
        bye_history: Optional[Mapping[PlayerId, int]] = None,
        round_number: Optional[int] = None,
    ) -> ValidationReport:
        """Validate one round's pairings against every criterion.

        Args:
            pairings: The round's pairings
            players: The roster the round was paired from
            previous_matches: Pairs that met before this round
            bye_history: Byes per player before this round
            round_number: Used in the summary only
        """
        met = {matchup_key(*pair) for pair in previous_matches}
        label = f"Round {round_number}" if round_number is not None else "Round"
        logger.debug("Validating %s pairings for %s", len(pairings), label)

        results = [
            self.absolute_checker.check_p1_completeness(pairings, players),
            self.absolute_checker.check_p2_no_self_pairing(pairings),
            self.absolute_checker.check_p3_unique_players(pairings),
            self.absolute_checker.check_p4_bye_fairness(
                pairings, players, bye_history or {}
            ),
            self.quality_checker.check_p5_rematch_avoidance(pairings, met),
            self.quality_checker.check_p6_unique_tables(pairings),
        ]
        return _build_report(results, label)


def validate_round_robin_schedule(
    schedule: Schedule,
    players: Sequence[Player],
    repeats: int = 1,
    matches_per_opponent: int = 1,
) -> ValidationReport:
    """Check a round-robin schedule's round count and meetings.

    With n seats (real players plus an empty seat for an odd field) a
    schedule must have (n-1) rounds per cycle and every pair of real
    players must meet ``matches_per_opponent`` times in each cycle.
    """
    validator = PairingValidator()
    active = [p for p in players if p.is_active]
    seats = len(active) + len(active) % 2
    rounds_per_cycle = max(0, seats - 1) * matches_per_opponent
    expected_rounds = rounds_per_cycle * repeats

    results: List[CriterionResult] = []
    if len(schedule) == expected_rounds:
        results.append(_compliant("RR1", f"{expected_rounds} rounds scheduled"))
    else:
        results.append(
            _violation(
                "RR1",
                ViolationType.ABSOLUTE,
                f"Expected {expected_rounds} rounds, got {len(schedule)}",
                expected=expected_rounds,
                actual=len(schedule),
            )
        )

    ordered = [schedule[r] for r in sorted(schedule)]
    for cycle in range(repeats):
        rounds = ordered[cycle * rounds_per_cycle : (cycle + 1) * rounds_per_cycle]
        meetings = Counter(
            matchup_key(p.player1.id, p.player2.id)
            for pairings in rounds
            for p in pairings
            if p.player2 is not None
        )
        wrong = [
            sorted(pair)
            for pair in (matchup_key(a.id, b.id) for a, b in combinations(active, 2))
            if meetings.get(pair, 0) != matches_per_opponent
        ]
        if wrong:
            results.append(
                _violation(
                    "RR2",
                    ViolationType.ABSOLUTE,
                    f"Cycle {cycle + 1}: {len(wrong)} pairs do not meet "
                    f"{matches_per_opponent} times",
                    cycle=cycle + 1,
                    pairs=wrong,
                )
            )
        else:
            results.append(_compliant("RR2", f"Cycle {cycle + 1}: every pair meets"))

    for round_number, pairings in sorted(schedule.items()):
        report = validator.validate_round_pairings(
            pairings, players, round_number=round_number
        )
        results.extend(r for r in report.criteria_results if r.criterion in ("P1", "P3"))

    return _build_report(results, "Round robin schedule")


def create_pairing_validator() -> PairingValidator:
    """Create and configure a validator instance."""
    return PairingValidator()


def validate_pairings(
    pairings: Sequence[Pairing], players: Sequence[Player], **kwargs
) -> ValidationReport:
    """Quick validation of one round."""
    return create_pairing_validator().validate_round_pairings(pairings, players, **kwargs)
