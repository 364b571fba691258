"""Team-level handicap aggregation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from domain.common import MatchRecord
from domain.handicap.buckets import BucketCounter, HandicapBuckets, calculate_percentage
from domain.handicap.classifier import MatchParticipation, Participant, classify_match
from domain.handicap.range import DEFAULT_HANDICAP_RANGE, HandicapRange
from domain.protocol import OutcomeCategory


@dataclass(frozen=True)
class TeamHandicapSummary:
    """Handicap coverage for one team over one match population."""

    team_id: int | None
    total_matches: int
    wins: int
    losses: int
    avg_kill_differential: float
    avg_duration_seconds: float
    victory_buckets: HandicapBuckets
    loss_buckets: HandicapBuckets
    general_buckets: HandicapBuckets

    @property
    def handicap_range(self) -> HandicapRange:
        return self.general_buckets.handicap_range

    @property
    def win_rate(self) -> float:
        return calculate_percentage(self.wins, self.total_matches)

    @property
    def avg_duration_minutes(self) -> float:
        return round(self.avg_duration_seconds / 60.0, 1)

    def buckets(self, category: OutcomeCategory) -> HandicapBuckets:
        if category == OutcomeCategory.VICTORY:
            return self.victory_buckets
        if category == OutcomeCategory.LOSS:
            return self.loss_buckets
        return self.general_buckets

    def as_json(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "total_matches": self.total_matches,
            "wins": self.wins,
            "losses": self.losses,
            "win_rate": self.win_rate,
            "avg_kill_differential": self.avg_kill_differential,
            "avg_duration_seconds": self.avg_duration_seconds,
            "handicap": {
                category.value: self.buckets(category).as_rows() for category in OutcomeCategory
            },
        }


class TeamHandicapCalculator:
    """Single-pass handicap accumulator for one team."""

    def __init__(
        self,
        team_id: int | None,
        handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
    ) -> None:
        self.team_id = team_id
        self.handicap_range = handicap_range
        self._victories = BucketCounter(handicap_range)
        self._losses = BucketCounter(handicap_range)
        self._general = BucketCounter(handicap_range)
        self._kill_differential_sum = 0
        self._duration_sum = 0

    def tracked_match_count(self) -> int:
        return self._general.total

    def process_match(self, match: MatchRecord) -> MatchParticipation:
        participation = classify_match(match, self.team_id)
        if not isinstance(participation, Participant):
            return participation

        self._kill_differential_sum += participation.kill_differential
        self._duration_sum += match.duration

        self._general.add(participation.kill_differential)
        if participation.is_winner:
            self._victories.add(participation.kill_differential)
        else:
            self._losses.add(participation.kill_differential)
        return participation

    def summary(self) -> TeamHandicapSummary:
        total_matches = self._general.total
        if total_matches:
            avg_kill_differential = self._kill_differential_sum / total_matches
            avg_duration_seconds = self._duration_sum / total_matches
        else:
            avg_kill_differential = 0.0
            avg_duration_seconds = 0.0

        return TeamHandicapSummary(
            team_id=self.team_id,
            total_matches=total_matches,
            wins=self._victories.total,
            losses=self._losses.total,
            avg_kill_differential=avg_kill_differential,
            avg_duration_seconds=avg_duration_seconds,
            victory_buckets=self._victories.freeze(),
            loss_buckets=self._losses.freeze(),
            general_buckets=self._general.freeze(),
        )


def compute_team_handicap(
    matches: Iterable[MatchRecord],
    team_id: int | None,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
) -> TeamHandicapSummary:
    """Aggregate handicap coverage for ``team_id`` across ``matches``.

    Matches the team did not play are ignored. A team with no matches yields an
    all-zero summary.
    """
    calculator = TeamHandicapCalculator(team_id, handicap_range)
    for match in matches:
        calculator.process_match(match)
    return calculator.summary()


__all__ = ["TeamHandicapCalculator", "TeamHandicapSummary", "compute_team_handicap"]
