"""Descriptive statistics over a match population."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import MatchRecord


@dataclass(frozen=True)
class MatchSummary:
    total_matches: int
    avg_duration: float
    avg_score: float
    min_score: int
    max_score: int
    min_score_match: MatchRecord | None
    max_score_match: MatchRecord | None
    avg_first_tower_time: float | None
    radiant_win_rate: float
    fastest_match: MatchRecord | None
    longest_match: MatchRecord | None


EMPTY_MATCH_SUMMARY = MatchSummary(
    total_matches=0,
    avg_duration=0.0,
    avg_score=0.0,
    min_score=0,
    max_score=0,
    min_score_match=None,
    max_score_match=None,
    avg_first_tower_time=None,
    radiant_win_rate=0.0,
    fastest_match=None,
    longest_match=None,
)


def summarize_matches(matches: Sequence[MatchRecord]) -> MatchSummary:
    """Averages and extremes of duration and total kills.

    Ties keep the earliest match in population order. The highest-scoring
    match is only recorded once some match has at least one kill.
    """
    if not matches:
        return EMPTY_MATCH_SUMMARY

    duration_sum = 0
    score_sum = 0
    radiant_wins = 0
    first_tower_sum = 0
    first_tower_count = 0
    min_score_match: MatchRecord | None = None
    max_score = 0
    max_score_match: MatchRecord | None = None
    fastest_match: MatchRecord | None = None
    longest_match: MatchRecord | None = None

    for match in matches:
        duration_sum += match.duration
        score = match.total_kills
        score_sum += score
        if min_score_match is None or score < min_score_match.total_kills:
            min_score_match = match
        if score > max_score:
            max_score = score
            max_score_match = match
        if match.radiant_win:
            radiant_wins += 1
        if match.first_tower_time is not None:
            first_tower_sum += match.first_tower_time
            first_tower_count += 1
        if fastest_match is None or match.duration < fastest_match.duration:
            fastest_match = match
        if longest_match is None or match.duration > longest_match.duration:
            longest_match = match

    total = len(matches)
    return MatchSummary(
        total_matches=total,
        avg_duration=duration_sum / total,
        avg_score=score_sum / total,
        min_score=min_score_match.total_kills if min_score_match else 0,
        max_score=max_score,
        min_score_match=min_score_match,
        max_score_match=max_score_match,
        avg_first_tower_time=(first_tower_sum / first_tower_count) if first_tower_count else None,
        radiant_win_rate=(radiant_wins / total) * 100.0,
        fastest_match=fastest_match,
        longest_match=longest_match,
    )


__all__ = ["EMPTY_MATCH_SUMMARY", "MatchSummary", "summarize_matches"]
