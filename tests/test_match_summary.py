"""Tests for descriptive match-population statistics."""

from __future__ import annotations

import pytest

from domain.common import MatchRecord
from domain.match_summary import EMPTY_MATCH_SUMMARY, summarize_matches


def _match(
    match_id: int,
    *,
    radiant_score: int,
    dire_score: int,
    radiant_win: bool,
    duration: int,
    first_tower_time: int | None = None,
) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        league_id=1,
        patch_id=1,
        radiant_team_id=1,
        dire_team_id=2,
        radiant_score=radiant_score,
        dire_score=dire_score,
        radiant_win=radiant_win,
        duration=duration,
        first_tower_time=first_tower_time,
    )


def test_empty_population_is_all_zero() -> None:
    summary = summarize_matches([])
    assert summary == EMPTY_MATCH_SUMMARY
    assert summary.avg_first_tower_time is None


def test_summary_tracks_extremes_and_averages() -> None:
    short_bloody = _match(1, radiant_score=40, dire_score=30, radiant_win=True, duration=1500, first_tower_time=400)
    long_quiet = _match(2, radiant_score=10, dire_score=12, radiant_win=False, duration=3600)
    middle = _match(3, radiant_score=20, dire_score=20, radiant_win=True, duration=2400, first_tower_time=600)

    summary = summarize_matches([short_bloody, long_quiet, middle])

    assert summary.total_matches == 3
    assert summary.avg_duration == pytest.approx(2500.0)
    assert summary.avg_score == pytest.approx(44.0)
    assert summary.min_score == 22
    assert summary.max_score == 70
    assert summary.min_score_match is long_quiet
    assert summary.max_score_match is short_bloody
    assert summary.fastest_match is short_bloody
    assert summary.longest_match is long_quiet
    assert summary.radiant_win_rate == pytest.approx(200.0 / 3.0)
    assert summary.avg_first_tower_time == pytest.approx(500.0)


def test_scoreless_population_has_no_max_score_match() -> None:
    first = _match(1, radiant_score=0, dire_score=0, radiant_win=True, duration=900)
    second = _match(2, radiant_score=0, dire_score=0, radiant_win=False, duration=1200)

    summary = summarize_matches([first, second])

    assert summary.max_score == 0
    assert summary.max_score_match is None
    assert summary.min_score == 0
    assert summary.min_score_match is first
