"""Directed win tally between two teams."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from domain.common import MatchRecord
from domain.handicap.buckets import calculate_percentage


@dataclass(frozen=True)
class HeadToHeadTally:
    team_a_id: int
    team_b_id: int
    total_matches: int
    team_a_wins: int
    team_b_wins: int

    @property
    def team_a_win_rate(self) -> float:
        return calculate_percentage(self.team_a_wins, self.total_matches)

    @property
    def team_b_win_rate(self) -> float:
        return calculate_percentage(self.team_b_wins, self.total_matches)

    def reversed(self) -> HeadToHeadTally:
        return HeadToHeadTally(
            team_a_id=self.team_b_id,
            team_b_id=self.team_a_id,
            total_matches=self.total_matches,
            team_a_wins=self.team_b_wins,
            team_b_wins=self.team_a_wins,
        )

    def as_json(self) -> dict[str, Any]:
        return {
            "team_a_id": self.team_a_id,
            "team_b_id": self.team_b_id,
            "total_matches": self.total_matches,
            "team_a_wins": self.team_a_wins,
            "team_b_wins": self.team_b_wins,
            "team_a_win_rate": self.team_a_win_rate,
            "team_b_win_rate": self.team_b_win_rate,
        }


def compute_head_to_head(
    matches: Iterable[MatchRecord],
    team_a_id: int,
    team_b_id: int,
) -> HeadToHeadTally:
    """Count matches where the two teams faced each other and who won them."""
    total = 0
    team_a_wins = 0
    for match in matches:
        radiant = match.radiant_team_id
        dire = match.dire_team_id
        if radiant is None or dire is None:
            continue
        if radiant == team_a_id and dire == team_b_id:
            team_a_won = match.radiant_win
        elif radiant == team_b_id and dire == team_a_id:
            team_a_won = not match.radiant_win
        else:
            continue

        total += 1
        if team_a_won:
            team_a_wins += 1

    return HeadToHeadTally(
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        total_matches=total,
        team_a_wins=team_a_wins,
        team_b_wins=total - team_a_wins,
    )


__all__ = ["HeadToHeadTally", "compute_head_to_head"]
