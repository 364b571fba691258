"""Shared record types for handicap analysis."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class MatchRecord:
    """Canonical completed-match payload consumed by the analysis engine."""

    match_id: int
    league_id: int | None
    patch_id: int | None
    radiant_team_id: int | None
    dire_team_id: int | None
    radiant_score: int
    dire_score: int
    radiant_win: bool
    duration: int = 0
    start_time: datetime | None = None
    series_type: str | None = None
    first_tower_time: int | None = None

    @property
    def is_official(self) -> bool:
        return self.radiant_team_id is not None and self.dire_team_id is not None

    @property
    def total_kills(self) -> int:
        return self.radiant_score + self.dire_score


@dataclass(frozen=True)
class TeamRef:
    team_id: int
    slug: str
    name: str
    logo_url: str | None = None


@dataclass(frozen=True)
class LeagueRef:
    league_id: int
    slug: str
    name: str
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class PatchRef:
    patch_id: int
    patch: str
