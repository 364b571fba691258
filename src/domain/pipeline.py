"""Report builders: fetch a match population, run the handicap engine on it."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from domain.common import LeagueRef, MatchRecord, PatchRef, TeamRef
from domain.handicap.aggregator import TeamHandicapSummary, compute_team_handicap
from domain.handicap.grouping import (
    GroupedHandicapSummary,
    compute_grouped_handicap,
    compute_grouped_team_handicaps,
    compute_teams_handicap,
)
from domain.handicap.head_to_head import HeadToHeadTally, compute_head_to_head
from domain.handicap.range import DEFAULT_HANDICAP_RANGE, HandicapRange
from domain.match_summary import MatchSummary, summarize_matches
from domain.protocol import GroupBy, Scope
from repositories.matches import (
    fetch_leagues,
    fetch_matches_by_league,
    fetch_matches_by_patch,
    fetch_matches_by_team,
    fetch_matches_by_year,
    fetch_patches,
    fetch_teams_by_ids,
    get_league_by_slug,
    get_patch_by_name,
    get_team_by_slug,
)


@dataclass(frozen=True)
class TeamHandicapReport:
    """Overall, per-league and per-patch handicap tables for one team."""

    team: TeamRef
    overall: TeamHandicapSummary
    by_league: GroupedHandicapSummary
    by_patch: GroupedHandicapSummary
    leagues: dict[int, LeagueRef] = field(default_factory=dict)
    patches: dict[int, PatchRef] = field(default_factory=dict)

    def league_name(self, league_id: int) -> str:
        league = self.leagues.get(league_id)
        return league.name if league is not None else f"League {league_id}"

    def patch_name(self, patch_id: int) -> str:
        patch = self.patches.get(patch_id)
        return patch.patch if patch is not None else str(patch_id)

    def as_json(self) -> dict[str, Any]:
        return {
            "team": {"team_id": self.team.team_id, "slug": self.team.slug, "name": self.team.name},
            "overall": self.overall.as_json(),
            "by_league": self.by_league.as_json(),
            "by_patch": self.by_patch.as_json(),
        }


@dataclass(frozen=True)
class ScopeHandicapReport:
    """All-team handicap table for one league or patch, plus an optional team pair."""

    scope: Scope
    key: str
    scope_id: int
    title: str
    match_summary: MatchSummary
    teams: dict[int, TeamRef]
    team_table: GroupedHandicapSummary
    team1: TeamRef | None = None
    team2: TeamRef | None = None
    team1_summary: TeamHandicapSummary | None = None
    team2_summary: TeamHandicapSummary | None = None
    head_to_head: HeadToHeadTally | None = None
    unresolved_teams: tuple[str, ...] = ()

    def team_name(self, team_id: int) -> str:
        team = self.teams.get(team_id)
        return team.name if team is not None else f"Team {team_id}"

    def as_json(self) -> dict[str, Any]:
        return {
            "scope": self.scope.value,
            "key": self.key,
            "scope_id": self.scope_id,
            "title": self.title,
            "total_matches": self.match_summary.total_matches,
            "team_table": self.team_table.as_json(),
            "team1": None if self.team1_summary is None else self.team1_summary.as_json(),
            "team2": None if self.team2_summary is None else self.team2_summary.as_json(),
            "head_to_head": None if self.head_to_head is None else self.head_to_head.as_json(),
            "unresolved_teams": list(self.unresolved_teams),
        }


@dataclass(frozen=True)
class SeasonHandicapReport:
    """Per-league team handicap tables for one calendar year."""

    year: int
    match_summary: MatchSummary
    by_league: dict[int, GroupedHandicapSummary]
    leagues: dict[int, LeagueRef]
    teams: dict[int, TeamRef]

    def league_name(self, league_id: int) -> str:
        league = self.leagues.get(league_id)
        return league.name if league is not None else f"League {league_id}"

    def team_name(self, team_id: int) -> str:
        team = self.teams.get(team_id)
        return team.name if team is not None else f"Team {team_id}"

    def as_json(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "total_matches": self.match_summary.total_matches,
            "by_league": {
                str(league_id): grouped.as_json() for league_id, grouped in self.by_league.items()
            },
        }


def validate_scope_request(key: str, team1: str | None, team2: str | None) -> None:
    """Reject malformed scope parameters before anything is fetched."""
    if not key.strip():
        raise ValueError("scope key must not be empty")
    team1 = (team1 or "").strip()
    team2 = (team2 or "").strip()
    if team2 and not team1:
        raise ValueError("team2 requires team1")
    if team1 and team2 and team1 == team2:
        raise ValueError("team1 and team2 must be different teams")


def build_team_report(
    *,
    session_factory,
    team_slug: str,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
    echo: Callable[[str], None] | None = None,
) -> TeamHandicapReport | None:
    """Handicap tables for one team across every match it played.

    Returns ``None`` when no team has the given slug.
    """
    if not team_slug.strip():
        raise ValueError("team_slug must not be empty")

    with session_factory() as session:
        team = get_team_by_slug(session, team_slug.strip())
        if team is None:
            return None
        matches = fetch_matches_by_team(session, team.team_id)
        leagues = fetch_leagues(session)
        patches = fetch_patches(session)

    if echo is not None:
        echo(f"team={team.slug} team_id={team.team_id} fetched_matches={len(matches)}")

    return TeamHandicapReport(
        team=team,
        overall=compute_team_handicap(matches, team.team_id, handicap_range),
        by_league=compute_grouped_handicap(matches, team.team_id, GroupBy.LEAGUE, handicap_range),
        by_patch=compute_grouped_handicap(matches, team.team_id, GroupBy.PATCH, handicap_range),
        leagues={league.league_id: league for league in leagues},
        patches={patch.patch_id: patch for patch in patches},
    )


def build_scope_report(
    *,
    session_factory,
    scope: Scope,
    key: str,
    team1: str | None = None,
    team2: str | None = None,
    search: str | None = None,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
    echo: Callable[[str], None] | None = None,
) -> ScopeHandicapReport | None:
    """Team handicap table for a league (by slug) or patch (by name).

    ``team1``/``team2`` are resolved by slug or numeric id among the teams that
    played in the scope; inputs that do not resolve are listed in
    ``unresolved_teams``. Returns ``None`` when the scope key is unknown.
    """
    validate_scope_request(key, team1, team2)
    key = key.strip()

    with session_factory() as session:
        if scope == Scope.LEAGUE:
            league = get_league_by_slug(session, key)
            if league is None:
                return None
            scope_id, title = league.league_id, league.name
            matches = fetch_matches_by_league(session, scope_id)
        else:
            patch = get_patch_by_name(session, key)
            if patch is None:
                return None
            scope_id, title = patch.patch_id, f"Patch {patch.patch}"
            matches = fetch_matches_by_patch(session, scope_id)
        teams = fetch_teams_by_ids(session, _participating_team_ids(matches))

    if echo is not None:
        echo(
            f"scope={scope.value} key={key} scope_id={scope_id} "
            f"fetched_matches={len(matches)} teams={len(teams)}"
        )

    full_table = compute_teams_handicap(
        matches,
        handicap_range,
        team_ids=[team.team_id for team in teams],
    )
    team_table = full_table
    query = (search or "").strip().lower()
    if query:
        team_table = full_table.filter_keys(
            team.team_id for team in teams if query in team.name.lower()
        )

    unresolved: list[str] = []
    resolved: list[TeamRef | None] = []
    for value in (team1, team2):
        value = (value or "").strip()
        if not value:
            resolved.append(None)
            continue
        team = resolve_team(value, teams)
        if team is None:
            unresolved.append(value)
        resolved.append(team)
    resolved_team1, resolved_team2 = resolved

    head_to_head = None
    if resolved_team1 is not None and resolved_team2 is not None:
        head_to_head = compute_head_to_head(matches, resolved_team1.team_id, resolved_team2.team_id)

    return ScopeHandicapReport(
        scope=scope,
        key=key,
        scope_id=scope_id,
        title=title,
        match_summary=summarize_matches(matches),
        teams={team.team_id: team for team in teams},
        team_table=team_table,
        team1=resolved_team1,
        team2=resolved_team2,
        team1_summary=_summary_for(full_table, resolved_team1),
        team2_summary=_summary_for(full_table, resolved_team2),
        head_to_head=head_to_head,
        unresolved_teams=tuple(unresolved),
    )


def build_season_report(
    *,
    session_factory,
    year: int,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
    echo: Callable[[str], None] | None = None,
) -> SeasonHandicapReport:
    """Per-league team handicap tables for every match started in ``year``."""
    if year <= 0:
        raise ValueError("year must be greater than 0")

    with session_factory() as session:
        matches = fetch_matches_by_year(session, year)
        leagues = fetch_leagues(session)
        teams = fetch_teams_by_ids(session, _participating_team_ids(matches))

    if echo is not None:
        echo(f"year={year} fetched_matches={len(matches)} teams={len(teams)}")

    return SeasonHandicapReport(
        year=year,
        match_summary=summarize_matches(matches),
        by_league=compute_grouped_team_handicaps(matches, GroupBy.LEAGUE, handicap_range),
        leagues={league.league_id: league for league in leagues},
        teams={team.team_id: team for team in teams},
    )


def resolve_team(value: str, teams: Iterable[TeamRef]) -> TeamRef | None:
    """Find a team by slug, falling back to its numeric id."""
    by_id: dict[int, TeamRef] = {}
    for team in teams:
        if team.slug == value:
            return team
        by_id[team.team_id] = team
    if value.isdigit():
        return by_id.get(int(value))
    return None


def _participating_team_ids(matches: Iterable[MatchRecord]) -> list[int]:
    team_ids: set[int] = set()
    for match in matches:
        if match.radiant_team_id is not None:
            team_ids.add(match.radiant_team_id)
        if match.dire_team_id is not None:
            team_ids.add(match.dire_team_id)
    return sorted(team_ids)


def _summary_for(
    table: GroupedHandicapSummary,
    team: TeamRef | None,
) -> TeamHandicapSummary | None:
    if team is None:
        return None
    return table[team.team_id]


__all__ = [
    "ScopeHandicapReport",
    "SeasonHandicapReport",
    "TeamHandicapReport",
    "build_scope_report",
    "build_season_report",
    "build_team_report",
    "resolve_team",
    "validate_scope_request",
]
