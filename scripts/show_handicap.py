#!/usr/bin/env python3
"""Print kill-score handicap tables for a team, league, patch, or season."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.handicap.aggregator import TeamHandicapSummary
from domain.handicap.config import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_NAME,
    load_handicap_configs,
    select_handicap_config,
)
from domain.handicap.grouping import GroupedHandicapSummary
from domain.handicap.range import HandicapRange
from domain.pipeline import (
    ScopeHandicapReport,
    build_scope_report,
    build_season_report,
    build_team_report,
)
from domain.protocol import OutcomeCategory, Scope

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Kill-score handicap analysis over stored matches.",
)

DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", help="Database URL. Defaults to the local dotadata postgres instance."),
]
ConfigDirOption = Annotated[
    Path | None,
    typer.Option("--config-dir", help="Optional override for the handicap config directory."),
]
ConfigNameOption = Annotated[
    str,
    typer.Option("--config-name", help="Handicap config [system].name to use."),
]
TopNOption = Annotated[
    int,
    typer.Option("--top-n", help="Number of groups or teams to print."),
]
CategoryOption = Annotated[
    OutcomeCategory,
    typer.Option("--category", help="Outcome category for multi-team tables."),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print the report as JSON instead of tables."),
]


def _load_range(config_dir: Path | None, config_name: str) -> HandicapRange:
    try:
        configs = load_handicap_configs(config_dir or DEFAULT_CONFIG_DIR)
        return select_handicap_config(configs, config_name).handicap_range()
    except (FileNotFoundError, NotADirectoryError, ValueError, KeyError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-dir/--config-name") from exc


def _session_factory(db_url: str):
    return create_session_factory(create_db_engine(db_url))


def _check_top_n(top_n: int) -> None:
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _render_summary_header(label: str, summary: TeamHandicapSummary) -> str:
    return (
        f"{label}: matches={summary.total_matches} wins={summary.wins} losses={summary.losses} "
        f"winrate={summary.win_rate:.2f}% avg_kill_diff={summary.avg_kill_differential:.2f} "
        f"avg_duration={summary.avg_duration_minutes:.1f}m"
    )


def _render_summary_table(summary: TeamHandicapSummary, *, show_covered: bool = False) -> list[str]:
    handicap_range = summary.handicap_range
    victory = summary.victory_buckets.percentages
    loss = summary.loss_buckets.percentages
    general = summary.general_buckets.percentages
    header = f"  {'handicap':>8} {'wins%':>8} {'losses%':>8} {'total%':>8}"
    if show_covered:
        header += f" {'covered':>8}"
    lines = [header]
    for index in range(len(handicap_range)):
        line = (
            f"  {handicap_range.signed_label(index):>8} {victory[index]:8.2f} "
            f"{loss[index]:8.2f} {general[index]:8.2f}"
        )
        if show_covered:
            line += f" {summary.general_buckets.counts[index]:8d}"
        lines.append(line)
    return lines


def _render_team_table(
    table: GroupedHandicapSummary,
    category: OutcomeCategory,
    team_name,
    top_n: int,
) -> list[str]:
    groups = table.top(top_n)
    if not groups:
        return ["  (no teams)"]
    handicap_range = groups[0].summary.handicap_range
    labels = "".join(
        f"{handicap_range.signed_label(index):>7}" for index in range(len(handicap_range))
    )
    lines = [f"  {'team':<20} {'matches':>7} {'winrate':>8}{labels}"]
    for group in groups:
        summary = group.summary
        percentages = "".join(f"{value:7.1f}" for value in summary.buckets(category).percentages)
        lines.append(
            f"  {team_name(group.key)[:20]:<20} {summary.total_matches:7d} "
            f"{summary.win_rate:7.2f}%{percentages}"
        )
    return lines


def _print_scope_report(report: ScopeHandicapReport, category: OutcomeCategory, top_n: int) -> None:
    summary = report.match_summary
    typer.echo(
        f"{report.title}: matches={summary.total_matches} teams={len(report.teams)} "
        f"radiant_winrate={summary.radiant_win_rate:.2f}% "
        f"avg_kills={summary.avg_score:.2f} avg_duration={summary.avg_duration / 60.0:.1f}m"
    )
    for value in report.unresolved_teams:
        typer.echo(f"Team '{value}' not found for {report.title}.")

    for team, team_summary in (
        (report.team1, report.team1_summary),
        (report.team2, report.team2_summary),
    ):
        if team is None or team_summary is None:
            continue
        typer.echo(_render_summary_header(team.name, team_summary))
        for line in _render_summary_table(team_summary):
            typer.echo(line)

    if report.head_to_head is not None and report.team1 is not None and report.team2 is not None:
        tally = report.head_to_head
        typer.echo(
            f"head_to_head: matches={tally.total_matches} "
            f"{report.team1.name}={tally.team_a_wins} {report.team2.name}={tally.team_b_wins}"
        )

    typer.echo(f"{category.value} handicap success rate by team (%):")
    for line in _render_team_table(report.team_table, category, report.team_name, top_n):
        typer.echo(line)


@app.command()
def team(
    slug: Annotated[str, typer.Argument(help="Team slug.")],
    top_n: TopNOption = 10,
    as_json: JsonOption = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = DEFAULT_CONFIG_NAME,
) -> None:
    """Overall, per-league and per-patch handicap tables for one team."""
    _check_top_n(top_n)
    handicap_range = _load_range(config_dir, config_name)

    report = build_team_report(
        session_factory=_session_factory(db_url),
        team_slug=slug,
        handicap_range=handicap_range,
        echo=None if as_json else typer.echo,
    )
    if report is None:
        typer.echo(f"Team '{slug}' not found.")
        raise typer.Exit(code=1)

    if as_json:
        _echo_json(report.as_json())
        return

    typer.echo(_render_summary_header(report.team.name, report.overall))
    for line in _render_summary_table(report.overall, show_covered=True):
        typer.echo(line)

    for title, grouped, name in (
        ("league", report.by_league, report.league_name),
        ("patch", report.by_patch, report.patch_name),
    ):
        if not len(grouped):
            typer.echo(f"No {title} data available for this team.")
            continue
        for group in grouped.top(top_n):
            typer.echo(_render_summary_header(f"{title} {name(group.key)}", group.summary))
            for line in _render_summary_table(group.summary):
                typer.echo(line)


def _scope_command(
    scope: Scope,
    key: str,
    *,
    team1: str | None,
    team2: str | None,
    search: str | None,
    category: OutcomeCategory,
    top_n: int,
    as_json: bool,
    db_url: str,
    config_dir: Path | None,
    config_name: str,
) -> None:
    _check_top_n(top_n)
    handicap_range = _load_range(config_dir, config_name)

    try:
        report = build_scope_report(
            session_factory=_session_factory(db_url),
            scope=scope,
            key=key,
            team1=team1,
            team2=team2,
            search=search,
            handicap_range=handicap_range,
            echo=None if as_json else typer.echo,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if report is None:
        typer.echo(f"{scope.value.capitalize()} '{key}' not found.")
        raise typer.Exit(code=1)

    if as_json:
        _echo_json(report.as_json())
        return
    _print_scope_report(report, category, top_n)


@app.command()
def patch(
    name: Annotated[str, typer.Argument(help="Patch name, for example 7.35.")],
    team1: Annotated[str | None, typer.Option("--team1", help="Team slug or id.")] = None,
    team2: Annotated[str | None, typer.Option("--team2", help="Second team slug or id.")] = None,
    search: Annotated[str | None, typer.Option("--search", help="Filter teams by name.")] = None,
    category: CategoryOption = OutcomeCategory.GENERAL,
    top_n: TopNOption = 20,
    as_json: JsonOption = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = DEFAULT_CONFIG_NAME,
) -> None:
    """Handicap table for every team in a patch, with optional team pair."""
    _scope_command(
        Scope.PATCH,
        name,
        team1=team1,
        team2=team2,
        search=search,
        category=category,
        top_n=top_n,
        as_json=as_json,
        db_url=db_url,
        config_dir=config_dir,
        config_name=config_name,
    )


@app.command()
def league(
    slug: Annotated[str, typer.Argument(help="League slug.")],
    team1: Annotated[str | None, typer.Option("--team1", help="Team slug or id.")] = None,
    team2: Annotated[str | None, typer.Option("--team2", help="Second team slug or id.")] = None,
    search: Annotated[str | None, typer.Option("--search", help="Filter teams by name.")] = None,
    category: CategoryOption = OutcomeCategory.GENERAL,
    top_n: TopNOption = 20,
    as_json: JsonOption = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = DEFAULT_CONFIG_NAME,
) -> None:
    """Handicap table for every team in a league, with optional team pair."""
    _scope_command(
        Scope.LEAGUE,
        slug,
        team1=team1,
        team2=team2,
        search=search,
        category=category,
        top_n=top_n,
        as_json=as_json,
        db_url=db_url,
        config_dir=config_dir,
        config_name=config_name,
    )


@app.command()
def season(
    year: Annotated[int, typer.Argument(help="Calendar year, for example 2025.")],
    category: CategoryOption = OutcomeCategory.GENERAL,
    top_n: TopNOption = 10,
    as_json: JsonOption = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = None,
    config_name: ConfigNameOption = DEFAULT_CONFIG_NAME,
) -> None:
    """Per-league team handicap tables for one calendar year."""
    _check_top_n(top_n)
    if year <= 0:
        raise typer.BadParameter("year must be greater than 0", param_hint="year")
    handicap_range = _load_range(config_dir, config_name)

    report = build_season_report(
        session_factory=_session_factory(db_url),
        year=year,
        handicap_range=handicap_range,
        echo=None if as_json else typer.echo,
    )
    if as_json:
        _echo_json(report.as_json())
        return

    summary = report.match_summary
    typer.echo(
        f"season={year} matches={summary.total_matches} leagues={len(report.by_league)} "
        f"radiant_winrate={summary.radiant_win_rate:.2f}%"
    )
    for league_id, grouped in list(report.by_league.items())[:top_n]:
        typer.echo(f"{report.league_name(league_id)} ({category.value} %):")
        for line in _render_team_table(grouped, category, report.team_name, top_n):
            typer.echo(line)


if __name__ == "__main__":
    app()
