"""Read helpers for the dashboard's league/team/patch/match tables."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Select,
    Table,
    Text,
    or_,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import LeagueRef, MatchRecord, PatchRef, TeamRef

DEFAULT_PAGE_SIZE = 1000

metadata = MetaData()

leagues_table = Table(
    "leagues",
    metadata,
    Column("league_id", BigInteger, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("start_date", Date),
    Column("end_date", Date),
    Index("leagues_start_date_idx", "start_date"),
)

teams_table = Table(
    "teams",
    metadata,
    Column("team_id", BigInteger, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("logo_url", Text),
)

patches_table = Table(
    "patch",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=False),
    Column("patch", Text, nullable=False, unique=True),
)

matches_table = Table(
    "matches",
    metadata,
    Column("match_id", BigInteger, primary_key=True, autoincrement=False),
    Column("duration", Integer, nullable=False),
    Column("start_time", DateTime(timezone=False), nullable=False),
    Column("dire_score", Integer, nullable=False),
    Column("radiant_score", Integer, nullable=False),
    Column("radiant_win", Boolean, nullable=False),
    Column("series_type", Text),
    Column("series_id", BigInteger),
    Column("radiant_team_id", BigInteger, ForeignKey("teams.team_id")),
    Column("dire_team_id", BigInteger, ForeignKey("teams.team_id")),
    Column("league_id", BigInteger, ForeignKey("leagues.league_id"), nullable=False),
    Column("first_tower_team_id", BigInteger, ForeignKey("teams.team_id")),
    Column("first_tower_time", Integer),
    Column("patch_id", BigInteger, ForeignKey("patch.id"), nullable=False),
    Index("matches_start_time_idx", "start_time"),
    Index("matches_league_id_idx", "league_id"),
    Index("matches_patch_id_idx", "patch_id"),
)


def ensure_dashboard_schema(engine: Engine) -> None:
    """Create the dashboard tables and indexes if they do not exist."""
    metadata.create_all(engine)


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)


def _row_to_match(row: Any) -> MatchRecord:
    return MatchRecord(
        match_id=int(row.match_id),
        league_id=_optional_int(row.league_id),
        patch_id=_optional_int(row.patch_id),
        radiant_team_id=_optional_int(row.radiant_team_id),
        dire_team_id=_optional_int(row.dire_team_id),
        radiant_score=int(row.radiant_score or 0),
        dire_score=int(row.dire_score or 0),
        radiant_win=bool(row.radiant_win),
        duration=int(row.duration or 0),
        start_time=row.start_time,
        series_type=row.series_type,
        first_tower_time=_optional_int(row.first_tower_time),
    )


def _row_to_team(row: Any) -> TeamRef:
    return TeamRef(
        team_id=int(row.team_id),
        slug=str(row.slug),
        name=str(row.name),
        logo_url=row.logo_url,
    )


def _row_to_league(row: Any) -> LeagueRef:
    return LeagueRef(
        league_id=int(row.league_id),
        slug=str(row.slug),
        name=str(row.name),
        start_date=row.start_date,
        end_date=row.end_date,
    )


def _row_to_patch(row: Any) -> PatchRef:
    return PatchRef(patch_id=int(row.id), patch=str(row.patch))


def _match_select() -> Select:
    return select(
        matches_table.c.match_id,
        matches_table.c.league_id,
        matches_table.c.patch_id,
        matches_table.c.radiant_team_id,
        matches_table.c.dire_team_id,
        matches_table.c.radiant_score,
        matches_table.c.dire_score,
        matches_table.c.radiant_win,
        matches_table.c.duration,
        matches_table.c.start_time,
        matches_table.c.series_type,
        matches_table.c.first_tower_time,
    )


def _fetch_paginated(session: Session, statement: Select, page_size: int) -> list[MatchRecord]:
    """Page through an ordered match statement and materialize every row."""
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")

    results: list[MatchRecord] = []
    offset = 0
    while True:
        rows = session.execute(statement.limit(page_size).offset(offset)).all()
        results.extend(_row_to_match(row) for row in rows)
        if len(rows) < page_size:
            break
        offset += page_size
    return results


def fetch_matches_by_team(
    session: Session,
    team_id: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[MatchRecord]:
    """All matches the team played on either side, newest match id first."""
    statement = (
        _match_select()
        .where(
            or_(
                matches_table.c.radiant_team_id == team_id,
                matches_table.c.dire_team_id == team_id,
            )
        )
        .order_by(matches_table.c.match_id.desc())
    )
    return _fetch_paginated(session, statement, page_size)


def fetch_matches_by_patch(
    session: Session,
    patch_id: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[MatchRecord]:
    statement = (
        _match_select()
        .where(matches_table.c.patch_id == patch_id)
        .order_by(matches_table.c.start_time.desc(), matches_table.c.match_id.desc())
    )
    return _fetch_paginated(session, statement, page_size)


def fetch_matches_by_league(
    session: Session,
    league_id: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[MatchRecord]:
    statement = (
        _match_select()
        .where(matches_table.c.league_id == league_id)
        .order_by(matches_table.c.start_time.desc(), matches_table.c.match_id.desc())
    )
    return _fetch_paginated(session, statement, page_size)


def fetch_matches_by_year(
    session: Session,
    year: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[MatchRecord]:
    """Matches that started within one calendar year, oldest first."""
    start = datetime(year, 1, 1)
    end = datetime(year + 1, 1, 1)
    statement = (
        _match_select()
        .where(
            matches_table.c.start_time >= start,
            matches_table.c.start_time < end,
        )
        .order_by(matches_table.c.start_time, matches_table.c.match_id)
    )
    return _fetch_paginated(session, statement, page_size)


def fetch_teams_by_ids(session: Session, team_ids: Sequence[int]) -> list[TeamRef]:
    if not team_ids:
        return []
    statement = (
        select(teams_table)
        .where(teams_table.c.team_id.in_(list(team_ids)))
        .order_by(teams_table.c.name, teams_table.c.team_id)
    )
    return [_row_to_team(row) for row in session.execute(statement).all()]


def get_team_by_slug(session: Session, slug: str) -> TeamRef | None:
    row = session.execute(select(teams_table).where(teams_table.c.slug == slug)).first()
    return None if row is None else _row_to_team(row)


def get_league_by_slug(session: Session, slug: str) -> LeagueRef | None:
    row = session.execute(select(leagues_table).where(leagues_table.c.slug == slug)).first()
    return None if row is None else _row_to_league(row)


def get_patch_by_name(session: Session, patch: str) -> PatchRef | None:
    row = session.execute(select(patches_table).where(patches_table.c.patch == patch)).first()
    return None if row is None else _row_to_patch(row)


def fetch_leagues(session: Session) -> list[LeagueRef]:
    statement = select(leagues_table).order_by(
        leagues_table.c.start_date.desc(),
        leagues_table.c.league_id,
    )
    return [_row_to_league(row) for row in session.execute(statement).all()]


def fetch_patches(session: Session) -> list[PatchRef]:
    statement = select(patches_table).order_by(patches_table.c.id)
    return [_row_to_patch(row) for row in session.execute(statement).all()]


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ensure_dashboard_schema",
    "fetch_leagues",
    "fetch_matches_by_league",
    "fetch_matches_by_patch",
    "fetch_matches_by_team",
    "fetch_matches_by_year",
    "fetch_patches",
    "fetch_teams_by_ids",
    "get_league_by_slug",
    "get_patch_by_name",
    "get_team_by_slug",
    "leagues_table",
    "matches_table",
    "metadata",
    "patches_table",
    "teams_table",
]
