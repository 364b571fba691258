"""Shared fixtures: a seeded dashboard database."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from db import create_session_factory
from repositories.matches import (
    ensure_dashboard_schema,
    leagues_table,
    matches_table,
    patches_table,
    teams_table,
)

SPIRIT = 1
TUNDRA = 2
GAIMIN = 3

TI_LEAGUE = 10
RIYADH_LEAGUE = 20

PATCH_738 = 1
PATCH_739 = 2


def _match_row(
    match_id: int,
    *,
    league_id: int,
    patch_id: int,
    radiant_team_id: int | None,
    dire_team_id: int | None,
    radiant_score: int,
    dire_score: int,
    radiant_win: bool,
    duration: int,
    start_time: datetime,
) -> dict:
    return {
        "match_id": match_id,
        "league_id": league_id,
        "patch_id": patch_id,
        "radiant_team_id": radiant_team_id,
        "dire_team_id": dire_team_id,
        "radiant_score": radiant_score,
        "dire_score": dire_score,
        "radiant_win": radiant_win,
        "duration": duration,
        "start_time": start_time,
        "series_type": None,
        "series_id": None,
        "first_tower_team_id": None,
        "first_tower_time": None,
    }


def seed_dashboard(engine: Engine) -> None:
    ensure_dashboard_schema(engine)
    with engine.begin() as connection:
        connection.execute(
            insert(leagues_table),
            [
                {
                    "league_id": TI_LEAGUE,
                    "name": "The International 2025",
                    "slug": "the-international-2025",
                    "start_date": date(2025, 9, 4),
                    "end_date": date(2025, 9, 14),
                },
                {
                    "league_id": RIYADH_LEAGUE,
                    "name": "Riyadh Masters",
                    "slug": "riyadh-masters",
                    "start_date": date(2025, 7, 8),
                    "end_date": date(2025, 7, 20),
                },
            ],
        )
        connection.execute(
            insert(teams_table),
            [
                {"team_id": SPIRIT, "name": "Team Spirit", "slug": "team-spirit", "logo_url": None},
                {"team_id": TUNDRA, "name": "Tundra Esports", "slug": "tundra", "logo_url": None},
                {"team_id": GAIMIN, "name": "Gaimin Gladiators", "slug": "gaimin", "logo_url": None},
            ],
        )
        connection.execute(
            insert(patches_table),
            [
                {"id": PATCH_738, "patch": "7.38"},
                {"id": PATCH_739, "patch": "7.39"},
            ],
        )
        connection.execute(
            insert(matches_table),
            [
                _match_row(
                    101,
                    league_id=TI_LEAGUE,
                    patch_id=PATCH_739,
                    radiant_team_id=SPIRIT,
                    dire_team_id=TUNDRA,
                    radiant_score=30,
                    dire_score=10,
                    radiant_win=True,
                    duration=2400,
                    start_time=datetime(2025, 9, 5, 10, 0, 0),
                ),
                _match_row(
                    102,
                    league_id=TI_LEAGUE,
                    patch_id=PATCH_739,
                    radiant_team_id=TUNDRA,
                    dire_team_id=SPIRIT,
                    radiant_score=20,
                    dire_score=25,
                    radiant_win=False,
                    duration=1800,
                    start_time=datetime(2025, 9, 6, 10, 0, 0),
                ),
                _match_row(
                    103,
                    league_id=TI_LEAGUE,
                    patch_id=PATCH_739,
                    radiant_team_id=GAIMIN,
                    dire_team_id=SPIRIT,
                    radiant_score=28,
                    dire_score=18,
                    radiant_win=True,
                    duration=2100,
                    start_time=datetime(2025, 9, 7, 10, 0, 0),
                ),
                _match_row(
                    104,
                    league_id=RIYADH_LEAGUE,
                    patch_id=PATCH_738,
                    radiant_team_id=SPIRIT,
                    dire_team_id=GAIMIN,
                    radiant_score=12,
                    dire_score=14,
                    radiant_win=True,
                    duration=3000,
                    start_time=datetime(2025, 7, 10, 10, 0, 0),
                ),
                _match_row(
                    105,
                    league_id=RIYADH_LEAGUE,
                    patch_id=PATCH_738,
                    radiant_team_id=TUNDRA,
                    dire_team_id=GAIMIN,
                    radiant_score=22,
                    dire_score=19,
                    radiant_win=True,
                    duration=2000,
                    start_time=datetime(2025, 7, 11, 10, 0, 0),
                ),
                _match_row(
                    106,
                    league_id=RIYADH_LEAGUE,
                    patch_id=PATCH_738,
                    radiant_team_id=None,
                    dire_team_id=None,
                    radiant_score=10,
                    dire_score=5,
                    radiant_win=True,
                    duration=1500,
                    start_time=datetime(2025, 7, 12, 10, 0, 0),
                ),
                _match_row(
                    107,
                    league_id=RIYADH_LEAGUE,
                    patch_id=PATCH_738,
                    radiant_team_id=TUNDRA,
                    dire_team_id=SPIRIT,
                    radiant_score=15,
                    dire_score=20,
                    radiant_win=False,
                    duration=2200,
                    start_time=datetime(2024, 12, 30, 10, 0, 0),
                ),
            ],
        )


@pytest.fixture
def dashboard_engine() -> Engine:
    engine = create_engine("sqlite://", poolclass=StaticPool)
    seed_dashboard(engine)
    return engine


@pytest.fixture
def session_factory(dashboard_engine: Engine):
    return create_session_factory(dashboard_engine)
