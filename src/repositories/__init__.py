"""Read-only data access for the analysis pipeline."""

from repositories.matches import (
    ensure_dashboard_schema,
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

__all__ = [
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
]
