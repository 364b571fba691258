"""Grouped handicap views built on the team aggregator."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from domain.common import MatchRecord
from domain.handicap.aggregator import TeamHandicapSummary, compute_team_handicap
from domain.handicap.range import DEFAULT_HANDICAP_RANGE, HandicapRange
from domain.protocol import GroupBy


@dataclass(frozen=True)
class HandicapGroup:
    key: int
    summary: TeamHandicapSummary


@dataclass(frozen=True)
class GroupedHandicapSummary:
    """Per-key team summaries, ordered by descending match count then key."""

    group_by: GroupBy
    groups: tuple[HandicapGroup, ...]

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[HandicapGroup]:
        return iter(self.groups)

    def __contains__(self, key: object) -> bool:
        return any(group.key == key for group in self.groups)

    def __getitem__(self, key: int) -> TeamHandicapSummary:
        for group in self.groups:
            if group.key == key:
                return group.summary
        raise KeyError(f"No {self.group_by.value} group for key={key}")

    def keys(self) -> list[int]:
        return [group.key for group in self.groups]

    def top(self, n: int) -> tuple[HandicapGroup, ...]:
        return self.groups[: max(n, 0)]

    def filter_keys(self, keys: Iterable[int]) -> GroupedHandicapSummary:
        """Keep only the given keys, preserving order."""
        wanted = set(keys)
        return GroupedHandicapSummary(
            group_by=self.group_by,
            groups=tuple(group for group in self.groups if group.key in wanted),
        )

    def as_json(self) -> dict[str, Any]:
        return {
            "group_by": self.group_by.value,
            "groups": [
                {"key": group.key, "summary": group.summary.as_json()} for group in self.groups
            ],
        }


def _group_key(match: MatchRecord, group_by: GroupBy) -> int | None:
    if group_by == GroupBy.LEAGUE:
        return match.league_id
    if group_by == GroupBy.PATCH:
        return match.patch_id
    raise ValueError(f"Matches cannot be partitioned by {group_by.value!r}; use league or patch")


def _ordered(group_by: GroupBy, groups: Iterable[HandicapGroup]) -> GroupedHandicapSummary:
    return GroupedHandicapSummary(
        group_by=group_by,
        groups=tuple(sorted(groups, key=lambda group: (-group.summary.total_matches, group.key))),
    )


def partition_matches(
    matches: Iterable[MatchRecord],
    group_by: GroupBy,
) -> dict[int, list[MatchRecord]]:
    """Split matches by league or patch id; matches without a key are dropped."""
    partitions: dict[int, list[MatchRecord]] = {}
    for match in matches:
        key = _group_key(match, group_by)
        if key is None:
            continue
        partitions.setdefault(key, []).append(match)
    return partitions


def partition_by_team(matches: Iterable[MatchRecord]) -> dict[int, list[MatchRecord]]:
    """Split matches per participating team; each match lands in both sides' slices."""
    partitions: dict[int, list[MatchRecord]] = {}
    for match in matches:
        if match.radiant_team_id is not None:
            partitions.setdefault(match.radiant_team_id, []).append(match)
        if match.dire_team_id is not None and match.dire_team_id != match.radiant_team_id:
            partitions.setdefault(match.dire_team_id, []).append(match)
    return partitions


def compute_grouped_handicap(
    matches: Iterable[MatchRecord],
    team_id: int | None,
    group_by: GroupBy,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
) -> GroupedHandicapSummary:
    """One team's handicap summary per league or per patch.

    Keys where the team played no match are left out.
    """
    groups = []
    for key, key_matches in partition_matches(matches, group_by).items():
        summary = compute_team_handicap(key_matches, team_id, handicap_range)
        if summary.total_matches:
            groups.append(HandicapGroup(key=key, summary=summary))
    return _ordered(group_by, groups)


def compute_teams_handicap(
    matches: Iterable[MatchRecord],
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
    team_ids: Sequence[int] | None = None,
) -> GroupedHandicapSummary:
    """Handicap summary for every team in the population, keyed by team id.

    With ``team_ids`` the table holds exactly those teams, including ones with
    no matches in the population.
    """
    slices = partition_by_team(matches)
    selected = list(slices) if team_ids is None else list(dict.fromkeys(team_ids))
    groups = [
        HandicapGroup(
            key=team_id,
            summary=compute_team_handicap(slices.get(team_id, ()), team_id, handicap_range),
        )
        for team_id in selected
    ]
    return _ordered(GroupBy.TEAM, groups)


def compute_grouped_team_handicaps(
    matches: Iterable[MatchRecord],
    group_by: GroupBy,
    handicap_range: HandicapRange = DEFAULT_HANDICAP_RANGE,
) -> dict[int, GroupedHandicapSummary]:
    """Per league or patch, the handicap table of every team within it.

    Keys are ordered by descending match count within the key, then by key.
    """
    partitions = partition_matches(matches, group_by)
    ordered_keys = sorted(partitions, key=lambda key: (-len(partitions[key]), key))
    return {
        key: compute_teams_handicap(partitions[key], handicap_range)
        for key in ordered_keys
    }


__all__ = [
    "GroupedHandicapSummary",
    "HandicapGroup",
    "compute_grouped_handicap",
    "compute_grouped_team_handicaps",
    "compute_teams_handicap",
    "partition_by_team",
    "partition_matches",
]
