"""Kill-score handicap analysis engine."""

from domain.handicap.aggregator import (
    TeamHandicapCalculator,
    TeamHandicapSummary,
    compute_team_handicap,
)
from domain.handicap.buckets import HandicapBuckets
from domain.handicap.classifier import NOT_PARTICIPANT, NotParticipant, Participant, classify_match
from domain.handicap.grouping import (
    GroupedHandicapSummary,
    HandicapGroup,
    compute_grouped_handicap,
    compute_grouped_team_handicaps,
    compute_teams_handicap,
)
from domain.handicap.head_to_head import HeadToHeadTally, compute_head_to_head
from domain.handicap.range import DEFAULT_HANDICAP_RANGE, HandicapRange, get_handicap_range

__all__ = [
    "DEFAULT_HANDICAP_RANGE",
    "GroupedHandicapSummary",
    "HandicapBuckets",
    "HandicapGroup",
    "HandicapRange",
    "HeadToHeadTally",
    "NOT_PARTICIPANT",
    "NotParticipant",
    "Participant",
    "TeamHandicapCalculator",
    "TeamHandicapSummary",
    "classify_match",
    "compute_grouped_handicap",
    "compute_grouped_team_handicaps",
    "compute_head_to_head",
    "compute_team_handicap",
    "compute_teams_handicap",
    "get_handicap_range",
]
