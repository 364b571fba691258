"""Shared enums for handicap analysis."""

from __future__ import annotations

from enum import Enum


class Side(str, Enum):
    """Which half of the map a team played on."""

    RADIANT = "radiant"
    DIRE = "dire"


class OutcomeCategory(str, Enum):
    """Denominator scope for handicap percentages."""

    VICTORY = "victory"
    LOSS = "loss"
    GENERAL = "general"


class GroupBy(str, Enum):
    """Key used to partition a match population."""

    LEAGUE = "league"
    PATCH = "patch"
    TEAM = "team"


class Scope(str, Enum):
    """Match population a scoped report is built over."""

    LEAGUE = "league"
    PATCH = "patch"


__all__ = ["GroupBy", "OutcomeCategory", "Scope", "Side"]
