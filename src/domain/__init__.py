"""Match-analysis domain modules."""

from domain.common import LeagueRef, MatchRecord, PatchRef, TeamRef
from domain.protocol import GroupBy, OutcomeCategory, Scope, Side

__all__ = [
    "GroupBy",
    "LeagueRef",
    "MatchRecord",
    "OutcomeCategory",
    "PatchRef",
    "Scope",
    "Side",
    "TeamRef",
]
