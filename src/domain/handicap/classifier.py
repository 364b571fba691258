"""Per-match participation and outcome for one team."""

from __future__ import annotations

from dataclasses import dataclass

from domain.common import MatchRecord
from domain.protocol import Side


@dataclass(frozen=True)
class Participant:
    side: Side
    is_winner: bool
    kill_differential: int


@dataclass(frozen=True)
class NotParticipant:
    pass


NOT_PARTICIPANT = NotParticipant()

MatchParticipation = Participant | NotParticipant


def classify_match(match: MatchRecord, team_id: int | None) -> MatchParticipation:
    """Resolve the team's side, result, and signed kill differential.

    A side without an assigned team never matches, so records from unofficial
    lobbies classify as non-participant for every team id.
    """
    if team_id is None:
        return NOT_PARTICIPANT

    if match.radiant_team_id is not None and match.radiant_team_id == team_id:
        return Participant(
            side=Side.RADIANT,
            is_winner=match.radiant_win,
            kill_differential=match.radiant_score - match.dire_score,
        )
    if match.dire_team_id is not None and match.dire_team_id == team_id:
        return Participant(
            side=Side.DIRE,
            is_winner=not match.radiant_win,
            kill_differential=match.dire_score - match.radiant_score,
        )
    return NOT_PARTICIPANT


__all__ = [
    "MatchParticipation",
    "NOT_PARTICIPANT",
    "NotParticipant",
    "Participant",
    "classify_match",
]
