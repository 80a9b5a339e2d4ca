"""Data models for the draft simulator."""

from rift_draft.models.draft import (
    DEFAULT_TIMER,
    EMPTY_BAN,
    EMPTY_PICK,
    DraftPhase,
    DraftSession,
    TeamSide,
)
from rift_draft.models.tournament import (
    Match,
    MatchStatus,
    SeriesFormat,
    Team,
    Tournament,
    TournamentStatus,
)

__all__ = [
    "DEFAULT_TIMER",
    "EMPTY_BAN",
    "EMPTY_PICK",
    "DraftPhase",
    "DraftSession",
    "TeamSide",
    "Match",
    "MatchStatus",
    "SeriesFormat",
    "Team",
    "Tournament",
    "TournamentStatus",
]
