"""Business logic services."""

from rift_draft.services.auth_service import AccessCode, AuthService
from rift_draft.services.draft_service import DraftService
from rift_draft.services.fearless import compute_fearless_bans
from rift_draft.services.series_service import SeriesService, apply_game_winner
from rift_draft.services.tournament_service import TournamentService

__all__ = [
    "AccessCode",
    "AuthService",
    "DraftService",
    "compute_fearless_bans",
    "SeriesService",
    "apply_game_winner",
    "TournamentService",
]
