"""Best-of-N series progression and per-game draft creation."""

import logging
from datetime import datetime
from typing import Optional

from rift_draft.errors import InvalidTransitionError, InvalidWinnerError, NotFoundError
from rift_draft.models.draft import DraftSession
from rift_draft.models.tournament import Match, MatchStatus
from rift_draft.repositories.draft_repository import DraftRepository
from rift_draft.services.draft_service import DraftService
from rift_draft.services.fearless import compute_fearless_bans
from rift_draft.services.locks import KeyedLocks

logger = logging.getLogger(__name__)


def apply_game_winner(match: Match, winner_id: str, now: Optional[datetime] = None) -> Match:
    """Score one game of a series in place.

    Increments the winner's game count and ``current_game``. Once a side
    reaches the wins needed for the format the match is completed.
    bo1 goes through the same path with one win needed.

    Raises:
        InvalidTransitionError: If the match is already completed
        InvalidWinnerError: If ``winner_id`` is not one of the match's teams
    """
    if match.is_completed:
        raise InvalidTransitionError(f"Match {match.id} is already completed")
    if not winner_id or winner_id not in (match.team1_id, match.team2_id):
        raise InvalidWinnerError(
            f"Team '{winner_id}' is not playing in match {match.id}"
        )

    if winner_id == match.team1_id:
        match.team1_wins += 1
    else:
        match.team2_wins += 1
    match.current_game += 1

    wins_needed = match.series_format.wins_needed
    if match.team1_wins >= wins_needed:
        series_winner = match.team1_id
    elif match.team2_wins >= wins_needed:
        series_winner = match.team2_id
    else:
        series_winner = None

    if series_winner is not None:
        match.status = MatchStatus.COMPLETED
        match.winner_id = series_winner
        match.completed_at = now or datetime.now()
    else:
        match.status = MatchStatus.IN_PROGRESS
    return match


class SeriesService:
    """Coordinates matches with the draft sessions of their games."""

    def __init__(self, repository: DraftRepository, draft_service: DraftService):
        self.repository = repository
        self.draft_service = draft_service
        self.locks = KeyedLocks()

    def _get_match(self, match_id: str) -> Match:
        match = self.repository.get_match(match_id)
        if match is None:
            raise NotFoundError("Match", match_id)
        return match

    def record_game_winner(self, match_id: str, winner_team_id: str) -> Match:
        """Record the winner of the match's current game and update the series.

        Raises:
            InvalidTransitionError: If the current game still has a draft in progress
        """
        self._get_match(match_id)
        with self.locks.hold(match_id):
            match = self._get_match(match_id)
            game_number = match.current_game
            draft = self.repository.get_draft_session_for_game(match_id, game_number)
            if draft is not None and not draft.is_completed:
                raise InvalidTransitionError(
                    f"Game {game_number} of match {match_id} is still drafting "
                    f"(phase '{draft.phase.value}')"
                )
            apply_game_winner(match, winner_team_id)
            self.repository.save_match(match)

        logger.info(
            f"Match {match_id} game {game_number} won by {winner_team_id} "
            f"({match.team1_wins}-{match.team2_wins})"
        )
        if match.is_completed:
            logger.info(f"Match {match_id} completed, winner {match.winner_id}")
            self.locks.discard(match_id)
        return match

    def get_game_draft(self, match_id: str, game_number: Optional[int] = None) -> DraftSession:
        match = self._get_match(match_id)
        number = game_number or match.current_game
        session = self.repository.get_draft_session_for_game(match_id, number)
        if session is None:
            raise NotFoundError("Draft session", f"{match_id}#{number}")
        return session

    def start_game_draft(
        self,
        match_id: str,
        game_number: Optional[int] = None,
        created_by: Optional[str] = None,
    ) -> DraftSession:
        """Return the draft for a game of the match, creating it if needed.

        Idempotent per (match, game): an existing session is returned as is.
        New sessions receive the fearless carryover of earlier games.
        """
        self._get_match(match_id)
        with self.locks.hold(match_id):
            match = self._get_match(match_id)
            number = game_number or match.current_game

            existing = self.repository.get_draft_session_for_game(match_id, number)
            if existing is not None:
                return existing

            if match.is_completed:
                raise InvalidTransitionError(f"Match {match_id} is already completed")
            max_games = match.series_format.max_games
            if not 1 <= number <= max_games:
                raise InvalidTransitionError(
                    f"Game {number} is outside a {match.series_format.value} series"
                )

            prior_sessions = self.repository.list_draft_sessions_for_match(match_id)
            fearless_bans = compute_fearless_bans(prior_sessions, number, match.fearless_mode)

            tournament = self.repository.get_tournament(match.tournament_id)
            blue_team = self.repository.get_team(match.team1_id) if match.team1_id else None
            red_team = self.repository.get_team(match.team2_id) if match.team2_id else None

            session = self.draft_service.create_draft_session(
                tournament_id=match.tournament_id,
                match_id=match_id,
                game_number=number,
                tournament_name=tournament.name if tournament else None,
                blue_team_name=blue_team.name if blue_team else None,
                red_team_name=red_team.name if red_team else None,
                fearless_banned_champions=fearless_bans,
                created_by=created_by,
            )

            if match.status == MatchStatus.PENDING:
                match.status = MatchStatus.IN_PROGRESS
                self.repository.save_match(match)

        return session
