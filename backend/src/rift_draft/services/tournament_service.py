"""Tournament, team and match bookkeeping."""

import logging
import uuid
from datetime import datetime
from typing import Any, Optional

from rift_draft.errors import DraftError, InvalidTransitionError, NotFoundError
from rift_draft.models.tournament import (
    Match,
    MatchStatus,
    SeriesFormat,
    Team,
    Tournament,
    TournamentStatus,
)
from rift_draft.repositories.draft_repository import DraftRepository

logger = logging.getLogger(__name__)

TOURNAMENT_UPDATABLE = {"name", "description", "format", "max_teams", "status"}
MATCH_UPDATABLE = {
    "team1_id",
    "team2_id",
    "round",
    "position",
    "series_format",
    "fearless_mode",
    "status",
    "scheduled_at",
}
# Fixed once the first game of a series has started
SERIES_FIELDS = {"team1_id", "team2_id", "series_format", "fearless_mode", "status"}


class TournamentService:
    """CRUD over tournaments, their teams and their matches."""

    def __init__(self, repository: DraftRepository):
        self.repository = repository

    # Tournaments

    def create_tournament(
        self,
        name: str,
        description: Optional[str] = None,
        format: str = "single_elimination",
        max_teams: int = 8,
        created_by: Optional[str] = None,
    ) -> Tournament:
        tournament = Tournament(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            format=format,
            max_teams=max_teams,
            created_by=created_by,
        )
        self.repository.create_tournament(tournament)
        logger.info(f"Created tournament {tournament.id} ({name})")
        return tournament

    def list_tournaments(self) -> list[Tournament]:
        return self.repository.list_tournaments()

    def get_tournament(self, tournament_id: str) -> Tournament:
        tournament = self.repository.get_tournament(tournament_id)
        if tournament is None:
            raise NotFoundError("Tournament", tournament_id)
        return tournament

    def update_tournament(self, tournament_id: str, updates: dict[str, Any]) -> Tournament:
        tournament = self.get_tournament(tournament_id)
        for key, value in updates.items():
            if key not in TOURNAMENT_UPDATABLE:
                continue
            if key == "status":
                value = TournamentStatus(value)
            setattr(tournament, key, value)
        tournament.updated_at = datetime.now()
        return self.repository.save_tournament(tournament)

    def delete_tournament(self, tournament_id: str) -> None:
        if not self.repository.delete_tournament(tournament_id):
            raise NotFoundError("Tournament", tournament_id)
        logger.info(f"Deleted tournament {tournament_id}")

    # Teams

    def add_team(self, tournament_id: str, name: str, logo: Optional[str] = None) -> Team:
        tournament = self.get_tournament(tournament_id)
        if len(self.repository.list_teams(tournament_id)) >= tournament.max_teams:
            raise DraftError(f"Tournament {tournament_id} already has {tournament.max_teams} teams")

        team = Team(id=str(uuid.uuid4()), name=name, tournament_id=tournament_id, logo=logo)
        return self.repository.create_team(team)

    def list_teams(self, tournament_id: str) -> list[Team]:
        self.get_tournament(tournament_id)
        return self.repository.list_teams(tournament_id)

    def delete_team(self, team_id: str) -> None:
        if not self.repository.delete_team(team_id):
            raise NotFoundError("Team", team_id)

    # Matches

    def _check_team(self, tournament_id: str, team_id: Optional[str]) -> None:
        if team_id is None:
            return
        team = self.repository.get_team(team_id)
        if team is None or team.tournament_id != tournament_id:
            raise NotFoundError("Team", team_id)

    def create_match(
        self,
        tournament_id: str,
        round: int,
        position: int,
        team1_id: Optional[str] = None,
        team2_id: Optional[str] = None,
        series_format: str = "bo1",
        fearless_mode: bool = False,
        scheduled_at: Optional[datetime] = None,
    ) -> Match:
        self.get_tournament(tournament_id)
        self._check_team(tournament_id, team1_id)
        self._check_team(tournament_id, team2_id)
        if team1_id is not None and team1_id == team2_id:
            raise DraftError("A match needs two different teams")

        match = Match(
            id=str(uuid.uuid4()),
            tournament_id=tournament_id,
            round=round,
            position=position,
            team1_id=team1_id,
            team2_id=team2_id,
            series_format=SeriesFormat(series_format),
            fearless_mode=fearless_mode,
            scheduled_at=scheduled_at,
        )
        self.repository.create_match(match)
        logger.info(
            f"Created {match.series_format.value} match {match.id} "
            f"(round {round}, fearless={fearless_mode})"
        )
        return match

    def list_matches(self, tournament_id: str) -> list[Match]:
        self.get_tournament(tournament_id)
        return self.repository.list_matches(tournament_id)

    def get_match(self, match_id: str) -> Match:
        match = self.repository.get_match(match_id)
        if match is None:
            raise NotFoundError("Match", match_id)
        return match

    def update_match(self, match_id: str, updates: dict[str, Any]) -> Match:
        """Update bracket fields; series scores only change through game results."""
        match = self.get_match(match_id)
        started = match.status != MatchStatus.PENDING or match.current_game > 1
        for key, value in updates.items():
            if key not in MATCH_UPDATABLE:
                continue
            if started and key in SERIES_FIELDS:
                raise InvalidTransitionError(
                    f"Cannot change {key} of match {match_id} once its series has started"
                )
            if key in ("team1_id", "team2_id"):
                self._check_team(match.tournament_id, value)
            elif key == "series_format":
                value = SeriesFormat(value)
            elif key == "status":
                value = MatchStatus(value)
            setattr(match, key, value)
        return self.repository.save_match(match)

    def delete_match(self, match_id: str) -> None:
        if not self.repository.delete_match(match_id):
            raise NotFoundError("Match", match_id)
