"""REST endpoints for tournaments, teams and best-of-N matches."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from rift_draft.api.dependencies import (
    get_series_service,
    get_tournament_service,
    require_admin,
)
from rift_draft.api.routes.schemas import (
    CreateMatchRequest,
    CreateTeamRequest,
    CreateTournamentRequest,
    RecordWinnerRequest,
    StartGameDraftRequest,
    UpdateMatchRequest,
    UpdateTournamentRequest,
)
from rift_draft.api.serializers import (
    serialize_draft_session,
    serialize_match,
    serialize_team,
    serialize_tournament,
)
from rift_draft.services.series_service import SeriesService
from rift_draft.services.tournament_service import TournamentService

router = APIRouter(prefix="/api", tags=["tournaments"])


# Tournaments

@router.get("/tournaments")
async def list_tournaments(service: TournamentService = Depends(get_tournament_service)):
    return [serialize_tournament(t) for t in service.list_tournaments()]


@router.post("/tournaments", status_code=201)
async def create_tournament(
    body: CreateTournamentRequest,
    admin: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    tournament = service.create_tournament(
        name=body.name,
        description=body.description,
        format=body.format,
        max_teams=body.max_teams,
        created_by=admin,
    )
    return serialize_tournament(tournament)


@router.get("/tournaments/{tournament_id}")
async def get_tournament(
    tournament_id: str,
    service: TournamentService = Depends(get_tournament_service),
):
    return serialize_tournament(service.get_tournament(tournament_id))


@router.patch("/tournaments/{tournament_id}")
async def update_tournament(
    tournament_id: str,
    body: UpdateTournamentRequest,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    updates = body.model_dump(exclude_unset=True)
    return serialize_tournament(service.update_tournament(tournament_id, updates))


@router.delete("/tournaments/{tournament_id}", status_code=204)
async def delete_tournament(
    tournament_id: str,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    service.delete_tournament(tournament_id)
    return Response(status_code=204)


# Teams

@router.get("/tournaments/{tournament_id}/teams")
async def list_teams(
    tournament_id: str,
    service: TournamentService = Depends(get_tournament_service),
):
    return [serialize_team(t) for t in service.list_teams(tournament_id)]


@router.post("/tournaments/{tournament_id}/teams", status_code=201)
async def add_team(
    tournament_id: str,
    body: CreateTeamRequest,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    return serialize_team(service.add_team(tournament_id, body.name, body.logo))


@router.delete("/teams/{team_id}", status_code=204)
async def delete_team(
    team_id: str,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    service.delete_team(team_id)
    return Response(status_code=204)


# Matches

@router.get("/tournaments/{tournament_id}/matches")
async def list_matches(
    tournament_id: str,
    service: TournamentService = Depends(get_tournament_service),
):
    return [serialize_match(m) for m in service.list_matches(tournament_id)]


@router.post("/tournaments/{tournament_id}/matches", status_code=201)
async def create_match(
    tournament_id: str,
    body: CreateMatchRequest,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    match = service.create_match(
        tournament_id=tournament_id,
        round=body.round,
        position=body.position,
        team1_id=body.team1_id,
        team2_id=body.team2_id,
        series_format=body.series_format,
        fearless_mode=body.fearless_mode,
        scheduled_at=body.scheduled_at,
    )
    return serialize_match(match)


@router.get("/matches/{match_id}")
async def get_match(match_id: str, service: TournamentService = Depends(get_tournament_service)):
    return serialize_match(service.get_match(match_id))


@router.patch("/matches/{match_id}")
async def update_match(
    match_id: str,
    body: UpdateMatchRequest,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    updates = body.model_dump(exclude_unset=True)
    return serialize_match(service.update_match(match_id, updates))


@router.delete("/matches/{match_id}", status_code=204)
async def delete_match(
    match_id: str,
    _: str = Depends(require_admin),
    service: TournamentService = Depends(get_tournament_service),
):
    service.delete_match(match_id)
    return Response(status_code=204)


@router.post("/matches/{match_id}/draft")
async def start_game_draft(
    match_id: str,
    body: Optional[StartGameDraftRequest] = None,
    admin: str = Depends(require_admin),
    series: SeriesService = Depends(get_series_service),
):
    """Get or create the draft for a game of the series."""
    game_number = body.game_number if body else None
    session = series.start_game_draft(match_id, game_number, created_by=admin)
    return serialize_draft_session(session, include_codes=True)


@router.get("/matches/{match_id}/draft")
async def get_game_draft(
    match_id: str,
    game_number: Optional[int] = None,
    series: SeriesService = Depends(get_series_service),
):
    """Draft for a game of the series (defaults to the current game)."""
    return serialize_draft_session(series.get_game_draft(match_id, game_number))


@router.post("/matches/{match_id}/winner")
async def record_game_winner(
    match_id: str,
    body: RecordWinnerRequest,
    _: str = Depends(require_admin),
    series: SeriesService = Depends(get_series_service),
):
    """Records the current game's winner and advances the series."""
    return serialize_match(series.record_game_winner(match_id, body.winner_id))
