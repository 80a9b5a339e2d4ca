"""REST endpoints for champion select sessions."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from rift_draft.api.dependencies import (
    bearer_token,
    get_auth_service,
    get_draft_service,
    get_series_service,
)
from rift_draft.api.routes.schemas import (
    ChampionActionRequest,
    CreateDraftSessionRequest,
    JoinDraftRequest,
)
from rift_draft.api.serializers import serialize_draft_session
from rift_draft.services.draft_service import DraftService
from rift_draft.services.series_service import SeriesService

router = APIRouter(prefix="/api/draft-sessions", tags=["drafts"])


@router.post("", status_code=201)
async def create_draft_session(
    request: Request,
    body: CreateDraftSessionRequest,
    authorization: Optional[str] = Header(default=None),
    service: DraftService = Depends(get_draft_service),
    series: SeriesService = Depends(get_series_service),
):
    """Create a draft in the waiting phase.

    A body naming a match goes through the series so the game gets its
    fearless carryover and an existing draft for that game is reused.
    """
    created_by = get_auth_service(request).validate(bearer_token(authorization))
    if body.match_id:
        session = series.start_game_draft(body.match_id, body.game_number, created_by=created_by)
        return serialize_draft_session(session, include_codes=True)

    session = service.create_draft_session(
        tournament_id=body.tournament_id,
        game_number=body.game_number or 1,
        tournament_name=body.tournament_name,
        blue_team_name=body.blue_team_name,
        red_team_name=body.red_team_name,
        created_by=created_by,
    )
    return serialize_draft_session(session, include_codes=True)


@router.get("/{session_id}")
async def get_draft_session(session_id: str, service: DraftService = Depends(get_draft_service)):
    """Get current draft state."""
    return serialize_draft_session(service.get_draft_session(session_id))


@router.post("/{session_id}/start")
async def start_draft(session_id: str, service: DraftService = Depends(get_draft_service)):
    """Open the first ban phase."""
    return serialize_draft_session(service.start_draft(session_id))


@router.post("/{session_id}/ban")
async def ban_champion(
    session_id: str,
    body: Optional[ChampionActionRequest] = None,
    service: DraftService = Depends(get_draft_service),
):
    """Ban for the team whose turn it is."""
    return serialize_draft_session(service.ban_champion(session_id, body.champion_id if body else None))


@router.post("/{session_id}/pick")
async def pick_champion(
    session_id: str,
    body: Optional[ChampionActionRequest] = None,
    service: DraftService = Depends(get_draft_service),
):
    """Pick for the team whose turn it is."""
    return serialize_draft_session(service.pick_champion(session_id, body.champion_id if body else None))


@router.post("/{session_id}/join")
async def join_draft(
    session_id: str,
    body: JoinDraftRequest,
    service: DraftService = Depends(get_draft_service),
):
    """Claim a side of the draft with its team code."""
    side, session = service.join_draft(session_id, body.team_code)
    return {"team": side, "session": serialize_draft_session(session)}
