"""Shared request helpers: service lookup and bearer-token checks."""

from typing import Optional

from fastapi import Header, HTTPException, Request

from rift_draft.services.auth_service import AuthService
from rift_draft.services.draft_service import DraftService
from rift_draft.services.series_service import SeriesService
from rift_draft.services.tournament_service import TournamentService


def get_draft_service(request: Request) -> DraftService:
    return request.app.state.draft_service


def get_series_service(request: Request) -> SeriesService:
    return request.app.state.series_service


def get_tournament_service(request: Request) -> TournamentService:
    return request.app.state.tournament_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def require_subject(request: Request, authorization: Optional[str] = Header(default=None)) -> str:
    """Resolve the caller's subject id or reject with 401."""
    subject = get_auth_service(request).validate(bearer_token(authorization))
    if subject is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return subject


def require_admin(request: Request, authorization: Optional[str] = Header(default=None)) -> str:
    """Allow only tokens issued through admin login."""
    subject = require_subject(request, authorization)
    if not get_auth_service(request).is_admin(bearer_token(authorization)):
        raise HTTPException(status_code=403, detail="Admin access required")
    return subject
