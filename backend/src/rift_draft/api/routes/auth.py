"""Admin login, player access codes and logout."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Response

from rift_draft.api.dependencies import bearer_token, get_auth_service, require_admin
from rift_draft.api.routes.schemas import AccessCodeRequest, AdminLoginRequest, PlayerLoginRequest
from rift_draft.api.serializers import serialize_access_code
from rift_draft.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/admin/login")
async def admin_login(body: AdminLoginRequest, auth: AuthService = Depends(get_auth_service)):
    return {"token": auth.login_admin(body.password), "role": "admin"}


@router.post("/logout", status_code=204)
async def logout(
    authorization: Optional[str] = Header(default=None),
    auth: AuthService = Depends(get_auth_service),
):
    token = bearer_token(authorization)
    if token:
        auth.revoke(token)
    return Response(status_code=204)


@router.get("/admin/access-codes")
async def list_access_codes(
    _: str = Depends(require_admin),
    auth: AuthService = Depends(get_auth_service),
):
    return [serialize_access_code(code) for code in auth.list_access_codes()]


@router.post("/admin/access-codes", status_code=201)
async def create_access_code(
    body: AccessCodeRequest,
    _: str = Depends(require_admin),
    auth: AuthService = Depends(get_auth_service),
):
    return serialize_access_code(auth.create_access_code(body.label))


@router.post("/player/login")
async def player_login(body: PlayerLoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange a one-time access code for a player token."""
    token = auth.redeem_access_code(body.code)
    return {"token": token, "role": "player"}
