"""Tests for the HTTP API."""

import httpx
import pytest

from rift_draft.main import app, init_services
from rift_draft.repositories.draft_repository import DraftRepository
from rift_draft.services.auth_service import AuthService

pytestmark = pytest.mark.anyio

ADMIN_PASSWORD = "test-admin"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async client over a fresh in-memory repository (mimics lifespan startup)."""
    repository = DraftRepository(":memory:")
    init_services(app, repository)
    app.state.auth_service = AuthService(admin_password=ADMIN_PASSWORD)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    repository.close()


@pytest.fixture
async def admin_headers(client):
    response = await client.post("/api/auth/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def _create_started_session(client) -> str:
    response = await client.post("/api/draft-sessions", json={"blueTeamName": "T1"})
    session_id = response.json()["id"]
    await client.post(f"/api/draft-sessions/{session_id}/start")
    return session_id


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json()["status"] == "healthy"


class TestDraftSessions:
    """Tests for /api/draft-sessions."""

    async def test_create_session(self, client):
        response = await client.post("/api/draft-sessions", json={"blueTeamName": "T1"})

        assert response.status_code == 201
        data = response.json()
        assert data["phase"] == "waiting"
        assert data["timer"] == "30"
        assert data["blueTeamName"] == "T1"
        assert data["blueTeamBans"] == []
        assert len(data["blueTeamCode"]) == 8

    async def test_get_hides_team_codes(self, client):
        created = (await client.post("/api/draft-sessions", json={})).json()
        response = await client.get(f"/api/draft-sessions/{created['id']}")

        assert response.status_code == 200
        assert "blueTeamCode" not in response.json()

    async def test_get_missing(self, client):
        response = await client.get("/api/draft-sessions/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    async def test_start_and_ban(self, client):
        session_id = await _create_started_session(client)

        response = await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": "Ahri"})
        data = response.json()
        assert data["phase"] == "ban1"
        assert data["blueTeamBans"] == ["Ahri"]
        assert data["phaseStep"] == 1
        assert data["currentTeam"] == "red"

        response = await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": "Zed"})
        data = response.json()
        assert data["redTeamBans"] == ["Zed"]
        assert data["phaseStep"] == 2
        assert data["currentTeam"] == "blue"

    async def test_ban_without_champion_records_sentinel(self, client):
        session_id = await _create_started_session(client)

        response = await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": None})
        assert response.json()["blueTeamBans"] == ["EMPTY_BAN"]

        response = await client.post(f"/api/draft-sessions/{session_id}/ban")
        assert response.json()["redTeamBans"] == ["EMPTY_BAN"]

    async def test_start_twice_conflicts(self, client):
        session_id = await _create_started_session(client)
        response = await client.post(f"/api/draft-sessions/{session_id}/start")
        assert response.status_code == 409

    async def test_pick_during_ban_phase(self, client):
        session_id = await _create_started_session(client)
        response = await client.post(f"/api/draft-sessions/{session_id}/pick", json={"championId": "Ahri"})
        assert response.status_code == 409
        assert response.json()["error"] == "InvalidTransitionError"

    async def test_duplicate_ban(self, client):
        session_id = await _create_started_session(client)
        await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": "Ahri"})
        response = await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": "Ahri"})
        assert response.status_code == 422

    async def test_join(self, client):
        created = (await client.post("/api/draft-sessions", json={})).json()

        response = await client.post(
            f"/api/draft-sessions/{created['id']}/join",
            json={"teamCode": created["redTeamCode"]},
        )
        assert response.status_code == 200
        assert response.json()["team"] == "red"
        assert response.json()["session"]["redTeamJoined"] is True

        response = await client.post(
            f"/api/draft-sessions/{created['id']}/join",
            json={"teamCode": created["redTeamCode"]},
        )
        assert response.status_code == 403


class TestAuth:
    async def test_wrong_admin_password(self, client):
        response = await client.post("/api/auth/admin/login", json={"password": "nope"})
        assert response.status_code == 401

    async def test_tournament_mutation_requires_admin(self, client):
        response = await client.post("/api/tournaments", json={"name": "Worlds"})
        assert response.status_code == 401

    async def test_player_token_is_not_admin(self, client, admin_headers):
        code = (await client.post(
            "/api/auth/admin/access-codes", json={"label": "T1"}, headers=admin_headers
        )).json()

        login = await client.post("/api/auth/player/login", json={"code": code["code"]})
        assert login.status_code == 200
        player_headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = await client.post("/api/tournaments", json={"name": "Worlds"}, headers=player_headers)
        assert response.status_code == 403

        again = await client.post("/api/auth/player/login", json={"code": code["code"]})
        assert again.status_code == 401

    async def test_logout_revokes_token(self, client, admin_headers):
        response = await client.post("/api/auth/logout", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get("/api/auth/admin/access-codes", headers=admin_headers)
        assert response.status_code == 401


class TestSeriesFlow:
    """Tournament -> fearless bo3 match -> drafts -> series result."""

    async def _setup_match(self, client, headers, **match_fields):
        tournament = (await client.post(
            "/api/tournaments", json={"name": "Worlds"}, headers=headers
        )).json()
        t1 = (await client.post(
            f"/api/tournaments/{tournament['id']}/teams", json={"name": "T1"}, headers=headers
        )).json()
        gen = (await client.post(
            f"/api/tournaments/{tournament['id']}/teams", json={"name": "Gen.G"}, headers=headers
        )).json()
        response = await client.post(
            f"/api/tournaments/{tournament['id']}/matches",
            json={"round": 1, "position": 0, "team1Id": t1["id"], "team2Id": gen["id"], **match_fields},
            headers=headers,
        )
        assert response.status_code == 201
        return response.json(), t1, gen

    async def test_start_game_draft_is_idempotent(self, client, admin_headers):
        match, _, _ = await self._setup_match(client, admin_headers, seriesFormat="bo3")

        first = await client.post(f"/api/matches/{match['id']}/draft", json={"gameNumber": 2}, headers=admin_headers)
        second = await client.post(f"/api/matches/{match['id']}/draft", json={"gameNumber": 2}, headers=admin_headers)

        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert first.json()["blueTeamName"] == "T1"
        assert first.json()["redTeamName"] == "Gen.G"

    async def test_fearless_bo3(self, client, admin_headers):
        match, t1, _ = await self._setup_match(
            client, admin_headers, seriesFormat="bo3", fearlessMode=True
        )
        match_id = match["id"]

        game1 = (await client.post(f"/api/matches/{match_id}/draft", headers=admin_headers)).json()
        session_id = game1["id"]
        await client.post(f"/api/draft-sessions/{session_id}/start")
        for ban in ["B1", "B2", "B3", "B4", "B5", "B6"]:
            await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": ban})
        for pick in ["A", "F", "G", "B", "C", "H"]:
            await client.post(f"/api/draft-sessions/{session_id}/pick", json={"championId": pick})
        for ban in ["B7", "B8", "B9", "B10"]:
            await client.post(f"/api/draft-sessions/{session_id}/ban", json={"championId": ban})
        for pick in ["I", "D", "E", "J"]:
            response = await client.post(f"/api/draft-sessions/{session_id}/pick", json={"championId": pick})

        done = response.json()
        assert done["phase"] == "completed"
        assert done["currentTeam"] is None
        assert done["blueTeamPicks"] == ["A", "B", "C", "D", "E"]
        assert done["redTeamPicks"] == ["F", "G", "H", "I", "J"]

        after_game1 = await client.post(
            f"/api/matches/{match_id}/winner", json={"winnerId": t1["id"]}, headers=admin_headers
        )
        assert after_game1.json()["team1Wins"] == 1
        assert after_game1.json()["currentGame"] == 2
        assert after_game1.json()["status"] == "in_progress"

        game2 = (await client.post(f"/api/matches/{match_id}/draft", headers=admin_headers)).json()
        assert game2["gameNumber"] == 2
        assert set(game2["fearlessBannedChampions"]) >= set("ABCDEFGHIJ")

        fetched = await client.get(f"/api/matches/{match_id}/draft")
        assert fetched.json()["id"] == game2["id"]

        await client.post(f"/api/draft-sessions/{game2['id']}/start")
        for ban in ["B1", "B2", "B3", "B4", "B5", "B6"]:
            await client.post(f"/api/draft-sessions/{game2['id']}/ban", json={"championId": ban})
        rejected = await client.post(f"/api/draft-sessions/{game2['id']}/pick", json={"championId": "A"})
        assert rejected.status_code == 422
        assert rejected.json()["error"] == "FearlessBannedError"

        drafting = await client.post(
            f"/api/matches/{match_id}/winner", json={"winnerId": t1["id"]}, headers=admin_headers
        )
        assert drafting.status_code == 409
        assert drafting.json()["error"] == "InvalidTransitionError"

        for pick in ["K", "L", "M", "N", "O", "P"]:
            await client.post(f"/api/draft-sessions/{game2['id']}/pick", json={"championId": pick})
        for ban in ["B7", "B8", "B9", "B10"]:
            await client.post(f"/api/draft-sessions/{game2['id']}/ban", json={"championId": ban})
        for pick in ["Q", "R", "S", "T"]:
            response = await client.post(f"/api/draft-sessions/{game2['id']}/pick", json={"championId": pick})
        assert response.json()["phase"] == "completed"

        final = await client.post(
            f"/api/matches/{match_id}/winner", json={"winnerId": t1["id"]}, headers=admin_headers
        )
        data = final.json()
        assert data["status"] == "completed"
        assert data["winnerId"] == t1["id"]
        assert data["team1Wins"] == 2
        assert data["completedAt"] is not None

    async def test_standalone_create_for_match_gets_carryover(self, client, admin_headers):
        match, t1, _ = await self._setup_match(
            client, admin_headers, seriesFormat="bo3", fearlessMode=True
        )
        match_id = match["id"]

        created = await client.post("/api/draft-sessions", json={"matchId": match_id})
        assert created.status_code == 201
        game1 = created.json()
        assert game1["matchId"] == match_id
        assert game1["gameNumber"] == 1
        assert game1["blueTeamName"] == "T1"
        linked = await client.post(f"/api/matches/{match_id}/draft", headers=admin_headers)
        assert linked.json()["id"] == game1["id"]

        await client.post(f"/api/draft-sessions/{game1['id']}/start")
        for ban in ["B1", "B2", "B3", "B4", "B5", "B6"]:
            await client.post(f"/api/draft-sessions/{game1['id']}/ban", json={"championId": ban})
        for pick in ["A", "F", "G", "B", "C", "H"]:
            await client.post(f"/api/draft-sessions/{game1['id']}/pick", json={"championId": pick})
        for ban in ["B7", "B8", "B9", "B10"]:
            await client.post(f"/api/draft-sessions/{game1['id']}/ban", json={"championId": ban})
        for pick in ["I", "D", "E", "J"]:
            await client.post(f"/api/draft-sessions/{game1['id']}/pick", json={"championId": pick})
        await client.post(
            f"/api/matches/{match_id}/winner", json={"winnerId": t1["id"]}, headers=admin_headers
        )

        game2 = (await client.post(
            "/api/draft-sessions", json={"matchId": match_id, "gameNumber": 2}
        )).json()
        assert game2["gameNumber"] == 2
        assert set(game2["fearlessBannedChampions"]) >= set("ABCDEFGHIJ")

        await client.post(f"/api/draft-sessions/{game2['id']}/start")
        for ban in ["B1", "B2", "B3", "B4", "B5", "B6"]:
            await client.post(f"/api/draft-sessions/{game2['id']}/ban", json={"championId": ban})
        rejected = await client.post(f"/api/draft-sessions/{game2['id']}/pick", json={"championId": "A"})
        assert rejected.status_code == 422

    async def test_standalone_create_for_unknown_match(self, client):
        response = await client.post("/api/draft-sessions", json={"matchId": "missing"})
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    async def test_invalid_winner(self, client, admin_headers):
        match, _, _ = await self._setup_match(client, admin_headers)
        response = await client.post(
            f"/api/matches/{match['id']}/winner", json={"winnerId": "nobody"}, headers=admin_headers
        )
        assert response.status_code == 422
        assert response.json()["error"] == "InvalidWinnerError"

    async def test_unknown_match(self, client, admin_headers):
        response = await client.post(
            "/api/matches/missing/winner", json={"winnerId": "x"}, headers=admin_headers
        )
        assert response.status_code == 404
