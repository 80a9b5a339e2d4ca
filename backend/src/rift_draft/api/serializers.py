"""Model -> JSON dict conversion with the camelCase field names clients use."""

from datetime import datetime
from typing import Optional

from rift_draft.models.draft import DraftSession
from rift_draft.models.tournament import Match, Team, Tournament
from rift_draft.services.auth_service import AccessCode


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_draft_session(session: DraftSession, include_codes: bool = False) -> dict:
    """Serialize DraftSession to dict.

    Team codes are secrets handed to each side, so they are only included
    for the session's creator.
    """
    data = {
        "id": session.id,
        "phase": session.phase.value,
        "currentTeam": session.current_team,
        "phaseStep": session.phase_step,
        "timer": session.timer,
        "blueTeamBans": session.blue_team_bans,
        "redTeamBans": session.red_team_bans,
        "blueTeamPicks": session.blue_team_picks,
        "redTeamPicks": session.red_team_picks,
        "fearlessBannedChampions": session.fearless_banned_champions,
        "tournamentId": session.tournament_id,
        "matchId": session.match_id,
        "gameNumber": session.game_number,
        "tournamentName": session.tournament_name,
        "blueTeamName": session.blue_team_name,
        "redTeamName": session.red_team_name,
        "blueTeamJoined": session.blue_team_joined,
        "redTeamJoined": session.red_team_joined,
        "createdAt": _iso(session.created_at),
    }
    if include_codes:
        data["blueTeamCode"] = session.blue_team_code
        data["redTeamCode"] = session.red_team_code
    return data


def serialize_tournament(tournament: Tournament) -> dict:
    return {
        "id": tournament.id,
        "name": tournament.name,
        "description": tournament.description,
        "format": tournament.format,
        "maxTeams": tournament.max_teams,
        "status": tournament.status.value,
        "createdBy": tournament.created_by,
        "createdAt": _iso(tournament.created_at),
        "updatedAt": _iso(tournament.updated_at),
    }


def serialize_team(team: Team) -> dict:
    return {
        "id": team.id,
        "name": team.name,
        "logo": team.logo,
        "tournamentId": team.tournament_id,
        "createdAt": _iso(team.created_at),
    }


def serialize_match(match: Match) -> dict:
    return {
        "id": match.id,
        "tournamentId": match.tournament_id,
        "team1Id": match.team1_id,
        "team2Id": match.team2_id,
        "winnerId": match.winner_id,
        "round": match.round,
        "position": match.position,
        "status": match.status.value,
        "seriesFormat": match.series_format.value,
        "fearlessMode": match.fearless_mode,
        "team1Wins": match.team1_wins,
        "team2Wins": match.team2_wins,
        "currentGame": match.current_game,
        "scheduledAt": _iso(match.scheduled_at),
        "completedAt": _iso(match.completed_at),
        "createdAt": _iso(match.created_at),
    }


def serialize_access_code(access_code: AccessCode) -> dict:
    return {
        "id": access_code.id,
        "code": access_code.code,
        "label": access_code.label,
        "isUsed": access_code.is_used,
        "createdAt": datetime.fromtimestamp(access_code.created_at).isoformat(),
        "usedAt": (
            datetime.fromtimestamp(access_code.used_at).isoformat()
            if access_code.used_at is not None
            else None
        ),
    }
