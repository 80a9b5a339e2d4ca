"""DuckDB-backed persistence for drafts, tournaments, teams and matches."""

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import duckdb
import pandas as pd

from rift_draft.models.draft import DraftPhase, DraftSession
from rift_draft.models.tournament import (
    Match,
    MatchStatus,
    SeriesFormat,
    Team,
    Tournament,
    TournamentStatus,
)

logger = logging.getLogger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS tournaments (
        id VARCHAR PRIMARY KEY,
        name VARCHAR NOT NULL,
        description VARCHAR,
        "format" VARCHAR NOT NULL,
        max_teams INTEGER NOT NULL,
        status VARCHAR NOT NULL,
        created_by VARCHAR,
        created_at VARCHAR NOT NULL,
        updated_at VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS teams (
        id VARCHAR PRIMARY KEY,
        name VARCHAR NOT NULL,
        tournament_id VARCHAR NOT NULL,
        logo VARCHAR,
        created_at VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS matches (
        id VARCHAR PRIMARY KEY,
        tournament_id VARCHAR NOT NULL,
        "round" INTEGER NOT NULL,
        "position" INTEGER NOT NULL,
        team1_id VARCHAR,
        team2_id VARCHAR,
        winner_id VARCHAR,
        status VARCHAR NOT NULL,
        series_format VARCHAR NOT NULL,
        fearless_mode BOOLEAN NOT NULL,
        team1_wins INTEGER NOT NULL,
        team2_wins INTEGER NOT NULL,
        current_game INTEGER NOT NULL,
        scheduled_at VARCHAR,
        completed_at VARCHAR,
        created_at VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS draft_sessions (
        id VARCHAR PRIMARY KEY,
        phase VARCHAR NOT NULL,
        current_team VARCHAR,
        phase_step INTEGER NOT NULL,
        timer VARCHAR NOT NULL,
        blue_team_bans VARCHAR NOT NULL,
        red_team_bans VARCHAR NOT NULL,
        blue_team_picks VARCHAR NOT NULL,
        red_team_picks VARCHAR NOT NULL,
        fearless_banned_champions VARCHAR NOT NULL,
        tournament_id VARCHAR,
        match_id VARCHAR,
        game_number INTEGER NOT NULL,
        tournament_name VARCHAR,
        blue_team_name VARCHAR,
        red_team_name VARCHAR,
        blue_team_code VARCHAR,
        red_team_code VARCHAR,
        blue_team_joined BOOLEAN NOT NULL,
        red_team_joined BOOLEAN NOT NULL,
        created_by VARCHAR,
        created_at VARCHAR NOT NULL
    )
    """,
]

# List-valued draft columns, stored as JSON text
_LIST_COLUMNS = (
    "blue_team_bans",
    "red_team_bans",
    "blue_team_picks",
    "red_team_picks",
    "fearless_banned_champions",
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class DraftRepository:
    """Data access layer over a single DuckDB connection.

    DuckDB connections are not safe to share between threads, so every
    statement runs under ``self._lock``.
    """

    def __init__(self, database_path: str = ":memory:"):
        """Open (or create) the database and ensure the schema exists.

        Args:
            database_path: Path to a DuckDB file, or ":memory:"
        """
        self._db_path = database_path
        if database_path != ":memory:":
            Path(database_path).parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.Lock()
        self._conn = duckdb.connect(database_path)
        with self._lock:
            for ddl in SCHEMA:
                self._conn.execute(ddl)
        logger.info(f"DraftRepository: Using {database_path}")

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------

    def _execute(self, sql: str, params: Optional[list[Any]] = None) -> None:
        with self._lock:
            self._conn.execute(sql, params or [])

    def _query(self, sql: str, params: Optional[list[Any]] = None) -> list[dict]:
        """Execute query and return list of dicts with native Python values."""
        with self._lock:
            df = self._conn.execute(sql, params or []).df()

        # to_dict boxes numpy scalars; NULLs surface as NaN/None and map to None
        return [
            {col: (None if pd.isna(value) else value) for col, value in record.items()}
            for record in df.to_dict(orient="records")
        ]

    def _insert(self, table: str, row: dict) -> None:
        columns = ", ".join(f'"{col}"' for col in row)
        placeholders = ", ".join("?" for _ in row)
        self._execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )

    def _update(self, table: str, row: dict) -> None:
        values = {k: v for k, v in row.items() if k != "id"}
        assignments = ", ".join(f'"{col}" = ?' for col in values)
        self._execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            [*values.values(), row["id"]],
        )

    def _exists(self, table: str, entity_id: str) -> bool:
        rows = self._query(f"SELECT id FROM {table} WHERE id = ?", [entity_id])
        return bool(rows)

    def _delete(self, table: str, entity_id: str) -> bool:
        if not self._exists(table, entity_id):
            return False
        self._execute(f"DELETE FROM {table} WHERE id = ?", [entity_id])
        return True

    # ------------------------------------------------------------------
    # Draft sessions
    # ------------------------------------------------------------------

    @staticmethod
    def _session_to_row(session: DraftSession) -> dict:
        row = {
            "id": session.id,
            "phase": session.phase.value,
            "current_team": session.current_team,
            "phase_step": session.phase_step,
            "timer": session.timer,
            "tournament_id": session.tournament_id,
            "match_id": session.match_id,
            "game_number": session.game_number,
            "tournament_name": session.tournament_name,
            "blue_team_name": session.blue_team_name,
            "red_team_name": session.red_team_name,
            "blue_team_code": session.blue_team_code,
            "red_team_code": session.red_team_code,
            "blue_team_joined": session.blue_team_joined,
            "red_team_joined": session.red_team_joined,
            "created_by": session.created_by,
            "created_at": _iso(session.created_at),
        }
        for col in _LIST_COLUMNS:
            row[col] = json.dumps(getattr(session, col))
        return row

    @staticmethod
    def _row_to_session(row: dict) -> DraftSession:
        values = dict(row)
        for col in _LIST_COLUMNS:
            values[col] = json.loads(values[col])
        values["phase"] = DraftPhase(values["phase"])
        values["created_at"] = _parse_dt(values["created_at"])
        return DraftSession(**values)

    def create_draft_session(self, session: DraftSession) -> DraftSession:
        self._insert("draft_sessions", self._session_to_row(session))
        return session

    def save_draft_session(self, session: DraftSession) -> DraftSession:
        self._update("draft_sessions", self._session_to_row(session))
        return session

    def get_draft_session(self, session_id: str) -> DraftSession | None:
        rows = self._query("SELECT * FROM draft_sessions WHERE id = ?", [session_id])
        return self._row_to_session(rows[0]) if rows else None

    def get_draft_session_for_game(self, match_id: str, game_number: int) -> DraftSession | None:
        rows = self._query(
            """
            SELECT * FROM draft_sessions
            WHERE match_id = ? AND game_number = ?
            ORDER BY created_at
            LIMIT 1
            """,
            [match_id, game_number],
        )
        return self._row_to_session(rows[0]) if rows else None

    def list_draft_sessions_for_match(self, match_id: str) -> list[DraftSession]:
        rows = self._query(
            "SELECT * FROM draft_sessions WHERE match_id = ? ORDER BY game_number",
            [match_id],
        )
        return [self._row_to_session(row) for row in rows]

    # ------------------------------------------------------------------
    # Tournaments
    # ------------------------------------------------------------------

    @staticmethod
    def _tournament_to_row(tournament: Tournament) -> dict:
        return {
            "id": tournament.id,
            "name": tournament.name,
            "description": tournament.description,
            "format": tournament.format,
            "max_teams": tournament.max_teams,
            "status": tournament.status.value,
            "created_by": tournament.created_by,
            "created_at": _iso(tournament.created_at),
            "updated_at": _iso(tournament.updated_at),
        }

    @staticmethod
    def _row_to_tournament(row: dict) -> Tournament:
        values = dict(row)
        values["status"] = TournamentStatus(values["status"])
        values["created_at"] = _parse_dt(values["created_at"])
        values["updated_at"] = _parse_dt(values["updated_at"])
        return Tournament(**values)

    def create_tournament(self, tournament: Tournament) -> Tournament:
        self._insert("tournaments", self._tournament_to_row(tournament))
        return tournament

    def save_tournament(self, tournament: Tournament) -> Tournament:
        self._update("tournaments", self._tournament_to_row(tournament))
        return tournament

    def get_tournament(self, tournament_id: str) -> Tournament | None:
        rows = self._query("SELECT * FROM tournaments WHERE id = ?", [tournament_id])
        return self._row_to_tournament(rows[0]) if rows else None

    def list_tournaments(self) -> list[Tournament]:
        rows = self._query("SELECT * FROM tournaments ORDER BY created_at DESC, rowid DESC")
        return [self._row_to_tournament(row) for row in rows]

    def delete_tournament(self, tournament_id: str) -> bool:
        """Delete a tournament together with its teams and matches."""
        if not self._exists("tournaments", tournament_id):
            return False
        self._execute("DELETE FROM matches WHERE tournament_id = ?", [tournament_id])
        self._execute("DELETE FROM teams WHERE tournament_id = ?", [tournament_id])
        self._execute("DELETE FROM tournaments WHERE id = ?", [tournament_id])
        return True

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    @staticmethod
    def _team_to_row(team: Team) -> dict:
        return {
            "id": team.id,
            "name": team.name,
            "tournament_id": team.tournament_id,
            "logo": team.logo,
            "created_at": _iso(team.created_at),
        }

    @staticmethod
    def _row_to_team(row: dict) -> Team:
        values = dict(row)
        values["created_at"] = _parse_dt(values["created_at"])
        return Team(**values)

    def create_team(self, team: Team) -> Team:
        self._insert("teams", self._team_to_row(team))
        return team

    def get_team(self, team_id: str) -> Team | None:
        rows = self._query("SELECT * FROM teams WHERE id = ?", [team_id])
        return self._row_to_team(rows[0]) if rows else None

    def list_teams(self, tournament_id: str) -> list[Team]:
        rows = self._query(
            "SELECT * FROM teams WHERE tournament_id = ? ORDER BY created_at, rowid",
            [tournament_id],
        )
        return [self._row_to_team(row) for row in rows]

    def delete_team(self, team_id: str) -> bool:
        return self._delete("teams", team_id)

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    @staticmethod
    def _match_to_row(match: Match) -> dict:
        return {
            "id": match.id,
            "tournament_id": match.tournament_id,
            "round": match.round,
            "position": match.position,
            "team1_id": match.team1_id,
            "team2_id": match.team2_id,
            "winner_id": match.winner_id,
            "status": match.status.value,
            "series_format": match.series_format.value,
            "fearless_mode": match.fearless_mode,
            "team1_wins": match.team1_wins,
            "team2_wins": match.team2_wins,
            "current_game": match.current_game,
            "scheduled_at": _iso(match.scheduled_at),
            "completed_at": _iso(match.completed_at),
            "created_at": _iso(match.created_at),
        }

    @staticmethod
    def _row_to_match(row: dict) -> Match:
        values = dict(row)
        values["status"] = MatchStatus(values["status"])
        values["series_format"] = SeriesFormat(values["series_format"])
        for col in ("scheduled_at", "completed_at", "created_at"):
            values[col] = _parse_dt(values[col])
        return Match(**values)

    def create_match(self, match: Match) -> Match:
        self._insert("matches", self._match_to_row(match))
        return match

    def save_match(self, match: Match) -> Match:
        self._update("matches", self._match_to_row(match))
        return match

    def get_match(self, match_id: str) -> Match | None:
        rows = self._query("SELECT * FROM matches WHERE id = ?", [match_id])
        return self._row_to_match(rows[0]) if rows else None

    def list_matches(self, tournament_id: str) -> list[Match]:
        rows = self._query(
            'SELECT * FROM matches WHERE tournament_id = ? ORDER BY "round", "position"',
            [tournament_id],
        )
        return [self._row_to_match(row) for row in rows]

    def delete_match(self, match_id: str) -> bool:
        return self._delete("matches", match_id)
