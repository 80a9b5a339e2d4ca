"""Request bodies for the HTTP API."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase JSON keys, exposes snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateDraftSessionRequest(CamelModel):
    tournament_id: Optional[str] = None
    match_id: Optional[str] = None
    # Defaults to the match's current game, or 1 without a match
    game_number: Optional[int] = Field(default=None, ge=1)
    tournament_name: Optional[str] = None
    blue_team_name: Optional[str] = None
    red_team_name: Optional[str] = None


class ChampionActionRequest(CamelModel):
    # Absent/null means the side's timer expired without a choice
    champion_id: Optional[str] = None


class JoinDraftRequest(CamelModel):
    team_code: str = Field(min_length=1)


class CreateTournamentRequest(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    format: Literal["single_elimination"] = "single_elimination"
    max_teams: int = Field(default=8, ge=2, le=64)


class UpdateTournamentRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    max_teams: Optional[int] = Field(default=None, ge=2, le=64)
    status: Optional[Literal["setup", "in_progress", "completed"]] = None


class CreateTeamRequest(CamelModel):
    name: str = Field(min_length=1)
    logo: Optional[str] = None


class CreateMatchRequest(CamelModel):
    round: int = Field(ge=1)
    position: int = Field(ge=0)
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    series_format: Literal["bo1", "bo3", "bo5"] = "bo1"
    fearless_mode: bool = False
    scheduled_at: Optional[datetime] = None


class UpdateMatchRequest(CamelModel):
    round: Optional[int] = Field(default=None, ge=1)
    position: Optional[int] = Field(default=None, ge=0)
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    series_format: Optional[Literal["bo1", "bo3", "bo5"]] = None
    fearless_mode: Optional[bool] = None
    status: Optional[Literal["pending", "in_progress", "completed"]] = None
    scheduled_at: Optional[datetime] = None


class StartGameDraftRequest(CamelModel):
    game_number: Optional[int] = Field(default=None, ge=1)


class RecordWinnerRequest(CamelModel):
    winner_id: str = Field(min_length=1)


class AdminLoginRequest(CamelModel):
    password: str


class AccessCodeRequest(CamelModel):
    label: Optional[str] = None


class PlayerLoginRequest(CamelModel):
    code: str = Field(min_length=1)
