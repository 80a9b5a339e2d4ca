"""Tournament, team and best-of-N match models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TournamentStatus(str, Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MatchStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SeriesFormat(str, Enum):
    """Best-of-N series formats."""

    BO1 = "bo1"
    BO3 = "bo3"
    BO5 = "bo5"

    @property
    def max_games(self) -> int:
        return {"bo1": 1, "bo3": 3, "bo5": 5}[self.value]

    @property
    def wins_needed(self) -> int:
        return (self.max_games // 2) + 1


@dataclass
class Tournament:
    id: str
    name: str
    description: Optional[str] = None
    format: str = "single_elimination"
    max_teams: int = 8
    status: TournamentStatus = TournamentStatus.SETUP
    created_by: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class Team:
    id: str
    name: str
    tournament_id: str
    logo: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class Match:
    """One bracket slot between two teams, played as a best-of-N series."""

    id: str
    tournament_id: str
    round: int
    position: int
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    winner_id: Optional[str] = None
    status: MatchStatus = MatchStatus.PENDING
    series_format: SeriesFormat = SeriesFormat.BO1
    fearless_mode: bool = False
    team1_wins: int = 0
    team2_wins: int = 0
    current_game: int = 1
    scheduled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED
