"""Draft session state and phase models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

TeamSide = Literal["blue", "red"]

# Recorded when a side's timer runs out without a selection
EMPTY_BAN = "EMPTY_BAN"
EMPTY_PICK = "EMPTY_PICK"
SENTINELS = frozenset({EMPTY_BAN, EMPTY_PICK})

DEFAULT_TIMER = "30"


class DraftPhase(str, Enum):
    """Phases of a champion select, in the only order they may occur."""

    WAITING = "waiting"
    BAN_1 = "ban1"  # Bans 1-6
    PICK_1 = "pick1"  # Picks 1-6
    BAN_2 = "ban2"  # Bans 7-10
    PICK_2 = "pick2"  # Picks 7-10
    COMPLETED = "completed"

    @property
    def is_ban(self) -> bool:
        return self in (DraftPhase.BAN_1, DraftPhase.BAN_2)

    @property
    def is_pick(self) -> bool:
        return self in (DraftPhase.PICK_1, DraftPhase.PICK_2)


@dataclass
class DraftSession:
    """Mutable state of one draft (one game of a match, or standalone)."""

    id: str
    phase: DraftPhase = DraftPhase.WAITING
    current_team: Optional[TeamSide] = "blue"
    phase_step: int = 0
    timer: str = DEFAULT_TIMER

    blue_team_bans: list[str] = field(default_factory=list)
    red_team_bans: list[str] = field(default_factory=list)
    blue_team_picks: list[str] = field(default_factory=list)
    red_team_picks: list[str] = field(default_factory=list)
    fearless_banned_champions: list[str] = field(default_factory=list)

    # Optional linkage to a tournament match
    tournament_id: Optional[str] = None
    match_id: Optional[str] = None
    game_number: int = 1

    # Display labels, snapshotted at creation
    tournament_name: Optional[str] = None
    blue_team_name: Optional[str] = None
    red_team_name: Optional[str] = None

    # Team lobby
    blue_team_code: Optional[str] = None
    red_team_code: Optional[str] = None
    blue_team_joined: bool = False
    red_team_joined: bool = False

    created_by: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_completed(self) -> bool:
        return self.phase == DraftPhase.COMPLETED

    def bans_for(self, side: TeamSide) -> list[str]:
        return self.blue_team_bans if side == "blue" else self.red_team_bans

    def picks_for(self, side: TeamSide) -> list[str]:
        return self.blue_team_picks if side == "blue" else self.red_team_picks

    @property
    def all_picks(self) -> list[str]:
        return self.blue_team_picks + self.red_team_picks

    @property
    def unavailable_champions(self) -> set[str]:
        """Real champions already banned or picked in this draft."""
        taken = set(
            self.blue_team_bans + self.red_team_bans +
            self.blue_team_picks + self.red_team_picks
        )
        return taken - SENTINELS
