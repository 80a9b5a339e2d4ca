"""Draft session operations: start, ban, pick and team lobby joins."""

import logging
import uuid
from typing import Callable, Optional

from rift_draft.errors import (
    ChampionUnavailableError,
    FearlessBannedError,
    InvalidTeamCodeError,
    InvalidTransitionError,
    NotFoundError,
)
from rift_draft.models.draft import (
    DEFAULT_TIMER,
    EMPTY_BAN,
    EMPTY_PICK,
    DraftPhase,
    DraftSession,
    TeamSide,
)
from rift_draft.repositories.draft_repository import DraftRepository
from rift_draft.services.locks import KeyedLocks
from rift_draft.services.phase_sequencer import next_turn, opening_turn

logger = logging.getLogger(__name__)


def _team_code() -> str:
    return uuid.uuid4().hex[:8].upper()


class DraftService:
    """Validates and applies draft actions, one session at a time."""

    def __init__(
        self,
        repository: DraftRepository,
        timer: str = DEFAULT_TIMER,
        allow_duplicates: bool = False,
    ):
        """Initialize the draft service.

        Args:
            repository: Persistence collaborator
            timer: Seconds per action, stored on every new session
            allow_duplicates: Accept champions already banned/picked in the same draft
        """
        self.repository = repository
        self.timer = timer
        self.allow_duplicates = allow_duplicates
        self.locks = KeyedLocks()

    def create_draft_session(
        self,
        *,
        tournament_id: Optional[str] = None,
        match_id: Optional[str] = None,
        game_number: int = 1,
        tournament_name: Optional[str] = None,
        blue_team_name: Optional[str] = None,
        red_team_name: Optional[str] = None,
        fearless_banned_champions: Optional[list[str]] = None,
        created_by: Optional[str] = None,
    ) -> DraftSession:
        """Create a new session in the waiting phase with empty ban/pick lists."""
        session = DraftSession(
            id=str(uuid.uuid4()),
            timer=self.timer,
            tournament_id=tournament_id,
            match_id=match_id,
            game_number=game_number,
            tournament_name=tournament_name,
            blue_team_name=blue_team_name,
            red_team_name=red_team_name,
            fearless_banned_champions=list(fearless_banned_champions or []),
            blue_team_code=_team_code(),
            red_team_code=_team_code(),
            created_by=created_by,
        )
        self.repository.create_draft_session(session)
        logger.info(f"Created draft session {session.id} (match={match_id}, game={game_number})")
        return session

    def get_draft_session(self, session_id: str) -> DraftSession:
        session = self.repository.get_draft_session(session_id)
        if session is None:
            raise NotFoundError("Draft session", session_id)
        return session

    def start_draft(self, session_id: str) -> DraftSession:
        """Move a waiting session into the first ban phase."""
        self.get_draft_session(session_id)
        with self.locks.hold(session_id):
            session = self.get_draft_session(session_id)
            if session.phase != DraftPhase.WAITING:
                raise InvalidTransitionError(
                    f"Draft {session_id} already started (phase '{session.phase.value}')"
                )

            turn = opening_turn(DraftPhase.BAN_1)
            session.phase = turn.phase
            session.phase_step = turn.step
            session.current_team = turn.team
            session.timer = self.timer
            self.repository.save_draft_session(session)

        logger.info(f"Draft {session_id} started")
        return session

    def ban_champion(self, session_id: str, champion_id: Optional[str]) -> DraftSession:
        """Record a ban for the acting team; ``None`` records ``EMPTY_BAN``."""
        return self._apply_action(
            session_id,
            champion_id or EMPTY_BAN,
            action="ban",
            allowed=lambda phase: phase.is_ban,
        )

    def pick_champion(self, session_id: str, champion_id: Optional[str]) -> DraftSession:
        """Record a pick for the acting team; ``None`` records ``EMPTY_PICK``.

        Raises:
            FearlessBannedError: If the champion was picked earlier in the series
        """
        return self._apply_action(
            session_id,
            champion_id or EMPTY_PICK,
            action="pick",
            allowed=lambda phase: phase.is_pick,
        )

    def _apply_action(
        self,
        session_id: str,
        champion_id: str,
        action: str,
        allowed: Callable[[DraftPhase], bool],
    ) -> DraftSession:
        # Locks are only taken for live sessions; completed ones are rejected up front.
        current = self.get_draft_session(session_id)
        if current.is_completed:
            self._validate_action(current, champion_id, action, allowed)
        with self.locks.hold(session_id):
            session = self.get_draft_session(session_id)
            self._validate_action(session, champion_id, action, allowed)

            side: TeamSide = session.current_team
            if action == "ban":
                session.bans_for(side).append(champion_id)
            else:
                session.picks_for(side).append(champion_id)

            previous_phase = session.phase
            turn = next_turn(session.phase, session.phase_step)
            session.phase = turn.phase
            session.phase_step = turn.step
            session.current_team = turn.team
            self.repository.save_draft_session(session)

        logger.debug(f"Draft {session_id}: {side} {action} {champion_id}")
        if session.is_completed:
            self.locks.discard(session_id)
        if session.phase != previous_phase:
            logger.info(
                f"Draft {session_id}: {previous_phase.value} -> {session.phase.value}"
            )
        return session

    def _validate_action(
        self,
        session: DraftSession,
        champion_id: str,
        action: str,
        allowed: Callable[[DraftPhase], bool],
    ) -> None:
        if not allowed(session.phase):
            logger.warning(
                f"Rejected {action} on draft {session.id} during phase '{session.phase.value}'"
            )
            raise InvalidTransitionError(
                f"Cannot {action} during phase '{session.phase.value}'"
            )

        if action == "pick" and champion_id in session.fearless_banned_champions:
            logger.warning(f"Rejected fearless-banned pick {champion_id} on draft {session.id}")
            raise FearlessBannedError(champion_id)

        if not self.allow_duplicates and champion_id in session.unavailable_champions:
            raise ChampionUnavailableError(champion_id)

    def join_draft(self, session_id: str, team_code: str) -> tuple[TeamSide, DraftSession]:
        """Claim one side of a draft with its team code.

        Returns:
            Tuple of (side joined, updated session)

        Raises:
            InvalidTeamCodeError: If the code matches neither side or the side already joined
        """
        code = team_code.strip().upper()
        self.get_draft_session(session_id)
        with self.locks.hold(session_id):
            session = self.get_draft_session(session_id)
            if code and code == session.blue_team_code:
                side: TeamSide = "blue"
                already_joined = session.blue_team_joined
                session.blue_team_joined = True
            elif code and code == session.red_team_code:
                side = "red"
                already_joined = session.red_team_joined
                session.red_team_joined = True
            else:
                raise InvalidTeamCodeError("Invalid team code")

            if already_joined:
                raise InvalidTeamCodeError(f"The {side} team has already joined this draft")
            self.repository.save_draft_session(session)

        logger.info(f"Draft {session_id}: {side} team joined")
        return side, session
