"""Turn order for champion select.

Each phase has its own fixed team sequence. ``phase_step`` counts the
actions already taken in the current phase, so the acting team is always
``TURN_ORDER[phase][phase_step]``.
"""

from typing import NamedTuple, Optional

from rift_draft.models.draft import DraftPhase, TeamSide

TURN_ORDER: dict[DraftPhase, list[TeamSide]] = {
    DraftPhase.BAN_1: ["blue", "red", "blue", "red", "blue", "red"],
    DraftPhase.PICK_1: ["blue", "red", "red", "blue", "blue", "red"],
    # Phase two is opened by the side that closed phase one
    DraftPhase.BAN_2: ["red", "blue", "red", "blue"],
    DraftPhase.PICK_2: ["red", "blue", "blue", "red"],
}

NEXT_PHASE: dict[DraftPhase, DraftPhase] = {
    DraftPhase.WAITING: DraftPhase.BAN_1,
    DraftPhase.BAN_1: DraftPhase.PICK_1,
    DraftPhase.PICK_1: DraftPhase.BAN_2,
    DraftPhase.BAN_2: DraftPhase.PICK_2,
    DraftPhase.PICK_2: DraftPhase.COMPLETED,
}


class Turn(NamedTuple):
    """Position in the draft after an action: phase, step and acting team."""

    phase: DraftPhase
    step: int
    team: Optional[TeamSide]


def actions_in_phase(phase: DraftPhase) -> int:
    """Number of actions a phase holds (0 for waiting/completed)."""
    return len(TURN_ORDER.get(phase, ()))


def opening_turn(phase: DraftPhase) -> Turn:
    """First turn of a phase; completed has no acting team."""
    order = TURN_ORDER.get(phase)
    return Turn(phase, 0, order[0] if order else None)


def next_turn(phase: DraftPhase, step: int) -> Turn:
    """Turn that follows an action taken at ``step`` of ``phase``.

    Stays in the phase while actions remain, otherwise opens the next
    phase at step 0.

    Raises:
        ValueError: If ``phase`` has no actions or ``step`` is out of range.
    """
    total = actions_in_phase(phase)
    if total == 0:
        raise ValueError(f"No actions are taken during phase '{phase.value}'")
    if not 0 <= step < total:
        raise ValueError(f"Step {step} out of range for phase '{phase.value}' ({total} actions)")

    if step + 1 < total:
        return Turn(phase, step + 1, TURN_ORDER[phase][step + 1])
    return opening_turn(NEXT_PHASE[phase])
