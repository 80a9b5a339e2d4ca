"""Fearless draft carryover between games of a series."""

import logging
from typing import Iterable

from rift_draft.models.draft import SENTINELS, DraftSession

logger = logging.getLogger(__name__)


def compute_fearless_bans(
    prior_sessions: Iterable[DraftSession],
    game_number: int,
    fearless_mode: bool,
) -> list[str]:
    """Champions that may not be picked in ``game_number`` of a series.

    The union of every pick from completed drafts of earlier games. Bans
    from earlier games do not carry over, and neither do timeout sentinels.

    Args:
        prior_sessions: Draft sessions belonging to the same match
        game_number: Game about to be drafted (1-based)
        fearless_mode: Whether the series uses fearless rules

    Returns:
        Sorted list of champion identifiers (empty for game 1 or non-fearless)
    """
    if not fearless_mode or game_number <= 1:
        return []

    blocked: set[str] = set()
    for session in prior_sessions:
        if session.game_number >= game_number or not session.is_completed:
            continue
        blocked.update(session.all_picks)

    blocked -= SENTINELS
    logger.info(f"Fearless carryover for game {game_number}: {len(blocked)} champions blocked")
    return sorted(blocked)
