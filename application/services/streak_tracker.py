"""Low priority streak state machine.

A streak is the number of consecutive most-recent matches played in the
penalty queue. Transitions are derived from the game mode of the previous
processed match and the one being processed now; nothing here depends on
time, so equal inputs always produce equal results.
"""
from typing import Optional

from domain.entities import CheckResult, PersistedState
from domain.enums import GameMode

LOW_PRIORITY_MODE = int(GameMode.SINGLE_DRAFT)

STATUS_ENTERED = "entered penalty queue"
STATUS_EXITED = "exited penalty queue"
NEW_RECORD = "new low priority streak record"


def _raise_best(state: PersistedState) -> bool:
    """Lift best to current when exceeded; True when a record was set."""
    if state.current_low_priority_streak > state.best_low_priority_streak:
        state.best_low_priority_streak = state.current_low_priority_streak
        return True
    return False


def derive_streak(
    current_game_mode: Optional[int],
    previous_game_mode: Optional[int],
    state: PersistedState,
    *,
    low_priority_mode: int = LOW_PRIORITY_MODE,
) -> CheckResult:
    """Apply one match to the streak counters in `state` and describe the transition.

    Only the two streak counters are touched; the caller records
    `last_game_mode` afterwards.
    """
    is_low = current_game_mode == low_priority_mode
    was_low = previous_game_mode == low_priority_mode

    if was_low and is_low:
        state.current_low_priority_streak += 1
        record = _raise_best(state)
        return CheckResult(new_record_message=NEW_RECORD if record else None, show_streaks=True)

    # entering covers an unknown previous mode too (first match ever seen)
    if is_low:
        state.current_low_priority_streak = 1
        record = _raise_best(state)
        return CheckResult(
            status_message=STATUS_ENTERED,
            new_record_message=NEW_RECORD if record else None,
            show_streaks=True,
        )

    if was_low:
        exit_count = state.current_low_priority_streak
        _raise_best(state)
        state.current_low_priority_streak = 0
        return CheckResult(status_message=STATUS_EXITED, exit_count=exit_count)

    return CheckResult()
