"""Durable tracking state and the per-check result."""
from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass
class PersistedState:
    """The one record that survives restarts.

    Invariant: current_low_priority_streak <= best_low_priority_streak.
    """

    last_match_id: Optional[str] = None
    last_game_mode: Optional[int] = None
    best_low_priority_streak: int = 0
    current_low_priority_streak: int = 0

    def copy(self) -> 'PersistedState':
        return replace(self)

    def update_from(self, other: 'PersistedState') -> None:
        """Overwrite every field in place, keeping object identity."""
        self.last_match_id = other.last_match_id
        self.last_game_mode = other.last_game_mode
        self.best_low_priority_streak = other.best_low_priority_streak
        self.current_low_priority_streak = other.current_low_priority_streak

    def to_dict(self) -> dict[str, Any]:
        """On-disk shape (camelCase keys)."""
        return {
            'lastMatchId': self.last_match_id,
            'lastGameMode': self.last_game_mode,
            'bestLowPriorityStreak': self.best_low_priority_streak,
            'currentLowPriorityStreak': self.current_low_priority_streak,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'PersistedState':
        """Build from the on-disk shape; absent or invalid fields fall back to defaults."""
        last_id = data.get('lastMatchId')
        last_mode = data.get('lastGameMode')
        state = cls(
            last_match_id=None if last_id is None else str(last_id),
            last_game_mode=last_mode if isinstance(last_mode, int) and not isinstance(last_mode, bool) else None,
            best_low_priority_streak=_counter(data.get('bestLowPriorityStreak')),
            current_low_priority_streak=_counter(data.get('currentLowPriorityStreak')),
        )
        if state.current_low_priority_streak > state.best_low_priority_streak:
            state.best_low_priority_streak = state.current_low_priority_streak
        return state


def _counter(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one processed match, consumed by the embed builder."""

    new_match_found: bool = False
    status_message: Optional[str] = None
    new_record_message: Optional[str] = None
    exit_count: int = 0
    show_streaks: bool = False

    @property
    def is_new_record(self) -> bool:
        return self.new_record_message is not None
