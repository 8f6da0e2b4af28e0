"""Mutable context shared by every check in the process."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from domain.entities import PersistedState

from .timers import DeferredTimer


@dataclass
class CheckContext:
    """Single owner of the tracking state, the single-flight flag and the resume timer."""

    state: PersistedState = field(default_factory=PersistedState)
    checking: bool = False
    resume_timer: Optional[DeferredTimer] = None
    last_check_at: Optional[datetime] = None
    check_count: int = 0

    def try_acquire(self) -> bool:
        """Take the single-flight flag; False when a check is already running."""
        if self.checking:
            return False
        self.checking = True
        self.check_count += 1
        return True

    def release(self) -> None:
        self.checking = False

    @property
    def waiting_for_rate_limit(self) -> bool:
        return self.resume_timer is not None and self.resume_timer.pending

    def snapshot(self, *, connected: bool = False) -> dict[str, Any]:
        """Bot section of the status document."""
        return {
            'status': 'running',
            'connected': connected,
            'lastCheck': self.last_check_at.isoformat() if self.last_check_at else None,
            'lastMatchId': self.state.last_match_id,
            'lastGameMode': self.state.last_game_mode,
            'bestLowPriorityStreak': self.state.best_low_priority_streak,
            'currentLowPriorityStreak': self.state.current_low_priority_streak,
            'isChecking': self.checking,
            'waitingForRateLimit': self.waiting_for_rate_limit,
        }
