"""Match entities returned by the match source."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .player import PlayerPerformance
from ..enums import GameMode


@dataclass(frozen=True)
class MatchSummary:
    """One row of a player's recent-matches list."""

    match_id: str
    game_mode: Optional[int] = None
    start_time: Optional[int] = None


@dataclass
class MatchDetail:
    """Represents a fully parsed match."""

    match_id: str
    duration: int     # seconds
    start_time: int   # unix seconds
    game_mode: int
    radiant_win: Optional[bool] = None
    players: list[PlayerPerformance] = field(default_factory=list)

    @property
    def started_at(self) -> datetime:
        """Get start time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.start_time, tz=timezone.utc)

    @property
    def duration_text(self) -> str:
        """Duration as MM:SS, or H:MM:SS past the hour."""
        hours, rest = divmod(max(0, self.duration), 3600)
        minutes, seconds = divmod(rest, 60)
        if hours:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def game_mode_label(self) -> str:
        return GameMode.describe(self.game_mode)

    def find_player(self, account_id: str) -> Optional[PlayerPerformance]:
        """Locate a player row by account id (compared as strings)."""
        wanted = str(account_id).strip()
        return next(
            (p for p in self.players if p.account_id is not None and str(p.account_id) == wanted),
            None,
        )
