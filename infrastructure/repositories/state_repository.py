"""JSON file store for the tracking state."""
import json
import os
import tempfile
from pathlib import Path

from core.logging.logger import get_logger
from domain.entities import PersistedState
from domain.errors import PersistenceError
from domain.interfaces import IStateStore

logger = get_logger(__name__, service="state")


class JsonStateStore(IStateStore):
    """Single JSON record, rewritten whole after every state-changing check."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> PersistedState:
        """Load the record; a missing or corrupt file means a fresh start."""
        if not self.path.exists():
            logger.info(lambda: f"no state file at {self.path}, starting fresh")
            return PersistedState()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise PersistenceError(f"expected a JSON object, got {type(raw).__name__}")
            return PersistedState.from_dict(raw)
        except (OSError, ValueError, PersistenceError) as exc:
            logger.error(lambda: f"could not read state, starting fresh: {exc}")
            return PersistedState()

    def save(self, state: PersistedState) -> bool:
        """Write the full record via a temp file + rename; failures are logged, not raised."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(state.to_dict(), fh, indent=2)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            logger.error(lambda: f"could not save state to {self.path}: {exc}")
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        logger.info(
            lambda: (
                f"state saved: lastMatchId={state.last_match_id} "
                f"bestStreak={state.best_low_priority_streak} "
                f"currentStreak={state.current_low_priority_streak}"
            )
        )
        return True
