"""Dota 2 game mode codes as reported by OpenDota."""
from enum import IntEnum
from typing import Optional


class GameMode(IntEnum):
    """Subset of `game_mode` values seen in public matchmaking."""

    UNKNOWN = 0
    ALL_PICK = 1
    CAPTAINS_MODE = 2
    RANDOM_DRAFT = 3
    SINGLE_DRAFT = 4  # the only mode available while in low priority
    ALL_RANDOM = 5
    LEAST_PLAYED = 12
    CAPTAINS_DRAFT = 16
    ABILITY_DRAFT = 18
    ALL_RANDOM_DEATHMATCH = 20
    ONE_V_ONE_MID = 21
    ALL_DRAFT = 22  # Ranked All Pick
    TURBO = 23

    @property
    def label(self) -> str:
        """Get human-readable mode name."""
        if self == GameMode.ALL_DRAFT:
            return "Ranked All Pick"
        if self == GameMode.ONE_V_ONE_MID:
            return "1v1 Mid"
        return self.name.replace('_', ' ').title()

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional['GameMode']:
        """Map a raw code to a member, or None for codes not listed here."""
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def describe(cls, code: Optional[int]) -> str:
        """Label for logging; raw code when unknown."""
        mode = cls.from_code(code)
        if mode is not None:
            return mode.label
        return 'none' if code is None else f"mode {code}"
