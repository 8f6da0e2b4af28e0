"""Player row inside a match."""
from dataclasses import dataclass, field
from typing import Optional

INVENTORY_SLOTS = 6
BACKPACK_SLOTS = 3


@dataclass
class PlayerPerformance:
    """Represents one player's line in a match."""

    account_id: Optional[int]  # None for anonymous profiles
    hero_id: int
    win: bool
    kills: int
    deaths: int
    assists: int
    gold_per_min: Optional[int] = None
    xp_per_min: Optional[int] = None

    # Item ids, 0 = empty slot
    items: tuple[int, ...] = field(default=(0,) * INVENTORY_SLOTS)
    backpack: tuple[int, ...] = field(default=(0,) * BACKPACK_SLOTS)

    @property
    def kda_text(self) -> str:
        return f"{self.kills}/{self.deaths}/{self.assists}"

    @property
    def inventory_ids(self) -> tuple[int, ...]:
        """Item ids of the six inventory slots then the backpack, in grid order."""
        return tuple(self.items) + tuple(self.backpack)

    @property
    def has_no_items(self) -> bool:
        """True when every inventory and backpack slot is empty."""
        return all(item == 0 for item in self.inventory_ids)
