"""Hero and item constant tables."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class HeroInfo:
    hero_id: int
    localized_name: str
    img: Optional[str] = None  # CDN-relative path


@dataclass(frozen=True)
class ItemInfo:
    key: str
    dname: Optional[str] = None
    img: Optional[str] = None


@dataclass
class ItemCatalog:
    """Joins `/constants/item_ids` (id -> key) with `/constants/items` (key -> info)."""

    item_ids: dict[int, str] = field(default_factory=dict)
    items: dict[str, ItemInfo] = field(default_factory=dict)

    def lookup(self, item_id: int) -> Optional[ItemInfo]:
        if not item_id:
            return None
        key = self.item_ids.get(item_id)
        return self.items.get(key) if key else None

    def display_name(self, item_id: int) -> Optional[str]:
        info = self.lookup(item_id)
        return info.dname if info else None

    def image_path(self, item_id: int) -> Optional[str]:
        """CDN-relative image path, for drawing the item grid."""
        info = self.lookup(item_id)
        return info.img if info else None
