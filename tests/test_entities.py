"""
Tests for match entities and the item catalog.
"""

from __future__ import annotations

from domain.entities import ItemCatalog, ItemInfo, PlayerPerformance


def _catalog() -> ItemCatalog:
    return ItemCatalog(
        item_ids={1: "blink", 2: "tango", 3: "ghost"},
        items={
            "blink": ItemInfo("blink", "Blink Dagger", "/apps/dota2/images/dota_react/items/blink.png?t=1"),
            "tango": ItemInfo("tango", "Tango"),
        },
    )


def test_inventory_ids_list_inventory_then_backpack() -> None:
    player = PlayerPerformance(
        account_id=1, hero_id=1, win=True, kills=0, deaths=0, assists=0,
        items=(1, 0, 2, 0, 0, 0), backpack=(0, 0, 3),
    )
    assert player.inventory_ids == (1, 0, 2, 0, 0, 0, 0, 0, 3)
    assert player.has_no_items is False


def test_player_without_items() -> None:
    player = PlayerPerformance(account_id=1, hero_id=1, win=False, kills=0, deaths=5, assists=1)
    assert player.inventory_ids == (0,) * 9
    assert player.has_no_items is True
    assert player.kda_text == "0/5/1"


def test_catalog_resolves_names_and_image_paths() -> None:
    catalog = _catalog()
    assert catalog.display_name(1) == "Blink Dagger"
    assert catalog.image_path(1) == "/apps/dota2/images/dota_react/items/blink.png?t=1"
    assert catalog.image_path(2) is None


def test_catalog_unknown_and_empty_slots() -> None:
    catalog = _catalog()
    assert catalog.image_path(0) is None
    assert catalog.image_path(99) is None
    assert catalog.display_name(3) is None
