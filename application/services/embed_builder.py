"""Builds the match announcement from a processed match."""
from typing import Optional

from config import settings
from core.logging.logger import get_logger
from domain.entities import (
    CheckResult, HeroInfo, ImageAttachment, ItemCatalog, MatchDetail,
    MatchNotification, PersistedState, PlayerPerformance,
)
from domain.interfaces import IItemImageRenderer

from .streak_tracker import STATUS_EXITED

WIN_COLOR = 0x00FF00
LOSS_COLOR = 0xFF0000
BLANK = "\u200b"
LOW_PRIORITY_HEADER = "⚠️ Low Priority"
ITEMS_IMAGE_NAME = "items.png"
MATCH_URL = "https://www.opendota.com/matches/{match_id}"


class EmbedBuilder:
    """Assembles a `MatchNotification` for one player's line in a match."""

    def __init__(
        self,
        player_name: Optional[str] = None,
        renderer: Optional[IItemImageRenderer] = None,
        cdn_base: Optional[str] = None,
    ):
        """
        Initialize embed builder.

        Args:
            player_name: name shown in the title
            renderer: optional item grid renderer; text fields are used without one
            cdn_base: Steam CDN base for hero images
        """
        self.player_name = player_name or settings.TRACKED_PLAYER_NAME
        self.renderer = renderer
        self.cdn_base = (cdn_base or settings.STEAM_CDN_BASE).rstrip("/")
        self.logger = get_logger(__name__, service="embed")

    async def build(
        self,
        match: MatchDetail,
        player: PlayerPerformance,
        heroes: dict[int, HeroInfo],
        catalog: ItemCatalog,
        result: CheckResult,
        state: PersistedState,
    ) -> MatchNotification:
        """`state` is the state after the streak update, used for the counters."""
        hero = heroes.get(player.hero_id)
        notification = MatchNotification(
            title=f"🎮 New match for {self.player_name}!",
            color=WIN_COLOR if player.win else LOSS_COLOR,
            url=MATCH_URL.format(match_id=match.match_id),
            timestamp=match.started_at,
            footer=f"Match ID: {match.match_id}",
        )

        notification.add_field("🏆 Result", "✅ Victory" if player.win else "❌ Defeat", True)
        notification.add_field("⚔️ Hero", hero.localized_name if hero and hero.localized_name else "Unknown", True)
        notification.add_field("📊 KDA", player.kda_text, True)
        notification.add_field("⏱️ Duration", match.duration_text, True)
        notification.add_field("💰 GPM", "N/A" if player.gold_per_min is None else str(player.gold_per_min), True)
        notification.add_field("📈 XPM", "N/A" if player.xp_per_min is None else str(player.xp_per_min), True)

        self._add_streak_fields(notification, result, state)

        if player.has_no_items:
            notification.add_field("😂", "**Sold or broke every single item**")

        if hero and hero.img:
            notification.thumbnail_url = f"{self.cdn_base}{hero.img}"

        await self._add_items(notification, player, catalog)
        return notification

    @staticmethod
    def _add_streak_fields(notification: MatchNotification, result: CheckResult, state: PersistedState) -> None:
        if result.status_message == STATUS_EXITED:
            notification.add_field(result.status_message, f"Matches played to leave: {result.exit_count}")
        elif result.status_message:
            value = result.status_message
            if result.new_record_message:
                value = f"{value}\n{result.new_record_message}"
            notification.add_field(LOW_PRIORITY_HEADER, value)

        if result.show_streaks:
            if not result.status_message:
                notification.add_field(LOW_PRIORITY_HEADER, BLANK)
            notification.add_field(f"Best low streak: {state.best_low_priority_streak}", BLANK)
            notification.add_field(f"Current low streak: {state.current_low_priority_streak}", BLANK)

        if result.new_record_message:
            notification.add_field(result.new_record_message, BLANK)

    async def _add_items(self, notification: MatchNotification, player: PlayerPerformance, catalog: ItemCatalog) -> None:
        inventory = self._names(player.items, catalog)
        backpack = self._names(player.backpack, catalog)
        if not inventory and not backpack:
            return

        if self.renderer is not None:
            try:
                data = await self.renderer.render(player, catalog)
            except Exception as exc:
                self.logger.error(lambda: f"item image rendering failed, using text: {exc}")
                data = None
            if data:
                notification.image = ImageAttachment(ITEMS_IMAGE_NAME, data)
                return

        if inventory:
            notification.add_field("Inventory", ", ".join(inventory))
        if backpack:
            notification.add_field("Backpack", ", ".join(backpack))

    @staticmethod
    def _names(slots: tuple[int, ...], catalog: ItemCatalog) -> list[str]:
        names = (catalog.display_name(item_id) for item_id in slots if item_id)
        return [name for name in names if name]
