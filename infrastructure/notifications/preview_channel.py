"""Console preview of a notification, used for manual verification."""
from domain.entities import MatchNotification
from domain.interfaces import INotificationChannel
from core.logging.logger import get_logger

_RULE = "═" * 32


class PreviewChannel(INotificationChannel):
    """Logs what would be posted instead of posting it."""

    def __init__(self, win_color: int = 0x00FF00) -> None:
        self.win_color = win_color
        self.logger = get_logger(__name__, service="preview")

    def render(self, notification: MatchNotification) -> list[str]:
        outcome = "green (win)" if notification.color == self.win_color else "red (loss)"
        lines = [
            _RULE,
            f"Title: {notification.title}",
            f"Color: {outcome}",
            f"URL: {notification.url}",
        ]
        lines += [f"• {f.name}: {f.value}" for f in notification.fields]
        lines += [
            f"Thumbnail: {notification.thumbnail_url or 'none'}",
            f"Item image: {'yes' if notification.image else 'no'}",
            _RULE,
        ]
        return lines

    async def send(self, notification: MatchNotification) -> bool:
        for line in self.render(notification):
            self.logger.info(line)
        return True
