"""Channel-agnostic notification payload."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class ImageAttachment:
    filename: str
    data: bytes
    content_type: str = "image/png"


@dataclass
class MatchNotification:
    """Everything a channel needs to render one match announcement."""

    title: str
    color: int
    url: str
    fields: list[EmbedField] = field(default_factory=list)
    timestamp: Optional[datetime] = None
    footer: Optional[str] = None
    thumbnail_url: Optional[str] = None
    image: Optional[ImageAttachment] = None

    def add_field(self, name: str, value: str, inline: bool = False) -> 'MatchNotification':
        self.fields.append(EmbedField(name, value, inline))
        return self

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def to_embed(self) -> dict[str, Any]:
        """Discord embed object."""
        embed: dict[str, Any] = {
            'title': self.title,
            'color': self.color,
            'url': self.url,
            'fields': [{'name': f.name, 'value': f.value, 'inline': f.inline} for f in self.fields],
        }
        if self.timestamp is not None:
            embed['timestamp'] = self.timestamp.isoformat()
        if self.footer:
            embed['footer'] = {'text': self.footer}
        if self.thumbnail_url:
            embed['thumbnail'] = {'url': self.thumbnail_url}
        if self.image is not None:
            embed['image'] = {'url': f"attachment://{self.image.filename}"}
        return embed
