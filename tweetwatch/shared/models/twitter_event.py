"""Data model for Twitter monitoring event rules."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class EventRule:
    """Notifiable event rule."""

    type: str  # activity kind, e.g. 'activity.app.scale'
    title: str
    message: str
    enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventRule:
        return cls(
            type=str(data["type"]),
            title=str(data.get("title", "")),
            message=str(data.get("message", "")),
            enabled=bool(data.get("enabled", False)),
        )
