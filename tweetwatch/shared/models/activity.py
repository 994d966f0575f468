"""Data models for activity notifications, post requests and chat replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tweetwatch.monitoring.errors import MissingActivityKind

# Reserved kind emitted after a tweet-worthy event; never re-emitted for itself
TWITTER_ACTIVITY_KIND = "activity.events.twitter"


@dataclass
class ActivityNotification:
    """Platform lifecycle event raised inside the bot."""

    activity_kind: str | None
    context: Any = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ActivityNotification:
        """Build from a raw ``{"activity_id": ..., "robot_res": ...}`` payload."""
        activity_id = payload.get("activity_id")
        if not activity_id:
            raise MissingActivityKind("Activity ID was not supplied in bot activity payload")
        return cls(activity_kind=str(activity_id), context=payload.get("robot_res", payload))


@dataclass
class PostRequest:
    """Message handed to the Twitter posting transport."""

    context: Any
    username: str | None
    tweet: str


@dataclass
class Attachment:
    title: str
    text: str
    color: str


@dataclass
class FormattedReply:
    """Chat reply: either plain text or a list of attachments."""

    context: Any
    message: str | None = None
    attachments: list[Attachment] = field(default_factory=list)


@dataclass
class MonitoringIntent:
    """Natural-language match for a monitoring command, raised by an NLC layer."""

    intent_id: str
    message: Any  # originating twitchio.ChatMessage
