"""Shared data models for tweetwatch."""

from .activity import (
    TWITTER_ACTIVITY_KIND,
    ActivityNotification,
    Attachment,
    FormattedReply,
    MonitoringIntent,
    PostRequest,
)
from .twitter_account import TwitterCredentials
from .twitter_event import EventRule

__all__ = [
    "TWITTER_ACTIVITY_KIND",
    "ActivityNotification",
    "Attachment",
    "EventRule",
    "FormattedReply",
    "MonitoringIntent",
    "PostRequest",
    "TwitterCredentials",
]
