"""Builds and renders formatted chat replies."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from tweetwatch.shared.models.activity import Attachment, FormattedReply
from tweetwatch.shared.models.twitter_event import EventRule

# Attachment colors
PALETTE: dict[str, str] = {
    "positive": "#5aa700",
    "normal": "#008571",
}

_COLOR_MARKERS: dict[str, str] = {
    PALETTE["positive"]: "●",
    PALETTE["normal"]: "○",
}

# Twitch chat message limit
MAX_CHAT_LENGTH = 500


def rules_as_attachments(context: Any, rules: Iterable[EventRule]) -> FormattedReply:
    attachments = [
        Attachment(
            title=rule.title,
            text=rule.message,
            color=PALETTE["positive"] if rule.enabled else PALETTE["normal"],
        )
        for rule in rules
    ]
    return FormattedReply(context=context, attachments=attachments)


def render_lines(reply: FormattedReply) -> list[str]:
    """Flatten a reply into chat lines.

    Text replies keep their embedded newlines as separate lines; each
    attachment becomes ``"● Title: text"``. Lines are clipped to the chat limit.
    """
    if reply.message is not None:
        lines = [line for line in reply.message.split("\n") if line.strip()]
    else:
        lines = [
            f"{_COLOR_MARKERS.get(a.color, '•')} {a.title}: {a.text}" for a in reply.attachments
        ]
    return [
        line if len(line) <= MAX_CHAT_LENGTH else line[: MAX_CHAT_LENGTH - 1] + "…"
        for line in lines
    ]
