"""Chat command table for Twitter monitoring."""

from __future__ import annotations

import re
from dataclasses import dataclass

HELP = "twitter.monitoring.help"
ENABLE = "twitter.monitoring.enable"
DISABLE = "twitter.monitoring.disable"
EDIT_TWEETS = "twitter.tweet.edit"
LIST_TWEETS = "twitter.tweet.list"
EDIT_EVENTS = "twitter.event.list"

# Reply accepted while editing events, e.g. "enable 1, 2" or "disable 3"
EDIT_EVENTS_REPLY = re.compile(r"(enable|disable)\s*((\d+,?\s*)+)", re.IGNORECASE)


@dataclass(frozen=True)
class Route:
    command_id: str
    pattern: re.Pattern[str]
    usage: str


ROUTES: tuple[Route, ...] = (
    Route(HELP, re.compile(r"twitter\s+monitoring\s+help", re.I), "twitter monitoring help"),
    Route(
        ENABLE,
        re.compile(r"twitter\s+monitoring\s+(enable|start)", re.I),
        "twitter monitoring enable",
    ),
    Route(
        DISABLE,
        re.compile(r"twitter\s+monitoring\s+(disable|stop)", re.I),
        "twitter monitoring disable",
    ),
    Route(
        EDIT_TWEETS,
        re.compile(r"twitter\s+monitoring\s+(edit|change)\s*(tweets)", re.I),
        "twitter monitoring edit tweets",
    ),
    Route(
        LIST_TWEETS,
        re.compile(r"twitter\s+monitoring\s+(list|show)\s*(tweets)", re.I),
        "twitter monitoring list tweets",
    ),
    Route(
        EDIT_EVENTS,
        re.compile(r"twitter\s+monitoring\s+(edit|update)\s*(events)", re.I),
        "twitter monitoring edit events",
    ),
)

COMMAND_IDS = frozenset(route.command_id for route in ROUTES)


def match_command(text: str) -> str | None:
    """Return the id of the first route whose pattern occurs in ``text``."""
    for route in ROUTES:
        if route.pattern.search(text):
            return route.command_id
    return None


def usage(command_id: str) -> str:
    for route in ROUTES:
        if route.command_id == command_id:
            return route.usage
    raise KeyError(command_id)
