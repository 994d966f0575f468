"""Ordered catalog of notifiable event rules, addressed by 1-based index."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from tweetwatch.monitoring.errors import IndexOutOfRange, MalformedIndexToken
from tweetwatch.shared.models.twitter_event import EventRule

LOGGER = logging.getLogger("EventCatalog")

_TOKEN_SPLIT = re.compile(r"[\s,]+")

# Default rules, in display order. All start disabled.
DEFAULT_EVENTS: list[dict[str, Any]] = [
    {
        "type": "activity.app.scale",
        "title": "App Scale",
        "message": "Our app just scaled to handle more traffic!",
    },
    {
        "type": "activity.app.crash",
        "title": "App Downtime",
        "message": "Our app is experiencing some downtime. We are working on it.",
    },
    {
        "type": "activity.github.deploy",
        "title": "GitHub Deploy",
        "message": "A new version of our app was just deployed from GitHub!",
    },
]


def _parse_token(token: str, minimum: int, maximum: int | None) -> int:
    try:
        value = int(token, 10)
    except ValueError:
        raise MalformedIndexToken(token) from None
    if value < minimum or (maximum is not None and value > maximum):
        raise MalformedIndexToken(token)
    return value


def parse_indices(text: str, minimum: int = 1, maximum: int | None = None) -> list[int]:
    """Parse free text like ``"1, 15"`` or ``"1 2 3"`` into in-range indices.

    Malformed or out-of-range tokens are dropped; duplicates collapse and the
    order of first appearance is kept. ``maximum=None`` means no upper bound.
    """
    indices: list[int] = []
    for token in _TOKEN_SPLIT.split(text.strip()):
        if not token:
            continue
        try:
            value = _parse_token(token, minimum, maximum)
        except MalformedIndexToken as e:
            LOGGER.debug(f"Dropping index token: {e}")
            continue
        if value not in indices:
            indices.append(value)
    return indices


class EventCatalog:
    """Fixed-length ordered list of EventRules.

    Positions never change for the lifetime of the catalog: there is no insert
    or remove, only in-place edits.
    """

    def __init__(self, rules: Iterable[EventRule]) -> None:
        self._rules: list[EventRule] = list(rules)

    @classmethod
    def default(cls) -> EventCatalog:
        return cls(EventRule(enabled=False, **spec) for spec in DEFAULT_EVENTS)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def list_all(self) -> list[EventRule]:
        return list(self._rules)

    def list_enabled(self) -> list[EventRule]:
        return [rule for rule in self._rules if rule.enabled]

    def get(self, index: int) -> EventRule:
        """Return the rule at a 1-based index or raise IndexOutOfRange."""
        if index < 1 or index > len(self._rules):
            raise IndexOutOfRange(index, len(self._rules))
        return self._rules[index - 1]

    def set_message(self, index: int, text: str) -> EventRule:
        rule = self.get(index)
        rule.message = text
        return rule

    def set_enabled(self, indices: Iterable[int], enabled: bool) -> None:
        """Set the enabled flag for each in-range index; others are ignored."""
        for index in indices:
            if 1 <= index <= len(self._rules):
                self._rules[index - 1].enabled = enabled

    def find_enabled(self, activity_kind: str) -> EventRule | None:
        """First enabled rule whose type equals the activity kind."""
        for rule in self._rules:
            if rule.enabled and rule.type == activity_kind:
                return rule
        return None

    def describe_indices(self, indices: Iterable[int]) -> str:
        """Human readable list of titles: ``"A"``, ``"A and B"``, ``"A, B and C"``."""
        titles = [
            self._rules[index - 1].title for index in indices if 1 <= index <= len(self._rules)
        ]
        if not titles:
            return ""
        if len(titles) == 1:
            return titles[0]
        return f"{', '.join(titles[:-1])} and {titles[-1]}"

    def numbered_listing(self) -> str:
        """Prompt body listing every rule as ``\\n1. `Title`: message``."""
        return "".join(
            f"\n{index}. `{rule.title}`: {rule.message}"
            for index, rule in enumerate(self._rules, start=1)
        )

    # --- Persistence ---

    def to_records(self) -> list[dict[str, Any]]:
        return [rule.to_dict() for rule in self._rules]

    def restore(self, records: Iterable[dict[str, Any]]) -> int:
        """Apply stored message/enabled values onto rules with a matching type.

        Unknown types are ignored, so length and order never change.
        Returns the number of rules updated.
        """
        by_type = {rule.type: rule for rule in self._rules}
        restored = 0
        for record in records:
            try:
                stored = EventRule.from_dict(record)
            except (KeyError, TypeError) as e:
                LOGGER.warning(f"Skipping malformed stored event: {record!r} ({e})")
                continue
            rule = by_type.get(stored.type)
            if rule is None:
                LOGGER.debug(f"Ignoring stored event for unknown type '{stored.type}'")
                continue
            rule.message = stored.message
            rule.enabled = stored.enabled
            restored += 1
        return restored
