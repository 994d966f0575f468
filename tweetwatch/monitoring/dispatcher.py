"""Turns activity notifications into post requests."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from tweetwatch.monitoring.accounts import BRAIN_TWITTER_USERNAME
from tweetwatch.monitoring.catalog import EventCatalog
from tweetwatch.monitoring.errors import MissingActivityKind
from tweetwatch.monitoring.toggle import MonitoringToggle
from tweetwatch.shared.models.activity import (
    TWITTER_ACTIVITY_KIND,
    ActivityNotification,
    PostRequest,
)
from tweetwatch.shared.repositories.brain import MemoryBrain

LOGGER = logging.getLogger("ActivityDispatcher")


class ActivityDispatcher:
    """Read-only over the catalog; emits through the two callbacks."""

    def __init__(
        self,
        catalog: EventCatalog,
        toggle: MonitoringToggle,
        brain: MemoryBrain,
        emit_post: Callable[[PostRequest], None],
        emit_activity: Callable[[ActivityNotification], None],
    ) -> None:
        self.catalog = catalog
        self.toggle = toggle
        self._brain = brain
        self._emit_post = emit_post
        self._emit_activity = emit_activity

    def handle_payload(self, payload: dict[str, Any]) -> PostRequest | None:
        """Dispatch a raw ``{"activity_id": ..., "robot_res": ...}`` payload."""
        if self.toggle.is_disabled:
            return None
        try:
            notification = ActivityNotification.from_payload(payload)
        except MissingActivityKind as e:
            LOGGER.error(f"{e}: {payload!r}")
            return None
        return self.dispatch(notification)

    def dispatch(self, notification: ActivityNotification) -> PostRequest | None:
        if self.toggle.is_disabled:
            return None

        kind = notification.activity_kind
        if not kind:
            LOGGER.error("Activity ID was not supplied in bot activity notification")
            return None

        rule = self.catalog.find_enabled(kind)
        if rule is None:
            return None

        request = PostRequest(
            context=notification.context,
            username=self._brain.get(BRAIN_TWITTER_USERNAME),
            tweet=rule.message,
        )
        self._emit_post(request)
        LOGGER.debug(f"Tweeting event message {rule.message!r} for user {request.username}")

        if kind != TWITTER_ACTIVITY_KIND:
            self._emit_activity(ActivityNotification(TWITTER_ACTIVITY_KIND, notification.context))
        return request
