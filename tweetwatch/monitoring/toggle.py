"""Tri-state on/off flag for Twitter monitoring."""

from __future__ import annotations

import enum
import logging

from tweetwatch.shared.repositories.brain import MemoryBrain

LOGGER = logging.getLogger("MonitoringToggle")

BRAIN_TWITTER_MONITORING = "bm.twitter.monitoring"


class MonitoringState(str, enum.Enum):
    ENABLED = "true"
    DISABLED = "false"
    UNSET = "unset"

    @classmethod
    def parse(cls, value: object) -> MonitoringState:
        """Map stored/configured values onto a state.

        Only the exact strings ``"true"`` and ``"false"`` (or booleans) are
        recognised; anything else, including ``"FALSE"``, is UNSET.
        """
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        if value == cls.ENABLED.value:
            return cls.ENABLED
        if value == cls.DISABLED.value:
            return cls.DISABLED
        return cls.UNSET


class MonitoringToggle:
    """Monitoring flag owned by a TwitterMonitor.

    UNSET counts as enabled for dispatch and for the disable guard, but not
    for the enable guard: enabling from UNSET still runs account selection.
    """

    def __init__(
        self,
        brain: MemoryBrain,
        override: str | bool | None = None,
        state: MonitoringState = MonitoringState.UNSET,
    ) -> None:
        self._brain = brain
        self._override = override
        self.state = state

    def load(self) -> MonitoringState:
        if self._override is not None:
            self.state = MonitoringState.parse(self._override)
            LOGGER.info(f"Monitoring state from configuration: {self.state.name}")
        else:
            self.state = MonitoringState.parse(self._brain.get(BRAIN_TWITTER_MONITORING))
            LOGGER.debug(f"Monitoring state from brain: {self.state.name}")
        return self.state

    async def save(self) -> None:
        if self.state is MonitoringState.UNSET:
            return
        await self._brain.set(BRAIN_TWITTER_MONITORING, self.state.value)

    @property
    def is_enabled(self) -> bool:
        """Exactly ENABLED (enable guard)."""
        return self.state is MonitoringState.ENABLED

    @property
    def is_disabled(self) -> bool:
        """Exactly DISABLED (disable and dispatch guards)."""
        return self.state is MonitoringState.DISABLED

    async def commit(self, state: MonitoringState) -> None:
        self.state = state
        await self.save()
