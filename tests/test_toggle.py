"""Unit tests for the tri-state monitoring toggle."""

import pytest

from tweetwatch.monitoring.toggle import (
    BRAIN_TWITTER_MONITORING,
    MonitoringState,
    MonitoringToggle,
)
from tweetwatch.shared.repositories.brain import MemoryBrain


class TestMonitoringStateParse:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("true", MonitoringState.ENABLED),
            ("TRUE", MonitoringState.UNSET),
            ("FALSE", MonitoringState.UNSET),
            (" false ", MonitoringState.UNSET),
            (True, MonitoringState.ENABLED),
            ("false", MonitoringState.DISABLED),
            (False, MonitoringState.DISABLED),
            (None, MonitoringState.UNSET),
            ("", MonitoringState.UNSET),
            ("yes", MonitoringState.UNSET),
            (1, MonitoringState.UNSET),
        ],
    )
    def test_parse(self, value, expected):
        assert MonitoringState.parse(value) is expected


class TestMonitoringToggle:
    def test_unset_guards(self):
        toggle = MonitoringToggle(MemoryBrain())
        toggle.load()
        assert toggle.state is MonitoringState.UNSET
        assert toggle.is_enabled is False
        assert toggle.is_disabled is False

    def test_load_from_brain(self):
        toggle = MonitoringToggle(MemoryBrain({BRAIN_TWITTER_MONITORING: "false"}))
        assert toggle.load() is MonitoringState.DISABLED

    def test_override_wins_over_brain(self):
        brain = MemoryBrain({BRAIN_TWITTER_MONITORING: "false"})
        toggle = MonitoringToggle(brain, override="true")
        assert toggle.load() is MonitoringState.ENABLED

    @pytest.mark.asyncio
    async def test_commit_persists(self):
        brain = MemoryBrain()
        toggle = MonitoringToggle(brain)
        await toggle.commit(MonitoringState.DISABLED)
        assert brain.get(BRAIN_TWITTER_MONITORING) == "false"
        await toggle.commit(MonitoringState.ENABLED)
        assert brain.get(BRAIN_TWITTER_MONITORING) == "true"

    @pytest.mark.asyncio
    async def test_unset_is_not_saved(self):
        brain = MemoryBrain()
        toggle = MonitoringToggle(brain)
        await toggle.save()
        assert BRAIN_TWITTER_MONITORING not in brain.keys()
