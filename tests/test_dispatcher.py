"""Tests for turning activity notifications into post requests."""

import pytest

from tweetwatch.monitoring.accounts import BRAIN_TWITTER_USERNAME
from tweetwatch.monitoring.catalog import EventCatalog
from tweetwatch.monitoring.dispatcher import ActivityDispatcher
from tweetwatch.monitoring.toggle import MonitoringState, MonitoringToggle
from tweetwatch.shared.models.activity import (
    TWITTER_ACTIVITY_KIND,
    ActivityNotification,
)
from tweetwatch.shared.models.twitter_event import EventRule
from tweetwatch.shared.repositories.brain import MemoryBrain

ROBOT = {"app": "demo"}


@pytest.fixture
def catalog():
    return EventCatalog(
        [
            EventRule(type="activity.app.crash", title="Crash", message="M", enabled=True),
            EventRule(type="activity.app.scale", title="Scale", message="S", enabled=False),
            EventRule(type=TWITTER_ACTIVITY_KIND, title="Tweeted", message="T", enabled=True),
        ]
    )


@pytest.fixture
def brain():
    return MemoryBrain({BRAIN_TWITTER_USERNAME: "hubot"})


@pytest.fixture
def make_dispatcher(catalog, brain, posts, activities):
    def factory(state=MonitoringState.ENABLED):
        toggle = MonitoringToggle(brain, state=state)
        return ActivityDispatcher(catalog, toggle, brain, posts.append, activities.append)

    return factory


class TestDispatch:
    def test_enabled_rule_posts_once(self, make_dispatcher, posts, activities):
        dispatcher = make_dispatcher()

        request = dispatcher.dispatch(ActivityNotification("activity.app.crash", ROBOT))

        assert len(posts) == 1
        assert posts[0] is request
        assert request.tweet == "M"
        assert request.username == "hubot"
        assert request.context == ROBOT

    def test_secondary_activity_emitted(self, make_dispatcher, activities):
        make_dispatcher().dispatch(ActivityNotification("activity.app.crash", ROBOT))

        assert activities == [ActivityNotification(TWITTER_ACTIVITY_KIND, ROBOT)]

    def test_reserved_kind_does_not_re_emit(self, make_dispatcher, posts, activities):
        make_dispatcher().dispatch(ActivityNotification(TWITTER_ACTIVITY_KIND, ROBOT))

        assert [p.tweet for p in posts] == ["T"]
        assert activities == []

    def test_disabled_rule_is_silent(self, make_dispatcher, posts, activities):
        assert make_dispatcher().dispatch(ActivityNotification("activity.app.scale")) is None
        assert posts == []
        assert activities == []

    def test_unknown_kind_is_silent(self, make_dispatcher, posts):
        assert make_dispatcher().dispatch(ActivityNotification("activity.unknown")) is None
        assert posts == []

    def test_missing_kind_is_dropped(self, make_dispatcher, posts):
        assert make_dispatcher().dispatch(ActivityNotification(None)) is None
        assert posts == []

    def test_monitoring_disabled_drops_everything(self, make_dispatcher, posts, activities):
        dispatcher = make_dispatcher(MonitoringState.DISABLED)

        assert dispatcher.dispatch(ActivityNotification("activity.app.crash")) is None
        assert posts == []
        assert activities == []

    def test_unset_monitoring_still_dispatches(self, make_dispatcher, posts):
        make_dispatcher(MonitoringState.UNSET).dispatch(ActivityNotification("activity.app.crash"))
        assert len(posts) == 1

    def test_username_unset_is_none(self, catalog, posts, activities):
        brain = MemoryBrain()
        toggle = MonitoringToggle(brain, state=MonitoringState.ENABLED)
        dispatcher = ActivityDispatcher(catalog, toggle, brain, posts.append, activities.append)

        request = dispatcher.dispatch(ActivityNotification("activity.app.crash"))
        assert request.username is None


class TestHandlePayload:
    def test_payload_dispatches(self, make_dispatcher, posts):
        request = make_dispatcher().handle_payload(
            {"activity_id": "activity.app.crash", "robot_res": ROBOT}
        )
        assert request.tweet == "M"
        assert request.context == ROBOT

    def test_payload_without_robot_uses_payload(self, make_dispatcher):
        payload = {"activity_id": "activity.app.crash"}
        assert make_dispatcher().handle_payload(payload).context == payload

    @pytest.mark.parametrize("payload", [{}, {"activity_id": ""}, {"robot_res": ROBOT}])
    def test_missing_activity_id(self, make_dispatcher, posts, payload):
        assert make_dispatcher().handle_payload(payload) is None
        assert posts == []
