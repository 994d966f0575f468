"""Exceptions raised by the Twitter monitoring core."""

from __future__ import annotations


class TwitterMonitorError(Exception):
    """Base class for Twitter monitoring errors."""


class IndexOutOfRange(TwitterMonitorError, IndexError):
    """A strict catalog operation received a 1-based index outside the catalog."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Event index {index} is outside 1..{length}")
        self.index = index
        self.length = length


class MalformedIndexToken(TwitterMonitorError, ValueError):
    """A bulk index token was not an integer in range (dropped by lenient parsing)."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Malformed event index: {token!r}")
        self.token = token


class AccountSelectionAborted(TwitterMonitorError):
    """The posting account could not be selected."""


class NoAccountsConfigured(AccountSelectionAborted):
    """TWEETER_ACCOUNTS is empty."""


class MissingActivityKind(TwitterMonitorError):
    """An activity notification arrived without an activity kind."""
