"""Global test configuration.

Provides producer classes composing the channel mixins, the way an
application would use them.
"""

import pytest

from notichannel import (
    ChannelEvent,
    ChannelFailure,
    EventChannelMixin,
    SubscriberChannelMixin,
)


class Notifier(EventChannelMixin[str]):
    """Producer of string data events."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.first_added = 0
        self.last_removed = 0

    def test(self, data: str):
        return self.notify(ChannelEvent(data))

    def on_add_first_handler(self) -> None:
        self.first_added += 1

    def on_remove_last_handler(self) -> None:
        self.last_removed += 1


class CrashingNotifier(SubscriberChannelMixin[str]):
    """Producer of string data events that can break with an error."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.first_added = 0
        self.last_removed = 0

    def test(self, data: str):
        return self.notify(ChannelEvent(data))

    def crash(self, error: BaseException):
        return self.notify(ChannelFailure(error))

    def on_add_first_handler(self) -> None:
        self.first_added += 1

    def on_remove_last_handler(self) -> None:
        self.last_removed += 1


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def crashing_notifier():
    return CrashingNotifier()
