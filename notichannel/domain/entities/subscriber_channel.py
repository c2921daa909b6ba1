"""
Subscriber Channel Module

Architectural Intent:
- Breakable flavor of EventChannelMixin
- Delivers data events or one terminal failure
- Lifecycle is one-way: LIVE -> BROKEN

State Transition (on a failure event):
1. Mark the channel broken
2. Snapshot and clear the subscriber list
3. Dispatch the failure to the snapshot, so every former subscriber sees
   it exactly once
4. Fire on_remove_last_handler if there were subscribers, even when
   dispatch raised; an error from the hook propagates from notify

After the transition add_handler raises InvalidOperationError, while
remove_handler stays a harmless no-op. Data events notified after the
transition reach nobody, unless ChannelSettings.reject_after_break is set,
in which case notify raises InvalidOperationError.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Optional, TypeVar, Union

from notichannel.domain.entities.event_channel import EventChannelMixin
from notichannel.domain.errors import InvalidOperationError
from notichannel.domain.events.event_base import ChannelEvent, ChannelFailure
from notichannel.domain.services.dispatch import Outcome
from notichannel.domain.value_objects.channel_settings import ChannelSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubscriberChannelMixin(EventChannelMixin[T]):
    def __init__(
        self, *args: Any, settings: Optional[ChannelSettings] = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, settings=settings, **kwargs)
        self._broken = False

    @property
    def is_broken(self) -> bool:
        return self._broken

    def verify_live(self) -> None:
        if self._broken:
            raise InvalidOperationError("Wrong operation on broken channel")

    def add_handler(self, cb: Callable[[Any], Outcome]) -> None:
        self.verify_live()
        super().add_handler(cb)

    def notify(
        self, event: Union[ChannelEvent[T], ChannelFailure, BaseException]
    ) -> Outcome:
        """Broadcast a data event, or break the channel with a failure.

        A bare exception instance is treated as ChannelFailure(exception).
        """
        if self._broken and self._channel_settings.reject_after_break:
            raise InvalidOperationError("Wrong operation on broken channel")
        if isinstance(event, BaseException):
            event = ChannelFailure(event)
        if isinstance(event, ChannelFailure):
            snapshot = self._break(event)
            try:
                return self._dispatch(snapshot, event)
            finally:
                # Every subscriber has been invoked at this point
                if snapshot:
                    self.on_remove_last_handler()
        return super().notify(event)

    def _break(self, failure: ChannelFailure) -> list[Callable[[Any], Outcome]]:
        self._broken = True
        snapshot = list(self._callbacks)
        self._callbacks.clear()
        logger.info(
            "Channel broken by %r", failure.error,
            extra={
                "channel": type(self).__name__,
                "subscribers": len(snapshot),
                "error_type": type(failure.error).__name__,
            },
        )
        return snapshot
