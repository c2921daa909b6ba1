"""
Event Channel Module

Architectural Intent:
- Mixin giving a producer class a multi-subscriber data channel
- Subscribers are kept in registration order, duplicates allowed
- Hooks let the producer start/stop producing events lazily
- The channel never terminates; see SubscriberChannelMixin for that

Usage:
    class Ticker(EventChannelMixin[int]):
        def on_add_first_handler(self) -> None:
            self._start_timer()

        def on_remove_last_handler(self) -> None:
            self._stop_timer()

        def _tick(self, value: int):
            return self.notify(ChannelEvent(value))

A producer defining its own __init__ must call super().__init__().
"""

from __future__ import annotations
import inspect
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from notichannel.domain.events.event_base import ChannelEvent
from notichannel.domain.services.dispatch import Outcome, dispatch
from notichannel.domain.value_objects.channel_settings import ChannelSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def same_callback(registered: Callable[..., Any], cb: Callable[..., Any]) -> bool:
    """Identity match; bound methods match on their instance and function.

    Every attribute access creates a new bound method object, so
    ``obj.method`` is compared by what it binds rather than by itself.
    """
    if registered is cb:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(cb):
        return registered.__self__ is cb.__self__ and registered.__func__ is cb.__func__
    return False


class EventChannelMixin(Generic[T]):
    def __init__(
        self, *args: Any, settings: Optional[ChannelSettings] = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self._callbacks: list[Callable[[Any], Outcome]] = []
        self._channel_settings = settings or ChannelSettings()

    @property
    def channel_settings(self) -> ChannelSettings:
        return self._channel_settings

    @property
    def has_subscribers(self) -> bool:
        return len(self._callbacks) > 0

    def add_handler(self, cb: Callable[[Any], Outcome]) -> None:
        self._callbacks.append(cb)
        logger.debug(
            "Handler %r added", cb,
            extra={"channel": type(self).__name__, "subscribers": len(self._callbacks)},
        )
        if len(self._callbacks) == 1:
            self.on_add_first_handler()

    def remove_handler(self, cb: Callable[[Any], Outcome]) -> None:
        """Remove the first registration of ``cb``; unknown callbacks are ignored."""
        for index, registered in enumerate(self._callbacks):
            if same_callback(registered, cb):
                break
        else:
            return
        del self._callbacks[index]
        logger.debug(
            "Handler %r removed", cb,
            extra={"channel": type(self).__name__, "subscribers": len(self._callbacks)},
        )
        if not self._callbacks:
            self.on_remove_last_handler()

    def notify(self, event: ChannelEvent[T]) -> Outcome:
        """Broadcast ``event`` to a snapshot of the current subscribers.

        Returns None or an awaitable the producer must await; see
        notichannel.domain.services.dispatch for the outcome rules.
        """
        return self._dispatch(self._callbacks, event)

    def on_add_first_handler(self) -> None:
        """Called when the first subscriber registers. No-op by default."""

    def on_remove_last_handler(self) -> None:
        """Called when the last subscriber is removed. No-op by default."""

    def _dispatch(
        self, callbacks: list[Callable[[Any], Outcome]], event: Any
    ) -> Outcome:
        return dispatch(
            callbacks,
            event,
            log_failures=self._channel_settings.log_handler_failures,
            channel=type(self).__name__,
        )
