"""
Channel Ports

Architectural Intent:
- Subscription contract of notification channels
- Lets consumers subscribe without depending on the channel mixins
- Implemented by EventChannelMixin and SubscriberChannelMixin

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Callbacks return None (synchronous) or an awaitable (asynchronous)
"""

from typing import Awaitable, Callable, Optional, Protocol, TypeVar, runtime_checkable

from notichannel.domain.events.event_base import ChannelEvent, SubscriberEvent

T = TypeVar("T")
# Channels produce T; it only reaches the port through callback arguments
T_co = TypeVar("T_co", covariant=True)

EventCallback = Callable[[ChannelEvent[T]], Optional[Awaitable[None]]]
SubscriberCallback = Callable[[SubscriberEvent[T]], Optional[Awaitable[None]]]


@runtime_checkable
class EventChannelPort(Protocol[T_co]):
    """Channel delivering data events only; never terminates."""

    def add_handler(self, cb: EventCallback[T_co]) -> None: ...

    def remove_handler(self, cb: EventCallback[T_co]) -> None: ...


@runtime_checkable
class SubscriberChannelPort(Protocol[T_co]):
    """Channel delivering data events or a single terminal failure."""

    def add_handler(self, cb: SubscriberCallback[T_co]) -> None:
        """Subscribe ``cb``.

        Raises:
            InvalidOperationError: the channel already delivered its failure
        """
        ...

    def remove_handler(self, cb: SubscriberCallback[T_co]) -> None: ...
