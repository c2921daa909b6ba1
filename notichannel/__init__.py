"""
notichannel: multi-subscriber notification channels

Architectural Intent:
- EventChannelMixin fans data events out to every subscriber
- SubscriberChannelMixin adds a single terminal failure that breaks the
  channel for good
- Subscriber failures, sync or async, come back to the producer as one
  outcome (first cancellation, or an AggregateError)
"""

from notichannel.domain.entities.event_channel import EventChannelMixin
from notichannel.domain.entities.subscriber_channel import SubscriberChannelMixin
from notichannel.domain.errors import (
    AggregateError,
    ChannelError,
    InvalidOperationError,
    is_cancellation,
)
from notichannel.domain.events.event_base import (
    ChannelEvent,
    ChannelFailure,
    SubscriberEvent,
)
from notichannel.domain.ports.channel_port import (
    EventChannelPort,
    SubscriberChannelPort,
)
from notichannel.domain.services.dispatch import Outcome, dispatch, settle
from notichannel.domain.value_objects.channel_settings import ChannelSettings

__all__ = [
    "AggregateError",
    "ChannelError",
    "ChannelEvent",
    "ChannelFailure",
    "ChannelSettings",
    "EventChannelMixin",
    "EventChannelPort",
    "InvalidOperationError",
    "Outcome",
    "SubscriberChannelMixin",
    "SubscriberChannelPort",
    "SubscriberEvent",
    "dispatch",
    "is_cancellation",
    "settle",
]
