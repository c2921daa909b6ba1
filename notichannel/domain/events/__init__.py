"""
Channel Events Package

Architectural Intent:
- Contains the values channels deliver to their subscribers
"""

from notichannel.domain.events.event_base import (
    ChannelEvent,
    ChannelFailure,
    SubscriberEvent,
)

__all__ = [
    "ChannelEvent",
    "ChannelFailure",
    "SubscriberEvent",
]
