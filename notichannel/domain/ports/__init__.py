"""
Domain Ports Package

Architectural Intent:
- Contains the subscription contracts channels implement
- Ports define what consumers rely on, mixins implement how
"""

from notichannel.domain.ports.channel_port import (
    EventCallback,
    EventChannelPort,
    SubscriberCallback,
    SubscriberChannelPort,
)

__all__ = [
    "EventCallback",
    "EventChannelPort",
    "SubscriberCallback",
    "SubscriberChannelPort",
]
