"""
Channel Events Module

Architectural Intent:
- Tagged event values delivered to channel subscribers
- ChannelEvent carries a data payload
- ChannelFailure carries the terminal error of a breakable channel
- Events are immutable so every subscriber observes the same value
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ChannelEvent(Generic[T]):
    data: T


@dataclass(frozen=True)
class ChannelFailure:
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error)


SubscriberEvent = Union[ChannelEvent[T], ChannelFailure]
