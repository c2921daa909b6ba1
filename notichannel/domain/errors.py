"""
Channel Errors

Architectural Intent:
- Error kinds raised by notification channels
- Cancellation is recognised by kind, never generated here
- Aggregate failures keep every inner error in the order it was recorded
"""

from __future__ import annotations
import asyncio
import concurrent.futures
from typing import Iterable

# Exceptions a dispatch captures from subscribers. asyncio.CancelledError is a
# BaseException, so it has to be listed explicitly.
CAPTURED_ERRORS = (Exception, asyncio.CancelledError)


class ChannelError(Exception):
    pass


class InvalidOperationError(ChannelError):
    pass


class AggregateError(ChannelError):
    """Failure wrapping several subscriber errors, in recording order."""

    def __init__(self, inner_errors: Iterable[BaseException]) -> None:
        self._inner_errors = tuple(inner_errors)
        details = "; ".join(
            f"{type(e).__name__}: {e}" for e in self._inner_errors
        )
        super().__init__(
            f"{len(self._inner_errors)} subscriber(s) failed: {details}"
        )

    @property
    def inner_errors(self) -> tuple[BaseException, ...]:
        return self._inner_errors


def is_cancellation(error: BaseException) -> bool:
    return isinstance(
        error, (asyncio.CancelledError, concurrent.futures.CancelledError)
    )
