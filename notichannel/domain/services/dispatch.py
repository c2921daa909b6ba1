"""
Dispatch Service

Architectural Intent:
- Fan-out of one event to a point-in-time snapshot of subscribers
- Shared by the plain and the breakable channel
- Subscriber failures never escape mid-iteration; they are folded into
  one outcome returned (or raised) to the producer

Dispatch Model:
1. No subscribers: completed outcome, nothing invoked
2. One subscriber: its own result is returned unwrapped
3. Several subscribers: every callback is invoked back-to-back without
   awaiting. Synchronous errors are collected, awaitables are kept
4. A single awaitable with no errors is returned unwrapped; otherwise a
   coroutine awaits every awaitable concurrently, collecting rejections,
   and applies the aggregation rule once all have settled

Aggregation Rule:
- Only cancellations collected: the first cancellation is raised
- Anything else: AggregateError over the whole collection

Producers are responsible for not overlapping dispatches; nothing here
queues or serialises events.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, NoReturn, Optional, Sequence

from notichannel.domain.errors import (
    CAPTURED_ERRORS,
    AggregateError,
    is_cancellation,
)
from notichannel.domain.events.event_base import ChannelFailure

logger = logging.getLogger(__name__)

Outcome = Optional[Awaitable[None]]


def raise_collected(
    errors: Sequence[BaseException],
    channel: Optional[str] = None,
    log_failures: bool = True,
) -> NoReturn:
    """Raise the single failure representing ``errors`` (must be non-empty)."""
    if log_failures:
        logger.debug(
            "Dispatch settled with %d collected error(s)", len(errors),
            extra={"channel": channel, "inner_errors": list(errors)},
        )
    for error in errors:
        if not is_cancellation(error):
            raise AggregateError(errors)
    # All errors are cancellations, raise the first one
    raise errors[0]


def dispatch(
    callbacks: Sequence[Callable[[Any], Outcome]],
    event: Any,
    log_failures: bool = True,
    channel: Optional[str] = None,
) -> Outcome:
    """Invoke every callback with ``event`` and combine their outcomes.

    Args:
        callbacks: Subscribers in registration order. A snapshot is taken
            before invoking anything, so callbacks may (un)subscribe freely.
        event: Value passed to every callback.
        log_failures: Log each captured subscriber failure at DEBUG level.
        channel: Name of the dispatching channel, attached to log records.

    Returns:
        None when every callback completed synchronously, otherwise an
        awaitable settling once every asynchronous callback has settled.

    Raises:
        AggregateError: synchronous failures of several kinds (no awaitables)
        asyncio.CancelledError: every synchronous failure was a cancellation
    """
    snapshot = tuple(callbacks)
    if not snapshot:
        return None
    if len(snapshot) == 1:
        return snapshot[0](event)

    event_kind = "failure" if isinstance(event, ChannelFailure) else "data"
    logger.debug(
        "Dispatching %s event to %d subscribers", event_kind, len(snapshot),
        extra={
            "channel": channel,
            "subscribers": len(snapshot),
            "event_kind": event_kind,
        },
    )

    pending: list[Awaitable[None]] = []
    errors: list[BaseException] = []
    for callback in snapshot:
        try:
            result = callback(event)
        except CAPTURED_ERRORS as e:
            if log_failures:
                logger.debug(
                    "Subscriber %r failed: %r", callback, e,
                    extra={"channel": channel, "error_type": type(e).__name__},
                )
            errors.append(e)
            continue
        if inspect.isawaitable(result):
            pending.append(result)

    if not pending:
        if errors:
            raise_collected(errors, channel, log_failures)
        return None
    if len(pending) == 1 and not errors:
        return pending[0]
    return _settle_all(pending, errors, log_failures, channel)


async def _settle_all(
    pending: list[Awaitable[None]],
    errors: list[BaseException],
    log_failures: bool,
    channel: Optional[str],
) -> None:
    async def observe(awaitable: Awaitable[None]) -> None:
        try:
            await awaitable
        except CAPTURED_ERRORS as e:
            if log_failures:
                logger.debug(
                    "Asynchronous subscriber failed: %r", e,
                    extra={"channel": channel, "error_type": type(e).__name__},
                )
            errors.append(e)

    await asyncio.gather(*(observe(p) for p in pending))
    if errors:
        raise_collected(errors, channel, log_failures)


async def settle(outcome: Outcome) -> None:
    """Await a dispatch outcome if it is pending; no-op otherwise."""
    if inspect.isawaitable(outcome):
        await outcome
