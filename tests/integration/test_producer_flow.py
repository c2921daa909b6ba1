"""Integration tests for producers built on the channel mixins.

A producer lazily starts an asyncio reader task when the first handler
subscribes and stops it when the last one leaves, the way an application
wires a queue or socket to its listeners.
"""

import asyncio

import pytest

from notichannel import (
    ChannelEvent,
    ChannelFailure,
    InvalidOperationError,
    SubscriberChannelMixin,
    settle,
)
from notichannel.infrastructure.config import load_config


class QueueReader(SubscriberChannelMixin[str]):
    """Broadcasts lines pulled from a queue; an exception item breaks the channel."""

    def __init__(self, queue: asyncio.Queue, **kwargs):
        super().__init__(**kwargs)
        self._queue = queue
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None

    def on_add_first_handler(self) -> None:
        self._task = asyncio.get_running_loop().create_task(self._pump())

    def on_remove_last_handler(self) -> None:
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()
        self._task = None

    async def _pump(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if isinstance(item, BaseException):
                    await settle(self.notify(ChannelFailure(item)))
                    return
                if self.has_subscribers:
                    await settle(self.notify(ChannelEvent(item)))
            finally:
                self._queue.task_done()


class TestQueueReaderIntegration:
    @pytest.mark.asyncio
    async def test_lazy_start_and_stop(self):
        reader = QueueReader(asyncio.Queue())
        handler = lambda e: None

        assert not reader.running
        reader.add_handler(handler)
        assert reader.running
        reader.remove_handler(handler)
        assert not reader.running
        await asyncio.sleep(0)

    @pytest.mark.asyncio
    async def test_lines_reach_every_listener(self):
        queue = asyncio.Queue()
        reader = QueueReader(queue)
        seen_a, seen_b = [], []

        async def listener_a(event):
            await asyncio.sleep(0)
            seen_a.append(event.data)

        def listener_b(event):
            seen_b.append(event.data)

        reader.add_handler(listener_a)
        reader.add_handler(listener_b)

        for line in ("alpha", "beta"):
            queue.put_nowait(line)
        await asyncio.wait_for(queue.join(), timeout=1)

        assert seen_a == ["alpha", "beta"]
        assert seen_b == ["alpha", "beta"]
        reader.remove_handler(listener_a)
        reader.remove_handler(listener_b)
        assert not reader.running

    @pytest.mark.asyncio
    async def test_failure_breaks_reader(self):
        queue = asyncio.Queue()
        reader = QueueReader(queue)
        failures = []

        def listener(event):
            if isinstance(event, ChannelFailure):
                failures.append(event.message)

        reader.add_handler(listener)
        reader.add_handler(listener)
        queue.put_nowait("alpha")
        queue.put_nowait(ConnectionResetError("peer gone"))
        await asyncio.wait_for(queue.join(), timeout=1)

        assert failures == ["peer gone", "peer gone"]
        assert reader.is_broken
        assert not reader.running
        with pytest.raises(InvalidOperationError):
            reader.add_handler(listener)

    @pytest.mark.asyncio
    async def test_strict_reader_from_config(self, tmp_path):
        config_file = tmp_path / "notichannel.json"
        config_file.write_text('{"channel": {"reject_after_break": true}}')
        config = load_config(path=str(config_file))

        reader = QueueReader(asyncio.Queue(), settings=config.channel)
        reader.notify(ChannelFailure(EOFError("closed")))

        with pytest.raises(InvalidOperationError):
            reader.notify(ChannelEvent("late"))
