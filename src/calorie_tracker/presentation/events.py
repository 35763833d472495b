"""One-shot UI event delivery."""

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

E = TypeVar("E")

_CLOSED = object()


class EventConsumerError(RuntimeError):
    """Raised when a second consumer tries to attach to an event channel."""


class EventChannel(Generic[E]):
    """Single-consumer, ordered queue of one-shot UI events.

    Events sent while no consumer is attached stay queued and are handed to
    the next consumer that attaches. Every event is delivered at most once.
    Closing the channel discards undelivered events and stops the consumer.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._has_consumer = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_consumer(self) -> bool:
        return self._has_consumer

    def pending(self) -> int:
        """Return the number of queued, undelivered events."""
        return self._queue.qsize() if not self._closed else 0

    def send(self, event: E) -> bool:
        """Queue an event; returns False if the channel is closed."""
        if self._closed:
            return False
        self._queue.put_nowait(event)
        return True

    async def collect(self, on_event: Callable[[E], object]) -> None:
        """Deliver events to ``on_event`` until cancelled or the channel closes."""
        self._attach()
        try:
            while not self._closed:
                event = await self._queue.get()
                if event is _CLOSED:
                    break
                on_event(event)  # type: ignore[arg-type]
        finally:
            self._has_consumer = False

    def drain(self) -> list[E]:
        """Take every queued event without waiting."""
        self._attach()
        try:
            events: list[E] = []
            while not self._queue.empty():
                event = self._queue.get_nowait()
                if event is not _CLOSED:
                    events.append(event)  # type: ignore[arg-type]
            return events
        finally:
            self._has_consumer = False

    def close(self) -> None:
        """Discard queued events and release any waiting consumer."""
        if self._closed:
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def _attach(self) -> None:
        if self._has_consumer:
            raise EventConsumerError("An event consumer is already attached")
        self._has_consumer = True


def observe_as_events(
    channel: EventChannel[E], on_event: Callable[[E], object]
) -> "asyncio.Task[None]":
    """Start collecting ``channel`` in a task; cancel the task to detach."""
    return asyncio.get_running_loop().create_task(channel.collect(on_event))
