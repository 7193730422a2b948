"""
Frame Channels
==============
One-way FIFO pipes between the worker threads.

A ``queue.Queue`` has no notion of the other side going away, so a channel
adds a closed flag on top of it. Either side may close it:

* the producer closes it after the last item, the consumer then drains what
  is left and stops;
* the consumer closes it when it gives up, the next ``send`` then fails.
"""
from __future__ import annotations

import logging
from queue import Empty, Full, Queue
import threading
import time
from typing import Any, Generic, Iterator, Optional, TypeVar

from equilibrium.exceptions import ChannelClosedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# How often a blocked call re-checks the closed flag (seconds)
POLL_INTERVAL: float = 0.1


class FrameChannel(Generic[T]):
    """
    Single-producer / single-consumer FIFO channel.

    Args:
        capacity: Maximum number of queued items, ``0`` means unbounded. With a
            bound, ``send`` blocks while the consumer lags behind.
        name: Used in log and error messages only.
    """

    def __init__(self, capacity: int = 0, name: str = "channel"):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self.name = name
        self._queue: Queue[Any] = Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Idempotent. Items already queued can still be received."""
        if not self._closed.is_set():
            logger.debug(f"Channel '{self.name}' closed")
        self._closed.set()

    def send(self, item: T) -> None:
        while True:
            if self.closed:
                raise ChannelClosedError(f"Channel '{self.name}' is closed")
            try:
                self._queue.put(item, timeout=POLL_INTERVAL)
                return
            except Full:
                continue

    def recv(self, timeout: Optional[float] = None) -> T:
        """
        Next item in FIFO order.

        Raises:
            ChannelClosedError: The channel is closed and fully drained.
            TimeoutError: Nothing arrived within ``timeout`` seconds.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            wait = POLL_INTERVAL
            if deadline is not None:
                wait = max(0.0, min(POLL_INTERVAL, deadline - time.monotonic()))
            try:
                return self._queue.get(timeout=wait)
            except Empty:
                if self.closed and self._queue.empty():
                    raise ChannelClosedError(f"Channel '{self.name}' is closed")
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError(f"Nothing received on '{self.name}' within {timeout}s")

    def __iter__(self) -> Iterator[T]:
        """Yield items until the channel is closed and drained."""
        while True:
            try:
                yield self.recv()
            except ChannelClosedError:
                return
