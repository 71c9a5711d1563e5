"""
Single-producer/single-consumer event channel.

The channel is the only object shared between the poller thread and the
render loop. Events are delivered in exactly the order they were sent.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import ChannelClosed, ChannelTimeout, PollerError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Failure:
    error: BaseException


class Channel(Generic[T]):
    """
    Strict FIFO queue between one producer and one consumer.

    The consumer owns the lifetime: once it calls close(), every further
    send() raises ChannelClosed so the producer can notice and stop.
    A producer that hits a fatal error hands it over with fail(); the
    consumer sees it as a PollerError after all earlier events.
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, item: T) -> None:
        """Enqueue an item. Raises ChannelClosed if the consumer is gone."""
        if self._closed.is_set():
            raise ChannelClosed("receiver has closed the channel")
        self._queue.put(item)

    def fail(self, error: BaseException) -> None:
        """Deliver a fatal producer error to the consumer."""
        if self._closed.is_set():
            logger.debug(f"Dropping producer failure on closed channel: {error}")
            return
        self._queue.put(_Failure(error))

    def recv(self, timeout: float | None = None) -> T:
        """
        Block until exactly one item is available and return it.

        Args:
            timeout: Seconds to wait, or None to wait forever

        Raises:
            ChannelTimeout: If the timeout elapsed first
            ChannelClosed: If the channel is closed and drained
            PollerError: If the producer failed
        """
        if self._closed.is_set() and self._queue.empty():
            raise ChannelClosed("channel is closed")
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            raise ChannelTimeout(f"no event within {timeout}s") from None

        if isinstance(item, _Failure):
            if isinstance(item.error, PollerError):
                raise item.error
            raise PollerError(f"event poller failed: {item.error}") from item.error
        return item

    def close(self) -> None:
        """Drop the receiving end."""
        if not self._closed.is_set():
            logger.debug("Event channel closed")
        self._closed.set()

    def __len__(self) -> int:
        return self._queue.qsize()
