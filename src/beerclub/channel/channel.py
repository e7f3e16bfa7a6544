"""Rendezvous message channel between the subscription timer and the order handler.

A send completes only once a receiver has taken the message, so a slow
consumer throttles the producer. Messages are delivered in FIFO order.
Closing the channel wakes everyone: receivers stop, and senders still waiting
for a hand-off get ``ChannelClosed`` and their messages are withdrawn.
"""

import threading
from collections import deque
from collections.abc import Iterator
from typing import Any

from beerclub.channel.message import Message, wrap


class ChannelClosed(RuntimeError):
    """Raised on send to, or receive from, a closed channel."""


class MessageChannel:
    def __init__(self) -> None:
        self._ready = threading.Condition()
        self._pending: deque[Message] = deque()
        self._closed = False
        self._sent = 0
        self._received = 0

    @property
    def closed(self) -> bool:
        with self._ready:
            return self._closed

    def send(self, payload: Any) -> None:
        """Send a payload and block until a receiver has taken it.

        Raw payloads are classified with ``wrap`` first: a cart becomes an
        ``OrderMessage``, anything else a ``MalformedMessage``.
        """
        message = wrap(payload)
        with self._ready:
            if self._closed:
                raise ChannelClosed("send on closed channel")

            self._pending.append(message)
            self._sent += 1
            ticket = self._sent
            self._ready.notify_all()

            self._ready.wait_for(lambda: self._received >= ticket or self._closed)
            if self._received < ticket:
                raise ChannelClosed("channel closed before the message was received")

    def receive(self, timeout: float | None = None) -> Message:
        """Take the next message, blocking until one is sent.

        Raises:
            ChannelClosed: the channel is closed and nothing is pending.
            TimeoutError: ``timeout`` seconds passed without a message.
        """
        with self._ready:
            if not self._ready.wait_for(lambda: self._pending or self._closed, timeout):
                raise TimeoutError(f"no message received within {timeout} seconds")

            if not self._pending:
                raise ChannelClosed("receive on closed channel")

            message = self._pending.popleft()
            self._received += 1
            self._ready.notify_all()
            return message

    def close(self) -> None:
        with self._ready:
            self._closed = True
            # Senders blocked on these are released with ChannelClosed
            self._pending.clear()
            self._ready.notify_all()

    def __iter__(self) -> Iterator[Message]:
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return
