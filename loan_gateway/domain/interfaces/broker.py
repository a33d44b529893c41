"""Message broker interfaces (ports)."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional


class IncomingMessage(ABC):
    """
    Transport-agnostic delivered message.

    Exactly one of ack() or nack() must be called per delivery; until then
    the broker counts the message against the channel's prefetch window.
    """

    @property
    @abstractmethod
    def body(self) -> bytes:
        """Raw payload bytes."""
        ...

    @property
    @abstractmethod
    def message_id(self) -> Optional[str]:
        """Publisher-assigned message identifier, if any."""
        ...

    @property
    @abstractmethod
    def redelivered(self) -> bool:
        """True if the broker has delivered this message before."""
        ...

    @abstractmethod
    async def ack(self) -> None:
        """Acknowledge the message so the broker may discard it."""
        ...

    @abstractmethod
    async def nack(self, requeue: bool = False) -> None:
        """
        Negatively acknowledge the message.

        Args:
            requeue: Return the message to the queue when True, otherwise
                drop it (or dead-letter it, if the broker is configured to)
        """
        ...


MessageHandler = Callable[[IncomingMessage], Awaitable[None]]
CloseCallback = Callable[[Optional[BaseException]], None]


class BrokerChannel(ABC):
    """
    Abstract channel over a durable, at-least-once work queue.

    One instance wraps one connection with one logical channel. The
    abstraction never retries internally; retry policy belongs to the caller.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def connect(self, url: str) -> None:
        """
        Open a connection and a channel over it.

        Args:
            url: Broker connection URL

        Raises:
            ChannelStateError: If the channel is already connected
            BrokerConnectionError: If the broker is unreachable or the
                handshake fails
        """
        ...

    @abstractmethod
    async def declare_queue(self, name: str, durable: bool = True) -> None:
        """
        Ensure a queue exists. Safe to call repeatedly.

        Raises:
            BrokerConnectionError: If the declaration fails at network level
        """
        ...

    @abstractmethod
    async def publish(
        self,
        queue_name: str,
        payload: bytes,
        persistent: bool = True,
        message_id: Optional[str] = None,
    ) -> bool:
        """
        Enqueue a message without waiting for consumer acknowledgement.

        Returns:
            True if the broker accepted the message, False otherwise
        """
        ...

    @abstractmethod
    async def set_prefetch(self, count: int) -> None:
        """Cap the number of unacknowledged deliveries on this channel."""
        ...

    @abstractmethod
    async def consume(self, queue_name: str, handler: MessageHandler) -> str:
        """
        Register a handler invoked once per delivered message.

        Delivery continues until close().

        Returns:
            The consumer tag
        """
        ...

    @abstractmethod
    def add_close_callback(self, callback: CloseCallback) -> None:
        """
        Register a callback for a connection the broker side closed.

        The callback receives the closing exception, if any. It is not
        invoked when close() is called on this channel.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the channel, then the connection.

        Safe to call after a partial connect and safe to call twice.
        """
        ...
