"""RabbitMQ implementation of BrokerChannel on top of aio-pika."""

import asyncio
from typing import Dict, List, Optional

import aio_pika
import structlog
from aio_pika.abc import (
    AbstractChannel,
    AbstractConnection,
    AbstractIncomingMessage,
    AbstractQueue,
)
from aio_pika.exceptions import AMQPError, ChannelInvalidStateError

from loan_gateway.core.config import settings
from loan_gateway.domain.exceptions import BrokerConnectionError, ChannelStateError
from loan_gateway.domain.interfaces import (
    BrokerChannel,
    CloseCallback,
    IncomingMessage,
    MessageHandler,
)

logger = structlog.get_logger(__name__)

# Errors raised by aio-pika/aiormq when the broker or the socket goes away
TRANSPORT_ERRORS = (AMQPError, ChannelInvalidStateError, OSError, asyncio.TimeoutError)


class RabbitMQIncomingMessage(IncomingMessage):
    """Adapter exposing an aio-pika delivery through the IncomingMessage port."""

    def __init__(self, message: AbstractIncomingMessage):
        self._message = message

    @property
    def body(self) -> bytes:
        return self._message.body

    @property
    def message_id(self) -> Optional[str]:
        return self._message.message_id

    @property
    def redelivered(self) -> bool:
        return bool(self._message.redelivered)

    async def ack(self) -> None:
        await self._message.ack()

    async def nack(self, requeue: bool = False) -> None:
        await self._message.nack(requeue=requeue)


class RabbitMQChannel(BrokerChannel):
    """
    One AMQP connection with a single channel.

    Publisher confirms are enabled on the channel, so publish() reports
    whether the broker actually accepted the message.
    """

    def __init__(self, connect_timeout: float | None = None):
        self._connect_timeout = connect_timeout or settings.broker_connect_timeout
        self._connection: Optional[AbstractConnection] = None
        self._channel: Optional[AbstractChannel] = None
        self._queues: Dict[str, AbstractQueue] = {}
        self._close_callbacks: List[CloseCallback] = []

    @property
    def is_connected(self) -> bool:
        return (
            self._connection is not None
            and not self._connection.is_closed
            and self._channel is not None
            and not self._channel.is_closed
        )

    async def connect(self, url: str) -> None:
        if self._connection is not None:
            raise ChannelStateError("Channel is already connected")

        try:
            self._connection = await aio_pika.connect(url, timeout=self._connect_timeout)
            self._connection.close_callbacks.add(self._on_connection_closed)
            self._channel = await self._connection.channel(publisher_confirms=True)
        except TRANSPORT_ERRORS as e:
            logger.error("broker_connect_failed", error=str(e), error_type=type(e).__name__)
            await self.close()
            raise BrokerConnectionError(f"Unable to connect to broker: {e}", url=url) from e

        logger.info("broker_connected")

    async def declare_queue(self, name: str, durable: bool = True) -> None:
        channel = self._require_channel()
        try:
            self._queues[name] = await channel.declare_queue(name, durable=durable)
        except TRANSPORT_ERRORS as e:
            raise BrokerConnectionError(f"Unable to declare queue {name}: {e}") from e

        logger.info("queue_declared", queue=name, durable=durable)

    async def publish(
        self,
        queue_name: str,
        payload: bytes,
        persistent: bool = True,
        message_id: Optional[str] = None,
    ) -> bool:
        channel = self._require_channel()
        message = aio_pika.Message(
            body=payload,
            content_type="application/json",
            delivery_mode=(
                aio_pika.DeliveryMode.PERSISTENT
                if persistent
                else aio_pika.DeliveryMode.NOT_PERSISTENT
            ),
            message_id=message_id,
        )

        try:
            await channel.default_exchange.publish(message, routing_key=queue_name)
        except TRANSPORT_ERRORS as e:
            logger.warning(
                "broker_publish_failed",
                queue=queue_name,
                message_id=message_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        return True

    async def set_prefetch(self, count: int) -> None:
        channel = self._require_channel()
        await channel.set_qos(prefetch_count=count)

    async def consume(self, queue_name: str, handler: MessageHandler) -> str:
        channel = self._require_channel()

        queue = self._queues.get(queue_name)
        if queue is None:
            queue = await channel.get_queue(queue_name, ensure=True)
            self._queues[queue_name] = queue

        async def on_message(message: AbstractIncomingMessage) -> None:
            await handler(RabbitMQIncomingMessage(message))

        return await queue.consume(on_message, no_ack=False)

    def add_close_callback(self, callback: CloseCallback) -> None:
        self._close_callbacks.append(callback)

    def _on_connection_closed(self, sender, exc: Optional[BaseException] = None) -> None:
        # close() detaches the connection first, so only broker-side closes get past this
        if self._connection is None or sender is not self._connection:
            return

        logger.error(
            "broker_connection_lost",
            error=str(exc) if exc else None,
            error_type=type(exc).__name__ if exc else None,
        )
        for callback in self._close_callbacks:
            callback(exc)

    async def close(self) -> None:
        channel, connection = self._channel, self._connection
        self._channel = None
        self._connection = None
        self._queues.clear()

        try:
            if channel is not None and not channel.is_closed:
                await channel.close()
        except TRANSPORT_ERRORS as e:
            logger.warning("broker_channel_close_failed", error=str(e))
        finally:
            try:
                if connection is not None and not connection.is_closed:
                    await connection.close()
            except TRANSPORT_ERRORS as e:
                logger.warning("broker_connection_close_failed", error=str(e))

    def _require_channel(self) -> AbstractChannel:
        if self._channel is None:
            raise ChannelStateError("Channel is not connected")
        return self._channel
