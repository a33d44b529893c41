"""
Unit Tests for RabbitMQChannel.

aio-pika is replaced with mocks; these tests verify how the channel maps
the BrokerChannel contract onto aio-pika calls and transport errors.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import aio_pika
import pytest
from aio_pika.exceptions import AMQPConnectionError, ChannelInvalidStateError

from loan_gateway.domain.exceptions import BrokerConnectionError, ChannelStateError
from loan_gateway.infrastructure.messaging import (
    LoanRequestProducer,
    RabbitMQChannel,
    RabbitMQIncomingMessage,
)


@pytest.fixture
def amqp_channel() -> MagicMock:
    channel = MagicMock()
    channel.is_closed = False
    channel.declare_queue = AsyncMock(return_value=MagicMock(consume=AsyncMock(return_value="ctag-1")))
    channel.get_queue = AsyncMock(return_value=MagicMock(consume=AsyncMock(return_value="ctag-2")))
    channel.set_qos = AsyncMock()
    channel.default_exchange.publish = AsyncMock()
    channel.close = AsyncMock()
    return channel


@pytest.fixture
def amqp_connection(amqp_channel) -> MagicMock:
    connection = MagicMock()
    connection.is_closed = False
    connection.channel = AsyncMock(return_value=amqp_channel)
    connection.close = AsyncMock()
    return connection


@pytest.fixture
def mock_connect(amqp_connection):
    with patch("aio_pika.connect", AsyncMock(return_value=amqp_connection)) as connect:
        yield connect


# =============================================================================
# Connection Tests
# =============================================================================

class TestConnect:
    """Tests for RabbitMQChannel.connect()."""

    @pytest.mark.asyncio
    async def test_connect_opens_confirming_channel(self, mock_connect, amqp_connection):
        channel = RabbitMQChannel(connect_timeout=3.0)

        await channel.connect("amqp://broker/")

        mock_connect.assert_awaited_once_with("amqp://broker/", timeout=3.0)
        amqp_connection.channel.assert_awaited_once_with(publisher_confirms=True)
        assert channel.is_connected

    @pytest.mark.asyncio
    async def test_connect_twice_is_rejected(self, mock_connect):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")

        with pytest.raises(ChannelStateError):
            await channel.connect("amqp://broker/")

    @pytest.mark.asyncio
    async def test_connect_failure_raises_broker_connection_error(self):
        channel = RabbitMQChannel()
        refused = AsyncMock(side_effect=AMQPConnectionError("connection refused"))

        with patch("aio_pika.connect", refused):
            with pytest.raises(BrokerConnectionError) as exc_info:
                await channel.connect("amqp://broker/")

        assert exc_info.value.url == "amqp://broker/"
        assert not channel.is_connected

    @pytest.mark.asyncio
    async def test_socket_error_raises_broker_connection_error(self):
        channel = RabbitMQChannel()

        with patch("aio_pika.connect", AsyncMock(side_effect=ConnectionRefusedError())):
            with pytest.raises(BrokerConnectionError):
                await channel.connect("amqp://broker/")

    @pytest.mark.asyncio
    async def test_use_before_connect_is_rejected(self):
        channel = RabbitMQChannel()

        with pytest.raises(ChannelStateError):
            await channel.declare_queue("loan_approval_queue")


# =============================================================================
# Queue and Publish Tests
# =============================================================================

class TestQueueOperations:
    """Tests for declare_queue(), publish(), set_prefetch() and consume()."""

    @pytest.mark.asyncio
    async def test_declare_queue_durable(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")

        await channel.declare_queue("loan_approval_queue", durable=True)

        amqp_channel.declare_queue.assert_awaited_once_with("loan_approval_queue", durable=True)

    @pytest.mark.asyncio
    async def test_publish_persistent_message(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")

        result = await channel.publish("loan_approval_queue", b"{}", message_id="42")

        assert result is True
        message = amqp_channel.default_exchange.publish.await_args.args[0]
        assert amqp_channel.default_exchange.publish.await_args.kwargs == {
            "routing_key": "loan_approval_queue"
        }
        assert message.delivery_mode == aio_pika.DeliveryMode.PERSISTENT
        assert message.message_id == "42"
        assert message.content_type == "application/json"

    @pytest.mark.asyncio
    async def test_publish_failure_returns_false(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        amqp_channel.default_exchange.publish.side_effect = ConnectionResetError()

        assert await channel.publish("loan_approval_queue", b"{}") is False

    @pytest.mark.asyncio
    async def test_publish_on_channel_without_transport_returns_false(
        self, mock_connect, amqp_channel
    ):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        amqp_channel.default_exchange.publish.side_effect = ChannelInvalidStateError(
            "No active transport in channel"
        )

        assert await channel.publish("loan_approval_queue", b"{}") is False

    @pytest.mark.asyncio
    async def test_producer_submit_on_channel_without_transport_returns_false(
        self, mock_connect, amqp_channel, test_settings, make_request
    ):
        producer = LoanRequestProducer.from_settings(RabbitMQChannel(), test_settings)
        await producer.connect()
        amqp_channel.default_exchange.publish.side_effect = ChannelInvalidStateError(
            "No active transport in channel"
        )

        assert await producer.submit(make_request()) is False

    @pytest.mark.asyncio
    async def test_set_prefetch(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")

        await channel.set_prefetch(1)

        amqp_channel.set_qos.assert_awaited_once_with(prefetch_count=1)

    @pytest.mark.asyncio
    async def test_consume_declared_queue_with_manual_ack(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        await channel.declare_queue("loan_approval_queue")
        queue = amqp_channel.declare_queue.return_value

        tag = await channel.consume("loan_approval_queue", AsyncMock())

        assert tag == "ctag-1"
        assert queue.consume.await_args.kwargs == {"no_ack": False}
        amqp_channel.get_queue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_consume_wraps_deliveries(self, mock_connect, amqp_channel):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        handler = AsyncMock()

        await channel.consume("loan_approval_queue", handler)
        on_message = amqp_channel.get_queue.return_value.consume.await_args.args[0]
        raw = MagicMock(body=b"{}", message_id="7", redelivered=True)
        raw.ack = AsyncMock()
        await on_message(raw)

        delivered = handler.await_args.args[0]
        assert isinstance(delivered, RabbitMQIncomingMessage)
        assert delivered.message_id == "7"
        assert delivered.redelivered is True
        await delivered.ack()
        raw.ack.assert_awaited_once()


# =============================================================================
# Close Tests
# =============================================================================

class TestClose:
    """Tests for RabbitMQChannel.close()."""

    @pytest.mark.asyncio
    async def test_close_releases_channel_and_connection(
        self, mock_connect, amqp_channel, amqp_connection
    ):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")

        await channel.close()

        amqp_channel.close.assert_awaited_once()
        amqp_connection.close.assert_awaited_once()
        assert not channel.is_connected

    @pytest.mark.asyncio
    async def test_close_without_connect_is_safe(self):
        channel = RabbitMQChannel()

        await channel.close()
        await channel.close()

        assert not channel.is_connected

    @pytest.mark.asyncio
    async def test_close_tolerates_broken_connection(
        self, mock_connect, amqp_channel, amqp_connection
    ):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        amqp_channel.close.side_effect = ConnectionResetError()

        await channel.close()

        amqp_connection.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_broker_side_close_fires_close_callbacks(self, mock_connect, amqp_connection):
        channel = RabbitMQChannel()
        lost = []
        channel.add_close_callback(lost.append)
        await channel.connect("amqp://broker/")
        on_close = amqp_connection.close_callbacks.add.call_args.args[0]
        error = ConnectionResetError("connection reset by peer")

        on_close(amqp_connection, error)

        assert lost == [error]

    @pytest.mark.asyncio
    async def test_own_close_does_not_fire_close_callbacks(self, mock_connect, amqp_connection):
        channel = RabbitMQChannel()
        lost = []
        channel.add_close_callback(lost.append)
        await channel.connect("amqp://broker/")
        on_close = amqp_connection.close_callbacks.add.call_args.args[0]

        await channel.close()
        on_close(amqp_connection, None)

        assert lost == []

    @pytest.mark.asyncio
    async def test_reconnect_after_close(self, mock_connect):
        channel = RabbitMQChannel()
        await channel.connect("amqp://broker/")
        await channel.close()

        await channel.connect("amqp://broker/")

        assert channel.is_connected
