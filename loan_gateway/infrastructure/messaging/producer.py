"""Loan approval request producer."""

import asyncio

import structlog

from loan_gateway.core.config import Settings, settings
from loan_gateway.core.metrics import (
    record_broker_connection_failure,
    record_publish,
    track_publish_latency,
)
from loan_gateway.domain.entities import LoanApprovalRequest
from loan_gateway.domain.exceptions import BrokerConnectionError, SerializationError
from loan_gateway.domain.interfaces import ApprovalRequestPublisher, BrokerChannel

from .codec import encode_request

logger = structlog.get_logger(__name__)


class LoanRequestProducer(ApprovalRequestPublisher):
    """
    Publishes loan approval requests onto the durable approval queue.

    Owns its broker channel exclusively. Publishing is fire-and-forget:
    submit() reports whether the broker accepted the message, never
    whether it was decided.
    """

    def __init__(
        self,
        channel: BrokerChannel,
        broker_url: str,
        queue_name: str,
        durable: bool = True,
        persistent: bool = True,
        max_publish_attempts: int = 1,
        retry_backoff: float = 0.1,
    ):
        if max_publish_attempts < 1:
            raise ValueError("max_publish_attempts must be at least 1")

        self._channel = channel
        self._broker_url = broker_url
        self._queue_name = queue_name
        self._durable = durable
        self._persistent = persistent
        self._max_publish_attempts = max_publish_attempts
        self._retry_backoff = retry_backoff

    @classmethod
    def from_settings(
        cls,
        channel: BrokerChannel,
        config: Settings | None = None,
    ) -> "LoanRequestProducer":
        """Build a producer from application settings."""
        config = config or settings
        return cls(
            channel=channel,
            broker_url=config.rabbitmq_url,
            queue_name=config.loan_queue_name,
            durable=config.queue_durable,
            persistent=config.message_persistent,
            max_publish_attempts=config.publish_max_attempts,
            retry_backoff=config.publish_retry_backoff,
        )

    @property
    def queue_name(self) -> str:
        return self._queue_name

    @property
    def is_connected(self) -> bool:
        return self._channel.is_connected

    async def connect(self) -> None:
        """
        Connect to the broker and declare the approval queue.

        Raises:
            BrokerConnectionError: If the broker is unreachable. Callers
                should degrade rather than crash.
        """
        logger.info("producer_connecting", queue=self._queue_name)
        try:
            await self._channel.connect(self._broker_url)
            await self._channel.declare_queue(self._queue_name, durable=self._durable)
        except BrokerConnectionError:
            record_broker_connection_failure("producer")
            await self._channel.close()
            raise

        logger.info("producer_connected", queue=self._queue_name)

    async def submit(self, request: LoanApprovalRequest) -> bool:
        """
        Serialize and publish a loan approval request.

        Returns:
            True if the broker accepted the message. False on serialization
            failure, publish failure, or when not connected; never raises
            for those cases so the caller can apply its own fallback.
        """
        log = logger.bind(
            loan_id=request.id,
            borrower_id=request.borrower_id,
            amount=str(request.amount),
            term=request.term,
        )

        if not self._channel.is_connected:
            log.warning("loan_request_not_submitted", reason="not_connected")
            record_publish("failure")
            return False

        try:
            payload = encode_request(request)
        except SerializationError as e:
            log.error("loan_request_serialization_failed", error=e.message)
            record_publish("serialization_error")
            return False

        for attempt in range(self._max_publish_attempts):
            with track_publish_latency():
                published = await self._channel.publish(
                    self._queue_name,
                    payload,
                    persistent=self._persistent,
                    message_id=request.correlation_id,
                )

            if published:
                log.info(
                    "loan_request_submitted",
                    borrower=request.borrower_label,
                    attempt=attempt + 1,
                )
                record_publish("success")
                return True

            log.warning(
                "loan_request_publish_failed",
                attempt=attempt + 1,
                max_attempts=self._max_publish_attempts,
            )

            # Exponential backoff
            if attempt < self._max_publish_attempts - 1:
                await asyncio.sleep(2**attempt * self._retry_backoff)

        record_publish("failure")
        return False

    async def close(self) -> None:
        """Release the channel and connection."""
        await self._channel.close()
        logger.info("producer_closed", queue=self._queue_name)
