"""Loan approval decision consumer."""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, List, Optional

import structlog

from loan_gateway.core.config import Settings, settings
from loan_gateway.core.metrics import (
    record_broker_connection_failure,
    record_decision,
    record_message_result,
    track_message_in_flight,
)
from loan_gateway.domain.entities import LoanDecision
from loan_gateway.domain.exceptions import (
    BrokerConnectionError,
    ProcessingError,
    SerializationError,
)
from loan_gateway.domain.interfaces import BrokerChannel, IncomingMessage
from loan_gateway.service.approval import ApprovalPolicy, evaluate

from .codec import decode_request

logger = structlog.get_logger(__name__)

DecisionCallback = Callable[[LoanDecision], Awaitable[None]]


class DeliveryOutcome(str, Enum):
    """Terminal outcome of one delivery as seen by the consumer."""

    ACKED = "acked"
    NACKED_DECODE = "nacked_decode"
    NACKED_PROCESSING = "nacked_processing"
    ABANDONED = "abandoned"
    SETTLE_FAILED = "settle_failed"


class LoanDecisionConsumer:
    """
    Consumes loan approval requests and decides them one at a time.

    Per message: RECEIVED -> DECODING -> DECIDING -> ACKED. A payload that
    cannot be decoded is nacked without requeue straight away (poison
    message); a failure while deciding is nacked without requeue as well.
    Nothing is retried here. With prefetch 1 the broker withholds the next
    delivery until the current one is settled.
    """

    def __init__(
        self,
        channel: BrokerChannel,
        broker_url: str,
        queue_name: str,
        policy: ApprovalPolicy,
        durable: bool = True,
        prefetch_count: int = 1,
        processing_delay: float = 0.0,
        on_decision: Optional[DecisionCallback] = None,
    ):
        self._channel = channel
        self._broker_url = broker_url
        self._queue_name = queue_name
        self._policy = policy
        self._durable = durable
        self._prefetch_count = prefetch_count
        self._processing_delay = processing_delay
        self._on_decision = on_decision

        self._consumer_tag: Optional[str] = None
        self._closing = False
        self._in_flight = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._lost_callbacks: List[Callable[[], None]] = []

        self.acked = 0
        self.nacked = 0
        self.connection_lost = False

        channel.add_close_callback(self._connection_closed)

    @classmethod
    def from_settings(
        cls,
        channel: BrokerChannel,
        policy: ApprovalPolicy,
        config: Settings | None = None,
        on_decision: Optional[DecisionCallback] = None,
    ) -> "LoanDecisionConsumer":
        """Build a consumer from application settings."""
        config = config or settings
        return cls(
            channel=channel,
            broker_url=config.rabbitmq_url,
            queue_name=config.loan_queue_name,
            policy=policy,
            durable=config.queue_durable,
            prefetch_count=config.consumer_prefetch_count,
            processing_delay=config.processing_delay_seconds,
            on_decision=on_decision,
        )

    @property
    def in_flight(self) -> int:
        """Number of delivered messages not yet settled."""
        return self._in_flight

    @property
    def is_consuming(self) -> bool:
        return self._consumer_tag is not None and not self._closing

    async def connect(self) -> None:
        """
        Connect, declare the approval queue and apply the prefetch limit.

        Raises:
            BrokerConnectionError: If the broker is unreachable
        """
        logger.info("consumer_connecting", queue=self._queue_name)
        try:
            await self._channel.connect(self._broker_url)
            await self._channel.declare_queue(self._queue_name, durable=self._durable)
            await self._channel.set_prefetch(self._prefetch_count)
        except BrokerConnectionError:
            record_broker_connection_failure("consumer")
            await self._channel.close()
            raise

        logger.info(
            "consumer_connected",
            queue=self._queue_name,
            prefetch=self._prefetch_count,
        )

    def on_connection_lost(self, callback: Callable[[], None]) -> None:
        """Register a callback fired when the broker drops the connection."""
        self._lost_callbacks.append(callback)

    def _connection_closed(self, exc: Optional[BaseException]) -> None:
        self.connection_lost = True
        logger.error(
            "consumer_connection_lost",
            queue=self._queue_name,
            in_flight=self._in_flight,
            error=str(exc) if exc else None,
        )
        for callback in self._lost_callbacks:
            callback()

    async def start_consuming(self) -> None:
        """Register the per-message handler with the broker."""
        self._closing = False
        self._consumer_tag = await self._channel.consume(
            self._queue_name,
            self.handle_message,
        )
        logger.info(
            "consumer_started",
            queue=self._queue_name,
            consumer_tag=self._consumer_tag,
        )

    async def handle_message(self, message: IncomingMessage) -> DeliveryOutcome:
        """Decide one delivered message and settle it with the broker."""
        log = logger.bind(
            message_id=message.message_id,
            redelivered=message.redelivered,
        )

        if self._closing:
            # Left unacknowledged; the broker redelivers once the channel closes
            log.info("message_abandoned", reason="consumer_closing")
            return DeliveryOutcome.ABANDONED

        self._in_flight += 1
        self._idle.clear()
        try:
            with track_message_in_flight():
                outcome = await self._process(message, log)
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

        record_message_result(outcome.value)
        return outcome

    async def _process(self, message: IncomingMessage, log) -> DeliveryOutcome:
        log.debug("message_received")

        try:
            request = decode_request(message.body)
        except SerializationError as e:
            log.warning("poison_message_rejected", error=e.message)
            if not await self._settle(message, log, ack=False):
                return DeliveryOutcome.SETTLE_FAILED
            self.nacked += 1
            return DeliveryOutcome.NACKED_DECODE

        log = log.bind(loan_id=request.id, borrower_id=request.borrower_id)

        try:
            if self._processing_delay > 0:
                await asyncio.sleep(self._processing_delay)

            decision = evaluate(request, self._policy)

            if self._on_decision is not None:
                await self._on_decision(decision)
        except Exception as e:
            error = (
                e if isinstance(e, ProcessingError)
                else ProcessingError(str(e), request_id=request.id)
            )
            log.error(
                "loan_request_processing_failed",
                error=error.message,
                error_type=type(e).__name__,
            )
            if not await self._settle(message, log, ack=False):
                return DeliveryOutcome.SETTLE_FAILED
            self.nacked += 1
            return DeliveryOutcome.NACKED_PROCESSING

        if not await self._settle(message, log, ack=True):
            return DeliveryOutcome.SETTLE_FAILED

        self.acked += 1
        record_decision(decision.approved)

        report = decision.to_dict()
        log.info(
            "loan_request_decided",
            borrower=report["borrower"],
            amount=report["amount"],
            term=report["term"],
            submitted_at=report["timestamp"],
            decision=report["decision"],
            reason=report["reason"],
            processed_at=report["processedAt"],
        )
        return DeliveryOutcome.ACKED

    async def _settle(self, message: IncomingMessage, log, ack: bool) -> bool:
        """
        Ack or nack (without requeue).

        Returns:
            False if the broker did not take the settlement; the message
            stays unacknowledged and is redelivered once the channel closes
        """
        try:
            if ack:
                await message.ack()
            else:
                await message.nack(requeue=False)
        except Exception as e:
            log.error(
                "message_settle_failed",
                ack=ack,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        return True

    async def close(self, drain_timeout: float | None = None) -> None:
        """
        Stop consuming and release the channel and connection.

        Args:
            drain_timeout: Seconds to wait for the in-flight message to be
                settled before closing. None or 0 closes immediately and
                leaves any unsettled message to broker redelivery.
        """
        self._closing = True

        if drain_timeout and self._in_flight:
            logger.info("consumer_draining", in_flight=self._in_flight)
            try:
                await asyncio.wait_for(self._idle.wait(), timeout=drain_timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "consumer_drain_timeout",
                    in_flight=self._in_flight,
                    timeout=drain_timeout,
                )

        await self._channel.close()
        self._consumer_tag = None
        logger.info(
            "consumer_closed",
            queue=self._queue_name,
            acked=self.acked,
            nacked=self.nacked,
        )
