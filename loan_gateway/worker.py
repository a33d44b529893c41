"""
Loan approval consumer daemon.

Connects to the approval queue, decides requests one at a time and keeps
running until SIGINT or SIGTERM. A broker that is unreachable at startup,
or that drops the connection later on, ends the process with exit code 1
so a supervisor can restart it.

Usage:
    loan-approval-worker
    python -m loan_gateway.worker
"""

import asyncio
import signal
import sys

import structlog
from prometheus_client import start_http_server

from loan_gateway.core.config import Settings, settings
from loan_gateway.core.logging import setup_logging
from loan_gateway.domain.exceptions import BrokerConnectionError
from loan_gateway.domain.interfaces import BrokerChannel
from loan_gateway.infrastructure.messaging import LoanDecisionConsumer, RabbitMQChannel
from loan_gateway.service.approval import (
    ApprovalPolicy,
    ThresholdApprovalPolicy,
    approval_settings,
)

logger = structlog.get_logger(__name__)


async def run_consumer(
    config: Settings | None = None,
    channel: BrokerChannel | None = None,
    policy: ApprovalPolicy | None = None,
    stop: asyncio.Event | None = None,
) -> int:
    """
    Run a decision consumer until ``stop`` is set, a signal arrives or the
    broker connection is lost.

    Returns:
        Process exit code
    """
    config = config or settings
    consumer = LoanDecisionConsumer.from_settings(
        channel=channel or RabbitMQChannel(),
        policy=policy or ThresholdApprovalPolicy(approval_settings.threshold),
        config=config,
    )

    try:
        await consumer.connect()
    except BrokerConnectionError as e:
        logger.error("consumer_start_failed", error=e.message)
        return 1

    stop = stop or asyncio.Event()
    consumer.on_connection_lost(stop.set)
    if consumer.connection_lost:
        stop.set()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    try:
        await consumer.start_consuming()
        logger.info("consumer_waiting", queue=config.loan_queue_name)
        await stop.wait()
        logger.info("consumer_shutting_down", connection_lost=consumer.connection_lost)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
        await consumer.close(drain_timeout=config.consumer_drain_timeout)

    return 1 if consumer.connection_lost else 0


def main() -> None:
    setup_logging()

    if settings.metrics_enabled:
        start_http_server(settings.metrics_port)
        logger.info("metrics_server_started", port=settings.metrics_port)

    sys.exit(asyncio.run(run_consumer()))


if __name__ == "__main__":
    main()
