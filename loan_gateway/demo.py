"""
Demo producer: submits three sample loan approval requests.

Expected decisions under the default policy: APPROVED, REJECTED, APPROVED.

Usage:
    loan-request-demo
    python -m loan_gateway.demo
"""

import asyncio
import sys
import time
from decimal import Decimal

import structlog

from loan_gateway.core.config import Settings
from loan_gateway.core.logging import setup_logging
from loan_gateway.domain.entities import LoanApprovalRequest
from loan_gateway.domain.exceptions import BrokerConnectionError
from loan_gateway.domain.interfaces import BrokerChannel
from loan_gateway.infrastructure.messaging import LoanRequestProducer, RabbitMQChannel

logger = structlog.get_logger(__name__)

SAMPLE_REQUESTS = [
    (1, "Juan Dela Cruz", Decimal("30000"), 12),
    (2, "Maria Santos", Decimal("75000"), 24),
    (3, "Pedro Reyes", Decimal("45000"), 18),
]


def build_sample_requests(base_id: int | None = None) -> list[LoanApprovalRequest]:
    """Build the sample requests with IDs unique to this run."""
    base_id = base_id if base_id is not None else int(time.time() * 1000)
    return [
        LoanApprovalRequest(
            id=base_id + offset,
            borrower_id=borrower_id,
            borrower_label=name,
            amount=amount,
            term=term,
        )
        for offset, (borrower_id, name, amount, term) in enumerate(SAMPLE_REQUESTS, start=1)
    ]


async def run_demo(
    config: Settings | None = None,
    channel: BrokerChannel | None = None,
    spacing: float = 1.0,
) -> int:
    """Submit the sample requests sequentially. Returns the exit code."""
    producer = LoanRequestProducer.from_settings(channel or RabbitMQChannel(), config)

    try:
        await producer.connect()
    except BrokerConnectionError as e:
        logger.error("demo_failed", error=e.message)
        return 1

    submitted = 0
    try:
        for request in build_sample_requests():
            if await producer.submit(request):
                submitted += 1
            await asyncio.sleep(spacing)
    finally:
        await producer.close()

    logger.info("demo_completed", submitted=submitted, total=len(SAMPLE_REQUESTS))
    return 0 if submitted == len(SAMPLE_REQUESTS) else 1


def main() -> None:
    setup_logging()
    sys.exit(asyncio.run(run_demo()))


if __name__ == "__main__":
    main()
