"""Prometheus metrics for the Loan Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- loan_gateway_decision_total: Approval decisions by outcome
- loan_gateway_loans_created_total: Loans created by approval routing
- loan_gateway_approval_rate: Running approval rate

Technical Metrics (for Engineering/SRE):
- loan_gateway_publish_total: Queue publishes by status
- loan_gateway_publish_latency_seconds: Publish latency
- loan_gateway_messages_consumed_total: Consumer terminal outcomes
- loan_gateway_decision_latency_seconds: Receipt-to-ack latency
- loan_gateway_broker_connection_failures_total: Broker connect failures
- loan_gateway_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

decision_total = Counter(
    "loan_gateway_decision_total",
    "Total number of loan approval decisions made",
    ["outcome"],  # approved, rejected
)

loans_created_total = Counter(
    "loan_gateway_loans_created_total",
    "Total number of loans created",
    ["routing"],  # queued, manual
)

approval_rate_gauge = Gauge(
    "loan_gateway_approval_rate",
    "Running approval rate of consumed requests (0.0-1.0)",
)

# Track totals for computing rates
_approved_count = 0
_total_count = 0


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

publish_total = Counter(
    "loan_gateway_publish_total",
    "Total number of loan approval requests published",
    ["status"],  # success, failure, serialization_error
)

publish_latency = Histogram(
    "loan_gateway_publish_latency_seconds",
    "Queue publish latency in seconds",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

messages_consumed_total = Counter(
    "loan_gateway_messages_consumed_total",
    "Total messages reaching a terminal consumer outcome",
    ["result"],  # acked, nacked_decode, nacked_processing, settle_failed
)

decision_latency = Histogram(
    "loan_gateway_decision_latency_seconds",
    "Time from message receipt to acknowledgement in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

messages_in_flight = Gauge(
    "loan_gateway_messages_in_flight",
    "Messages currently held unacknowledged by consumers in this process",
)

broker_connection_failures = Counter(
    "loan_gateway_broker_connection_failures_total",
    "Total number of failed broker connection attempts",
    ["component"],  # producer, consumer
)

http_requests_total = Counter(
    "loan_gateway_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "loan_gateway_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_decision(approved: bool) -> None:
    """Record a decision in metrics."""
    global _approved_count, _total_count

    outcome = "approved" if approved else "rejected"
    decision_total.labels(outcome=outcome).inc()

    _total_count += 1
    if approved:
        _approved_count += 1

    approval_rate_gauge.set(_approved_count / _total_count)


def record_loan_created(queued: bool) -> None:
    """Record a created loan and whether it reached the approval queue."""
    loans_created_total.labels(routing="queued" if queued else "manual").inc()


@contextmanager
def track_publish_latency() -> Generator[None, None, None]:
    """Context manager to track publish latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        publish_latency.observe(duration)


def record_publish(status: str) -> None:
    """Record a publish attempt result."""
    publish_total.labels(status=status).inc()


@contextmanager
def track_message_in_flight() -> Generator[None, None, None]:
    """Context manager covering the lifetime of one unacknowledged message."""
    start = time.perf_counter()
    messages_in_flight.inc()
    try:
        yield
    finally:
        messages_in_flight.dec()
        decision_latency.observe(time.perf_counter() - start)


def record_message_result(result: str) -> None:
    """Record the terminal outcome (ack/nack) of a consumed message."""
    messages_consumed_total.labels(result=result).inc()


def record_broker_connection_failure(component: str) -> None:
    """Record a failed broker connection attempt."""
    broker_connection_failures.labels(component=component).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
