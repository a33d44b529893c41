"""Loan approval messaging over RabbitMQ."""

from .codec import LoanApprovalMessage, decode_request, encode_request
from .consumer import DeliveryOutcome, LoanDecisionConsumer
from .producer import LoanRequestProducer
from .rabbitmq_channel import RabbitMQChannel, RabbitMQIncomingMessage

__all__ = [
    "LoanApprovalMessage",
    "encode_request",
    "decode_request",
    "LoanRequestProducer",
    "LoanDecisionConsumer",
    "DeliveryOutcome",
    "RabbitMQChannel",
    "RabbitMQIncomingMessage",
]
