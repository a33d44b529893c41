"""
Domain Interfaces (Ports)
"""

from .broker import BrokerChannel, CloseCallback, IncomingMessage, MessageHandler
from .publisher import ApprovalRequestPublisher
from .repositories import BorrowerRepository, LoanRepository

__all__ = [
    "BrokerChannel",
    "CloseCallback",
    "IncomingMessage",
    "MessageHandler",
    "ApprovalRequestPublisher",
    "BorrowerRepository",
    "LoanRepository",
]
