"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .broker import BrokerConnectionError, ChannelStateError
from .messaging import SerializationError, ProcessingError
from .borrower import (
    BorrowerNotFoundException,
    DuplicateBorrowerException,
    InvalidBorrowerRequestException,
)
from .loan import InvalidLoanRequestException, LoanNotFoundException

__all__ = [
    "DomainException",
    "BrokerConnectionError",
    "ChannelStateError",
    "SerializationError",
    "ProcessingError",
    "BorrowerNotFoundException",
    "DuplicateBorrowerException",
    "InvalidBorrowerRequestException",
    "LoanNotFoundException",
    "InvalidLoanRequestException",
]
