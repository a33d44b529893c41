"""Repository implementations."""

from .borrower_repository import InMemoryBorrowerRepository
from .loan_repository import InMemoryLoanRepository

__all__ = [
    "InMemoryBorrowerRepository",
    "InMemoryLoanRepository",
]
