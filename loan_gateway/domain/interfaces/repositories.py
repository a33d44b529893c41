"""Repository interfaces for borrower and loan storage."""

from abc import ABC, abstractmethod
from typing import List, Optional

from loan_gateway.domain.entities import Borrower, Loan, LoanStatus


class BorrowerRepository(ABC):
    """
    Abstract repository for Borrower storage.

    Implementations may use in-memory collections, PostgreSQL, etc.
    """

    @abstractmethod
    async def next_id(self) -> int:
        """Reserve the next borrower identifier."""
        ...

    @abstractmethod
    async def save(self, borrower: Borrower) -> Borrower:
        """
        Insert or replace a borrower.

        Args:
            borrower: The borrower to save

        Returns:
            The saved borrower
        """
        ...

    @abstractmethod
    async def get_by_id(self, borrower_id: int) -> Optional[Borrower]:
        """
        Retrieve a borrower by ID.

        Returns:
            The borrower if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Borrower]:
        ...

    @abstractmethod
    async def list(self) -> List[Borrower]:
        """Return all borrowers ordered by ID."""
        ...

    @abstractmethod
    async def delete(self, borrower_id: int) -> Optional[Borrower]:
        """
        Remove a borrower.

        Returns:
            The removed borrower, or None if it did not exist
        """
        ...


class LoanRepository(ABC):
    """Abstract repository for Loan storage."""

    @abstractmethod
    async def next_id(self) -> int:
        """Reserve the next loan identifier."""
        ...

    @abstractmethod
    async def save(self, loan: Loan) -> Loan:
        ...

    @abstractmethod
    async def get_by_id(self, loan_id: int) -> Optional[Loan]:
        ...

    @abstractmethod
    async def list(
        self,
        status: Optional[LoanStatus] = None,
        borrower_id: Optional[int] = None,
    ) -> List[Loan]:
        """
        Return loans ordered by ID, optionally filtered.

        Args:
            status: Only return loans in this status
            borrower_id: Only return loans for this borrower
        """
        ...

    @abstractmethod
    async def delete(self, loan_id: int) -> Optional[Loan]:
        ...
