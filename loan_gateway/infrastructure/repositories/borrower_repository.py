"""In-memory implementation of BorrowerRepository."""

from typing import Dict, List, Optional

from loan_gateway.domain.entities import Borrower
from loan_gateway.domain.interfaces import BorrowerRepository


class InMemoryBorrowerRepository(BorrowerRepository):
    """
    Borrower storage backed by a plain dict.

    Contents live for the lifetime of the owning application instance.
    """

    def __init__(self):
        self._borrowers: Dict[int, Borrower] = {}
        self._next_id = 1

    async def next_id(self) -> int:
        borrower_id = self._next_id
        self._next_id += 1
        return borrower_id

    async def save(self, borrower: Borrower) -> Borrower:
        self._borrowers[borrower.id] = borrower
        self._next_id = max(self._next_id, borrower.id + 1)
        return borrower

    async def get_by_id(self, borrower_id: int) -> Optional[Borrower]:
        return self._borrowers.get(borrower_id)

    async def get_by_email(self, email: str) -> Optional[Borrower]:
        normalized = email.lower()
        for borrower in self._borrowers.values():
            if borrower.email.lower() == normalized:
                return borrower
        return None

    async def list(self) -> List[Borrower]:
        return sorted(self._borrowers.values(), key=lambda b: b.id)

    async def delete(self, borrower_id: int) -> Optional[Borrower]:
        return self._borrowers.pop(borrower_id, None)
