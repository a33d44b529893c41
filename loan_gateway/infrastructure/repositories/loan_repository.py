"""In-memory implementation of LoanRepository."""

from typing import Dict, List, Optional

from loan_gateway.domain.entities import Loan, LoanStatus
from loan_gateway.domain.interfaces import LoanRepository


class InMemoryLoanRepository(LoanRepository):
    """Loan storage backed by a plain dict."""

    def __init__(self):
        self._loans: Dict[int, Loan] = {}
        self._next_id = 1

    async def next_id(self) -> int:
        loan_id = self._next_id
        self._next_id += 1
        return loan_id

    async def save(self, loan: Loan) -> Loan:
        self._loans[loan.id] = loan
        self._next_id = max(self._next_id, loan.id + 1)
        return loan

    async def get_by_id(self, loan_id: int) -> Optional[Loan]:
        return self._loans.get(loan_id)

    async def list(
        self,
        status: Optional[LoanStatus] = None,
        borrower_id: Optional[int] = None,
    ) -> List[Loan]:
        loans = sorted(self._loans.values(), key=lambda l: l.id)

        if status is not None:
            loans = [loan for loan in loans if loan.status == status]

        if borrower_id is not None:
            loans = [loan for loan in loans if loan.borrower_id == borrower_id]

        return loans

    async def delete(self, loan_id: int) -> Optional[Loan]:
        return self._loans.pop(loan_id, None)
