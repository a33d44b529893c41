"""Loan approval request, the unit of work carried by the approval queue."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from loan_gateway.utils.date_utils import utcnow


@dataclass(frozen=True)
class LoanApprovalRequest:
    """
    Immutable request for an asynchronous approval decision.

    The ``id`` is assigned by the caller before enqueue and must not change
    once the request has been published. Several requests may share a
    ``borrower_id``; consumers get no ordering or exclusivity guarantee
    across them.

    Attributes:
        id: Caller-assigned request identifier (the loan ID)
        borrower_id: Opaque reference to an external borrower record
        borrower_label: Display-only borrower name
        amount: Requested principal, strictly positive
        term: Loan term in months (1-60)
        submitted_at: Enqueue timestamp
    """

    id: int
    borrower_id: int
    borrower_label: str
    amount: Decimal
    term: int
    submitted_at: datetime = field(default_factory=utcnow)

    @property
    def correlation_id(self) -> str:
        """Identifier used to correlate broker messages with this request."""
        return str(self.id)
