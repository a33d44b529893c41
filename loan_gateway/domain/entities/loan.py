"""Loan domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from loan_gateway.utils.date_utils import utcnow


class LoanStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    CLOSED = "closed"


class ApprovalStatus(str, Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    MANUAL_APPROVAL_REQUIRED = "manual_approval_required"


DEFAULT_INTEREST_RATE = Decimal("5.5")


@dataclass
class Loan:
    """A loan application tracked by the lending API."""

    id: int
    borrower_id: int
    amount: Decimal
    term: int
    status: LoanStatus = LoanStatus.PENDING
    approval_status: ApprovalStatus = ApprovalStatus.PENDING_APPROVAL
    interest_rate: Decimal = DEFAULT_INTEREST_RATE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
