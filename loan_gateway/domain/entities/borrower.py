"""Borrower entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from loan_gateway.utils.date_utils import utcnow


@dataclass
class Borrower:
    """A person who can apply for loans."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
