"""Data transfer objects for borrower operations."""

from dataclasses import dataclass
from typing import List, Optional

from loan_gateway.utils.date_utils import to_iso8601


@dataclass(frozen=True)
class CreateBorrowerRequest:
    """Input data for registering a borrower."""
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if not self.email or not self.email.strip():
            errors.append("email is required")

        return errors


@dataclass(frozen=True)
class UpdateBorrowerRequest:
    """Partial update; None leaves a field unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class BorrowerResponse:
    """Response data for a borrower."""

    id: int
    name: str
    email: str
    phone: Optional[str]
    address: Optional[str]
    created_at: str
    updated_at: Optional[str]

    @classmethod
    def from_entity(cls, borrower) -> "BorrowerResponse":
        return cls(
            id=borrower.id,
            name=borrower.name,
            email=borrower.email,
            phone=borrower.phone,
            address=borrower.address,
            created_at=to_iso8601(borrower.created_at),
            updated_at=to_iso8601(borrower.updated_at) if borrower.updated_at else None,
        )
