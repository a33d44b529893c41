"""JSON wire codec for loan approval requests."""

from datetime import datetime
from decimal import Decimal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
)

from loan_gateway.domain.entities import LoanApprovalRequest
from loan_gateway.domain.exceptions import SerializationError
from loan_gateway.utils.date_utils import to_iso8601


class LoanApprovalMessage(BaseModel):
    """
    Wire shape of a loan approval request.

    {"id", "borrowerId", "borrower", "amount", "term", "timestamp"}
    """

    model_config = ConfigDict(frozen=True)

    id: int
    borrower_id: int = Field(alias="borrowerId")
    borrower: str
    amount: Decimal = Field(gt=0)
    term: int = Field(ge=1, le=60)
    timestamp: datetime

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> int | float:
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)

    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return to_iso8601(timestamp)


def encode_request(request: LoanApprovalRequest) -> bytes:
    """
    Serialize a request to its JSON wire payload.

    Raises:
        SerializationError: If the request violates the wire constraints
    """
    try:
        message = LoanApprovalMessage(
            id=request.id,
            borrowerId=request.borrower_id,
            borrower=request.borrower_label,
            amount=request.amount,
            term=request.term,
            timestamp=request.submitted_at,
        )
    except ValidationError as e:
        raise SerializationError(f"Invalid loan approval request: {e}") from e

    return message.model_dump_json(by_alias=True).encode("utf-8")


def decode_request(payload: bytes) -> LoanApprovalRequest:
    """
    Parse a wire payload back into a LoanApprovalRequest.

    Raises:
        SerializationError: If the payload is not valid JSON or does not
            match the wire shape
    """
    try:
        message = LoanApprovalMessage.model_validate_json(payload)
    except ValidationError as e:
        raise SerializationError(f"Malformed loan approval payload: {e}") from e

    return LoanApprovalRequest(
        id=message.id,
        borrower_id=message.borrower_id,
        borrower_label=message.borrower,
        amount=message.amount,
        term=message.term,
        submitted_at=message.timestamp,
    )
