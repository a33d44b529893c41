"""Loan approval message exceptions."""

from .base import DomainException


class SerializationError(DomainException):
    """Raised when a request cannot be encoded or a payload cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="SERIALIZATION_ERROR",
        )


class ProcessingError(DomainException):
    """Raised when evaluating a decoded request fails."""

    def __init__(self, message: str, request_id: int | None = None):
        super().__init__(
            message=message,
            code="PROCESSING_ERROR",
        )
        self.request_id = request_id
