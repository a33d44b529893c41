"""Message broker-related domain exceptions."""

from .base import DomainException


class BrokerConnectionError(DomainException):
    """Raised when the broker is unreachable or the handshake fails."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(
            message=message,
            code="BROKER_CONNECTION_ERROR",
        )
        self.url = url


class ChannelStateError(DomainException):
    """Raised when a broker channel is used out of order."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="CHANNEL_STATE_ERROR",
        )
