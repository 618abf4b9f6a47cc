"""Domain exceptions for broker operations."""


class DisqueError(Exception):
    """Base class for broker operation errors."""


class BodyEncodeError(DisqueError):
    """Raised when a job body cannot be serialized; nothing reaches the wire."""


class ReplyDecodeError(DisqueError):
    """Raised when a reply does not match the expected layout.

    Indicates a protocol mismatch between this client and the broker and is
    not retryable.
    """


class QueuePausedError(DisqueError):
    """Raised when the target queue is paused for input."""


class DelayExceedsTTLError(DisqueError):
    """Raised when a job's delay is not shorter than its TTL."""


class UnknownJobError(DisqueError):
    """Raised when the node does not know the job."""


class TooLateToPostponeError(DisqueError):
    """Raised when half of the job's TTL has already elapsed."""


class TransportError(DisqueError):
    """Raised when the round trip to the broker fails."""


class BrokerError(TransportError):
    """Broker-reported error that has no typed translation."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = [
    "BodyEncodeError",
    "BrokerError",
    "DelayExceedsTTLError",
    "DisqueError",
    "QueuePausedError",
    "ReplyDecodeError",
    "TooLateToPostponeError",
    "TransportError",
    "UnknownJobError",
]
