"""Async client for a Disque-style distributed job queue."""

from disque_client.client import DisqueClient
from disque_client.domain import (
    RAW_CODEC,
    TEXT_CODEC,
    BodyCodec,
    BodyEncodeError,
    BrokerError,
    BrokerTransport,
    DelayExceedsTTLError,
    DisqueError,
    Job,
    JobInfo,
    JobState,
    QueueInfo,
    QueuePausedError,
    QueuePauseState,
    ReplyDecodeError,
    ReplyError,
    TooLateToPostponeError,
    TransportError,
    UnknownJobError,
)

__version__ = "0.1.0"

__all__ = [
    "BodyCodec",
    "BodyEncodeError",
    "BrokerError",
    "BrokerTransport",
    "DelayExceedsTTLError",
    "DisqueClient",
    "DisqueError",
    "Job",
    "JobInfo",
    "JobState",
    "QueueInfo",
    "QueuePauseState",
    "QueuePausedError",
    "RAW_CODEC",
    "ReplyDecodeError",
    "ReplyError",
    "TEXT_CODEC",
    "TooLateToPostponeError",
    "TransportError",
    "UnknownJobError",
    "__version__",
]
