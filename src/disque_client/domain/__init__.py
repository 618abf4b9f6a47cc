"""Domain public API."""

from disque_client.domain.codecs import RAW_CODEC, TEXT_CODEC, BodyCodec
from disque_client.domain.errors import (
    BodyEncodeError,
    BrokerError,
    DelayExceedsTTLError,
    DisqueError,
    QueuePausedError,
    ReplyDecodeError,
    TooLateToPostponeError,
    TransportError,
    UnknownJobError,
)
from disque_client.domain.models import Job, JobInfo, JobState, QueueInfo, QueuePauseState
from disque_client.domain.ports import BrokerTransport
from disque_client.domain.replies import Reply, ReplyError

__all__ = [
    "BodyCodec",
    "BodyEncodeError",
    "BrokerError",
    "BrokerTransport",
    "DelayExceedsTTLError",
    "DisqueError",
    "Job",
    "JobInfo",
    "JobState",
    "QueueInfo",
    "QueuePauseState",
    "QueuePausedError",
    "RAW_CODEC",
    "Reply",
    "ReplyDecodeError",
    "ReplyError",
    "TEXT_CODEC",
    "TooLateToPostponeError",
    "TransportError",
    "UnknownJobError",
]
