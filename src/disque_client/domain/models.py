"""Records decoded from broker replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

Body = TypeVar("Body")


class JobState(StrEnum):
    """Broker-side job states."""

    WAITING_REPLICATION = "wait-repl"
    QUEUED = "queued"
    ACTIVE = "active"
    ACKED = "acked"


class QueuePauseState(StrEnum):
    """Pause state of a queue."""

    NONE = "none"
    IN = "in"
    OUT = "out"
    ALL = "all"

    @property
    def accepts_jobs(self) -> bool:
        """Whether new jobs may be added to the queue."""

        return self not in {QueuePauseState.IN, QueuePauseState.ALL}

    @property
    def provides_jobs(self) -> bool:
        """Whether jobs may be fetched from the queue."""

        return self not in {QueuePauseState.OUT, QueuePauseState.ALL}


@dataclass(slots=True, frozen=True)
class Job(Generic[Body]):
    """One delivery of a job returned by a fetch.

    `body` is None when the payload is empty or could not be decoded.
    """

    id: str
    queue: str
    nacks: int
    additional_deliveries: int
    body: Body | None = None


@dataclass(slots=True, frozen=True)
class JobInfo(Generic[Body]):
    """Broker bookkeeping for one job.

    Durations are in seconds. `next_retry_within` is meaningless when
    `retry_interval` is 0 (at-most-once delivery).
    """

    id: str
    queue: str
    state: JobState
    time_to_live: int
    created_at: datetime
    delay: int
    retry_interval: int
    next_retry_within: int
    nacks: int
    additional_deliveries: int
    nodes_delivered: tuple[str, ...] = field(default_factory=tuple)
    nodes_confirmed: tuple[str, ...] = field(default_factory=tuple)
    body: Body | None = None

    @property
    def at_most_once(self) -> bool:
        """Whether the job will never be redelivered automatically."""

        return self.retry_interval == 0


@dataclass(slots=True, frozen=True)
class QueueInfo:
    """Queue metrics.

    The broker materializes queues lazily and evicts idle ones even while
    jobs still exist, so a missing QueueInfo does not mean an empty queue.
    """

    name: str
    length: int
    age: int
    idle: int
    blocked: int
    import_from: tuple[str, ...]
    import_rate: int
    jobs_in: int
    jobs_out: int
    pause_state: QueuePauseState


__all__ = ["Body", "Job", "JobInfo", "JobState", "QueueInfo", "QueuePauseState"]
