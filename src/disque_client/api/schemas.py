"""Response models for the inspection API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from disque_client.domain.models import JobInfo, JobState, QueueInfo, QueuePauseState


class InspectionModel(BaseModel):
    """Base model for inspection routes."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class QueueInfoResponse(InspectionModel):
    """Queue metrics payload."""

    name: str
    length: int
    age: int
    idle: int
    blocked: int
    import_from: list[str] = Field(alias="importFrom")
    import_rate: int = Field(alias="importRate")
    jobs_in: int = Field(alias="jobsIn")
    jobs_out: int = Field(alias="jobsOut")
    pause_state: QueuePauseState = Field(alias="pauseState")

    @classmethod
    def from_record(cls, info: QueueInfo) -> QueueInfoResponse:
        return cls(
            name=info.name,
            length=info.length,
            age=info.age,
            idle=info.idle,
            blocked=info.blocked,
            import_from=list(info.import_from),
            import_rate=info.import_rate,
            jobs_in=info.jobs_in,
            jobs_out=info.jobs_out,
            pause_state=info.pause_state,
        )


class QueueLengthResponse(InspectionModel):
    name: str
    length: int


class PauseRequest(InspectionModel):
    """Pause state change request."""

    state: QueuePauseState
    broadcast: bool = True


class PauseResponse(InspectionModel):
    name: str
    pause_state: QueuePauseState = Field(alias="pauseState")


class JobInfoResponse(InspectionModel):
    """Job bookkeeping payload; `body` is set when the payload is UTF-8 text."""

    id: str
    queue: str
    state: JobState
    time_to_live: int = Field(alias="timeToLive")
    created_at: datetime = Field(alias="createdAt")
    delay: int
    retry_interval: int = Field(alias="retryInterval")
    next_retry_within: int = Field(alias="nextRetryWithin")
    nacks: int
    additional_deliveries: int = Field(alias="additionalDeliveries")
    nodes_delivered: list[str] = Field(alias="nodesDelivered")
    nodes_confirmed: list[str] = Field(alias="nodesConfirmed")
    body: str | None = None

    @classmethod
    def from_record(cls, info: JobInfo[str]) -> JobInfoResponse:
        return cls(
            id=info.id,
            queue=info.queue,
            state=info.state,
            time_to_live=info.time_to_live,
            created_at=info.created_at,
            delay=info.delay,
            retry_interval=info.retry_interval,
            next_retry_within=info.next_retry_within,
            nacks=info.nacks,
            additional_deliveries=info.additional_deliveries,
            nodes_delivered=list(info.nodes_delivered),
            nodes_confirmed=list(info.nodes_confirmed),
            body=info.body,
        )


__all__ = [
    "JobInfoResponse",
    "PauseRequest",
    "PauseResponse",
    "QueueInfoResponse",
    "QueueLengthResponse",
]
