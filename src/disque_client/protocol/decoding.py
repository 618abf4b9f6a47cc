"""Decoding of broker replies into records.

Record replies are flat arrays with a fixed layout. QSTAT and SHOW interleave
label tokens (even offsets) with values (odd offsets); GETJOB entries start
with queue, id and body followed by labelled counters. Each layout is kept in
one field table below so a protocol change touches a single place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from disque_client.domain.codecs import BodyCodec
from disque_client.domain.errors import ReplyDecodeError
from disque_client.domain.models import Body, Job, JobInfo, JobState, QueueInfo, QueuePauseState
from disque_client.domain.replies import Reply

_MICROSECONDS_PER_SECOND = 1_000_000
_MILLISECONDS_PER_SECOND = 1000

logger = logging.getLogger(__name__)


def _as_str(value: Reply) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, str):
        return value
    raise TypeError(f"expected a string, got {_describe(value)}")


def _as_int(value: Reply) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {_describe(value)}")
    return value


def _as_str_list(value: Reply) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise TypeError(f"expected an array, got {_describe(value)}")
    return tuple(_as_str(item) for item in value)


def _as_job_state(value: Reply) -> JobState:
    return JobState(_as_str(value))


def _as_pause_state(value: Reply) -> QueuePauseState:
    return QueuePauseState(_as_str(value))


def _as_created_at(value: Reply) -> datetime:
    seconds = _as_int(value) // _MICROSECONDS_PER_SECOND
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"timestamp {seconds} is out of range") from exc


def _ms_as_seconds(value: Reply) -> int:
    return int(_as_int(value) / _MILLISECONDS_PER_SECOND)


def _as_payload(value: Reply) -> bytes | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"expected a bulk payload, got {_describe(value)}")


def _describe(value: object) -> str:
    return "nil" if value is None else type(value).__name__


@dataclass(slots=True, frozen=True)
class _Field:
    offset: int
    convert: Callable[[Reply], Any]
    label: str | None = None


QUEUE_INFO_FIELDS: Mapping[str, _Field] = {
    "name": _Field(1, _as_str, "name"),
    "length": _Field(3, _as_int, "len"),
    "age": _Field(5, _as_int, "age"),
    "idle": _Field(7, _as_int, "idle"),
    "blocked": _Field(9, _as_int, "blocked"),
    "import_from": _Field(11, _as_str_list, "import-from"),
    "import_rate": _Field(13, _as_int, "import-rate"),
    "jobs_in": _Field(15, _as_int, "jobs-in"),
    "jobs_out": _Field(17, _as_int, "jobs-out"),
    "pause_state": _Field(19, _as_pause_state, "pause"),
}

JOB_FIELDS: Mapping[str, _Field] = {
    "queue": _Field(0, _as_str),
    "id": _Field(1, _as_str),
    "body": _Field(2, _as_payload),
    "nacks": _Field(4, _as_int, "nacks"),
    "additional_deliveries": _Field(6, _as_int, "additional-deliveries"),
}

JOB_INFO_FIELDS: Mapping[str, _Field] = {
    "id": _Field(1, _as_str, "id"),
    "queue": _Field(3, _as_str, "queue"),
    "state": _Field(5, _as_job_state, "state"),
    "time_to_live": _Field(9, _as_int, "ttl"),
    "created_at": _Field(11, _as_created_at, "ctime"),
    "delay": _Field(13, _as_int, "delay"),
    "retry_interval": _Field(15, _as_int, "retry"),
    "nacks": _Field(17, _as_int, "nacks"),
    "additional_deliveries": _Field(19, _as_int, "additional-deliveries"),
    "nodes_delivered": _Field(21, _as_str_list, "nodes-delivered"),
    "nodes_confirmed": _Field(23, _as_str_list, "nodes-confirmed"),
    "next_retry_within": _Field(25, _ms_as_seconds, "next-requeue-within"),
    "body": _Field(29, _as_payload, "body"),
}


def _check_label(record: str, name: str, field: _Field, reply: list[Reply]) -> None:
    """The token before a labelled value must name it; a shifted layout fails here."""

    token = reply[field.offset - 1]
    if isinstance(token, bytes):
        token = token.decode("utf-8", errors="replace")
    if token != field.label:
        raise ReplyDecodeError(
            f"{record}.{name} expected label {field.label!r} at offset {field.offset - 1}, "
            f"got {token!r}."
        )


def _decode_fields(record: str, fields: Mapping[str, _Field], reply: Reply) -> dict[str, Any]:
    """Apply a field table to an array reply; all fields decode or none do."""

    if not isinstance(reply, list):
        raise ReplyDecodeError(f"{record} reply must be an array, got {_describe(reply)}.")
    required_length = max(field.offset for field in fields.values()) + 1
    if len(reply) < required_length:
        raise ReplyDecodeError(
            f"{record} reply has {len(reply)} elements, expected at least {required_length}."
        )

    values: dict[str, Any] = {}
    for name, field in fields.items():
        if field.label is not None:
            _check_label(record, name, field, reply)
        try:
            values[name] = field.convert(reply[field.offset])
        except (TypeError, ValueError) as exc:
            raise ReplyDecodeError(
                f"{record}.{name} at offset {field.offset} is malformed: {exc}"
            ) from exc
    return values


def _decode_body(payload: bytes | None, codec: BodyCodec[Body]) -> Body | None:
    if not payload:
        return None
    try:
        return codec.decode(payload)
    except (TypeError, ValueError) as exc:
        logger.debug("Job body could not be decoded: %s", exc)
        return None


def decode_queue_info(reply: Reply) -> QueueInfo | None:
    """Decode a QSTAT reply; nil means the queue is not materialized."""

    if reply is None:
        return None
    return QueueInfo(**_decode_fields("QueueInfo", QUEUE_INFO_FIELDS, reply))


def decode_job_info(reply: Reply, codec: BodyCodec[Body]) -> JobInfo[Body] | None:
    """Decode a SHOW reply; nil means the node holds no record of the job."""

    if reply is None:
        return None
    values = _decode_fields("JobInfo", JOB_INFO_FIELDS, reply)
    values["body"] = _decode_body(values["body"], codec)
    return JobInfo(**values)


def decode_job(reply: Reply, codec: BodyCodec[Body]) -> Job[Body]:
    values = _decode_fields("Job", JOB_FIELDS, reply)
    values["body"] = _decode_body(values["body"], codec)
    return Job(**values)


def decode_jobs(reply: Reply, codec: BodyCodec[Body]) -> list[Job[Body]]:
    """Decode a GETJOB reply; nil means no job was available."""

    if reply is None:
        return []
    if not isinstance(reply, list):
        raise ReplyDecodeError(f"GETJOB reply must be an array, got {_describe(reply)}.")
    return [decode_job(entry, codec) for entry in reply]


def decode_info(reply: Reply) -> str:
    if reply is None:
        return ""
    try:
        return _as_str(reply)
    except (TypeError, ValueError) as exc:
        raise ReplyDecodeError(f"INFO reply is malformed: {exc}") from exc


def decode_count(reply: Reply) -> int:
    """Decode a counter reply; nil counts as zero."""

    if reply is None:
        return 0
    try:
        return _as_int(reply)
    except TypeError as exc:
        raise ReplyDecodeError(f"Count reply is malformed: {exc}") from exc


def decode_pause_state(reply: Reply) -> QueuePauseState:
    try:
        return _as_pause_state(reply)
    except (TypeError, ValueError) as exc:
        raise ReplyDecodeError(f"PAUSE reply is malformed: {exc}") from exc


def decode_job_id(reply: Reply) -> str:
    try:
        return _as_str(reply)
    except (TypeError, ValueError) as exc:
        raise ReplyDecodeError(f"ADDJOB reply is malformed: {exc}") from exc


def decode_postponed_seconds(reply: Reply) -> int:
    try:
        return _as_int(reply)
    except TypeError as exc:
        raise ReplyDecodeError(f"WORKING reply is malformed: {exc}") from exc


__all__ = [
    "JOB_FIELDS",
    "JOB_INFO_FIELDS",
    "QUEUE_INFO_FIELDS",
    "decode_count",
    "decode_info",
    "decode_job",
    "decode_job_id",
    "decode_job_info",
    "decode_jobs",
    "decode_pause_state",
    "decode_postponed_seconds",
    "decode_queue_info",
]
