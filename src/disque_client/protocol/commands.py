"""Broker command construction."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from disque_client.domain.errors import DelayExceedsTTLError
from disque_client.domain.models import QueuePauseState

MAX_U32 = 2**32 - 1

DEFAULT_RETRY_AFTER_SECONDS = 300
DEFAULT_ADD_JOB_TIMEOUT_MS = 5000

CommandArg = str | bytes


@dataclass(slots=True, frozen=True)
class Command:
    """Command name plus ordered arguments, ready for the transport."""

    name: str
    args: tuple[CommandArg, ...] = ()


def _u32(name: str, value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    if not 0 <= value <= MAX_U32:
        raise ValueError(f"{name} must be within 0..{MAX_U32}, got {value}.")
    return str(value)


def _job_ids(job_ids: Sequence[str]) -> tuple[str, ...]:
    if isinstance(job_ids, str):
        raise ValueError("job_ids must be a sequence of ids, not a single string.")
    ids = tuple(job_ids)
    if not ids:
        raise ValueError("At least one job id is required.")
    return ids


def compute_max_ttl(timeout_ms: int, now: float) -> int:
    """Return the longest TTL the broker can store without wrapping.

    The broker schedules deletion at `now + ttl` in an unsigned 32-bit field;
    a wrapped value deletes the job immediately. The command timeout is
    subtracted so a retransmitted ADDJOB still fits.
    """

    _u32("timeout_ms", timeout_ms)
    now_seconds = math.floor(now)
    if now_seconds < 0 or now_seconds > MAX_U32:
        raise ValueError(f"Clock value {now} is outside the broker's time range.")
    ttl = MAX_U32 - now_seconds - math.ceil(timeout_ms / 1000)
    if ttl < 0 or ttl > MAX_U32:
        raise ValueError(
            f"Cannot derive a TTL for timeout {timeout_ms}ms at time {now_seconds}."
        )
    return ttl


def info_command() -> Command:
    return Command("INFO")


def queue_length_command(queue: str) -> Command:
    return Command("QLEN", (queue,))


def pause_command(queue: str, state: QueuePauseState, broadcast: bool = True) -> Command:
    args: list[CommandArg] = [queue, QueuePauseState(state).value]
    if broadcast:
        args.append("bcast")
    return Command("PAUSE", tuple(args))


def queue_stat_command(queue: str) -> Command:
    return Command("QSTAT", (queue,))


def show_command(job_id: str) -> Command:
    return Command("SHOW", (job_id,))


def get_job_command(
    count: int,
    queues: Sequence[str],
    blocking: bool = False,
    timeout_ms: int = 0,
) -> Command:
    """Build GETJOB. `NOHANG` is sent unless a blocking fetch is requested."""

    if isinstance(queues, str):
        raise ValueError("queues must be a sequence of queue names, not a single string.")
    queue_names = tuple(queues)
    if not queue_names:
        raise ValueError("At least one queue is required.")
    count_arg = _u32("count", count)
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}.")

    args: list[CommandArg] = []
    if not blocking:
        args.append("NOHANG")
    args += [
        "TIMEOUT",
        _u32("timeout_ms", timeout_ms),
        "COUNT",
        count_arg,
        "WITHCOUNTERS",
        "FROM",
    ]
    args += queue_names
    return Command("GETJOB", tuple(args))


def add_job_command(
    queue: str,
    payload: bytes,
    delay: int = 0,
    retry_after: int = DEFAULT_RETRY_AFTER_SECONDS,
    delete_after: int | None = None,
    timeout_ms: int = DEFAULT_ADD_JOB_TIMEOUT_MS,
    max_length: int | None = None,
    async_replicate: bool = False,
    clock: Callable[[], float] = time.time,
) -> Command:
    """Build ADDJOB for an already encoded payload.

    Without `delete_after` the TTL is the largest value that cannot overflow
    the broker's deletion time. Raises `DelayExceedsTTLError` when the job
    could never be delivered.
    """

    if delete_after is None:
        ttl = compute_max_ttl(timeout_ms, clock())
    else:
        _u32("delete_after", delete_after)
        ttl = delete_after

    delay_arg = _u32("delay", delay)
    if delay >= ttl:
        raise DelayExceedsTTLError(
            f"Delay of {delay}s is not shorter than the TTL of {ttl}s; "
            "the job would never be delivered."
        )

    args: list[CommandArg] = [
        queue,
        payload,
        _u32("timeout_ms", timeout_ms),
        "DELAY",
        delay_arg,
        "RETRY",
        _u32("retry_after", retry_after),
        "TTL",
        str(ttl),
    ]
    if max_length is not None:
        args += ["MAXLEN", _u32("max_length", max_length)]
    if async_replicate:
        args.append("ASYNC")
    return Command("ADDJOB", tuple(args))


def working_command(job_id: str) -> Command:
    return Command("WORKING", (job_id,))


def ack_command(job_ids: Sequence[str], require_replication: bool = True) -> Command:
    """ACKJOB replicates the acknowledgement; FASTACK is a best-effort delete."""

    return Command("ACKJOB" if require_replication else "FASTACK", _job_ids(job_ids))


def nack_command(job_ids: Sequence[str]) -> Command:
    return Command("NACK", _job_ids(job_ids))


def enqueue_command(job_ids: Sequence[str]) -> Command:
    return Command("ENQUEUE", _job_ids(job_ids))


def dequeue_command(job_ids: Sequence[str]) -> Command:
    return Command("DEQUEUE", _job_ids(job_ids))


def delete_job_command(job_ids: Sequence[str]) -> Command:
    return Command("DELJOB", _job_ids(job_ids))


__all__ = [
    "Command",
    "CommandArg",
    "DEFAULT_ADD_JOB_TIMEOUT_MS",
    "DEFAULT_RETRY_AFTER_SECONDS",
    "MAX_U32",
    "ack_command",
    "add_job_command",
    "compute_max_ttl",
    "delete_job_command",
    "dequeue_command",
    "enqueue_command",
    "get_job_command",
    "info_command",
    "nack_command",
    "pause_command",
    "queue_length_command",
    "queue_stat_command",
    "show_command",
    "working_command",
]
