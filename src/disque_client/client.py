"""Async client mapping queue operations onto broker commands."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from types import TracebackType
from typing import TypeVar

from disque_client.domain.codecs import BodyCodec
from disque_client.domain.errors import BodyEncodeError, BrokerError, ReplyDecodeError
from disque_client.domain.models import Body, Job, JobInfo, QueueInfo, QueuePauseState
from disque_client.domain.ports import BrokerTransport
from disque_client.domain.replies import Reply, ReplyError
from disque_client.protocol.commands import (
    DEFAULT_ADD_JOB_TIMEOUT_MS,
    DEFAULT_RETRY_AFTER_SECONDS,
    Command,
    ack_command,
    add_job_command,
    delete_job_command,
    dequeue_command,
    enqueue_command,
    get_job_command,
    info_command,
    nack_command,
    pause_command,
    queue_length_command,
    queue_stat_command,
    show_command,
    working_command,
)
from disque_client.protocol.decoding import (
    decode_count,
    decode_info,
    decode_job_id,
    decode_job_info,
    decode_jobs,
    decode_pause_state,
    decode_postponed_seconds,
    decode_queue_info,
)
from disque_client.protocol.error_translation import translate_broker_error, translates_errors

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class DisqueClient:
    """Queue and job operations over a caller-owned broker transport.

    Each call sends exactly one command and awaits one reply. The client holds
    no state beyond the transport and never retries; failures are raised to
    the caller as `DisqueError` subclasses.
    """

    def __init__(
        self,
        transport: BrokerTransport,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transport = transport
        self._clock = clock

    async def __aenter__(self) -> DisqueClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""

        await self._transport.close()

    # Server

    async def info(self) -> str:
        """Return the broker's raw info/stats text."""

        command = info_command()
        return self._decode(command, decode_info, await self._execute(command))

    # Queues

    async def queue_length(self, queue: str) -> int:
        """Return the number of jobs in `queue`; unknown queues have length 0."""

        command = queue_length_command(queue)
        return self._decode(command, decode_count, await self._execute(command))

    async def pause_queue(
        self,
        queue: str,
        state: QueuePauseState,
        *,
        broadcast: bool = True,
    ) -> QueuePauseState:
        """Set the pause state of `queue`, cluster-wide when `broadcast` is set."""

        command = pause_command(queue, state, broadcast=broadcast)
        return self._decode(command, decode_pause_state, await self._execute(command))

    async def queue_metrics(self, queue: str) -> QueueInfo | None:
        """Return queue metrics, or None when the broker holds no queue object.

        Queues are created on demand and evicted when idle even if jobs still
        exist, so None does not mean the queue is empty.
        """

        command = queue_stat_command(queue)
        return self._decode(command, decode_queue_info, await self._execute(command))

    # Jobs

    async def show_job(self, job_id: str, codec: BodyCodec[Body]) -> JobInfo[Body] | None:
        """Return bookkeeping for a job, or None if the node has no record of it."""

        command = show_command(job_id)
        reply = await self._execute(command)
        return self._decode(command, lambda value: decode_job_info(value, codec), reply)

    async def get_jobs(
        self,
        count: int,
        queues: Sequence[str],
        codec: BodyCodec[Body],
        *,
        blocking: bool = False,
        timeout_ms: int = 0,
    ) -> list[Job[Body]]:
        """Fetch up to `count` jobs, scanning `queues` left to right.

        A blocking fetch makes the broker hold the request open until a job
        arrives or `timeout_ms` elapses (0 waits forever). The awaiting task
        is suspended for that long and, on a single-threaded host sharing one
        connection, other commands queue behind it.
        """

        command = get_job_command(count, queues, blocking=blocking, timeout_ms=timeout_ms)
        reply = await self._execute(command)
        return self._decode(command, lambda value: decode_jobs(value, codec), reply)

    async def add_job(
        self,
        body: Body,
        queue: str,
        codec: BodyCodec[Body],
        *,
        delay: int = 0,
        retry_after: int = DEFAULT_RETRY_AFTER_SECONDS,
        delete_after: int | None = None,
        timeout_ms: int = DEFAULT_ADD_JOB_TIMEOUT_MS,
        max_length: int | None = None,
        async_replicate: bool = False,
    ) -> str:
        """Add a job to `queue` and return its id.

        `retry_after=0` gives at-most-once delivery. Without `delete_after`
        the longest TTL that cannot overflow the broker's clock is used.
        `async_replicate` trades durability for latency: unreplicated jobs
        are lost if the node fails.
        """

        try:
            payload = codec.encode(body)
        except (TypeError, ValueError) as exc:
            raise BodyEncodeError(f"Unable to encode job body for queue '{queue}': {exc}") from exc

        command = add_job_command(
            queue,
            payload,
            delay=delay,
            retry_after=retry_after,
            delete_after=delete_after,
            timeout_ms=timeout_ms,
            max_length=max_length,
            async_replicate=async_replicate,
            clock=self._clock,
        )
        return self._decode(command, decode_job_id, await self._execute(command))

    async def postpone_work(self, job_id: str) -> int:
        """Tell the broker the job is still being processed.

        Returns the number of seconds redelivery is likely postponed. This is
        best effort: a node in another partition may still redeliver.
        """

        command = working_command(job_id)
        return self._decode(command, decode_postponed_seconds, await self._execute(command))

    async def acknowledge(
        self,
        job_ids: Sequence[str],
        *,
        require_replication: bool = True,
    ) -> int:
        """Acknowledge processed jobs and return how many were removed.

        Without replication the broker only sends a best-effort delete to the
        nodes that may hold a copy, so completed jobs can be redelivered
        during failures.
        """

        command = ack_command(job_ids, require_replication=require_replication)
        return self._decode(command, decode_count, await self._execute(command))

    async def negative_acknowledge(self, job_ids: Sequence[str]) -> int:
        """Requeue jobs as failed, incrementing their `nacks` counter."""

        command = nack_command(job_ids)
        return self._decode(command, decode_count, await self._execute(command))

    async def enqueue(self, job_ids: Sequence[str]) -> int:
        """Queue jobs that are not queued, incrementing `additional_deliveries`."""

        command = enqueue_command(job_ids)
        return self._decode(command, decode_count, await self._execute(command))

    async def dequeue(self, job_ids: Sequence[str]) -> int:
        """Hide jobs from their queue until their retry time elapses."""

        command = dequeue_command(job_ids)
        return self._decode(command, decode_count, await self._execute(command))

    async def delete_job(self, job_ids: Sequence[str]) -> int:
        """Delete jobs on the connected node only; use `acknowledge` cluster-wide."""

        command = delete_job_command(job_ids)
        return self._decode(command, decode_count, await self._execute(command))

    async def _execute(self, command: Command) -> Reply:
        logger.debug("Sending %s with %d argument(s).", command.name, len(command.args))
        try:
            reply = await self._transport.send(command.name, command.args)
            if isinstance(reply, ReplyError):
                raise BrokerError(reply.reason)
        except BrokerError as exc:
            if not translates_errors(command.name):
                raise
            translated = translate_broker_error(command.name, exc)
            if translated is exc:
                logger.warning("Untranslated %s error from broker: %s", command.name, exc.reason)
                raise
            raise translated from exc
        return reply

    def _decode(self, command: Command, decoder: Callable[[Reply], _T], reply: Reply) -> _T:
        try:
            return decoder(reply)
        except ReplyDecodeError as exc:
            logger.error(
                "Reply to %s does not match the expected layout (protocol mismatch?): %s",
                command.name,
                exc,
            )
            raise


__all__ = ["DisqueClient"]
