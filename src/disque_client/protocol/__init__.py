"""Broker protocol mapping: commands, reply decoding, and error translation."""

from disque_client.protocol.commands import (
    MAX_U32,
    Command,
    ack_command,
    add_job_command,
    compute_max_ttl,
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
    decode_job,
    decode_job_id,
    decode_job_info,
    decode_jobs,
    decode_pause_state,
    decode_postponed_seconds,
    decode_queue_info,
)
from disque_client.protocol.error_translation import translate_broker_error, translates_errors

__all__ = [
    "Command",
    "MAX_U32",
    "ack_command",
    "add_job_command",
    "compute_max_ttl",
    "decode_count",
    "decode_info",
    "decode_job",
    "decode_job_id",
    "decode_job_info",
    "decode_jobs",
    "decode_pause_state",
    "decode_postponed_seconds",
    "decode_queue_info",
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
    "translate_broker_error",
    "translates_errors",
    "working_command",
]
