from __future__ import annotations

import math

import pytest

from disque_client.domain.errors import DelayExceedsTTLError
from disque_client.domain.models import QueuePauseState
from disque_client.protocol.commands import (
    MAX_U32,
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

NOW = 1_700_000_000.25


def _clock() -> float:
    return NOW


def test_simple_commands_take_their_single_argument() -> None:
    assert info_command().name == "INFO"
    assert info_command().args == ()
    assert queue_length_command("emails").args == ("emails",)
    assert queue_stat_command("emails").name == "QSTAT"
    assert show_command("D-1").name == "SHOW"
    assert working_command("D-1").args == ("D-1",)


def test_pause_appends_bcast_only_when_broadcasting() -> None:
    assert pause_command("emails", QueuePauseState.ALL).args == ("emails", "all", "bcast")
    assert pause_command("emails", QueuePauseState.IN, broadcast=False).args == ("emails", "in")


def test_get_job_is_non_blocking_by_default() -> None:
    command = get_job_command(2, ["high", "low"])

    assert command.name == "GETJOB"
    assert command.args == (
        "NOHANG",
        "TIMEOUT",
        "0",
        "COUNT",
        "2",
        "WITHCOUNTERS",
        "FROM",
        "high",
        "low",
    )


def test_get_job_omits_nohang_when_blocking() -> None:
    command = get_job_command(1, ["emails"], blocking=True, timeout_ms=1500)

    assert command.args[:4] == ("TIMEOUT", "1500", "COUNT", "1")
    assert "NOHANG" not in command.args


@pytest.mark.parametrize(
    ("count", "queues"),
    [(0, ["emails"]), (1, []), (1, "emails"), (-1, ["emails"])],
)
def test_get_job_rejects_invalid_arguments(count: int, queues: object) -> None:
    with pytest.raises(ValueError):
        get_job_command(count, queues)  # type: ignore[arg-type]


def test_add_job_with_explicit_ttl_builds_full_argument_list() -> None:
    command = add_job_command(
        "emails",
        b'{"to":"a@example.com"}',
        delay=1,
        retry_after=5,
        delete_after=10,
        timeout_ms=2000,
        max_length=100,
        async_replicate=True,
    )

    assert command.name == "ADDJOB"
    assert command.args == (
        "emails",
        b'{"to":"a@example.com"}',
        "2000",
        "DELAY",
        "1",
        "RETRY",
        "5",
        "TTL",
        "10",
        "MAXLEN",
        "100",
        "ASYNC",
    )


def test_add_job_defaults_derive_ttl_from_clock() -> None:
    command = add_job_command("emails", b"x", clock=_clock)

    assert command.args[2:8] == ("5000", "DELAY", "0", "RETRY", "300", "TTL")
    assert int(command.args[8]) == MAX_U32 - 1_700_000_000 - 5
    assert "MAXLEN" not in command.args
    assert "ASYNC" not in command.args


@pytest.mark.parametrize("timeout_ms", [0, 1, 999, 1000, 1001, 5000, MAX_U32])
def test_computed_ttl_never_overflows_broker_clock(timeout_ms: int) -> None:
    ttl = compute_max_ttl(timeout_ms, NOW)

    assert 0 <= ttl <= MAX_U32
    assert ttl + math.floor(NOW) + math.ceil(timeout_ms / 1000) <= MAX_U32


def test_computed_ttl_rounds_partial_timeout_seconds_up() -> None:
    assert compute_max_ttl(1001, 0) == MAX_U32 - 2
    assert compute_max_ttl(1000, 0) == MAX_U32 - 1


def test_computed_ttl_fails_fast_instead_of_clamping() -> None:
    with pytest.raises(ValueError):
        compute_max_ttl(5000, MAX_U32 - 2)
    with pytest.raises(ValueError):
        compute_max_ttl(0, MAX_U32 + 1)


def test_add_job_refuses_delay_not_shorter_than_ttl() -> None:
    with pytest.raises(DelayExceedsTTLError):
        add_job_command("emails", b"x", delay=2, delete_after=1)
    with pytest.raises(DelayExceedsTTLError):
        add_job_command("emails", b"x", delay=5, delete_after=5)


@pytest.mark.parametrize(
    "overrides",
    [
        {"delay": -1},
        {"retry_after": MAX_U32 + 1},
        {"timeout_ms": -5},
        {"max_length": -1},
        {"delete_after": True},
    ],
)
def test_add_job_rejects_values_outside_u32(overrides: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        add_job_command("emails", b"x", clock=_clock, **overrides)


def test_ack_command_name_follows_replication_choice() -> None:
    assert ack_command(["a", "b"]).name == "ACKJOB"
    assert ack_command(["a", "b"], require_replication=False).name == "FASTACK"
    assert ack_command(["a", "b"]).args == ("a", "b")


@pytest.mark.parametrize(
    ("builder", "name"),
    [
        (nack_command, "NACK"),
        (enqueue_command, "ENQUEUE"),
        (dequeue_command, "DEQUEUE"),
        (delete_job_command, "DELJOB"),
    ],
)
def test_job_id_list_commands(builder, name: str) -> None:  # noqa: ANN001
    command = builder(["D-1", "D-2"])

    assert command.name == name
    assert command.args == ("D-1", "D-2")
    with pytest.raises(ValueError):
        builder([])
    with pytest.raises(ValueError):
        builder("D-1")
