from __future__ import annotations

import asyncio
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import NoScriptError, ResponseError

from disque_client import RAW_CODEC, DisqueClient
from disque_client.config import Settings
from disque_client.domain.errors import (
    BrokerError,
    DelayExceedsTTLError,
    TransportError,
    UnknownJobError,
)
from disque_client.infrastructure import RedisTransport
from disque_client.infrastructure.redis_transport import _ExactErrorParser


class _FakeRedis:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[Any, ...]] = []
        self.callbacks: dict[str, Any] = {}
        self.closed = False

    def set_response_callback(self, command: str, callback: Any) -> None:
        self.callbacks[command] = callback

    async def execute_command(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result

    async def aclose(self) -> None:
        self.closed = True


def test_send_passes_command_and_arguments_through() -> None:
    redis_client = _FakeRedis(result=[b"emails", b"D-1", b"{}"])
    transport = RedisTransport(redis_client)  # type: ignore[arg-type]

    reply = asyncio.run(transport.send("GETJOB", ("NOHANG", "FROM", "emails")))

    assert reply == [b"emails", b"D-1", b"{}"]
    assert redis_client.calls == [("GETJOB", "NOHANG", "FROM", "emails")]


def test_info_reply_is_not_parsed_by_redis_client() -> None:
    redis_client = _FakeRedis()
    RedisTransport(redis_client)  # type: ignore[arg-type]

    callback = redis_client.callbacks["INFO"]
    assert callback(b"# Server\r\n") == b"# Server\r\n"


@pytest.mark.parametrize(
    "reason",
    [
        "PAUSED Queue paused in input, try later",
        "ERR The specified DELAY is greater than TTL. Job refused since would never be delivered",
        "NOJOB Job not known in the context of this node.",
        "NOSCRIPT No matching script.",
    ],
)
def test_response_errors_become_broker_errors_with_reason_unchanged(reason: str) -> None:
    transport = RedisTransport(_FakeRedis(error=ResponseError(reason)))  # type: ignore[arg-type]

    with pytest.raises(BrokerError) as excinfo:
        asyncio.run(transport.send("ADDJOB", ("emails",)))

    assert excinfo.value.reason == reason


@pytest.mark.parametrize(
    ("line", "error_type"),
    [
        ("NOSCRIPT No matching script.", NoScriptError),
        ("ERR DELAY weird thing", ResponseError),
        ("ERR unknown command", ResponseError),
        ("NOJOB Job not known in the context of this node.", ResponseError),
    ],
)
def test_error_parser_keeps_full_error_line(line: str, error_type: type[Exception]) -> None:
    error = _ExactErrorParser.parse_error(line)

    assert type(error) is error_type
    assert str(error) == line


@pytest.mark.parametrize("raised", [RedisConnectionError("refused"), ConnectionResetError()])
def test_connection_failures_become_transport_errors(raised: Exception) -> None:
    transport = RedisTransport(_FakeRedis(error=raised))  # type: ignore[arg-type]

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(transport.send("QLEN", ("emails",)))

    assert not isinstance(excinfo.value, BrokerError)


def test_close_closes_redis_client() -> None:
    redis_client = _FakeRedis()
    transport = RedisTransport(redis_client)  # type: ignore[arg-type]

    asyncio.run(transport.close())

    assert redis_client.closed is True


def test_from_settings_targets_configured_node() -> None:
    transport = RedisTransport.from_settings(
        Settings(host="broker.internal", port=7712, password="secret")
    )

    kwargs = transport._client.connection_pool.connection_kwargs
    assert kwargs["host"] == "broker.internal"
    assert kwargs["port"] == 7712
    assert kwargs["password"] == "secret"
    assert kwargs["protocol"] == 2
    assert kwargs["parser_class"] is _ExactErrorParser


class _RespServer:
    """Speaks just enough RESP2 to answer a scripted reply per command."""

    def __init__(self, replies: dict[str, bytes]) -> None:
        self.replies = replies
        self.commands: list[list[bytes]] = []

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            while header := await reader.readline():
                frame = []
                for _ in range(int(header[1:])):
                    length = int((await reader.readline())[1:])
                    frame.append((await reader.readexactly(length + 2))[:-2])
                self.commands.append(frame)
                name = frame[0].decode().upper()
                writer.write(self.replies.get(name, b"-ERR unknown command\r\n"))
                await writer.drain()
        finally:
            writer.close()


def _bulk(value: bytes) -> bytes:
    return b"$%d\r\n%s\r\n" % (len(value), value)


def test_client_talks_resp2_to_broker_and_keeps_error_lines() -> None:
    server = _RespServer(
        {
            "INFO": _bulk(b"# Server\r\ndisque_version:1.0-rc1\r\n"),
            "QLEN": b":3\r\n",
            "ADDJOB": (
                b"-ERR The specified DELAY is greater than TTL. "
                b"Job refused since would never be delivered\r\n"
            ),
            "WORKING": b"-NOJOB Job not known in the context of this node.\r\n",
            "SHOW": b"-NOSCRIPT weird\r\n",
            "DELJOB": b"-ERR DELAY weird thing\r\n",
        }
    )

    async def scenario() -> list[str]:
        listener = await asyncio.start_server(server.handle, "127.0.0.1", 0)
        port = listener.sockets[0].getsockname()[1]
        client = DisqueClient(RedisTransport.from_settings(Settings(host="127.0.0.1", port=port)))
        reasons = []
        try:
            assert (await client.info()).startswith("# Server")
            assert await client.queue_length("emails") == 3
            with pytest.raises(DelayExceedsTTLError):
                await client.add_job(b"x", "emails", RAW_CODEC, delay=1, delete_after=60)
            with pytest.raises(UnknownJobError):
                await client.postpone_work("D-1")
            for call in (client.show_job("D-1", RAW_CODEC), client.delete_job(["D-1"])):
                with pytest.raises(BrokerError) as excinfo:
                    await call
                reasons.append(excinfo.value.reason)
        finally:
            await client.close()
            listener.close()
            await listener.wait_closed()
        return reasons

    reasons = asyncio.run(scenario())

    assert reasons == ["NOSCRIPT weird", "ERR DELAY weird thing"]
    names = [frame[0].upper() for frame in server.commands]
    assert b"HELLO" not in names
    assert {b"INFO", b"QLEN", b"ADDJOB", b"WORKING", b"SHOW", b"DELJOB"} <= set(names)
