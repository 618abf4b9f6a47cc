"""Broker transport over the redis-py asyncio client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from redis import asyncio as aioredis
from redis._parsers import _AsyncRESP2Parser
from redis.exceptions import RedisError, ResponseError

from disque_client.config import Settings
from disque_client.domain.errors import BrokerError, TransportError
from disque_client.domain.ports import BrokerTransport
from disque_client.domain.replies import Reply

# The broker predates HELLO, so connections must stay on RESP2.
_RESP2 = 2

# Commands whose names collide with redis-py response parsers.
_RAW_REPLY_COMMANDS = ("INFO",)


def _raw_reply(response: Any, **_options: Any) -> Any:
    return response


class _ExactErrorParser(_AsyncRESP2Parser):
    """RESP2 parser that keeps the broker's error line intact.

    redis-py strips the code token (ERR, NOSCRIPT, ...) when it picks an
    exception class. The class is kept so connection-level errors still map
    the same way; only the message is replaced with the full line.
    """

    @classmethod
    def parse_error(cls, response: str) -> ResponseError:
        error = super().parse_error(response)
        return type(error)(response)


class RedisTransport(BrokerTransport):
    """Send broker commands with `redis.asyncio.Redis.execute_command`."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client
        for command in _RAW_REPLY_COMMANDS:
            client.set_response_callback(command, _raw_reply)

    @classmethod
    def from_settings(cls, settings: Settings) -> RedisTransport:
        """Build a pooled connection to the configured broker node."""

        pool = aioredis.ConnectionPool(
            host=settings.host,
            port=settings.port,
            password=settings.password,
            socket_timeout=settings.socket_timeout_seconds,
            socket_connect_timeout=settings.socket_connect_timeout_seconds,
            decode_responses=False,
            protocol=_RESP2,
            parser_class=_ExactErrorParser,
        )
        return cls(aioredis.Redis.from_pool(pool))

    async def send(self, command: str, args: Sequence[str | bytes]) -> Reply:
        try:
            return await self._client.execute_command(command, *args)
        except ResponseError as exc:
            raise BrokerError(str(exc)) from exc
        except (RedisError, OSError) as exc:
            raise TransportError(f"{command} failed: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisTransport"]
