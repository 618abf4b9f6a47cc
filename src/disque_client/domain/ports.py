"""Ports for the broker round trip."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from disque_client.domain.replies import Reply


@runtime_checkable
class BrokerTransport(Protocol):
    """Request/response channel to one broker node."""

    async def send(self, command: str, args: Sequence[str | bytes]) -> Reply:
        """Send one command and return its reply.

        Broker-reported errors are either returned as `ReplyError` or raised as
        `BrokerError`; connection failures raise `TransportError`.
        """

    async def close(self) -> None:
        """Release underlying connections."""


__all__ = ["BrokerTransport"]
