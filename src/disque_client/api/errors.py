"""HTTP mapping of broker operation errors."""

from typing import NoReturn

from fastapi import HTTPException

from disque_client.domain.errors import (
    BrokerError,
    DelayExceedsTTLError,
    DisqueError,
    QueuePausedError,
    ReplyDecodeError,
    TooLateToPostponeError,
    TransportError,
    UnknownJobError,
)

_CONFLICT_ERRORS = (
    DelayExceedsTTLError,
    QueuePausedError,
    TooLateToPostponeError,
    UnknownJobError,
)


def raise_http_exception(exc: DisqueError) -> NoReturn:
    if isinstance(exc, _CONFLICT_ERRORS):
        raise HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ReplyDecodeError):
        raise HTTPException(status_code=502, detail="Unexpected reply from broker")
    if isinstance(exc, BrokerError):
        raise HTTPException(status_code=502, detail=exc.reason)
    if isinstance(exc, TransportError):
        raise HTTPException(status_code=503, detail="Broker unavailable")
    raise HTTPException(status_code=500, detail="Unexpected broker error")


__all__ = ["raise_http_exception"]
