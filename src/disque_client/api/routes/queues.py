"""Queue inspection and pause routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path

from disque_client.api.dependencies import get_disque_client
from disque_client.api.errors import raise_http_exception
from disque_client.api.schemas import (
    PauseRequest,
    PauseResponse,
    QueueInfoResponse,
    QueueLengthResponse,
)
from disque_client.client import DisqueClient
from disque_client.domain.errors import DisqueError

router = APIRouter(prefix="/queues", tags=["queues"])


@router.get("/{name}", response_model=QueueInfoResponse, status_code=200)
async def get_queue_metrics(
    name: str = Path(...),
    client: DisqueClient = Depends(get_disque_client),
) -> QueueInfoResponse:
    """Queue metrics; 404 when the broker holds no queue object."""

    try:
        info = await client.queue_metrics(name)
    except DisqueError as exc:
        raise_http_exception(exc)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Queue '{name}' is not materialized.")
    return QueueInfoResponse.from_record(info)


@router.get("/{name}/length", response_model=QueueLengthResponse, status_code=200)
async def get_queue_length(
    name: str = Path(...),
    client: DisqueClient = Depends(get_disque_client),
) -> QueueLengthResponse:
    try:
        length = await client.queue_length(name)
    except DisqueError as exc:
        raise_http_exception(exc)
    return QueueLengthResponse(name=name, length=length)


@router.put("/{name}/pause", response_model=PauseResponse, status_code=200)
async def pause_queue(
    request: PauseRequest,
    name: str = Path(...),
    client: DisqueClient = Depends(get_disque_client),
) -> PauseResponse:
    """Change the pause state of a queue."""

    try:
        state = await client.pause_queue(name, request.state, broadcast=request.broadcast)
    except DisqueError as exc:
        raise_http_exception(exc)
    return PauseResponse(name=name, pause_state=state)


__all__ = ["router"]
