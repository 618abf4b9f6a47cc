"""Job inspection routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path

from disque_client.api.dependencies import get_disque_client
from disque_client.api.errors import raise_http_exception
from disque_client.api.schemas import JobInfoResponse
from disque_client.client import DisqueClient
from disque_client.domain.codecs import TEXT_CODEC
from disque_client.domain.errors import DisqueError

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{id}", response_model=JobInfoResponse, status_code=200)
async def get_job(
    id: str = Path(...),
    client: DisqueClient = Depends(get_disque_client),
) -> JobInfoResponse:
    """Job bookkeeping; 404 when the node has no record of the job."""

    try:
        info = await client.show_job(id, TEXT_CODEC)
    except DisqueError as exc:
        raise_http_exception(exc)
    if info is None:
        raise HTTPException(status_code=404, detail=f"No job found for id '{id}'.")
    return JobInfoResponse.from_record(info)


__all__ = ["router"]
