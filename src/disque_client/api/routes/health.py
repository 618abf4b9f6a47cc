"""Health check routes."""

from fastapi import APIRouter, Depends, HTTPException

from disque_client.api.dependencies import get_disque_client
from disque_client.client import DisqueClient
from disque_client.domain.errors import DisqueError

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness probe."""

    return {"status": "ok"}


@router.get("/readyz")
async def readyz(client: DisqueClient = Depends(get_disque_client)) -> dict[str, str]:
    """Readiness probe; requires one successful round trip to the broker."""

    try:
        await client.info()
    except DisqueError as exc:
        raise HTTPException(status_code=503, detail="Broker unavailable") from exc
    return {"status": "ok"}


__all__ = ["router"]
