"""FastAPI application entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from disque_client import __version__
from disque_client.api import api_router
from disque_client.api.dependencies import get_disque_client, get_settings


def create_app() -> FastAPI:
    """Build FastAPI application."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """Build the broker client at startup and close it on shutdown."""

        client = get_disque_client()
        yield
        await client.close()

    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


def run() -> None:
    """Run local development server."""

    settings = get_settings()
    uvicorn.run(
        "disque_client.main:app",
        host=settings.http_host,
        port=settings.http_port,
        reload=False,
    )


__all__ = ["app", "create_app", "run"]
