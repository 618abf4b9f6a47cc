"""Route modules public API."""

from disque_client.api.routes.health import router as health_router
from disque_client.api.routes.jobs import router as jobs_router
from disque_client.api.routes.queues import router as queues_router

__all__ = ["health_router", "jobs_router", "queues_router"]
