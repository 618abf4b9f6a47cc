"""HTTP inspection API."""

from disque_client.api.router import api_router

__all__ = ["api_router"]
