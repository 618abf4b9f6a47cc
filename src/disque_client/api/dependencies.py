"""Dependency providers for FastAPI routes."""

from functools import lru_cache

from disque_client.bootstrap import build_disque_client
from disque_client.client import DisqueClient
from disque_client.config import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings."""

    return Settings()


@lru_cache(maxsize=1)
def get_disque_client() -> DisqueClient:
    """Return singleton broker client."""

    return build_disque_client(get_settings())


__all__ = ["get_disque_client", "get_settings"]
