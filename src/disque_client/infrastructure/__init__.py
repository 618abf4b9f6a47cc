"""Infrastructure layer public API."""

from disque_client.infrastructure.redis_transport import RedisTransport

__all__ = ["RedisTransport"]
