"""Application bootstrap/wiring."""

import logging

from disque_client.client import DisqueClient
from disque_client.config import Settings
from disque_client.domain.ports import BrokerTransport
from disque_client.infrastructure import RedisTransport

logger = logging.getLogger(__name__)


def build_transport(settings: Settings) -> BrokerTransport:
    return RedisTransport.from_settings(settings)


def build_disque_client(settings: Settings) -> DisqueClient:
    """Compose the client for the configured broker node."""

    transport = build_transport(settings)
    logger.info("Using broker node at %s:%d.", settings.host, settings.port)
    return DisqueClient(transport)


__all__ = ["build_disque_client", "build_transport"]
