"""Application settings."""

from urllib.parse import urlparse

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BROKER_PORT = 7711
_URL_SCHEMES = frozenset({"disque", "redis"})


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Disque Queue Client"
    api_prefix: str = ""
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    host: str = "localhost"
    port: int = DEFAULT_BROKER_PORT
    password: str | None = None
    url: str | None = None
    socket_timeout_seconds: float | None = None
    socket_connect_timeout_seconds: float = 5.0

    @model_validator(mode="after")
    def apply_url_and_validate(self) -> "Settings":
        """Let a broker URL override host/port/password, then check ranges."""

        if self.url:
            parsed = urlparse(self.url)
            if parsed.scheme not in _URL_SCHEMES:
                raise ValueError(
                    f"DISQUE_URL must use one of {sorted(_URL_SCHEMES)}, got '{parsed.scheme}'."
                )
            self.host = parsed.hostname or "localhost"
            self.port = parsed.port or DEFAULT_BROKER_PORT
            if parsed.password is not None:
                self.password = parsed.password

        if not self.host.strip():
            raise ValueError("DISQUE_HOST cannot be empty.")
        if not 1 <= self.port <= 65535:
            raise ValueError("DISQUE_PORT must be within 1..65535.")
        if not 1 <= self.http_port <= 65535:
            raise ValueError("DISQUE_HTTP_PORT must be within 1..65535.")
        if self.socket_timeout_seconds is not None and self.socket_timeout_seconds <= 0:
            raise ValueError("DISQUE_SOCKET_TIMEOUT_SECONDS must be > 0.")
        if self.socket_connect_timeout_seconds <= 0:
            raise ValueError("DISQUE_SOCKET_CONNECT_TIMEOUT_SECONDS must be > 0.")
        return self

    model_config = SettingsConfigDict(env_prefix="DISQUE_", extra="ignore")


__all__ = ["DEFAULT_BROKER_PORT", "Settings"]
