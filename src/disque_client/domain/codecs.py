"""Job body codecs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic

from pydantic import TypeAdapter

from disque_client.domain.models import Body


@dataclass(slots=True, frozen=True)
class BodyCodec(Generic[Body]):
    """Encode/decode pair for job bodies.

    `decode` signals failure by raising `ValueError` or `TypeError`; JSON and
    pydantic validation errors are both `ValueError` subclasses.
    """

    encode: Callable[[Body], bytes]
    decode: Callable[[bytes], Body]

    @classmethod
    def for_type(cls, tp: Any) -> BodyCodec[Any]:
        """JSON codec validating bodies against `tp`."""

        adapter: TypeAdapter[Any] = TypeAdapter(tp)
        return cls(encode=adapter.dump_json, decode=adapter.validate_json)


def _encode_text(body: str) -> bytes:
    if not isinstance(body, str):
        raise TypeError(f"Expected str body, got {type(body).__name__}.")
    return body.encode("utf-8")


def _encode_raw(body: bytes) -> bytes:
    if not isinstance(body, bytes | bytearray):
        raise TypeError(f"Expected bytes body, got {type(body).__name__}.")
    return bytes(body)


RAW_CODEC: BodyCodec[bytes] = BodyCodec(encode=_encode_raw, decode=bytes)
TEXT_CODEC: BodyCodec[str] = BodyCodec(
    encode=_encode_text,
    decode=lambda payload: payload.decode("utf-8"),
)


__all__ = ["BodyCodec", "RAW_CODEC", "TEXT_CODEC"]
