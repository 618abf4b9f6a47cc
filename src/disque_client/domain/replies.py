"""Decoded wire reply values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(slots=True, frozen=True)
class ReplyError:
    """Error reply carrying the broker's full error line, code token included."""

    reason: str


Reply: TypeAlias = "None | int | bytes | str | list[Reply] | ReplyError"


__all__ = ["Reply", "ReplyError"]
